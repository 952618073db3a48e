"""
Sample data for an empty database.

Records go through the services, so the activity feed fills in the same way
it does for real use. Does nothing once any lead exists.
"""

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from core.models import (
    CallLogCreate,
    CallOutcome,
    ContactCreate,
    DealCreate,
    DealStage,
    LeadCreate,
    LeadStatus,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    WebhookCreate,
)
from utils.timezone import DISPLAY_TIMEZONE

logger = logging.getLogger(__name__)

SAMPLE_LEADS = [
    LeadCreate(
        name="Rajesh Kumar", email="rajesh@techstartup.in", phone="+91 9876543210",
        company="TechStartup India", source="website", status=LeadStatus.NEW, value_cents=5_000_000,
        notes="Interested in website development and social media marketing",
    ),
    LeadCreate(
        name="Priya Sharma", email="priya@fashionbrand.com", phone="+91 9123456789",
        company="Fashion Forward", source="referral", status=LeadStatus.CONTACTED, value_cents=7_500_000,
        notes="Looking for complete brand identity and advertisement design",
    ),
    LeadCreate(
        name="Amit Patel", email="amit@foodchain.in", phone="+91 8765432109",
        company="Spice Route Restaurants", source="social_media", status=LeadStatus.QUALIFIED,
        value_cents=12_000_000, notes="Multi-location restaurant chain needs full marketing strategy",
    ),
    LeadCreate(
        name="Sneha Reddy", email="sneha@edtech.co", phone="+91 7654321098",
        company="EduBright", source="email", status=LeadStatus.PROPOSAL, value_cents=20_000_000,
        notes="EdTech startup needs video production and marketing automation",
    ),
    LeadCreate(
        name="Vikram Singh", email="vikram@realestate.in", phone="+91 6543210987",
        company="Skyline Properties", source="manual", status=LeadStatus.NEGOTIATION,
        value_cents=35_000_000, notes="Real estate developer needs comprehensive digital marketing",
    ),
]

SAMPLE_CONTACTS = [
    ContactCreate(
        name="Ananya Desai", email="ananya@designstudio.com", phone="+91 9988776655",
        company="Design Studio", title="Creative Director",
    ),
    ContactCreate(
        name="Karthik Menon", email="karthik@mediahouse.in", phone="+91 8877665544",
        company="Media House", title="Marketing Manager",
    ),
    ContactCreate(
        name="Neha Gupta", email="neha@ecommerce.in", phone="+91 7766554433",
        company="ShopEase", title="CEO",
    ),
]

SAMPLE_DEALS = [
    DealCreate(
        title="TechStartup Website Redesign", value_cents=5_000_000, stage=DealStage.NEW_LEAD,
        probability=20, expected_close_date=date(2026, 3, 15), notes="Initial consultation done",
    ),
    DealCreate(
        title="Fashion Forward Brand Campaign", value_cents=7_500_000, stage=DealStage.CONTACTED,
        probability=40, expected_close_date=date(2026, 3, 20), notes="Sent portfolio samples",
    ),
    DealCreate(
        title="Spice Route Marketing Package", value_cents=12_000_000, stage=DealStage.PROPOSAL,
        probability=60, expected_close_date=date(2026, 4, 1), notes="Proposal sent and under review",
    ),
    DealCreate(
        title="EduBright Video Series", value_cents=20_000_000, stage=DealStage.NEGOTIATION,
        probability=75, expected_close_date=date(2026, 4, 15), notes="Negotiating scope and timeline",
    ),
    DealCreate(
        title="Skyline Digital Campaign", value_cents=35_000_000, stage=DealStage.WON,
        probability=100, expected_close_date=date(2026, 2, 28), notes="Contract signed, project started",
    ),
]

# One call per sample lead, in SAMPLE_LEADS order
SAMPLE_CALLS = [
    dict(called_by="Sales Team", outcome=CallOutcome.PICKED_UP, duration="10 min",
         notes="Discussed website requirements"),
    dict(called_by="Account Manager", outcome=CallOutcome.INTERESTED, duration="15 min",
         notes="Very interested in ad design services"),
    dict(called_by="Sales Team", outcome=CallOutcome.SCHEDULE_CALL, duration="5 min",
         notes="Asked to call back next week",
         scheduled_at=datetime(2026, 3, 1, 10, 0, tzinfo=ZoneInfo(DISPLAY_TIMEZONE))),
    dict(called_by="Project Lead", outcome=CallOutcome.CALL_LATER, duration="3 min",
         notes="In a meeting, call after 4pm"),
    dict(called_by="Sales Team", outcome=CallOutcome.NOT_INTERESTED, duration="2 min",
         notes="Already has an agency"),
]

SAMPLE_TASKS = [
    TaskCreate(
        title="Prepare proposal for Spice Route",
        description="Create detailed marketing proposal with timeline and budget",
        status=TaskStatus.PENDING, priority=TaskPriority.HIGH,
        assigned_to="Design Team", due_date=date(2026, 3, 5),
    ),
    TaskCreate(
        title="Follow up with Fashion Forward", description="Send portfolio and schedule meeting",
        status=TaskStatus.IN_PROGRESS, priority=TaskPriority.MEDIUM,
        assigned_to="Sales Team", due_date=date(2026, 3, 3),
    ),
    TaskCreate(
        title="Create social media content calendar", description="Monthly content plan for March",
        status=TaskStatus.PENDING, priority=TaskPriority.MEDIUM,
        assigned_to="Content Team", due_date=date(2026, 3, 1),
    ),
    TaskCreate(
        title="Review Skyline project deliverables", description="Check first batch of creatives",
        status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH,
        assigned_to="Creative Director", due_date=date(2026, 2, 25),
    ),
]


def seed_database(services: dict) -> bool:
    """
    Insert sample records when the database has no leads.

    Args:
        services: Service registry as built by api.app.build_services()

    Returns:
        True if sample data was inserted, False if skipped
    """
    if services["leads"].list_all():
        logger.info("Database already has data, skipping seed")
        return False

    logger.info("Seeding database with sample data")

    leads = [services["leads"].create(data) for data in SAMPLE_LEADS]

    for data in SAMPLE_CONTACTS:
        services["contacts"].create(data)

    for data in SAMPLE_DEALS:
        services["deals"].create(data)

    for lead, call in zip(leads, SAMPLE_CALLS):
        services["call_logs"].create(CallLogCreate(lead_id=lead.id, **call))

    for data in SAMPLE_TASKS:
        services["tasks"].create(data)

    services["webhooks"].create(WebhookCreate(name="n8n Lead Capture"))

    logger.info("Database seeded")
    return True
