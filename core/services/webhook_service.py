"""
Inbound webhook registrations and lead capture.

Each registered webhook gets its own URL (/api/webhook/n8n/{id}). An n8n
workflow posts scraped leads there; switching the webhook off rejects them
without deleting it.
"""

from uuid import UUID

from clients.postgres_client import PostgresClient
from core.event_bus import EventBus
from core.exceptions import InvalidDataError, WebhookInactiveError
from core.models import InboundLeadPayload, Lead, LeadCreate, LeadStatus, Webhook
from core.services.lead_service import LeadService
from core.services.record_service import RecordService

DEFAULT_LEAD_SOURCE = "n8n_webhook"


class WebhookService(RecordService[Webhook]):
    """Service for inbound webhook operations."""

    table = "webhooks"
    entity_name = "Webhook"
    model = Webhook
    updatable_columns = frozenset({"name", "is_active"})

    def __init__(self, postgres: PostgresClient, event_bus: EventBus, leads: LeadService):
        super().__init__(postgres, event_bus)
        self.leads = leads

    def capture_lead(self, webhook_id: UUID, payload: InboundLeadPayload) -> Lead:
        """
        Create a lead from an n8n webhook delivery.

        Args:
            webhook_id: Registered webhook the delivery was addressed to
            payload: Posted document (camelCase keys and aliases accepted)

        Returns:
            Created lead, status new

        Raises:
            NotFoundError: If webhook not found
            WebhookInactiveError: If webhook is switched off
            InvalidDataError: If name is missing
        """
        webhook = self.require(webhook_id)
        if not webhook.is_active:
            raise WebhookInactiveError(webhook_id)

        if not payload.name or not payload.name.strip():
            raise InvalidDataError("Name is required")

        data = LeadCreate(
            name=payload.name.strip(),
            email=payload.email or None,
            phone=payload.phone,
            company=payload.company,
            category=payload.category,
            city=payload.city,
            country=payload.country,
            address=payload.address,
            website=payload.website,
            linkedin=payload.linkedin,
            facebook=payload.facebook,
            instagram=payload.instagram,
            description=payload.description,
            business_hours=payload.business_hours,
            lead_quality_score=payload.lead_quality_score,
            quality_reasoning=payload.quality_reasoning,
            social_signals=payload.social_signals,
            growth_signals=payload.growth_signals,
            source=payload.source or DEFAULT_LEAD_SOURCE,
            status=LeadStatus.NEW,
            notes=payload.notes,
            value_cents=(payload.value or 0) * 100,
            tags=payload.tags,
        )

        return self.leads.create_from_webhook(data, webhook)
