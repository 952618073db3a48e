"""
Application assembly.

build_services() wires clients, the event bus and every service together;
create_app() mounts the routers on a FastAPI app. create_default_app() does
both from Vault-provided secrets.
"""

import logging

from fastapi import FastAPI

from api.crud import create_crud_router
from api.errors import register_error_handlers
from api.invoices import create_invoices_router, create_payments_router
from api.leads import create_leads_router
from api.middleware import RequestIDMiddleware
from api.settings import create_settings_router
from clients.email_client import EmailGatewayClient
from clients.postgres_client import PostgresClient
from clients.vault_client import get_database_url, get_email_config
from clients.webhook_client import WebhookClient
from core.config import AppConfig
from core.event_bus import EventBus
from core.handlers.activity_handler import register_activity_handlers
from core.models import (
    CallLogCreate, CallLogUpdate,
    ContactCreate, ContactUpdate,
    DealCreate, DealUpdate,
    ExpenseCreate, ExpenseUpdate,
    LeadCreate, LeadUpdate,
    ServiceCreate, ServiceUpdate,
    TaskCreate, TaskUpdate,
    WebhookCreate, WebhookUpdate,
)
from core.services.activity_service import ActivityService
from core.services.call_log_service import CallLogService
from core.services.catalog_service import CatalogService
from core.services.contact_service import ContactService
from core.services.deal_service import DealService
from core.services.expense_service import ExpenseService
from core.services.invoice_service import InvoiceService
from core.services.lead_service import LeadService
from core.services.payment_service import PaymentService
from core.services.settings_service import SettingsService
from core.services.task_service import TaskService
from core.services.webhook_service import WebhookService

logger = logging.getLogger(__name__)

# (url path, services key, create model, update model)
CRUD_RESOURCES = [
    ("leads", "leads", LeadCreate, LeadUpdate),
    ("contacts", "contacts", ContactCreate, ContactUpdate),
    ("deals", "deals", DealCreate, DealUpdate),
    ("call-logs", "call_logs", CallLogCreate, CallLogUpdate),
    ("tasks", "tasks", TaskCreate, TaskUpdate),
    ("webhooks", "webhooks", WebhookCreate, WebhookUpdate),
    ("expenses", "expenses", ExpenseCreate, ExpenseUpdate),
    ("services", "catalog", ServiceCreate, ServiceUpdate),
]


def build_services(
    postgres: PostgresClient,
    config: AppConfig | None = None,
    email_client: EmailGatewayClient | None = None,
    webhook_client: WebhookClient | None = None,
) -> dict:
    """
    Create every service and subscribe the activity feed.

    Args:
        postgres: Database client shared by all services
        config: Application config (defaults when omitted)
        email_client: Email gateway; without it send_email fails with DownstreamError
        webhook_client: Outbound n8n client (built from config when omitted)

    Returns:
        Service registry keyed by name
    """
    config = config or AppConfig()
    webhook_client = webhook_client or WebhookClient(timeout_seconds=config.webhook_timeout_seconds)

    event_bus = EventBus()
    settings = SettingsService(postgres)
    activities = ActivityService(postgres)
    leads = LeadService(postgres, event_bus, webhook_client)

    services = {
        "event_bus": event_bus,
        "config": config,
        "settings": settings,
        "activities": activities,
        "leads": leads,
        "contacts": ContactService(postgres, event_bus),
        "deals": DealService(postgres, event_bus),
        "call_logs": CallLogService(postgres, event_bus),
        "tasks": TaskService(postgres, event_bus),
        "webhooks": WebhookService(postgres, event_bus, leads),
        "expenses": ExpenseService(postgres, event_bus),
        "catalog": CatalogService(postgres, event_bus),
        "invoices": InvoiceService(postgres, event_bus, settings, config, email_client),
        "payments": PaymentService(postgres, event_bus),
    }

    register_activity_handlers(event_bus, activities, config.currency_symbol)
    return services


def create_app(services: dict) -> FastAPI:
    """FastAPI app with every router mounted under /api."""
    app = FastAPI(title="CRM")
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    for path, key, create_model, update_model in CRUD_RESOURCES:
        app.include_router(
            create_crud_router(path, services[key], create_model, update_model),
            prefix="/api",
        )

    app.include_router(create_leads_router(services), prefix="/api")
    app.include_router(create_invoices_router(services), prefix="/api")
    app.include_router(create_payments_router(services), prefix="/api")
    app.include_router(create_settings_router(services), prefix="/api")

    return app


def create_default_app() -> FastAPI:
    """App wired to the Vault-configured database and email gateway."""
    config = AppConfig()
    postgres = PostgresClient(get_database_url())

    email = get_email_config()
    email_client = EmailGatewayClient(
        gateway_url=email["gateway_url"],
        api_key=email["api_key"],
        hmac_secret=email["hmac_secret"],
    )

    logger.info("Application services configured")
    return create_app(build_services(postgres, config, email_client=email_client))
