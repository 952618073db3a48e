"""API test fixtures - the real app wired to mocked services."""

from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from api.app import create_app
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

RECORD_SERVICES = {
    "leads": LeadService,
    "contacts": ContactService,
    "deals": DealService,
    "call_logs": CallLogService,
    "tasks": TaskService,
    "webhooks": WebhookService,
    "expenses": ExpenseService,
    "catalog": CatalogService,
}


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def services():
    """Every service replaced by a Mock bound to its class."""
    services = {}
    for key, cls in RECORD_SERVICES.items():
        mock = Mock(spec=cls)
        mock.entity_name = cls.entity_name
        services[key] = mock

    services["invoices"] = Mock(spec=InvoiceService)
    services["payments"] = Mock(spec=PaymentService)
    services["settings"] = Mock(spec=SettingsService)
    services["activities"] = Mock(spec=ActivityService)
    return services


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(services):
    return create_app(services)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
