"""Service fixtures wired against the test database."""

from unittest.mock import Mock

import pytest

from clients.email_client import EmailGatewayClient
from clients.webhook_client import WebhookClient


@pytest.fixture
def email_client():
    return Mock(spec=EmailGatewayClient)


@pytest.fixture
def services(clean_db, email_client):
    """Full service registry on an empty database."""
    from api.app import build_services

    return build_services(
        clean_db,
        email_client=email_client,
        webhook_client=WebhookClient(timeout_seconds=2),
    )


@pytest.fixture
def invoice_service(services):
    return services["invoices"]


@pytest.fixture
def payment_service(services):
    return services["payments"]


@pytest.fixture
def activity_service(services):
    return services["activities"]
