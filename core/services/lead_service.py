"""
Lead service.

Besides plain CRUD, leads can be relayed to an n8n workflow over HTTP and
created from an inbound n8n webhook (see webhook_service.py).
"""

import logging
from uuid import UUID

from clients.postgres_client import PostgresClient
from clients.webhook_client import WebhookClient, WebhookDeliveryError
from core.event_bus import EventBus
from core.events import LeadCaptured, LeadCreated, LeadSentToWebhook
from core.exceptions import DownstreamError, InvalidDataError
from core.models import Lead, LeadCreate, Webhook
from core.services.record_service import RecordService

logger = logging.getLogger(__name__)


class LeadService(RecordService[Lead]):
    """Service for lead operations."""

    table = "leads"
    entity_name = "Lead"
    model = Lead
    updatable_columns = frozenset({
        "name", "email", "phone", "company", "category", "city", "country",
        "address", "website", "linkedin", "facebook", "instagram", "description",
        "business_hours", "lead_quality_score", "quality_reasoning",
        "social_signals", "growth_signals", "source", "status", "notes",
        "value_cents", "tags", "assigned_to", "interested_services", "call_outcome",
    })

    def __init__(self, postgres: PostgresClient, event_bus: EventBus, webhook_client: WebhookClient):
        super().__init__(postgres, event_bus)
        self.webhook_client = webhook_client

    def _created_event(self, record: Lead) -> LeadCreated:
        return LeadCreated.create(lead=record)

    def create_from_webhook(self, data: LeadCreate, webhook: Webhook) -> Lead:
        """Create a lead that arrived through an inbound webhook."""
        lead = self._insert(data)
        logger.info(f"Captured lead {lead.id} via webhook '{webhook.name}'")
        self.event_bus.publish(LeadCaptured.create(lead=lead, webhook=webhook))
        return lead

    def send_to_webhook(self, lead_id: UUID, url: str | None) -> Lead:
        """
        POST the lead to an n8n webhook as camelCase JSON.

        Args:
            lead_id: Lead UUID
            url: Destination webhook URL (http or https)

        Returns:
            The lead that was sent

        Raises:
            NotFoundError: If lead not found
            InvalidDataError: If url is missing or not http(s)
            DownstreamError: On connection failure or non-2xx response
        """
        lead = self.require(lead_id)

        try:
            url = self.webhook_client.validate_url(url)
        except ValueError as e:
            raise InvalidDataError(str(e)) from e

        try:
            self.webhook_client.post_json(url, lead.to_webhook_payload())
        except WebhookDeliveryError as e:
            raise DownstreamError(f"Failed to send to webhook: {e}") from e

        logger.info(f"Sent lead {lead.id} to webhook {url}")
        self.event_bus.publish(LeadSentToWebhook.create(lead=lead, url=url))

        return lead
