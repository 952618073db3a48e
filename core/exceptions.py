"""Typed exceptions for CRM operations.

The API layer maps each class to an HTTP status (see api/errors.py).
"""

from uuid import UUID


class CRMError(Exception):
    """Base class for expected, caller-visible failures."""


class NotFoundError(CRMError):
    """An id lookup missed."""

    def __init__(self, entity: str, entity_id: UUID | str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidDataError(CRMError):
    """Request data is missing a required field or violates a business rule."""


class WebhookInactiveError(CRMError):
    """Inbound webhook exists but has been switched off."""

    def __init__(self, webhook_id: UUID | str):
        self.webhook_id = webhook_id
        super().__init__("Webhook is inactive")


class DownstreamError(CRMError):
    """
    An outbound call (email gateway, n8n webhook) failed.

    Financial state already persisted is never rolled back because of this.
    """


class ConflictError(CRMError):
    """A concurrent write kept changing the row this write depends on."""
