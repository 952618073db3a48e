"""Inbound webhook registrations (one per n8n workflow)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class WebhookCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    is_active: bool = True


class WebhookUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    is_active: bool | None = None


class Webhook(BaseModel):
    """Full webhook entity as stored. Its id is the path segment n8n posts to."""

    id: UUID
    name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
