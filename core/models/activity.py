"""Activity feed models. Activities are append-only."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    entity_type: str | None = Field(None, max_length=50)
    entity_id: UUID | None = None


class Activity(BaseModel):
    """Full activity entry as stored."""

    id: UUID
    type: str
    description: str
    entity_type: str | None
    entity_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
