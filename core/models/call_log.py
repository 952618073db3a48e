"""Call log domain models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class CallOutcome(str, Enum):
    """What happened on the call."""

    PICKED_UP = "picked_up"
    INTERESTED = "interested"
    SCHEDULE_CALL = "schedule_call"
    CALL_LATER = "call_later"
    NOT_INTERESTED = "not_interested"
    NO_ANSWER = "no_answer"


class CallLogCreate(BaseModel):
    """Data required to log a call."""

    lead_id: UUID | None = None
    called_by: str | None = Field(None, max_length=255)
    outcome: CallOutcome
    duration: str | None = Field(None, max_length=50)  # Free text, e.g. "10 min"
    notes: str | None = Field(None, max_length=5000)
    scheduled_at: datetime | None = None


class CallLogUpdate(BaseModel):
    """Data that can be updated on a call log. All fields optional."""

    lead_id: UUID | None = None
    called_by: str | None = Field(None, max_length=255)
    outcome: CallOutcome | None = None
    duration: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=5000)
    scheduled_at: datetime | None = None


class CallLog(BaseModel):
    """Full call log entity as stored."""

    id: UUID
    lead_id: UUID | None
    called_by: str | None
    outcome: CallOutcome
    duration: str | None
    notes: str | None
    scheduled_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
