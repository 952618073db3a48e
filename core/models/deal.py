"""Deal domain models. Value in minor units."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class DealStage(str, Enum):
    """Pipeline stage of a deal."""

    NEW_LEAD = "new_lead"
    CONTACTED = "contacted"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class DealCreate(BaseModel):
    """Data required to create a deal."""

    title: str = Field(..., min_length=1, max_length=255)
    value_cents: int = Field(0, ge=0)
    stage: DealStage = DealStage.NEW_LEAD
    probability: int = Field(0, ge=0, le=100)
    expected_close_date: date | None = None
    contact_id: UUID | None = None
    lead_id: UUID | None = None
    notes: str | None = Field(None, max_length=5000)


class DealUpdate(BaseModel):
    """Data that can be updated on a deal. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    value_cents: int | None = Field(None, ge=0)
    stage: DealStage | None = None
    probability: int | None = Field(None, ge=0, le=100)
    expected_close_date: date | None = None
    contact_id: UUID | None = None
    lead_id: UUID | None = None
    notes: str | None = Field(None, max_length=5000)


class Deal(BaseModel):
    """Full deal entity as stored."""

    id: UUID
    title: str
    value_cents: int
    stage: DealStage
    probability: int
    expected_close_date: date | None
    contact_id: UUID | None
    lead_id: UUID | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def weighted_value_cents(self) -> int:
        """Value scaled by win probability, for pipeline forecasts."""
        return self.value_cents * self.probability // 100
