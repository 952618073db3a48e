"""Service catalog domain models.

Prices are stored in minor units (integer).
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    """Data required to create a catalog service."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    price_cents: int = Field(0, ge=0)
    is_active: bool = True


class ServiceUpdate(BaseModel):
    """Data that can be updated on a service. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    price_cents: int | None = Field(None, ge=0)
    is_active: bool | None = None


class Service(BaseModel):
    """Full service entity as stored."""

    id: UUID
    name: str
    description: str | None
    price_cents: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
