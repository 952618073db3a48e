"""Contact domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    """Data required to create a contact."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    title: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=5000)


class ContactUpdate(BaseModel):
    """Data that can be updated on a contact. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    title: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=5000)


class Contact(BaseModel):
    """Full contact entity as stored."""

    id: UUID
    name: str
    email: str | None
    phone: str | None
    company: str | None
    title: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
