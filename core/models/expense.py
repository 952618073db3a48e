"""Expense domain models. Amount in minor units."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ExpenseCreate(BaseModel):
    """Data required to record an expense."""

    title: str = Field(..., min_length=1, max_length=255)
    amount_cents: int = Field(..., gt=0)
    category: str | None = Field(None, max_length=100)
    vendor: str | None = Field(None, max_length=255)
    expense_date: date | None = None
    notes: str | None = Field(None, max_length=5000)


class ExpenseUpdate(BaseModel):
    """Data that can be updated on an expense. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    amount_cents: int | None = Field(None, gt=0)
    category: str | None = Field(None, max_length=100)
    vendor: str | None = Field(None, max_length=255)
    expense_date: date | None = None
    notes: str | None = Field(None, max_length=5000)


class Expense(BaseModel):
    """Full expense entity as stored."""

    id: UUID
    title: str
    amount_cents: int
    category: str | None
    vendor: str | None
    expense_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
