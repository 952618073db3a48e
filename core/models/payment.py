"""Payment domain models. Amounts in minor units."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    """How the money arrived."""

    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CARD = "card"
    CHEQUE = "cheque"
    OTHER = "other"


class PaymentCreate(BaseModel):
    """Data required to record a payment against an invoice."""

    invoice_id: UUID
    amount_cents: int = Field(..., gt=0)
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    reference: str | None = Field(None, max_length=255)
    paid_on: date | None = None
    notes: str | None = Field(None, max_length=2000)


class PaymentUpdate(BaseModel):
    """Data that can be updated on a payment. All fields optional."""

    invoice_id: UUID | None = None
    amount_cents: int | None = Field(None, gt=0)
    method: PaymentMethod | None = None
    reference: str | None = Field(None, max_length=255)
    paid_on: date | None = None
    notes: str | None = Field(None, max_length=2000)


class Payment(BaseModel):
    """Full payment entity as stored."""

    id: UUID
    invoice_id: UUID
    amount_cents: int
    method: PaymentMethod
    reference: str | None
    paid_on: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
