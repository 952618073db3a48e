"""Invoice domain models.

All amounts are stored in minor units (integer) to avoid floating point
issues. ₹10.00 = 1000 paise. Discount value is minor units for a fixed
discount and a percent for a percentage discount; tax is a percent.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, computed_field

from core.models.payment import Payment


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"


class DiscountType(str, Enum):
    """How the discount value is interpreted."""

    NONE = "none"
    FIXED = "fixed"            # discount_value is minor units
    PERCENTAGE = "percentage"  # discount_value is a percent of subtotal


class InvoiceItemInput(BaseModel):
    """One line on an invoice as sent by the client. Amount is always derived."""

    description: str = Field(..., min_length=1, max_length=1000)
    quantity: int = Field(1, ge=1)
    rate_cents: int = Field(..., ge=0)

    @computed_field
    @property
    def amount_cents(self) -> int:
        return self.quantity * self.rate_cents


class InvoiceItemCreate(InvoiceItemInput):
    """Data required to add a single item to an existing invoice."""

    invoice_id: UUID


class InvoiceItem(BaseModel):
    """Full invoice item entity as stored."""

    id: UUID
    invoice_id: UUID
    description: str
    quantity: int
    rate_cents: int
    amount_cents: int
    created_at: datetime

    model_config = {"from_attributes": True}


class InvoiceCreate(BaseModel):
    """Data required to create an invoice."""

    invoice_number: str | None = Field(None, min_length=1, max_length=50)
    client_name: str = Field(..., min_length=1, max_length=255)
    client_email: EmailStr | None = None
    client_phone: str | None = Field(None, max_length=50)
    client_address: str | None = Field(None, max_length=1000)
    discount_type: DiscountType = DiscountType.NONE
    discount_value: Decimal = Field(Decimal("0"), ge=0)
    tax_percentage: Decimal = Field(Decimal("0"), ge=0)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: date | None = None
    notes: str | None = Field(None, max_length=5000)
    items: list[InvoiceItemInput] = Field(default_factory=list)


class InvoiceUpdate(BaseModel):
    """
    Data that can be updated on an invoice. All fields optional.

    When items is provided the invoice's items are replaced wholesale.
    """

    client_name: str | None = Field(None, min_length=1, max_length=255)
    client_email: EmailStr | None = None
    client_phone: str | None = Field(None, max_length=50)
    client_address: str | None = Field(None, max_length=1000)
    discount_type: DiscountType | None = None
    discount_value: Decimal | None = Field(None, ge=0)
    tax_percentage: Decimal | None = Field(None, ge=0)
    status: InvoiceStatus | None = None
    due_date: date | None = None
    notes: str | None = Field(None, max_length=5000)
    items: list[InvoiceItemInput] | None = None


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: UUID
    invoice_number: str
    client_name: str
    client_email: str | None
    client_phone: str | None
    client_address: str | None
    status: InvoiceStatus
    subtotal_cents: int
    discount_type: DiscountType
    discount_value: Decimal
    discount_cents: int
    tax_percentage: Decimal
    tax_cents: int
    total_cents: int
    amount_paid_cents: int
    due_date: date | None
    notes: str | None
    sent_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def balance_due_cents(self) -> int:
        """Remaining amount to be paid in minor units."""
        return self.total_cents - self.amount_paid_cents


class InvoiceDetail(Invoice):
    """Invoice with its items and payments, as returned by GET /invoices/{id}."""

    items: list[InvoiceItem] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
