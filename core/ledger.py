"""
Invoice ledger calculator.

Pure functions that derive an invoice's financial state from its items and
payments:

    items -> subtotal
    subtotal + discount policy -> discount
    (subtotal - discount) + tax percentage -> tax, total
    total + payments -> amount paid, status

Amounts are integer minor units. Percentages are applied with Decimal
arithmetic and rounded ROUND_HALF_UP to whole minor units, so 0.5 paise
always rounds away from zero regardless of platform float behaviour.

Nothing here touches the database; core/services/ledger_sync.py runs these
inside the transaction that changed the items or payments.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Iterable

from core.models.invoice import DiscountType, InvoiceStatus

_HUNDRED = Decimal("100")


class ZeroPaidFallback(str, Enum):
    """
    Status to use when nothing has been paid.

    Payment updates keep the invoice's previous status; payment deletions
    reset it to SENT. The two paths differ on purpose and callers pick one
    explicitly.
    """

    KEEP_PREVIOUS = "keep_previous"
    RESET_TO_SENT = "reset_to_sent"


@dataclass(frozen=True)
class LedgerTotals:
    """Result of a ledger recomputation."""

    subtotal_cents: int
    discount_cents: int
    tax_cents: int
    total_cents: int
    amount_paid_cents: int
    status: InvoiceStatus


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 12.1 as 12.1 instead of its binary float expansion
    return Decimal(str(value))


def round_minor(value: Decimal) -> int:
    """Round to whole minor units, half away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_discount(
    subtotal_cents: int,
    discount_type: DiscountType | str | None,
    discount_value: Decimal | int | float | None,
) -> int:
    """
    Discount amount in minor units.

    A fixed discount is returned as given (rounded to whole minor units) and
    is not clamped to the subtotal; rejecting an oversized discount is the
    caller's decision.
    """
    if discount_type is None or not discount_value:
        return 0

    discount_type = DiscountType(discount_type)
    value = _as_decimal(discount_value)

    if discount_type == DiscountType.FIXED:
        return round_minor(value)
    if discount_type == DiscountType.PERCENTAGE:
        return round_minor(Decimal(subtotal_cents) * value / _HUNDRED)
    return 0


def compute_tax(
    discounted_subtotal_cents: int,
    tax_percentage: Decimal | int | float | None,
) -> int:
    """Tax in minor units on the discounted subtotal."""
    if not tax_percentage:
        return 0
    return round_minor(Decimal(discounted_subtotal_cents) * _as_decimal(tax_percentage) / _HUNDRED)


def compute_total(subtotal_cents: int, discount_cents: int, tax_cents: int) -> int:
    """Grand total. No floor at zero."""
    return subtotal_cents - discount_cents + tax_cents


def derive_status(
    total_cents: int,
    total_paid_cents: int,
    previous_status: InvoiceStatus | str,
    fallback: ZeroPaidFallback = ZeroPaidFallback.KEEP_PREVIOUS,
) -> InvoiceStatus:
    """
    Invoice status as a function of total and amount paid.

    With nothing paid the fallback decides. PAID and PARTIALLY_PAID describe
    money received, so they are never kept once the paid amount is zero.
    """
    if total_paid_cents >= total_cents and total_cents > 0:
        return InvoiceStatus.PAID
    if total_paid_cents > 0:
        return InvoiceStatus.PARTIALLY_PAID

    if fallback == ZeroPaidFallback.RESET_TO_SENT:
        return InvoiceStatus.SENT

    previous = InvoiceStatus(previous_status)
    if previous in (InvoiceStatus.PAID, InvoiceStatus.PARTIALLY_PAID):
        return InvoiceStatus.SENT
    return previous


def recompute_invoice_ledger(
    invoice: Any,
    items: Iterable[Any],
    payments: Iterable[Any],
    fallback: ZeroPaidFallback = ZeroPaidFallback.KEEP_PREVIOUS,
) -> LedgerTotals:
    """
    Recompute subtotal, discount, tax, total, amount paid and status.

    Args:
        invoice: Anything with id, discount_type, discount_value,
            tax_percentage and status (an Invoice model or a row wrapper)
        items: Objects with amount_cents
        payments: Objects with invoice_id and amount_cents; payments that
            reference another invoice are ignored
        fallback: Status rule when nothing has been paid

    Returns:
        LedgerTotals. Same inputs always give the same result.
    """
    subtotal = sum(item.amount_cents for item in items)
    discount = compute_discount(subtotal, invoice.discount_type, invoice.discount_value)
    tax = compute_tax(subtotal - discount, invoice.tax_percentage)
    total = compute_total(subtotal, discount, tax)
    amount_paid = sum(
        payment.amount_cents for payment in payments
        if payment.invoice_id == invoice.id
    )
    status = derive_status(total, amount_paid, invoice.status, fallback)

    return LedgerTotals(
        subtotal_cents=subtotal,
        discount_cents=discount,
        tax_cents=tax,
        total_cents=total,
        amount_paid_cents=amount_paid,
        status=status,
    )
