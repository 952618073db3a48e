"""Tests for the invoice ledger calculator."""

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from core.ledger import (
    LedgerTotals,
    ZeroPaidFallback,
    compute_discount,
    compute_tax,
    compute_total,
    derive_status,
    recompute_invoice_ledger,
    round_minor,
)
from core.models import DiscountType, InvoiceStatus


# =============================================================================
# FIXTURES - plain objects, no DB needed
# =============================================================================


def _invoice(
    discount_type=DiscountType.NONE,
    discount_value=Decimal("0"),
    tax_percentage=Decimal("0"),
    status=InvoiceStatus.DRAFT,
):
    return SimpleNamespace(
        id=uuid4(),
        discount_type=discount_type,
        discount_value=discount_value,
        tax_percentage=tax_percentage,
        status=status,
    )


def _item(amount_cents):
    return SimpleNamespace(amount_cents=amount_cents)


def _payment(invoice, amount_cents):
    return SimpleNamespace(invoice_id=invoice.id, amount_cents=amount_cents)


# =============================================================================
# ROUNDING
# =============================================================================


class TestRoundMinor:

    def test_half_rounds_up(self):
        assert round_minor(Decimal("0.5")) == 1
        assert round_minor(Decimal("2.5")) == 3

    def test_below_half_rounds_down(self):
        assert round_minor(Decimal("33.3")) == 33

    def test_negative_half_rounds_away_from_zero(self):
        assert round_minor(Decimal("-0.5")) == -1


# =============================================================================
# DISCOUNT
# =============================================================================


class TestComputeDiscount:

    def test_percentage(self):
        assert compute_discount(1000, DiscountType.PERCENTAGE, Decimal("10")) == 100

    def test_percentage_rounds_half_up(self):
        assert compute_discount(15, DiscountType.PERCENTAGE, Decimal("10")) == 2

    def test_fractional_percentage(self):
        assert compute_discount(1000, DiscountType.PERCENTAGE, Decimal("12.5")) == 125

    def test_fixed(self):
        assert compute_discount(1000, DiscountType.FIXED, Decimal("100")) == 100

    def test_fixed_is_not_clamped(self):
        """Oversized fixed discounts are reported as-is; callers reject them."""
        assert compute_discount(1000, DiscountType.FIXED, Decimal("1500")) == 1500

    def test_none_type(self):
        assert compute_discount(1000, DiscountType.NONE, Decimal("50")) == 0

    def test_missing_type(self):
        assert compute_discount(1000, None, Decimal("50")) == 0

    def test_missing_value(self):
        assert compute_discount(1000, DiscountType.PERCENTAGE, None) == 0

    def test_accepts_plain_strings(self):
        assert compute_discount(1000, "percentage", 10) == 100


# =============================================================================
# TAX AND TOTAL
# =============================================================================


class TestComputeTax:

    def test_applies_to_discounted_subtotal(self):
        assert compute_tax(900, Decimal("18")) == 162

    def test_zero_percent(self):
        assert compute_tax(900, Decimal("0")) == 0

    def test_missing_percent(self):
        assert compute_tax(900, None) == 0

    def test_rounds_half_up(self):
        # 25 * 18% = 4.5
        assert compute_tax(25, Decimal("18")) == 5


class TestComputeTotal:

    def test_subtracts_discount_adds_tax(self):
        assert compute_total(1000, 100, 162) == 1062

    def test_no_discount_no_tax(self):
        assert compute_total(500, 0, 0) == 500


# =============================================================================
# STATUS
# =============================================================================


class TestDeriveStatus:

    def test_fully_paid(self):
        assert derive_status(500, 500, InvoiceStatus.SENT) == InvoiceStatus.PAID

    def test_overpaid_is_paid(self):
        assert derive_status(500, 600, InvoiceStatus.SENT) == InvoiceStatus.PAID

    def test_partially_paid(self):
        assert derive_status(500, 300, InvoiceStatus.SENT) == InvoiceStatus.PARTIALLY_PAID

    def test_zero_total_is_never_paid(self):
        assert derive_status(0, 0, InvoiceStatus.DRAFT) == InvoiceStatus.DRAFT

    def test_keep_previous_keeps_draft(self):
        status = derive_status(500, 0, InvoiceStatus.DRAFT, ZeroPaidFallback.KEEP_PREVIOUS)
        assert status == InvoiceStatus.DRAFT

    def test_keep_previous_keeps_sent(self):
        status = derive_status(500, 0, InvoiceStatus.SENT, ZeroPaidFallback.KEEP_PREVIOUS)
        assert status == InvoiceStatus.SENT

    def test_keep_previous_never_keeps_paid(self):
        status = derive_status(500, 0, InvoiceStatus.PAID, ZeroPaidFallback.KEEP_PREVIOUS)
        assert status == InvoiceStatus.SENT

    def test_keep_previous_never_keeps_partially_paid(self):
        status = derive_status(500, 0, InvoiceStatus.PARTIALLY_PAID, ZeroPaidFallback.KEEP_PREVIOUS)
        assert status == InvoiceStatus.SENT

    def test_reset_to_sent_overrides_draft(self):
        status = derive_status(500, 0, InvoiceStatus.DRAFT, ZeroPaidFallback.RESET_TO_SENT)
        assert status == InvoiceStatus.SENT

    def test_default_fallback_is_keep_previous(self):
        assert derive_status(500, 0, InvoiceStatus.DRAFT) == InvoiceStatus.DRAFT

    def test_accepts_string_previous_status(self):
        assert derive_status(500, 0, "sent") == InvoiceStatus.SENT


# =============================================================================
# FULL RECOMPUTATION
# =============================================================================


class TestRecomputeInvoiceLedger:

    def test_percentage_discount_example(self):
        invoice = _invoice(DiscountType.PERCENTAGE, Decimal("10"))
        totals = recompute_invoice_ledger(invoice, [_item(600), _item(400)], [])

        assert totals.subtotal_cents == 1000
        assert totals.discount_cents == 100
        assert totals.tax_cents == 0
        assert totals.total_cents == 900

    def test_fixed_discount_with_tax_example(self):
        invoice = _invoice(DiscountType.FIXED, Decimal("100"), Decimal("18"))
        totals = recompute_invoice_ledger(invoice, [_item(1000)], [])

        assert totals == LedgerTotals(
            subtotal_cents=1000,
            discount_cents=100,
            tax_cents=162,
            total_cents=1062,
            amount_paid_cents=0,
            status=InvoiceStatus.DRAFT,
        )

    def test_no_items(self):
        totals = recompute_invoice_ledger(_invoice(), [], [])
        assert totals.subtotal_cents == 0
        assert totals.total_cents == 0
        assert totals.status == InvoiceStatus.DRAFT

    def test_payment_lifecycle(self):
        """500 invoice: pay 300, pay 200, then remove payments one by one."""
        invoice = _invoice(status=InvoiceStatus.SENT)
        items = [_item(500)]
        first = _payment(invoice, 300)
        second = _payment(invoice, 200)

        totals = recompute_invoice_ledger(invoice, items, [first])
        assert (totals.amount_paid_cents, totals.status) == (300, InvoiceStatus.PARTIALLY_PAID)
        invoice.status = totals.status

        totals = recompute_invoice_ledger(invoice, items, [first, second])
        assert (totals.amount_paid_cents, totals.status) == (500, InvoiceStatus.PAID)
        invoice.status = totals.status

        totals = recompute_invoice_ledger(invoice, items, [second], ZeroPaidFallback.RESET_TO_SENT)
        assert (totals.amount_paid_cents, totals.status) == (200, InvoiceStatus.PARTIALLY_PAID)
        invoice.status = totals.status

        totals = recompute_invoice_ledger(invoice, items, [], ZeroPaidFallback.RESET_TO_SENT)
        assert (totals.amount_paid_cents, totals.status) == (0, InvoiceStatus.SENT)

    def test_zero_paid_fallbacks_differ_for_draft(self):
        invoice = _invoice(status=InvoiceStatus.DRAFT)

        kept = recompute_invoice_ledger(invoice, [_item(500)], [], ZeroPaidFallback.KEEP_PREVIOUS)
        reset = recompute_invoice_ledger(invoice, [_item(500)], [], ZeroPaidFallback.RESET_TO_SENT)

        assert kept.status == InvoiceStatus.DRAFT
        assert reset.status == InvoiceStatus.SENT

    def test_ignores_other_invoices_payments(self):
        invoice = _invoice(status=InvoiceStatus.SENT)
        other = _invoice()

        totals = recompute_invoice_ledger(
            invoice, [_item(500)], [_payment(invoice, 100), _payment(other, 400)]
        )

        assert totals.amount_paid_cents == 100
        assert totals.status == InvoiceStatus.PARTIALLY_PAID

    def test_is_idempotent(self):
        invoice = _invoice(DiscountType.PERCENTAGE, Decimal("7.5"), Decimal("18"), InvoiceStatus.SENT)
        items = [_item(1999), _item(2501)]
        payments = [_payment(invoice, 1000)]

        first = recompute_invoice_ledger(invoice, items, payments)
        second = recompute_invoice_ledger(invoice, items, payments)

        assert first == second

    def test_order_of_items_and_payments_does_not_matter(self):
        invoice = _invoice(DiscountType.PERCENTAGE, Decimal("10"), Decimal("18"), InvoiceStatus.SENT)
        items = [_item(333), _item(667), _item(1)]
        payments = [_payment(invoice, 100), _payment(invoice, 250)]

        forward = recompute_invoice_ledger(invoice, items, payments)
        backward = recompute_invoice_ledger(invoice, list(reversed(items)), list(reversed(payments)))

        assert forward == backward

    @pytest.mark.parametrize("fallback", list(ZeroPaidFallback))
    def test_paid_status_not_kept_without_payments(self, fallback):
        invoice = _invoice(status=InvoiceStatus.PAID)
        totals = recompute_invoice_ledger(invoice, [_item(500)], [], fallback)
        assert totals.status == InvoiceStatus.SENT
