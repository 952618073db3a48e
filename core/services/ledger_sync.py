"""
Keep an invoice's stored ledger in step with its items and payments.

Every write that changes an invoice's items or payments calls
sync_invoice_ledger() in the same transaction, after taking the invoice row
lock with lock_invoice(). Two concurrent payments for one invoice therefore
run one after the other and the second sees the first's row.
"""

import logging
from uuid import UUID

from clients.postgres_client import Transaction
from core.exceptions import InvalidDataError, NotFoundError
from core.ledger import ZeroPaidFallback, recompute_invoice_ledger
from core.models import Invoice, InvoiceItem, Payment
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


def lock_invoice(tx: Transaction, invoice_id: UUID) -> Invoice:
    """
    Read an invoice and hold its row lock until the transaction ends.

    Raises:
        NotFoundError: If invoice not found
    """
    row = tx.execute_single(
        "SELECT * FROM invoices WHERE id = %s FOR UPDATE",
        (invoice_id,)
    )
    if row is None:
        raise NotFoundError("Invoice", invoice_id)
    return Invoice.model_validate(row)


def lock_invoices(tx: Transaction, invoice_ids: list[UUID]) -> dict[UUID, Invoice]:
    """Lock several invoices in a fixed order so two writers can't deadlock."""
    locked = {}
    for invoice_id in sorted(set(invoice_ids), key=str):
        locked[invoice_id] = lock_invoice(tx, invoice_id)
    return locked


def load_items(tx: Transaction, invoice_id: UUID) -> list[InvoiceItem]:
    rows = tx.execute(
        "SELECT * FROM invoice_items WHERE invoice_id = %s ORDER BY created_at, id",
        (invoice_id,)
    )
    return [InvoiceItem.model_validate(row) for row in rows]


def load_payments(tx: Transaction, invoice_id: UUID) -> list[Payment]:
    rows = tx.execute(
        "SELECT * FROM payments WHERE invoice_id = %s ORDER BY created_at, id",
        (invoice_id,)
    )
    return [Payment.model_validate(row) for row in rows]


def sync_invoice_ledger(
    tx: Transaction,
    invoice: Invoice,
    fallback: ZeroPaidFallback = ZeroPaidFallback.KEEP_PREVIOUS,
) -> Invoice:
    """
    Recompute and store subtotal, discount, tax, total, amount paid and status.

    The invoice must already be locked by this transaction. Items and payments
    are re-read inside the transaction, so the result reflects every write
    made so far in it.

    Args:
        tx: Open transaction holding the invoice lock
        invoice: Invoice as read under the lock (its discount/tax/status are used)
        fallback: Status rule when nothing has been paid

    Returns:
        Updated invoice

    Raises:
        InvalidDataError: If the discount exceeds the subtotal
    """
    totals = recompute_invoice_ledger(
        invoice,
        load_items(tx, invoice.id),
        load_payments(tx, invoice.id),
        fallback,
    )

    if totals.discount_cents > totals.subtotal_cents:
        raise InvalidDataError(
            f"Discount ({totals.discount_cents}) cannot exceed subtotal ({totals.subtotal_cents})"
        )

    row = tx.execute_single(
        """
        UPDATE invoices
        SET subtotal_cents = %s,
            discount_cents = %s,
            tax_cents = %s,
            total_cents = %s,
            amount_paid_cents = %s,
            status = %s,
            updated_at = %s
        WHERE id = %s
        RETURNING *
        """,
        (
            totals.subtotal_cents,
            totals.discount_cents,
            totals.tax_cents,
            totals.total_cents,
            totals.amount_paid_cents,
            totals.status,
            now_utc(),
            invoice.id,
        )
    )

    if totals.status != invoice.status:
        logger.info(
            f"Invoice {invoice.invoice_number} status {invoice.status.value} -> {totals.status.value}"
        )

    return Invoice.model_validate(row)
