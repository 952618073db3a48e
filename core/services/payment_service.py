"""
Payment service.

Recording, changing or removing a payment recomputes the invoice's amount
paid and status in the same transaction, under the invoice row lock.
Updates and deletes lock the invoice(s) before the payment row, like invoice
deletion does, and start over if another writer moved the payment first.

When nothing is left paid the two write paths disagree on purpose: an
updated payment keeps the invoice's previous status, a deleted payment
resets it to sent (see ZeroPaidFallback).
"""

import logging
from typing import Callable, TypeVar
from uuid import UUID, uuid4

from clients.postgres_client import PostgresClient, Transaction
from core.event_bus import EventBus
from core.events import PaymentReceived
from core.exceptions import ConflictError, CRMError, NotFoundError
from core.ledger import ZeroPaidFallback
from core.models import Invoice, Payment, PaymentCreate, PaymentUpdate
from core.services.ledger_sync import lock_invoice, lock_invoices, sync_invoice_ledger
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fresh transactions tried when another writer moves the payment mid-write
LOCK_ATTEMPTS = 3


class PaymentMovedError(CRMError):
    """The payment was on a different invoice once its row lock was taken."""

    def __init__(self, payment_id: UUID):
        self.payment_id = payment_id
        super().__init__(f"Payment {payment_id} moved to another invoice")


class PaymentService:
    """Service for payment operations."""

    updatable_columns = frozenset({
        "invoice_id", "amount_cents", "method", "reference", "paid_on", "notes",
    })

    def __init__(self, postgres: PostgresClient, event_bus: EventBus):
        self.postgres = postgres
        self.event_bus = event_bus

    def list_all(self) -> list[Payment]:
        """List every payment, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM payments ORDER BY created_at DESC"
        )
        return [Payment.model_validate(row) for row in rows]

    def list_for_invoice(self, invoice_id: UUID) -> list[Payment]:
        """Payments recorded against one invoice, oldest first."""
        rows = self.postgres.execute(
            "SELECT * FROM payments WHERE invoice_id = %s ORDER BY created_at, id",
            (invoice_id,)
        )
        return [Payment.model_validate(row) for row in rows]

    def get_by_id(self, payment_id: UUID) -> Payment | None:
        row = self.postgres.execute_single(
            "SELECT * FROM payments WHERE id = %s",
            (payment_id,)
        )

        if row is None:
            return None

        return Payment.model_validate(row)

    def create(self, data: PaymentCreate) -> Payment:
        """
        Record a payment and recompute its invoice.

        Args:
            data: Payment details

        Returns:
            Created payment

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        now = now_utc()

        with self.postgres.transaction() as tx:
            invoice = lock_invoice(tx, data.invoice_id)

            row = tx.execute_single(
                """
                INSERT INTO payments (
                    id, invoice_id, amount_cents, method, reference,
                    paid_on, notes, created_at, updated_at
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    uuid4(), data.invoice_id, data.amount_cents, data.method, data.reference,
                    data.paid_on, data.notes, now, now,
                )
            )
            invoice = sync_invoice_ledger(tx, invoice, ZeroPaidFallback.KEEP_PREVIOUS)

        payment = Payment.model_validate(row)

        logger.info(
            f"Recorded payment {payment.id} of {payment.amount_cents} on invoice "
            f"{invoice.invoice_number} (now {invoice.status.value})"
        )
        self.event_bus.publish(PaymentReceived.create(payment=payment, invoice=invoice))

        return payment

    def _lock_payment(
        self,
        tx: Transaction,
        payment_id: UUID,
        target_invoice_id: UUID | None = None,
    ) -> tuple[dict | None, dict[UUID, Invoice]]:
        """
        Lock a payment and every invoice a write to it will touch.

        Invoices are locked before the payment row, the order invoice
        deletion uses. The payment's invoice is read, locked, then checked
        again under the payment row lock.

        Returns:
            (payment row, locked invoices by id), or (None, {}) if the payment is gone

        Raises:
            PaymentMovedError: If the payment changed invoice before the lock was taken
        """
        invoice_id = tx.execute_scalar(
            "SELECT invoice_id FROM payments WHERE id = %s",
            (payment_id,)
        )
        if invoice_id is None:
            return None, {}

        invoices = lock_invoices(tx, [invoice_id, target_invoice_id or invoice_id])

        row = tx.execute_single(
            "SELECT * FROM payments WHERE id = %s FOR UPDATE",
            (payment_id,)
        )
        if row is None:
            return None, {}
        if row["invoice_id"] != invoice_id:
            raise PaymentMovedError(payment_id)

        return row, invoices

    def _retry_moved(self, payment_id: UUID, write: Callable[[], T]) -> T:
        """Run write() in fresh transactions until the payment stays on one invoice."""
        for attempt in range(1, LOCK_ATTEMPTS + 1):
            try:
                return write()
            except PaymentMovedError:
                logger.info(
                    f"Payment {payment_id} moved to another invoice during write "
                    f"(attempt {attempt}/{LOCK_ATTEMPTS})"
                )

        raise ConflictError(f"Payment {payment_id} kept moving between invoices, try again")

    def update(self, payment_id: UUID, data: PaymentUpdate) -> Payment:
        """
        Update a payment and recompute the invoice(s) it touches.

        If the payment moves to another invoice, both invoices are recomputed.
        The one it left is treated like a deletion (nothing paid -> sent).

        Raises:
            NotFoundError: If the payment or the target invoice doesn't exist
            ConflictError: If concurrent moves kept changing the payment's invoice
        """
        updates = data.model_dump(exclude_none=True)

        for field in updates:
            if field not in self.updatable_columns:
                logger.warning(f"Attempted to update unknown field '{field}' on payment {payment_id}")
        updates = {k: v for k, v in updates.items() if k in self.updatable_columns}

        if not updates:
            payment = self.get_by_id(payment_id)
            if payment is None:
                raise NotFoundError("Payment", payment_id)
            return payment

        return self._retry_moved(payment_id, lambda: self._update_locked(payment_id, updates))

    def _update_locked(self, payment_id: UUID, updates: dict) -> Payment:
        with self.postgres.transaction() as tx:
            current, invoices = self._lock_payment(tx, payment_id, updates.get("invoice_id"))
            if current is None:
                raise NotFoundError("Payment", payment_id)

            old_invoice_id = current["invoice_id"]
            new_invoice_id = updates.get("invoice_id", old_invoice_id)

            set_parts = [f"{field} = %s" for field in updates]
            params = list(updates.values())
            set_parts.append("updated_at = %s")
            params.append(now_utc())
            params.append(payment_id)

            row = tx.execute_single(
                f"""
                UPDATE payments
                SET {', '.join(set_parts)}
                WHERE id = %s
                RETURNING *
                """,
                tuple(params)
            )

            sync_invoice_ledger(tx, invoices[new_invoice_id], ZeroPaidFallback.KEEP_PREVIOUS)
            if new_invoice_id != old_invoice_id:
                sync_invoice_ledger(tx, invoices[old_invoice_id], ZeroPaidFallback.RESET_TO_SENT)
                logger.info(f"Moved payment {payment_id} from invoice {old_invoice_id} to {new_invoice_id}")

        return Payment.model_validate(row)

    def delete(self, payment_id: UUID) -> bool:
        """
        Delete a payment and recompute its invoice.

        Returns:
            True if deleted, False if not found

        Raises:
            ConflictError: If concurrent moves kept changing the payment's invoice
        """
        return self._retry_moved(payment_id, lambda: self._delete_locked(payment_id))

    def _delete_locked(self, payment_id: UUID) -> bool:
        with self.postgres.transaction() as tx:
            current, invoices = self._lock_payment(tx, payment_id)
            if current is None:
                return False

            invoice = invoices[current["invoice_id"]]
            tx.execute("DELETE FROM payments WHERE id = %s", (payment_id,))
            sync_invoice_ledger(tx, invoice, ZeroPaidFallback.RESET_TO_SENT)

        logger.info(f"Deleted payment {payment_id} from invoice {invoice.invoice_number}")
        return True
