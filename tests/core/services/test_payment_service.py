"""Tests for PaymentService - payments drive invoice amount paid and status."""

import threading
import time
from uuid import uuid4

import pytest

from core.exceptions import NotFoundError
from core.ledger import ZeroPaidFallback
from core.models import (
    InvoiceCreate,
    InvoiceItemInput,
    InvoiceStatus,
    InvoiceUpdate,
    PaymentCreate,
    PaymentMethod,
    PaymentUpdate,
)
from core.services.ledger_sync import lock_invoices, sync_invoice_ledger


def _create_invoice(invoice_service, total=500, client="Fashion Forward"):
    return invoice_service.create(InvoiceCreate(
        client_name=client,
        items=[InvoiceItemInput(description="Campaign", rate_cents=total)],
    ))


@pytest.fixture
def invoice(invoice_service):
    """A 500 invoice, marked sent."""
    created = _create_invoice(invoice_service)
    return invoice_service.update(created.id, InvoiceUpdate(status=InvoiceStatus.SENT))


def _pay(payment_service, invoice, amount):
    return payment_service.create(PaymentCreate(
        invoice_id=invoice.id, amount_cents=amount, method=PaymentMethod.UPI,
    ))


class TestPaymentCreate:

    def test_partial_payment(self, invoice_service, payment_service, invoice):
        payment = _pay(payment_service, invoice, 300)

        assert payment.amount_cents == 300
        assert payment.method == PaymentMethod.UPI
        refreshed = invoice_service.get_by_id(invoice.id)
        assert refreshed.amount_paid_cents == 300
        assert refreshed.status == InvoiceStatus.PARTIALLY_PAID

    def test_full_payment(self, invoice_service, payment_service, invoice):
        _pay(payment_service, invoice, 300)
        _pay(payment_service, invoice, 200)

        refreshed = invoice_service.get_by_id(invoice.id)
        assert refreshed.amount_paid_cents == 500
        assert refreshed.balance_due_cents == 0
        assert refreshed.status == InvoiceStatus.PAID

    def test_overpayment_is_paid(self, invoice_service, payment_service, invoice):
        _pay(payment_service, invoice, 800)

        refreshed = invoice_service.get_by_id(invoice.id)
        assert refreshed.status == InvoiceStatus.PAID
        assert refreshed.balance_due_cents == -300

    def test_missing_invoice_raises(self, payment_service):
        with pytest.raises(NotFoundError, match="Invoice"):
            payment_service.create(PaymentCreate(invoice_id=uuid4(), amount_cents=100))

    def test_records_activity(self, payment_service, activity_service, invoice):
        _pay(payment_service, invoice, 30_000)

        latest = activity_service.list_all()[0]
        assert latest.type == "payment_received"
        assert latest.description == "Payment of ₹300 received for invoice INV-0001"


class TestPaymentRead:

    def test_list_for_invoice(self, invoice_service, payment_service, invoice):
        other = _create_invoice(invoice_service, client="EduBright")
        _pay(payment_service, invoice, 100)
        _pay(payment_service, other, 200)

        assert [p.amount_cents for p in payment_service.list_for_invoice(invoice.id)] == [100]
        assert len(payment_service.list_all()) == 2

    def test_get_by_id(self, payment_service, invoice):
        payment = _pay(payment_service, invoice, 100)
        assert payment_service.get_by_id(payment.id) == payment

    def test_get_missing(self, payment_service):
        assert payment_service.get_by_id(uuid4()) is None


class TestPaymentUpdate:

    def test_amount_change_recomputes(self, invoice_service, payment_service, invoice):
        payment = _pay(payment_service, invoice, 300)

        updated = payment_service.update(payment.id, PaymentUpdate(amount_cents=500))

        assert updated.amount_cents == 500
        assert invoice_service.get_by_id(invoice.id).status == InvoiceStatus.PAID

    def test_empty_update_returns_payment(self, payment_service, invoice):
        payment = _pay(payment_service, invoice, 300)
        assert payment_service.update(payment.id, PaymentUpdate()).amount_cents == 300

    def test_missing_payment_raises(self, payment_service):
        with pytest.raises(NotFoundError, match="Payment"):
            payment_service.update(uuid4(), PaymentUpdate(amount_cents=1))

    def test_move_to_missing_invoice_raises(self, invoice_service, payment_service, invoice):
        payment = _pay(payment_service, invoice, 300)

        with pytest.raises(NotFoundError, match="Invoice"):
            payment_service.update(payment.id, PaymentUpdate(invoice_id=uuid4()))

        assert invoice_service.get_by_id(invoice.id).amount_paid_cents == 300

    def test_move_recomputes_both_invoices(self, invoice_service, payment_service, invoice):
        draft = _create_invoice(invoice_service, total=300, client="EduBright")
        payment = _pay(payment_service, invoice, 300)

        payment_service.update(payment.id, PaymentUpdate(invoice_id=draft.id))

        left = invoice_service.get_by_id(invoice.id)
        joined = invoice_service.get_by_id(draft.id)
        assert (left.amount_paid_cents, left.status) == (0, InvoiceStatus.SENT)
        assert (joined.amount_paid_cents, joined.status) == (300, InvoiceStatus.PAID)

    def test_vacated_draft_becomes_sent(self, invoice_service, payment_service):
        """The invoice a payment leaves is treated like a deletion."""
        draft = _create_invoice(invoice_service)
        target = _create_invoice(invoice_service, client="EduBright")
        payment = _pay(payment_service, draft, 100)

        payment_service.update(payment.id, PaymentUpdate(invoice_id=target.id))

        assert invoice_service.get_by_id(draft.id).status == InvoiceStatus.SENT


class TestPaymentDelete:

    def test_lifecycle_back_to_sent(self, invoice_service, payment_service, invoice):
        first = _pay(payment_service, invoice, 300)
        second = _pay(payment_service, invoice, 200)

        assert payment_service.delete(first.id) is True
        refreshed = invoice_service.get_by_id(invoice.id)
        assert (refreshed.amount_paid_cents, refreshed.status) == (200, InvoiceStatus.PARTIALLY_PAID)

        assert payment_service.delete(second.id) is True
        refreshed = invoice_service.get_by_id(invoice.id)
        assert (refreshed.amount_paid_cents, refreshed.status) == (0, InvoiceStatus.SENT)

    def test_delete_resets_draft_to_sent(self, invoice_service, payment_service):
        draft = _create_invoice(invoice_service)
        payment = _pay(payment_service, draft, 100)

        payment_service.delete(payment.id)

        assert invoice_service.get_by_id(draft.id).status == InvoiceStatus.SENT

    def test_missing_returns_false(self, payment_service):
        assert payment_service.delete(uuid4()) is False


def _in_thread(target, errors):
    """Start target in a thread, collecting anything it raises."""
    def run():
        try:
            target()
        except Exception as e:
            errors.append(e)

    thread = threading.Thread(target=run)
    thread.start()
    return thread


class TestConcurrentPayments:
    """Writers on the same invoice run one after the other."""

    def test_concurrent_creates_both_counted(self, invoice_service, payment_service, invoice):
        barrier = threading.Barrier(2)
        errors = []

        def pay(amount):
            barrier.wait(timeout=5)
            _pay(payment_service, invoice, amount)

        threads = [_in_thread(lambda: pay(300), errors), _in_thread(lambda: pay(200), errors)]
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        refreshed = invoice_service.get_by_id(invoice.id)
        assert refreshed.amount_paid_cents == 500
        assert refreshed.status == InvoiceStatus.PAID
        assert len(payment_service.list_for_invoice(invoice.id)) == 2

    def _move_while_waiting(self, clean_db, payment, source, target, write):
        """
        Hold both invoice locks, start write(), then move the payment and commit.

        write() reads the payment's invoice before the move commits and
        waits on the source invoice lock.
        """
        errors = []
        with clean_db.transaction() as tx:
            locked = lock_invoices(tx, [source.id, target.id])
            worker = _in_thread(write, errors)
            time.sleep(0.5)

            tx.execute(
                "UPDATE payments SET invoice_id = %s WHERE id = %s",
                (target.id, payment.id)
            )
            sync_invoice_ledger(tx, locked[source.id], ZeroPaidFallback.RESET_TO_SENT)
            sync_invoice_ledger(tx, locked[target.id])

        worker.join(timeout=10)
        assert not worker.is_alive()
        assert errors == []

    def test_update_follows_concurrent_move(self, clean_db, invoice_service, payment_service, invoice):
        other = invoice_service.update(
            _create_invoice(invoice_service, client="EduBright").id,
            InvoiceUpdate(status=InvoiceStatus.SENT),
        )
        payment = _pay(payment_service, invoice, 200)

        self._move_while_waiting(
            clean_db, payment, invoice, other,
            lambda: payment_service.update(payment.id, PaymentUpdate(amount_cents=500)),
        )

        left = invoice_service.get_by_id(invoice.id)
        joined = invoice_service.get_by_id(other.id)
        assert (left.amount_paid_cents, left.status) == (0, InvoiceStatus.SENT)
        assert (joined.amount_paid_cents, joined.status) == (500, InvoiceStatus.PAID)

    def test_delete_follows_concurrent_move(self, clean_db, invoice_service, payment_service, invoice):
        other = invoice_service.update(
            _create_invoice(invoice_service, client="EduBright").id,
            InvoiceUpdate(status=InvoiceStatus.SENT),
        )
        payment = _pay(payment_service, invoice, 200)

        self._move_while_waiting(
            clean_db, payment, invoice, other,
            lambda: payment_service.delete(payment.id),
        )

        assert payment_service.get_by_id(payment.id) is None
        left = invoice_service.get_by_id(invoice.id)
        joined = invoice_service.get_by_id(other.id)
        assert (left.amount_paid_cents, left.status) == (0, InvoiceStatus.SENT)
        assert (joined.amount_paid_cents, joined.status) == (0, InvoiceStatus.SENT)
