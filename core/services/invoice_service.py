"""
Invoice service for billing.

Invoices carry their own items and receive payments. Subtotal, discount,
tax, total, amount paid and status are never written directly: every change
to items (or to the discount and tax settings) recomputes them under the
invoice row lock, see core/services/ledger_sync.py.
"""

import logging
from uuid import UUID, uuid4

from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.postgres_client import PostgresClient, Transaction
from core.config import AppConfig
from core.event_bus import EventBus
from core.events import InvoiceCreated, InvoiceSent
from core.exceptions import DownstreamError, InvalidDataError, NotFoundError
from core.invoice_email import render_invoice_email
from core.models import (
    Invoice,
    InvoiceCreate,
    InvoiceDetail,
    InvoiceItem,
    InvoiceItemCreate,
    InvoiceItemInput,
    InvoiceStatus,
    InvoiceUpdate,
)
from core.services.ledger_sync import (
    load_items,
    load_payments,
    lock_invoice,
    sync_invoice_ledger,
)
from core.services.settings_service import SettingsService
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

# Statuses a caller may set by hand. PAID and PARTIALLY_PAID follow payments.
MANUAL_STATUSES = frozenset({InvoiceStatus.DRAFT, InvoiceStatus.SENT})


class InvoiceService:
    """Service for invoice operations."""

    updatable_columns = frozenset({
        "client_name", "client_email", "client_phone", "client_address",
        "discount_type", "discount_value", "tax_percentage",
        "status", "due_date", "notes",
    })

    def __init__(
        self,
        postgres: PostgresClient,
        event_bus: EventBus,
        settings: SettingsService,
        config: AppConfig,
        email_client: EmailGatewayClient | None = None,
    ):
        self.postgres = postgres
        self.event_bus = event_bus
        self.settings = settings
        self.config = config
        self.email_client = email_client

    def _next_invoice_number(self, tx: Transaction) -> str:
        """
        Next number after the highest existing one, e.g. INV-0007 -> INV-0008.

        Numbers that don't parse (hand-entered ones) are ignored. An advisory
        lock keeps two concurrent creates from picking the same number.
        """
        prefix = self.config.invoice_number_prefix
        tx.execute("SELECT pg_advisory_xact_lock(hashtext('invoice_number'))")

        rows = tx.execute(
            "SELECT invoice_number FROM invoices WHERE invoice_number LIKE %s",
            (f"{prefix}%",)
        )

        highest = 0
        for row in rows:
            suffix = row["invoice_number"][len(prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))

        return f"{prefix}{highest + 1:0{self.config.invoice_number_digits}d}"

    def _insert_item(self, tx: Transaction, invoice_id: UUID, item: InvoiceItemInput) -> InvoiceItem:
        row = tx.execute_single(
            """
            INSERT INTO invoice_items (
                id, invoice_id, description, quantity, rate_cents, amount_cents, created_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING *
            """,
            (
                uuid4(), invoice_id, item.description, item.quantity,
                item.rate_cents, item.amount_cents, now_utc(),
            )
        )
        return InvoiceItem.model_validate(row)

    def _insert_items(self, tx: Transaction, invoice_id: UUID, items: list[InvoiceItemInput]) -> None:
        for item in items:
            self._insert_item(tx, invoice_id, item)

    def list_all(self) -> list[Invoice]:
        """List every invoice, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM invoices ORDER BY created_at DESC"
        )
        return [Invoice.model_validate(row) for row in rows]

    def get_by_id(self, invoice_id: UUID) -> Invoice | None:
        """
        Get invoice by ID.

        Returns:
            Invoice if found, None otherwise.
        """
        row = self.postgres.execute_single(
            "SELECT * FROM invoices WHERE id = %s",
            (invoice_id,)
        )

        if row is None:
            return None

        return Invoice.model_validate(row)

    def get_detail(self, invoice_id: UUID) -> InvoiceDetail:
        """
        Get invoice with its items and payments.

        Raises:
            NotFoundError: If invoice not found
        """
        with self.postgres.transaction() as tx:
            row = tx.execute_single(
                "SELECT * FROM invoices WHERE id = %s",
                (invoice_id,)
            )
            if row is None:
                raise NotFoundError("Invoice", invoice_id)

            return InvoiceDetail.model_validate({
                **row,
                "items": load_items(tx, invoice_id),
                "payments": load_payments(tx, invoice_id),
            })

    def create(self, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice with its items.

        Args:
            data: Invoice fields and items; invoice_number is generated when omitted

        Returns:
            Created invoice with its ledger computed

        Raises:
            InvalidDataError: If the number is taken, the status is payment-driven,
                or the discount exceeds the subtotal
        """
        if data.status not in MANUAL_STATUSES:
            raise InvalidDataError(
                f"Status '{data.status.value}' is set by payments and cannot be set directly"
            )

        invoice_id = uuid4()
        now = now_utc()

        with self.postgres.transaction() as tx:
            if data.invoice_number:
                invoice_number = data.invoice_number
                taken = tx.execute_scalar(
                    "SELECT 1 FROM invoices WHERE invoice_number = %s",
                    (invoice_number,)
                )
                if taken:
                    raise InvalidDataError(f"Invoice number {invoice_number} already exists")
            else:
                invoice_number = self._next_invoice_number(tx)

            row = tx.execute_single(
                """
                INSERT INTO invoices (
                    id, invoice_number,
                    client_name, client_email, client_phone, client_address,
                    status, discount_type, discount_value, tax_percentage,
                    due_date, notes, created_at, updated_at
                ) VALUES (
                    %s, %s,
                    %s, %s, %s, %s,
                    %s, %s, %s, %s,
                    %s, %s, %s, %s
                )
                RETURNING *
                """,
                (
                    invoice_id, invoice_number,
                    data.client_name, data.client_email, data.client_phone, data.client_address,
                    data.status, data.discount_type, data.discount_value, data.tax_percentage,
                    data.due_date, data.notes, now, now,
                )
            )
            self._insert_items(tx, invoice_id, data.items)
            invoice = sync_invoice_ledger(tx, Invoice.model_validate(row))

        logger.info(f"Created invoice {invoice.invoice_number} for {invoice.client_name}")
        self.event_bus.publish(InvoiceCreated.create(invoice=invoice))

        return invoice

    def update(self, invoice_id: UUID, data: InvoiceUpdate) -> Invoice:
        """
        Update invoice fields, optionally replacing all items.

        Args:
            invoice_id: Invoice UUID
            data: Fields to update (only non-None fields are changed)

        Returns:
            Updated invoice with its ledger recomputed

        Raises:
            NotFoundError: If invoice not found
            InvalidDataError: If status is set to a payment-driven value, or
                set at all once payments exist, or the discount exceeds the subtotal
        """
        updates = data.model_dump(exclude_none=True, exclude={"items"})

        for field in updates:
            if field not in self.updatable_columns:
                logger.warning(f"Attempted to update unknown field '{field}' on invoice {invoice_id}")
        updates = {k: v for k, v in updates.items() if k in self.updatable_columns}

        with self.postgres.transaction() as tx:
            invoice = lock_invoice(tx, invoice_id)

            if "status" in updates:
                status = InvoiceStatus(updates["status"])
                if status not in MANUAL_STATUSES:
                    raise InvalidDataError(
                        f"Status '{status.value}' is set by payments and cannot be set directly"
                    )
                if status != invoice.status and load_payments(tx, invoice_id):
                    raise InvalidDataError(
                        "Status cannot be changed by hand once payments are recorded"
                    )

            if updates:
                set_parts = [f"{field} = %s" for field in updates]
                params = list(updates.values())
                set_parts.append("updated_at = %s")
                params.append(now_utc())
                params.append(invoice_id)

                row = tx.execute_single(
                    f"""
                    UPDATE invoices
                    SET {', '.join(set_parts)}
                    WHERE id = %s
                    RETURNING *
                    """,
                    tuple(params)
                )
                invoice = Invoice.model_validate(row)

            if data.items is not None:
                tx.execute("DELETE FROM invoice_items WHERE invoice_id = %s", (invoice_id,))
                self._insert_items(tx, invoice_id, data.items)

            return sync_invoice_ledger(tx, invoice)

    def delete(self, invoice_id: UUID) -> bool:
        """
        Delete an invoice together with its items and payments.

        Returns:
            True if deleted, False if not found
        """
        with self.postgres.transaction() as tx:
            found = tx.execute_scalar(
                "SELECT id FROM invoices WHERE id = %s FOR UPDATE",
                (invoice_id,)
            )
            if found is None:
                return False

            tx.execute("DELETE FROM payments WHERE invoice_id = %s", (invoice_id,))
            tx.execute("DELETE FROM invoice_items WHERE invoice_id = %s", (invoice_id,))
            tx.execute("DELETE FROM invoices WHERE id = %s", (invoice_id,))

        logger.info(f"Deleted invoice {invoice_id}")
        return True

    def add_item(self, data: InvoiceItemCreate) -> InvoiceItem:
        """
        Add one item to an existing invoice and recompute its ledger.

        Raises:
            NotFoundError: If invoice not found
            InvalidDataError: If the invoice's discount would then exceed its subtotal
        """
        with self.postgres.transaction() as tx:
            invoice = lock_invoice(tx, data.invoice_id)
            item = self._insert_item(tx, invoice.id, data)
            sync_invoice_ledger(tx, invoice)

        return item

    def delete_item(self, item_id: UUID) -> bool:
        """
        Remove one item and recompute its invoice's ledger.

        Returns:
            True if deleted, False if not found

        Raises:
            InvalidDataError: If a fixed discount would then exceed the subtotal
        """
        with self.postgres.transaction() as tx:
            invoice_id = tx.execute_scalar(
                "SELECT invoice_id FROM invoice_items WHERE id = %s",
                (item_id,)
            )
            if invoice_id is None:
                return False

            invoice = lock_invoice(tx, invoice_id)
            deleted = tx.execute(
                "DELETE FROM invoice_items WHERE id = %s RETURNING id",
                (item_id,)
            )
            if not deleted:
                return False

            sync_invoice_ledger(tx, invoice)

        return True

    def send_email(self, invoice_id: UUID) -> Invoice:
        """
        Email the invoice to its client.

        A draft invoice becomes sent; an invoice that already has payments
        keeps its status. sent_at is stamped either way.

        Raises:
            NotFoundError: If invoice not found
            InvalidDataError: If the invoice has no client email
            DownstreamError: If the email gateway is missing or rejects the message
        """
        detail = self.get_detail(invoice_id)
        if not detail.client_email:
            raise InvalidDataError("Client email is required to send invoice")

        if self.email_client is None:
            raise DownstreamError("Email gateway is not configured")

        company = self.settings.company_profile(self.config)
        email = render_invoice_email(detail, company)

        try:
            self.email_client.send_html_email(
                to=detail.client_email,
                subject=email.subject,
                html=email.html,
                sender=self.config.email_sender,
                from_name=company.name,
                reply_to=company.email or None,
            )
        except EmailGatewayError as e:
            logger.error(f"Invoice {detail.invoice_number} email failed: {e}")
            raise DownstreamError(f"Email failed: {e}") from e

        with self.postgres.transaction() as tx:
            invoice = lock_invoice(tx, invoice_id)
            status = InvoiceStatus.SENT if invoice.status == InvoiceStatus.DRAFT else invoice.status
            now = now_utc()
            row = tx.execute_single(
                """
                UPDATE invoices
                SET status = %s, sent_at = %s, updated_at = %s
                WHERE id = %s
                RETURNING *
                """,
                (status, now, now, invoice_id)
            )
            invoice = Invoice.model_validate(row)

        logger.info(f"Sent invoice {invoice.invoice_number} to {detail.client_email}")
        self.event_bus.publish(InvoiceSent.create(invoice=invoice, recipient=detail.client_email))

        return invoice
