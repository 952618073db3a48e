"""
Domain events for the CRM.

Immutable event objects that represent things that happened. Services
publish them after their write has committed; handlers (the activity feed)
react without the publisher knowing who is listening.

Event Categories:
- LeadEvent: Lead lifecycle (create, webhook capture, relay to n8n)
- PipelineEvent: Contacts, deals and call logs
- FinanceEvent: Invoices, payments and expenses

Events carry the full domain object so handlers don't need to re-fetch state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class CRMEvent:
    """Base class for all CRM domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


# =============================================================================
# LEAD EVENTS
# =============================================================================


@dataclass(frozen=True)
class LeadEvent(CRMEvent):
    """Events related to lead lifecycle."""
    pass


@dataclass(frozen=True)
class LeadCreated(LeadEvent):
    """A lead was created by hand."""
    lead: Any = None  # Lead, typed Any to avoid circular import

    @classmethod
    def create(cls, lead: Any) -> "LeadCreated":
        return cls(lead=lead)


@dataclass(frozen=True)
class LeadCaptured(LeadEvent):
    """An n8n workflow posted a lead to one of our inbound webhooks."""
    lead: Any = None
    webhook: Any = None

    @classmethod
    def create(cls, lead: Any, webhook: Any) -> "LeadCaptured":
        return cls(lead=lead, webhook=webhook)


@dataclass(frozen=True)
class LeadSentToWebhook(LeadEvent):
    """A lead was relayed to an external n8n webhook."""
    lead: Any = None
    url: str = ""

    @classmethod
    def create(cls, lead: Any, url: str) -> "LeadSentToWebhook":
        return cls(lead=lead, url=url)


# =============================================================================
# PIPELINE EVENTS
# =============================================================================


@dataclass(frozen=True)
class PipelineEvent(CRMEvent):
    """Events related to contacts, deals and calls."""
    pass


@dataclass(frozen=True)
class ContactCreated(PipelineEvent):
    contact: Any = None

    @classmethod
    def create(cls, contact: Any) -> "ContactCreated":
        return cls(contact=contact)


@dataclass(frozen=True)
class DealCreated(PipelineEvent):
    deal: Any = None

    @classmethod
    def create(cls, deal: Any) -> "DealCreated":
        return cls(deal=deal)


@dataclass(frozen=True)
class CallLogged(PipelineEvent):
    call_log: Any = None

    @classmethod
    def create(cls, call_log: Any) -> "CallLogged":
        return cls(call_log=call_log)


# =============================================================================
# FINANCE EVENTS
# =============================================================================


@dataclass(frozen=True)
class FinanceEvent(CRMEvent):
    """Events related to invoices, payments and expenses."""
    pass


@dataclass(frozen=True)
class InvoiceCreated(FinanceEvent):
    invoice: Any = None

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceCreated":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceSent(FinanceEvent):
    """Invoice was emailed to the client."""
    invoice: Any = None
    recipient: str = ""

    @classmethod
    def create(cls, invoice: Any, recipient: str) -> "InvoiceSent":
        return cls(invoice=invoice, recipient=recipient)


@dataclass(frozen=True)
class PaymentReceived(FinanceEvent):
    """Payment recorded. Invoice reflects the recomputed ledger."""
    payment: Any = None
    invoice: Any = None

    @classmethod
    def create(cls, payment: Any, invoice: Any) -> "PaymentReceived":
        return cls(payment=payment, invoice=invoice)


@dataclass(frozen=True)
class ExpenseRecorded(FinanceEvent):
    expense: Any = None

    @classmethod
    def create(cls, expense: Any) -> "ExpenseRecorded":
        return cls(expense=expense)
