"""
Handlers that turn domain events into activity feed entries.

One factory per event type, each returning a handler bound to the activity
service. register_activity_handlers() wires them all onto an event bus.
A failing handler is logged by the bus and never undoes the write that
published the event.
"""

import logging
from typing import Callable

from core.event_bus import EventBus
from core.events import (
    CallLogged,
    ContactCreated,
    DealCreated,
    ExpenseRecorded,
    InvoiceCreated,
    InvoiceSent,
    LeadCaptured,
    LeadCreated,
    LeadSentToWebhook,
    PaymentReceived,
)
from core.models import ActivityCreate
from utils.money import format_money

logger = logging.getLogger(__name__)


def handle_lead_created(activity_service) -> Callable:
    def handler(event: LeadCreated):
        activity_service.record(ActivityCreate(
            type="lead_created",
            description=f"New lead created: {event.lead.name}",
            entity_type="lead",
            entity_id=event.lead.id,
        ))

    return handler


def handle_lead_captured(activity_service) -> Callable:
    def handler(event: LeadCaptured):
        activity_service.record(ActivityCreate(
            type="lead_created_webhook",
            description=f'Lead "{event.lead.name}" created via n8n webhook "{event.webhook.name}"',
            entity_type="lead",
            entity_id=event.lead.id,
        ))

    return handler


def handle_lead_sent(activity_service) -> Callable:
    def handler(event: LeadSentToWebhook):
        activity_service.record(ActivityCreate(
            type="lead_sent_webhook",
            description=f'Lead "{event.lead.name}" sent to n8n webhook',
            entity_type="lead",
            entity_id=event.lead.id,
        ))

    return handler


def handle_contact_created(activity_service) -> Callable:
    def handler(event: ContactCreated):
        activity_service.record(ActivityCreate(
            type="contact_created",
            description=f"New contact added: {event.contact.name}",
            entity_type="contact",
            entity_id=event.contact.id,
        ))

    return handler


def handle_deal_created(activity_service, currency_symbol: str) -> Callable:
    def handler(event: DealCreated):
        deal = event.deal
        activity_service.record(ActivityCreate(
            type="deal_created",
            description=f"New deal created: {deal.title} ({format_money(deal.value_cents, currency_symbol)})",
            entity_type="deal",
            entity_id=deal.id,
        ))

    return handler


def handle_call_logged(activity_service) -> Callable:
    def handler(event: CallLogged):
        call_log = event.call_log
        description = f"Call logged: {call_log.outcome.value.replace('_', ' ')}"
        if call_log.called_by:
            description += f" by {call_log.called_by}"

        activity_service.record(ActivityCreate(
            type="call_logged",
            description=description,
            entity_type="call_log",
            entity_id=call_log.id,
        ))

    return handler


def handle_expense_recorded(activity_service, currency_symbol: str) -> Callable:
    def handler(event: ExpenseRecorded):
        expense = event.expense
        activity_service.record(ActivityCreate(
            type="expense_created",
            description=f"Expense recorded: {expense.title} - {format_money(expense.amount_cents, currency_symbol)}",
            entity_type="expense",
            entity_id=expense.id,
        ))

    return handler


def handle_invoice_created(activity_service) -> Callable:
    def handler(event: InvoiceCreated):
        invoice = event.invoice
        activity_service.record(ActivityCreate(
            type="invoice_created",
            description=f"Invoice {invoice.invoice_number} created for {invoice.client_name}",
            entity_type="invoice",
            entity_id=invoice.id,
        ))

    return handler


def handle_invoice_sent(activity_service) -> Callable:
    def handler(event: InvoiceSent):
        activity_service.record(ActivityCreate(
            type="invoice_sent",
            description=f"Invoice {event.invoice.invoice_number} sent to {event.recipient}",
            entity_type="invoice",
            entity_id=event.invoice.id,
        ))

    return handler


def handle_payment_received(activity_service, currency_symbol: str) -> Callable:
    def handler(event: PaymentReceived):
        payment = event.payment
        activity_service.record(ActivityCreate(
            type="payment_received",
            description=(
                f"Payment of {format_money(payment.amount_cents, currency_symbol)} "
                f"received for invoice {event.invoice.invoice_number}"
            ),
            entity_type="payment",
            entity_id=payment.id,
        ))

    return handler


def register_activity_handlers(event_bus: EventBus, activity_service, currency_symbol: str = "₹") -> None:
    """Subscribe every activity feed handler."""
    event_bus.subscribe(LeadCreated, handle_lead_created(activity_service))
    event_bus.subscribe(LeadCaptured, handle_lead_captured(activity_service))
    event_bus.subscribe(LeadSentToWebhook, handle_lead_sent(activity_service))
    event_bus.subscribe(ContactCreated, handle_contact_created(activity_service))
    event_bus.subscribe(DealCreated, handle_deal_created(activity_service, currency_symbol))
    event_bus.subscribe(CallLogged, handle_call_logged(activity_service))
    event_bus.subscribe(ExpenseRecorded, handle_expense_recorded(activity_service, currency_symbol))
    event_bus.subscribe(InvoiceCreated, handle_invoice_created(activity_service))
    event_bus.subscribe(InvoiceSent, handle_invoice_sent(activity_service))
    event_bus.subscribe(PaymentReceived, handle_payment_received(activity_service, currency_symbol))
    logger.info("Activity feed handlers registered")
