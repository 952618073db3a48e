"""Core domain models."""

from core.models.lead import Lead, LeadCreate, LeadUpdate, LeadStatus, InboundLeadPayload
from core.models.contact import Contact, ContactCreate, ContactUpdate
from core.models.deal import Deal, DealCreate, DealUpdate, DealStage
from core.models.call_log import CallLog, CallLogCreate, CallLogUpdate, CallOutcome
from core.models.task import Task, TaskCreate, TaskUpdate, TaskStatus, TaskPriority
from core.models.webhook import Webhook, WebhookCreate, WebhookUpdate
from core.models.service import Service, ServiceCreate, ServiceUpdate
from core.models.expense import Expense, ExpenseCreate, ExpenseUpdate
from core.models.payment import Payment, PaymentCreate, PaymentUpdate, PaymentMethod
from core.models.invoice import (
    Invoice, InvoiceCreate, InvoiceUpdate, InvoiceDetail, InvoiceStatus, DiscountType,
    InvoiceItem, InvoiceItemInput, InvoiceItemCreate,
)
from core.models.setting import Setting, CompanyProfile
from core.models.activity import Activity, ActivityCreate

__all__ = [
    # Lead
    "Lead", "LeadCreate", "LeadUpdate", "LeadStatus", "InboundLeadPayload",
    # Contact
    "Contact", "ContactCreate", "ContactUpdate",
    # Deal
    "Deal", "DealCreate", "DealUpdate", "DealStage",
    # CallLog
    "CallLog", "CallLogCreate", "CallLogUpdate", "CallOutcome",
    # Task
    "Task", "TaskCreate", "TaskUpdate", "TaskStatus", "TaskPriority",
    # Webhook
    "Webhook", "WebhookCreate", "WebhookUpdate",
    # Service catalog
    "Service", "ServiceCreate", "ServiceUpdate",
    # Expense
    "Expense", "ExpenseCreate", "ExpenseUpdate",
    # Payment
    "Payment", "PaymentCreate", "PaymentUpdate", "PaymentMethod",
    # Invoice
    "Invoice", "InvoiceCreate", "InvoiceUpdate", "InvoiceDetail", "InvoiceStatus", "DiscountType",
    "InvoiceItem", "InvoiceItemInput", "InvoiceItemCreate",
    # Settings
    "Setting", "CompanyProfile",
    # Activity
    "Activity", "ActivityCreate",
]
