"""Expense service."""

from core.events import ExpenseRecorded
from core.models import Expense
from core.services.record_service import RecordService


class ExpenseService(RecordService[Expense]):
    """Service for expense operations."""

    table = "expenses"
    entity_name = "Expense"
    model = Expense
    updatable_columns = frozenset({
        "title", "amount_cents", "category", "vendor", "expense_date", "notes",
    })

    def _created_event(self, record: Expense) -> ExpenseRecorded:
        return ExpenseRecorded.create(expense=record)
