"""Deal service for the sales pipeline."""

from core.events import DealCreated
from core.models import Deal
from core.services.record_service import RecordService


class DealService(RecordService[Deal]):
    """Service for deal operations."""

    table = "deals"
    entity_name = "Deal"
    model = Deal
    updatable_columns = frozenset({
        "title", "value_cents", "stage", "probability",
        "expected_close_date", "contact_id", "lead_id", "notes",
    })

    def _created_event(self, record: Deal) -> DealCreated:
        return DealCreated.create(deal=record)
