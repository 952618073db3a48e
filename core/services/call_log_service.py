"""Call log service."""

from core.events import CallLogged
from core.models import CallLog
from core.services.record_service import RecordService


class CallLogService(RecordService[CallLog]):
    """Service for call log operations."""

    table = "call_logs"
    entity_name = "Call log"
    model = CallLog
    updatable_columns = frozenset({
        "lead_id", "called_by", "outcome", "duration", "notes", "scheduled_at",
    })

    def _created_event(self, record: CallLog) -> CallLogged:
        return CallLogged.create(call_log=record)
