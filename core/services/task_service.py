"""Task service. Tasks do not appear in the activity feed."""

from core.models import Task
from core.services.record_service import RecordService


class TaskService(RecordService[Task]):
    table = "tasks"
    entity_name = "Task"
    model = Task
    updatable_columns = frozenset({
        "title", "description", "status", "priority", "assigned_to", "due_date",
    })
