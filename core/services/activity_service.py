"""Activity feed. Entries are written by the activity handler and never edited."""

from uuid import uuid4

from clients.postgres_client import PostgresClient
from core.models import Activity, ActivityCreate
from utils.timezone import now_utc


class ActivityService:
    """Service for the activity feed."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def record(self, data: ActivityCreate) -> Activity:
        """Append one entry to the feed."""
        row = self.postgres.execute_returning(
            """
            INSERT INTO activities (id, type, description, entity_type, entity_id, created_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING *
            """,
            (uuid4(), data.type, data.description, data.entity_type, data.entity_id, now_utc())
        )[0]
        return Activity.model_validate(row)

    def list_all(self) -> list[Activity]:
        """Every activity, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM activities ORDER BY created_at DESC"
        )
        return [Activity.model_validate(row) for row in rows]
