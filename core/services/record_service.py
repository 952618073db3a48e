"""
Shared CRUD for single-table CRM records.

Leads, contacts, deals, call logs, tasks, webhooks, expenses and catalog
services are plain rows: list, read, create, partial update, delete.
Subclasses declare the table, models and updatable columns, and may publish
an event when a record is created.
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel

from clients.postgres_client import PostgresClient
from core.event_bus import EventBus
from core.events import CRMEvent
from core.exceptions import NotFoundError
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordService(Generic[RecordT]):
    """Base service for one table of CRM records."""

    table: ClassVar[str]
    entity_name: ClassVar[str]  # Human name used in errors, e.g. "Lead"
    model: ClassVar[type[BaseModel]]
    updatable_columns: ClassVar[frozenset[str]]

    def __init__(self, postgres: PostgresClient, event_bus: EventBus):
        self.postgres = postgres
        self.event_bus = event_bus

    def _created_event(self, record: RecordT) -> CRMEvent | None:
        """Event to publish after create. None publishes nothing."""
        return None

    def list_all(self) -> list[RecordT]:
        """
        List every record, newest first.

        Returns:
            All records (unbounded)
        """
        rows = self.postgres.execute(
            f"SELECT * FROM {self.table} ORDER BY created_at DESC"
        )
        return [self.model.model_validate(row) for row in rows]

    def get_by_id(self, record_id: UUID) -> RecordT | None:
        """
        Get record by ID.

        Returns:
            Record if found, None otherwise.
        """
        row = self.postgres.execute_single(
            f"SELECT * FROM {self.table} WHERE id = %s",
            (record_id,)
        )

        if row is None:
            return None

        return self.model.model_validate(row)

    def require(self, record_id: UUID) -> RecordT:
        """
        Get record by ID or fail.

        Raises:
            NotFoundError: If record not found
        """
        record = self.get_by_id(record_id)
        if record is None:
            raise NotFoundError(self.entity_name, record_id)
        return record

    def _insert(self, data: BaseModel) -> RecordT:
        """Insert a row from a *Create model without publishing anything."""
        now = now_utc()
        values: dict[str, Any] = data.model_dump()
        values.update(id=uuid4(), created_at=now, updated_at=now)

        columns = ", ".join(values)
        placeholders = ", ".join(["%s"] * len(values))

        row = self.postgres.execute_returning(
            f"""
            INSERT INTO {self.table} ({columns})
            VALUES ({placeholders})
            RETURNING *
            """,
            tuple(values.values())
        )[0]

        return self.model.model_validate(row)

    def create(self, data: BaseModel) -> RecordT:
        """
        Create a new record from a *Create model.

        Args:
            data: Validated creation data

        Returns:
            Created record
        """
        record = self._insert(data)

        event = self._created_event(record)
        if event is not None:
            self.event_bus.publish(event)

        return record

    def update(self, record_id: UUID, data: BaseModel) -> RecordT:
        """
        Update record fields.

        Args:
            record_id: Record UUID
            data: Fields to update (only non-None fields are changed)

        Returns:
            Updated record

        Raises:
            NotFoundError: If record not found
        """
        current = self.require(record_id)

        updates = data.model_dump(exclude_none=True)
        if not updates:
            return current  # Nothing to update

        for field in updates:
            if field not in self.updatable_columns:
                logger.warning(
                    f"Attempted to update unknown field '{field}' on {self.table} {record_id}"
                )

        valid_updates = {k: v for k, v in updates.items() if k in self.updatable_columns}
        if not valid_updates:
            return current

        set_parts = [f"{field} = %s" for field in valid_updates]
        params = list(valid_updates.values())

        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(record_id)

        rows = self.postgres.execute_returning(
            f"""
            UPDATE {self.table}
            SET {', '.join(set_parts)}
            WHERE id = %s
            RETURNING *
            """,
            tuple(params)
        )
        if not rows:
            # Deleted after the require() above
            raise NotFoundError(self.entity_name, record_id)

        return self.model.model_validate(rows[0])

    def delete(self, record_id: UUID) -> bool:
        """
        Delete a record.

        Returns:
            True if deleted, False if not found
        """
        deleted = self.postgres.execute_returning(
            f"DELETE FROM {self.table} WHERE id = %s RETURNING id",
            (record_id,)
        )
        return bool(deleted)
