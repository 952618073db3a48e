"""
Service catalog: the offerings a business invoices for.

Catalog entries are reference data for building invoice items; invoices copy
description and rate, so editing or deleting a catalog entry never changes
an existing invoice.
"""

from core.models import Service
from core.services.record_service import RecordService


class CatalogService(RecordService[Service]):
    """Service for catalog operations."""

    table = "services"
    entity_name = "Service"
    model = Service
    updatable_columns = frozenset({"name", "description", "price_cents", "is_active"})

    def list_active(self) -> list[Service]:
        """List active catalog services, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM services WHERE is_active = true ORDER BY created_at DESC"
        )
        return [Service.model_validate(row) for row in rows]
