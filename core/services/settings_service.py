"""
Settings service.

Settings are a flat key/value table (company_name, company_email,
currency_symbol, ...). Saving is an upsert per key.
"""

import logging

from clients.postgres_client import PostgresClient
from core.config import AppConfig
from core.models import CompanyProfile

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for settings operations."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def get_all(self) -> dict[str, str]:
        """
        All settings as a map. Keys whose value is NULL are left out.
        """
        rows = self.postgres.execute("SELECT key, value FROM settings ORDER BY key")
        return {row["key"]: row["value"] for row in rows if row["value"] is not None}

    def get(self, key: str) -> str | None:
        return self.postgres.execute_scalar(
            "SELECT value FROM settings WHERE key = %s",
            (key,)
        )

    def upsert_many(self, values: dict[str, str | None]) -> dict[str, str]:
        """
        Insert or overwrite each key in one transaction.

        Returns:
            The full settings map after the write
        """
        with self.postgres.transaction() as tx:
            for key, value in values.items():
                tx.execute(
                    """
                    INSERT INTO settings (key, value)
                    VALUES (%s, %s)
                    ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value
                    """,
                    (key, value)
                )

        logger.info(f"Saved {len(values)} setting(s)")
        return self.get_all()

    def company_profile(self, config: AppConfig) -> CompanyProfile:
        """Company details for invoices: stored settings over config defaults."""
        return CompanyProfile.from_settings(self.get_all(), config)
