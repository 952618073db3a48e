"""Shared test fixtures for CRM test suite."""

import pytest
from pathlib import Path

from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
# override=True ensures .env takes precedence over shell env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

# Reset vault client singleton to pick up env vars
import clients.vault_client as vault_module
vault_module._vault_client_instance = None
vault_module._secret_cache.clear()

SCHEMA_PATH = Path(__file__).parent.parent / "schema.sql"

CRM_TABLES = (
    "activities, payments, invoice_items, invoices, expenses, services, "
    "webhooks, tasks, call_logs, deals, contacts, leads, settings"
)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="session")
def db():
    """
    Session-scoped PostgresClient against the Vault-configured database.

    Tests that need it are skipped when Vault or the database is unreachable,
    so the pure-logic suite runs anywhere.
    """
    import psycopg2

    from clients.postgres_client import PostgresClient
    from clients.vault_client import VaultError, get_database_url

    try:
        client = PostgresClient(get_database_url())
    except (ValueError, KeyError, VaultError, psycopg2.OperationalError) as e:
        pytest.skip(f"Database not configured: {e}")

    client.execute(SCHEMA_PATH.read_text())
    yield client
    client.close()


@pytest.fixture
def clean_db(db):
    """Empty every CRM table before the test."""
    db.execute(f"TRUNCATE {CRM_TABLES} CASCADE")
    yield db
