# Infrastructure clients
from clients.vault_client import (
    VaultClient,
    VaultError,
    get_database_url,
    get_email_config,
)
from clients.postgres_client import PostgresClient, Transaction
from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.webhook_client import WebhookClient, WebhookDeliveryError
