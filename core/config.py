"""Application configuration."""

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """
    Application configuration.

    Company fields are fallbacks; values stored in the settings table
    (company_name, currency_symbol, ...) win when present.
    """

    # Company defaults
    company_name: str = Field(
        default="Canvas Cartel",
        description="Company name used on invoices when no setting is stored",
        min_length=1,
    )
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used when no setting is stored",
        min_length=1,
        max_length=5,
    )

    # Invoices
    invoice_number_prefix: str = Field(
        default="INV-",
        description="Prefix for generated invoice numbers",
        min_length=1,
        max_length=10,
    )
    invoice_number_digits: int = Field(
        default=4,
        description="Zero-padded width of the invoice sequence",
        ge=1,
        le=10,
    )

    # Outbound calls
    webhook_timeout_seconds: int = Field(
        default=10,
        description="Timeout for relaying leads to n8n",
        ge=1,
        le=60,
    )
    email_sender: str = Field(
        default="system",
        description="Email gateway sender identity",
        pattern="^(auth|system)$",
    )
