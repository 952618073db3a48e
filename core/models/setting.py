"""Key/value settings and the company profile built from them."""

from pydantic import BaseModel

from core.config import AppConfig


class Setting(BaseModel):
    key: str
    value: str | None

    model_config = {"from_attributes": True}


class CompanyProfile(BaseModel):
    """Company details printed on invoices."""

    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    currency_symbol: str

    @classmethod
    def from_settings(cls, settings: dict[str, str], config: AppConfig) -> "CompanyProfile":
        """Stored settings win; empty values fall back to config defaults."""
        return cls(
            name=settings.get("company_name") or config.company_name,
            email=settings.get("company_email") or "",
            phone=settings.get("company_phone") or "",
            address=settings.get("company_address") or "",
            currency_symbol=settings.get("currency_symbol") or config.currency_symbol,
        )
