"""Lead domain models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import AliasChoices, BaseModel, EmailStr, Field


class LeadStatus(str, Enum):
    """Where the lead sits in the sales pipeline."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class LeadCreate(BaseModel):
    """Data required to create a lead."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=1000)
    website: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    business_hours: str | None = Field(None, max_length=500)
    lead_quality_score: int | None = Field(None, ge=0, le=100)
    quality_reasoning: str | None = Field(None, max_length=5000)
    social_signals: str | None = Field(None, max_length=5000)
    growth_signals: str | None = Field(None, max_length=5000)
    source: str = Field("manual", min_length=1, max_length=100)
    status: LeadStatus = LeadStatus.NEW
    notes: str | None = Field(None, max_length=10000)
    value_cents: int = Field(0, ge=0)
    tags: list[str] = Field(default_factory=list)
    assigned_to: str | None = Field(None, max_length=255)
    interested_services: str | None = Field(None, max_length=1000)
    call_outcome: str | None = Field(None, max_length=100)


class LeadUpdate(BaseModel):
    """Data that can be updated on a lead. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=1000)
    website: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    business_hours: str | None = Field(None, max_length=500)
    lead_quality_score: int | None = Field(None, ge=0, le=100)
    quality_reasoning: str | None = Field(None, max_length=5000)
    social_signals: str | None = Field(None, max_length=5000)
    growth_signals: str | None = Field(None, max_length=5000)
    source: str | None = Field(None, min_length=1, max_length=100)
    status: LeadStatus | None = None
    notes: str | None = Field(None, max_length=10000)
    value_cents: int | None = Field(None, ge=0)
    tags: list[str] | None = None
    assigned_to: str | None = Field(None, max_length=255)
    interested_services: str | None = Field(None, max_length=1000)
    call_outcome: str | None = Field(None, max_length=100)


class InboundLeadPayload(BaseModel):
    """
    Lead as posted by an n8n workflow.

    n8n scrapers send camelCase keys and a couple of alternative names
    (phoneNumber, companyName). Unknown keys are ignored. Everything is
    optional here; the capture service decides what is required.
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = Field(None, validation_alias=AliasChoices("phone", "phoneNumber"))
    company: str | None = Field(None, validation_alias=AliasChoices("company", "companyName"))
    category: str | None = None
    city: str | None = None
    country: str | None = None
    address: str | None = None
    website: str | None = None
    linkedin: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    description: str | None = None
    business_hours: str | None = Field(None, validation_alias=AliasChoices("businessHours", "business_hours"))
    lead_quality_score: int | None = Field(
        None, validation_alias=AliasChoices("leadQualityScore", "lead_quality_score")
    )
    quality_reasoning: str | None = Field(
        None, validation_alias=AliasChoices("qualityReasoning", "quality_reasoning")
    )
    social_signals: str | None = Field(None, validation_alias=AliasChoices("socialSignals", "social_signals"))
    growth_signals: str | None = Field(None, validation_alias=AliasChoices("growthSignals", "growth_signals"))
    source: str | None = None
    notes: str | None = None
    value: int | None = None
    tags: list[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class Lead(BaseModel):
    """Full lead entity as stored."""

    id: UUID
    name: str
    email: str | None
    phone: str | None
    company: str | None
    category: str | None
    city: str | None
    country: str | None
    address: str | None
    website: str | None
    linkedin: str | None
    facebook: str | None
    instagram: str | None
    description: str | None
    business_hours: str | None
    lead_quality_score: int | None
    quality_reasoning: str | None
    social_signals: str | None
    growth_signals: str | None
    source: str
    status: LeadStatus
    notes: str | None
    value_cents: int
    tags: list[str]
    assigned_to: str | None
    interested_services: str | None
    call_outcome: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    def to_webhook_payload(self) -> dict:
        """Lead as the camelCase JSON document n8n workflows expect. Value is whole currency units."""
        return {
            "name": self.name,
            "companyName": self.company,
            "category": self.category,
            "phoneNumber": self.phone,
            "email": self.email,
            "city": self.city,
            "country": self.country,
            "address": self.address,
            "website": self.website,
            "linkedin": self.linkedin,
            "facebook": self.facebook,
            "instagram": self.instagram,
            "description": self.description,
            "businessHours": self.business_hours,
            "leadQualityScore": self.lead_quality_score,
            "qualityReasoning": self.quality_reasoning,
            "socialSignals": self.social_signals,
            "growthSignals": self.growth_signals,
            "source": self.source,
            "status": self.status.value,
            "notes": self.notes,
            "interestedServices": self.interested_services,
            "value": self.value_cents // 100,
            "callOutcome": self.call_outcome,
        }
