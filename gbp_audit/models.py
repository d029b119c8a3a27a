"""
Pydantic models for the audit response contract, submission history and
draft form state.

Wire names are camelCase (``overallScore``, ``businessName``); attributes are
snake_case. Dump with ``by_alias=True`` to get the wire form back.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuditBreakdownItem(BaseModel):
    """One scored sub-category of the audit."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    category: str = Field(..., min_length=1, strict=True)
    score: int = Field(..., ge=0, le=100, strict=True)
    comment: str = Field(..., min_length=1, strict=True)


class Recommendation(BaseModel):
    """One actionable suggestion."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, strict=True)
    description: str = Field(..., min_length=1, strict=True)


class AuditResult(BaseModel):
    """A complete, validated audit. Built once from a single response."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    overall_score: int = Field(..., alias="overallScore", ge=0, le=100, strict=True)
    audit_breakdown: List[AuditBreakdownItem] = Field(..., alias="auditBreakdown", min_length=1)
    recommendations: List[Recommendation] = Field(..., min_length=1)

    def to_payload(self) -> dict:
        """Return the camelCase dict the generation service speaks."""
        return self.model_dump(by_alias=True)


class AuditEntry(BaseModel):
    """One row of submission history."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    email: str = Field(..., min_length=1)
    business_name: str = Field(..., alias="businessName", min_length=1)
    location: str = Field(..., min_length=1)
    # Older entries were written without a phone number.
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_input(cls, business, timestamp: Optional[datetime] = None) -> "AuditEntry":
        """Create the history row for a validated ``BusinessInput``."""
        return cls(
            email=str(business.email),
            business_name=business.business_name,
            location=business.location,
            phone_number=business.phone_number,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DRAFT_FIELDS = ("business_name", "location", "email", "phone_number")


class DraftForm(BaseModel):
    """Form input typed so far, before a successful audit."""
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    business_name: str = Field("", alias="businessName")
    location: str = ""
    email: str = ""
    phone_number: str = Field("", alias="phoneNumber")

    def is_complete(self) -> bool:
        return all(getattr(self, name).strip() for name in DRAFT_FIELDS)

    def as_input_data(self) -> dict:
        return {name: getattr(self, name) for name in DRAFT_FIELDS}
