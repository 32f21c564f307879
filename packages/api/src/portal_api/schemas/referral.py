# This project was developed with assistance from AI tools.
"""Referral lead request/response schemas."""

import re
from datetime import datetime

from portal_db.enums import LeadStatus
from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ReferralLeadCreate(BaseModel):
    """Lead submitted by a referral partner. Text fields are trimmed."""

    business_name: str = Field(..., max_length=255)
    contact_name: str = Field(..., max_length=255)
    contact_email: str = Field(..., max_length=255)
    contact_phone: str | None = Field(default=None, max_length=50)
    loan_amount: str | None = Field(default=None, max_length=100)
    business_type: str | None = Field(default=None, max_length=255)
    notes: str | None = None

    @field_validator(
        "business_name",
        "contact_name",
        "contact_email",
        "contact_phone",
        "loan_amount",
        "business_type",
        "notes",
        mode="before",
    )
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            value = value.strip()
        return value

    @field_validator("business_name", "contact_name")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("contact_email")
    @classmethod
    def _email(cls, value: str) -> str:
        value = value.lower()
        if not _EMAIL_RE.match(value):
            raise ValueError("must be a valid email address")
        return value

    @field_validator("contact_phone", "loan_amount", "business_type", "notes")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class ReferralLeadUpdate(BaseModel):
    """Admin status change."""

    status: LeadStatus


class ReferralLeadResponse(BaseModel):
    """Single lead."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    referral_user_id: str
    business_name: str
    contact_name: str
    contact_email: str
    contact_phone: str | None = None
    loan_amount: str | None = None
    business_type: str | None = None
    notes: str | None = None
    status: LeadStatus
    created_at: datetime
    updated_at: datetime


class ReferralLeadListResponse(BaseModel):
    """Leads plus a per-status tally for the referral dashboard."""

    data: list[ReferralLeadResponse]
    count: int
    status_counts: dict[str, int]
