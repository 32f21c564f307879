# This project was developed with assistance from AI tools.
"""User profile schemas."""

from datetime import datetime

from portal_db.enums import ApplicationStatus, UserRole
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileResponse(BaseModel):
    """Portal profile of the caller."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: UserRole
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    company: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Fields a user may edit on their own profile. Role is not editable."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    company: str | None = Field(default=None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        # Omit the field to leave it unchanged; null would clear a required column.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class BorrowerSummary(BaseModel):
    """One row of the admin borrower overview."""

    user_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    document_count: int = 0
    application_id: int | None = None
    application_status: ApplicationStatus | None = None
    submitted_at: datetime | None = None


class BorrowerListResponse(BaseModel):
    """Admin borrower overview."""

    data: list[BorrowerSummary]
    count: int
