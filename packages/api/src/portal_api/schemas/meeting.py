# This project was developed with assistance from AI tools.
"""Meeting request/response schemas."""

from datetime import date, datetime

from portal_db.enums import MeetingStatus, MeetingType
from pydantic import BaseModel, ConfigDict, Field, model_validator


class MeetingCreate(BaseModel):
    """Borrower request for a callback or an in-person meeting.

    Callbacks default to today and "ASAP"; in-person meetings need a date and time.
    """

    meeting_type: MeetingType
    meeting_date: date | None = None
    meeting_time: str | None = Field(default=None, max_length=50)
    purpose: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    phone_number: str | None = Field(default=None, max_length=50)

    @model_validator(mode="after")
    def _check_type_fields(self) -> "MeetingCreate":
        if self.meeting_type == MeetingType.IN_PERSON:
            if self.meeting_date is None or not self.meeting_time:
                raise ValueError("In-person meetings require meeting_date and meeting_time")
        elif not self.phone_number:
            raise ValueError("Callback requests require phone_number")
        return self


class MeetingUpdate(BaseModel):
    """Admin status change."""

    status: MeetingStatus


class MeetingResponse(BaseModel):
    """Single meeting."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    meeting_date: str
    meeting_time: str
    meeting_type: MeetingType
    purpose: str | None = None
    notes: str | None = None
    contact_info: str | None = None
    status: MeetingStatus
    created_at: datetime
    updated_at: datetime


class MeetingListResponse(BaseModel):
    """List of meetings."""

    data: list[MeetingResponse]
    count: int
