# This project was developed with assistance from AI tools.
"""Application request/response schemas."""

from datetime import datetime

from portal_db.enums import ApplicationAction, ApplicationStatus
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination
from .error import ErrorDetail


class ApplicationResponse(BaseModel):
    """Single application response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    status: ApplicationStatus
    stage: str | None = None
    submitted_at: datetime | None = None
    notes: str | None = None
    folder_name: str | None = None
    document_count: int | None = None
    created_at: datetime
    updated_at: datetime
    available_actions: list[ApplicationAction] = []


class ApplicationListResponse(BaseModel):
    """Paginated list of submitted applications."""

    data: list[ApplicationResponse]
    pagination: Pagination


class ApplicationUpdate(BaseModel):
    """Admin edit of the free-form stage label and notes. Status is not editable here."""

    stage: str | None = Field(default=None, max_length=100)
    notes: str | None = None


class TransitionRequest(BaseModel):
    """Request to move an application through its lifecycle."""

    action: ApplicationAction
    notes: str | None = None


class TransitionOutcome(BaseModel):
    """Result of a lifecycle transition attempt.

    ``ok`` is False with ``error`` set when the transition was refused; the
    application is then returned unchanged (when it exists).
    """

    ok: bool
    action: ApplicationAction
    previous_status: ApplicationStatus | None = None
    application: ApplicationResponse | None = None
    error: ErrorDetail | None = None
