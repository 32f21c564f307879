# This project was developed with assistance from AI tools.
"""Progress projection response schemas."""

from portal_db.enums import ApplicationStatus, StepStatus
from pydantic import BaseModel


class ProgressStep(BaseModel):
    """One display step with its derived status."""

    id: str
    title: str
    description: str
    status: StepStatus


class ProgressResponse(BaseModel):
    """Ordered step list for an application. Recomputed on every request."""

    application_id: int
    status: ApplicationStatus
    stage: str | None = None
    steps: list[ProgressStep]
    current_step: str | None = None
    completion_percentage: int
