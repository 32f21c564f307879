# This project was developed with assistance from AI tools.
"""Progress projection.

Derives the borrower-facing step list (forms -> documents -> review ->
underwriting -> approval -> funding) from the application and its document
count. Nothing here is stored; every call recomputes from current state.
"""

import logging

from portal_db import Application
from portal_db.enums import ApplicationStatus, StepStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.auth import UserContext
from ..schemas.progress import ProgressResponse, ProgressStep
from .application import get_application
from .completeness import load_owner_documents

logger = logging.getLogger(__name__)

# (id, title, description) in display order
STEPS: list[tuple[str, str, str]] = [
    ("application", "Application Forms", "Complete all required loan application forms"),
    ("documents", "Document Upload", "Upload all required supporting documents"),
    ("review", "Initial Review", "Our team reviews your application and documents"),
    ("underwriting", "Underwriting", "Detailed analysis and verification process"),
    ("approval", "Final Approval", "Loan approval and closing preparation"),
    ("funding", "Funding", "Loan funds disbursed to your account"),
]

_DECIDED = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.FUNDED})
_UNDERWRITING_DONE_STAGES = frozenset({"closing", "funded", "complete"})


def _forms_status(app: Application, document_count: int) -> StepStatus:
    if document_count > 0 or app.submitted_at is not None:
        return StepStatus.COMPLETED
    return StepStatus.PENDING


def _documents_status(document_count: int, minimum_count: int) -> StepStatus:
    if document_count == 0:
        return StepStatus.PENDING
    if document_count < minimum_count:
        return StepStatus.IN_PROGRESS
    return StepStatus.COMPLETED


def _review_status(app: Application) -> StepStatus:
    if app.status == ApplicationStatus.UNDER_REVIEW:
        return StepStatus.IN_PROGRESS
    if app.status in _DECIDED:
        return StepStatus.COMPLETED
    return StepStatus.PENDING


def _underwriting_status(app: Application) -> StepStatus:
    stage = (app.stage or "").lower()
    if app.status in _DECIDED or stage in _UNDERWRITING_DONE_STAGES:
        return StepStatus.COMPLETED
    if stage == "underwriting":
        return StepStatus.IN_PROGRESS
    return StepStatus.PENDING


def project_progress(
    app: Application,
    document_count: int,
    minimum_count: int,
) -> ProgressResponse:
    """Project an application and its document count onto the display steps."""
    statuses = {
        "application": _forms_status(app, document_count),
        "documents": _documents_status(document_count, minimum_count),
        "review": _review_status(app),
        "underwriting": _underwriting_status(app),
        "approval": StepStatus.COMPLETED if app.status in _DECIDED else StepStatus.PENDING,
        "funding": (
            StepStatus.COMPLETED
            if app.status == ApplicationStatus.FUNDED
            else StepStatus.PENDING
        ),
    }
    steps = [
        ProgressStep(id=step_id, title=title, description=description, status=statuses[step_id])
        for step_id, title, description in STEPS
    ]
    completed = sum(1 for s in steps if s.status == StepStatus.COMPLETED)
    current = next((s.id for s in steps if s.status != StepStatus.COMPLETED), None)

    return ProgressResponse(
        application_id=app.id,
        status=app.status,
        stage=app.stage,
        steps=steps,
        current_step=current,
        completion_percentage=round(completed * 100 / len(steps)),
    )


async def get_progress(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> ProgressResponse | None:
    """Load an application and project its progress.

    Returns None if the application is not found or not accessible.
    """
    app = await get_application(session, user, application_id)
    if app is None:
        return None
    documents = await load_owner_documents(session, user, app.user_id)
    return project_progress(app, len(documents), settings.MINIMUM_DOCUMENT_COUNT)
