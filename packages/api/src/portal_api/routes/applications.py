# This project was developed with assistance from AI tools.
"""Application routes: read, admin detail edits, lifecycle transitions, progress."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from portal_db import get_db
from portal_db.enums import ApplicationStatus, UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas import Pagination
from ..schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    TransitionOutcome,
    TransitionRequest,
)
from ..schemas.progress import ProgressResponse
from ..services import application as app_service
from ..services.lifecycle import build_application_response, transition_application
from ..services.progress import get_progress
from ._errors import http_error

router = APIRouter()

_ALL_PORTAL = (UserRole.ADMIN, UserRole.BORROWER)


@router.get(
    "/",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_applications(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    filter_status: ApplicationStatus | None = None,
) -> ApplicationListResponse:
    """Submitted applications, newest submission first."""
    applications, total = await app_service.list_applications(
        session,
        user,
        offset=offset,
        limit=limit,
        filter_status=filter_status,
    )
    items = [build_application_response(app, user.role) for app in applications]
    return ApplicationListResponse(
        data=items,
        pagination=Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=(offset + limit < total),
        ),
    )


@router.get(
    "/me",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def get_my_application(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """The caller's application; a draft is created on first visit."""
    app = await app_service.get_or_create_application(session, user)
    return build_application_response(app, user.role)


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(*_ALL_PORTAL))],
)
async def get_application(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Get a single application by ID."""
    app = await app_service.get_application(session, user, application_id)
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return build_application_response(app, user.role)


@router.patch(
    "/{application_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_application(
    application_id: int,
    body: ApplicationUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Edit the stage label and notes. Status moves only through transitions."""
    app = await app_service.update_application_details(
        session,
        user,
        application_id,
        stage=body.stage,
        notes=body.notes,
    )
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return build_application_response(app, user.role)


@router.post(
    "/{application_id}/transitions",
    response_model=TransitionOutcome,
    dependencies=[Depends(require_roles(*_ALL_PORTAL))],
)
async def apply_transition(
    application_id: int,
    body: TransitionRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> TransitionOutcome:
    """Submit, start review, approve, decline or fund an application."""
    outcome = await transition_application(
        session,
        user,
        application_id,
        body.action,
        notes=body.notes,
    )
    if not outcome.ok:
        raise http_error(outcome.error)
    return outcome


@router.get(
    "/{application_id}/progress",
    response_model=ProgressResponse,
    dependencies=[Depends(require_roles(*_ALL_PORTAL))],
)
async def get_application_progress(
    application_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ProgressResponse:
    """Borrower-facing step list derived from current state."""
    progress = await get_progress(session, user, application_id)
    if progress is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return progress
