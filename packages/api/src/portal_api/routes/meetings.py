# This project was developed with assistance from AI tools.
"""Meeting request routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from portal_db import get_db
from portal_db.enums import MeetingStatus, UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.meeting import MeetingCreate, MeetingListResponse, MeetingResponse, MeetingUpdate
from ..services import meeting as meeting_service

router = APIRouter()


@router.post(
    "/",
    response_model=MeetingResponse,
    status_code=201,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def schedule_meeting(
    body: MeetingCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> MeetingResponse:
    """Request a callback or an in-person meeting."""
    meeting = await meeting_service.schedule_meeting(session, user, body)
    return MeetingResponse.model_validate(meeting)


@router.get(
    "/",
    response_model=MeetingListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.BORROWER))],
)
async def list_meetings(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    filter_status: MeetingStatus | None = None,
) -> MeetingListResponse:
    """Borrowers see their own requests; admins see all."""
    meetings = await meeting_service.list_meetings(session, user, filter_status=filter_status)
    items = [MeetingResponse.model_validate(m) for m in meetings]
    return MeetingListResponse(data=items, count=len(items))


@router.patch(
    "/{meeting_id}",
    response_model=MeetingResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_meeting(
    meeting_id: int,
    body: MeetingUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> MeetingResponse:
    """Mark a meeting completed or cancelled."""
    meeting = await meeting_service.update_meeting_status(session, user, meeting_id, body.status)
    if meeting is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meeting not found",
        )
    return MeetingResponse.model_validate(meeting)
