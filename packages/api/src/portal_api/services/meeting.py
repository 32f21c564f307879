# This project was developed with assistance from AI tools.
"""Meeting request service.

Borrowers request callbacks or in-person meetings; admins work the list and
update status. Every create/update is pushed on the change feed.
"""

import logging
from datetime import UTC, datetime

from portal_db import Meeting
from portal_db.enums import MeetingStatus, MeetingType
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.meeting import MeetingCreate
from .notifications import get_change_feed
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


def _event_payload(meeting: Meeting) -> dict:
    return {
        "meeting_id": meeting.id,
        "user_id": meeting.user_id,
        "meeting_type": meeting.meeting_type.value,
        "meeting_date": meeting.meeting_date,
        "meeting_time": meeting.meeting_time,
        "status": meeting.status.value,
    }


async def schedule_meeting(
    session: AsyncSession,
    user: UserContext,
    request: MeetingCreate,
) -> Meeting:
    """Record a meeting request for the calling borrower."""
    if request.meeting_type == MeetingType.CALLBACK:
        preferred = request.meeting_time or "ASAP"
        meeting_date = (request.meeting_date or datetime.now(UTC).date()).isoformat()
        notes = "\n".join(
            line
            for line in (
                request.notes,
                f"Phone: {request.phone_number}",
                f"Preferred Time: {preferred}",
            )
            if line
        )
        contact_info = request.phone_number
    else:
        preferred = request.meeting_time
        meeting_date = request.meeting_date.isoformat()
        notes = request.notes
        contact_info = request.phone_number or ""

    meeting = Meeting(
        user_id=user.user_id,
        meeting_date=meeting_date,
        meeting_time=preferred,
        meeting_type=request.meeting_type,
        purpose=request.purpose,
        notes=notes,
        contact_info=contact_info,
        status=MeetingStatus.SCHEDULED,
    )
    session.add(meeting)
    await session.commit()
    await session.refresh(meeting)

    logger.info("Meeting %s (%s) scheduled by %s", meeting.id, meeting.meeting_type.value, user.user_id)
    get_change_feed().publish("meeting.created", _event_payload(meeting))
    return meeting


async def list_meetings(
    session: AsyncSession,
    user: UserContext,
    *,
    filter_status: MeetingStatus | None = None,
    limit: int = 100,
) -> list[Meeting]:
    """Return meetings visible to the caller, newest first."""
    stmt = select(Meeting).order_by(Meeting.created_at.desc()).limit(limit)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Meeting.user_id)
    if filter_status is not None:
        stmt = stmt.where(Meeting.status == filter_status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def update_meeting_status(
    session: AsyncSession,
    user: UserContext,
    meeting_id: int,
    status: MeetingStatus,
) -> Meeting | None:
    """Set a meeting's status. Returns None if not found or not accessible."""
    stmt = select(Meeting).where(Meeting.id == meeting_id)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Meeting.user_id)
    result = await session.execute(stmt)
    meeting = result.scalar_one_or_none()
    if meeting is None:
        return None

    meeting.status = status
    await session.commit()
    await session.refresh(meeting)

    get_change_feed().publish("meeting.updated", _event_payload(meeting))
    return meeting
