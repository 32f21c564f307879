# This project was developed with assistance from AI tools.
"""Application service with role-based data scope filtering.

Every query is filtered through the caller's DataScope so that borrowers
see only their own application and admins see all. Status changes go
through ``services.lifecycle``; nothing here writes ``status``.
"""

import logging

from portal_db import Application
from portal_db.enums import ApplicationStatus
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


async def list_applications(
    session: AsyncSession,
    user: UserContext,
    *,
    offset: int = 0,
    limit: int = 20,
    filter_status: ApplicationStatus | None = None,
) -> tuple[list[Application], int]:
    """Return submitted applications visible to the caller, newest submission first.

    Draft applications (never submitted) are not part of the review queue.
    """
    count_stmt = select(func.count(Application.id)).where(Application.submitted_at.is_not(None))
    count_stmt = apply_data_scope(count_stmt, user.data_scope, user, owner_column=Application.user_id)
    if filter_status is not None:
        count_stmt = count_stmt.where(Application.status == filter_status)
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        select(Application)
        .where(Application.submitted_at.is_not(None))
        .order_by(Application.submitted_at.desc())
        .offset(offset)
        .limit(limit)
    )
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Application.user_id)
    if filter_status is not None:
        stmt = stmt.where(Application.status == filter_status)
    result = await session.execute(stmt)
    return list(result.scalars().all()), total


async def get_application(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
) -> Application | None:
    """Return a single application if visible to the current user.

    Returns None (which the route maps to 404) for out-of-scope applications
    rather than 403, to avoid leaking existence of resources.
    """
    stmt = select(Application).where(Application.id == application_id)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Application.user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_or_create_application(
    session: AsyncSession,
    user: UserContext,
) -> Application:
    """Return the caller's application, creating a ``started`` draft on first read."""
    stmt = (
        select(Application)
        .where(Application.user_id == user.user_id)
        .order_by(Application.created_at.asc())
        .limit(1)
    )
    result = await session.execute(stmt)
    application = result.scalar_one_or_none()
    if application is not None:
        return application

    application = Application(user_id=user.user_id, status=ApplicationStatus.STARTED)
    session.add(application)
    await session.commit()
    await session.refresh(application)
    logger.info("Created draft application %s for user %s", application.id, user.user_id)
    return application


async def update_application_details(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    *,
    stage: str | None = None,
    notes: str | None = None,
) -> Application | None:
    """Update the free-form stage label and notes.

    Stage is a secondary label and is not validated against status.
    Returns None if the application is not found or not accessible.
    """
    app = await get_application(session, user, application_id)
    if app is None:
        return None

    if stage is not None:
        app.stage = stage
    if notes is not None:
        app.notes = notes

    await session.commit()
    await session.refresh(app)
    return app
