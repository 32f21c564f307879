# This project was developed with assistance from AI tools.
"""User profile service.

Profiles mirror the auth provider identity. A profile is created the first
time a user calls ``/api/me``; the role always comes from the token.
"""

import logging

from portal_db import Application, Document, UserProfile
from portal_db.enums import UserRole
from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.profile import BorrowerSummary, ProfileUpdate

logger = logging.getLogger(__name__)


def _split_name(name: str) -> tuple[str, str]:
    parts = name.split() if name else []
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


async def ensure_profile(session: AsyncSession, user: UserContext) -> UserProfile:
    """Return the caller's profile, creating it from the token on first use."""
    result = await session.execute(select(UserProfile).where(UserProfile.user_id == user.user_id))
    profile = result.scalar_one_or_none()
    if profile is not None:
        if profile.role != user.role:
            profile.role = user.role
            await session.commit()
            await session.refresh(profile)
        return profile

    first, last = _split_name(user.name)
    profile = UserProfile(
        user_id=user.user_id,
        role=user.role,
        first_name=first,
        last_name=last,
        email=user.email,
    )
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    logger.info("Created profile for %s (%s)", user.user_id, user.role.value)
    return profile


async def update_profile(
    session: AsyncSession,
    user: UserContext,
    update: ProfileUpdate,
) -> UserProfile:
    """Apply the provided fields to the caller's profile."""
    profile = await ensure_profile(session, user)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    await session.commit()
    await session.refresh(profile)
    return profile


async def list_borrowers(session: AsyncSession) -> list[BorrowerSummary]:
    """Admin overview: every borrower with document count and application state."""
    doc_counts = (
        select(Document.user_id, func.count(Document.id).label("document_count"))
        .group_by(Document.user_id)
        .subquery()
    )
    # The borrower's earliest application, the one get_or_create_application returns
    first_app = select(
        Application.id,
        Application.user_id,
        func.row_number()
        .over(
            partition_by=Application.user_id,
            order_by=(Application.created_at.asc(), Application.id.asc()),
        )
        .label("rn"),
    ).subquery()
    stmt = (
        select(UserProfile, Application, doc_counts.c.document_count)
        .outerjoin(
            first_app,
            and_(first_app.c.user_id == UserProfile.user_id, first_app.c.rn == 1),
        )
        .outerjoin(Application, Application.id == first_app.c.id)
        .outerjoin(doc_counts, doc_counts.c.user_id == UserProfile.user_id)
        .where(UserProfile.role == UserRole.BORROWER)
        .order_by(UserProfile.created_at.desc())
    )
    result = await session.execute(stmt)

    summaries = []
    for profile, app, document_count in result.all():
        summaries.append(
            BorrowerSummary(
                user_id=profile.user_id,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                phone=profile.phone,
                document_count=document_count or 0,
                application_id=app.id if app else None,
                application_status=app.status if app else None,
                submitted_at=app.submitted_at if app else None,
            )
        )
    return summaries
