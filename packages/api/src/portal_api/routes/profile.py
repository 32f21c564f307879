# This project was developed with assistance from AI tools.
"""Current-user profile routes."""

from fastapi import APIRouter, Depends
from portal_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.profile import ProfileResponse, ProfileUpdate
from ..services import profile as profile_service

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Return the caller's profile, creating it on first visit."""
    profile = await profile_service.ensure_profile(session, user)
    return ProfileResponse.model_validate(profile)


@router.patch("/me", response_model=ProfileResponse)
async def update_me(
    body: ProfileUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Update the caller's name, phone or company."""
    profile = await profile_service.update_profile(session, user, body)
    return ProfileResponse.model_validate(profile)
