# This project was developed with assistance from AI tools.
"""Referral partner lead routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from portal_db import get_db
from portal_db.enums import LeadStatus, UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.referral import (
    ReferralLeadCreate,
    ReferralLeadListResponse,
    ReferralLeadResponse,
    ReferralLeadUpdate,
)
from ..services import referral as referral_service

router = APIRouter()


@router.post(
    "/",
    response_model=ReferralLeadResponse,
    status_code=201,
    dependencies=[Depends(require_roles(UserRole.REFERRAL))],
)
async def create_lead(
    body: ReferralLeadCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ReferralLeadResponse:
    """Submit a new business lead."""
    lead = await referral_service.create_lead(session, user, body)
    return ReferralLeadResponse.model_validate(lead)


@router.get(
    "/",
    response_model=ReferralLeadListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.REFERRAL))],
)
async def list_leads(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    filter_status: LeadStatus | None = None,
) -> ReferralLeadListResponse:
    """Referral partners see their own leads; admins see all."""
    leads = await referral_service.list_leads(session, user, filter_status=filter_status)
    return ReferralLeadListResponse(
        data=[ReferralLeadResponse.model_validate(lead) for lead in leads],
        count=len(leads),
        status_counts=referral_service.count_by_status(leads),
    )


@router.patch(
    "/{lead_id}",
    response_model=ReferralLeadResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_lead(
    lead_id: int,
    body: ReferralLeadUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ReferralLeadResponse:
    """Move a lead through new -> contacted -> ... -> funded or declined."""
    lead = await referral_service.update_lead_status(session, user, lead_id, body.status)
    if lead is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Referral lead not found",
        )
    return ReferralLeadResponse.model_validate(lead)
