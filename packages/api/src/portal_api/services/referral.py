# This project was developed with assistance from AI tools.
"""Referral partner lead service."""

import logging

from portal_db import ReferralLead
from portal_db.enums import LeadStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.referral import ReferralLeadCreate
from .notifications import get_change_feed
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


def count_by_status(leads: list[ReferralLead]) -> dict[str, int]:
    """Tally leads per status. Every status is present, zero if unused."""
    counts = {status.value: 0 for status in LeadStatus}
    for lead in leads:
        counts[lead.status.value] += 1
    return counts


async def create_lead(
    session: AsyncSession,
    user: UserContext,
    request: ReferralLeadCreate,
) -> ReferralLead:
    """Store a new lead owned by the calling referral partner."""
    lead = ReferralLead(
        referral_user_id=user.user_id,
        business_name=request.business_name,
        contact_name=request.contact_name,
        contact_email=request.contact_email,
        contact_phone=request.contact_phone,
        loan_amount=request.loan_amount,
        business_type=request.business_type,
        notes=request.notes,
        status=LeadStatus.NEW,
    )
    session.add(lead)
    await session.commit()
    await session.refresh(lead)

    logger.info("Referral lead %s created by %s", lead.id, user.user_id)
    get_change_feed().publish(
        "referral.created",
        {
            "lead_id": lead.id,
            "referral_user_id": lead.referral_user_id,
            "business_name": lead.business_name,
            "status": lead.status.value,
        },
    )
    return lead


async def list_leads(
    session: AsyncSession,
    user: UserContext,
    *,
    filter_status: LeadStatus | None = None,
) -> list[ReferralLead]:
    """Return the caller's leads (all leads for admins), newest first."""
    stmt = select(ReferralLead).order_by(ReferralLead.created_at.desc())
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=ReferralLead.referral_user_id)
    if filter_status is not None:
        stmt = stmt.where(ReferralLead.status == filter_status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def update_lead_status(
    session: AsyncSession,
    user: UserContext,
    lead_id: int,
    status: LeadStatus,
) -> ReferralLead | None:
    """Set a lead's status. Returns None if not found or not accessible."""
    stmt = select(ReferralLead).where(ReferralLead.id == lead_id)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=ReferralLead.referral_user_id)
    result = await session.execute(stmt)
    lead = result.scalar_one_or_none()
    if lead is None:
        return None

    previous = lead.status
    lead.status = status
    await session.commit()
    await session.refresh(lead)

    logger.info("Referral lead %s: %s -> %s", lead_id, previous.value, status.value)
    get_change_feed().publish(
        "referral.updated",
        {"lead_id": lead.id, "referral_user_id": lead.referral_user_id, "status": status.value},
    )
    return lead
