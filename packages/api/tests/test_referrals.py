# This project was developed with assistance from AI tools.
"""Tests for referral partner leads."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from portal_db import get_db
from portal_db.enums import LeadStatus, UserRole
from pydantic import ValidationError

from portal_api.middleware.auth import get_current_user
from portal_api.routes.referrals import router
from portal_api.schemas.referral import ReferralLeadCreate
from portal_api.services.referral import count_by_status, create_lead

from .factories import make_admin, make_mock_lead, make_user, scalars_result, single_result

_NOW = datetime(2026, 3, 2, 15, 30, tzinfo=UTC)


def _referral():
    return make_user(UserRole.REFERRAL, user_id="referral-1", email="partner@cpa.example", name="Pat Partner")


def _session(*results) -> AsyncMock:
    session = AsyncMock()
    session.execute = AsyncMock(side_effect=list(results))

    def track_add(obj):
        obj.id = 3
        obj.created_at = _NOW
        obj.updated_at = _NOW

    session.add = MagicMock(side_effect=track_add)
    return session


def _client(user, session) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api/referrals")

    async def fake_user():
        return user

    async def fake_db():
        yield session

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    return TestClient(app)


def test_lead_fields_are_trimmed_and_email_lowercased():
    lead = ReferralLeadCreate(
        business_name="  Blue Ridge Bakery ",
        contact_name=" Sam Ortiz",
        contact_email=" Sam@BlueRidge.Example ",
        loan_amount="  ",
    )
    assert lead.business_name == "Blue Ridge Bakery"
    assert lead.contact_email == "sam@blueridge.example"
    assert lead.loan_amount is None


@pytest.mark.parametrize("email", ["not-an-email", "sam@", "@blueridge.example"])
def test_lead_rejects_bad_email(email):
    with pytest.raises(ValidationError):
        ReferralLeadCreate(business_name="Bakery", contact_name="Sam", contact_email=email)


def test_lead_rejects_blank_business_name():
    with pytest.raises(ValidationError):
        ReferralLeadCreate(business_name="   ", contact_name="Sam", contact_email="sam@x.example")


@patch("portal_api.services.referral.get_change_feed")
async def test_create_lead_is_new_and_owned(mock_feed):
    request = ReferralLeadCreate(
        business_name="Blue Ridge Bakery", contact_name="Sam Ortiz", contact_email="sam@blueridge.example"
    )

    lead = await create_lead(_session(), _referral(), request)

    assert lead.referral_user_id == "referral-1"
    assert lead.status == LeadStatus.NEW
    assert mock_feed.return_value.publish.call_args.args[0] == "referral.created"


def test_count_by_status_includes_every_status():
    leads = [
        make_mock_lead(id=1, status=LeadStatus.NEW),
        make_mock_lead(id=2, status=LeadStatus.NEW),
        make_mock_lead(id=3, status=LeadStatus.FUNDED),
    ]
    counts = count_by_status(leads)

    assert counts["new"] == 2
    assert counts["funded"] == 1
    assert counts["declined"] == 0
    assert set(counts) == {s.value for s in LeadStatus}


def test_referral_lists_own_leads_with_counts():
    leads = [make_mock_lead(id=1), make_mock_lead(id=2, status=LeadStatus.CONTACTED)]

    resp = _client(_referral(), _session(scalars_result(leads))).get("/api/referrals/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["status_counts"]["contacted"] == 1


def test_borrower_cannot_submit_leads():
    resp = _client(make_user(), _session()).post(
        "/api/referrals/",
        json={"business_name": "Bakery", "contact_name": "Sam", "contact_email": "sam@x.example"},
    )
    assert resp.status_code == 403


@patch("portal_api.services.referral.get_change_feed")
def test_admin_moves_lead_status(mock_feed):
    lead = make_mock_lead()
    resp = _client(make_admin(), _session(single_result(lead))).patch(
        "/api/referrals/3", json={"status": "in_review"}
    )

    assert resp.status_code == 200
    assert lead.status == LeadStatus.IN_REVIEW


def test_referral_cannot_update_status():
    resp = _client(_referral(), _session()).patch("/api/referrals/3", json={"status": "funded"})
    assert resp.status_code == 403
