# This project was developed with assistance from AI tools.
"""Functional tests: Admin persona journey.

Admin works the submitted pipeline: reviews documents, moves applications
through review to approval and funding, and manages meetings and leads.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from portal_db.enums import ApplicationStatus, DocumentStatus, MeetingStatus, MeetingType

from .data_factory import make_application, make_document, submitted_pipeline
from .mock_db import make_insert_session, make_mock_session
from .personas import MARIA_USER_ID, admin, referral_partner

pytestmark = pytest.mark.functional


class TestPipeline:
    def test_list_submitted_applications(self, make_client):
        client = make_client(admin(), make_mock_session(items=submitted_pipeline()))

        resp = client.get("/api/applications/")

        assert resp.status_code == 200
        data = resp.json()
        assert data["pagination"]["total"] == 2
        assert data["data"][0]["available_actions"] == ["start_review", "approve", "decline"]

    def test_review_to_funding(self, make_client, _quiet_feed):
        app = make_application(status=ApplicationStatus.DOCUMENTS_PENDING)

        for action, expected in [
            ("start_review", ApplicationStatus.UNDER_REVIEW),
            ("approve", ApplicationStatus.APPROVED),
            ("fund", ApplicationStatus.FUNDED),
        ]:
            client = make_client(admin(), make_mock_session(single=app))
            resp = client.post("/api/applications/101/transitions", json={"action": action})
            assert resp.status_code == 200
            assert app.status == expected

        assert _quiet_feed.publish.call_count == 3
        assert resp.json()["application"]["available_actions"] == []

    def test_decline_is_final(self, make_client):
        app = make_application(status=ApplicationStatus.UNDER_REVIEW)

        declined = make_client(admin(), make_mock_session(single=app)).post(
            "/api/applications/101/transitions",
            json={"action": "decline", "notes": "Insufficient collateral"},
        )
        assert declined.status_code == 200
        assert app.status == ApplicationStatus.DECLINED

        approve = make_client(admin(), make_mock_session(single=app)).post(
            "/api/applications/101/transitions", json={"action": "approve"}
        )
        assert approve.status_code == 409
        assert app.status == ApplicationStatus.DECLINED

    def test_fund_before_approval_is_invalid(self, make_client):
        app = make_application(status=ApplicationStatus.UNDER_REVIEW)
        resp = make_client(admin(), make_mock_session(single=app)).post(
            "/api/applications/101/transitions", json={"action": "fund"}
        )
        assert resp.status_code == 409


class TestDocumentReview:
    def test_borrower_documents_with_preview_urls(self, make_upload_client):
        docs = [make_document(200, "Credit Report"), make_document(201, "Deal Summary")]
        client, storage = make_upload_client(admin(), make_mock_session(items=docs))

        resp = client.get(f"/api/borrowers/{MARIA_USER_ID}/documents")

        assert resp.status_code == 200
        assert all(d["signed_url"] == "https://minio.local/signed" for d in resp.json()["data"])

    def test_approve_twice_is_idempotent(self, make_client, _quiet_feed):
        doc = make_document(200, "Credit Report")

        first = make_client(admin(), make_mock_session(single=doc)).post(
            "/api/documents/200/review", json={"decision": "approve"}
        )
        second = make_client(admin(), make_mock_session(single=doc)).post(
            "/api/documents/200/review", json={"decision": "approve"}
        )

        assert first.json()["changed"] is True
        assert second.status_code == 200
        assert second.json()["changed"] is False
        assert doc.status == DocumentStatus.APPROVED
        assert _quiet_feed.publish.call_count == 1

    def test_reject_after_approve_conflicts(self, make_client):
        doc = make_document(200, "Credit Report", status=DocumentStatus.APPROVED)
        resp = make_client(admin(), make_mock_session(single=doc)).post(
            "/api/documents/200/review", json={"decision": "reject"}
        )
        assert resp.status_code == 409


class TestMeetingsAndLeads:
    def test_admin_sees_and_completes_meetings(self, make_client):
        meeting = MagicMock()
        meeting.id = 7
        meeting.user_id = MARIA_USER_ID
        meeting.meeting_date = "2026-03-10"
        meeting.meeting_time = "10:30"
        meeting.meeting_type = MeetingType.IN_PERSON
        meeting.purpose = None
        meeting.notes = None
        meeting.contact_info = ""
        meeting.status = MeetingStatus.SCHEDULED
        meeting.created_at = datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
        meeting.updated_at = meeting.created_at

        client = make_client(admin(), make_mock_session(items=[meeting]))
        assert client.get("/api/meetings/").json()["count"] == 1

        resp = client.patch("/api/meetings/7", json={"status": "completed"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "completed"

    def test_referral_lead_lifecycle(self, make_client):
        client = make_client(referral_partner(), make_insert_session(first_id=30))
        created = client.post(
            "/api/referrals/",
            json={
                "business_name": " Patel Hardware ",
                "contact_name": "Dev Patel",
                "contact_email": "Dev@PatelHardware.example",
                "loan_amount": "350000",
            },
        )
        assert created.status_code == 201
        assert created.json()["status"] == "new"
        assert created.json()["business_name"] == "Patel Hardware"

        forbidden = client.patch("/api/referrals/30", json={"status": "contacted"})
        assert forbidden.status_code == 403
