# This project was developed with assistance from AI tools.
"""Shared test factory functions for creating mock objects.

Extracts common mock creation patterns from test files to eliminate duplication
and ensure consistency across test suites.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

from portal_db.enums import (
    ApplicationStatus,
    DocumentStatus,
    LeadStatus,
    MeetingStatus,
    MeetingType,
    UserRole,
)

from portal_api.core.auth import build_data_scope
from portal_api.schemas.auth import UserContext

_NOW = datetime(2026, 3, 2, 15, 30, tzinfo=UTC)


def make_user(
    role: UserRole = UserRole.BORROWER,
    user_id: str = "borrower-1",
    email: str = "jane.doe@example.com",
    name: str = "Jane Doe",
) -> UserContext:
    """Build a UserContext with the data scope the auth middleware would assign."""
    return UserContext(
        user_id=user_id,
        role=role,
        email=email,
        name=name,
        data_scope=build_data_scope(role, user_id),
    )


def make_admin(user_id: str = "admin-1") -> UserContext:
    return make_user(UserRole.ADMIN, user_id=user_id, email="ops@sba-portal.example", name="Ops Admin")


def make_mock_application(
    id=10,
    user_id="borrower-1",
    status=ApplicationStatus.STARTED,
    stage=None,
    submitted_at=None,
    document_count=None,
):
    """Create a mock Application ORM object.

    Args:
        id: Application ID.
        user_id: Owning borrower's auth subject.
        status: Lifecycle status.
        stage: Free-form stage label.
        submitted_at: Submission timestamp, None for drafts.
        document_count: Documents recorded at submission.

    Returns:
        MagicMock configured as an Application model instance.
    """
    app = MagicMock()
    app.id = id
    app.user_id = user_id
    app.status = status
    app.stage = stage
    app.submitted_at = submitted_at
    app.notes = None
    app.folder_name = None
    app.document_count = document_count
    app.submission_data = None
    app.created_at = _NOW
    app.updated_at = _NOW
    return app


def make_mock_document(
    id=1,
    doc_name="Credit Report",
    user_id="borrower-1",
    status=DocumentStatus.UPLOADED,
    file_name="report.pdf",
    content_type="application/pdf",
):
    """Create a mock Document ORM object."""
    doc = MagicMock()
    doc.id = id
    doc.user_id = user_id
    doc.doc_name = doc_name
    doc.file_name = file_name
    doc.file_path = f"{user_id}/1767225600000_{file_name}"
    doc.content_type = content_type
    doc.status = status
    doc.reviewed_by = None
    doc.reviewed_at = None
    doc.uploaded_at = _NOW
    return doc


def make_documents(categories, user_id="borrower-1", start_id=1):
    """One mock document per category, with sequential IDs."""
    return [
        make_mock_document(id=start_id + i, doc_name=category, user_id=user_id)
        for i, category in enumerate(categories)
    ]


def make_mock_meeting(
    id=7,
    user_id="borrower-1",
    meeting_type=MeetingType.CALLBACK,
    status=MeetingStatus.SCHEDULED,
):
    m = MagicMock()
    m.id = id
    m.user_id = user_id
    m.meeting_date = "2026-03-02"
    m.meeting_time = "ASAP"
    m.meeting_type = meeting_type
    m.purpose = "Discuss SBA 7(a) options"
    m.notes = None
    m.contact_info = "555-0100"
    m.status = status
    m.created_at = _NOW
    m.updated_at = _NOW
    return m


def make_mock_lead(
    id=3,
    referral_user_id="referral-1",
    status=LeadStatus.NEW,
    business_name="Blue Ridge Bakery",
):
    lead = MagicMock()
    lead.id = id
    lead.referral_user_id = referral_user_id
    lead.business_name = business_name
    lead.contact_name = "Sam Ortiz"
    lead.contact_email = "sam@blueridge.example"
    lead.contact_phone = None
    lead.loan_amount = "250000"
    lead.business_type = "Food service"
    lead.notes = None
    lead.status = status
    lead.created_at = _NOW
    lead.updated_at = _NOW
    return lead


def scalars_result(items):
    """Mock execute() result for ``.scalars().all()`` list queries."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(items)
    return result


def single_result(item):
    """Mock execute() result for ``.scalar_one_or_none()`` lookups."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = item
    return result


def count_result(count):
    """Mock execute() result for ``.scalar()`` count queries."""
    result = MagicMock()
    result.scalar.return_value = count
    return result
