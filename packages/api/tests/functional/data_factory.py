# This project was developed with assistance from AI tools.
"""Mock ORM objects for functional flows.

Objects are plain MagicMocks with the attributes the routes serialize, so a
single object can be carried across several requests and observed changing.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

from portal_db.enums import ApplicationStatus, DocumentStatus

from portal_api.core.config import DEFAULT_REQUIRED_DOCUMENT_CATEGORIES

from .personas import DEV_USER_ID, MARIA_USER_ID

_CREATED = datetime(2026, 2, 20, 9, 0, tzinfo=UTC)


def make_application(app_id=101, user_id=MARIA_USER_ID, status=ApplicationStatus.STARTED):
    app = MagicMock()
    app.id = app_id
    app.user_id = user_id
    app.status = status
    app.stage = None
    app.submitted_at = None if status == ApplicationStatus.STARTED else _CREATED
    app.notes = None
    app.folder_name = None
    app.document_count = None
    app.submission_data = None
    app.created_at = _CREATED
    app.updated_at = _CREATED
    return app


def make_document(doc_id, doc_name, user_id=MARIA_USER_ID, status=DocumentStatus.UPLOADED):
    doc = MagicMock()
    doc.id = doc_id
    doc.user_id = user_id
    doc.doc_name = doc_name
    doc.file_name = f"{doc_name.split()[0].lower()}.pdf"
    doc.file_path = f"{user_id}/1767225600000_{doc.file_name}"
    doc.content_type = "application/pdf"
    doc.status = status
    doc.reviewed_by = None
    doc.reviewed_at = None
    doc.uploaded_at = _CREATED
    return doc


def maria_checklist(n: int = 5) -> list:
    """Maria's uploads: one document in each of the first ``n`` required categories."""
    return [
        make_document(200 + i, category)
        for i, category in enumerate(DEFAULT_REQUIRED_DOCUMENT_CATEGORIES[:n])
    ]


def submitted_pipeline() -> list:
    return [
        make_application(101, MARIA_USER_ID, ApplicationStatus.DOCUMENTS_PENDING),
        make_application(102, DEV_USER_ID, ApplicationStatus.UNDER_REVIEW),
    ]
