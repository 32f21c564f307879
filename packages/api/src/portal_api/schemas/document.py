# This project was developed with assistance from AI tools.
"""Document request/response schemas."""

from datetime import datetime

from portal_db.enums import DocumentDecision, DocumentStatus
from pydantic import BaseModel, ConfigDict

from .error import ErrorDetail


class DocumentResponse(BaseModel):
    """Document metadata response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    doc_name: str
    file_name: str
    content_type: str | None = None
    status: DocumentStatus
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    uploaded_at: datetime


class DocumentDetailResponse(DocumentResponse):
    """Full document response including the storage key."""

    file_path: str


class AdminDocumentResponse(DocumentDetailResponse):
    """Document as shown in the admin review queue, with a time-limited preview URL."""

    signed_url: str | None = None


class DocumentListResponse(BaseModel):
    """Paginated list of documents."""

    data: list[DocumentResponse]
    count: int


class AdminDocumentListResponse(BaseModel):
    """A borrower's documents for admin review."""

    data: list[AdminDocumentResponse]
    count: int


class DocumentReviewRequest(BaseModel):
    """Admin approve/reject decision."""

    decision: DocumentDecision


class DocumentReviewOutcome(BaseModel):
    """Result of a review decision. ``changed`` is False for a repeated decision."""

    ok: bool
    changed: bool = False
    document: DocumentResponse | None = None
    error: ErrorDetail | None = None


class DocumentCategoriesResponse(BaseModel):
    """The upload catalog and the submission checklist."""

    categories: list[str]
    required_categories: list[str]
    minimum_count: int
    max_upload_size_mb: int
    allowed_content_types: list[str]
