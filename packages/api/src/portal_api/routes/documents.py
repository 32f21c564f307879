# This project was developed with assistance from AI tools.
"""Document routes: checklist, upload, listing, deletion and admin review."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from portal_db import get_db
from portal_db.enums import UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.completeness import CompletenessResponse
from ..schemas.document import (
    AdminDocumentListResponse,
    AdminDocumentResponse,
    DocumentCategoriesResponse,
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentReviewOutcome,
    DocumentReviewRequest,
)
from ..services import document as doc_service
from ..services.completeness import check_completeness
from ..services.document import DocumentStorageError, DocumentTooLargeError, DocumentUploadError
from ._errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter()

_ALL_PORTAL = (UserRole.ADMIN, UserRole.BORROWER)


@router.get(
    "/documents/categories",
    response_model=DocumentCategoriesResponse,
    dependencies=[Depends(require_roles(*_ALL_PORTAL))],
)
async def get_categories() -> DocumentCategoriesResponse:
    """Upload catalog, submission checklist and upload limits."""
    return DocumentCategoriesResponse(
        categories=settings.DOCUMENT_CATEGORIES,
        required_categories=settings.REQUIRED_DOCUMENT_CATEGORIES,
        minimum_count=settings.MINIMUM_DOCUMENT_COUNT,
        max_upload_size_mb=settings.UPLOAD_MAX_SIZE_MB,
        allowed_content_types=sorted(doc_service.ALLOWED_CONTENT_TYPES),
    )


@router.get(
    "/documents/completeness",
    response_model=CompletenessResponse,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def get_my_completeness(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CompletenessResponse:
    """Checklist status of the caller's documents."""
    return await check_completeness(session, user)


@router.get(
    "/borrowers/{user_id}/completeness",
    response_model=CompletenessResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def get_borrower_completeness(
    user_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CompletenessResponse:
    """Checklist status of a borrower's documents."""
    return await check_completeness(session, user, user_id)


@router.post(
    "/documents",
    response_model=DocumentDetailResponse,
    status_code=201,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def upload_document(
    user: CurrentUser,
    file: UploadFile = File(...),
    doc_name: str = Form(...),
    session: AsyncSession = Depends(get_db),
) -> DocumentDetailResponse:
    """Upload a file into a checklist category."""
    file_data = await file.read()

    try:
        doc = await doc_service.upload_document(
            session=session,
            user=user,
            doc_name=doc_name,
            filename=file.filename or "document",
            content_type=file.content_type or "",
            file_data=file_data,
        )
    except DocumentTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except DocumentUploadError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except DocumentStorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    return DocumentDetailResponse.model_validate(doc)


@router.get(
    "/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def list_my_documents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> DocumentListResponse:
    """The caller's documents, newest first."""
    documents, total = await doc_service.list_documents(session, user, offset=offset, limit=limit)
    items = [DocumentResponse.model_validate(doc) for doc in documents]
    return DocumentListResponse(data=items, count=total)


@router.delete(
    "/documents/{document_id}",
    status_code=204,
    dependencies=[Depends(require_roles(UserRole.BORROWER))],
)
async def delete_document(
    document_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> None:
    """Delete a document's file and metadata."""
    try:
        deleted = await doc_service.delete_document(session, user, document_id)
    except DocumentStorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )


@router.get(
    "/borrowers/{user_id}/documents",
    response_model=AdminDocumentListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_borrower_documents(
    user_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AdminDocumentListResponse:
    """A borrower's documents with signed preview URLs."""
    documents, total = await doc_service.list_documents(session, user, user_id)
    items = []
    for doc in documents:
        detail = DocumentDetailResponse.model_validate(doc)
        items.append(
            AdminDocumentResponse(
                **detail.model_dump(),
                signed_url=await doc_service.get_preview_url(doc),
            )
        )
    return AdminDocumentListResponse(data=items, count=total)


@router.post(
    "/documents/{document_id}/review",
    response_model=DocumentReviewOutcome,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def review_document(
    document_id: int,
    body: DocumentReviewRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentReviewOutcome:
    """Approve or reject a document."""
    outcome = await doc_service.review_document(session, user, document_id, body.decision)
    if not outcome.ok:
        raise http_error(outcome.error)
    return outcome
