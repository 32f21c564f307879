# This project was developed with assistance from AI tools.
"""Document service: upload, listing, deletion and admin review.

A document exists twice -- as an object in storage and as a metadata row --
and the two writes are separate operations. Upload writes the object first
and removes it again if the row cannot be saved. Delete removes the object
first and reports a ``StorageInconsistencyError`` if the row then cannot be
removed.
"""

import logging
import os
from datetime import UTC, datetime

from botocore.exceptions import BotoCoreError, ClientError
from portal_db import Document
from portal_db.enums import DocumentDecision, DocumentStatus
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import LifecycleError, RecordNotFoundError, StorageInconsistencyError
from ..schemas.auth import UserContext
from ..schemas.document import DocumentResponse, DocumentReviewOutcome
from .lifecycle import plan_document_review
from .notifications import get_change_feed
from .scope import apply_data_scope
from .storage import get_storage_service

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

_STORAGE_ERRORS = (ClientError, BotoCoreError)


class DocumentUploadError(Exception):
    """Raised when a document upload fails validation."""


class DocumentTooLargeError(DocumentUploadError):
    """Raised when an upload exceeds UPLOAD_MAX_SIZE_MB."""


class DocumentStorageError(Exception):
    """Raised when object storage rejects an operation before anything diverged."""


def validate_upload(doc_name: str, content_type: str, size: int) -> None:
    """Check category, content type and size. Raises DocumentUploadError."""
    if doc_name not in settings.DOCUMENT_CATEGORIES:
        raise DocumentUploadError(f"Unknown document category: {doc_name}")

    if content_type not in ALLOWED_CONTENT_TYPES:
        raise DocumentUploadError(
            f"Unsupported content type: {content_type}. "
            f"Allowed: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}"
        )

    max_bytes = settings.UPLOAD_MAX_SIZE_MB * 1024 * 1024
    if size > max_bytes:
        raise DocumentTooLargeError(
            f"File size {size} exceeds maximum of {settings.UPLOAD_MAX_SIZE_MB}MB"
        )


async def list_documents(
    session: AsyncSession,
    user: UserContext,
    owner_id: str | None = None,
    *,
    offset: int = 0,
    limit: int = 100,
) -> tuple[list[Document], int]:
    """Return a borrower's documents (the caller's by default), newest first."""
    owner_id = owner_id or user.user_id

    count_stmt = select(func.count(Document.id)).where(Document.user_id == owner_id)
    count_stmt = apply_data_scope(count_stmt, user.data_scope, user, owner_column=Document.user_id)
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        select(Document)
        .where(Document.user_id == owner_id)
        .order_by(Document.uploaded_at.desc())
        .offset(offset)
        .limit(limit)
    )
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Document.user_id)
    result = await session.execute(stmt)
    return list(result.scalars().all()), total


async def get_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
) -> Document | None:
    """Return a single document if visible to the current user."""
    stmt = select(Document).where(Document.id == document_id)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Document.user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def upload_document(
    session: AsyncSession,
    user: UserContext,
    doc_name: str,
    filename: str,
    content_type: str,
    file_data: bytes,
) -> Document:
    """Store a file and record its metadata for the calling borrower.

    1. Validate category, content type and size
    2. Upload the object under the borrower's folder
    3. Insert the Document row (status=uploaded)
    4. If the insert fails, delete the object again

    Raises:
        DocumentUploadError: validation failed (nothing written).
        DocumentStorageError: the object upload failed, or the row insert
            failed and the object was cleaned up.
        StorageInconsistencyError: the row insert failed and the orphaned
            object could not be removed.
    """
    validate_upload(doc_name, content_type, len(file_data))

    storage = get_storage_service()
    object_key = storage.build_object_key(user.user_id, filename)
    try:
        await storage.upload_file(file_data, object_key, content_type)
    except _STORAGE_ERRORS as exc:
        logger.error("Upload to storage failed for %s: %s", object_key, exc)
        raise DocumentStorageError("Upload failed. Please try again.") from exc

    doc = Document(
        user_id=user.user_id,
        doc_name=doc_name,
        file_name=os.path.basename(filename.replace("\\", "/")) or "document",
        file_path=object_key,
        content_type=content_type,
        status=DocumentStatus.UPLOADED,
        uploaded_at=datetime.now(UTC),
    )
    session.add(doc)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Saving metadata for %s failed, removing uploaded object", object_key)
        try:
            await storage.delete_file(object_key)
        except _STORAGE_ERRORS as cleanup_exc:
            logger.exception("Failed to clean up orphaned object %s", object_key)
            raise StorageInconsistencyError(
                f"Uploaded file {object_key} has no metadata record and could not be removed."
            ) from cleanup_exc
        raise DocumentStorageError("Failed to save file information.") from exc

    await session.refresh(doc)
    logger.info("Document %s uploaded by %s into '%s'", doc.id, user.user_id, doc_name)
    return doc


async def delete_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
) -> bool:
    """Remove a document's object and metadata row.

    Returns False if the document is not found or not accessible.

    Raises:
        DocumentStorageError: the object could not be deleted (row untouched).
        StorageInconsistencyError: the object is gone but the row remains.
    """
    doc = await get_document(session, user, document_id)
    if doc is None:
        return False

    storage = get_storage_service()
    try:
        await storage.delete_file(doc.file_path)
    except _STORAGE_ERRORS as exc:
        logger.error("Deleting object %s failed: %s", doc.file_path, exc)
        raise DocumentStorageError("Failed to delete document. Please try again.") from exc

    try:
        await session.delete(doc)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Object %s deleted but document %s row remains", doc.file_path, document_id)
        raise StorageInconsistencyError(
            f"File for document {document_id} was removed but its metadata record remains."
        ) from exc

    logger.info("Document %s deleted by %s", document_id, user.user_id)
    return True


async def review_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
    decision: DocumentDecision,
) -> DocumentReviewOutcome:
    """Approve or reject a document. Repeating a decision is a no-op."""
    doc = await get_document(session, user, document_id)
    if doc is None:
        return DocumentReviewOutcome(
            ok=False,
            error=RecordNotFoundError("Document not found").to_detail(),
        )

    try:
        target, changed = plan_document_review(doc.status, decision)
    except LifecycleError as exc:
        logger.warning(
            "Document review refused: doc=%s status=%s decision=%s",
            document_id,
            doc.status.value,
            decision.value,
        )
        return DocumentReviewOutcome(
            ok=False,
            document=DocumentResponse.model_validate(doc),
            error=exc.to_detail(),
        )

    if changed:
        try:
            doc.status = target
            doc.reviewed_by = user.user_id
            doc.reviewed_at = datetime.now(UTC)
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise
        logger.info("Document %s %s by %s", document_id, target.value, user.user_id)
        get_change_feed().publish(
            "document.reviewed",
            {"document_id": document_id, "user_id": doc.user_id, "status": target.value},
        )

    return DocumentReviewOutcome(
        ok=True,
        changed=changed,
        document=DocumentResponse.model_validate(doc),
    )


async def get_preview_url(doc: Document) -> str | None:
    """Return a signed preview URL, or None if one cannot be generated.

    A single failed URL must not hide the rest of a borrower's documents
    from the reviewer, so the failure is logged and reported as None.
    """
    storage = get_storage_service()
    try:
        return await storage.get_download_url(doc.file_path, expires_in=settings.SIGNED_URL_TTL_SECONDS)
    except _STORAGE_ERRORS:
        logger.warning("Could not sign preview URL for document %s", doc.id, exc_info=True)
        return None
