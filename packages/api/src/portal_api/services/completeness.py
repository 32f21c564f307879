# This project was developed with assistance from AI tools.
"""Document completeness checking service.

Compares a borrower's uploaded documents against the configured category
checklist. A category counts as provided as soon as any document exists in
it, whatever its review status: submission is gated on upload, not on
admin approval.
"""

import logging
from collections.abc import Iterable, Sequence

from portal_db import Document
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.auth import UserContext
from ..schemas.completeness import (
    CategoryRequirement,
    CompletenessResponse,
    CompletenessResult,
)
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


def evaluate_completeness(
    documents: Iterable[Document],
    required_categories: Sequence[str],
    minimum_count: int,
) -> CompletenessResult:
    """Evaluate a document set against the required categories.

    Pure function. ``is_complete`` holds iff every required category has at
    least one document and the total document count reaches ``minimum_count``.
    Documents in categories outside the checklist still count toward the total.
    """
    by_category: dict[str, list[int]] = {}
    total = 0
    for doc in documents:
        total += 1
        by_category.setdefault(doc.doc_name, []).append(doc.id)

    requirements: list[CategoryRequirement] = []
    missing: list[str] = []
    for category in required_categories:
        ids = by_category.get(category, [])
        requirements.append(
            CategoryRequirement(
                category=category,
                is_provided=bool(ids),
                document_count=len(ids),
                document_ids=ids,
            )
        )
        if not ids:
            missing.append(category)

    return CompletenessResult(
        requirements=requirements,
        missing_categories=missing,
        uploaded_categories=list(by_category),
        total_documents=total,
        minimum_count=minimum_count,
        is_complete=not missing and total >= minimum_count,
    )


async def load_owner_documents(
    session: AsyncSession,
    user: UserContext,
    owner_id: str,
) -> list[Document]:
    """Return every document owned by ``owner_id`` that the caller may see."""
    stmt = select(Document).where(Document.user_id == owner_id)
    stmt = apply_data_scope(stmt, user.data_scope, user, owner_column=Document.user_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def check_completeness(
    session: AsyncSession,
    user: UserContext,
    owner_id: str | None = None,
) -> CompletenessResponse:
    """Check document completeness for a borrower (the caller by default)."""
    owner_id = owner_id or user.user_id
    documents = await load_owner_documents(session, user, owner_id)
    result = evaluate_completeness(
        documents,
        settings.REQUIRED_DOCUMENT_CATEGORIES,
        settings.MINIMUM_DOCUMENT_COUNT,
    )
    logger.debug(
        "Completeness for %s: %d docs, missing=%s",
        owner_id,
        result.total_documents,
        result.missing_categories,
    )
    return CompletenessResponse(user_id=owner_id, **result.model_dump())
