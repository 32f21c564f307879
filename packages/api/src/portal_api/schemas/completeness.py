# This project was developed with assistance from AI tools.
"""Document completeness schemas."""

from pydantic import BaseModel


class CategoryRequirement(BaseModel):
    """A single required category with its fulfillment status."""

    category: str
    is_provided: bool = False
    document_count: int = 0
    document_ids: list[int] = []


class CompletenessResult(BaseModel):
    """Outcome of evaluating a borrower's documents against the checklist."""

    requirements: list[CategoryRequirement]
    missing_categories: list[str]
    uploaded_categories: list[str] = []
    total_documents: int
    minimum_count: int
    is_complete: bool


class CompletenessResponse(CompletenessResult):
    """Completeness summary for one borrower."""

    user_id: str
