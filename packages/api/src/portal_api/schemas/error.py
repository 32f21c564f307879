# This project was developed with assistance from AI tools.
"""Error schemas: RFC 7807 Problem Details and typed domain error results."""

import enum

from pydantic import BaseModel, Field


class ErrorKind(str, enum.Enum):
    """Failure categories surfaced by the lifecycle and document services."""

    PRECONDITION_FAILED = "precondition_failed"
    INVALID_TRANSITION = "invalid_transition"
    NOT_FOUND = "not_found"
    STORAGE_INCONSISTENCY = "storage_inconsistency"
    UNAUTHORIZED = "unauthorized"


class ErrorDetail(BaseModel):
    """Typed failure carried inside a service outcome."""

    kind: ErrorKind
    message: str


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(
        default="about:blank",
        description="URI reference identifying the problem type.",
    )
    title: str = Field(description="Short human-readable summary of the problem.")
    status: int = Field(description="HTTP status code.")
    detail: str = Field(
        default="",
        description="Human-readable explanation specific to this occurrence.",
    )
    request_id: str = Field(
        default="",
        description="Correlation ID for tracing this request in logs.",
    )
    instance: str = Field(
        default="",
        description="URI reference identifying the specific occurrence of the problem.",
    )
