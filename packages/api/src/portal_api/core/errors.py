# This project was developed with assistance from AI tools.
"""Domain error types raised inside the lifecycle and document services.

Each carries an ``ErrorKind`` so service boundaries can convert it into an
``ErrorDetail`` without string matching.
"""

from ..schemas.error import ErrorDetail, ErrorKind


class LifecycleError(Exception):
    """Base class for typed portal domain errors."""

    kind: ErrorKind

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(kind=self.kind, message=str(self))


class PreconditionFailedError(LifecycleError):
    """Raised when a transition's precondition does not hold (e.g. incomplete documents)."""

    kind = ErrorKind.PRECONDITION_FAILED


class InvalidTransitionError(LifecycleError):
    """Raised when an action is not defined from the record's current status."""

    kind = ErrorKind.INVALID_TRANSITION


class RecordNotFoundError(LifecycleError):
    """Raised when the target record is missing or outside the caller's scope."""

    kind = ErrorKind.NOT_FOUND


class StorageInconsistencyError(LifecycleError):
    """Raised when a stored file and its metadata row have diverged."""

    kind = ErrorKind.STORAGE_INCONSISTENCY


class UnauthorizedTransitionError(LifecycleError):
    """Raised when the caller's role may not perform the action."""

    kind = ErrorKind.UNAUTHORIZED
