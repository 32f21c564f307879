# This project was developed with assistance from AI tools.
"""Maps typed service errors onto HTTP status codes."""

from fastapi import HTTPException, status

from ..schemas.error import ErrorDetail, ErrorKind

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.PRECONDITION_FAILED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.STORAGE_INCONSISTENCY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def http_error(error: ErrorDetail) -> HTTPException:
    """Build the HTTPException for a failed service outcome."""
    return HTTPException(status_code=ERROR_STATUS[error.kind], detail=error.message)
