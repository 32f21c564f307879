# This project was developed with assistance from AI tools.
"""Liveness and readiness probes."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from portal_db import get_db_service

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok", "service": settings.APP_NAME}


@router.get("/ready")
async def ready() -> JSONResponse:
    """Readiness probe: the database must answer."""
    if not await get_db_service().ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return JSONResponse(content={"status": "ok", "database": "reachable"})
