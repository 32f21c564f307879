# This project was developed with assistance from AI tools.
"""Admin endpoints: borrower overview and the realtime change feed."""

import asyncio
import contextlib
import logging

import jwt as pyjwt
from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from portal_db import get_db
from portal_db.enums import UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import build_data_scope
from ..core.config import settings
from ..middleware.auth import require_roles, user_from_token
from ..schemas.auth import UserContext
from ..schemas.profile import BorrowerListResponse
from ..services.notifications import get_change_feed
from ..services.profile import list_borrowers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/borrowers",
    response_model=BorrowerListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def get_borrowers(
    session: AsyncSession = Depends(get_db),
) -> BorrowerListResponse:
    """Every borrower with document count and application status."""
    borrowers = await list_borrowers(session)
    return BorrowerListResponse(data=borrowers, count=len(borrowers))


async def authenticate_websocket(
    ws: WebSocket,
    required_role: UserRole,
) -> UserContext | None:
    """Validate JWT from ``?token=<jwt>`` query param on an already-accepted WebSocket.

    When ``AUTH_DISABLED=true``: returns a dev user with *required_role*.

    Returns ``None`` (and closes the WS) when authentication or authorization fails.
    """
    if settings.AUTH_DISABLED:
        return UserContext(
            user_id="dev-user",
            role=required_role,
            email="dev@sba-portal.local",
            name="Dev User",
            data_scope=build_data_scope(required_role, "dev-user"),
        )

    token = ws.query_params.get("token")
    if not token:
        await ws.close(code=4001, reason="Missing authentication token")
        return None

    try:
        user = user_from_token(token)
    except pyjwt.InvalidTokenError as exc:
        logger.warning("WebSocket auth failed: %s", exc)
        await ws.close(code=4001, reason="Invalid or expired token")
        return None
    except HTTPException as exc:
        await ws.close(code=4003 if exc.status_code == 403 else 4001, reason=str(exc.detail))
        return None

    if user.role != required_role:
        logger.warning(
            "WebSocket RBAC denied: user=%s role=%s required=%s",
            user.user_id,
            user.role.value,
            required_role.value,
        )
        await ws.close(code=4003, reason="Insufficient permissions")
        return None

    return user


async def _forward_events(ws: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        await ws.send_json(await queue.get())


async def _stop_sender(sender: asyncio.Task) -> None:
    """Cancel the forwarding task and collect its result.

    A send on a socket the client already closed fails the task; that failure
    ends the session quietly.
    """
    sender.cancel()
    with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect, RuntimeError):
        await sender


@router.websocket("/events")
async def admin_events(ws: WebSocket):
    """Push application, document, meeting and referral changes to admin dashboards."""
    await ws.accept()
    user = await authenticate_websocket(ws, required_role=UserRole.ADMIN)
    if user is None:
        return

    feed = get_change_feed()
    queue = feed.subscribe()
    logger.info("Admin %s subscribed to change feed (%d subscribers)", user.user_id, feed.subscriber_count)
    sender = asyncio.create_task(_forward_events(ws, queue))
    try:
        # Inbound messages are ignored; reading is how a disconnect is noticed.
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        logger.info("Admin %s left change feed", user.user_id)
    finally:
        await _stop_sender(sender)
        feed.unsubscribe(queue)
