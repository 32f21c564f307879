# This project was developed with assistance from AI tools.
"""App-level tests: health probes, Problem Details errors, admin change feed."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from portal_db import get_db
from starlette.websockets import WebSocketDisconnect

from portal_api.core.config import settings
from portal_api.main import app
from portal_api.middleware.auth import get_current_user
from portal_api.routes.admin import _stop_sender

from .factories import make_user


@pytest.fixture(autouse=True)
def _clean_overrides():
    yield
    app.dependency_overrides.clear()


def test_health():
    resp = TestClient(app).get("/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_ready_reports_database_down():
    service = MagicMock()
    service.ping = AsyncMock(return_value=False)
    with patch("portal_api.routes.health.get_db_service", return_value=service):
        resp = TestClient(app).get("/health/ready")
    assert resp.status_code == 503


def test_not_found_is_problem_details(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)
    session = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session.execute = AsyncMock(return_value=result)

    async def fake_db():
        yield session

    app.dependency_overrides[get_db] = fake_db
    resp = TestClient(app).get("/api/applications/42", headers={"x-request-id": "req-1"})

    assert resp.status_code == 404
    body = resp.json()
    assert body["title"] == "Not Found"
    assert body["status"] == 404
    assert body["detail"] == "Application not found"
    assert body["request_id"] == "req-1"


def test_storage_inconsistency_is_500_problem_details():
    from portal_api.core.errors import StorageInconsistencyError

    async def fake_user():
        return make_user()

    async def fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    with patch(
        "portal_api.routes.documents.doc_service.delete_document",
        AsyncMock(side_effect=StorageInconsistencyError("row remains")),
    ):
        resp = TestClient(app).delete("/api/documents/5")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "row remains"


def test_validation_error_is_problem_details():
    async def fake_user():
        return make_user()

    app.dependency_overrides[get_current_user] = fake_user
    resp = TestClient(app).post("/api/meetings/", json={"meeting_type": "carrier pigeon"})

    assert resp.status_code == 422
    assert resp.json()["title"] == "Unprocessable Entity"


def test_admin_events_rejects_missing_token(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    with TestClient(app).websocket_connect("/api/admin/events") as ws:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()

    assert exc_info.value.code == 4001


def test_admin_events_forwards_feed(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)
    queue: asyncio.Queue = asyncio.Queue()
    event = {"type": "application.transitioned", "payload": {"application_id": 1}, "published_at": "now"}
    queue.put_nowait(event)
    feed = MagicMock()
    feed.subscribe.return_value = queue
    feed.subscriber_count = 1

    with patch("portal_api.routes.admin.get_change_feed", return_value=feed):
        with TestClient(app).websocket_connect("/api/admin/events") as ws:
            assert ws.receive_json() == event

    feed.unsubscribe.assert_called_once_with(queue)


async def test_stop_sender_collects_closed_socket_failure():
    async def send_after_close():
        raise WebSocketDisconnect(code=1006)

    sender = asyncio.create_task(send_after_close())
    await asyncio.sleep(0)
    assert sender.done()

    await _stop_sender(sender)

    assert isinstance(sender.exception(), WebSocketDisconnect)


async def test_stop_sender_cancels_pending_forwarder():
    sender = asyncio.create_task(asyncio.Event().wait())
    await asyncio.sleep(0)

    await _stop_sender(sender)

    assert sender.cancelled()
