# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``portal_api.main`` is a module singleton. ``_clean_overrides``
ensures dependency_overrides are cleared after every test so persona
configuration from one test never leaks into the next.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from portal_api.main import app as real_app
from portal_api.schemas.auth import UserContext

from .mock_db import configure_app_for_persona


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _quiet_feed():
    """Swap the process-wide change feed for a mock so flows can assert on events."""
    feed = MagicMock()
    feed.publish.return_value = 0
    targets = [
        "portal_api.services.lifecycle.get_change_feed",
        "portal_api.services.document.get_change_feed",
        "portal_api.services.meeting.get_change_feed",
        "portal_api.services.referral.get_change_feed",
    ]
    patchers = [patch(t, return_value=feed) for t in targets]
    for p in patchers:
        p.start()
    yield feed
    for p in patchers:
        p.stop()


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def make_client(app):
    """Factory fixture: configure persona + mock DB, return TestClient."""

    def _make(user: UserContext, session: AsyncMock) -> TestClient:
        configure_app_for_persona(app, user, session)
        return TestClient(app)

    return _make


@pytest.fixture
def make_upload_client(app):
    """Factory fixture: configure persona + mock DB + mock storage.

    Returns (TestClient, mock_storage). The storage patch is stopped after
    each test.
    """
    patchers = []

    def _make(user: UserContext, session: AsyncMock) -> tuple[TestClient, MagicMock]:
        configure_app_for_persona(app, user, session)

        mock_storage = MagicMock()
        mock_storage.build_object_key.side_effect = lambda user_id, filename: f"{user_id}/1767225600000_{filename}"
        mock_storage.upload_file = AsyncMock(side_effect=lambda data, key, content_type: key)
        mock_storage.delete_file = AsyncMock()
        mock_storage.get_download_url = AsyncMock(return_value="https://minio.local/signed")

        patcher_storage = patch(
            "portal_api.services.document.get_storage_service", return_value=mock_storage
        )
        patcher_storage.start()
        patchers.append(patcher_storage)

        return TestClient(app), mock_storage

    yield _make

    for p in patchers:
        p.stop()
