# This project was developed with assistance from AI tools.
"""In-process change feed for admin dashboards.

Services publish small JSON-able events after their writes commit; admin
WebSocket sessions subscribe and forward them. Publishing is fire-and-forget:
with no subscribers it is a no-op, and a subscriber whose buffer is full
misses the event rather than blocking the publisher.
"""

import asyncio
import logging
from datetime import UTC, datetime

from ..core.config import settings

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Fan-out of change events to any number of async subscribers."""

    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def publish(self, event_type: str, payload: dict) -> int:
        """Queue an event for every subscriber. Returns how many received it."""
        event = {
            "type": event_type,
            "payload": payload,
            "published_at": datetime.now(UTC).isoformat(),
        }
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning("Change feed subscriber full, dropping %s event", event_type)
        return delivered


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_feed: ChangeFeed | None = None


def get_change_feed() -> ChangeFeed:
    """Return the process-wide ChangeFeed, creating it on first use."""
    global _feed  # noqa: PLW0603
    if _feed is None:
        _feed = ChangeFeed(queue_size=settings.EVENT_QUEUE_SIZE)
    return _feed
