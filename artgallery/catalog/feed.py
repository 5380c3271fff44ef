"""
In-process change feed for catalog tables.

The hosted backend announces row changes through a database webhook; the
admin routes announce their own writes. Subscribers only learn that a
table changed and are expected to re-fetch, not to apply diffs.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A row-level change on a catalog table."""

    table: str
    type: str  # INSERT, UPDATE, DELETE
    record: dict[str, Any] | None = None
    old_record: dict[str, Any] | None = field(default=None)


ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


class ChangeFeed:
    """Fan-out of change events to per-table subscribers."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)

    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback for changes on ``table``.

        Returns a function that removes the subscription.
        """
        self._subscribers[table].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[table]:
                self._subscribers[table].remove(callback)

        return unsubscribe

    def subscriber_count(self, table: str) -> int:
        return len(self._subscribers[table])

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every subscriber of its table."""
        callbacks = list(self._subscribers[event.table])
        logger.info(
            "Catalog change on %s (%s), notifying %d subscriber(s)",
            event.table,
            event.type,
            len(callbacks),
        )
        await asyncio.gather(*(callback(event) for callback in callbacks))


# Default feed instance
_feed: ChangeFeed | None = None


def get_change_feed() -> ChangeFeed:
    """
    Get the process-wide change feed.

    Returns:
        Singleton ChangeFeed instance
    """
    global _feed
    if _feed is None:
        _feed = ChangeFeed()
    return _feed
