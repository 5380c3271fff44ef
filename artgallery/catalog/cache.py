"""
Process-wide catalog snapshot.

Holds the most recently fetched list of artworks. A refresh replaces the
whole tuple in one assignment, so readers see either the old list or the
new one, never a mix. Overlapping refreshes are not ordered: whichever
response arrives last wins.
"""

import asyncio
import logging
from collections.abc import Callable

from artgallery.catalog.client import CatalogClient, CatalogError, get_catalog_client
from artgallery.catalog.feed import ChangeEvent, ChangeFeed, get_change_feed
from artgallery.config import ARTWORKS_TABLE
from artgallery.models.artwork import Artwork

logger = logging.getLogger(__name__)


class CatalogCache:
    """Latest artwork list fetched from the hosted catalog."""

    def __init__(self, client: CatalogClient) -> None:
        self._client = client
        self._artworks: tuple[Artwork, ...] = ()
        self._loaded = False
        self._lock = asyncio.Lock()
        self.error: str | None = None

    @property
    def artworks(self) -> tuple[Artwork, ...]:
        return self._artworks

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def refresh(self) -> None:
        """
        Re-fetch the full artwork list.

        On failure the previous snapshot is kept and the error message is
        recorded for the views to show. There is no automatic retry.
        """
        try:
            artworks = await self._client.list_artworks()
        except CatalogError as e:
            logger.error("Failed to refresh catalog: %s", e.message)
            self.error = e.message
            return

        self._artworks = tuple(artworks)
        self._loaded = True
        self.error = None
        logger.info("Catalog refreshed: %d artworks", len(artworks))

    async def ensure_loaded(self) -> None:
        """
        Fetch the catalog unless a fetch already succeeded.

        Concurrent callers share one fetch. A failed fetch is attempted
        again by the next caller, which is how a page reload recovers.
        """
        async with self._lock:
            if not self._loaded:
                await self.refresh()

    async def _on_change(self, event: ChangeEvent) -> None:
        await self.refresh()

    def attach(self, feed: ChangeFeed) -> Callable[[], None]:
        """Refresh on every change to the artworks table."""
        return feed.subscribe(ARTWORKS_TABLE, self._on_change)


# Default cache instance
_cache: CatalogCache | None = None


def get_catalog_cache() -> CatalogCache:
    """
    Get the process-wide catalog cache, subscribed to the change feed.

    Returns:
        Singleton CatalogCache instance
    """
    global _cache
    if _cache is None:
        _cache = CatalogCache(get_catalog_client())
        _cache.attach(get_change_feed())
    return _cache
