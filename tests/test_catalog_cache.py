"""Tests for the catalog snapshot and the change feed."""

import asyncio

from artgallery.catalog.cache import CatalogCache
from artgallery.catalog.client import CatalogError
from artgallery.catalog.feed import ChangeEvent, ChangeFeed
from artgallery.models.artwork import Artwork


class TestCatalogCache:
    async def test_ensure_loaded_fetches_once(self, stub_catalog, catalog_cache: CatalogCache) -> None:
        """Once loaded, the snapshot is not fetched again."""
        await catalog_cache.ensure_loaded()
        await catalog_cache.ensure_loaded()

        assert stub_catalog.calls == 1
        assert catalog_cache.loaded
        assert [a.id for a in catalog_cache.artworks] == ["art-1", "art-2"]

    async def test_concurrent_callers_share_fetch(
        self, stub_catalog, catalog_cache: CatalogCache
    ) -> None:
        """Concurrent first loads result in a single fetch."""
        await asyncio.gather(*(catalog_cache.ensure_loaded() for _ in range(5)))

        assert stub_catalog.calls == 1

    async def test_failure_keeps_previous_snapshot(
        self, stub_catalog, catalog_cache: CatalogCache
    ) -> None:
        """A failed refresh records the error and keeps what was there."""
        await catalog_cache.ensure_loaded()
        stub_catalog.error = CatalogError("Service unavailable")

        await catalog_cache.refresh()

        assert catalog_cache.error == "Service unavailable"
        assert len(catalog_cache.artworks) == 2

    async def test_failed_first_load_retried_by_next_caller(
        self, stub_catalog, catalog_cache: CatalogCache
    ) -> None:
        """A failed first load is attempted again on the next request."""
        stub_catalog.error = CatalogError("Service unavailable")
        await catalog_cache.ensure_loaded()
        assert not catalog_cache.loaded
        assert catalog_cache.artworks == ()

        stub_catalog.error = None
        await catalog_cache.ensure_loaded()

        assert catalog_cache.loaded
        assert catalog_cache.error is None
        assert stub_catalog.calls == 2

    async def test_refresh_on_change_event(
        self, stub_catalog, catalog_cache: CatalogCache, painting: Artwork
    ) -> None:
        """A change on the artworks table replaces the snapshot."""
        feed = ChangeFeed()
        catalog_cache.attach(feed)
        await catalog_cache.ensure_loaded()
        stub_catalog.artworks = [painting]

        await feed.publish(ChangeEvent(table="artworks", type="DELETE", old_record={"id": "art-2"}))

        assert [a.id for a in catalog_cache.artworks] == ["art-1"]

    async def test_other_tables_ignored(self, stub_catalog, catalog_cache: CatalogCache) -> None:
        """Changes to other tables do not trigger a fetch."""
        feed = ChangeFeed()
        catalog_cache.attach(feed)

        await feed.publish(ChangeEvent(table="profiles", type="UPDATE"))

        assert stub_catalog.calls == 0


class TestChangeFeed:
    async def test_publish_reaches_table_subscribers(self) -> None:
        """Every subscriber of the table receives the event."""
        feed = ChangeFeed()
        received: list[str] = []

        async def first(event: ChangeEvent) -> None:
            received.append(f"first:{event.type}")

        async def second(event: ChangeEvent) -> None:
            received.append(f"second:{event.type}")

        feed.subscribe("artworks", first)
        feed.subscribe("artworks", second)

        await feed.publish(ChangeEvent(table="artworks", type="INSERT"))

        assert sorted(received) == ["first:INSERT", "second:INSERT"]

    async def test_unsubscribe(self) -> None:
        """An unsubscribed callback receives nothing further."""
        feed = ChangeFeed()
        received: list[ChangeEvent] = []

        async def callback(event: ChangeEvent) -> None:
            received.append(event)

        unsubscribe = feed.subscribe("artworks", callback)
        assert feed.subscriber_count("artworks") == 1

        unsubscribe()
        unsubscribe()
        await feed.publish(ChangeEvent(table="artworks", type="UPDATE"))

        assert received == []
        assert feed.subscriber_count("artworks") == 0
