"""Tests for database CRUD operations and SQL-backed state storage."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from artgallery.db.operations import (
    delete_state_record,
    get_state_record,
    put_state_record,
)
from artgallery.models.artwork import Artwork
from artgallery.models.db import Base
from artgallery.state.container import SessionState
from artgallery.state.storage import SqlStateStorage


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


class TestStateRecordOperations:
    async def test_get_missing_record(self, session: AsyncSession) -> None:
        """Returns None for a key the session never wrote."""
        assert await get_state_record(session, "session-1", "cart") is None

    async def test_put_creates_record(self, session: AsyncSession) -> None:
        """Can create a new record."""
        record = await put_state_record(session, "session-1", "cart", "[]")

        assert record.id is not None
        assert record.value == "[]"

    async def test_put_overwrites(self, session: AsyncSession) -> None:
        """Writing the same key again replaces the value."""
        await put_state_record(session, "session-1", "darkMode", "false")
        await session.commit()

        await put_state_record(session, "session-1", "darkMode", "true")
        await session.commit()

        record = await get_state_record(session, "session-1", "darkMode")
        assert record is not None
        assert record.value == "true"

    async def test_sessions_are_isolated(self, session: AsyncSession) -> None:
        """Records of one browsing session are invisible to another."""
        await put_state_record(session, "session-1", "favorites", '["a"]')
        await session.commit()

        assert await get_state_record(session, "session-2", "favorites") is None

    async def test_delete(self, session: AsyncSession) -> None:
        """Deleting reports whether a record was removed."""
        await put_state_record(session, "session-1", "cart", "[]")
        await session.commit()

        assert await delete_state_record(session, "session-1", "cart") is True
        assert await delete_state_record(session, "session-1", "cart") is False
        assert await get_state_record(session, "session-1", "cart") is None


class TestSqlStateStorage:
    async def test_container_round_trip(self, session: AsyncSession, painting: Artwork) -> None:
        """State saved through the table reloads in a fresh container."""
        state = SessionState(SqlStateStorage(session, "session-1"))
        await state.load()
        state.add_to_cart(painting)
        state.add_to_favorites(painting.id)
        state.toggle_dark_mode()
        await state.save()
        await session.commit()

        reloaded = SessionState(SqlStateStorage(session, "session-1"))
        await reloaded.load()

        assert reloaded.cart == state.cart
        assert reloaded.favorites == (painting.id,)
        assert reloaded.dark_mode is True

    async def test_corrupt_record_removed(self, session: AsyncSession) -> None:
        """A corrupt record is deleted on load."""
        await put_state_record(session, "session-1", "favorites", "oops")
        await session.commit()

        state = SessionState(SqlStateStorage(session, "session-1"))
        await state.load()

        assert state.favorites == ()
        assert await get_state_record(session, "session-1", "favorites") is None
