"""
Durable storage for session state slices.

A browsing session's state is a handful of keyed text records. The
container only needs read, write and remove; where the records live
is up to the storage implementation.
"""

import asyncio
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.db.operations import delete_state_record, get_state_record, put_state_record


class StateStorage(Protocol):
    """Keyed text records owned by one browsing session."""

    async def read(self, key: str) -> str | None: ...

    async def write(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...


class MemoryStateStorage:
    """Dict-backed storage, for a single process lifetime."""

    def __init__(self, records: dict[str, str] | None = None) -> None:
        self.records: dict[str, str] = dict(records or {})

    async def read(self, key: str) -> str | None:
        return self.records.get(key)

    async def write(self, key: str, value: str) -> None:
        self.records[key] = value

    async def remove(self, key: str) -> None:
        self.records.pop(key, None)


class SqlStateStorage:
    """
    Storage backed by the ``local_state`` table.

    The container loads its slices concurrently, but an AsyncSession
    cannot run two statements at once, so access is serialized.
    """

    def __init__(self, session: AsyncSession, session_id: str) -> None:
        self.session = session
        self.session_id = session_id
        self._lock = asyncio.Lock()

    async def read(self, key: str) -> str | None:
        async with self._lock:
            record = await get_state_record(self.session, self.session_id, key)
        return record.value if record else None

    async def write(self, key: str, value: str) -> None:
        async with self._lock:
            await put_state_record(self.session, self.session_id, key, value)

    async def remove(self, key: str) -> None:
        async with self._lock:
            await delete_state_record(self.session, self.session_id, key)
