"""
Database CRUD operations.

Provides async functions for reading, writing and clearing the keyed
local state records of a browsing session.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.models.db import LocalStateRecordDB


async def get_state_record(
    session: AsyncSession, session_id: str, key: str
) -> LocalStateRecordDB | None:
    """
    Get one state record of a browsing session.

    Returns None if the session never wrote this key.
    """
    result = await session.execute(
        select(LocalStateRecordDB).where(
            LocalStateRecordDB.session_id == session_id,
            LocalStateRecordDB.key == key,
        )
    )
    return result.scalar_one_or_none()


async def put_state_record(
    session: AsyncSession, session_id: str, key: str, value: str
) -> LocalStateRecordDB:
    """
    Insert or overwrite a state record.

    Last write wins; there is no coordination between sessions.
    """
    existing = await get_state_record(session, session_id, key)

    if existing:
        existing.value = value
        await session.flush()
        return existing

    record = LocalStateRecordDB(session_id=session_id, key=key, value=value)
    session.add(record)
    await session.flush()
    return record


async def delete_state_record(session: AsyncSession, session_id: str, key: str) -> bool:
    """
    Delete a state record.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(
        delete(LocalStateRecordDB).where(
            LocalStateRecordDB.session_id == session_id,
            LocalStateRecordDB.key == key,
        )
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return bool(result.rowcount)  # type: ignore[attr-defined]
