"""
SQLAlchemy ORM models for persistent storage.

The service keeps one small table: the local state records of each browsing
session. Catalog rows, profiles and settings live in the hosted backend.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class LocalStateRecordDB(Base):
    """
    One keyed record of a browsing session's local state.

    Each session has at most three records (dark mode, cart, favorites),
    each holding the raw serialized payload.
    """

    __tablename__ = "local_state"
    __table_args__ = (UniqueConstraint("session_id", "key", name="uq_session_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(64), index=True)
    key: Mapped[str] = mapped_column(String(64))
    value: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<LocalStateRecordDB(session={self.session_id}, key={self.key})>"
