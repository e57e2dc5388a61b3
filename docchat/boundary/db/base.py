"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for integer keys and creation timestamps.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class so they share one metadata
    object for table creation.
    """

    pass


class IntIdMixin:
    """
    Mixin providing an auto-incrementing integer primary key.

    Image ids double as figure numbers in citations, so keys stay small
    integers rather than UUIDs.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """Mixin providing an immutable UTC creation timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
