"""
Shared CRUD helpers for the chat history tables.

Methods flush but never commit; the calling service owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar

from sqlalchemy import exists as sql_exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Insert and primary-key lookups for one mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values) -> ModelT:
        """Insert a row and return it with server defaults (id, timestamps) loaded."""
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: int) -> ModelT | None:
        return await session.get(self.model, id)

    async def exists(self, session: AsyncSession, id: int) -> bool:
        found = await session.scalar(select(sql_exists().where(self.model.id == id)))
        return bool(found)
