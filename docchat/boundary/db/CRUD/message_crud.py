"""
Chat message CRUD operations.

Citations are stored verbatim as a JSON array, or NULL when a message
cites nothing, and read back as ImageReference objects.

Dependencies: sqlalchemy, docchat.boundary.db.models, docchat.models.reference
System role: Chat history persistence
"""

from typing import Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.message_model import MessageModel
from docchat.models.reference import ImageReference, dump_references, load_references


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def create_message(
        self,
        session: AsyncSession,
        document_id: int,
        role: str,
        content: str,
        references: list[ImageReference] | None = None,
    ) -> MessageModel:
        """
        Store one chat turn.

        Args:
            session: Async database session
            document_id: Document the conversation belongs to
            role: "user" or "assistant"
            content: Message text
            references: Citations; empty or None is stored as NULL

        Returns:
            Created MessageModel
        """
        return await self.create(
            session,
            document_id=document_id,
            role=role,
            content=content,
            references=dump_references(references or []),
        )

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: int,
    ) -> Sequence[MessageModel]:
        """Full conversation for a document, oldest first."""
        stmt = (
            select(MessageModel)
            .where(MessageModel.document_id == document_id)
            .order_by(MessageModel.timestamp, MessageModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_recent(
        self,
        session: AsyncSession,
        document_id: int,
        limit: int = 10,
    ) -> list[MessageModel]:
        """Last ``limit`` messages of a conversation, oldest first."""
        stmt = (
            select(MessageModel)
            .where(MessageModel.document_id == document_id)
            .order_by(desc(MessageModel.timestamp), desc(MessageModel.id))
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def count_by_document_id(self, session: AsyncSession, document_id: int) -> int:
        stmt = select(func.count()).select_from(MessageModel).where(MessageModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def references_of(message: MessageModel) -> list[ImageReference]:
        """Stored citations as ImageReference objects."""
        return load_references(message.references)


message_crud = MessageCRUD()
