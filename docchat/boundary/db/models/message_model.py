"""
Chat message ORM model.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Chat history persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, IntIdMixin, utc_now


class MessageModel(Base, IntIdMixin):
    """
    One chat turn scoped to a document.

    Attributes:
        id: Integer primary key
        document_id: Document the conversation is about
        content: Message text
        role: "user" or "assistant"
        references: JSON array of ``{type, id, imagePath, caption}`` or NULL
        timestamp: Creation time (UTC)
    """

    __tablename__ = "messages"

    document_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    references: Mapped[list[dict] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        doc="Image citations; NULL when the message cites nothing",
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
