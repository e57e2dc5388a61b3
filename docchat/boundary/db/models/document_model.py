"""
Document ORM models.

Documents hold extracted text; document images are the figures pulled out
during ingestion and are read-only to the chat core.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Document and image persistence
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, CreatedAtMixin, IntIdMixin


class DocumentModel(Base, IntIdMixin, CreatedAtMixin):
    """
    Uploaded document with its extracted text.

    Attributes:
        id: Integer primary key
        name: Stored file name
        original_name: File name as uploaded; used as the chat prompt title
        content_text: Plain text extracted at ingestion
        created_at: Upload timestamp (UTC)
    """

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(512), nullable=False, doc="Stored file name")
    original_name: Mapped[str] = mapped_column(String(512), nullable=False, doc="Uploaded file name")
    content_text: Mapped[str] = mapped_column(Text, nullable=False, default="", doc="Extracted plain text")

    images = relationship(
        "DocumentImageModel",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentImageModel.id",
    )


class DocumentImageModel(Base, IntIdMixin):
    """
    Figure extracted from a document.

    Captions usually carry a "Figure N" label, which is how answers are
    matched back to images.
    """

    __tablename__ = "document_images"

    document_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning document",
    )
    image_path: Mapped[str] = mapped_column(String(1024), nullable=False, doc="Public image path")
    alt_text: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    caption: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    page_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    document = relationship("DocumentModel", back_populates="images")
