"""
Document and document image CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Read access to ingested documents and their figures
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.document_model import DocumentImageModel, DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)


class DocumentImageCRUD(BaseCRUD[DocumentImageModel]):
    """CRUD operations for DocumentImageModel."""

    def __init__(self) -> None:
        super().__init__(DocumentImageModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: int,
    ) -> Sequence[DocumentImageModel]:
        """
        Retrieve every image of a document in extraction order.

        Args:
            session: Async database session
            document_id: Parent document id

        Returns:
            Sequence of DocumentImageModel ordered by id
        """
        stmt = (
            select(DocumentImageModel)
            .where(DocumentImageModel.document_id == document_id)
            .order_by(DocumentImageModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()
document_image_crud = DocumentImageCRUD()
