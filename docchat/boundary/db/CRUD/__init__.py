"""
CRUD operations for database models.

Exports singleton instances for use across the application.
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.CRUD.document_crud import (
    DocumentCRUD,
    DocumentImageCRUD,
    document_crud,
    document_image_crud,
)
from docchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "DocumentImageCRUD",
    "MessageCRUD",
    "document_crud",
    "document_image_crud",
    "message_crud",
]
