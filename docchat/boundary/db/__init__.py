"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Dependencies: sqlalchemy, docchat.configs
System role: Persistent storage for documents, document images and chat history
"""

from docchat.boundary.db.base import Base
from docchat.boundary.db.connection import get_async_db, get_async_engine, get_async_session_factory
from docchat.boundary.db.CRUD import document_crud, document_image_crud, message_crud
from docchat.boundary.db.models import DocumentImageModel, DocumentModel, MessageModel

__all__ = [
    "Base",
    "DocumentImageModel",
    "DocumentModel",
    "MessageModel",
    "document_crud",
    "document_image_crud",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "message_crud",
]
