"""ORM models."""

from docchat.boundary.db.models.document_model import DocumentImageModel, DocumentModel
from docchat.boundary.db.models.message_model import MessageModel

__all__ = ["DocumentImageModel", "DocumentModel", "MessageModel"]
