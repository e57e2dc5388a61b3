"""Application services orchestrating core logic and persistence."""

from docchat.application.services.chat_service import ChatService
from docchat.application.services.diagram_service import DiagramService

__all__ = ["ChatService", "DiagramService"]
