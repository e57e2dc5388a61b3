"""
Chat domain models and schemas.

Request/response schemas for document-scoped chat.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field

from docchat.models.reference import ImageReference


class ChatMessageRequest(BaseModel):
    """Request schema for chat messages."""

    content: str = Field(min_length=1, max_length=1000, description="User question or message")


class ChatMessageResponse(BaseModel):
    """Single chat message with its citations."""

    id: int
    content: str
    role: str = Field(description="Message role: 'user' or 'assistant'")
    timestamp: datetime
    references: list[ImageReference] = Field(default_factory=list)
    diagram_error: str | None = Field(
        default=None,
        description="Set when a diagram was requested but every render tier failed",
    )


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
