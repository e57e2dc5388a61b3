"""
Document domain models and schemas.

Document images as seen by the citation and structure-mapping code, and
the per-image context computed for chat prompts.

Dependencies: pydantic
System role: Document API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class DocumentImage(BaseModel):
    """Image extracted from a document during ingestion."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    document_id: int
    image_path: str
    alt_text: str | None = None
    caption: str | None = None
    page_number: int | None = None


class ImageContextInfo(BaseModel):
    """Where an image sits in its document and how much it matters."""

    section: str | None = None
    context: str | None = Field(default=None, description="Nearest sub-heading")
    figure_number: int | None = None
    importance: float = Field(default=0.0, ge=0.0, le=1.0)
    surrounding_text: str | None = None


class DocumentImageResponse(BaseModel):
    """Response schema for a document image."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    document_id: int
    image_path: str
    alt_text: str | None = None
    caption: str | None = None
    page_number: int | None = None
