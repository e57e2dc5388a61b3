"""
Citation models.

ImageReference is the citation attached to assistant messages and stored
verbatim in the message ``references`` column.

Dependencies: pydantic
System role: Citation contract between resolver, persistence and API
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ImageReference(BaseModel):
    """Single image citation.

    Serialized with camelCase ``imagePath`` so stored JSON matches the
    ``{type, id, imagePath, caption}`` shape clients read.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    id: int | None = Field(default=None, description="DocumentImage id, None for generated diagrams")
    image_path: str = Field(alias="imagePath")
    caption: str = ""


_references_adapter = TypeAdapter(list[ImageReference])


def dump_references(references: list[ImageReference]) -> list[dict[str, Any]] | None:
    """Serialize citations for storage; an empty list is stored as None."""
    if not references:
        return None
    return [ref.model_dump(by_alias=True) for ref in references]


def load_references(data: list[dict[str, Any]] | None) -> list[ImageReference]:
    """Rebuild citations from stored JSON."""
    if not data:
        return []
    return _references_adapter.validate_python(data)
