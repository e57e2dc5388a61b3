"""
Diagram domain models and schemas.

Intent, DiagramSpec and artifact models for the diagram pipeline plus
the request/response schemas of the diagram API.

Dependencies: pydantic
System role: Diagram domain types and API contracts
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from docchat.models.reference import ImageReference


class DiagramCategory(str, Enum):
    """Visual family a diagram belongs to."""

    NETWORK = "network"
    PROCESS = "process"
    SOFTWARE = "software"
    MIGRATION = "migration"
    CLOUD = "cloud"
    GENERIC = "generic"


class RenderTier(str, Enum):
    """Fallback tier that produced an artifact."""

    STRUCTURED = "structured"
    SIMPLE = "simple"
    FALLBACK_TEMPLATE = "fallback_template"


class DiagramIntent(BaseModel):
    """Classification of a single prompt."""

    model_config = ConfigDict(frozen=True)

    is_diagram_request: bool
    category: DiagramCategory = DiagramCategory.PROCESS
    confidence_signals: frozenset[str] = Field(
        default_factory=frozenset,
        description="Keyword classes that matched (primary, secondary, action, domain, override)",
    )
    prompt: str = ""
    context_snippets: tuple[str, ...] = ()


class ColorPalette(BaseModel):
    """Hex colour triple."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str


class DiagramSpec(BaseModel):
    """Concrete, immutable description of one diagram to render."""

    model_config = ConfigDict(frozen=True)

    category: DiagramCategory
    specific_type: str
    color_palette: ColorPalette
    elements: tuple[str, ...] = Field(min_length=1)
    layout: str
    title: str
    unique_id: str


class DiagramArtifact(BaseModel):
    """Files written for one rendered diagram."""

    unique_id: str
    title: str
    alt_text: str
    category: DiagramCategory
    tier: RenderTier
    language: str = Field(description="Markup language of source_path (d2 or mermaid)")
    source_path: Path
    svg_path: Path | None = Field(
        default=None,
        description="None when mermaid-cli failed and only the HTML viewer renders the markup",
    )
    png_path: Path | None = Field(
        default=None,
        description="Best-effort raster output; may not exist yet when returned",
    )
    html_path: Path


class DiagramGenerateRequest(BaseModel):
    """Request schema for diagram generation."""

    prompt: str = Field(min_length=1, max_length=2000, description="Diagram generation prompt")
    context: list[str] = Field(
        default_factory=list,
        description="Knowledge-base snippets used to ground the diagram",
    )
    force: bool = Field(
        default=False,
        description="Render even if the prompt is not classified as a diagram request",
    )


class DiagramGenerateResponse(BaseModel):
    """Response schema for diagram generation."""

    unique_id: str
    title: str
    alt_text: str
    category: DiagramCategory
    tier: RenderTier
    source_url: str
    svg_url: str
    png_url: str
    html_url: str
    reference: ImageReference
