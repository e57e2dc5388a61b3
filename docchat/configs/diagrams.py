"""
Diagram rendering configuration settings.

Artifact storage root, renderer binaries and the timeouts that bound the
render pipeline.

Dependencies: pydantic, pydantic_settings
System role: Diagram pipeline configuration
"""

from pathlib import Path

from pydantic import Field

from docchat.configs.base import BaseSettings, prefixed_config


class DiagramSettings(BaseSettings):
    """Diagram generation and rendering configuration."""

    model_config = prefixed_config("DIAGRAM_")

    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Root directory for generated diagram artifacts",
    )
    d2_binary: str = Field(default="d2", description="Primary D2 renderer executable")
    wrapper_command: list[str] = Field(
        default_factory=lambda: ["npx", "--yes", "@terrastruct/d2"],
        description="Secondary renderer command prefix, tried when the primary binary fails",
    )
    d2_theme: int = Field(default=3, description="D2 theme id passed as --theme")
    d2_pad: int = Field(default=30, description="D2 padding passed as --pad")
    mermaid_command: list[str] = Field(
        default_factory=lambda: ["mmdc"],
        description="mermaid-cli command prefix used to render simple markup to SVG",
    )
    mermaid_theme: str = Field(default="default", description="Mermaid theme passed as -t")

    renderer_timeout_seconds: float = Field(
        default=20.0,
        description="Hard timeout for one renderer subprocess",
    )
    pipeline_timeout_seconds: float = Field(
        default=90.0,
        description="Timeout wrapping a whole render request",
    )
    min_markup_length: int = Field(
        default=40,
        description="Minimum length for simple-markup output to be accepted",
    )
    png_output_width: int = Field(default=1600, description="Raster width for background PNGs")
    public_base_path: str = Field(
        default="/api/v1/diagrams",
        description="URL prefix used when building artifact retrieval links",
    )
