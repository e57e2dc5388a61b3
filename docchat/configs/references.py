"""
Figure reference configuration settings.

Product vocabulary and document-specific figure ids used by the citation
resolver and structure mapper.

Dependencies: pydantic, pydantic_settings
System role: Citation matching configuration
"""

from pydantic import Field

from docchat.configs.base import BaseSettings, prefixed_config


class ReferenceSettings(BaseSettings):
    """Citation matching configuration."""

    model_config = prefixed_config("REFERENCE_")

    product_name: str = Field(default="RiverMeadow", description="Product name used in domain rules")
    canonical_figure_id: int = Field(
        default=8,
        description="Figure id always attached to OS migration answers",
    )
    assumed_figure_ids: dict[str, list[int]] = Field(
        default_factory=lambda: {
            "google cloud": [25, 30, 40],
            "gcp": [25, 30, 40],
            "aws": [20, 25, 30],
            "azure": [20, 25, 30],
        },
        description="Last-resort figure ids per cloud topic when no caption matches",
    )
    max_image_contexts: int = Field(
        default=5,
        description="Number of image contexts embedded in the chat prompt",
    )
    document_context_chars: int = Field(
        default=8000,
        description="Characters of document text embedded in the chat prompt",
    )
    history_window: int = Field(default=10, description="Previous messages sent with each turn")
