"""
LLM provider configuration settings.

Model selection, sampling parameters and call timeouts for the Gemini
chat model used for both chat answers and diagram markup.

Dependencies: pydantic, pydantic_settings
System role: LLM access configuration
"""

from pydantic import Field

from docchat.configs.base import BaseSettings, prefixed_config


class LLMSettings(BaseSettings):
    """Google Gemini model configuration."""

    model_config = prefixed_config("LLM_")

    google_api_key: str | None = Field(
        default=None,
        description="Google API key for Gemini access (falls back to GOOGLE_API_KEY)",
    )
    model_id: str = Field(default="gemini-2.5-flash", description="Gemini model identifier")

    chat_temperature: float = Field(default=0.7, description="Temperature for chat answers")
    chat_max_tokens: int = Field(default=1000, description="Max output tokens for chat answers")

    markup_temperature: float = Field(
        default=0.95,
        description="Temperature for diagram markup generation (kept near 1.0 for variety)",
    )
    markup_max_tokens: int = Field(default=2000, description="Max output tokens for diagram markup")

    request_timeout_seconds: float = Field(
        default=45.0,
        description="Hard timeout for a single LLM call",
    )
