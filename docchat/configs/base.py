"""
Shared settings foundation.

Every settings class reads the process environment and an optional ``.env``
file. Concern-specific classes get their own variable prefix through
``prefixed_config``; the unprefixed fields here apply to the whole app.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def prefixed_config(prefix: str = "") -> SettingsConfigDict:
    """Settings config reading ``<prefix><FIELD>`` variables, case-insensitively."""
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """App-wide settings inherited by every concern."""

    model_config = prefixed_config()

    environment: str = Field(
        default="development",
        description="Deployment environment name (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level
