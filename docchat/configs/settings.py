"""
Application settings root.

``Settings`` groups the per-concern settings classes; ``get_settings`` is
the cached accessor used by the API layer and the engine factory.

Dependencies: pydantic, pydantic_settings
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from docchat.configs.base import BaseSettings
from docchat.configs.database import DatabaseSettings
from docchat.configs.diagrams import DiagramSettings
from docchat.configs.llm import LLMSettings
from docchat.configs.references import ReferenceSettings


class Settings(BaseSettings):
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    diagrams: DiagramSettings = Field(default_factory=DiagramSettings)
    references: ReferenceSettings = Field(default_factory=ReferenceSettings)


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings()
