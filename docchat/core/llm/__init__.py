"""LLM access and prompt templates."""

from docchat.core.llm.llm_provider import LLMProvider

__all__ = ["LLMProvider"]
