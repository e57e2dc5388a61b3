"""
LLM completion provider.

Thin async wrapper over LangChain's Gemini chat model exposing the two
calls the application needs: one-shot completion (diagram markup) and
multi-turn chat (document answers). Both run under a hard timeout and
surface every failure as LLMProviderError.

Dependencies: langchain_google_genai, langchain_core, asyncio
System role: Boundary to the external LLM API
"""

import asyncio
import logging
from typing import Any

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from docchat.core.exceptions import LLMProviderError

logger = logging.getLogger(__name__)


def message_text(content: Any) -> str:
    """Flatten AIMessage content (plain string or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


class LLMProvider:
    """Gemini-backed completion and chat calls."""

    def __init__(
        self,
        model_id: str = "gemini-2.5-flash",
        google_api_key: str | None = None,
        timeout_seconds: float = 45.0,
    ) -> None:
        """
        Initialize provider.

        Args:
            model_id: Gemini model identifier
            google_api_key: API key; when None the client reads GOOGLE_API_KEY
            timeout_seconds: Hard timeout per call
        """
        self._model_id = model_id
        self._api_key = google_api_key
        self._timeout = timeout_seconds
        self._models: dict[tuple[float, int], ChatGoogleGenerativeAI] = {}

    def _model(self, temperature: float, max_tokens: int) -> ChatGoogleGenerativeAI:
        key = (temperature, max_tokens)
        if key not in self._models:
            kwargs: dict[str, Any] = {
                "model": self._model_id,
                "temperature": temperature,
                "max_output_tokens": max_tokens,
            }
            if self._api_key:
                kwargs["google_api_key"] = self._api_key
            self._models[key] = ChatGoogleGenerativeAI(**kwargs)
        return self._models[key]

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Single-turn completion.

        Returns:
            str: Model text

        Raises:
            LLMProviderError: On timeout or provider failure
        """
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        return await self._invoke(messages, temperature, max_tokens, operation="complete")

    async def chat(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Multi-turn chat completion over prepared LangChain messages.

        Raises:
            LLMProviderError: On timeout or provider failure
        """
        return await self._invoke(messages, temperature, max_tokens, operation="chat")

    async def _invoke(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int,
        operation: str,
    ) -> str:
        logger.info(
            f"{__name__}:{operation} - START messages={len(messages)} "
            f"temperature={temperature} max_tokens={max_tokens}"
        )
        model = self._model(temperature, max_tokens)
        try:
            response = await asyncio.wait_for(model.ainvoke(messages), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:{operation} - timed out after {self._timeout}s")
            raise LLMProviderError(
                f"LLM call timed out after {self._timeout}s", operation=operation
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise LLMProviderError(f"LLM call failed: {e}", operation=operation) from e

        text = message_text(response.content)
        logger.info(f"{__name__}:{operation} - END chars={len(text)}")
        return text
