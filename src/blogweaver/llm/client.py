"""Async OpenAI-compatible LLM client.

This wraps the `openai` Python SDK (``AsyncOpenAI``) and provides a minimal interface for chat
completions with bounded retries. Any OpenAI-compatible endpoint works; DeepSeek is the
default.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Literal, Protocol, Sequence

from openai import AsyncOpenAI

from blogweaver.config import Settings
from blogweaver.logging import get_logger

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A chat message."""

    role: Role
    content: str


class LLMRequestError(RuntimeError):
    """Raised when a completion cannot be obtained."""


class CompletionClient(Protocol):
    """Anything that can turn chat messages into assistant text."""

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion."""


class AsyncLLMClient:
    """LLM client using the OpenAI-compatible Chat Completions API, with retry logic."""

    def __init__(
        self,
        settings: Settings,
        *,
        max_concurrent: int = 4,
    ) -> None:
        """Initialize async LLM client.

        Args:
            settings: Application settings.
            max_concurrent: Maximum concurrent requests.
        """
        self._settings = settings
        if not settings.openai_api_key:
            raise LLMRequestError(
                "Missing BLOGWEAVER_OPENAI_API_KEY. "
                "Set it in environment variables or a .env file."
            )

        self._client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            max_retries=0,  # We handle retries ourselves
        )
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._max_retries = settings.llm_max_retries
        self._retry_backoff = settings.llm_retry_backoff_s

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion asynchronously.

        Args:
            messages: Chat messages.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.

        Returns:
            Assistant message content (empty string if the model returned none).

        Raises:
            LLMRequestError: If every attempt failed.
        """
        async with self._semaphore:
            return await self._complete_with_retry(messages, temperature=temperature, max_tokens=max_tokens)

    async def _complete_with_retry(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int | None,
    ) -> str:
        payload: list[dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                start_time = time.monotonic()
                resp = await self._client.chat.completions.create(
                    model=self._settings.openai_model,
                    messages=payload,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    timeout=self._settings.openai_timeout_s,
                )
                latency = time.monotonic() - start_time

                choice = resp.choices[0]
                if not choice.message or choice.message.content is None:
                    return ""

                logger.debug(
                    "LLM completion successful",
                    extra={
                        "model": self._settings.openai_model,
                        "latency_ms": latency * 1000,
                        "tokens": resp.usage.total_tokens if resp.usage else None,
                    },
                )
                return choice.message.content

            except Exception as e:
                last_error = e
                if attempt < self._max_retries:
                    wait_time = self._retry_backoff * (2 ** attempt)
                    logger.warning(
                        "LLM request failed, retrying",
                        extra={
                            "attempt": attempt + 1,
                            "max_retries": self._max_retries,
                            "wait_time": wait_time,
                            "error": str(e),
                        },
                    )
                    await asyncio.sleep(wait_time)
                else:
                    logger.error("LLM request failed after retries", extra={"error": str(e)})

        raise LLMRequestError(
            f"LLM request failed after {self._max_retries} retries: {last_error}"
        ) from last_error
