"""Generation service.

Three async operations back the wizard: titles from a theme, an outline from a theme and a
title, and article text from all three. A failed or unusable model response never reaches the
user as an error; the service substitutes deterministic placeholder content and flags the
result so the caller can show a non-blocking warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from blogweaver.config import Settings
from blogweaver.export import outline_to_prompt_text
from blogweaver.generation.fallbacks import fallback_content, fallback_outline, fallback_titles
from blogweaver.generation.parsing import OutlineParseError, parse_outline, parse_titles
from blogweaver.llm.client import AsyncLLMClient, ChatMessage, CompletionClient, LLMRequestError
from blogweaver.logging import get_logger
from blogweaver.models.outline import OutlineNode
from blogweaver.prompts import (
    CONTENT_SYSTEM_PROMPT,
    OUTLINE_SYSTEM_PROMPT,
    TITLES_SYSTEM_PROMPT,
    content_user_prompt,
    outline_user_prompt,
    titles_user_prompt,
)
from blogweaver.utils.ids import IdFactory, new_node_id

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationResult(Generic[T]):
    """A generated value, possibly a placeholder.

    Attributes:
        value: Generated (or placeholder) value.
        fallback: True if ``value`` is a placeholder.
        warning: Human-readable reason for the fallback.
    """

    value: T
    fallback: bool = False
    warning: str | None = None


class GenerationService:
    """Generates titles, outlines and articles through a chat-completion client."""

    def __init__(
        self,
        llm: CompletionClient | None,
        settings: Settings,
        *,
        id_factory: IdFactory = new_node_id,
    ) -> None:
        self._llm = llm
        self._settings = settings
        self._id_factory = id_factory

    @classmethod
    def from_settings(cls, settings: Settings, *, id_factory: IdFactory = new_node_id) -> "GenerationService":
        """Build a service with the default OpenAI-compatible client.

        Without an API key the service still works, serving placeholders only.
        """

        try:
            llm: CompletionClient | None = AsyncLLMClient(settings)
        except LLMRequestError as e:
            logger.warning("LLM client unavailable; placeholder content only: %s", e)
            llm = None
        return cls(llm, settings, id_factory=id_factory)

    @property
    def configured(self) -> bool:
        return self._llm is not None

    async def _ask(self, system: str, user: str, *, temperature: float, max_tokens: int) -> str:
        if self._llm is None:
            raise LLMRequestError("no LLM client configured")
        messages = [
            ChatMessage(role="system", content=system),
            ChatMessage(role="user", content=user),
        ]
        return await self._llm.complete(messages, temperature=temperature, max_tokens=max_tokens)

    async def generate_titles(self, theme: str) -> GenerationResult[list[str]]:
        """Propose title candidates for a theme."""

        try:
            raw = await self._ask(
                TITLES_SYSTEM_PROMPT,
                titles_user_prompt(theme, self._settings.title_count),
                temperature=self._settings.titles_temperature,
                max_tokens=self._settings.titles_max_tokens,
            )
            titles = parse_titles(raw)
            if not titles:
                raise OutlineParseError("no titles in response")
        except (LLMRequestError, OutlineParseError) as e:
            return self._fallback(fallback_titles(theme), "titles", e)
        logger.info("Titles generated", extra={"count": len(titles)})
        return GenerationResult(titles)

    async def generate_outline(self, theme: str, title: str) -> GenerationResult[list[OutlineNode]]:
        """Propose an outline for a theme and chosen title."""

        try:
            raw = await self._ask(
                OUTLINE_SYSTEM_PROMPT,
                outline_user_prompt(theme, title),
                temperature=self._settings.outline_temperature,
                max_tokens=self._settings.outline_max_tokens,
            )
            nodes = parse_outline(raw, id_factory=self._id_factory)
        except (LLMRequestError, OutlineParseError) as e:
            return self._fallback(fallback_outline(title, id_factory=self._id_factory), "outline", e)
        logger.info("Outline generated", extra={"count": len(nodes)})
        return GenerationResult(nodes)

    async def generate_content(
        self,
        theme: str,
        title: str,
        outline: Sequence[OutlineNode],
    ) -> GenerationResult[str]:
        """Write the article body following the outline."""

        try:
            raw = await self._ask(
                CONTENT_SYSTEM_PROMPT,
                content_user_prompt(theme, title, outline_to_prompt_text(outline)),
                temperature=self._settings.content_temperature,
                max_tokens=self._settings.content_max_tokens,
            )
            if not raw.strip():
                raise LLMRequestError("empty article in response")
        except LLMRequestError as e:
            return self._fallback(fallback_content(theme, title, outline), "content", e)
        logger.info("Content generated", extra={"chars": len(raw)})
        return GenerationResult(raw)

    @staticmethod
    def _fallback(value: T, what: str, error: Exception) -> GenerationResult[T]:
        logger.warning("Generating %s failed; using placeholder: %s", what, error)
        return GenerationResult(value, fallback=True, warning=f"Could not generate {what}: {error}")
