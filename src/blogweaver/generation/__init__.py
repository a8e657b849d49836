"""Title, outline and article generation backed by a chat-completion service."""

from __future__ import annotations

from blogweaver.generation.parsing import OutlineParseError, parse_outline, parse_titles
from blogweaver.generation.service import GenerationResult, GenerationService

__all__ = [
    "GenerationResult",
    "GenerationService",
    "OutlineParseError",
    "parse_outline",
    "parse_titles",
]
