from __future__ import annotations

from blogweaver.prompts.generation import (
    CONTENT_SYSTEM_PROMPT,
    OUTLINE_SYSTEM_PROMPT,
    TITLES_SYSTEM_PROMPT,
    content_user_prompt,
    outline_user_prompt,
    titles_user_prompt,
)

__all__ = [
    "TITLES_SYSTEM_PROMPT",
    "OUTLINE_SYSTEM_PROMPT",
    "CONTENT_SYSTEM_PROMPT",
    "titles_user_prompt",
    "outline_user_prompt",
    "content_user_prompt",
]
