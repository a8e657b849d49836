"""Blog post and wizard step models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from blogweaver.models.outline import OutlineNode


class GenerationStep(str, Enum):
    """Wizard steps, in the order the user walks through them."""

    THEME = "theme"
    TITLES = "titles"
    OUTLINE = "outline"
    CONTENT = "content"

    @property
    def position(self) -> int:
        return list(GenerationStep).index(self)


class BlogPost(BaseModel):
    """A finished (or in-progress) article handed to a save sink."""

    id: str
    theme: str
    selected_title: str
    title_options: list[str] = Field(default_factory=list)
    outline: list[OutlineNode] = Field(default_factory=list)
    content: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
