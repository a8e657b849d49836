"""Outline models.

An outline is a flat, ordered list of :class:`OutlineNode`. The list order is a pre-order
traversal of the implied tree and each node's ``level`` gives its nesting depth, so there are
no parent/child pointers to keep in sync.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class OutlineNode(BaseModel):
    """One heading in an outline."""

    id: str = Field(min_length=1)
    title: str
    level: int = Field(ge=1)

    def shifted(self, delta: int) -> "OutlineNode":
        """Return a copy with ``level`` moved by ``delta``."""

        return self.model_copy(update={"level": self.level + delta})
