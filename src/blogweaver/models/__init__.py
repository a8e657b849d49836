"""Pydantic models used across the project."""

from __future__ import annotations

from blogweaver.models.outline import OutlineNode
from blogweaver.models.post import BlogPost, GenerationStep

__all__ = [
    "BlogPost",
    "GenerationStep",
    "OutlineNode",
]
