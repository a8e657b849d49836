"""Markdown rendering of outlines and articles."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from blogweaver.logging import get_logger
from blogweaver.models.outline import OutlineNode

logger = get_logger(__name__)


def outline_to_markdown(nodes: Sequence[OutlineNode]) -> str:
    """Render an outline as markdown headings.

    The article title owns ``#``, so a level-1 node becomes ``##``, level 2 ``###`` and so on
    (capped at the markdown maximum of six).
    """

    return "\n".join(f"{'#' * min(n.level + 1, 6)} {n.title}" for n in nodes)


def outline_to_prompt_text(nodes: Sequence[OutlineNode]) -> str:
    """Render an outline for the content-generation prompt.

    Top-level headings are ``##``; everything deeper is an indented ``###``.
    """

    lines: list[str] = []
    for n in nodes:
        if n.level == 1:
            lines.append(f"## {n.title}")
        else:
            lines.append(f"  ### {n.title}")
    return "\n".join(lines)


def write_markdown(path: Path, content: str) -> Path:
    """Write an article to ``path`` (parent directories are created)."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Article written to %s", path)
    return path
