"""Tests for markdown export."""

from __future__ import annotations

from pathlib import Path

from blogweaver.export import outline_to_markdown, outline_to_prompt_text, write_markdown

from outline_helpers import make_nodes


def test_outline_to_markdown_heading_depths() -> None:
    """Level 1 maps to ## and depth is capped at six hashes."""

    nodes = make_nodes(("a", 1, "A"), ("b", 2, "B"), ("c", 7, "C"))
    assert outline_to_markdown(nodes) == "## A\n### B\n###### C"


def test_outline_to_prompt_text() -> None:
    """Sub-levels are indented ### headings."""

    nodes = make_nodes(("a", 1, "A"), ("b", 3, "B"))
    assert outline_to_prompt_text(nodes) == "## A\n  ### B"


def test_write_markdown_creates_parents(tmp_path: Path) -> None:
    """It should create missing directories and write UTF-8 text."""

    target = tmp_path / "out" / "article.md"
    assert write_markdown(target, "# Titre é") == target
    assert target.read_text(encoding="utf-8") == "# Titre é"
