"""Helpers for building outlines in tests."""

from __future__ import annotations

from typing import Iterable

from blogweaver.models.outline import OutlineNode


def make_nodes(*items: tuple[str, int, str]) -> list[OutlineNode]:
    """Build nodes from ``(id, level, title)`` triples."""

    return [OutlineNode(id=i, level=level, title=title) for i, level, title in items]


def ids(nodes: Iterable[OutlineNode]) -> list[str]:
    return [n.id for n in nodes]


def levels(nodes: Iterable[OutlineNode]) -> list[int]:
    return [n.level for n in nodes]
