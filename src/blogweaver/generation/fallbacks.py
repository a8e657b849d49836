"""Deterministic placeholder content used when generation fails."""

from __future__ import annotations

from typing import Sequence

from blogweaver.models.outline import OutlineNode
from blogweaver.utils.ids import IdFactory, new_node_id


def fallback_titles(theme: str) -> list[str]:
    return [
        f"Title idea 1 about {theme}",
        f"Title idea 2 about {theme}",
        f"Title idea 3 about {theme}",
        f"{theme} explained: a beginner-friendly guide",
        f"[Latest] The complete {theme} manual",
    ]


_FALLBACK_OUTLINE: tuple[tuple[str, int], ...] = (
    ("Introduction", 1),
    ("Overview of {title}", 1),
    ("Key points", 2),
    ("Essential background", 1),
    ("Practical advice", 1),
    ("Applied examples", 2),
    ("Summary", 1),
)


def fallback_outline(title: str, *, id_factory: IdFactory = new_node_id) -> list[OutlineNode]:
    return [
        OutlineNode(id=id_factory(), title=text.format(title=title), level=level)
        for text, level in _FALLBACK_OUTLINE
    ]


def fallback_content(theme: str, title: str, outline: Sequence[OutlineNode]) -> str:
    """Build a markdown article skeleton from the outline."""

    sections: list[str] = []
    for node in outline:
        if node.level == 1:
            sections.append(
                f"\n## {node.title}\n"
                f'This section covers "{node.title}". Let\'s build an understanding of why '
                f"{node.title} matters for {theme} and of its basic concepts.\n"
            )
        else:
            sections.append(
                f"\n### {node.title}\n"
                f"Details on {node.title}. Getting this point right will deepen your "
                f"understanding of {theme}.\n"
            )
    return (
        f"# {title}\n\n"
        f"## Introduction\n"
        f"This article is about {theme}. This guide walks through everything from the basics "
        f"to practical topics, step by step.\n\n"
        f"{''.join(sections)}\n\n"
        f"## Wrap-up\n"
        f"That concludes the basic guide to {theme}. Use this article as a reference and try "
        f"it out yourself."
    )
