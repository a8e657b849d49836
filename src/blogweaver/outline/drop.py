"""Drop-zone resolution for drag-and-drop re-parenting.

A drop is described by a target row and an intent: land before it, after it (past its whole
subtree), or nested as its first child. The intent comes from where the pointer is released
within the target row, which is split into three equal horizontal bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from blogweaver.models.outline import OutlineNode
from blogweaver.outline import tree
from blogweaver.outline.errors import OutlineError, UnknownNodeError


class DropIntent(str, Enum):
    """Where a dragged subtree lands relative to the target node."""

    BEFORE = "before"
    AFTER = "after"
    CHILD = "child"

    @classmethod
    def parse(cls, value: "DropIntent | str") -> "DropIntent":
        try:
            return cls(value)
        except ValueError:
            raise OutlineError(f"invalid drop intent: {value!r}") from None


@dataclass(frozen=True)
class RowBounds:
    """Vertical extent of a target row in screen coordinates."""

    top: float
    height: float


def resolve_drop_zone(bounds: RowBounds, pointer_y: float) -> DropIntent:
    """Map a pointer position over a row to a drop intent.

    Top third -> ``before``, bottom third -> ``after``, middle -> ``child``. Positions above or
    below the row fall into the nearest band.
    """

    if bounds.height <= 0:
        return DropIntent.CHILD
    relative_y = pointer_y - bounds.top
    threshold = bounds.height / 3
    if relative_y < threshold:
        return DropIntent.BEFORE
    if relative_y > bounds.height - threshold:
        return DropIntent.AFTER
    return DropIntent.CHILD


def _index_of(nodes: Sequence[OutlineNode], node_id: str) -> int:
    for i, node in enumerate(nodes):
        if node.id == node_id:
            return i
    raise UnknownNodeError(node_id)


def resolve_intent(
    nodes: Sequence[OutlineNode],
    source_id: str,
    target_id: str,
    intent: DropIntent | str,
) -> DropIntent | None:
    """Validate a proposed drop against the outline.

    Dropping a node onto itself is not a drop (``None``). Nesting a node under one of its own
    descendants would create a cycle, so ``child`` is downgraded to ``after`` in that case.
    """

    intent = DropIntent.parse(intent)
    if source_id == target_id:
        return None
    if intent is DropIntent.CHILD:
        source_at = _index_of(nodes, source_id)
        target_at = _index_of(nodes, target_id)
        if tree.is_descendant(nodes, source_at, target_at):
            return DropIntent.AFTER
    return intent
