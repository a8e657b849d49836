"""Tree queries over a flat, leveled outline.

Every function here is pure: it takes the node sequence (and sometimes the collapse set) and
never mutates it. The parent of the node at ``i`` is the nearest preceding node with a
strictly smaller level, and a node's subtree is the contiguous run after it whose levels are
strictly greater than its own.
"""

from __future__ import annotations

from typing import AbstractSet, Iterator, Literal, Sequence

from blogweaver.models.outline import OutlineNode
from blogweaver.outline.errors import OutlineError

Direction = Literal["up", "down"]


def _check_index(nodes: Sequence[OutlineNode], index: int) -> None:
    if not 0 <= index < len(nodes):
        raise IndexError(f"outline index out of range: {index}")


def subtree_range(nodes: Sequence[OutlineNode], index: int) -> tuple[int, int]:
    """Return the half-open range ``[start, end)`` covering a node and its descendants.

    Only the subtree itself is scanned, so the cost is proportional to its size.

    Args:
        nodes: Outline sequence.
        index: Index of the subtree root.

    Returns:
        ``(index, end)`` where ``end`` is the first later index whose level is not greater
        than the root's, or ``len(nodes)``.
    """

    _check_index(nodes, index)
    level = nodes[index].level
    end = index + 1
    while end < len(nodes) and nodes[end].level > level:
        end += 1
    return index, end


def parent_index(nodes: Sequence[OutlineNode], index: int) -> int | None:
    """Return the index of the node's parent, or ``None`` for a root-level node."""

    _check_index(nodes, index)
    level = nodes[index].level
    for i in range(index - 1, -1, -1):
        if nodes[i].level < level:
            return i
    return None


def iter_ancestor_indices(nodes: Sequence[OutlineNode], index: int) -> Iterator[int]:
    """Yield ancestor indices, nearest first.

    Each step continues the backward scan from the previous ancestor, so the whole chain is
    found in one pass over the prefix.
    """

    _check_index(nodes, index)
    level = nodes[index].level
    for i in range(index - 1, -1, -1):
        if nodes[i].level < level:
            yield i
            level = nodes[i].level
            if level <= 1:
                return


def ancestor_indices(nodes: Sequence[OutlineNode], index: int) -> list[int]:
    return list(iter_ancestor_indices(nodes, index))


def is_descendant(nodes: Sequence[OutlineNode], ancestor: int, index: int) -> bool:
    """True if ``index`` lies strictly inside the subtree rooted at ``ancestor``."""

    start, end = subtree_range(nodes, ancestor)
    return start < index < end


def has_children(nodes: Sequence[OutlineNode], index: int) -> bool:
    """True iff the immediately following node is nested under this one."""

    _check_index(nodes, index)
    return index + 1 < len(nodes) and nodes[index + 1].level > nodes[index].level


def is_visible(nodes: Sequence[OutlineNode], collapsed_ids: AbstractSet[str], index: int) -> bool:
    """True iff no ancestor of the node is collapsed.

    A collapsed node is itself still visible; only its descendants are hidden.
    """

    if not collapsed_ids:
        _check_index(nodes, index)
        return True
    return not any(nodes[i].id in collapsed_ids for i in iter_ancestor_indices(nodes, index))


def visible_indices(nodes: Sequence[OutlineNode], collapsed_ids: AbstractSet[str]) -> list[int]:
    """Indices of the visible projection, in document order."""

    out: list[int] = []
    i = 0
    while i < len(nodes):
        out.append(i)
        if nodes[i].id in collapsed_ids:
            # skip the hidden subtree in one jump
            i = subtree_range(nodes, i)[1]
        else:
            i += 1
    return out


def visible_nodes(nodes: Sequence[OutlineNode], collapsed_ids: AbstractSet[str]) -> list[OutlineNode]:
    """Return the ordered subsequence of nodes that are currently displayed."""

    return [nodes[i] for i in visible_indices(nodes, collapsed_ids)]


def sibling_index(nodes: Sequence[OutlineNode], index: int, direction: Direction) -> int | None:
    """Find the nearest same-level sibling in ``direction``.

    Deeper nodes (the node's own descendants going down, or the previous sibling's
    descendants going up) are skipped. Reaching a shallower node or the edge of the sequence
    means there is no sibling.

    Returns:
        The sibling's index, or ``None``.
    """

    _check_index(nodes, index)
    level = nodes[index].level
    if direction == "up":
        i = index - 1
        while i >= 0 and nodes[i].level > level:
            i -= 1
        if i >= 0 and nodes[i].level == level:
            return i
        return None
    if direction == "down":
        i = subtree_range(nodes, index)[1]
        if i < len(nodes) and nodes[i].level == level:
            return i
        return None
    raise OutlineError(f"invalid move direction: {direction!r}")


def validate_outline(nodes: Sequence[OutlineNode]) -> None:
    """Check an externally produced outline before it becomes canonical.

    Levels are validated by the model (``level >= 1``); nesting jumps larger than one level are
    accepted. Ids must be unique because every operation addresses nodes by id.

    Raises:
        OutlineError: On a duplicate id.
    """

    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            raise OutlineError(f"duplicate outline node id: {node.id!r}")
        seen.add(node.id)
