"""Outline store.

The store owns the canonical node list together with the presentational collapse set. The
node list is the only source of truth for structure; the collapse set is keyed by id and never
affects order or levels.

Structural mutations build the new list completely before swapping it in, and the id -> index
map is rebuilt right after, so callers never see a half-applied change.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from blogweaver.logging import get_logger
from blogweaver.models.outline import OutlineNode
from blogweaver.outline import tree
from blogweaver.outline.drop import DropIntent, resolve_intent
from blogweaver.outline.errors import OutlineError, UnknownNodeError
from blogweaver.utils.ids import IdFactory, new_node_id

logger = get_logger(__name__)

DEFAULT_NODE_TITLE = "New item"


class OutlineStore:
    """In-memory outline editor state for one editing session."""

    def __init__(
        self,
        nodes: Iterable[OutlineNode] = (),
        *,
        id_factory: IdFactory = new_node_id,
        default_title: str = DEFAULT_NODE_TITLE,
    ) -> None:
        self._id_factory = id_factory
        self._default_title = default_title
        self._nodes: list[OutlineNode] = []
        self._collapsed: set[str] = set()
        self._index: dict[str, int] = {}
        self.replace(nodes)

    # ------------------------------------------------------------------
    # Read access

    @property
    def nodes(self) -> tuple[OutlineNode, ...]:
        return tuple(self._nodes)

    @property
    def collapsed_ids(self) -> frozenset[str]:
        return frozenset(self._collapsed)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[OutlineNode]:
        return iter(tuple(self._nodes))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def index_of(self, node_id: str) -> int:
        try:
            return self._index[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def get(self, node_id: str) -> OutlineNode:
        return self._nodes[self.index_of(node_id)]

    def subtree(self, node_id: str) -> list[OutlineNode]:
        """Return the node and all of its descendants, in order."""

        start, end = tree.subtree_range(self._nodes, self.index_of(node_id))
        return self._nodes[start:end]

    def parent(self, node_id: str) -> OutlineNode | None:
        i = tree.parent_index(self._nodes, self.index_of(node_id))
        return None if i is None else self._nodes[i]

    def has_children(self, node_id: str) -> bool:
        return tree.has_children(self._nodes, self.index_of(node_id))

    def is_collapsed(self, node_id: str) -> bool:
        self.index_of(node_id)
        return node_id in self._collapsed

    def is_visible(self, node_id: str) -> bool:
        return tree.is_visible(self._nodes, self._collapsed, self.index_of(node_id))

    def visible_nodes(self) -> list[OutlineNode]:
        return tree.visible_nodes(self._nodes, self._collapsed)

    def can_move(self, node_id: str, direction: tree.Direction) -> bool:
        """Whether :meth:`move` would do anything (drives the up/down button state)."""

        return tree.sibling_index(self._nodes, self.index_of(node_id), direction) is not None

    # ------------------------------------------------------------------
    # Whole-outline replacement

    def replace(self, nodes: Iterable[OutlineNode]) -> None:
        """Replace the outline wholesale, e.g. after regeneration.

        Raises:
            OutlineError: If two nodes share an id.
        """

        new_nodes = list(nodes)
        tree.validate_outline(new_nodes)
        self._nodes = new_nodes
        self._collapsed.clear()
        self._reindex()
        logger.debug("Outline replaced", extra={"node_count": len(new_nodes)})

    def _reindex(self) -> None:
        self._index = {node.id: i for i, node in enumerate(self._nodes)}

    def _commit(self, new_nodes: list[OutlineNode]) -> None:
        self._nodes = new_nodes
        self._reindex()

    # ------------------------------------------------------------------
    # Add / remove / rename

    def add(self, parent_id: str | None = None, *, title: str | None = None) -> OutlineNode:
        """Create a node as the last child of ``parent_id`` or as a new last root.

        The parent is expanded so the new child is visible.

        Raises:
            UnknownNodeError: If ``parent_id`` is given but not in the outline.
        """

        node_title = self._default_title if title is None else title
        if parent_id is None:
            node = OutlineNode(id=self._new_id(), title=node_title, level=1)
            insert_at = len(self._nodes)
        else:
            parent_at = self.index_of(parent_id)
            parent = self._nodes[parent_at]
            node = OutlineNode(id=self._new_id(), title=node_title, level=parent.level + 1)
            insert_at = tree.subtree_range(self._nodes, parent_at)[1]
            self._collapsed.discard(parent_id)

        new_nodes = list(self._nodes)
        new_nodes.insert(insert_at, node)
        self._commit(new_nodes)
        logger.debug("Outline node added", extra={"node_id": node.id, "parent_id": parent_id, "at": insert_at})
        return node

    def _new_id(self) -> str:
        node_id = self._id_factory()
        if node_id in self._index:
            raise OutlineError(f"id factory returned an id already in use: {node_id!r}")
        return node_id

    def remove(self, node_id: str) -> list[OutlineNode]:
        """Delete a node together with its whole subtree.

        Returns:
            The removed nodes, in their former order.
        """

        start, end = tree.subtree_range(self._nodes, self.index_of(node_id))
        removed = self._nodes[start:end]
        self._commit(self._nodes[:start] + self._nodes[end:])
        self._collapsed.difference_update(n.id for n in removed)
        logger.debug("Outline subtree removed", extra={"node_id": node_id, "count": len(removed)})
        return removed

    def rename(self, node_id: str, title: str) -> OutlineNode:
        at = self.index_of(node_id)
        node = self._nodes[at].model_copy(update={"title": title})
        self._nodes[at] = node
        return node

    # ------------------------------------------------------------------
    # Reordering

    def move(self, node_id: str, direction: tree.Direction) -> bool:
        """Swap a subtree with its nearest same-level sibling in ``direction``.

        Returns:
            ``False`` if there is no sibling that way (the outline is unchanged).
        """

        at = self.index_of(node_id)
        sibling = tree.sibling_index(self._nodes, at, direction)
        if sibling is None:
            return False

        start, end = tree.subtree_range(self._nodes, at)
        moving = self._nodes[start:end]
        rest = self._nodes[:start] + self._nodes[end:]
        if direction == "up":
            # the sibling sits before the mover, so its index is unaffected by the removal
            insert_at = sibling
        else:
            sib_end = tree.subtree_range(self._nodes, sibling)[1]
            insert_at = sib_end - len(moving)
        self._commit(rest[:insert_at] + moving + rest[insert_at:])
        logger.debug("Outline subtree moved", extra={"node_id": node_id, "direction": direction})
        return True

    def relocate(self, source_id: str, target_id: str, intent: DropIntent | str) -> bool:
        """Move a subtree next to (or under) a target node, re-leveling it.

        ``before``/``after`` make the source a sibling of the target; ``after`` lands past the
        target's whole subtree. ``child`` makes it the target's first child and expands the
        target. Relative levels inside the moved subtree are preserved.

        Returns:
            ``False`` when the gesture is a no-op (dropping onto itself or inside its own
            subtree); the outline is unchanged in that case.
        """

        source_at = self.index_of(source_id)
        self.index_of(target_id)
        resolved = resolve_intent(self._nodes, source_id, target_id, intent)
        if resolved is None:
            return False

        start, end = tree.subtree_range(self._nodes, source_at)
        target_at = self._index[target_id]
        if start <= target_at < end:
            return False

        moving = self._nodes[start:end]
        rest = self._nodes[:start] + self._nodes[end:]
        target_at = target_at if target_at < start else target_at - len(moving)
        target = rest[target_at]

        if resolved is DropIntent.BEFORE:
            insert_at, new_level = target_at, target.level
        elif resolved is DropIntent.AFTER:
            insert_at, new_level = tree.subtree_range(rest, target_at)[1], target.level
        else:
            insert_at, new_level = target_at + 1, target.level + 1

        delta = new_level - moving[0].level
        if delta:
            moving = [n.shifted(delta) for n in moving]
        self._commit(rest[:insert_at] + moving + rest[insert_at:])
        if resolved is DropIntent.CHILD:
            self._collapsed.discard(target_id)
        logger.debug(
            "Outline subtree relocated",
            extra={"node_id": source_id, "target_id": target_id, "intent": resolved.value, "delta": delta},
        )
        return True

    # ------------------------------------------------------------------
    # Collapse state

    def toggle_collapse(self, node_id: str) -> bool:
        """Flip the collapsed flag of a node.

        Returns:
            The new collapsed state.
        """

        self.index_of(node_id)
        if node_id in self._collapsed:
            self._collapsed.remove(node_id)
            return False
        self._collapsed.add(node_id)
        return True

    def collapse(self, node_id: str) -> None:
        self.index_of(node_id)
        self._collapsed.add(node_id)

    def expand(self, node_id: str) -> None:
        self.index_of(node_id)
        self._collapsed.discard(node_id)

    def expand_all(self) -> None:
        self._collapsed.clear()
