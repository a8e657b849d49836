"""Interactive drag session.

A drag is a short-lived, two-phase interaction: ``start`` captures the dragged node, each
``over`` call recomputes a proposed drop without touching the outline (preview only), and
``end`` commits the last proposal atomically. ``cancel`` (or ending with no proposal) leaves
the outline exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass

from blogweaver.logging import get_logger
from blogweaver.outline.drop import DropIntent, RowBounds, resolve_drop_zone, resolve_intent
from blogweaver.outline.errors import OutlineError
from blogweaver.outline.store import OutlineStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class DropProposal:
    """A validated, not yet committed drop."""

    target_id: str
    intent: DropIntent


class DragSession:
    """Drag-and-drop state machine bound to one :class:`OutlineStore`."""

    def __init__(self, store: OutlineStore) -> None:
        self._store = store
        self._source_id: str | None = None
        self._proposal: DropProposal | None = None

    @property
    def active(self) -> bool:
        return self._source_id is not None

    @property
    def source_id(self) -> str | None:
        return self._source_id

    @property
    def proposal(self) -> DropProposal | None:
        return self._proposal

    def start(self, source_id: str) -> None:
        """Begin dragging ``source_id``; any previous session state is dropped."""

        self._store.index_of(source_id)
        self._source_id = source_id
        self._proposal = None
        logger.debug("Drag started", extra={"node_id": source_id})

    def over(
        self,
        target_id: str | None,
        bounds: RowBounds | None = None,
        pointer_y: float | None = None,
        *,
        intent: DropIntent | str | None = None,
    ) -> DropProposal | None:
        """Update the proposed drop for the row currently under the pointer.

        The intent is either given directly or resolved from ``bounds`` and ``pointer_y``.
        Hovering nothing, an unknown row, or the dragged row itself clears the proposal, as does
        a dragged row that has since been removed.

        Returns:
            The current proposal, or ``None``.
        """

        if self._source_id is None:
            raise OutlineError("no drag in progress")

        if target_id is None or target_id not in self._store or self._source_id not in self._store:
            self._proposal = None
            return None

        if intent is None:
            if bounds is None or pointer_y is None:
                raise OutlineError("either intent or bounds and pointer_y are required")
            intent = resolve_drop_zone(bounds, pointer_y)

        resolved = resolve_intent(self._store.nodes, self._source_id, target_id, intent)
        self._proposal = None if resolved is None else DropProposal(target_id=target_id, intent=resolved)
        return self._proposal

    def end(self) -> bool:
        """Commit the current proposal and close the session.

        Returns:
            ``True`` if the outline changed.
        """

        source_id, proposal = self._source_id, self._proposal
        self._reset()
        if source_id is None or proposal is None:
            return False
        if source_id not in self._store or proposal.target_id not in self._store:
            return False
        changed = self._store.relocate(source_id, proposal.target_id, proposal.intent)
        logger.debug(
            "Drag ended",
            extra={"node_id": source_id, "target_id": proposal.target_id, "changed": changed},
        )
        return changed

    def cancel(self) -> None:
        if self._source_id is not None:
            logger.debug("Drag cancelled", extra={"node_id": self._source_id})
        self._reset()

    def _reset(self) -> None:
        self._source_id = None
        self._proposal = None
