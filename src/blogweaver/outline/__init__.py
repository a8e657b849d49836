"""Outline tree editor: a flat, leveled node list plus the operations that reshape it."""

from __future__ import annotations

from blogweaver.outline.drag import DragSession, DropProposal
from blogweaver.outline.drop import DropIntent, RowBounds, resolve_drop_zone, resolve_intent
from blogweaver.outline.errors import OutlineError, UnknownNodeError
from blogweaver.outline.store import OutlineStore

__all__ = [
    "DragSession",
    "DropIntent",
    "DropProposal",
    "OutlineError",
    "OutlineStore",
    "RowBounds",
    "UnknownNodeError",
    "resolve_drop_zone",
    "resolve_intent",
]
