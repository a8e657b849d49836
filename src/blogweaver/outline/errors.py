"""Outline editor errors."""

from __future__ import annotations


class OutlineError(ValueError):
    """Raised when an outline operation is called with invalid arguments."""


class UnknownNodeError(OutlineError, KeyError):
    """Raised when an operation references a node id that is not in the outline."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"unknown outline node: {self.node_id!r}"
