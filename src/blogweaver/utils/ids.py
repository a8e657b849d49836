"""ID utilities."""

from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[], str]


def new_node_id() -> str:
    """Return a fresh, collision-resistant outline node id."""

    return uuid.uuid4().hex


def new_session_id() -> str:
    """Return a fresh wizard session id."""

    return f"ses_{uuid.uuid4().hex[:12]}"


def sequential_ids(prefix: str = "n") -> IdFactory:
    """Return an id factory yielding ``n1``, ``n2``, ... (useful for tests and replays).

    Args:
        prefix: ID prefix.
    """

    counter = 0

    def _next() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}{counter}"

    return _next
