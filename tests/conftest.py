"""Shared fixtures."""

from __future__ import annotations

import pytest

from blogweaver.models.outline import OutlineNode
from blogweaver.outline.store import OutlineStore
from blogweaver.utils.ids import sequential_ids

from outline_helpers import make_nodes


@pytest.fixture
def abc() -> list[OutlineNode]:
    """A(1) > B(2), C(1)."""

    return make_nodes(("1", 1, "A"), ("2", 2, "B"), ("3", 1, "C"))


@pytest.fixture
def deep() -> list[OutlineNode]:
    """r1 > a > (a1 > a1x), b ; r2 > c ; r3."""

    return make_nodes(
        ("r1", 1, "Root 1"),
        ("a", 2, "A"),
        ("a1", 3, "A1"),
        ("a1x", 4, "A1x"),
        ("b", 2, "B"),
        ("r2", 1, "Root 2"),
        ("c", 2, "C"),
        ("r3", 1, "Root 3"),
    )


@pytest.fixture
def store(deep: list[OutlineNode]) -> OutlineStore:
    return OutlineStore(deep, id_factory=sequential_ids("new"))
