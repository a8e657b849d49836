"""Tests for the pure outline tree queries."""

from __future__ import annotations

import itertools

import pytest

from blogweaver.outline import tree
from blogweaver.outline.errors import OutlineError

from outline_helpers import ids, make_nodes


def test_subtree_range_covers_descendants_only(deep) -> None:
    """It should stop at the first node that is not deeper than the root."""

    assert tree.subtree_range(deep, 0) == (0, 5)
    assert tree.subtree_range(deep, 1) == (1, 4)
    assert tree.subtree_range(deep, 3) == (3, 4)
    assert tree.subtree_range(deep, 5) == (5, 7)
    assert tree.subtree_range(deep, 7) == (7, 8)


def test_subtree_range_rejects_out_of_range_index(deep) -> None:
    """It should raise IndexError rather than return a bogus range."""

    with pytest.raises(IndexError):
        tree.subtree_range(deep, 8)
    with pytest.raises(IndexError):
        tree.subtree_range([], 0)


def test_subtree_range_contiguity_holds_for_arbitrary_outlines() -> None:
    """Every range member is deeper than the root and the next node is not."""

    for level_seq in itertools.product([1, 2, 3, 5], repeat=5):
        nodes = make_nodes(*[(str(i), lvl, "x") for i, lvl in enumerate(level_seq)])
        for index in range(len(nodes)):
            start, end = tree.subtree_range(nodes, index)
            root = nodes[start].level
            assert start == index
            assert all(n.level > root for n in nodes[start + 1 : end])
            if end < len(nodes):
                assert nodes[end].level <= root


def test_parent_and_ancestors(deep) -> None:
    """It should find the nearest shallower node going backwards."""

    assert tree.parent_index(deep, 0) is None
    assert tree.parent_index(deep, 3) == 2
    assert tree.parent_index(deep, 4) == 0
    assert tree.ancestor_indices(deep, 3) == [2, 1, 0]
    assert tree.ancestor_indices(deep, 6) == [5]
    assert tree.ancestor_indices(deep, 7) == []


def test_parent_skips_level_gaps() -> None:
    """A jump of more than one level still nests under the nearest shallower node."""

    nodes = make_nodes(("a", 1, "A"), ("b", 3, "B"), ("c", 2, "C"))
    assert tree.parent_index(nodes, 1) == 0
    assert tree.parent_index(nodes, 2) == 0
    assert tree.subtree_range(nodes, 0) == (0, 3)


def test_is_descendant(deep) -> None:
    """It should only be true strictly inside the subtree."""

    assert tree.is_descendant(deep, 0, 3)
    assert tree.is_descendant(deep, 0, 4)
    assert not tree.is_descendant(deep, 0, 0)
    assert not tree.is_descendant(deep, 0, 5)
    assert not tree.is_descendant(deep, 3, 0)


def test_has_children(deep) -> None:
    """It should look only at the immediately following node."""

    assert tree.has_children(deep, 0)
    assert tree.has_children(deep, 2)
    assert not tree.has_children(deep, 3)
    assert not tree.has_children(deep, 4)
    assert not tree.has_children(deep, 7)


def test_visible_nodes_hide_descendants_of_collapsed(deep) -> None:
    """It should keep the collapsed node itself and hide everything under it."""

    assert ids(tree.visible_nodes(deep, {"a"})) == ["r1", "a", "b", "r2", "c", "r3"]
    assert ids(tree.visible_nodes(deep, {"r1"})) == ["r1", "r2", "c", "r3"]
    assert ids(tree.visible_nodes(deep, set())) == ids(deep)


def test_visible_nodes_nested_collapse(deep) -> None:
    """A collapsed node inside a collapsed subtree stays hidden."""

    assert ids(tree.visible_nodes(deep, {"r1", "a1"})) == ["r1", "r2", "c", "r3"]


def test_visibility_matches_collapse_set(deep) -> None:
    """A node is visible iff none of its ancestors is collapsed."""

    all_ids = ids(deep)
    for size in range(3):
        for collapsed in itertools.combinations(all_ids, size):
            collapsed_set = set(collapsed)
            visible = set(ids(tree.visible_nodes(deep, collapsed_set)))
            for index, node in enumerate(deep):
                hidden = any(deep[a].id in collapsed_set for a in tree.ancestor_indices(deep, index))
                assert (node.id in visible) is not hidden
                assert tree.is_visible(deep, collapsed_set, index) is not hidden


def test_sibling_index(deep) -> None:
    """It should skip deeper nodes and stop at shallower ones."""

    assert tree.sibling_index(deep, 4, "up") == 1
    assert tree.sibling_index(deep, 1, "down") == 4
    assert tree.sibling_index(deep, 1, "up") is None
    assert tree.sibling_index(deep, 4, "down") is None
    assert tree.sibling_index(deep, 5, "up") == 0
    assert tree.sibling_index(deep, 0, "down") == 5
    assert tree.sibling_index(deep, 7, "down") is None
    assert tree.sibling_index(deep, 6, "up") is None


def test_sibling_index_rejects_unknown_direction(deep) -> None:
    """It should raise for anything but up/down."""

    with pytest.raises(OutlineError):
        tree.sibling_index(deep, 0, "left")  # type: ignore[arg-type]


def test_validate_outline_rejects_duplicate_ids() -> None:
    """It should refuse an outline that addresses two nodes with one id."""

    with pytest.raises(OutlineError):
        tree.validate_outline(make_nodes(("a", 1, "A"), ("a", 2, "B")))
    tree.validate_outline(make_nodes(("a", 2, "A"), ("b", 5, "B")))
