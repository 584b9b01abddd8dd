"""Tests for tree model queries."""

from __future__ import annotations

from tree_editor.model import (
    Tree,
    find_node,
    find_parent,
    iter_preorder,
    new_tree,
    node_count,
    node_depth,
    subtree_ids,
    tree_depth,
)


class TestNewTree:
    """Tests for new_tree function."""

    def test_fresh_root(self) -> None:
        """Fresh tree is a single root n0 labelled Root."""
        tree = new_tree()
        assert tree.root_id == "n0"
        assert tree.root.label == "Root"
        assert tree.root.children == []
        assert tree.root.parent is None
        assert len(tree) == 1


class TestFindNode:
    """Tests for find_node and find_parent."""

    def test_finds_existing(self, sample_tree: Tree) -> None:
        """Returns the node for a known id."""
        node = find_node(sample_tree, "n3")
        assert node is not None
        assert node.label == "Node 3"

    def test_unknown_returns_none(self, sample_tree: Tree) -> None:
        """Returns None for an unknown id."""
        assert find_node(sample_tree, "n99") is None

    def test_parent_of_child(self, sample_tree: Tree) -> None:
        """Parent of n4 is n1."""
        parent = find_parent(sample_tree, "n4")
        assert parent is not None
        assert parent.id == "n1"

    def test_parent_of_root_is_none(self, sample_tree: Tree) -> None:
        """Root has no parent."""
        assert find_parent(sample_tree, "n0") is None

    def test_parent_of_unknown_is_none(self, sample_tree: Tree) -> None:
        """Unknown id has no parent."""
        assert find_parent(sample_tree, "nope") is None


class TestDepth:
    """Tests for node_depth and tree_depth."""

    def test_node_depth_is_one_based(self, sample_tree: Tree) -> None:
        """Root is depth 1, grandchildren depth 3."""
        assert node_depth(sample_tree, "n0") == 1
        assert node_depth(sample_tree, "n2") == 2
        assert node_depth(sample_tree, "n3") == 3

    def test_node_depth_unknown(self, sample_tree: Tree) -> None:
        """Unknown id signals not-found with None."""
        assert node_depth(sample_tree, "missing") is None

    def test_tree_depth_single_root(self, tree: Tree) -> None:
        """A lone root is depth 1."""
        assert tree_depth(tree) == 1

    def test_tree_depth(self, sample_tree: Tree) -> None:
        """Height counts the deepest leaf."""
        assert tree_depth(sample_tree) == 3


class TestTraversal:
    """Tests for iter_preorder, subtree_ids and node_count."""

    def test_preorder_left_to_right(self, sample_tree: Tree) -> None:
        """Pre-order visits children in their stored order."""
        assert [n.id for n in iter_preorder(sample_tree)] == ["n0", "n1", "n3", "n4", "n2"]

    def test_preorder_from_unknown_start(self, sample_tree: Tree) -> None:
        """Walking from an unknown id yields nothing."""
        assert list(iter_preorder(sample_tree, "zzz")) == []

    def test_subtree_ids(self, sample_tree: Tree) -> None:
        """Subtree contains the node and all descendants."""
        assert subtree_ids(sample_tree, "n1") == ["n1", "n3", "n4"]
        assert subtree_ids(sample_tree, "n2") == ["n2"]

    def test_node_count(self, sample_tree: Tree) -> None:
        assert node_count(sample_tree) == 5
