"""Tests for add_child and remove_subtree."""

from __future__ import annotations

import random

import pytest

from tree_editor.exceptions import DepthLimitExceededError, NodeNotFoundError, ProtectedRootError
from tree_editor.ids import IdCounter
from tree_editor.model import Tree, TreeNode, iter_preorder, node_depth, subtree_ids
from tree_editor.mutation import add_child, remove_subtree
from tree_editor.persistence import serialize_tree


def _assert_consistent(tree: Tree) -> None:
    reachable = [n.id for n in iter_preorder(tree)]
    assert len(reachable) == len(set(reachable))
    assert set(reachable) == set(tree.nodes)
    for node in tree.nodes.values():
        for cid in node.children:
            assert tree.nodes[cid].parent == node.id


class TestAddChild:
    """Tests for add_child function."""

    def test_first_child(self, tree: Tree, counter: IdCounter) -> None:
        """First add under root yields n1 labelled Node 1."""
        child = add_child(tree, counter, "n0")
        assert child.id == "n1"
        assert child.label == "Node 1"
        assert child.parent == "n0"
        assert tree.root.children == ["n1"]

    def test_new_child_is_last(self, tree: Tree, counter: IdCounter) -> None:
        """Existing order is kept and the new child is appended."""
        for _ in range(3):
            add_child(tree, counter, "n0")
        assert tree.root.children == ["n1", "n2", "n3"]

    def test_unknown_parent(self, tree: Tree, counter: IdCounter) -> None:
        """Unknown parent raises and leaves tree and counter untouched."""
        with pytest.raises(NodeNotFoundError):
            add_child(tree, counter, "n42")
        assert len(tree) == 1
        assert counter.next_value == 1

    def test_depth_limit(self, tree: Tree, counter: IdCounter) -> None:
        """A child deeper than max_depth is rejected before any change."""
        parent = "n0"
        for _ in range(9):
            parent = add_child(tree, counter, parent).id
        assert node_depth(tree, parent) == 10

        before = serialize_tree(tree)
        next_value = counter.next_value
        with pytest.raises(DepthLimitExceededError) as exc:
            add_child(tree, counter, parent, max_depth=10)

        assert exc.value.depth == 11
        assert exc.value.max_depth == 10
        assert serialize_tree(tree) == before
        assert counter.next_value == next_value

    def test_custom_max_depth(self, tree: Tree, counter: IdCounter) -> None:
        """max_depth=1 forbids any child of the root."""
        with pytest.raises(DepthLimitExceededError):
            add_child(tree, counter, "n0", max_depth=1)

    def test_custom_label(self, tree: Tree, counter: IdCounter) -> None:
        child = add_child(tree, counter, "n0", label_for=lambda n: f"Item #{n}")
        assert child.label == "Item #1"

    def test_ids_not_reused_after_delete(self, tree: Tree, counter: IdCounter) -> None:
        """Deleting the newest node does not free its id."""
        add_child(tree, counter, "n0")
        remove_subtree(tree, "n1")
        assert add_child(tree, counter, "n0").id == "n2"

    def test_skips_ids_already_present(self, tree: Tree) -> None:
        """A counter behind the arena skips ids that already exist."""
        tree.nodes["n1"] = TreeNode(id="n1", label="restored", parent="n0")
        tree.root.children.append("n1")
        child = add_child(tree, IdCounter(), "n0")
        assert child.id == "n2"
        assert child.label == "Node 2"


class TestRemoveSubtree:
    """Tests for remove_subtree function."""

    def test_removes_node_and_descendants(self, sample_tree: Tree) -> None:
        """Removing n1 drops n1, n3, n4 and nothing else."""
        removed = remove_subtree(sample_tree, "n1")
        assert removed == ["n1", "n3", "n4"]
        assert set(sample_tree.nodes) == {"n0", "n2"}
        assert sample_tree.root.children == ["n2"]
        _assert_consistent(sample_tree)

    def test_removes_leaf(self, sample_tree: Tree) -> None:
        assert remove_subtree(sample_tree, "n3") == ["n3"]
        assert sample_tree.nodes["n1"].children == ["n4"]

    def test_root_is_protected(self, sample_tree: Tree) -> None:
        """Root cannot be removed; tree unchanged."""
        before = serialize_tree(sample_tree)
        with pytest.raises(ProtectedRootError):
            remove_subtree(sample_tree, "n0")
        assert serialize_tree(sample_tree) == before

    def test_unknown_id(self, sample_tree: Tree) -> None:
        """Unknown ids raise NodeNotFoundError without touching the tree."""
        with pytest.raises(NodeNotFoundError):
            remove_subtree(sample_tree, "n99")
        assert len(sample_tree) == 5


class TestRandomEdits:
    """Invariants after arbitrary edit sequences."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_ids_unique_and_counts_exact(self, seed: int) -> None:
        rng = random.Random(seed)
        tree = Tree(root_id="n0")
        tree.nodes["n0"] = TreeNode(id="n0", label="Root")
        counter = IdCounter()
        issued = {"n0"}

        for _ in range(200):
            target = rng.choice(sorted(tree.nodes))
            if rng.random() < 0.7:
                try:
                    child = add_child(tree, counter, target, max_depth=6)
                except DepthLimitExceededError:
                    continue
                assert child.id not in issued
                issued.add(child.id)
                assert node_depth(tree, child.id) <= 6
            elif target != tree.root_id:
                size = len(subtree_ids(tree, target))
                before = len(tree)
                remove_subtree(tree, target)
                assert len(tree) == before - size
            _assert_consistent(tree)
