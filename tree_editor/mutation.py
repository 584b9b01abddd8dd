"""
mutation.py

Structural edits: add a child, remove a subtree.

Every check runs before the tree is touched, so an edit is either fully
applied or rejected with the tree unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from .config import DEFAULT_MAX_DEPTH
from .exceptions import DepthLimitExceededError, NodeNotFoundError, ProtectedRootError
from .ids import IdCounter
from .model import Tree, TreeNode, node_depth, subtree_ids

logger = logging.getLogger(__name__)


def default_label(value: int) -> str:
    return f"Node {value}"


def add_child(
    tree: Tree,
    counter: IdCounter,
    parent_id: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    label_for: Callable[[int], str] = default_label,
) -> TreeNode:
    """
    Append a new child to parent_id and return it.

    Raises:
      NodeNotFoundError: parent_id is not in the tree
      DepthLimitExceededError: the child would sit deeper than max_depth

    The new child becomes the last entry of the parent's children.
    """
    parent_depth = node_depth(tree, parent_id)
    if parent_depth is None:
        raise NodeNotFoundError(parent_id)

    child_depth = parent_depth + 1
    if child_depth > max_depth:
        raise DepthLimitExceededError(child_depth, max_depth)

    value = counter.mint()
    new_id = counter.format_id(value)
    # Restored trees may hold ids the counter did not issue.
    while new_id in tree.nodes:
        value = counter.mint()
        new_id = counter.format_id(value)

    child = TreeNode(id=new_id, label=label_for(value), parent=parent_id)
    tree.nodes[new_id] = child
    tree.nodes[parent_id].children.append(new_id)

    logger.debug("Added %s under %s (depth %d)", new_id, parent_id, child_depth)
    return child


def remove_subtree(tree: Tree, node_id: str) -> List[str]:
    """
    Detach node_id from its parent and discard it with all descendants.

    Returns the removed ids in pre-order.

    Raises:
      ProtectedRootError: node_id is the root
      NodeNotFoundError: node_id is not in the tree
    """
    if node_id == tree.root_id:
        raise ProtectedRootError(f"Root node {node_id} cannot be removed")

    node = tree.nodes.get(node_id)
    if node is None or node.parent is None:
        raise NodeNotFoundError(node_id)

    removed = subtree_ids(tree, node_id)

    parent = tree.nodes[node.parent]
    parent.children = [cid for cid in parent.children if cid != node_id]
    for rid in removed:
        del tree.nodes[rid]

    logger.debug("Removed subtree %s (%d nodes)", node_id, len(removed))
    return removed
