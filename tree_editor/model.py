"""
model.py

Internal data shapes for the editable tree, plus read-only structural queries.

Think of this as:
- "What is a tree?"  -> a root id and an arena of nodes keyed by id
- "What does a node look like?" -> id, label, parent id, ordered child ids

It does NOT mutate the tree (see mutation.py).
It does NOT compute positions (see layout.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

DEFAULT_ROOT_ID = "n0"
DEFAULT_ROOT_LABEL = "Root"


@dataclass
class TreeNode:
    """
    One node in the tree.

    parent:
      - id of the parent node, None for the root
      - lookup only; a node is owned by the arena, not by its parent
    children:
      - ordered child ids (left-to-right layout order)
    """

    id: str
    label: str
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)


@dataclass
class Tree:
    """
    A rooted tree stored as an arena.

    root_id:
      - id of the root node (reserved, never removable)
    nodes:
      - dict mapping node id -> TreeNode
      - holds exactly the nodes reachable from the root
    """

    root_id: str
    nodes: Dict[str, TreeNode] = field(default_factory=dict)

    @property
    def root(self) -> TreeNode:
        return self.nodes[self.root_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)


def new_tree(root_id: str = DEFAULT_ROOT_ID, root_label: str = DEFAULT_ROOT_LABEL) -> Tree:
    return Tree(root_id=root_id, nodes={root_id: TreeNode(id=root_id, label=root_label)})


def find_node(tree: Tree, node_id: str) -> Optional[TreeNode]:
    # Ids are unique across the arena, so the first match is the only match.
    return tree.nodes.get(node_id)


def find_parent(tree: Tree, node_id: str) -> Optional[TreeNode]:
    """
    Return the parent of node_id.

    None if node_id is the root or is not in the tree.
    """
    node = tree.nodes.get(node_id)
    if node is None or node.parent is None:
        return None
    return tree.nodes.get(node.parent)


def node_depth(tree: Tree, node_id: str) -> Optional[int]:
    """
    1-based depth of node_id (root = 1).

    Returns None when node_id is not in the tree.
    """
    node = tree.nodes.get(node_id)
    if node is None:
        return None

    depth = 1
    while node.parent is not None:
        node = tree.nodes[node.parent]
        depth += 1
    return depth


def tree_depth(tree: Tree) -> int:
    """
    Height of the tree: a lone leaf is 1.
    """
    best = 0
    stack: List[Tuple[str, int]] = [(tree.root_id, 1)]

    while stack:
        node_id, depth = stack.pop()
        best = max(best, depth)
        for kid in tree.nodes[node_id].children:
            stack.append((kid, depth + 1))

    return best


def iter_preorder(tree: Tree, start: Optional[str] = None) -> Iterator[TreeNode]:
    """
    Depth-first pre-order walk, children visited left-to-right.
    """
    first = tree.root_id if start is None else start
    if first not in tree.nodes:
        return

    stack: List[str] = [first]
    while stack:
        node = tree.nodes[stack.pop()]
        yield node
        # Reversed so the leftmost child is popped first.
        stack.extend(reversed(node.children))


def subtree_ids(tree: Tree, node_id: str) -> List[str]:
    return [n.id for n in iter_preorder(tree, node_id)]


def node_count(tree: Tree) -> int:
    return len(tree.nodes)
