"""
Tree layout for the editor canvas.

Computes deterministic x/y pixel positions for nodes:
- Leaves take exactly one node width
- A parent's subtree is as wide as its children's subtrees plus the gaps between them
- Parents centered above children
- Depth controls y position

The layout is recomputed in full after every edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .model import Tree, iter_preorder, tree_depth


@dataclass(frozen=True)
class LayoutConfig:
    # Fixed node width in pixels.
    node_w: float = 100

    # Fixed node height in pixels.
    node_h: float = 100

    # Horizontal gap between adjacent sibling subtrees.
    h_gap: float = 20

    # Vertical distance between parent and child rows.
    v_gap: float = 120

    # Padding around the whole tree so nodes aren't glued to the edges.
    margin: float = 100


@dataclass
class NodePos:
    # One computed position for a node box (top-left corner).
    node_id: str
    x: float
    y: float


@dataclass
class TreeLayout:
    """
    positions:
      node_id -> NodePos
    widths:
      node_id -> subtree width in pixels
    canvas_width / canvas_height:
      full drawing area, margins included
    depth:
      height of the tree (leaf = 1)
    """

    positions: Dict[str, NodePos] = field(default_factory=dict)
    widths: Dict[str, float] = field(default_factory=dict)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    depth: int = 1


def compute_subtree_widths(tree: Tree, cfg: LayoutConfig) -> Dict[str, float]:
    widths: Dict[str, float] = {}

    # Reversed pre-order visits every child before its parent (post-order).
    order = [n.id for n in iter_preorder(tree)]
    for node_id in reversed(order):
        kids = tree.nodes[node_id].children

        if not kids:
            widths[node_id] = cfg.node_w
            continue

        total = sum(widths[k] for k in kids)
        # One gap between each adjacent pair, none at the ends.
        total += cfg.h_gap * (len(kids) - 1)
        widths[node_id] = total

    return widths


def compute_positions(
    tree: Tree,
    widths: Dict[str, float],
    cfg: LayoutConfig,
    start_x: float,
    start_y: float,
) -> Dict[str, NodePos]:
    """
    Place every node, starting with the root's subtree at (start_x, start_y).

    Children are laid left-to-right from the parent's left edge; the parent
    is then centered over the combined span of its children.
    """
    positions: Dict[str, NodePos] = {}
    stack: List[Tuple[str, float, float]] = [(tree.root_id, start_x, start_y)]

    while stack:
        node_id, x, y = stack.pop()
        kids = tree.nodes[node_id].children

        if not kids:
            positions[node_id] = NodePos(node_id=node_id, x=x, y=y)
            continue

        parent_x = x + (widths[node_id] - cfg.node_w) / 2
        positions[node_id] = NodePos(node_id=node_id, x=parent_x, y=y)

        cx = x
        for k in kids:
            stack.append((k, cx, y + cfg.v_gap))
            cx += widths[k] + cfg.h_gap

    return positions


def layout_tree(tree: Tree, cfg: LayoutConfig, viewport_width: float = 0.0) -> TreeLayout:
    """
    Compute positions and canvas extent for the whole tree.

    The canvas is never narrower than viewport_width, so small trees still
    fill the screen; the root's subtree is centered horizontally.
    """
    widths = compute_subtree_widths(tree, cfg)
    root_w = widths[tree.root_id]

    canvas_width = max(root_w + cfg.margin * 2, viewport_width)
    depth = tree_depth(tree)
    canvas_height = depth * cfg.v_gap + cfg.node_h + cfg.margin * 2

    start_x = (canvas_width - root_w) / 2
    positions = compute_positions(tree, widths, cfg, start_x, cfg.margin)

    return TreeLayout(
        positions=positions,
        widths=widths,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        depth=depth,
    )
