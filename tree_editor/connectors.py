"""
connectors.py

Connector geometry between parents and children (family-tree style):
- one child: a straight line between node centers
- several children:
  - one trunk down from the parent center to the midpoint row
  - one horizontal bar spanning all child centers
  - one short vertical down to each child center

Midpoint row = average of the parent-row and child-row center y.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .layout import LayoutConfig, TreeLayout
from .model import Tree, iter_preorder


@dataclass(frozen=True)
class Segment:
    # One straight line segment; parent_id is the node it hangs from.
    parent_id: str
    x1: float
    y1: float
    x2: float
    y2: float


def node_center(layout: TreeLayout, cfg: LayoutConfig, node_id: str) -> Tuple[float, float]:
    pos = layout.positions[node_id]
    return pos.x + cfg.node_w / 2, pos.y + cfg.node_h / 2


def build_connectors(tree: Tree, layout: TreeLayout, cfg: LayoutConfig) -> List[Segment]:
    segments: List[Segment] = []

    for node in iter_preorder(tree):
        if node.id not in layout.positions:
            continue

        child_ids = [cid for cid in node.children if cid in layout.positions]
        if not child_ids:
            continue

        px, py = node_center(layout, cfg, node.id)
        centers = [node_center(layout, cfg, cid) for cid in child_ids]

        # One child: straight line
        if len(centers) == 1:
            cx, cy = centers[0]
            segments.append(Segment(node.id, px, py, cx, cy))
            continue

        # Multiple children: trunk + bar + drops
        child_y = centers[0][1]
        mid_y = (py + child_y) / 2

        segments.append(Segment(node.id, px, py, px, mid_y))

        left_x = min(c[0] for c in centers)
        right_x = max(c[0] for c in centers)
        segments.append(Segment(node.id, left_x, mid_y, right_x, mid_y))

        for cx, cy in centers:
            segments.append(Segment(node.id, cx, mid_y, cx, cy))

    return segments
