"""
Display helpers for the HTML tree renderer.

These functions turn render payload values into display-friendly strings.
They are intentionally defensive and avoid raising on missing fields.
"""

from __future__ import annotations

from typing import Any


def safe_str(value: Any) -> str:
    # Converts any value to a string for safe display.
    # If value is None, return an empty string.
    # - Ensures "None" never appears in output.
    return "" if value is None else str(value)


def format_px(value: float) -> str:
    # 240.0 -> "240", 240.5 -> "240.5"
    return f"{float(value):g}"


def node_caption(label: Any, child_count: int) -> str:
    # Label on the first line, child count underneath.
    noun = "child" if child_count == 1 else "children"
    return f"{safe_str(label)}\n({child_count} {noun})"


def depth_badge(depth: int, max_depth: int) -> str:
    return f"Depth: {depth} / {max_depth}"
