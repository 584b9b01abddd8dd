"""
HTML rendering for the tree editor canvas.

Produces a standalone HTML page containing:
- a scrollable canvas
- an SVG "wires" layer behind
- absolutely positioned circular node boxes
- a delete affordance on every node except the root
- a depth badge and, when present, a notice banner
"""

from __future__ import annotations

import html
from typing import List

from tree_editor.layout import LayoutConfig
from tree_editor.session import RenderPayload

from .extract import depth_badge, format_px, node_caption, safe_str


class HtmlTreeRenderer:
    def __init__(self, cfg: LayoutConfig, title: str = "Graph Builder"):
        self.cfg = cfg
        self.title = title

    def render(self, payload: RenderPayload) -> str:
        return render_payload_html(payload, self.cfg, self.title)


def render_payload_html(payload: RenderPayload, cfg: LayoutConfig, title: str = "Graph Builder") -> str:
    width_px = format_px(payload.canvas_width)
    height_px = format_px(payload.canvas_height)

    # -------------------------------------------------------------------------
    # SVG connector lines, already computed by the layout stage
    # -------------------------------------------------------------------------
    svg_lines: List[str] = []
    for seg in payload.connectors:
        svg_lines.append(
            f'<line data-parent="{html.escape(seg.parent_id)}" '
            f'x1="{format_px(seg.x1)}" y1="{format_px(seg.y1)}" '
            f'x2="{format_px(seg.x2)}" y2="{format_px(seg.y2)}" '
            f'stroke="#616161" stroke-width="2" />'
        )

    svg = (
        f'<svg class="wires" width="{width_px}" height="{height_px}" '
        f'viewBox="0 0 {width_px} {height_px}" '
        f'xmlns="http://www.w3.org/2000/svg">'
        + "".join(svg_lines)
        + "</svg>"
    )

    boxes: List[str] = []
    for node in payload.nodes:
        esc_node_id = html.escape(node.id)
        esc_caption = html.escape(node_caption(node.label, node.child_count)).replace("\n", "<br>")

        delete_html = ""
        if node.deletable:
            delete_html = (
                f'<span class="delete" data-action="delete" data-node-id="{esc_node_id}" '
                f'title="Delete {esc_node_id}">&times;</span>'
            )

        boxes.append(
            f"""
            <div class="box" data-action="activate" data-node-id="{esc_node_id}"
                 title="Add a child to {esc_node_id}"
                 style="left:{format_px(node.x)}px; top:{format_px(node.y)}px;
                        width:{format_px(cfg.node_w)}px; height:{format_px(cfg.node_h)}px;">
              <div class="text">{esc_caption}</div>
              {delete_html}
            </div>
            """
        )

    canvas = f"""
    <div class="canvas" style="width:{width_px}px; height:{height_px}px;">
      {svg}
      {''.join(boxes)}
    </div>
    """

    badge = html.escape(depth_badge(payload.depth, payload.max_depth))
    notice = ""
    if payload.notice:
        notice = f'<div class="notice">{html.escape(safe_str(payload.notice))}</div>'

    return build_full_html_page(title, badge, notice, canvas)


def build_full_html_page(title: str, badge: str, notice_html: str, content_html: str) -> str:
    esc_title = html.escape(title)

    return f"""<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>{esc_title}</title>
<style>
:root {{
  font-family: system-ui, Segoe UI, Arial, sans-serif;
}}

body {{
  margin: 0;
  background: #f2f3f6;
}}

header {{
  background: #9e9e9e;
  padding: 12px 16px;
  text-align: center;
}}

h1 {{
  font-size: 18px;
  margin: 0;
}}

.badge {{
  position: fixed;
  top: 10px;
  right: 10px;
  padding: 6px 12px;
  border-radius: 12px;
  background: rgba(0,0,0,0.7);
  color: white;
  font-size: 14px;
  z-index: 2;
}}

.notice {{
  position: fixed;
  bottom: 16px;
  left: 50%;
  transform: translateX(-50%);
  padding: 10px 16px;
  border-radius: 6px;
  background: #323232;
  color: white;
  font-size: 14px;
  z-index: 2;
}}

.wrap {{
  overflow: auto;
}}

.canvas {{
  position: relative;
}}

.wires {{
  position: absolute;
  left: 0;
  top: 0;
  z-index: 0;
}}

.box {{
  position: absolute;
  z-index: 1;
  border-radius: 50%;
  background: linear-gradient(to right, #2d9cdb, #2f80ed);
  box-shadow: 2px 4px 8px rgba(0,0,0,0.2);
  box-sizing: border-box;
  display: flex;
  align-items: center;
  justify-content: center;
  cursor: pointer;
}}

.text {{
  color: white;
  font-weight: 700;
  font-size: 12px;
  text-align: center;
}}

.delete {{
  position: absolute;
  right: -5px;
  top: -5px;
  width: 18px;
  height: 18px;
  border-radius: 50%;
  background: #f44336;
  color: white;
  font-size: 14px;
  line-height: 18px;
  text-align: center;
  cursor: pointer;
}}
</style>
</head>

<body>
<header>
  <h1>{esc_title}</h1>
</header>

<div class="badge">{badge}</div>
{notice_html}

<div class="wrap">
  {content_html}
</div>
</body>
</html>
"""
