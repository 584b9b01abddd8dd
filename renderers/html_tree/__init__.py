"""
HTML Tree Renderer (editor canvas)

Public API:
- HtmlTreeRenderer
- render_payload_html
"""

from .render import HtmlTreeRenderer, render_payload_html

__all__ = ["HtmlTreeRenderer", "render_payload_html"]
