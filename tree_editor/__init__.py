"""
tree_editor package

Editing core for a rooted tree canvas: build a tree by adding children,
remove subtrees, and compute a non-overlapping layout plus connector lines
that renderers can draw.

To run:

python -m tree_editor.cli [--state STATE_JSON] COMMAND

Example:

python -m tree_editor.cli add n0
python -m tree_editor.cli render output/tree.html

Sample result in CLI:

n0  Root  (1 children)
  n1  Node 1  (0 children)
Depth: 2 / 10

"""

from .config import EditorConfig
from .layout import LayoutConfig, layout_tree
from .session import Action, EditorSession, RenderPayload

__all__ = ["Action", "EditorConfig", "EditorSession", "LayoutConfig", "RenderPayload", "layout_tree"]
