"""Test setup for tree_editor."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tree_editor.config import EditorConfig  # noqa: E402
from tree_editor.ids import IdCounter  # noqa: E402
from tree_editor.model import Tree, new_tree  # noqa: E402
from tree_editor.mutation import add_child  # noqa: E402


@pytest.fixture
def tree() -> Tree:
    """A fresh tree holding only the root n0."""
    return new_tree()


@pytest.fixture
def counter() -> IdCounter:
    return IdCounter()


@pytest.fixture
def sample_tree(tree: Tree, counter: IdCounter) -> Tree:
    """
    n0
    ├── n1
    │   ├── n3
    │   └── n4
    └── n2
    """
    add_child(tree, counter, "n0")
    add_child(tree, counter, "n0")
    add_child(tree, counter, "n1")
    add_child(tree, counter, "n1")
    return tree


@pytest.fixture
def editor_config(tmp_path: Path) -> EditorConfig:
    return EditorConfig(viewport_width=0.0, state_path=tmp_path / "state.json")
