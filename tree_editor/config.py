"""Local configuration for tree_editor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeVar

from .layout import LayoutConfig

logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH = ".tree_editor_state.json"
DEFAULT_MAX_DEPTH = 10
DEFAULT_VIEWPORT_WIDTH = 1280.0

# Upper bound for max_depth. Saved trees nest two JSON containers per level,
# and json encode/decode recurse per container.
MAX_DEPTH_LIMIT = 200

T = TypeVar("T", int, float)


def check_max_depth(value: int) -> int:
    if not 1 <= value <= MAX_DEPTH_LIMIT:
        raise ValueError(f"max depth must be between 1 and {MAX_DEPTH_LIMIT}, got {value}")
    return value


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def _env_max_depth() -> int:
    return _env_number("TREE_EDITOR_MAX_DEPTH", DEFAULT_MAX_DEPTH, lambda raw: check_max_depth(int(raw)))


@dataclass(frozen=True)
class EditorConfig:
    # Deepest allowed node (root = depth 1), at most MAX_DEPTH_LIMIT.
    max_depth: int = DEFAULT_MAX_DEPTH

    # Visible width; the canvas is never narrower than this.
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH

    # JSON file holding the saved tree.
    state_path: Path = Path(DEFAULT_STATE_PATH)

    layout: LayoutConfig = field(default_factory=LayoutConfig)

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """
        Read overrides from the environment:
          TREE_EDITOR_STATE_PATH, TREE_EDITOR_MAX_DEPTH, TREE_EDITOR_VIEWPORT_WIDTH

        Unparseable or out-of-range numbers fall back to the defaults with a warning.
        """
        return cls(
            max_depth=_env_max_depth(),
            viewport_width=_env_number("TREE_EDITOR_VIEWPORT_WIDTH", DEFAULT_VIEWPORT_WIDTH, float),
            state_path=Path(os.getenv("TREE_EDITOR_STATE_PATH", DEFAULT_STATE_PATH)).expanduser(),
        )
