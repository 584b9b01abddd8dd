"""
session.py

The editing session: one tree, one id counter, one optional repository.

Every user action goes through dispatch(), which runs
  mutation -> save -> layout -> render payload
in that order while holding the session lock, so at most one mutation is
in flight at a time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .config import EditorConfig
from .connectors import Segment, build_connectors
from .exceptions import (
    DepthLimitExceededError,
    MalformedStateError,
    NodeNotFoundError,
    PersistenceError,
    ProtectedRootError,
)
from .ids import IdCounter
from .layout import layout_tree
from .model import Tree, iter_preorder, new_tree, node_depth
from .mutation import add_child, remove_subtree
from .persistence import TreeRepository, deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

ACTIVATE = "activate"
DELETE = "delete"


@dataclass(frozen=True)
class Action:
    # kind: ACTIVATE (add a child under node_id) or DELETE (remove node_id's subtree)
    kind: str
    node_id: str


@dataclass
class RenderNode:
    id: str
    label: str
    x: float
    y: float
    depth: int
    child_count: int
    deletable: bool


@dataclass
class RenderPayload:
    """
    Everything a renderer needs to redraw after an edit.

    nodes:
      - pre-order list, each with its top-left position
    connectors:
      - line segments between parents and children
    notice:
      - transient, non-blocking message (e.g. depth limit reached), else None
    """

    root_id: str
    nodes: List[RenderNode] = field(default_factory=list)
    connectors: List[Segment] = field(default_factory=list)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    depth: int = 1
    max_depth: int = 0
    notice: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Renderer(Protocol):
    def render(self, payload: RenderPayload) -> str:
        ...


def depth_limit_notice(max_depth: int) -> str:
    return f"Max depth {max_depth} reached!"


class EditorSession:
    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        repository: Optional[TreeRepository] = None,
        tree: Optional[Tree] = None,
    ):
        self.config = config or EditorConfig()
        self.repository = repository
        self.tree = tree if tree is not None else new_tree()
        self.counter = IdCounter.seeded_from(self.tree.nodes)
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        config: Optional[EditorConfig] = None,
        repository: Optional[TreeRepository] = None,
    ) -> "EditorSession":
        """
        Start a session from saved state, or from a fresh root.

        Missing or malformed state is not an error: the session starts fresh.
        """
        config = config or EditorConfig()
        tree: Optional[Tree] = None

        if repository is not None:
            try:
                data = repository.load()
                if data is not None:
                    tree = deserialize_tree(data, max_depth=config.max_depth)
            except MalformedStateError as e:
                logger.warning("Ignoring malformed saved tree, starting fresh: %s", e)
            except PersistenceError as e:
                logger.warning("Cannot read saved tree, starting fresh: %s", e)

        session = cls(config=config, repository=repository, tree=tree)
        logger.debug(
            "Session opened with %d node(s); next id %s",
            len(session.tree),
            session.counter.format_id(session.counter.next_value),
        )
        return session

    # ---------- actions ----------

    def activate_node(self, node_id: str) -> RenderPayload:
        return self.dispatch(Action(ACTIVATE, node_id))

    def delete_node(self, node_id: str) -> RenderPayload:
        return self.dispatch(Action(DELETE, node_id))

    def dispatch(self, action: Action) -> RenderPayload:
        with self._lock:
            notice: Optional[str] = None
            changed = False

            if action.kind == ACTIVATE:
                try:
                    add_child(self.tree, self.counter, action.node_id, self.config.max_depth)
                    changed = True
                except NodeNotFoundError:
                    logger.debug("Ignoring add under unknown node %s", action.node_id)
                except DepthLimitExceededError as e:
                    notice = depth_limit_notice(e.max_depth)
                    logger.info("Rejected add under %s: %s", action.node_id, e)

            elif action.kind == DELETE:
                try:
                    remove_subtree(self.tree, action.node_id)
                    changed = True
                except (ProtectedRootError, NodeNotFoundError):
                    logger.debug("Ignoring delete of %s", action.node_id)

            else:
                raise ValueError(f"Unknown action kind: {action.kind!r}")

            if changed:
                self.save()

            return self.render_payload(notice)

    # ---------- persistence ----------

    def save(self) -> None:
        if self.repository is None:
            return
        try:
            self.repository.save(serialize_tree(self.tree))
        except PersistenceError as e:
            # The in-memory tree stays authoritative.
            logger.error("Failed to save tree: %s", e)

    def reset(self) -> RenderPayload:
        """Replace the tree with a fresh root and save it."""
        with self._lock:
            # The counter is kept, so ids issued before the reset are never reused.
            self.tree = new_tree()
            self.save()
            return self.render_payload()

    # ---------- layout ----------

    def render_payload(self, notice: Optional[str] = None) -> RenderPayload:
        cfg = self.config.layout
        layout = layout_tree(self.tree, cfg, self.config.viewport_width)

        nodes: List[RenderNode] = []
        for node in iter_preorder(self.tree):
            pos = layout.positions[node.id]
            nodes.append(
                RenderNode(
                    id=node.id,
                    label=node.label,
                    x=pos.x,
                    y=pos.y,
                    depth=node_depth(self.tree, node.id) or 1,
                    child_count=len(node.children),
                    deletable=node.id != self.tree.root_id,
                )
            )

        return RenderPayload(
            root_id=self.tree.root_id,
            nodes=nodes,
            connectors=build_connectors(self.tree, layout, cfg),
            canvas_width=layout.canvas_width,
            canvas_height=layout.canvas_height,
            depth=layout.depth,
            max_depth=self.config.max_depth,
            notice=notice,
        )
