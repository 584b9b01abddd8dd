"""
persistence.py

Stage: TREE <-> SERIALIZED TREE <-> KEY-VALUE BYTE STORE

Serialized shape (nested, one object per node):
  {"id": "n0", "label": "Root", "children": [ <same shape>, ... ]}

The whole tree lives under one well-known key. Stores only move bytes; all
JSON handling and validation happens here.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from .exceptions import MalformedStateError, PersistenceError
from .model import Tree, TreeNode

logger = logging.getLogger(__name__)

STATE_KEY = "tree"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[bytes]:
        ...

    def put(self, key: str, value: bytes) -> None:
        ...


class MemoryStore:
    """Dict-backed store; state lives only as long as the object."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Store backed by one JSON object file: {key: utf-8 text, ...}.

    A missing file is an empty store. Writes go to a temp file that then
    replaces the original, so a crash mid-write leaves the old state intact.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise PersistenceError(f"Cannot read state file {self.path}: {e}") from e
        except (RecursionError, ValueError) as e:
            # RecursionError: pathologically nested JSON.
            raise MalformedStateError(f"State file {self.path} is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise MalformedStateError(f"State file {self.path} must hold a JSON object")
        return raw

    def get(self, key: str) -> Optional[bytes]:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedStateError(f"Value under {key!r} must be a string")
        return value.encode("utf-8")

    def put(self, key: str, value: bytes) -> None:
        try:
            data = self._read_all()
        except MalformedStateError:
            logger.warning("Overwriting unreadable state file %s", self.path)
            data = {}
        data[key] = value.decode("utf-8")

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write state file {self.path}: {e}") from e


def serialize_tree(tree: Tree) -> Dict[str, Any]:
    def dump(node_id: str) -> Dict[str, Any]:
        node = tree.nodes[node_id]
        return {
            "id": node.id,
            "label": node.label,
            "children": [dump(cid) for cid in node.children],
        }

    return dump(tree.root_id)


def deserialize_tree(data: Any, max_depth: Optional[int] = None) -> Tree:
    """
    Rebuild a Tree from the nested serialized shape.

    Raises MalformedStateError when:
    - a node is not an object
    - id/label are not strings, or children is not a list
    - an id appears twice
    - a node sits deeper than max_depth (when given)
    """
    if not isinstance(data, dict):
        raise MalformedStateError("Serialized tree must be an object")

    nodes: Dict[str, TreeNode] = {}
    root_id = data.get("id")
    stack: List[Tuple[Any, Optional[str], int]] = [(data, None, 1)]

    while stack:
        raw, parent_id, depth = stack.pop()

        if not isinstance(raw, dict):
            raise MalformedStateError(f"Node under {parent_id!r} must be an object")

        node_id = raw.get("id")
        label = raw.get("label")
        kids = raw.get("children", [])

        if not isinstance(node_id, str) or not node_id:
            raise MalformedStateError(f"Node under {parent_id!r} has no string id")
        if not isinstance(label, str):
            raise MalformedStateError(f"Node {node_id!r} has no string label")
        if not isinstance(kids, list):
            raise MalformedStateError(f"Node {node_id!r} children must be a list")
        if node_id in nodes:
            raise MalformedStateError(f"Duplicate node id {node_id!r}")
        if max_depth is not None and depth > max_depth:
            raise MalformedStateError(f"Node {node_id!r} at depth {depth} exceeds max depth {max_depth}")

        node = TreeNode(id=node_id, label=label, parent=parent_id)
        nodes[node_id] = node
        if parent_id is not None:
            nodes[parent_id].children.append(node_id)

        # Reversed so children are visited (and appended) left-to-right.
        for kid in reversed(kids):
            stack.append((kid, node_id, depth + 1))

    return Tree(root_id=root_id, nodes=nodes)


class TreeRepository:
    """
    Loads and saves the serialized tree under one key of a KeyValueStore.
    """

    def __init__(self, store: KeyValueStore, key: str = STATE_KEY):
        self.store = store
        self.key = key

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Returns the serialized tree, or None when nothing has been saved.

        Raises MalformedStateError when the stored bytes are not a JSON object.
        """
        try:
            blob = self.store.get(self.key)
        except OSError as e:
            raise PersistenceError(f"Cannot read key {self.key!r}: {e}") from e

        if blob is None:
            return None

        try:
            data = json.loads(blob.decode("utf-8"))
        except (RecursionError, UnicodeDecodeError, ValueError) as e:
            raise MalformedStateError(f"Stored tree under {self.key!r} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedStateError(f"Stored tree under {self.key!r} must be an object")
        return data

    def save(self, data: Dict[str, Any]) -> None:
        blob = json.dumps(data, ensure_ascii=False).encode("utf-8")
        try:
            self.store.put(self.key, blob)
        except OSError as e:
            raise PersistenceError(f"Cannot write key {self.key!r}: {e}") from e
