"""Custom exceptions for tree_editor."""


class TreeEditorError(Exception):
    """Base exception for tree editor operations."""


class NodeNotFoundError(TreeEditorError):
    """Target node id is not present in the tree."""

    def __init__(self, node_id: str):
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class DepthLimitExceededError(TreeEditorError):
    """Adding a child would place it deeper than the configured maximum."""

    def __init__(self, depth: int, max_depth: int):
        super().__init__(f"Depth {depth} exceeds max depth {max_depth}")
        self.depth = depth
        self.max_depth = max_depth


class ProtectedRootError(TreeEditorError):
    """The root node cannot be removed."""


class PersistenceError(TreeEditorError):
    """Error reading from or writing to the state store."""


class MalformedStateError(PersistenceError):
    """Persisted state could not be decoded into a valid tree."""
