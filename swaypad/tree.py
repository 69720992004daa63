"""Extraction of windows from a sway tree snapshot."""

from logging import Logger
from typing import Any

from .constants import MAX_TREE_DEPTH, WINDOW_NODE_TYPES
from .models import NodeDecodeError, WindowRecord

__all__ = ["extract_windows"]

# child lists, in visiting order
CHILD_KEYS = ("nodes", "floating_nodes")


def extract_windows(root: Any, log: Logger | None = None, max_depth: int = MAX_TREE_DEPTH) -> list[WindowRecord]:  # noqa: ANN401
    """Return every window found under `root`, in pre-order.

    A node is a window if its ``type`` is one of ``WINDOW_NODE_TYPES``.
    Tiled children (``nodes``) are visited before floating ones
    (``floating_nodes``). Window nodes that can't be decoded are skipped.

    Branches deeper than `max_depth`, and nodes already visited, are not
    walked: a broken snapshot yields a partial result instead of an error.

    Args:
        root: the parsed ``get_tree`` document
        log: logger used to report skipped nodes
        max_depth: maximum nesting level to descend into
    """
    windows: list[WindowRecord] = []
    seen: set[int] = set()
    # (node, depth), popped from the end
    stack: list[tuple[Any, int]] = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if not isinstance(node, dict):
            continue
        if id(node) in seen:
            if log:
                log.warning("Node visited twice (id=%s), ignoring it", node.get("id"))
            continue
        seen.add(id(node))

        if node.get("type") in WINDOW_NODE_TYPES:
            try:
                windows.append(WindowRecord.from_node(node))
            except NodeDecodeError as e:
                if log:
                    log.debug("Skipping node %s: %s", node.get("id"), e)

        if depth >= max_depth:
            if log and any(node.get(key) for key in CHILD_KEYS):
                log.warning("Tree deeper than %d levels, ignoring the rest of the branch", max_depth)
            continue

        # pushed last, popped first
        for key in reversed(CHILD_KEYS):
            children = node.get(key)
            if isinstance(children, list):
                stack.extend((child, depth + 1) for child in reversed(children))

    return windows
