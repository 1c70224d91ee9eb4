"""Tree Walker - structural pre-order traversal over translatable nodes."""

import logging
from typing import Callable, Dict, List, Optional

from auto_translate.core.translatable_node import TranslatableNode

logger = logging.getLogger(__name__)


class TreeWalker:
    """
    Depth-first, pre-order traversal of an adapter-owned node tree.

    The walker has no translation knowledge; `visit` may perform any per-node
    side effect. The tree may be mutated while a walk is in progress (by the
    visitor or by UI code). Each node's children are snapshotted when the node
    is reached and the snapshot is what gets walked, so adapters are free to
    hand out fresh wrapper objects on every children() call. A node that was
    detached or destroyed reports it by raising RuntimeError from its own
    accessors; such a node and its subtree are skipped.
    """

    def walk(
        self,
        root: TranslatableNode,
        visit: Callable[[TranslatableNode], None],
    ) -> int:
        """
        Visit `root` and every reachable descendant exactly once.

        Args:
            root: Top of the tree to traverse.
            visit: Callback invoked once per node, parent before children.

        Returns:
            Number of nodes visited.
        """
        # id -> node; holding the node keeps its id from being reused mid-walk
        seen: Dict[int, TranslatableNode] = {}
        stack: List[TranslatableNode] = [root]
        visited = 0

        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen[id(node)] = node

            children = self._children_of(node)
            if children is None:
                continue

            visit(node)
            visited += 1

            # Reversed so the first child is popped first
            stack.extend(reversed(children))

        return visited

    def _children_of(self, node: TranslatableNode) -> Optional[List[TranslatableNode]]:
        """Snapshot a node's children; None if the node is detached or destroyed."""
        try:
            return list(node.children())
        except RuntimeError as e:
            logger.debug("Skipping node that is no longer in the tree %r: %s", node, e)
            return None
