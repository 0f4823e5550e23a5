from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional

from . import base


class TreeIter(object):
    """In-order walk over a subtree, optionally restricted to the closed key
    range [lower, upper] and optionally in descending order.

    The walk keeps an explicit stack of pending ancestors, so its depth never
    touches the interpreter's recursion limit. The tree must not be mutated
    while an iterator over it is live.
    """

    KEYS = 0
    VALS = 1
    ITEMS = 2

    def __init__(
        self,
        mode: int,
        root: Optional[base.TreeNode],
        lower=None,
        upper=None,
        rev: bool = False,
    ):
        self._mode: int = mode
        self._lower = lower
        self._upper = upper
        self._rev: bool = rev
        self._stack: List[base.TreeNode] = []

        if lower is not None and upper is not None and upper < lower:
            return
        self._descend(root)

    def _descend(self, node: Optional[base.TreeNode]):
        # Push the path down to the first in-range node in walk order.
        while node is not None:
            if not self._rev:
                if self._lower is not None and node.key < self._lower:
                    node = node.right
                    continue
                self._stack.append(node)
                node = node.left
            else:
                if self._upper is not None and self._upper < node.key:
                    node = node.left
                    continue
                self._stack.append(node)
                node = node.right

    def __iter__(self) -> TreeIter:
        return self

    def __next__(self):
        if not self._stack:
            raise StopIteration()

        cur_node = self._stack.pop()

        if not self._rev:
            if self._upper is not None and self._upper < cur_node.key:
                self._stack.clear()
                raise StopIteration()
            self._descend(cur_node.right)
        else:
            if self._lower is not None and cur_node.key < self._lower:
                self._stack.clear()
                raise StopIteration()
            self._descend(cur_node.left)

        if self._mode == TreeIter.KEYS:
            return cur_node.key
        elif self._mode == TreeIter.VALS:
            return cur_node.value
        elif self._mode == TreeIter.ITEMS:
            return (cur_node.key, cur_node.value)


def level_order(root: Optional[base.TreeNode]) -> Iterator[base.TreeNode]:
    """Yield the nodes of a subtree breadth-first, left to right."""
    if root is None:
        return

    pending: Deque[base.TreeNode] = deque([root])
    while pending:
        node = pending.popleft()
        yield node
        if node.left is not None:
            pending.append(node.left)
        if node.right is not None:
            pending.append(node.right)
