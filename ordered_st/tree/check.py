"""Independent validators for the structural invariants of a symbol table.

Each validator walks the whole tree and trusts none of the bookkeeping it
checks. They are meant for tests and debugging; none is cheap enough to run
on every operation in production.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable, List

logger = logging.getLogger(__name__)

# "no bound" marker for is_bst; distinct from every key
_UNBOUNDED = object()


class Invariant(enum.Enum):
    BST = "symmetric order not consistent"
    AVL = "AVL property not consistent"
    SIZE = "subtree counts not consistent"
    RANK = "ranks not consistent"

    @property
    def message(self) -> str:
        return self.value


class CheckResult(object):
    """Outcome of :func:`check`. Truthy when every checked invariant holds."""

    def __init__(self, checked: Iterable[Invariant], failed: Iterable[Invariant]):
        self.checked: List[Invariant] = list(checked)
        self.failed: List[Invariant] = list(failed)

    @property
    def ok(self) -> bool:
        return len(self.failed) == 0

    def __bool__(self) -> bool:
        return self.ok

    def __contains__(self, invariant: Invariant) -> bool:
        return invariant in self.failed

    def __repr__(self) -> str:
        return "CheckResult(failed=[{}])".format(
            ", ".join(inv.name for inv in self.failed)
        )


def _post_order(root) -> List:
    """Nodes of the subtree, each one after all of its descendants."""
    order = []
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        order.append(node)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    order.reverse()
    return order


def is_bst(root) -> bool:
    # every key in a subtree must lie strictly inside its (lo, hi) bounds
    stack = [(root, _UNBOUNDED, _UNBOUNDED)] if root is not None else []
    while stack:
        node, lo, hi = stack.pop()
        if lo is not _UNBOUNDED and not lo < node.key:
            return False
        if hi is not _UNBOUNDED and not node.key < hi:
            return False
        if node.left is not None:
            stack.append((node.left, lo, node.key))
        if node.right is not None:
            stack.append((node.right, node.key, hi))
    return True


def is_avl(root) -> bool:
    """Every node is balanced and its stored height matches the real one."""
    heights = {None: -1}
    for node in _post_order(root):
        left = heights[id(node.left) if node.left is not None else None]
        right = heights[id(node.right) if node.right is not None else None]
        if abs(left - right) > 1:
            return False
        if node.height != 1 + max(left, right):
            return False
        heights[id(node)] = node.height
    return True


def is_size_consistent(root) -> bool:
    sizes = {None: 0}
    for node in _post_order(root):
        left = sizes[id(node.left) if node.left is not None else None]
        right = sizes[id(node.right) if node.right is not None else None]
        if node.size != 1 + left + right:
            return False
        sizes[id(node)] = node.size
    return True


def is_rank_consistent(tree) -> bool:
    # select() and rank() navigate by subtree size
    if not is_size_consistent(tree._root):
        return False
    for i in range(tree.size()):
        if i != tree.rank(tree.select(i)):
            return False
    for key in tree.keys():
        if key != tree.select(tree.rank(key)):
            return False
    return True


_VALIDATORS = {
    Invariant.BST: lambda tree: is_bst(tree._root),
    Invariant.AVL: lambda tree: is_avl(tree._root),
    Invariant.SIZE: lambda tree: is_size_consistent(tree._root),
    Invariant.RANK: is_rank_consistent,
}


def check(tree, invariants: Iterable[Invariant] = tuple(Invariant)) -> CheckResult:
    """Run the requested validators against ``tree`` and collect the ones
    that fail. Failures are logged rather than raised.
    """
    invariants = list(invariants)
    failed = []

    for invariant in invariants:
        if not _VALIDATORS[invariant](tree):
            logger.warning("%s: %s", type(tree).__name__, invariant.message)
            failed.append(invariant)

    return CheckResult(invariants, failed)
