from __future__ import annotations

import logging
from typing import Optional, TypeVar

from .base import Tree, TreeNode, _height
from .check import Invariant

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class AVLTree(Tree):
    """Ordered symbol table kept height-balanced: the heights of the two
    subtrees of every node differ by at most one, so every operation runs in
    O(log n).
    """

    invariants = (Invariant.BST, Invariant.AVL, Invariant.SIZE, Invariant.RANK)

    def __init__(self, self_check: Optional[bool] = None):
        super().__init__(AVLNode, self_check)


class AVLNode(TreeNode):
    def _balance_factor(self) -> int:
        return _height(self.left) - _height(self.right)

    def _rotate_left(self) -> AVLNode[K, V]:
        pivot: AVLNode[K, V] = self.right
        logger.debug("rotate left at %r (pivot %r)", self.key, pivot.key)

        self.right = pivot.left
        pivot.left = self

        # pivot's size and height depend on ours
        self._update()
        pivot._update()
        return pivot

    def _rotate_right(self) -> AVLNode[K, V]:
        pivot: AVLNode[K, V] = self.left
        logger.debug("rotate right at %r (pivot %r)", self.key, pivot.key)

        self.left = pivot.right
        pivot.right = self

        self._update()
        pivot._update()
        return pivot

    def _rebalance(self) -> AVLNode[K, V]:
        bal = self._balance_factor()

        if bal < -1:
            if self.right._balance_factor() > 0:
                self.right = self.right._rotate_right()
            return self._rotate_left()
        elif bal > 1:
            if self.left._balance_factor() < 0:
                self.left = self.left._rotate_left()
            return self._rotate_right()

        return self

    def _print_node(self) -> str:
        return "{}: {:2d}".format(self.key, self._balance_factor())
