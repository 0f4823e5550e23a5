from __future__ import annotations

from collections import deque
from collections.abc import MutableMapping
import numbers
from typing import Deque, Generic, TypeVar, Optional, Iterator, List, Tuple, Type

from ..config import Config
from ..errors import (
    EmptyTableError,
    InvariantViolation,
    NullKeyError,
    RankOutOfRangeError,
)
from . import check
from .iter import TreeIter, level_order

K = TypeVar("K")
V = TypeVar("V")


def _size(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    return node.size


def _height(node: Optional[TreeNode]) -> int:
    if node is None:
        return -1
    return node.height


def _require_key(key, operation: str):
    if key is None:
        raise NullKeyError(operation)


class TreeNode(Generic[K, V]):
    def __init__(self, key: K, value: V):
        self._key: K = key
        self.value: V = value
        self.height: int = 0
        self.size: int = 1

        self_cls = self.__class__

        self.left: Optional[self_cls[K, V]] = None
        self.right: Optional[self_cls[K, V]] = None

    @property
    def key(self) -> K:
        """The key associated with this node.

        This property is immutable.
        """
        return self._key

    def _update(self):
        """Recompute size and height from the (already correct) children."""
        self.size = 1 + _size(self.left) + _size(self.right)
        self.height = 1 + max(_height(self.left), _height(self.right))

    def _min_node(self) -> TreeNode[K, V]:
        node = self
        while node.left is not None:
            node = node.left
        return node

    def _max_node(self) -> TreeNode[K, V]:
        node = self
        while node.right is not None:
            node = node.right
        return node

    def _detach(self):
        self.left = None
        self.right = None

    def _print_recursive(self, level: int) -> str:
        ret = ""
        if self.right is not None:
            ret = self.right._print_recursive(level + 1)

        ret += ("    " * level) + self._print_node() + "\n"

        if self.left is not None:
            ret += self.left._print_recursive(level + 1)

        return ret

    # methods for subclasses to override:

    def _print_node(self) -> str:
        return "{} [{}]".format(self.key, self.size)

    def _rebalance(self) -> TreeNode[K, V]:
        """Called on every node revisited after a structural change, once its
        size and height are up to date. Returns the root of the subtree.
        """
        return self


class Tree(Generic[K, V], MutableMapping):
    """Ordered symbol table backed by a size-augmented binary search tree.

    Keys must be mutually comparable with ``<`` and may not be ``None``;
    ``None`` is likewise never stored as a value. The plain tree performs no
    balancing: see :class:`~ordered_st.tree.avl.AVLTree`.
    """

    invariants: Tuple[check.Invariant, ...] = (
        check.Invariant.BST,
        check.Invariant.SIZE,
        check.Invariant.RANK,
    )

    def __init__(
        self,
        node_class: Type[TreeNode] = TreeNode,
        self_check: Optional[bool] = None,
    ):
        self._node_cls = node_class
        self._root: Optional[TreeNode[K, V]] = None
        if self_check is None:
            self_check = Config.self_check
        self._self_check: bool = self_check

    def is_empty(self) -> bool:
        return self._root is None

    def size(self) -> int:
        return _size(self._root)

    def height(self) -> int:
        """Height of the tree: -1 when empty, 0 for a single node."""
        return _height(self._root)

    # lookups

    def _find_node(self, key: K) -> Optional[TreeNode[K, V]]:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                node = node.right
            else:
                return node
        return None

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        _require_key(key, "get")
        node = self._find_node(key)
        if node is None:
            return default
        return node.value

    def contains(self, key: K) -> bool:
        _require_key(key, "contains")
        return self._find_node(key) is not None

    # insertion

    def put(self, key: K, value: Optional[V]):
        """Associate ``value`` with ``key``, overwriting any previous value.

        Passing ``None`` as the value removes ``key`` from the table.
        """
        _require_key(key, "put")
        if value is None:
            self.delete(key)
            return

        path: List[Tuple[TreeNode[K, V], bool]] = []
        node = self._root
        while node is not None:
            if key < node.key:
                path.append((node, True))
                node = node.left
            elif node.key < key:
                path.append((node, False))
                node = node.right
            else:
                node.value = value
                self._after_mutation("put")
                return

        self._root = self._retrace(path, self._node_cls(key, value))
        self._after_mutation("put")

    def _retrace(
        self,
        path: List[Tuple[TreeNode[K, V], bool]],
        subtree: Optional[TreeNode[K, V]],
    ) -> Optional[TreeNode[K, V]]:
        """Walk back up ``path`` (ancestor, went-left pairs, topmost first),
        hanging ``subtree`` where the descent stopped and rebalancing every
        ancestor. Returns the new root of the topmost ancestor's subtree.
        """
        while path:
            parent, went_left = path.pop()
            if went_left:
                parent.left = subtree
            else:
                parent.right = subtree
            parent._update()
            subtree = parent._rebalance()
        return subtree

    # deletion

    def delete(self, key: K):
        """Remove ``key`` and its value. Does nothing if ``key`` is absent."""
        _require_key(key, "delete")

        path: List[Tuple[TreeNode[K, V], bool]] = []
        node = self._root
        while node is not None:
            if key < node.key:
                path.append((node, True))
                node = node.left
            elif node.key < key:
                path.append((node, False))
                node = node.right
            else:
                break
        if node is None:
            return

        if node.left is None or node.right is None:
            replacement = node.left if node.left is not None else node.right
        else:
            # Hibbard deletion: the successor takes this node's place.
            replacement = node.right._min_node()
            replacement.right = self._delete_min(node.right)
            replacement.left = node.left
            replacement._update()
            replacement = replacement._rebalance()

        node._detach()
        self._root = self._retrace(path, replacement)
        self._after_mutation("delete")

    def _delete_min(self, node: TreeNode[K, V]) -> Optional[TreeNode[K, V]]:
        path: List[Tuple[TreeNode[K, V], bool]] = []
        while node.left is not None:
            path.append((node, True))
            node = node.left
        return self._retrace(path, node.right)

    def _delete_max(self, node: TreeNode[K, V]) -> Optional[TreeNode[K, V]]:
        path: List[Tuple[TreeNode[K, V], bool]] = []
        while node.right is not None:
            path.append((node, False))
            node = node.right
        return self._retrace(path, node.left)

    def _remove_end(self, operation: str, largest: bool) -> Tuple[K, V]:
        if self._root is None:
            raise EmptyTableError(operation)

        if largest:
            removed = self._root._max_node()
            self._root = self._delete_max(self._root)
        else:
            removed = self._root._min_node()
            self._root = self._delete_min(self._root)

        r = (removed.key, removed.value)
        removed._detach()
        self._after_mutation(operation)
        return r

    def delete_min(self):
        self._remove_end("delete_min", largest=False)

    def delete_max(self):
        self._remove_end("delete_max", largest=True)

    def pop_min(self) -> Tuple[K, V]:
        return self._remove_end("pop_min", largest=False)

    def pop_max(self) -> Tuple[K, V]:
        return self._remove_end("pop_max", largest=True)

    def clear(self):
        self._root = None

    # ordered queries

    def min(self) -> K:
        if self._root is None:
            raise EmptyTableError("min")
        return self._root._min_node().key

    def max(self) -> K:
        if self._root is None:
            raise EmptyTableError("max")
        return self._root._max_node().key

    def floor(self, key: K) -> Optional[K]:
        """Largest key less than or equal to ``key``, or None."""
        _require_key(key, "floor")
        best: Optional[TreeNode[K, V]] = None
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                best = node
                node = node.right
            else:
                return node.key
        return best.key if best is not None else None

    def ceiling(self, key: K) -> Optional[K]:
        """Smallest key greater than or equal to ``key``, or None."""
        _require_key(key, "ceiling")
        best: Optional[TreeNode[K, V]] = None
        node = self._root
        while node is not None:
            if node.key < key:
                node = node.right
            elif key < node.key:
                best = node
                node = node.left
            else:
                return node.key
        return best.key if best is not None else None

    def select(self, k: int) -> K:
        """Return the key of rank ``k``, i.e. the kth smallest key (0-based)."""
        size = self.size()
        if not isinstance(k, numbers.Integral) or not 0 <= k < size:
            raise RankOutOfRangeError(k, size)

        node = self._root
        while True:
            t = _size(node.left)
            if t > k:
                node = node.left
            elif t < k:
                k -= t + 1
                node = node.right
            else:
                return node.key

    def rank(self, key: K) -> int:
        """Return the number of keys strictly less than ``key``."""
        _require_key(key, "rank")
        r = 0
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                r += 1 + _size(node.left)
                node = node.right
            else:
                return r + _size(node.left)
        return r

    def size_by_keys(self, lo: K, hi: K) -> int:
        """Number of keys in the closed range [lo, hi]."""
        _require_key(lo, "size_by_keys")
        _require_key(hi, "size_by_keys")
        if hi < lo:
            return 0
        if self.contains(hi):
            return self.rank(hi) - self.rank(lo) + 1
        return self.rank(hi) - self.rank(lo)

    # traversals

    def keys(self) -> Deque[K]:
        return self.keys_in_order()

    def keys_in_order(self) -> Deque[K]:
        return deque(TreeIter(TreeIter.KEYS, self._root))

    def keys_level_order(self) -> Deque[K]:
        return deque(node.key for node in level_order(self._root))

    def keys_by_range(self, lo: K, hi: K) -> Deque[K]:
        """Keys in the closed range [lo, hi], in ascending order."""
        _require_key(lo, "keys_by_range")
        _require_key(hi, "keys_by_range")
        return deque(TreeIter(TreeIter.KEYS, self._root, lo, hi))

    def items(
        self,
        left_bound: Optional[K] = None,
        right_bound: Optional[K] = None,
        reverse: bool = False,
    ) -> Iterator[Tuple[K, V]]:
        return TreeIter(TreeIter.ITEMS, self._root, left_bound, right_bound, reverse)

    def values(
        self,
        left_bound: Optional[K] = None,
        right_bound: Optional[K] = None,
        reverse: bool = False,
    ) -> Iterator[V]:
        return TreeIter(TreeIter.VALS, self._root, left_bound, right_bound, reverse)

    # self-verification

    def check(self) -> check.CheckResult:
        return check.check(self, self.invariants)

    def is_bst(self) -> bool:
        return check.is_bst(self._root)

    def is_avl(self) -> bool:
        return check.is_avl(self._root)

    def is_size_consistent(self) -> bool:
        return check.is_size_consistent(self._root)

    def is_rank_consistent(self) -> bool:
        return check.is_rank_consistent(self)

    def _after_mutation(self, operation: str):
        if not self._self_check:
            return
        result = self.check()
        if not result:
            raise InvariantViolation(operation, result.failed)

    def print(self) -> str:
        if self._root is not None:
            return self._root._print_recursive(0)
        else:
            return "<empty tree>"

    # mapping protocol

    def __getitem__(self, key: K) -> V:
        _require_key(key, "__getitem__")
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: K, val: V):
        self.put(key, val)

    def __delitem__(self, key: K):
        if not self.contains(key):
            raise KeyError(key)
        self.delete(key)

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[K]:
        return TreeIter(TreeIter.KEYS, self._root)

    def __reversed__(self) -> Iterator[K]:
        return TreeIter(TreeIter.KEYS, self._root, rev=True)

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return "{}({{{}}})".format(
            self.__class__.__name__,
            ", ".join("{!r}: {!r}".format(k, v) for k, v in self.items()),
        )
