from .base import Tree, TreeNode
from .avl import AVLTree, AVLNode
from .check import CheckResult, Invariant
from .iter import TreeIter

__all__ = ["Tree", "TreeNode", "AVLTree", "AVLNode", "CheckResult", "Invariant", "TreeIter"]
