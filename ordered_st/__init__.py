import logging

from . import config
from . import errors
from . import tree

from .config import Config
from .errors import (
    SymbolTableError,
    NullKeyError,
    EmptyTableError,
    RankOutOfRangeError,
    InvariantViolation,
)
from .tree import Tree, AVLTree, CheckResult, Invariant

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "Tree",
    "AVLTree",
    "CheckResult",
    "Invariant",
    "SymbolTableError",
    "NullKeyError",
    "EmptyTableError",
    "RankOutOfRangeError",
    "InvariantViolation",
]
