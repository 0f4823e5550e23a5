from __future__ import annotations

from typing import Sequence


class SymbolTableError(Exception):
    """Base class for errors raised by ordered symbol tables."""


class NullKeyError(SymbolTableError, ValueError):
    def __init__(self, operation: str):
        super().__init__("argument to {}() is None".format(operation))
        self.operation: str = operation


class EmptyTableError(SymbolTableError, IndexError):
    def __init__(self, operation: str):
        super().__init__("called {}() with empty symbol table".format(operation))
        self.operation: str = operation


class RankOutOfRangeError(SymbolTableError, IndexError):
    def __init__(self, k: int, size: int):
        super().__init__("k={} is not in range 0-{}".format(k, size - 1))
        self.k = k
        self.size: int = size


class InvariantViolation(SymbolTableError, AssertionError):
    """Raised after a mutation when self-checking is enabled and one or more
    tree invariants no longer hold.
    """

    def __init__(self, operation: str, failed: Sequence):
        super().__init__(
            "invariants violated after {}(): {}".format(
                operation, ", ".join(inv.name for inv in failed)
            )
        )
        self.operation: str = operation
        self.failed = tuple(failed)
