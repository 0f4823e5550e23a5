"""
Centralized configuration for ordered symbol tables
"""
import os


class Config:
    # run every invariant validator after each put/delete and raise
    # InvariantViolation on failure; O(n log n) per mutation
    self_check = os.environ.get("ORDERED_ST_SELF_CHECK", "0") not in ("", "0")
