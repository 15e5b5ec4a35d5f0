"""
Helpers shared by the algorithm modules.

- `scan_range` finds the (min, max) key of a non-empty sequence. Every
  algorithm short-circuits on empty input before calling it.
- `check_span` guards the algorithms whose buffers are indexed by
  `key - min_key` (stable/unstable counting, pigeonhole). A key span above
  `max_range` raises `KeyRangeError` rather than attempting the allocation.
- `config_int` reads an optional integer option out of an algorithm config.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from intsort.records import Record

# Largest span a signed 32-bit index can address.
DEFAULT_MAX_RANGE: int = 2**31 - 1

__all__ = [
    "DEFAULT_MAX_RANGE",
    "KeyRangeError",
    "MutationStyle",
    "scan_range",
    "check_span",
    "config_int",
]


class MutationStyle(str, Enum):
    """How an algorithm treats the list it is handed."""

    # input left untouched, a new list is returned
    REPLACED = "replaced"
    # input list rewritten slot by slot; ids stay at their positions
    KEYS_REWRITTEN = "keys_rewritten"


class KeyRangeError(ValueError):
    """Raised when max_key - min_key + 1 exceeds the allowed buffer size."""

    def __init__(self, min_key: int, max_key: int, limit: int):
        self.min_key = min_key
        self.max_key = max_key
        self.limit = limit
        super().__init__(
            f"key span {max_key - min_key + 1} (keys in [{min_key}, {max_key}]) "
            f"exceeds max_range={limit}; bound the key range before sorting"
        )


def scan_range(records: Sequence[Record]) -> Tuple[int, int]:
    """
    Return (min_key, max_key) over a non-empty sequence of Records.

    Raises
    ------
    ValueError
        If `records` is empty.
    """
    if not records:
        raise ValueError("scan_range requires a non-empty sequence")
    lo = hi = records[0].key
    for rec in records:
        if rec.key < lo:
            lo = rec.key
        elif rec.key > hi:
            hi = rec.key
    return lo, hi


def check_span(min_key: int, max_key: int, config: Optional[Dict[str, Any]]) -> int:
    """
    Return the key span (max_key - min_key + 1), validated against max_range.

    `config["max_range"]` overrides DEFAULT_MAX_RANGE; an explicit None
    disables the check.
    """
    limit = DEFAULT_MAX_RANGE
    if config and "max_range" in config:
        limit = config["max_range"]
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
            raise ValueError(f"config.max_range must be a positive int or None; got {limit!r}")

    span = max_key - min_key + 1
    if limit is not None and span > limit:
        raise KeyRangeError(min_key, max_key, limit)
    return span


def config_int(
    config: Optional[Dict[str, Any]], name: str, default: Optional[int], minimum: int
) -> Optional[int]:
    """Read integer option `name` (>= minimum) from config, or return `default`."""
    if not config or config.get(name) is None:
        return default
    val = config[name]
    if isinstance(val, bool) or not isinstance(val, int) or val < minimum:
        raise ValueError(f"config.{name} must be an int >= {minimum}; got {val!r}")
    return val
