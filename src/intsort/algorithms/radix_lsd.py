"""
LSD radix sort over decimal digits.

Negative keys are handled by shifting every key by `-min_key` (when
min_key < 0) before the passes and shifting back afterwards. Each pass is a
stable counting sort on one digit, walking `exp = 1, base, base**2, ...`
while `max_shifted // exp > 0`; stacking stable passes keeps the whole sort
stable.

Time O(d * (n + base)) where d is the digit count of the largest shifted
key, so very large keys cost many passes even for small n.

Config:
    base : int   # digit base, >= 2 (default 10)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import MutationStyle, config_int, scan_range

NAME = "radix_lsd"
STABLE = True
MUTATION = MutationStyle.REPLACED

DEFAULT_BASE = 10

__all__ = ["NAME", "STABLE", "MUTATION", "DEFAULT_BASE", "sort"]


def sort(records: List[Record], *, config: Optional[Dict[str, Any]] = None) -> List[Record]:
    """Return a new list with `records` in ascending key order (stable)."""
    base = config_int(config, "base", DEFAULT_BASE, minimum=2)
    if not records:
        return []

    lo, hi = scan_range(records)
    shift = -lo if lo < 0 else 0

    arr = [Record(r.key + shift, r.id) for r in records] if shift else list(records)
    max_key = hi + shift

    exp = 1
    while max_key // exp > 0:
        arr = _digit_pass(arr, exp, base)
        exp *= base

    if shift:
        arr = [Record(r.key - shift, r.id) for r in arr]
    return arr


def _digit_pass(arr: List[Record], exp: int, base: int) -> List[Record]:
    count = [0] * base
    for rec in arr:
        count[(rec.key // exp) % base] += 1

    for i in range(1, base):
        count[i] += count[i - 1]

    out: List[Optional[Record]] = [None] * len(arr)
    for rec in reversed(arr):
        digit = (rec.key // exp) % base
        count[digit] -= 1
        out[count[digit]] = rec
    return out  # type: ignore[return-value]
