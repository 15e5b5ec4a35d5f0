"""
Stable counting sort.

Builds a histogram over `key - min_key`, turns it into cumulative counts
(the exclusive upper bound of each key's output slots), then walks the input
from last to first placing each record at `count[key] - 1` and decrementing.
The back-to-front walk hands the highest free slot of a key to the latest
record with that key, so equal keys keep their input order.

Time O(n + span), extra space O(n + span).

Config:
    max_range : int | None   # span guard, see _common.check_span
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import MutationStyle, check_span, scan_range

NAME = "counting_stable"
STABLE = True
MUTATION = MutationStyle.REPLACED

__all__ = ["NAME", "STABLE", "MUTATION", "sort"]


def sort(records: List[Record], *, config: Optional[Dict[str, Any]] = None) -> List[Record]:
    """Return a new list with `records` in ascending key order (stable)."""
    if not records:
        return []

    lo, hi = scan_range(records)
    span = check_span(lo, hi, config)

    count = [0] * span
    for rec in records:
        count[rec.key - lo] += 1

    for i in range(1, span):
        count[i] += count[i - 1]

    out: List[Optional[Record]] = [None] * len(records)
    for rec in reversed(records):
        idx = rec.key - lo
        count[idx] -= 1
        out[count[idx]] = rec

    return out  # type: ignore[return-value]
