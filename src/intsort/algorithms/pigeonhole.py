"""
Pigeonhole sort: one hole per key value in [min_key, max_key].

Appending keeps encounter order inside a hole, so the sort is stable.
Memory is O(span) regardless of n; a key span far above the record count is
a capacity problem for the caller, guarded by `max_range`.

Config:
    max_range : int | None   # span guard, see _common.check_span
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import MutationStyle, check_span, scan_range

NAME = "pigeonhole"
STABLE = True
MUTATION = MutationStyle.REPLACED

__all__ = ["NAME", "STABLE", "MUTATION", "sort"]


def sort(records: List[Record], *, config: Optional[Dict[str, Any]] = None) -> List[Record]:
    """Return a new list with `records` in ascending key order (stable)."""
    if not records:
        return []

    lo, hi = scan_range(records)
    span = check_span(lo, hi, config)

    holes: List[List[Record]] = [[] for _ in range(span)]
    for rec in records:
        holes[rec.key - lo].append(rec)

    out: List[Record] = []
    for hole in holes:
        out.extend(hole)
    return out
