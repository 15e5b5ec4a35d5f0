"""
Bucket sort.

One bucket per input record by default. A record goes to bucket
`(key - min_key) * bucket_count // span`, clamped to `bucket_count - 1`; the
index is computed with integer arithmetic so it cannot round past the last
bucket, but the clamp is kept as a guard. Buckets are sorted by key with
Python's stable `sorted` and concatenated in bucket order, which keeps the
whole sort stable.

Near-linear for roughly uniform keys; under heavy skew most records land in
one bucket and the cost approaches that of sorting that bucket.

Config:
    bucket_count : int   # >= 1 (default len(records))
"""

from __future__ import annotations

from operator import attrgetter
from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import MutationStyle, config_int, scan_range

NAME = "bucket"
STABLE = True
MUTATION = MutationStyle.REPLACED

__all__ = ["NAME", "STABLE", "MUTATION", "sort"]

_by_key = attrgetter("key")


def sort(records: List[Record], *, config: Optional[Dict[str, Any]] = None) -> List[Record]:
    """Return a new list with `records` in ascending key order (stable)."""
    bucket_count = config_int(config, "bucket_count", None, minimum=1)
    if not records:
        return []
    if bucket_count is None:
        bucket_count = len(records)

    lo, hi = scan_range(records)
    span = hi - lo + 1

    buckets: List[List[Record]] = [[] for _ in range(bucket_count)]
    last = bucket_count - 1
    for rec in records:
        idx = (rec.key - lo) * bucket_count // span
        if idx > last:
            idx = last
        buckets[idx].append(rec)

    out: List[Record] = []
    for b in buckets:
        if len(b) > 1:
            b = sorted(b, key=_by_key)
        out.extend(b)
    return out
