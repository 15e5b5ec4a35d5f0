"""
Unstable counting sort (negative control).

Uses the same histogram as the stable variant but writes keys straight back
into the input list: walking key values in ascending order it fills slots
0, 1, 2, ... with the next key while each slot keeps the id it already had.
Afterwards `out[i].id == before[i].id` for every i, so a key is no longer
paired with the id it was generated with unless the input was already sorted.

Records are immutable, so "rewriting a key" means storing a new Record with
the old slot's id. The list object passed in is the list returned.

Config:
    max_range : int | None   # span guard, see _common.check_span
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import MutationStyle, check_span, scan_range

NAME = "counting_unstable"
STABLE = False
MUTATION = MutationStyle.KEYS_REWRITTEN

__all__ = ["NAME", "STABLE", "MUTATION", "sort"]


def sort(records: List[Record], *, config: Optional[Dict[str, Any]] = None) -> List[Record]:
    """Rewrite the keys of `records` in place into ascending order; return `records`."""
    if not records:
        return records

    lo, hi = scan_range(records)
    span = check_span(lo, hi, config)

    count = [0] * span
    for rec in records:
        count[rec.key - lo] += 1

    pos = 0
    for offset in range(span):
        key = offset + lo
        for _ in range(count[offset]):
            records[pos] = Record(key, records[pos].id)
            pos += 1

    return records
