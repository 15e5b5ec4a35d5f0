"""
Verifier for sorted Record sequences.

`verify(records, stability_required)` answers two questions:
- are keys non-decreasing throughout, and
- (if stability_required) are ids strictly increasing inside every run of
  equal keys?

The stability half assumes ids were assigned in positional order before the
sort, which is what the dataset generators do.

Public API (stable):
    verify(records, stability_required=True) -> bool
    first_violation_index(records, stability_required=True) -> int | None
"""

from __future__ import annotations

from typing import Optional, Sequence

from intsort.records import Record

__all__ = ["verify", "first_violation_index"]


def verify(records: Sequence[Record], stability_required: bool = True) -> bool:
    """Return True iff `records` is sorted by key (and stable, if requested)."""
    return first_violation_index(records, stability_required) is None


def first_violation_index(
    records: Sequence[Record], stability_required: bool = True
) -> Optional[int]:
    """
    Return the first index i where the pair (records[i], records[i+1]) breaks
    the ordering (or, if requested, stability), or None if there is none.

    Useful for precise error messages:
        i = first_violation_index(out)
        assert i is None, f"violation at i={i}: {out[i]} -> {out[i+1]}"
    """
    for i in range(len(records) - 1):
        a, b = records[i], records[i + 1]
        if a.key > b.key:
            return i
        if stability_required and a.key == b.key and a.id >= b.id:
            return i
    return None
