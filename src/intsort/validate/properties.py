"""
Property helpers for validating sorting results.

These functions provide lightweight checks you can use in tests and inside
the benchmark layer for sanity validation.

Public API (stable):
    is_nondecreasing(xs: Sequence[int]) -> bool
    first_nondecreasing_violation_index(xs: Sequence[int]) -> int | None
    is_permutation(a: Sequence[Record], b: Sequence[Record]) -> bool
    permutation_counter_diff(a, b) -> dict[int, int]
    preserves_pairing(before, after) -> bool
    positions_preserved(before, after) -> bool
    assert_no_mutation(before, after) -> None

Notes
-----
- `is_permutation` / `permutation_counter_diff` compare key multisets: every
  algorithm, including the unstable one, must preserve them.
- `preserves_pairing` compares (key, id) multisets. Stable algorithms move
  whole Records so they always preserve it; the unstable counting sort moves
  keys between ids and breaks it whenever the input was not already sorted.
  Unlike `verify(..., stability_required=True)`, this catches the unstable
  variant even on freshly generated input whose ids match positions.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from intsort.records import Record


__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "preserves_pairing",
    "positions_preserved",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[int]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for all i."""
    n = len(xs)
    if n < 2:
        return True
    return all(xs[i] <= xs[i + 1] for i in range(n - 1))


def first_nondecreasing_violation_index(xs: Sequence[int]) -> int | None:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.
    """
    n = len(xs)
    for i in range(n - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[Record], b: Sequence[Record]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of keys.
    """
    if len(a) != len(b):
        return False
    return Counter(r.key for r in a) == Counter(r.key for r in b)


def permutation_counter_diff(a: Sequence[Record], b: Sequence[Record]) -> Dict[int, int]:
    """
    Return a dict of key -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical key multiplicities.
    Positive values indicate extra occurrences in `a`, negative in `b`.
    """
    ca = Counter(r.key for r in a)
    cb = Counter(r.key for r in b)
    diff: Dict[int, int] = {}
    for k in set(ca.keys()) | set(cb.keys()):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def preserves_pairing(before: Sequence[Record], after: Sequence[Record]) -> bool:
    """Return True iff every (key, id) pair of `before` appears in `after`, same counts."""
    if len(before) != len(after):
        return False
    return Counter(before) == Counter(after)


def positions_preserved(before: Sequence[Record], after: Sequence[Record]) -> bool:
    """Return True iff after[i].id == before[i].id for every position i."""
    if len(before) != len(after):
        return False
    return all(x.id == y.id for x, y in zip(before, after))


def assert_no_mutation(before: Sequence[Record], after: Sequence[Record]) -> None:
    """
    Assert that two sequences are exactly equal (element-wise), used to ensure
    an algorithm did not mutate its input in-place.

    Raises AssertionError with a concise message if they differ.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    if list(before) == list(after):
        return
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(
                f"Input mutated at index {i}: before={x}, after={y}"
            )
    raise AssertionError("Input mutated (values differ)")
