"""
Oracle for sorting correctness.

We use Python's built-in `sorted()` keyed on `Record.key` as the ground
truth:
- Correct total order for integer keys
- Deterministic and portable
- Stable, so equal keys keep their input order (the id is never a tie-breaker)

Public API (stable):
    oracle_sort(a: list[Record]) -> list[Record]
    equals_oracle(a: list[Record], out: list[Record]) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- Every stable algorithm in this repo must match the oracle output exactly.
  The unstable counting sort matches it on keys only.
"""

from __future__ import annotations

from operator import attrgetter
from typing import List

from intsort.records import Record

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: List[Record]) -> List[Record]:
    """
    Return the ground-truth sorted output for the given Record list.

    Parameters
    ----------
    a : list[Record]
        Input sequence. The oracle does not mutate `a`.

    Returns
    -------
    list[Record]
        A new list with the same Records as `a`, in nondecreasing key order,
        equal keys in input order.
    """
    return sorted(a, key=attrgetter("key"))


def equals_oracle(a: List[Record], out: List[Record]) -> bool:
    """
    Check whether an algorithm's output matches the oracle exactly
    (keys and ids at every position).

    `a` must be the input as it was *before* the sort ran; pass a copy when
    checking an algorithm that rewrites its input.
    """
    return out == oracle_sort(a)
