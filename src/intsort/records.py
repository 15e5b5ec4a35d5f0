"""
Record type shared by every algorithm, generator and validator.

A Record pairs an integer sort key with the position it occupied when it was
generated. Algorithms order by `key` only; `id` is carried along so that
stability can be checked afterwards.

Public API (stable):
    Record(key: int, id: int)
    records_from_keys(keys: Iterable[int]) -> list[Record]
    keys_of(records: Sequence[Record]) -> list[int]
    ids_of(records: Sequence[Record]) -> list[int]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

__all__ = ["Record", "records_from_keys", "keys_of", "ids_of"]


@dataclass(frozen=True)
class Record:
    key: int
    id: int

    def __repr__(self) -> str:
        return f"Record({self.key}, id={self.id})"


def records_from_keys(keys: Iterable[int]) -> List[Record]:
    """Wrap keys into Records whose ids are their positions (0, 1, 2, ...)."""
    return [Record(int(k), i) for i, k in enumerate(keys)]


def keys_of(records: Sequence[Record]) -> List[int]:
    return [r.key for r in records]


def ids_of(records: Sequence[Record]) -> List[int]:
    return [r.id for r in records]
