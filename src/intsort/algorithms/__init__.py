"""
Algorithms package public API.

Each algorithm lives in its own module exposing
    sort(records: list[Record], *, config: dict | None = None) -> list[Record]
plus the module constants NAME, STABLE and MUTATION.

`Algorithm` is the single entry point the benchmark layer uses to pick a
variant by name:

    from intsort.algorithms import Algorithm
    algo = Algorithm.from_name("radix_lsd")
    out = algo.sort(records)
    algo.stable, algo.mutation
"""

from __future__ import annotations

import importlib
from enum import Enum
from types import ModuleType
from typing import Any, Dict, List, Optional

from intsort.records import Record

from ._common import DEFAULT_MAX_RANGE, KeyRangeError, MutationStyle, scan_range

__all__ = [
    "Algorithm",
    "MutationStyle",
    "KeyRangeError",
    "DEFAULT_MAX_RANGE",
    "scan_range",
]

_LABELS = {
    "counting_stable": "Counting Sort (Stable)",
    "counting_unstable": "Counting Sort (Unstable)",
    "radix_lsd": "LSD Radix Sort",
    "bucket": "Bucket Sort",
    "pigeonhole": "Pigeonhole Sort",
}


class Algorithm(str, Enum):
    COUNTING_STABLE = "counting_stable"
    COUNTING_UNSTABLE = "counting_unstable"
    RADIX_LSD = "radix_lsd"
    BUCKET = "bucket"
    PIGEONHOLE = "pigeonhole"

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unknown algorithm: {name!r}. Supported: {[a.value for a in cls]}"
            ) from None

    @property
    def module(self) -> ModuleType:
        return importlib.import_module(f"{__name__}.{self.value}")

    @property
    def label(self) -> str:
        return _LABELS[self.value]

    @property
    def stable(self) -> bool:
        return bool(self.module.STABLE)

    @property
    def mutation(self) -> MutationStyle:
        return self.module.MUTATION

    def sort(self, records: List[Record], config: Optional[Dict[str, Any]] = None) -> List[Record]:
        return self.module.sort(records, config=config)
