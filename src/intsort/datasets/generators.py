"""
Dataset generators for sorting benchmarks.

Every generator returns a list of Records whose ids are 0..n-1 in final
positional order, so a stable sort keeps ids increasing inside every run of
equal keys.

Currently implemented:
- dist == "random":
    Keys drawn uniformly from [0, k] inclusive.

- dist == "nearly_sorted":
    Keys drawn uniformly from [0, k], sorted ascending, then
    max(1, int(swap_frac * n)) random pairs of positions have their keys
    swapped using the provided RNG.

- dist == "reversed":
    Deterministic strictly descending keys: key = n - position.

- dist == "skewed":
    Zipf-like: key = floor(r**2 * k) for r uniform in [0, 1). Many small
    keys, few large ones.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[Record]

Conventions:
- params["k"] is the inclusive upper bound of the key range; it is required
  for "random", "nearly_sorted" and "skewed", and ignored by "reversed".
- For "nearly_sorted", params["swap_frac"] defaults to 0.05; swap_frac == 0
  leaves the keys fully sorted. Swaps drawing i == j are no-ops, so effective
  swaps may be fewer than requested.
- The caller supplies the RNG (for reproducibility across runs).
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np

from intsort.records import Record, records_from_keys

SUPPORTED_DISTS = {
    "random",
    "nearly_sorted",
    "reversed",
    "skewed",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[Record]:
    """
    Generate a Record dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of records to generate. Must be >= 0.
    spec : dict
        Distribution specification.

        Random:
            {"dist": "random", "params": {"k": 10000}}

        Nearly-sorted:
            {"dist": "nearly_sorted", "params": {"k": 10000, "swap_frac": 0.05}}

        Reversed:
            {"dist": "reversed", "params": {}}            # params unused

        Skewed:
            {"dist": "skewed", "params": {"k": 10000}}

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).
        Note: for "reversed", `rng` is unused.

    Returns
    -------
    list[Record]
        A list of length `n`; record i has id i.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}

    if dist == "random":
        k = _parse_k(params, dist)
        if n == 0:
            return []
        # integers() is half-open [low, high); +1 makes k inclusive.
        keys = rng.integers(0, k + 1, size=n, dtype=np.int64)
        return records_from_keys(keys.tolist())

    if dist == "nearly_sorted":
        k = _parse_k(params, dist)
        swap_frac = _parse_swap_frac(params)
        if n == 0:
            return []
        keys = np.sort(rng.integers(0, k + 1, size=n, dtype=np.int64)).tolist()
        num_swaps = max(1, int(swap_frac * n)) if swap_frac > 0 else 0
        if num_swaps:
            idxs = rng.integers(0, n, size=2 * num_swaps)
            for s in range(num_swaps):
                i = int(idxs[2 * s])
                j = int(idxs[2 * s + 1])
                keys[i], keys[j] = keys[j], keys[i]
        return records_from_keys(keys)

    if dist == "reversed":
        return [Record(n - i, i) for i in range(n)]

    if dist == "skewed":
        k = _parse_k(params, dist)
        if n == 0:
            return []
        r = rng.random(size=n)
        keys = np.floor(r * r * k).astype(np.int64)
        return records_from_keys(keys.tolist())

    # Should be unreachable because of the check above; keep explicit for clarity.
    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not _is_int_like(n):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_k(params: Dict[str, Any], dist: str) -> int:
    """
    Parse and validate k, the inclusive upper key bound. Must be an int >= 0.
    """
    if "k" not in params:
        raise ValueError(f"{dist}.params.k must be provided (int >= 0)")
    k = params["k"]
    if not _is_int_like(k) or k < 0:
        raise ValueError(f"{dist}.params.k must be an integer >= 0; got {k!r}")
    return int(k)


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """
    Parse and validate swap_frac in [0.0, 1.0] for nearly_sorted.
    Default to 0.05 if not provided.
    """
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, but not bools
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
