"""
Timing harness for the sorting algorithms.

One sample is one call to `algo_fn(records, config=...)` between two
`time.perf_counter_ns()` reads. Input preparation, GC and warmup stay outside
that window.

How the input is prepared depends on the algorithm's MutationStyle:

- KEYS_REWRITTEN (unstable counting) rewrites the list it is given, so every
  call, warmup included, gets its own shallow `list(a)` copy. Records are
  frozen, so the shallow copy is enough.
- REPLACED algorithms promise to leave their input alone, so the same list is
  handed to every call and no copy is made. The promise is checked once after
  the timed loop; a broken one turns the result into status="error".

Public API (stable):
    time_sort_call(... ) -> dict
    peak_alloc_bytes(algo_fn, a, config) -> int

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import time
import tracemalloc
from typing import Any, Callable, Dict, List, Optional

from intsort.algorithms import MutationStyle
from intsort.records import Record

__all__ = ["time_sort_call", "peak_alloc_bytes"]

SortFn = Callable[..., List[Record]]


def _input_for(a: List[Record], mutation: MutationStyle) -> List[Record]:
    if mutation is MutationStyle.KEYS_REWRITTEN:
        return list(a)
    return a


def _sample(algo_fn: SortFn, arg: List[Record], config: Optional[Dict[str, Any]]) -> int:
    t0 = time.perf_counter_ns()
    algo_fn(arg, config=config)
    return time.perf_counter_ns() - t0


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: SortFn,
    a: List[Record],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    mutation: MutationStyle = MutationStyle.KEYS_REWRITTEN,
) -> Dict[str, Any]:
    """
    Collect up to `repeats` timings of `algo_fn` on `a`.

    The caller's list is never changed: algorithms that rewrite their input
    get a fresh copy per call. The default `mutation` assumes the worst, so an
    unknown callable is always fed copies. Pass the algorithm's own style
    (`Algorithm.mutation`) to skip copying for the REPLACED algorithms.

    A sample slower than `timeout_seconds` is kept, marks the result
    "timeout" and ends sampling. An exception from the algorithm marks the
    result "error" and ends sampling.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    samples: List[int] = []
    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": samples,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }
    if repeats == 0:
        return result

    snapshot = list(a) if mutation is MutationStyle.REPLACED else None

    if warmup:
        try:
            algo_fn(_input_for(a, mutation), config=config)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    threshold_ns = int(timeout_seconds * 1e9)
    gc_was_enabled = gc.isenabled()
    if disable_gc:
        gc.collect()
        gc.disable()
    try:
        for r in range(repeats):
            arg = _input_for(a, mutation)
            try:
                elapsed = _sample(algo_fn, arg, config)
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break
            samples.append(elapsed)
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        if disable_gc and gc_was_enabled:
            gc.enable()

    if snapshot is not None and a != snapshot:
        # later samples sorted already-sorted input; none of them count
        a[:] = snapshot
        samples.clear()
        result["status"] = "error"
        result["error"] = f"{algo_name} rewrote its input but claims {MutationStyle.REPLACED.value!r}"
    return result


def peak_alloc_bytes(
    algo_fn: SortFn,
    a: List[Record],
    config: Optional[Dict[str, Any]],
) -> int:
    """
    Peak bytes allocated by Python during one call to `algo_fn(copy_of_a, config=config)`.

    Runs untimed: tracemalloc slows allocation down considerably. The input
    copy is made before tracing starts, so only the algorithm's own buffers
    (histograms, holes, buckets, output lists) are counted.
    """
    arg = list(a)
    was_tracing = tracemalloc.is_tracing()
    if not was_tracing:
        tracemalloc.start()
    try:
        tracemalloc.reset_peak()
        base, _ = tracemalloc.get_traced_memory()
        algo_fn(arg, config=config)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        if not was_tracing:
            tracemalloc.stop()
    return max(0, peak - base)
