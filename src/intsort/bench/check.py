"""
Quick verification pass: run every algorithm once on one generated dataset
and report ordering, stability and key/id pairing.

Usage (from repo root):
    python -m intsort.bench.check --n 10000 --k 10000 --dist random --seed 0

"Stable" is the positional-id check from `verify`. On freshly generated data
the unstable counting sort usually passes it too, because ids never leave
their slots; "Pairing" is the column that exposes it.

Exit status is 1 if any algorithm breaks a guarantee it claims.
"""

from __future__ import annotations

import argparse
import time
from typing import Any, Dict, List, Optional

import numpy as np
from rich.console import Console
from rich.table import Table

from intsort.algorithms import Algorithm
from intsort.datasets import SUPPORTED_DISTS, make_dataset
from intsort.log import get_logger
from intsort.validate import positions_preserved, preserves_pairing, verify

__all__ = ["run_check", "main"]

_console = Console()
log = get_logger("bench.check")


def run_check(n: int, k: int, dist: str = "random", seed: int = 0) -> List[Dict[str, Any]]:
    """Sort one dataset with every algorithm; return one result row per algorithm."""
    rng = np.random.default_rng(seed)
    base = make_dataset(n, {"dist": dist, "params": {"k": k}}, rng)

    rows: List[Dict[str, Any]] = []
    for algo in Algorithm:
        before = list(base)
        arg = list(base)
        t0 = time.perf_counter_ns()
        out = algo.sort(arg)
        elapsed_ms = (time.perf_counter_ns() - t0) / 1e6

        row = {
            "algo": algo.value,
            "label": algo.label,
            "time_ms": elapsed_ms,
            "sorted_ok": verify(out, stability_required=False),
            "stable_ok": verify(out, stability_required=True),
            "pairing_ok": preserves_pairing(before, out),
            "positions_ok": positions_preserved(before, out),
            "claims_stable": algo.stable,
        }
        if algo.stable:
            row["passed"] = row["sorted_ok"] and row["stable_ok"] and row["pairing_ok"]
        else:
            row["passed"] = row["sorted_ok"] and row["positions_ok"] and out is arg
        log.debug("%s: %s", algo.value, row)
        rows.append(row)
    return rows


def _yes_no(ok: bool) -> str:
    return "[green]YES[/]" if ok else "[red]NO[/]"


def _print_table(rows: List[Dict[str, Any]], n: int, k: int, dist: str) -> None:
    table = Table(title=f"Verification & stability (dist={dist}, n={n}, k={k})")
    table.add_column("Algorithm", style="bold")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Sorted")
    table.add_column("Stable")
    table.add_column("Pairing")
    table.add_column("Result")
    for r in rows:
        pairing = _yes_no(r["pairing_ok"])
        if not r["claims_stable"] and not r["pairing_ok"]:
            pairing = "[yellow]NO (expected)[/]"
        table.add_row(
            r["label"],
            f"{r['time_ms']:.2f}",
            _yes_no(r["sorted_ok"]),
            _yes_no(r["stable_ok"]),
            pairing,
            "[green]ok[/]" if r["passed"] else "[bold red]FAIL[/]",
        )
    _console.print(table)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run every algorithm once and check its guarantees.")
    p.add_argument("--n", type=int, default=10000, help="number of records")
    p.add_argument("--k", type=int, default=10000, help="inclusive upper key bound")
    p.add_argument("--dist", choices=sorted(SUPPORTED_DISTS), default="random")
    p.add_argument("--seed", type=int, default=0)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    rows = run_check(args.n, args.k, args.dist, args.seed)
    _print_table(rows, args.n, args.k, args.dist)
    failed = [r["algo"] for r in rows if not r["passed"]]
    if failed:
        log.error("guarantee violated by: %s", ", ".join(failed))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
