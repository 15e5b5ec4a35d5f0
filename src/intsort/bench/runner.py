"""
Experiment runner: orchestrates a full benchmarking sweep from a YAML config.

Usage (from repo root):
    python -m intsort.bench.runner experiments/configs/01_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample or failure
    - summary.csv             # median + IQR per (dataset, algo, n, k)
    - (console) rich/tqdm summaries

Sweep order: datasets -> key ranges -> sizes -> algorithms. When
`key_ranges` is omitted each size n uses k = n. With `measure_memory: true`
each case also records the algorithm's peak Python allocation (`peak_bytes`).

Design notes:
- For each (dataset, k, n), we generate ONE dataset and give the same input to every algorithm.
- Every algorithm's output is verified once, outside the timed samples.
- On timeout/error for an algorithm, we skip it for the rest of that dataset's sweep.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import os
import subprocess
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from intsort.algorithms import Algorithm
from intsort.bench.measure import peak_alloc_bytes, time_sort_call
from intsort.datasets import make_dataset
from intsort.log import get_logger
from intsort.records import Record
from intsort.validate import preserves_pairing, verify

_console = Console()
log = get_logger("bench.runner")

_SUMMARY_COLUMNS = ["dataset", "dist", "algo", "n", "k", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]
_SUMMARY_KEYS = ["dataset", "dist", "algo", "n", "k"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    algorithm: Algorithm
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode("utf-8").strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def _gather_meta() -> Dict[str, Any]:
    import platform
    meta = {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }
    return meta


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        algorithm = Algorithm.from_name(name)

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, algorithm=algorithm, config=config))
    return specs


def _resolve_datasets(cfg: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any]]]:
    """
    Return (label, spec) per dataset entry.

    The label identifies the entry in results and in the summary. It is the
    entry's `name` when given, else its `dist`; unnamed entries that share a
    `dist` are told apart by their position in the list (`dist#index`).
    """
    if "datasets" in cfg:
        datasets = cfg["datasets"]
        if not isinstance(datasets, list) or not datasets:
            raise ValueError("Config 'datasets' must be a non-empty list of dataset specs")
    elif "dataset" in cfg:
        datasets = [cfg["dataset"]]
    else:
        raise ValueError("Config must provide 'dataset' or 'datasets'")
    for ds in datasets:
        if not isinstance(ds, dict) or "dist" not in ds:
            raise ValueError(f"Dataset spec must be a dict with a 'dist' field; got {ds!r}")
        if "name" in ds and (not isinstance(ds["name"], str) or not ds["name"]):
            raise ValueError(f"Dataset 'name' must be a non-empty string; got {ds['name']!r}")

    unnamed = Counter(ds["dist"] for ds in datasets if "name" not in ds)
    resolved: List[Tuple[str, Dict[str, Any]]] = []
    seen = set()
    for i, ds in enumerate(datasets):
        if "name" in ds:
            label = ds["name"]
        elif unnamed[ds["dist"]] > 1:
            label = f"{ds['dist']}#{i}"
        else:
            label = str(ds["dist"])
        if label in seen:
            raise ValueError(f"Duplicate dataset label in config: {label}")
        seen.add(label)
        spec = {key: val for key, val in ds.items() if key != "name"}
        resolved.append((label, spec))
    return resolved


def _resolve_key_ranges(cfg: Dict[str, Any]) -> List[Optional[int]]:
    ranges = cfg.get("key_ranges")
    if ranges is None:
        return [None]
    if not isinstance(ranges, list) or not ranges:
        raise ValueError("Config 'key_ranges' must be a non-empty list of integers if provided")
    for k in ranges:
        if isinstance(k, bool) or not isinstance(k, int) or k < 0:
            raise ValueError(f"Config 'key_ranges' entries must be integers >= 0; got {k!r}")
    return list(ranges)


def _with_k(dataset_spec: Dict[str, Any], k: int) -> Dict[str, Any]:
    params = dict(dataset_spec.get("params") or {})
    params["k"] = int(k)
    return {"dist": dataset_spec["dist"], "params": params}


def _check_output(a_spec: AlgoSpec, base: List[Record]) -> Dict[str, bool]:
    """Run the algorithm once on a copy of `base` and check its output."""
    before = list(base)
    out = a_spec.algorithm.sort(list(base), config=a_spec.config)
    return {
        "sorted_ok": verify(out, stability_required=False),
        "stable_ok": verify(out, stability_required=True),
        "pairing_ok": preserves_pairing(before, out),
    }


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    # Filter only successful samples (lines with time_ns present)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    keys = _SUMMARY_KEYS
    out = (
        df.groupby(keys, as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            q1_ns=("time_ns", lambda s: s.quantile(0.25)),
            q3_ns=("time_ns", lambda s: s.quantile(0.75)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    out["iqr_ns"] = out["q3_ns"] - out["q1_ns"]
    out = out.drop(columns=["q1_ns", "q3_ns"])
    # Convert to int for clean CSV (pandas gives floats for median/quantiles)
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].astype("int64")
    columns = list(_SUMMARY_COLUMNS)
    if "peak_bytes" in df.columns:
        peaks = df.groupby(keys, as_index=False).agg(peak_bytes=("peak_bytes", "max"))
        out = out.merge(peaks, on=keys, how="left")
        columns.append("peak_bytes")
    return out[columns].sort_values(keys, ignore_index=True)


def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
    if median_ns is None:
        return "—"
    median_ms = median_ns / 1e6
    if iqr_ns is None:
        return f"{median_ms:.2f}"
    return f"{median_ms:.2f} ± {iqr_ns / 1e6:.2f}"


def _print_rich_summary(summary: pd.DataFrame, axis: str, values: List[int]) -> None:
    """One row per (dataset, algo); columns are the first/middle/last value of the swept axis."""
    table = Table(title=f"Benchmark Summary (median ± IQR in ms, by {axis})")
    table.add_column("Dataset")
    table.add_column("Algorithm", style="bold")

    picks: List[Tuple[str, int]] = []
    if values:
        for v in dict.fromkeys([values[0], values[len(values) // 2], values[-1]]):
            picks.append((f"{axis}={v}", v))
    for hdr, _ in picks:
        table.add_column(hdr, justify="right")

    if summary.empty:
        _console.print("(no samples)")
        return

    for (label, algo), group in summary.groupby(["dataset", "algo"], sort=False):
        row = [str(label), f"[bold]{Algorithm.from_name(algo).label}[/]"]
        for _, v in picks:
            s = group[group[axis] == v]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].median()), int(s["iqr_ns"].median())))
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {config_path}")

    # Required keys & basic validation
    required = ["experiment_name", "output_dir", "seed", "repeats", "warmup", "disable_gc", "timeout_seconds", "sizes", "algorithms"]
    missing = [k for k in required if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    timeout_seconds: float = float(cfg["timeout_seconds"])
    measure_memory: bool = bool(cfg.get("measure_memory", False))
    datasets = _resolve_datasets(cfg)
    key_ranges = _resolve_key_ranges(cfg)
    algos_cfg: List[Dict[str, Any]] = list(cfg["algorithms"])

    if not sizes:
        raise ValueError("Config 'sizes' must be a non-empty list of positive integers")

    # Algorithms (resolve before creating the run directory)
    algos: List[AlgoSpec] = _resolve_algorithms(algos_cfg)

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)

    meta = _gather_meta()
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.algorithm.label for a in algos)}")
    _console.print()

    cases = [(ds, k, n) for ds in datasets for k in key_ranges for n in sizes]
    per_algo_skip: Dict[Tuple[str, str], bool] = {}
    verification_failures = 0

    for (label, ds), k_opt, n in tqdm(cases, desc="Cases", unit="case"):
        k = n if k_opt is None else k_opt
        dataset_spec = _with_k(ds, k)
        base = make_dataset(n, dataset_spec, rng)
        where = f"{label} n={n} k={k}"

        for a_spec in algos:
            skip_key = (label, a_spec.name)
            if per_algo_skip.get(skip_key):
                continue

            res = time_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.algorithm.sort,
                a=base,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                mutation=a_spec.algorithm.mutation,
            )

            row = {
                "algo": a_spec.name,
                "dataset": label,
                "dist": dataset_spec["dist"],
                "params": dataset_spec["params"],
                "n": int(n),
                "k": int(k),
                "config": a_spec.config,
            }

            checks: Dict[str, Any] = {}
            if res["status"] != "error" and res["samples_ns"]:
                checks = _check_output(a_spec, base)
                if not checks["sorted_ok"] or (a_spec.algorithm.stable and not checks["stable_ok"]):
                    verification_failures += 1
                    log.error("%s produced an invalid result on %s: %s", a_spec.name, where, checks)
                if measure_memory:
                    checks["peak_bytes"] = peak_alloc_bytes(a_spec.algorithm.sort, base, a_spec.config)

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl({**row, "trial": int(trial_idx), "time_ns": int(t_ns), **checks}, results_path)

            status = res.get("status", "ok")
            if status == "timeout":
                per_algo_skip[skip_key] = True
                log.warning("%s timed out on %s; skipping the rest of this dataset", a_spec.name, where)
                _append_jsonl(
                    {**row, "status": "timeout", "timed_out_on_repeat": res.get("timed_out_on_repeat")},
                    results_path,
                )
            elif status == "error":
                per_algo_skip[skip_key] = True
                log.warning("%s failed on %s: %s", a_spec.name, where, res.get("error"))
                _append_jsonl({**row, "status": "error", "error": res.get("error")}, results_path)

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    # Columns follow whichever axis the config actually sweeps.
    if len(sizes) == 1 and key_ranges != [None]:
        _print_rich_summary(summary_df, "k", [int(k) for k in key_ranges])
    else:
        _print_rich_summary(summary_df, "n", sizes)

    if verification_failures:
        _console.print(f"[bold red]{verification_failures} verification failure(s); see log above.[/bold red]")

    _console.print("[bold green]Done.[/bold green] Wrote:")
    _console.print(f" - {results_path}")
    _console.print(f" - {summary_path}")
    _console.print(f" - {meta_path}")
    _console.print(f" - {cfg_resolved_path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
