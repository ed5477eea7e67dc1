"""Micro-benchmark utilities for the solver.

Run this module as a script to time both relaxation backends against
repeated Bellman-Ford across random graphs.

Example:
```bash
python -m apspx.bench --trials 5 --sizes 50,200 100,400 --out-csv out.csv
```

Use ``--mem`` to record peak memory usage during solver runs.
"""

from __future__ import annotations

import argparse
import csv
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .generator import generate_graph
from .profiling import ProfileSession
from .reference import all_pairs_bellman_ford
from .solver import FloydWarshallSolver, SolverConfig, SolverMetrics


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: SolverMetrics
    reference_ms: float
    max_abs_err: float


def run_once(
    n: int,
    m: int,
    backend: str,
    seed: int = 0,
    track_mem: bool = False,
) -> BenchResult:
    """Solve one random graph and compare against Bellman-Ford from every source.

    Args:
        n: Number of vertices.
        m: Number of edges.
        backend: ``"python"`` or ``"numpy"``.
        seed: Seed for the random graph generator.
        track_mem: Record peak memory of the solve.

    Returns:
        Timing information and maximum absolute distance error.
    """
    G = generate_graph(n=n, m=m, seed=seed, w_min=0, w_max=100).to_graph()

    solver = FloydWarshallSolver(G, SolverConfig(backend=backend))
    with ProfileSession(profile=False, track_memory=track_mem) as session:
        res = solver.solve()

    t0 = time.perf_counter()
    ref = all_pairs_bellman_ford(G)
    reference_ms = (time.perf_counter() - t0) * 1000.0

    # unreachable pairs must agree exactly, reachable ones up to float noise
    max_err = 0.0
    for i in range(n):
        for j, b in enumerate(ref[i]):
            a = res.distances.get(i, j)
            if (a == float("inf")) != (b == float("inf")):
                max_err = float("inf")
            elif a != float("inf"):
                max_err = max(max_err, abs(a - b))

    return BenchResult(
        metrics=solver.metrics(wall_ms=session.wall_ms, peak_mib=session.peak_mib),
        reference_ms=reference_ms,
        max_abs_err=max_err,
    )


def _p95(values: List[float]) -> float:
    if len(values) == 1:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def main(argv: List[str] | None = None) -> None:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 100,400). Defaults to a small demo.",
    )
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    parser.add_argument("--mem", action="store_true", help="Profile peak memory usage (MiB)")
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for size in args.sizes:
        try:
            n_str, m_str = size.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size '{size}'")

    rows: List[List[object]] = []
    aggregates: Dict[Tuple[int, int, str], Dict[str, List[float]]] = {}

    for n, m in sizes:
        for backend in ("python", "numpy"):
            agg: Dict[str, List[float]] = {"solve": [], "ref": [], "mem": [], "err": []}
            for trial in range(args.trials):
                res = run_once(n, m, backend, seed=args.seed_base + trial, track_mem=args.mem)
                mtx = res.metrics
                row: List[object] = [
                    mtx.n,
                    mtx.m,
                    backend,
                    trial,
                    f"{mtx.wall_ms:.6f}",
                    f"{res.reference_ms:.6f}",
                    mtx.counters["relaxation_updates"],
                    res.max_abs_err,
                ]
                if args.mem:
                    row.append(f"{(mtx.peak_mib or 0.0):.6f}")
                    agg["mem"].append(mtx.peak_mib or 0.0)
                rows.append(row)
                agg["solve"].append(mtx.wall_ms)
                agg["ref"].append(res.reference_ms)
                agg["err"].append(res.max_abs_err)
            aggregates[(n, m, backend)] = agg

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            header = ["n", "m", "backend", "trial", "apspx_ms", "bellman_ford_ms", "updates", "max_abs_err"]
            if args.mem:
                header.append("peak_mib")
            writer.writerow(header)
            writer.writerows(rows)

    header_line = (
        f"{'n':>6} {'m':>7} {'backend':>7}"
        f" {'fw_med':>10} {'fw_p95':>10} {'bf_med':>10} {'bf_p95':>10} {'max_err':>9}"
    )
    if args.mem:
        header_line += f" {'mem_med':>8}"
    print(header_line)
    for (n, m, backend), agg in aggregates.items():
        line = (
            f"{n:6d} {m:7d} {backend:>7}"
            f" {statistics.median(agg['solve']):10.2f} {_p95(agg['solve']):10.2f}"
            f" {statistics.median(agg['ref']):10.2f} {_p95(agg['ref']):10.2f}"
            f" {max(agg['err']):9.2g}"
        )
        if args.mem:
            line += f" {statistics.median(agg['mem']):8.2f}"
        print(line)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
