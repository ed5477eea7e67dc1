"""Command-line interface for running the solver."""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import (
    APSPXError,
    ConfigError,
    InputError,
    NegativeCycleError,
)
from .export import distance_rows, export_distances_csv, export_distances_json
from .generator import generate_graph
from .graph import Graph
from .io import read_graph
from .logger import StdLogger
from .path import UNREACHABLE
from .profiling import ProfileSession
from .solver import FloydWarshallSolver, SolverConfig

EXAMPLE_CSV = """# u,v,w
0,1,1
1,2,1
0,2,5
2,3,-1
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_NEGATIVE_CYCLE = 65
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str]) -> Graph:
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, fmt)


def _build_random_graph(n: int, m: int, seed: int, negative: bool) -> Graph:
    if negative:
        gen = generate_graph(n=n, m=m, graph_type="dag", w_min=-10, w_max=10, seed=seed)
    else:
        gen = generate_graph(n=n, m=m, w_min=0, w_max=10, seed=seed)
    return gen.to_graph()


def _write(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``apspx`` command-line tool."""
    examples = (
        "Examples:\n"
        "  apspx --edges graph.csv\n"
        "  apspx --edges graph.csv --source 0 --target 3\n"
        "  apspx --random --n 50 --m 200 --backend numpy\n"
        "  apspx --edges graph.csv --export-csv distances.csv\n"
    )
    p = argparse.ArgumentParser(
        prog="apspx",
        description="All-pairs shortest paths (Floyd-Warshall) runner",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )

    p.add_argument(
        "--format",
        choices=["csv", "jsonl", "mtx", "graphml"],
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument(
        "--negative",
        action="store_true",
        help="Random mode: acyclic graph with weights in [-10, 10]",
    )

    p.add_argument("--source", type=int, default=None, help="Source vertex id")
    p.add_argument("--target", type=int, default=None, help="Target vertex id")

    p.add_argument("--backend", choices=["python", "numpy"], default="python")
    p.add_argument(
        "--allow-negative-cycles",
        action="store_true",
        help="Report negative cycles instead of failing",
    )

    p.add_argument("--profile", action="store_true", help="Enable cProfile")
    p.add_argument("--profile-out", type=str, default=None, help="Dump .prof file to this path")
    p.add_argument("--export-json", type=str, default=None, help="Write distances as JSON")
    p.add_argument("--export-csv", type=str, default=None, help="Write reachable pairs as CSV")
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")
    p.add_argument("--plot", type=str, default=None, help="Draw the graph (and path) to this image")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        if (args.source is None) != (args.target is None):
            raise InputError("--source and --target must be given together")

        if args.random:
            G = _build_random_graph(args.n, args.m, args.seed, args.negative)
        else:
            G = _build_graph_from_file(args.edges, args.format)

        cfg = SolverConfig(
            backend=args.backend,
            detect_negative_cycles=not args.allow_negative_cycles,
        )
        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.n} m={G.edge_count()} backend={args.backend} "
                f"seed={args.seed}\n"
            )

        solver = FloydWarshallSolver(G, config=cfg, logger=logger)
        with ProfileSession(
            profile=args.profile,
            track_memory=bool(args.metrics_out),
            dump_path=args.profile_out,
        ) as session:
            res = solver.solve()
        if args.profile:
            sys.stderr.write(session.report().to_text(lines=40))

        out: Dict[str, Any] = {"n": G.n, "backend": args.backend}
        path = None
        if args.source is not None:
            d = res.distance(args.source, args.target)
            path = res.path(args.source, args.target)
            out["source"] = args.source
            out["target"] = args.target
            out["distance"] = None if d is UNREACHABLE else d
            out["path"] = None if path is UNREACHABLE else path
        else:
            out["distances"] = distance_rows(res)
        if res.negative_cycle_vertices:
            out["negative_cycle_vertices"] = list(res.negative_cycle_vertices)

        if args.export_json:
            _write(args.export_json, export_distances_json(res))
        if args.export_csv:
            _write(args.export_csv, export_distances_csv(res))
        if args.metrics_out:
            metrics = solver.metrics(wall_ms=session.wall_ms, peak_mib=session.peak_mib)
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(metrics), fh)
        if args.plot:
            from .visualize import plot_path

            plot_path(G, path if path else None, args.plot)

        logger.info("run", n=G.n, m=G.edge_count(), backend=args.backend, **solver.summary())
        if not args.log_json:
            print(json.dumps(out))
        return EXIT_OK

    except NegativeCycleError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_NEGATIVE_CYCLE
    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except APSPXError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
