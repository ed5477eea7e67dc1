"""Directed weighted graph generator for tests and benchmarks.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Random directed graphs with uniformly sampled edges.
2. dag
   Directed acyclic graphs (edges only from lower- to higher-index vertices).
   The only family that accepts negative weights, since it has no cycles.
3. grid
   2D grid graphs with edges between neighbouring vertices in both directions.
   Many equal-length shortest paths.

WEIGHT DISTRIBUTIONS
--------------------
- uniform: evenly distributed integer weights in ``[w_min, w_max]``
- small_int: many equal or similar weights (lots of ties)
- exp: many small weights, occasional larger ones
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Set, Tuple

from .exceptions import InputError
from .graph import Graph

EdgeList = List[Tuple[int, int, int]]

WeightDist = Literal["uniform", "small_int", "exp"]
GraphType = Literal["erdos_renyi", "dag", "grid"]


@dataclass(frozen=True)
class GeneratedGraph:
    n: int
    edges: EdgeList
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def m(self) -> int:
        return len(self.edges)

    def to_graph(self) -> Graph:
        return Graph.from_edges(self.n, self.edges)


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)

    if dist == "small_int":
        hi = min(w_max, w_min + 10)
        return rng.randint(w_min, hi)

    if dist == "exp":
        if w_max == w_min:
            return w_min
        lam = 1.0 / max(1.0, (w_max - w_min) / 4.0)
        return int(w_min + min(w_max - w_min, round(rng.expovariate(lam))))

    raise InputError(f"unknown weight distribution: {dist}")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    graph_type: GraphType = "erdos_renyi",
    weight_dist: WeightDist = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: Optional[int] = 0,
    allow_self_loops: bool = False,
    ensure_weakly_connected: bool = False,
) -> GeneratedGraph:
    """Generate a directed weighted graph.

    Notes:
    - ``m`` defaults to ``4 * n`` capped by the number of possible edges. For
      grids it is the total after the neighbour edges, which are always added.
    - ``ensure_weakly_connected`` adds a backbone chain ``i -> i+1`` first.
    - Duplicate ``(u, v)`` pairs are never generated.

    Raises:
        InputError: On a bad size, an unknown family, ``w_max < w_min``, or
            negative weights for a family that can contain cycles.
    """
    if n <= 0:
        raise InputError("n must be > 0.")
    if w_max < w_min:
        raise InputError("w_max must be >= w_min.")
    if w_min < 0 and graph_type != "dag":
        raise InputError("negative weights are only generated for dag graphs.")
    if m is not None and m < 0:
        raise InputError("m must be >= 0.")

    rng = random.Random(seed)
    max_edges = n * n if allow_self_loops else n * (n - 1)
    if graph_type == "dag":
        max_edges = n * (n - 1) // 2
    target_m = min(m if m is not None else 4 * n, max_edges)

    seen: Set[Tuple[int, int]] = set()
    edges: EdgeList = []

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        if (u, v) in seen:
            return
        seen.add((u, v))
        edges.append((u, v, _sample_weight(rng, weight_dist, w_min, w_max)))

    if ensure_weakly_connected and graph_type != "grid":
        for i in range(n - 1):
            add_edge(i, i + 1)

    if graph_type == "erdos_renyi":
        while len(edges) < target_m:
            add_edge(rng.randrange(n), rng.randrange(n))

    elif graph_type == "dag":
        while len(edges) < target_m:
            u = rng.randrange(n)
            v = rng.randrange(n)
            if u == v:
                continue
            add_edge(min(u, v), max(u, v))

    elif graph_type == "grid":
        cols = max(1, math.isqrt(n))
        for u in range(n):
            r, c = divmod(u, cols)
            right = u + 1
            down = (r + 1) * cols + c
            if c + 1 < cols and right < n:
                add_edge(u, right)
                add_edge(right, u)
            if down < n:
                add_edge(u, down)
                add_edge(down, u)
        if m is not None:
            while len(edges) < target_m:
                add_edge(rng.randrange(n), rng.randrange(n))

    else:
        raise InputError(f"unknown graph_type: {graph_type}")

    return GeneratedGraph(
        n=n,
        edges=edges,
        metadata={
            "graph_type": graph_type,
            "weight_dist": weight_dist,
            "w_min": w_min,
            "w_max": w_max,
            "seed": seed,
            "allow_self_loops": allow_self_loops,
            "ensure_weakly_connected": ensure_weakly_connected,
        },
    )


__all__ = ["GeneratedGraph", "generate_graph"]
