"""Reference single-source Bellman-Ford used to cross-check the solver."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .exceptions import InputError
from .graph import Float, Graph, Vertex


@dataclass(frozen=True)
class SSSPResult:
    """Distances and predecessors from one source.

    Attributes:
        distances: Shortest distance per vertex, ``inf`` when unreachable.
        predecessors: Predecessor per vertex or ``None``.
        negative_cycle: ``True`` if a negative cycle is reachable from the
            source; the other fields are then not meaningful.
    """

    distances: List[Float]
    predecessors: List[Optional[Vertex]]
    negative_cycle: bool = False


def bellman_ford(G: Graph, source: Vertex) -> SSSPResult:
    """Run Bellman-Ford with early stopping from ``source``.

    Args:
        G: Input graph, negative weights allowed.
        source: Source vertex identifier.

    Returns:
        Distances and predecessors from ``source``.
    """
    if not (0 <= source < G.n):
        raise InputError("source must be a valid vertex id.")
    n = G.n
    edges: List[Tuple[Vertex, Vertex, Float]] = list(G.edges())
    dist: List[Float] = [math.inf] * n
    pred: List[Optional[Vertex]] = [None] * n
    dist[source] = 0

    for _ in range(n - 1):
        changed = False
        for u, v, w in edges:
            du = dist[u]
            if du == math.inf:
                continue
            nd = du + w
            if nd < dist[v]:
                dist[v] = nd
                pred[v] = u
                changed = True
        if not changed:
            break

    negative = any(
        dist[u] != math.inf and dist[u] + w < dist[v] for u, v, w in edges
    )
    return SSSPResult(distances=dist, predecessors=pred, negative_cycle=negative)


def all_pairs_bellman_ford(G: Graph) -> List[List[Float]]:
    """Run :func:`bellman_ford` from every vertex and return the distance rows."""
    return [bellman_ford(G, s).distances for s in range(G.n)]


__all__ = ["SSSPResult", "bellman_ford", "all_pairs_bellman_ford"]
