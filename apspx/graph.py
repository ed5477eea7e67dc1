"""Simple directed graph representation consumed by the solver."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .exceptions import GraphFormatError, InputError

Vertex = int
Float = float
Edge = Tuple[Vertex, Vertex, Float]


@dataclass
class Graph:
    """Directed graph with real-valued edge weights.

    Negative weights are allowed; the solver reports negative cycles after
    the fact. Parallel edges and self-loops are stored as given.

    Attributes:
        n: Number of vertices in the range ``0`` .. ``n-1``. ``0`` is accepted
            here so an empty graph can be built; solving it raises
            :class:`~apspx.exceptions.InvalidGraphError`.
        adj: Outgoing adjacency lists.
    """

    n: int

    def __post_init__(self) -> None:
        """Validate vertex count and initialize adjacency lists."""
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 0:
            raise InputError("Graph.n must be a non-negative integer.")
        self.adj: List[List[Tuple[Vertex, Float]]] = [[] for _ in range(self.n)]

    def add_edge(self, u: Vertex, v: Vertex, w: Float) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Edge weight, possibly negative.

        Raises:
            InputError: If ``u`` or ``v`` are out of range.
            GraphFormatError: If ``w`` is not a finite number.

        Examples:
            ```python
            >>> g = Graph(2)
            >>> g.add_edge(0, 1, -1.5)
            >>> g.adj
            [[(1, -1.5)], []]
            ```
        """
        if not (0 <= u < self.n and 0 <= v < self.n):
            raise InputError(f"edge ({u}, {v}): vertex ids must be in [0, {self.n}).")
        if isinstance(w, bool) or not isinstance(w, numbers.Real):
            raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
        # numpy scalars become plain ints and floats
        w = int(w) if isinstance(w, numbers.Integral) else float(w)
        if not math.isfinite(w):
            raise GraphFormatError(f"non-finite weight {w} on edge ({u}, {v})")
        self.adj[u].append((int(v), w))

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph from an iterable of edges.

        Args:
            n: Number of vertices.
            edges: Iterable of ``(u, v, w)`` tuples.

        Returns:
            A graph populated with the provided edges.
        """
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), w)
        return g

    def edges(self) -> Iterator[Edge]:
        """Yield every edge as ``(u, v, w)`` in adjacency order."""
        for u in range(self.n):
            for v, w in self.adj[u]:
                yield u, v, w

    def edge_count(self) -> int:
        """Return the number of stored edges, parallel edges included."""
        return sum(len(lst) for lst in self.adj)

    def out_degree(self, u: Vertex) -> int:
        """Return the out-degree of vertex ``u``."""
        return len(self.adj[u])

    def mirrored(self) -> "Graph":
        """Return a copy where every edge ``(u, v, w)`` also appears as ``(v, u, w)``."""
        g = Graph(self.n)
        for u, v, w in self.edges():
            g.add_edge(u, v, w)
            if u != v:
                g.add_edge(v, u, w)
        return g
