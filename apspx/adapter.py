"""Adapters exposing vertex indices and weighted edges to the solver.

The solver only needs three things from a graph: how many vertices it has, a
stable zero-based index for each vertex, and the directed edges as
``(u_index, v_index, weight)`` triples. :class:`GraphAdapter` provides exactly
that for :class:`~apspx.graph.Graph`, networkx graphs and labelled edge lists.
"""

from __future__ import annotations

import math
import numbers
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .exceptions import GraphFormatError, InputError, InvalidGraphError
from .graph import Graph

IndexedEdge = Tuple[int, int, float]


def _check_weight(w: object, u: Hashable, v: Hashable) -> float:
    if isinstance(w, (bool, str, bytes)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u!r}, {v!r})")
    try:
        wf = float(w)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u!r}, {v!r})") from exc
    if not math.isfinite(wf):
        raise GraphFormatError(f"non-finite weight {w!r} on edge ({u!r}, {v!r})")
    return int(w) if isinstance(w, numbers.Integral) else wf  # type: ignore[call-overload]


class GraphAdapter:
    """Read-only view of a graph in terms of dense vertex indices.

    Args:
        vertices: Vertex identities; position in the sequence is the index.
        edge_source: Zero-argument callable returning a fresh iterator of
            ``(u_index, v_index, weight)`` triples.

    Raises:
        InvalidGraphError: If ``vertices`` is empty.
        InputError: If a vertex identity occurs twice.
    """

    def __init__(
        self,
        vertices: Sequence[Hashable],
        edge_source: Callable[[], Iterator[IndexedEdge]],
    ) -> None:
        if len(vertices) == 0:
            raise InvalidGraphError("graph has no vertices")
        self._vertices: List[Hashable] = list(vertices)
        self._index: Dict[Hashable, int] = {}
        for i, v in enumerate(self._vertices):
            if v in self._index:
                raise InputError(f"duplicate vertex {v!r}")
            self._index[v] = i
        self._edge_source = edge_source

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def vertices(self) -> List[Hashable]:
        return list(self._vertices)

    def index_of(self, vertex: Hashable) -> int:
        """Return the dense index of ``vertex``.

        Raises:
            InputError: If ``vertex`` is not part of the graph.
        """
        try:
            return self._index[vertex]
        except (KeyError, TypeError):
            raise InputError(f"unknown vertex {vertex!r}") from None

    def vertex_at(self, index: int) -> Hashable:
        return self._vertices[index]

    def edges(self) -> Iterator[IndexedEdge]:
        """Lazily yield every directed edge as index triples."""
        return self._edge_source()

    # ---------- constructors ----------------------------------------------

    @classmethod
    def from_graph(cls, G: Graph) -> "GraphAdapter":
        """Wrap a :class:`~apspx.graph.Graph`; vertex ``i`` has index ``i``."""
        return cls(range(G.n), G.edges)

    @classmethod
    def from_networkx(
        cls,
        G: "nx.Graph",
        weight: str = "weight",
        default_weight: float = 1.0,
    ) -> "GraphAdapter":
        """Wrap a networkx graph.

        Undirected graphs contribute every edge in both directions. Edges
        missing the ``weight`` attribute use ``default_weight``.
        """
        nodes = list(G.nodes())
        index = {v: i for i, v in enumerate(nodes)}
        directed = G.is_directed()

        def _edges() -> Iterator[IndexedEdge]:
            for u, v, data in G.edges(data=True):
                w = _check_weight(data.get(weight, default_weight), u, v)
                yield index[u], index[v], w
                if not directed and u != v:
                    yield index[v], index[u], w

        return cls(nodes, _edges)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Hashable, Hashable, float]],
        vertices: Optional[Iterable[Hashable]] = None,
    ) -> "GraphAdapter":
        """Build an adapter from labelled ``(u, v, w)`` edges.

        Args:
            edges: Labelled edges.
            vertices: Optional vertex order. Isolated vertices must be listed
                here; endpoints not listed are appended in first-seen order.
        """
        order: List[Hashable] = list(vertices) if vertices is not None else []
        index: Dict[Hashable, int] = {}
        for v in order:
            index.setdefault(v, len(index))
        triples: List[IndexedEdge] = []
        for u, v, w in edges:
            for x in (u, v):
                if x not in index:
                    index[x] = len(index)
                    order.append(x)
            triples.append((index[u], index[v], _check_weight(w, u, v)))
        return cls(order, lambda: iter(triples))


def as_adapter(graph: object) -> GraphAdapter:
    """Return a :class:`GraphAdapter` for any supported graph value.

    Raises:
        InvalidGraphError: If the graph has no vertices.
        InputError: If the value is not a supported graph type.
    """
    if isinstance(graph, GraphAdapter):
        return graph
    if isinstance(graph, Graph):
        return GraphAdapter.from_graph(graph)
    if isinstance(graph, nx.Graph):
        return GraphAdapter.from_networkx(graph)
    raise InputError(f"unsupported graph type {type(graph).__name__}")


__all__ = ["GraphAdapter", "as_adapter"]
