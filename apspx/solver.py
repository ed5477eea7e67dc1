"""All-pairs shortest paths with the Floyd-Warshall algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from .adapter import GraphAdapter, as_adapter
from .exceptions import ConfigError, NegativeCycleError
from .logger import Logger, NoopLogger
from .matrix import INF, DistanceMatrix, PredecessorMatrix, build
from .path import UNREACHABLE, Unreachable, path_weight, reconstruct_path
from .relax import RelaxStats, relax, relax_numpy

Distance = Union[float, Unreachable]

_BACKENDS = {"python": relax, "numpy": relax_numpy}


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        backend: ``"python"`` runs the plain triple loop, ``"numpy"`` the
            vectorised rounds.
        detect_negative_cycles: Raise
            :class:`~apspx.exceptions.NegativeCycleError` when a negative
            cycle is found. If ``False`` the result is returned and lists the
            affected vertices in ``negative_cycle_vertices``.
    """

    backend: str = "python"
    detect_negative_cycles: bool = True


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    backend: str
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True)
class APSPResult:
    """Relaxed distance and predecessor matrices with vertex-level queries.

    Queries take vertex identities as understood by the input graph (plain
    ints for :class:`~apspx.graph.Graph`, node labels for networkx graphs).
    """

    adapter: GraphAdapter = field(repr=False)
    distances: DistanceMatrix
    predecessors: PredecessorMatrix
    edge_weights: DistanceMatrix = field(repr=False)
    negative_cycle_vertices: Tuple[Hashable, ...] = ()

    @property
    def vertices(self) -> List[Hashable]:
        return self.adapter.vertices

    @property
    def n(self) -> int:
        return self.distances.n

    def distance(self, source: Hashable, target: Hashable) -> Distance:
        """Return the shortest distance, or :data:`~apspx.path.UNREACHABLE`."""
        d = self.distances.get(self.adapter.index_of(source), self.adapter.index_of(target))
        return UNREACHABLE if d == INF else d

    def is_reachable(self, source: Hashable, target: Hashable) -> bool:
        return self.distance(source, target) is not UNREACHABLE

    def path(self, source: Hashable, target: Hashable) -> Union[List[Hashable], Unreachable]:
        """Return one shortest path as a list of vertices, source and target included.

        Raises:
            ReconstructionError: If the predecessor chain is inconsistent.
        """
        chain = reconstruct_path(
            self.distances,
            self.predecessors,
            self.adapter.index_of(source),
            self.adapter.index_of(target),
        )
        if chain is UNREACHABLE:
            return UNREACHABLE
        return [self.adapter.vertex_at(i) for i in chain]

    def path_weight(self, path: Sequence[Hashable]) -> float:
        """Return the total weight of ``path`` using the lightest edge per hop."""
        return path_weight(self.edge_weights, [self.adapter.index_of(v) for v in path])

    def distance_matrix(self) -> npt.NDArray[np.float64]:
        """Return the distances as a float array with ``inf`` for unreachable pairs."""
        return self.distances.to_numpy(np.float64)

    def eccentricity(self, vertex: Hashable) -> Distance:
        """Largest distance from ``vertex`` to any vertex, ``UNREACHABLE`` if one is unreachable."""
        row = self.distances.row(self.adapter.index_of(vertex))
        worst = max(row)
        return UNREACHABLE if worst == INF else worst

    def diameter(self) -> Distance:
        """Largest finite distance between two distinct vertices."""
        n = self.n
        best: Optional[float] = None
        d = self.distances.data
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                x = d[i * n + j]
                if x != INF and (best is None or x > best):
                    best = x
        return UNREACHABLE if best is None else best


class FloydWarshallSolver:
    """All-pairs shortest paths (directed, real weights) via Floyd-Warshall."""

    def __init__(
        self,
        graph: object,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        """Initialize the solver.

        Args:
            graph: A :class:`~apspx.graph.Graph`, a networkx graph or a
                :class:`~apspx.adapter.GraphAdapter`.
            config: Optional solver configuration.
            logger: Optional structured logger.

        Raises:
            InvalidGraphError: If the graph has no vertices.
            ConfigError: If the configuration names an unknown backend.
        """
        self.cfg = config or SolverConfig()
        if self.cfg.backend not in _BACKENDS:
            raise ConfigError(f"unknown backend '{self.cfg.backend}'")
        self.adapter = as_adapter(graph)
        self.logger = logger or NoopLogger()
        self.counters: Dict[str, int] = {
            "edges": 0,
            "relaxation_checks": 0,
            "relaxation_updates": 0,
        }

    def solve(self) -> APSPResult:
        """Build the matrices, relax them and check the diagonal.

        Raises:
            NegativeCycleError: If a negative cycle exists and detection is on.
        """
        adapter = self.adapter
        n = adapter.vertex_count
        self.logger.info("solve.start", n=n, backend=self.cfg.backend)

        edges_seen = 0

        def _counted():
            nonlocal edges_seen
            for e in adapter.edges():
                edges_seen += 1
                yield e

        dist, pred = build(n, _counted())
        seed = dist.copy()
        stats: RelaxStats = _BACKENDS[self.cfg.backend](dist, pred, logger=self.logger)

        self.counters["edges"] = edges_seen
        self.counters["relaxation_checks"] = stats.checks
        self.counters["relaxation_updates"] = stats.updates

        negative = [adapter.vertex_at(i) for i in range(n) if dist.get(i, i) < 0]
        if negative:
            self.logger.warning("negative_cycle", vertices=len(negative))
            if self.cfg.detect_negative_cycles:
                raise NegativeCycleError(negative)

        self.logger.info(
            "solve.done",
            n=n,
            m=edges_seen,
            updates=stats.updates,
            negative_cycle=bool(negative),
        )
        return APSPResult(
            adapter=adapter,
            distances=dist,
            predecessors=pred,
            edge_weights=seed,
            negative_cycle_vertices=tuple(negative),
        )

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the most recent run.

        Args:
            wall_ms: Wall-clock time spent in :meth:`solve` in milliseconds.
            peak_mib: Optional peak memory usage in MiB.
        """
        return SolverMetrics(
            n=self.adapter.vertex_count,
            m=self.counters["edges"],
            backend=self.cfg.backend,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def solve(
    graph: object,
    config: Optional[SolverConfig] = None,
    logger: Logger | None = None,
) -> APSPResult:
    """Solve APSP for ``graph`` in one call.

    Examples:
        ```python
        >>> from apspx import Graph, solve
        >>> g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (0, 2, 5)])
        >>> res = solve(g)
        >>> res.distance(0, 2), res.path(0, 2)
        (2, [0, 1, 2])
        ```
    """
    return FloydWarshallSolver(graph, config=config, logger=logger).solve()


__all__ = ["APSPResult", "FloydWarshallSolver", "SolverConfig", "SolverMetrics", "solve"]
