"""Reconstruct shortest paths from a Floyd-Warshall predecessor matrix."""

from __future__ import annotations

from typing import List, Sequence, Union

from .exceptions import InputError, ReconstructionError
from .matrix import INF, DistanceMatrix, PredecessorMatrix


class Unreachable:
    """Marker returned instead of a distance or path when none exists.

    There is a single instance, :data:`UNREACHABLE`. It is falsy and compares
    equal only to itself.
    """

    _instance: "Unreachable | None" = None

    def __new__(cls) -> "Unreachable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNREACHABLE"

    def __reduce__(self) -> str:
        return "UNREACHABLE"


UNREACHABLE = Unreachable()


def reconstruct_path(
    dist: DistanceMatrix,
    pred: PredecessorMatrix,
    source: int,
    target: int,
) -> Union[List[int], Unreachable]:
    """Return the vertex indices of a shortest path from ``source`` to ``target``.

    Args:
        dist: Relaxed distance matrix.
        pred: Relaxed predecessor matrix.
        source: Source index.
        target: Target index.

    Returns:
        Indices from source to target (inclusive), or :data:`UNREACHABLE`.

    Raises:
        InputError: If an index is out of range.
        ReconstructionError: If the predecessor chain breaks off or does not
            reach ``source`` within ``n`` steps (a negative cycle that was
            not reported, or a corrupted matrix).
    """
    n = dist.n
    if not (0 <= source < n and 0 <= target < n):
        raise InputError("source/target out of range.")
    if dist.get(source, target) == INF:
        return UNREACHABLE

    row = pred.data[source * n : (source + 1) * n]
    chain: List[int] = [target]
    cur = target
    steps = 0
    while cur != source:
        if steps >= n:
            raise ReconstructionError(
                f"predecessor chain from {source} to {target} exceeds {n} steps"
            )
        prev = row[cur]
        if prev is None:
            raise ReconstructionError(f"predecessor chain from {source} to {target} is broken at {cur}")
        cur = prev
        chain.append(cur)
        steps += 1
    chain.reverse()
    return chain


def path_weight(edges: DistanceMatrix, path: Sequence[int]) -> float:
    """Return the total weight of ``path``.

    Args:
        edges: The seeded matrix from :func:`~apspx.matrix.build`, which holds
            the lightest direct edge for every pair.
        path: Vertex indices.
    """
    total: float = 0
    for a, b in zip(path, path[1:]):
        total += edges.get(a, b)
    return total


__all__ = ["UNREACHABLE", "Unreachable", "reconstruct_path", "path_weight"]
