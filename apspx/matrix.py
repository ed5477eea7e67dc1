"""Distance and predecessor matrices and their initialisation from edges."""

from __future__ import annotations

import math
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

import numpy as np
import numpy.typing as npt

from .exceptions import InputError, InvalidGraphError

T = TypeVar("T")

INF = math.inf


class SquareMatrix(Generic[T]):
    """``n`` x ``n`` matrix stored as a flat row-major list.

    Entry ``(i, j)`` lives at ``data[i * n + j]``. The relaxation engine works
    on :attr:`data` directly; everything else goes through :meth:`get`.
    """

    __slots__ = ("n", "data")

    def __init__(self, n: int, fill: T) -> None:
        self.n = n
        self.data: List[T] = [fill] * (n * n)

    def get(self, i: int, j: int) -> T:
        return self.data[i * self.n + j]

    def set(self, i: int, j: int, value: T) -> None:
        self.data[i * self.n + j] = value

    def row(self, i: int) -> List[T]:
        start = i * self.n
        return self.data[start : start + self.n]

    def to_rows(self) -> List[List[T]]:
        return [self.row(i) for i in range(self.n)]

    def copy(self) -> "SquareMatrix[T]":
        m: SquareMatrix[T] = SquareMatrix.__new__(SquareMatrix)
        m.n = self.n
        m.data = list(self.data)
        return m

    def to_numpy(self, dtype: npt.DTypeLike = np.float64) -> npt.NDArray:
        """Return the matrix as an ``(n, n)`` array.

        ``None`` entries (as found in predecessor matrices) become ``-1``
        when converting to an integer dtype.
        """
        if np.issubdtype(np.dtype(dtype), np.integer):
            flat = [-1 if x is None else x for x in self.data]
        else:
            flat = list(self.data)
        return np.asarray(flat, dtype=dtype).reshape(self.n, self.n)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.n == other.n and self.data == other.data

    def __repr__(self) -> str:
        rows = "\n".join(f"  {self.row(i)!r}" for i in range(self.n))
        return f"SquareMatrix(n={self.n},\n{rows}\n)"


DistanceMatrix = SquareMatrix[float]
PredecessorMatrix = SquareMatrix[Optional[int]]


def build(
    n: int, edges: Iterable[Tuple[int, int, float]]
) -> Tuple[DistanceMatrix, PredecessorMatrix]:
    """Allocate and seed the distance and predecessor matrices.

    ``D[i][i]`` starts at ``0`` and every other entry at ``inf``. Each edge
    ``(u, v, w)`` with ``w < D[u][v]`` lowers the entry and records ``u`` as
    the predecessor, so parallel edges collapse to the lightest one (the
    first of equally light edges wins) and non-negative self-loops vanish.

    Args:
        n: Vertex count.
        edges: Directed edges as index triples.

    Returns:
        The pair ``(D, P)``.

    Raises:
        InvalidGraphError: If ``n < 1``.
        InputError: If an edge endpoint is outside ``[0, n)``.
    """
    if n < 1:
        raise InvalidGraphError("graph has no vertices")
    dist: DistanceMatrix = SquareMatrix(n, INF)
    pred: PredecessorMatrix = SquareMatrix(n, None)
    d = dist.data
    p = pred.data
    for i in range(n):
        d[i * n + i] = 0
    for u, v, w in edges:
        if not (0 <= u < n and 0 <= v < n):
            raise InputError(f"edge ({u}, {v}) out of range for {n} vertices")
        idx = u * n + v
        if w < d[idx]:
            d[idx] = w
            p[idx] = u
    return dist, pred


__all__ = ["INF", "SquareMatrix", "DistanceMatrix", "PredecessorMatrix", "build"]
