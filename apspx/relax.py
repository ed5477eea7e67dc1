"""Floyd-Warshall relaxation over seeded distance/predecessor matrices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt

from .exceptions import InputError
from .logger import Logger, NoopLogger
from .matrix import INF, DistanceMatrix, PredecessorMatrix

# float64 holds every integer up to 2**53 exactly
_FLOAT64_EXACT = 2 ** 53


@dataclass
class RelaxStats:
    """Work done by one relaxation run."""

    rounds: int = 0
    checks: int = 0
    updates: int = 0


def _rounds(n: int, limit: Optional[int]) -> int:
    if limit is None:
        return n
    if not (0 <= limit <= n):
        raise InputError(f"limit must be in [0, {n}]")
    return limit


def relax(
    dist: DistanceMatrix,
    pred: PredecessorMatrix,
    *,
    limit: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> RelaxStats:
    """Run the Floyd-Warshall recurrence in place.

    For each intermediate ``k`` (outermost), every pair ``(i, j)`` adopts the
    route through ``k`` when ``D[i][k] + D[k][j] < D[i][j]``, taking
    ``P[k][j]`` as its predecessor. After round ``k`` every ``D[i][j]`` is the
    shortest distance using intermediates from ``{0, ..., k}`` only.

    ``inf`` is absorbing under addition, so an unreachable leg never turns
    into a finite candidate. Rows with ``D[i][k] == inf`` are skipped but still
    counted as checked.

    Row ``k`` is read from a snapshot taken at the start of round ``k``. It
    can only change during that round if ``D[k][k] < 0``, i.e. when a negative
    cycle already makes the distances meaningless.

    Args:
        dist: Distance matrix, modified in place.
        pred: Predecessor matrix, modified in place.
        limit: Only use intermediates ``0 .. limit-1``. ``None`` means all.
        logger: Receives one ``relax.round`` debug event per ``k``.

    Returns:
        Round, check and update counts.
    """
    log = logger or NoopLogger()
    n = dist.n
    d = dist.data
    p = pred.data
    stats = RelaxStats()
    for k in range(_rounds(n, limit)):
        row_k = k * n
        dk = d[row_k : row_k + n]
        pk = p[row_k : row_k + n]
        updates = 0
        for i in range(n):
            row_i = i * n
            dik = d[row_i + k]
            if dik == INF:
                continue
            for j in range(n):
                cand = dik + dk[j]
                if cand < d[row_i + j]:
                    d[row_i + j] = cand
                    p[row_i + j] = pk[j]
                    updates += 1
        stats.rounds += 1
        stats.checks += n * n
        stats.updates += updates
        log.debug("relax.round", k=k, updates=updates)
    return stats


def relax_numpy(
    dist: DistanceMatrix,
    pred: PredecessorMatrix,
    *,
    limit: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> RelaxStats:
    """Vectorised variant of :func:`relax`.

    Each round updates all ``(i, j)`` pairs at once from the matrix as it was
    when the round began; rounds run strictly one after another. On graphs
    without negative cycles the result matches :func:`relax` exactly.

    Distances are held in ``float64`` unless integer weights are large enough
    that sums of them could exceed ``2**53``; then an object array of Python
    numbers is used so integer arithmetic stays exact.
    """
    log = logger or NoopLogger()
    n = dist.n
    D = _distance_array(dist)
    P = pred.to_numpy(np.int64)
    stats = RelaxStats()
    for k in range(_rounds(n, limit)):
        cand = D[:, k : k + 1] + D[k : k + 1, :]
        better = cand < D
        updates = int(np.count_nonzero(better))
        if updates:
            D = np.where(better, cand, D)
            P = np.where(better, np.broadcast_to(P[k : k + 1, :], (n, n)), P)
        stats.rounds += 1
        stats.checks += n * n
        stats.updates += updates
        log.debug("relax.round", k=k, updates=updates)

    if D.dtype == object:
        dist.data = D.ravel().tolist()
    else:
        dist.data = [_as_number(x) for x in D.ravel().tolist()]
    pred.data = [None if x < 0 else x for x in P.ravel().tolist()]
    return stats


def _distance_array(dist: DistanceMatrix) -> npt.NDArray:
    # a candidate sums at most 2n edge weights
    big = max((abs(x) for x in dist.data if isinstance(x, int)), default=0)
    if 2 * dist.n * big > _FLOAT64_EXACT:
        return dist.to_numpy(object)
    return dist.to_numpy(np.float64)


def _as_number(x: float) -> float:
    # keep integral weights integral so both backends compare equal
    return int(x) if x != INF and x.is_integer() else x


__all__ = ["RelaxStats", "relax", "relax_numpy"]
