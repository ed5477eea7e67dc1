"""Export utilities for solved distance matrices."""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, List, Optional

from .matrix import INF
from .solver import APSPResult


def _json_vertex(v: Any) -> Any:
    return v if isinstance(v, (int, float, str)) or v is None else str(v)


def distance_rows(result: APSPResult) -> List[List[Optional[float]]]:
    """Return the distance matrix as nested lists with ``None`` for unreachable pairs."""
    return [[None if x == INF else x for x in row] for row in result.distances.to_rows()]


def export_distances_json(result: APSPResult) -> str:
    """Return a JSON document with vertices, distances and predecessors.

    Distances use ``null`` for unreachable pairs; predecessors are vertex
    indices into ``vertices`` or ``null``.
    """
    data: Dict[str, Any] = {
        "vertices": [_json_vertex(v) for v in result.vertices],
        "distances": distance_rows(result),
        "predecessors": result.predecessors.to_rows(),
    }
    if result.negative_cycle_vertices:
        data["negative_cycle_vertices"] = [_json_vertex(v) for v in result.negative_cycle_vertices]
    return json.dumps(data)


def export_distances_csv(result: APSPResult) -> str:
    """Return ``source,target,distance`` rows for every reachable ordered pair."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["source", "target", "distance"])
    vertices = result.vertices
    for i, row in enumerate(result.distances.to_rows()):
        for j, x in enumerate(row):
            if x != INF:
                writer.writerow([vertices[i], vertices[j], x])
    return buf.getvalue()


__all__ = ["distance_rows", "export_distances_json", "export_distances_csv"]
