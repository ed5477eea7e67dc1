"""Graph input/output helpers."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .exceptions import GraphFormatError
from .graph import Graph

EdgeList = List[Tuple[int, int, float]]

_GRAPHML_NS = "{http://graphml.graphdrawing.org/xmlns}"


def _parse_weight(raw: str, where: str) -> float:
    try:
        w = float(raw)
    except ValueError as exc:
        raise GraphFormatError(f"{where}: bad weight {raw!r}") from exc
    return int(w) if w.is_integer() else w


def _read_csv(path: Path) -> Tuple[int, EdgeList]:
    """Read ``u,v,w`` rows (comma or tab separated).

    Blank lines and ``#`` comments are ignored, except a ``# vertices: N``
    comment, which sets the vertex count so trailing isolated vertices
    survive a round trip. Otherwise the count is the largest id plus one.

    Raises:
        GraphFormatError: If a row is malformed or nothing is parsed.
    """
    edges: EdgeList = []
    max_id = -1
    declared: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            if row.startswith("#"):
                key, _, value = row[1:].partition(":")
                if key.strip().lower() == "vertices":
                    try:
                        declared = int(value.strip())
                    except ValueError as exc:
                        raise GraphFormatError(f"line {lineno}: bad vertex count") from exc
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            if len(parts) < 3:
                raise GraphFormatError(f"line {lineno}: expected u,v,w")
            try:
                u = int(parts[0])
                v = int(parts[1])
            except ValueError as exc:
                raise GraphFormatError(f"line {lineno}: bad vertex id") from exc
            edges.append((u, v, _parse_weight(parts[2], f"line {lineno}")))
            max_id = max(max_id, u, v)
    n = max_id + 1 if declared is None else declared
    if n <= 0:
        raise GraphFormatError("no vertices parsed from file")
    return n, edges


def _write_csv(path: Path, G: Graph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"# vertices: {G.n}\n")
        for u, v, w in G.edges():
            fh.write(f"{u},{v},{w}\n")


def _read_jsonl(path: Path) -> Tuple[int, EdgeList]:
    """Read one ``{"u": .., "v": .., "w": ..}`` object per line.

    A line of the form ``{"n": N}`` sets the vertex count.
    """
    edges: EdgeList = []
    max_id = -1
    declared: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                if "n" in obj and "u" not in obj:
                    declared = int(obj["n"])
                    continue
                u = int(obj["u"])
                v = int(obj["v"])
                w = obj["w"]
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"line {lineno}: {exc}") from exc
            edges.append((u, v, _parse_weight(str(w), f"line {lineno}")))
            max_id = max(max_id, u, v)
    n = max_id + 1 if declared is None else declared
    if n <= 0:
        raise GraphFormatError("no vertices parsed from file")
    return n, edges


def _write_jsonl(path: Path, G: Graph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write(json.dumps({"n": G.n}) + "\n")
        for u, v, w in G.edges():
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


def _read_mtx(path: Path) -> Tuple[int, EdgeList]:
    """Read a Matrix Market coordinate file.

    Lines starting with ``%`` are comments. Indices in the file are 1-based
    and converted to 0-based.
    """
    edges: EdgeList = []
    n: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            line = raw.strip()
            if not line or line.startswith("%"):
                continue
            parts = line.split()
            try:
                if n is None:
                    nrows, ncols = int(parts[0]), int(parts[1])
                    n = max(nrows, ncols)
                    continue
                u = int(parts[0]) - 1
                v = int(parts[1]) - 1
            except (ValueError, IndexError) as exc:
                raise GraphFormatError(f"line {lineno}: malformed entry") from exc
            w = _parse_weight(parts[2], f"line {lineno}") if len(parts) > 2 else 1
            edges.append((u, v, w))
    if not n:
        raise GraphFormatError("missing Matrix Market size line")
    return n, edges


def _write_mtx(path: Path, G: Graph) -> None:
    edges = list(G.edges())
    with path.open("w", encoding="utf-8") as fh:
        fh.write("%%MatrixMarket matrix coordinate real general\n")
        fh.write(f"{G.n} {G.n} {len(edges)}\n")
        for u, v, w in edges:
            fh.write(f"{u+1} {v+1} {w}\n")


def _node_id(raw: str) -> int:
    return int(raw[1:]) if raw.startswith("n") else int(raw)


def _read_graphml(path: Path) -> Tuple[int, EdgeList]:
    """Parse nodes ``n0 .. n{N-1}`` and weighted edges from a GraphML file.

    The weight is read from a ``weight`` attribute or a ``<data key="w">``
    child and defaults to ``1``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"invalid GraphML: {exc}") from exc
    edges: EdgeList = []
    max_id = -1
    try:
        for node in root.findall(f".//{_GRAPHML_NS}node"):
            max_id = max(max_id, _node_id(node.attrib.get("id", "")))
        for edge in root.findall(f".//{_GRAPHML_NS}edge"):
            u = _node_id(edge.attrib.get("source", ""))
            v = _node_id(edge.attrib.get("target", ""))
            w_attr = edge.attrib.get("weight")
            if w_attr is None:
                data = edge.find(f"{_GRAPHML_NS}data[@key='w']")
                w_attr = data.text if (data is not None and data.text is not None) else "1"
            edges.append((u, v, _parse_weight(w_attr, f"edge {u}->{v}")))
            max_id = max(max_id, u, v)
    except ValueError as exc:
        raise GraphFormatError(f"non-integer node id: {exc}") from exc
    if max_id < 0:
        raise GraphFormatError("no vertices parsed from file")
    return max_id + 1, edges


def _write_graphml(path: Path, G: Graph) -> None:
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <graph id="G" edgedefault="directed">')
    for i in range(G.n):
        lines.append(f'    <node id="n{i}"/>')
    for u, v, w in G.edges():
        lines.append(f'    <edge source="n{u}" target="n{v}" weight="{w}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    path.write_text("\n".join(lines), encoding="utf-8")


_FMT_READERS: Dict[str, Callable[[Path], Tuple[int, EdgeList]]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "mtx": _read_mtx,
    "graphml": _read_graphml,
}

_FMT_WRITERS: Dict[str, Callable[[Path, Graph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "mtx": _write_mtx,
    "graphml": _write_graphml,
}


def _detect_format(path: Path) -> Optional[str]:
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext == ".mtx":
        return "mtx"
    if ext == ".graphml":
        return "graphml"
    return None


def read_graph(path: str, fmt: Optional[str] = None) -> Graph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: ``csv``, ``jsonl``, ``mtx`` or ``graphml``. Auto-detected from the
            extension when ``None``.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError("unknown graph format")
    n, edges = _FMT_READERS[fmt](p)
    return Graph.from_edges(n, edges)


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph to a file, auto-detecting the format like :func:`read_graph`."""
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError("unknown graph format")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["read_graph", "write_graph"]
