"""Draw a graph with a shortest path highlighted.

Large graphs are downsampled to ``max_edges`` edges (path edges are always
kept) so the picture stays readable.
"""

from __future__ import annotations

import random
from typing import Hashable, Optional, Sequence, Set, Tuple

import networkx as nx

from .graph import Graph


def to_networkx(G: Graph) -> "nx.DiGraph":
    """Return ``G`` as a ``networkx.DiGraph`` keeping the lightest parallel edge."""
    g = nx.DiGraph()
    g.add_nodes_from(range(G.n))
    for u, v, w in G.edges():
        if g.has_edge(u, v) and g[u][v]["weight"] <= w:
            continue
        g.add_edge(u, v, weight=w)
    return g


def plot_path(
    graph: "Graph | nx.DiGraph",
    path: Optional[Sequence[Hashable]],
    out: str,
    *,
    max_edges: int = 300,
    layout: str = "spring",
    show_weights: bool = False,
    seed: int = 0,
) -> None:
    """Render ``graph`` to ``out`` (any format matplotlib can save).

    Args:
        graph: Graph to draw.
        path: Vertices of a path to highlight, or ``None``.
        out: Output file path.
        max_edges: Upper bound on drawn non-path edges.
        layout: ``spring`` or ``circular``.
        show_weights: Draw edge weight labels.
        seed: Seed for downsampling and the spring layout.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    g = to_networkx(graph) if isinstance(graph, Graph) else graph
    hops: Set[Tuple[Hashable, Hashable]] = set()
    if path:
        hops = set(zip(path, path[1:]))

    other = [e for e in g.edges() if e not in hops]
    if len(other) > max_edges:
        other = random.Random(seed).sample(other, max_edges)
    h = g.edge_subgraph(other + list(hops)).copy()
    h.add_nodes_from(path or [])

    # spring_layout needs scipy from 500 nodes on
    if layout == "circular" or h.number_of_nodes() >= 500:
        pos = nx.circular_layout(h)
    else:
        pos = nx.spring_layout(h, seed=seed)

    fig, ax = plt.subplots(figsize=(8, 8))
    try:
        on_path = set(path or [])
        nx.draw_networkx_nodes(
            h,
            pos,
            ax=ax,
            node_size=120,
            node_color=["tab:red" if v in on_path else "tab:blue" for v in h.nodes()],
        )
        rest = [e for e in h.edges() if e not in hops]
        nx.draw_networkx_edges(h, pos, ax=ax, edgelist=rest, alpha=0.3, arrows=True)
        if hops:
            nx.draw_networkx_edges(
                h, pos, ax=ax, edgelist=list(hops), edge_color="tab:red", width=2.0, arrows=True
            )
        if h.number_of_nodes() <= 60:
            nx.draw_networkx_labels(h, pos, ax=ax, font_size=8)
        if show_weights:
            labels = {(u, v): d.get("weight", "") for u, v, d in h.edges(data=True)}
            nx.draw_networkx_edge_labels(h, pos, ax=ax, edge_labels=labels, font_size=6)
        ax.set_axis_off()
        fig.savefig(out, bbox_inches="tight")
    finally:
        plt.close(fig)


__all__ = ["to_networkx", "plot_path"]
