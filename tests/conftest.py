from __future__ import annotations

from typing import List, Tuple

import pytest

from apspx import Graph
from apspx.generator import generate_graph


@pytest.fixture
def triangle() -> Graph:
    return Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (0, 2, 5)])


@pytest.fixture
def detour() -> Graph:
    return Graph.from_edges(4, [(0, 3, 10), (0, 1, 2), (1, 2, 2), (2, 3, 2)])


def random_graphs(count: int, n: int, m: int, negative: bool = False) -> List[Tuple[int, Graph]]:
    """Seeded random graphs; ``negative`` produces DAGs with weights in [-10, 10]."""
    out = []
    for seed in range(count):
        if negative:
            gen = generate_graph(n=n, m=m, graph_type="dag", w_min=-10, w_max=10, seed=seed)
        else:
            gen = generate_graph(n=n, m=m, w_min=0, w_max=20, seed=seed)
        out.append((seed, gen.to_graph()))
    return out
