import math

import pytest

from apspx import Graph, InputError, build, relax, relax_numpy
from apspx.generator import generate_graph

from conftest import random_graphs


def _solved(graph, backend=relax, limit=None):
    d, p = build(graph.n, graph.edges())
    backend(d, p, limit=limit)
    return d, p


def test_intermediate_vertex_shortens_path(triangle):
    d, p = _solved(triangle)
    assert d.get(0, 2) == 2
    assert p.get(0, 2) == 1


def test_counts_every_check():
    g = generate_graph(n=7, m=12, seed=3).to_graph()
    d, p = build(g.n, g.edges())
    stats = relax(d, p)
    assert stats.rounds == 7
    assert stats.checks == 7 ** 3
    assert stats.updates >= 0


def test_unreachable_stays_infinite_next_to_negative_edges():
    d, p = build(3, [(1, 2, -5)])
    relax(d, p)
    assert d.get(0, 2) == math.inf
    assert d.get(2, 1) == math.inf
    assert d.get(1, 2) == -5
    assert not any(isinstance(x, float) and math.isnan(x) for x in d.data)


def test_limit_matches_brute_force_over_allowed_intermediates():
    # with limit=1 only vertex 0 may be used as an intermediate
    edges = [(1, 0, 1), (0, 2, 1), (1, 3, 1), (3, 2, 0)]
    d, p = build(4, edges)
    relax(d, p, limit=1)
    assert d.get(1, 2) == 2
    d, p = build(4, edges)
    relax(d, p)
    assert d.get(1, 2) == 1


def test_limit_out_of_range():
    d, p = build(2, [])
    with pytest.raises(InputError):
        relax(d, p, limit=3)


@pytest.mark.parametrize("seed,graph", random_graphs(4, 12, 30))
def test_distances_never_grow_with_more_intermediates(seed, graph):
    previous = None
    for k in range(graph.n + 1):
        d, _ = _solved(graph, limit=k)
        if previous is not None:
            assert all(a <= b for a, b in zip(d.data, previous.data)), f"k={k}"
        previous = d


@pytest.mark.parametrize("seed,graph", random_graphs(4, 15, 45) + random_graphs(4, 15, 45, negative=True))
def test_numpy_backend_matches_python(seed, graph):
    d1, p1 = _solved(graph, relax)
    d2, p2 = _solved(graph, relax_numpy)
    assert d1 == d2
    assert p1 == p2


def test_numpy_backend_exact_for_large_integer_weights():
    g = Graph.from_edges(4, [(0, 1, 2**60 + 1), (1, 2, 1), (0, 2, 2**61), (2, 3, -(2**59) - 3)])
    d1, p1 = _solved(g, relax)
    d2, p2 = _solved(g, relax_numpy)
    assert d2.get(0, 2) == 2**60 + 2
    assert d2.get(0, 3) == 2**60 - 2**59 - 1
    assert d1 == d2
    assert p1 == p2


def test_numpy_backend_small_integer_weights_stay_integral():
    d, _ = _solved(Graph.from_edges(3, [(0, 1, 2**40), (1, 2, 5)]), relax_numpy)
    assert d.get(0, 2) == 2**40 + 5
    assert isinstance(d.get(0, 2), int)
