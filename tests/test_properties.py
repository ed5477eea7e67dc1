"""Invariants of solved matrices, checked on seeded random graphs."""

import math
import random

import networkx as nx
import pytest

from apspx import Graph, SolverConfig, solve
from apspx.reference import all_pairs_bellman_ford
from apspx.visualize import to_networkx

from conftest import random_graphs

POSITIVE = random_graphs(5, 20, 60)
NEGATIVE = random_graphs(5, 20, 60, negative=True)


@pytest.mark.parametrize("seed,graph", POSITIVE)
def test_mirrored_graph_gives_symmetric_distances(seed, graph):
    res = solve(graph.mirrored())
    d = res.distances
    for i in range(d.n):
        for j in range(d.n):
            assert d.get(i, j) == d.get(j, i)


@pytest.mark.parametrize("seed,graph", POSITIVE + NEGATIVE)
def test_triangle_inequality(seed, graph):
    d = solve(graph).distances
    n = d.n
    for i in range(n):
        for k in range(n):
            for j in range(n):
                assert d.get(i, j) <= d.get(i, k) + d.get(k, j)


@pytest.mark.parametrize("seed,graph", POSITIVE + NEGATIVE)
def test_self_distance_is_zero(seed, graph):
    res = solve(graph)
    assert all(res.distance(v, v) == 0 for v in range(graph.n))


@pytest.mark.parametrize("seed,graph", POSITIVE + NEGATIVE)
def test_path_weight_equals_distance(seed, graph):
    res = solve(graph)
    for i in range(graph.n):
        for j in range(graph.n):
            if not res.is_reachable(i, j):
                continue
            path = res.path(i, j)
            assert path[0] == i and path[-1] == j
            assert res.path_weight(path) == res.distance(i, j)


@pytest.mark.parametrize("backend", ["python", "numpy"])
def test_path_weight_equals_distance_with_float_weights(backend):
    rng = random.Random(7)
    edges = [(rng.randrange(15), rng.randrange(15), rng.uniform(0.1, 9.9)) for _ in range(50)]
    graph = Graph.from_edges(15, edges)
    res = solve(graph, SolverConfig(backend=backend))
    checked = 0
    for i in range(graph.n):
        for j in range(graph.n):
            if i == j or not res.is_reachable(i, j):
                continue
            path = res.path(i, j)
            assert res.path_weight(path) == pytest.approx(res.distance(i, j))
            checked += 1
    assert checked > 0


@pytest.mark.parametrize("seed,graph", POSITIVE[:2])
def test_solving_twice_is_idempotent(seed, graph):
    a = solve(graph)
    b = solve(graph)
    assert a.distances == b.distances
    assert a.predecessors == b.predecessors


@pytest.mark.parametrize("backend", ["python", "numpy"])
@pytest.mark.parametrize("seed,graph", random_graphs(2, 50, 200) + random_graphs(2, 50, 200, negative=True))
def test_matches_bellman_ford_from_every_source(seed, graph, backend):
    res = solve(graph, SolverConfig(backend=backend))
    expected = all_pairs_bellman_ford(graph)
    for i in range(graph.n):
        assert res.distances.row(i) == expected[i]


@pytest.mark.parametrize("seed,graph", random_graphs(2, 30, 120))
def test_matches_networkx_floyd_warshall(seed, graph):
    res = solve(graph)
    expected = nx.floyd_warshall(to_networkx(graph))
    for i in range(graph.n):
        for j in range(graph.n):
            d = res.distances.get(i, j)
            if d == math.inf:
                assert expected[i][j] == math.inf
            else:
                assert d == pytest.approx(expected[i][j])
