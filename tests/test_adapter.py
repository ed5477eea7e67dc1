import networkx as nx
import numpy as np
import pytest

from apspx import (
    Graph,
    GraphAdapter,
    GraphFormatError,
    InputError,
    InvalidGraphError,
    as_adapter,
    solve,
)


def test_graph_adapter_uses_identity_indices():
    g = Graph.from_edges(3, [(0, 2, 7), (2, 1, -1)])
    a = GraphAdapter.from_graph(g)
    assert a.vertex_count == 3
    assert [a.index_of(v) for v in range(3)] == [0, 1, 2]
    assert list(a.edges()) == [(0, 2, 7), (2, 1, -1)]
    # edges() restarts on every call
    assert list(a.edges()) == list(a.edges())


def test_empty_inputs_are_rejected():
    with pytest.raises(InvalidGraphError):
        GraphAdapter.from_graph(Graph(0))
    with pytest.raises(InvalidGraphError):
        GraphAdapter.from_networkx(nx.DiGraph())
    with pytest.raises(InvalidGraphError):
        GraphAdapter.from_edges([])


def test_networkx_labels_and_default_weight():
    g = nx.DiGraph()
    g.add_edge("a", "b", weight=2.5)
    g.add_edge("b", "c")
    a = GraphAdapter.from_networkx(g)
    assert a.vertices == ["a", "b", "c"]
    assert a.vertex_at(a.index_of("c")) == "c"
    assert list(a.edges()) == [(0, 1, 2.5), (1, 2, 1.0)]


def test_undirected_networkx_graph_is_mirrored():
    g = nx.Graph()
    g.add_edge("x", "y", weight=3)
    g.add_edge("y", "y", weight=1)
    # self-loops are not doubled
    assert sorted(GraphAdapter.from_networkx(g).edges()) == [(0, 1, 3), (1, 0, 3), (1, 1, 1)]
    res = solve(g)
    assert res.distance("y", "x") == 3
    assert res.path("y", "x") == ["y", "x"]


def test_multidigraph_parallel_edges_collapse_to_lightest():
    g = nx.MultiDiGraph()
    g.add_edge(0, 1, weight=5)
    g.add_edge(0, 1, weight=2)
    assert solve(g).distance(0, 1) == 2


def test_from_edges_with_isolated_vertices_and_order():
    a = GraphAdapter.from_edges([("b", "c", 1)], vertices=["z", "b"])
    assert a.vertices == ["z", "b", "c"]
    assert list(a.edges()) == [(1, 2, 1)]


def test_from_edges_rejects_bad_weight():
    with pytest.raises(GraphFormatError):
        GraphAdapter.from_edges([("a", "b", "heavy")])


def test_numpy_integer_weights_match_graph_input():
    g = nx.DiGraph()
    g.add_edge("a", "b", weight=np.int64(3))
    g.add_edge("b", "c", weight=np.int64(4))
    res = solve(g)
    assert res.distance("a", "c") == 7
    assert isinstance(res.distance("a", "c"), int)
    assert solve(Graph.from_edges(3, [(0, 1, np.int64(3)), (1, 2, np.int64(4))])).distance(0, 2) == 7


def test_networkx_bad_weight_surfaces_on_solve():
    g = nx.DiGraph()
    g.add_edge(0, 1, weight="heavy")
    with pytest.raises(GraphFormatError):
        solve(g)


def test_duplicate_and_unknown_vertices():
    with pytest.raises(InputError):
        GraphAdapter(["a", "a"], lambda: iter(()))
    a = GraphAdapter.from_edges([("a", "b", 1)])
    with pytest.raises(InputError):
        a.index_of("missing")
    with pytest.raises(InputError):
        a.index_of(["unhashable"])


def test_as_adapter_dispatch():
    g = Graph(1)
    a = as_adapter(g)
    assert as_adapter(a) is a
    assert as_adapter(nx.path_graph(2)).vertex_count == 2
    with pytest.raises(InputError):
        as_adapter([(0, 1, 1)])
