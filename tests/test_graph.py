import numpy as np
import pytest

from apspx import Graph, GraphFormatError, InputError


def test_add_edge_keeps_negative_and_integer_weights():
    g = Graph(3)
    g.add_edge(0, 1, -2)
    g.add_edge(1, 2, 1.5)
    assert g.adj == [[(1, -2)], [(2, 1.5)], []]
    assert list(g.edges()) == [(0, 1, -2), (1, 2, 1.5)]
    assert g.edge_count() == 2
    assert g.out_degree(0) == 1


def test_empty_graph_is_constructible():
    assert Graph(0).adj == []


@pytest.mark.parametrize("n", [-1, 1.5, True, "3"])
def test_bad_vertex_count(n):
    with pytest.raises(InputError):
        Graph(n)


def test_out_of_range_edge():
    g = Graph(2)
    with pytest.raises(InputError):
        g.add_edge(0, 2, 1)


@pytest.mark.parametrize("w", ["1", None, float("inf"), float("nan"), True])
def test_bad_weights(w):
    g = Graph(2)
    with pytest.raises(GraphFormatError):
        g.add_edge(0, 1, w)


def test_mirrored_adds_reverse_edges():
    g = Graph.from_edges(3, [(0, 1, 4), (2, 2, 1)]).mirrored()
    assert sorted(g.edges()) == [(0, 1, 4), (1, 0, 4), (2, 2, 1)]


def test_numpy_scalar_weights_become_plain_numbers():
    g = Graph.from_edges(3, [(0, 1, np.int64(3)), (1, 2, np.float32(0.5)), (0, 2, np.int32(-2))])
    assert list(g.edges()) == [(0, 1, 3), (0, 2, -2), (1, 2, 0.5)]
    assert [type(w) for _, _, w in g.edges()] == [int, int, float]


def test_numpy_bool_weight_rejected():
    with pytest.raises(GraphFormatError):
        Graph(2).add_edge(0, 1, np.bool_(True))
