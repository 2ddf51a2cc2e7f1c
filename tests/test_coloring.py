import copy

import pytest

from graphbench.coloring import (
    color_ldf,
    color_serial,
    color_speculative,
    is_valid_coloring,
    num_colors,
)
from graphbench.graph import Graph


def triangle():
    return Graph.from_edges(3, [(0, 1), (1, 2), (0, 2)])


def path3():
    return Graph.from_edges(3, [(0, 1), (1, 2)])


def complete(n):
    return Graph.from_edges(n, [(a, b) for a in range(n) for b in range(a + 1, n)])


def mixed():
    edges = [(0, 1), (0, 2), (1, 2), (2, 3), (3, 4), (4, 5), (5, 3), (1, 6), (6, 7), (7, 0)]
    return Graph.from_edges(8, edges)


def star():
    return Graph.from_edges(6, [(0, i) for i in range(1, 6)])


GRAPHS = [triangle, path3, mixed, star, lambda: complete(5), lambda: Graph.from_edges(4, [])]


def test_serial_triangle_uses_three_colors():
    colors = color_serial(triangle())
    assert num_colors(colors) == 3
    assert is_valid_coloring(triangle(), colors)


def test_serial_path():
    assert color_serial(path3()) == [0, 1, 0]


@pytest.mark.parametrize("make", GRAPHS)
def test_serial_is_valid_and_bounded(make):
    graph = make()
    colors = color_serial(graph)
    assert is_valid_coloring(graph, colors)
    assert num_colors(colors) <= graph.max_degree() + 1


@pytest.mark.parametrize("make", GRAPHS)
def test_speculative_is_valid_and_bounded(make):
    graph = make()
    colors = color_speculative(graph)
    assert is_valid_coloring(graph, colors)
    assert num_colors(colors) <= graph.max_degree() + 1


def test_speculative_complete_graph_needs_all_colors():
    graph = complete(4)
    colors = color_speculative(graph)
    assert num_colors(colors) == graph.num_vertices()
    assert sorted(colors) == list(range(graph.num_vertices()))


@pytest.mark.parametrize("make", GRAPHS)
def test_ldf_matches_serial_on_oriented_graph(make):
    graph = make()
    oriented = copy.deepcopy(graph)
    oriented.orientation()
    assert color_ldf(graph) == color_serial(oriented)


def test_ldf_leaves_input_untouched():
    graph = mixed()
    before = (graph.rowptr, graph.colidx, graph.directed)
    color_ldf(graph)
    assert (graph.rowptr, graph.colidx, graph.directed) == before


def test_ldf_colors_every_vertex():
    graph = mixed()
    colors = color_ldf(graph)
    assert len(colors) == graph.num_vertices()
    assert all(c is not None and c >= 0 for c in colors)


def test_is_valid_rejects_conflict():
    assert not is_valid_coloring(triangle(), [0, 0, 1])


def test_is_valid_rejects_wrong_length():
    assert not is_valid_coloring(triangle(), [0, 1])


def test_is_valid_rejects_uncolored():
    assert not is_valid_coloring(path3(), [0, None, 0])


def test_num_colors_empty():
    assert num_colors([]) == 0


def test_num_colors_is_max_plus_one():
    colors = [4, 1, 2]
    assert num_colors(colors) == max(colors) + 1