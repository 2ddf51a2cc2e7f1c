import pytest

from graphbench.graph import Graph, load_edgelist

EDGES = [(0, 1), (1, 2), (0, 2), (2, 3)]


@pytest.fixture
def graph():
    return Graph.from_edges(4, EDGES)


def test_sizes(graph):
    assert graph.num_vertices() == 4
    assert graph.num_edges() == 2 * len(EDGES)
    assert sum(graph.degree(v) for v in range(4)) == graph.num_edges()
    assert graph.max_degree() == max(graph.degree(v) for v in range(4))


def test_neighbors_sorted_and_ranges(graph):
    assert graph.neighbors(2) == [0, 1, 3]
    for v in range(4):
        assert graph.edge_end(v) - graph.edge_begin(v) == graph.degree(v)
        assert graph.neighbors(v) == sorted(graph.neighbors(v))


def test_is_connected(graph):
    assert graph.is_connected(0, 1)
    assert graph.is_connected(3, 2)
    assert not graph.is_connected(0, 3)


def test_intersect_num(graph):
    assert graph.intersect_num(0, 1) == 1
    assert graph.intersect_num(0, 3) == graph.intersect_num(3, 0)


def test_edge_labels_follow_edges():
    g = Graph.from_edges(3, [(0, 2), (0, 1)], weights=[7, 9])
    assert g.neighbors(0) == [1, 2]
    assert g.edge_label(0, 0) == 9
    assert g.edge_label(0, 1) == 7
    assert g.edge_label(2, 0) == 7


def test_edge_label_missing(graph):
    with pytest.raises(LookupError):
        graph.edge_label(0, 0)


def test_vertex_label():
    g = Graph([0, 1, 2], [1, 0], vlabels=["a", "b"])
    assert g.vertex_label(1) == "b"


def test_invalid_csr():
    with pytest.raises(ValueError):
        Graph([0, 2], [0])
    with pytest.raises(ValueError):
        Graph([0, 1], [5])


def test_edge_out_of_range():
    with pytest.raises(ValueError):
        Graph.from_edges(2, [(0, 2)])


def test_sort_neighbors():
    g = Graph([0, 3, 3, 3, 3], [3, 1, 2], elabels=["c", "a", "b"], directed=True)
    g.sort_neighbors()
    assert g.neighbors(0) == [1, 2, 3]
    assert [g.edge_label(0, n) for n in range(3)] == ["a", "b", "c"]


def test_symmetrize():
    g = Graph.from_edges(3, [(0, 1), (1, 2), (2, 1)], directed=True)
    g.symmetrize()
    assert not g.directed
    for v in range(3):
        for u in g.neighbors(v):
            assert g.is_connected(u, v)
    assert g.neighbors(1) == [0, 2]


def test_orientation(graph):
    total = graph.num_edges()
    graph.orientation()
    assert graph.directed
    assert graph.num_edges() == total // 2
    for v in range(4):
        for u in graph.neighbors(v):
            assert not graph.is_connected(u, v)


def test_init_edgelist(graph):
    full = graph.init_edgelist()
    assert len(full) == graph.num_edges()
    half = graph.init_edgelist(sym_break=True)
    assert len(half) == graph.num_edges() // 2
    assert all(dst < src for src, dst in half)
    ascending = graph.init_edgelist(sym_break=True, ascend=True)
    assert sorted((d, s) for s, d in ascending) == sorted(half)


def test_degree_histogram(graph):
    hist = graph.degree_histogram(1)
    assert sum(hist) == graph.num_vertices()
    assert len(hist) == graph.max_degree() + 1
    assert sum(graph.degree_histogram()) == graph.num_vertices()
    with pytest.raises(ValueError):
        graph.degree_histogram(0)


def test_meta_data(graph):
    meta = graph.meta_data()
    assert meta["vertices"] == graph.num_vertices()
    assert meta["edges"] == graph.num_edges()
    assert meta["directed"] is False
    assert meta["edge_labels"] is False


def test_load_edgelist(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("# comment\n0 1 5\n1 2 6\n\n")
    g = load_edgelist(path)
    assert g.num_vertices() == 3
    assert g.neighbors(1) == [0, 2]
    assert g.edge_label(1, 1) == 6


def test_load_edgelist_inconsistent(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("0 1 5\n1 2\n")
    with pytest.raises(ValueError):
        load_edgelist(path)