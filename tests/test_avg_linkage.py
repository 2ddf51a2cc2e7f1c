import pytest

from graphbench.avg_linkage import AvgClusteredGraph, AvgClusteredVertex, approx_average_hac
from graphbench.graph import Graph
from graphbench.linkage import ApproxAverageLinkage, AvgLinkWeight, ClusteringType


def _weights(graph):
    return ApproxAverageLinkage(graph, ClusteringType.SIMILARITY)


def _roots_and_parents(dendrogram, n):
    parents = {}
    for i, (parent, _) in enumerate(dendrogram):
        if parent is not None:
            parents[i] = parent
    return parents


def test_single_edge_dendrogram():
    g = Graph.from_edges(2, [(0, 1)], [5])
    dend = approx_average_hac(g, _weights(g))
    assert len(dend) == 3
    assert dend[0][0] == 2 and dend[1][0] == 2
    assert dend[0][1].weight() == 5.0
    assert dend[2] == (None, None)


def test_path_every_vertex_reaches_root():
    g = Graph.from_edges(3, [(0, 1), (1, 2)], [1, 3])
    dend = approx_average_hac(g, _weights(g))
    parents = _roots_and_parents(dend, 3)
    assert all(p > c for c, p in parents.items())
    for leaf in range(3):
        node = leaf
        while node in parents:
            node = parents[node]
        assert node == 2 * 3 - 2


def test_path_merges_heaviest_edge_first():
    g = Graph.from_edges(3, [(0, 1), (1, 2)], [1, 3])
    dend = approx_average_hac(g, _weights(g))
    assert dend[1][0] == dend[2][0] == 3
    assert dend[1][1].weight() == 3.0
    assert dend[0][0] == 4


def test_disconnected_components_joined_with_identity():
    g = Graph.from_edges(4, [(0, 1), (2, 3)], [2, 7])
    weights = _weights(g)
    dend = approx_average_hac(g, weights)
    assert dend[2][0] == dend[3][0] == 4
    assert dend[0][0] == dend[1][0] == 5
    assert dend[4][0] == dend[5][0] == 6
    assert dend[4][1] == weights.identity()


def test_unweighted_graph_rejected():
    g = Graph.from_edges(2, [(0, 1)])
    with pytest.raises(ValueError):
        AvgClusteredGraph(g, _weights(g))


def test_unite_conserves_total_weight_in_triangle():
    g = Graph.from_edges(3, [(0, 1), (0, 2), (1, 2)], [5, 2, 1])
    cg = AvgClusteredGraph(g, _weights(g), 0.1)
    survivor = cg.unite(0, 1, AvgLinkWeight(5.0, 5.0))
    other = 1 - survivor
    assert not cg.is_active(other)
    assert cg.clusters[survivor].size() == 2
    assert cg.clusters[survivor].neighbors[2][1].total_weight == 3.0
    assert cg.clusters[2].neighbors[survivor][1].total_weight == 3.0
    assert other not in cg.clusters[2].neighbors


def test_stale_cluster_refreshes_staleness():
    g = Graph.from_edges(2, [(0, 1)], [4])
    cg = AvgClusteredGraph(g, _weights(g), 0.1)
    survivor = cg.unite(0, 1, AvgLinkWeight(4.0, 4.0))
    assert cg.clusters[survivor].staleness == cg.clusters[survivor].size() == 2


def test_is_stale_threshold():
    g = Graph.from_edges(2, [(0, 1)], [4])
    vertex = AvgClusteredVertex(0, g, _weights(g))
    assert vertex.is_stale(0.1) is False
    vertex.num_in_cluster = 2
    assert vertex.is_stale(0.1) is True
    assert vertex.is_stale(1.5) is False


def test_isolated_vertex_has_no_edge():
    g = Graph.from_edges(3, [(0, 1)], [4])
    vertex = AvgClusteredVertex(2, g, _weights(g))
    assert vertex.highest_priority_edge() is None
    assert vertex.neighbor_size() == 0
    assert vertex.size() == 1


def test_highest_priority_edge_prefers_heaviest():
    g = Graph.from_edges(3, [(0, 1), (0, 2)], [1, 9])
    vertex = AvgClusteredVertex(0, g, _weights(g))
    ngh, weight = vertex.highest_priority_edge()
    assert ngh == 2
    assert weight.weight() == 9.0


def test_unite_errors():
    g = Graph.from_edges(3, [(0, 1)], [4])
    cg = AvgClusteredGraph(g, _weights(g))
    with pytest.raises(ValueError):
        cg.unite(0, 2, AvgLinkWeight(1.0, 1.0))
    with pytest.raises(ValueError):
        cg.unite(0, 0, AvgLinkWeight(1.0, 1.0))
    survivor = cg.unite(0, 1, AvgLinkWeight(4.0, 4.0))
    with pytest.raises(ValueError):
        cg.unite(1 - survivor, 2, AvgLinkWeight(1.0, 1.0))


def test_new_cluster_ids_increase():
    g = Graph.from_edges(3, [(0, 1)], [4])
    cg = AvgClusteredGraph(g, _weights(g))
    assert cg.new_cluster_id() == 3
    assert cg.new_cluster_id() == 4
    assert cg.last_cluster_id == 5