import pytest

from graphbench.clustered_graph import ClusteredGraph
from graphbench.graph import Graph
from graphbench.hac import heap_hac, nn_chain_hac, run_chain
from graphbench.linkage import ClusteringType, MaxLinkage, MinLinkage


def _sim(cls, graph):
    return cls(graph, ClusteringType.SIMILARITY)


def _check_dendrogram(dend, n):
    assert len(dend) == 2 * n - 1
    roots = [i for i, (parent, _) in enumerate(dend) if parent is None]
    assert roots == [2 * n - 2]
    for i, (parent, _) in enumerate(dend):
        if parent is not None:
            assert i < parent < len(dend)
    children = {}
    for i, (parent, _) in enumerate(dend):
        if parent is not None:
            children.setdefault(parent, []).append(i)
    assert all(len(kids) == 2 for kids in children.values())


def _merge_weights(dend):
    return sorted({parent: w for parent, w in dend if parent is not None}.values())


PATH = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3)], weights=[5, 3, 1])
TRIANGLE = Graph.from_edges(3, [(0, 1), (1, 2), (0, 2)], weights=[5, 3, 1])


@pytest.mark.parametrize("algorithm", [heap_hac, nn_chain_hac])
def test_path_tree_merges_at_edge_weights(algorithm):
    dend = algorithm(PATH, _sim(MaxLinkage, PATH))
    _check_dendrogram(dend, 4)
    assert _merge_weights(dend) == [1, 3, 5]


def test_heap_path_dendrogram():
    dend = heap_hac(PATH, _sim(MaxLinkage, PATH))
    assert dend == [(4, 5), (4, 5), (5, 3), (6, 1), (5, 3), (6, 1), (None, None)]


@pytest.mark.parametrize("algorithm", [heap_hac, nn_chain_hac])
def test_triangle_single_linkage(algorithm):
    dend = algorithm(TRIANGLE, _sim(MaxLinkage, TRIANGLE))
    _check_dendrogram(dend, 3)
    assert _merge_weights(dend) == [max(3, 1), 5]


@pytest.mark.parametrize("algorithm", [heap_hac, nn_chain_hac])
def test_triangle_complete_linkage(algorithm):
    dend = algorithm(TRIANGLE, _sim(MinLinkage, TRIANGLE))
    _check_dendrogram(dend, 3)
    assert _merge_weights(dend) == [min(3, 1), 5]


@pytest.mark.parametrize("cls", [MaxLinkage, MinLinkage])
def test_heap_and_chain_agree(cls):
    for g in (PATH, TRIANGLE):
        assert heap_hac(g, _sim(cls, g)) == nn_chain_hac(g, _sim(cls, g))


@pytest.mark.parametrize("algorithm", [heap_hac, nn_chain_hac])
def test_disconnected_components_joined(algorithm):
    g = Graph.from_edges(4, [(0, 1), (2, 3)], weights=[2, 4])
    weights = _sim(MaxLinkage, g)
    dend = algorithm(g, weights)
    _check_dendrogram(dend, 4)
    join_weights = [w for parent, w in dend if parent == 6]
    assert join_weights == [weights.identity(), weights.identity()]


@pytest.mark.parametrize("algorithm", [heap_hac, nn_chain_hac])
def test_larger_graph_is_valid(algorithm):
    edges = [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (0, 2), (1, 5)]
    g = Graph.from_edges(6, edges, weights=[7, 2, 9, 4, 6, 3, 8])
    dend = algorithm(g, _sim(MinLinkage, g))
    _check_dendrogram(dend, 6)


def test_run_chain_merges_reciprocal_pair():
    g = Graph.from_edges(2, [(0, 1)], weights=[4])
    cg = ClusteredGraph(g, _sim(MaxLinkage, g))
    on_stack = [True, False]
    chain = [0]
    run_chain(cg, chain, on_stack)
    assert chain == []
    assert on_stack == [False, False]
    assert cg.num_merges_performed == 1


def test_run_chain_rejects_isolated_cluster():
    g = Graph.from_edges(2, [], weights=[])
    cg = ClusteredGraph(g, _sim(MaxLinkage, g))
    with pytest.raises(RuntimeError):
        run_chain(cg, [0], [True, False])


def test_run_chain_rejects_empty_chain():
    g = Graph.from_edges(2, [(0, 1)], weights=[4])
    cg = ClusteredGraph(g, _sim(MaxLinkage, g))
    with pytest.raises(ValueError):
        run_chain(cg, [], [False, False])