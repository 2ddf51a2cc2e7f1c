"""Hierarchical agglomerative clustering by nearest-neighbour chains or a heap."""

from __future__ import annotations

from .clustered_graph import ClusteredGraph, DendrogramEntry
from .graph import Graph
from .linkage import Linkage


def run_chain(clustered: ClusteredGraph, chain: list[int], on_stack: list[bool]) -> None:
    """Grow a nearest-neighbour chain, merging reciprocal nearest neighbours, until empty."""
    if not chain:
        raise ValueError("chain must start with at least one cluster")
    while chain:
        top = chain[-1]
        edge = clustered.clusters[top].highest_priority_edge()
        if edge is None:
            raise RuntimeError(f"cluster {top} on the chain has no edges")
        nn, top_weight = edge
        if on_stack[nn]:
            chain.pop()
            r_nn = chain[-1]
            if r_nn != nn:
                nn = r_nn
            chain.pop()
            clustered.unite(top, nn, top_weight)
            on_stack[top] = False
            on_stack[nn] = False
        else:
            chain.append(nn)
            on_stack[nn] = True


def nn_chain_hac(graph: Graph, weights: Linkage) -> list[DendrogramEntry]:
    """Cluster with the nearest-neighbour chain algorithm; return the dendrogram."""
    clustered = ClusteredGraph(graph, weights)
    on_stack = [False] * clustered.n
    for v in range(clustered.n):
        if clustered.is_active(v) and clustered.clusters[v].size() > 0:
            chain = [v]
            on_stack[v] = True
            run_chain(clustered, chain, on_stack)
    return clustered.dendrogram()


def _best_entry(heap: dict, weights: Linkage) -> int:
    best = None
    for _, weight in heap.values():
        best = weight if best is None else weights.augmented_combine(best, weight)
    return min(k for k, (_, weight) in heap.items() if weight == best)


def heap_hac(graph: Graph, weights: Linkage) -> list[DendrogramEntry]:
    """Cluster by repeatedly merging along the best edge kept in a priority map."""
    clustered = ClusteredGraph(graph, weights)
    heap: dict[int, tuple[int, object]] = {}
    for v in range(clustered.n):
        edge = clustered.clusters[v].highest_priority_edge()
        if edge is not None:
            heap[v] = edge
    while heap:
        u = _best_entry(heap, weights)
        v, wgh = heap[u]
        if not clustered.is_active(v):
            edge = clustered.clusters[u].highest_priority_edge()
            if edge is None:
                del heap[u]
            else:
                heap[u] = edge
            continue
        merged_id = clustered.unite(u, v, wgh)
        heap.pop(u, None)
        heap.pop(v, None)
        edge = clustered.clusters[merged_id].highest_priority_edge()
        if edge is not None:
            heap[merged_id] = edge
    return clustered.dendrogram()