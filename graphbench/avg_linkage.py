"""Approximate average-linkage clustering with lazily refreshed edge weights."""

from __future__ import annotations

from collections import deque
from functools import reduce
from typing import Optional

from .clustered_graph import DendrogramEntry
from .graph import Graph
from .linkage import ApproxAverageLinkage, AvgLinkWeight

Value = tuple[int, AvgLinkWeight]


class AvgClusteredVertex:
    """A cluster: its member count and (neighbour id, weight) values keyed by neighbour."""

    def __init__(self, vtx_id: int, graph: Graph, weights: ApproxAverageLinkage):
        if not graph.has_edge_labels:
            raise ValueError("clustering needs a graph with edge weights")
        self._weights = weights
        self.neighbors: dict[int, Value] = {}
        for n, u in enumerate(graph.neighbors(vtx_id)):
            weight = weights.get_weight(vtx_id, u, graph.edge_label(vtx_id, n))
            self.neighbors[u] = (u, weight)
        self.staleness = graph.degree(vtx_id)
        self.num_in_cluster = 1
        self.active = True
        self.current_id = vtx_id

    def highest_priority_edge(self) -> Optional[Value]:
        """The (neighbour, weight) edge of highest priority; ties go to the smallest id."""
        if not self.neighbors:
            return None
        best = reduce(self._weights.augmented_combine, (w for _, w in self.neighbors.values()))
        key = min(k for k, (_, w) in self.neighbors.items() if w == best)
        return self.neighbors[key]

    def neighbor_size(self) -> int:
        """Number of neighbouring clusters."""
        return len(self.neighbors)

    def size(self) -> int:
        """Number of original vertices in this cluster."""
        return self.num_in_cluster

    def is_stale(self, epsilon: float) -> bool:
        """Whether the cluster grew by more than a factor (1 + epsilon) since its last refresh."""
        return self.staleness * (1 + epsilon) < self.size()


class AvgClusteredGraph:
    """Clusters merged pairwise under approximate average linkage, with a dendrogram."""

    def __init__(self, graph: Graph, weights: ApproxAverageLinkage, epsilon: float = 0.1):
        self.graph = graph
        self.weights = weights
        self.epsilon = epsilon
        self.n = graph.num_vertices()
        self.last_cluster_id = self.n
        self.num_merges_performed = 0
        self.clusters = [AvgClusteredVertex(v, graph, weights) for v in range(self.n)]
        self._dendrogram: list[DendrogramEntry] = [(None, None)] * max(2 * self.n - 1, 0)

    def is_active(self, cluster_id: int) -> bool:
        return self.clusters[cluster_id].active

    def new_cluster_id(self) -> int:
        new_id = self.last_cluster_id
        self.last_cluster_id += 1
        return new_id

    def unite(self, a: int, b: int, wgh) -> int:
        """Merge clusters a and b joined by an edge of weight ``wgh``; return the survivor."""
        if a == b:
            raise ValueError("cannot merge a cluster with itself")
        for c in (a, b):
            if not self.is_active(c):
                raise ValueError(f"cluster {c} is no longer active")
        if self.clusters[a].neighbor_size() < self.clusters[b].neighbor_size():
            smaller, larger = a, b
        else:
            larger, smaller = a, b
        small = self.clusters[smaller]
        large = self.clusters[larger]
        if larger not in small.neighbors or smaller not in large.neighbors:
            raise ValueError(f"clusters {a} and {b} are not adjacent")

        small.active = False
        small_ngh = small.neighbors
        small.neighbors = {}
        del small_ngh[larger]
        large_ngh = large.neighbors
        del large_ngh[smaller]
        smaller_keys = sorted(small_ngh)

        new_cluster_size = large.num_in_cluster + small.num_in_cluster
        link = self.weights.get_linkage(self.clusters, new_cluster_size)

        merged = dict(small_ngh)
        for key, value in large_ngh.items():
            merged[key] = link(merged[key], value) if key in merged else value
        large.neighbors = merged

        current_a = self.clusters[a].current_id
        current_b = self.clusters[b].current_id
        new_id = self.new_cluster_id()
        self.num_merges_performed += 1
        self._dendrogram[current_a] = (new_id, wgh)
        self._dendrogram[current_b] = (new_id, wgh)
        large.current_id = new_id
        large.num_in_cluster = new_cluster_size

        for w in smaller_keys:
            w_ngh = self.clusters[w].neighbors
            _, found_weight = w_ngh.pop(smaller)
            new_value = self.weights.update_weight(
                self.clusters, (larger, found_weight), new_cluster_size
            )
            w_ngh[larger] = link(w_ngh[larger], new_value) if larger in w_ngh else new_value

        if large.is_stale(self.epsilon):
            large.neighbors = {
                key: self.weights.update_weight(self.clusters, value, new_cluster_size)
                for key, value in large.neighbors.items()
            }
            for ngh_id, (_, weight) in large.neighbors.items():
                updated = self.weights.update_weight(
                    self.clusters, (larger, weight), new_cluster_size
                )
                self.clusters[ngh_id].neighbors[larger] = updated
            large.staleness = large.size()

        return larger

    def dendrogram(self) -> list[DendrogramEntry]:
        """Parent pointers ``(parent id, merge weight)``; the root's parent is None.

        Separate components are joined under new clusters of identity weight.
        """
        if self.num_merges_performed < self.n - 1:
            bad = deque(i for i in range(self.last_cluster_id) if self._dendrogram[i][0] is None)
            while len(bad) > 1:
                fst = bad.popleft()
                snd = bad.popleft()
                new_id = self.new_cluster_id()
                self._dendrogram[fst] = (new_id, self.weights.identity())
                self._dendrogram[snd] = (new_id, self.weights.identity())
                bad.append(new_id)
        return list(self._dendrogram)


def _best_entry(heap: dict[int, Value], weights: ApproxAverageLinkage) -> int:
    best = reduce(weights.augmented_combine, (w for _, w in heap.values()))
    return min(k for k, (_, w) in heap.items() if w == best)


def approx_average_hac(
    graph: Graph, weights: ApproxAverageLinkage, epsilon: float = 0.1
) -> list[DendrogramEntry]:
    """Cluster under approximate average linkage; return the dendrogram."""
    clustered = AvgClusteredGraph(graph, weights, epsilon)
    heap: dict[int, Value] = {}
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

        restart = False
        for x, other in ((u, v), (v, u)):
            edge = clustered.clusters[x].highest_priority_edge()
            if edge is not None and edge[0] != other and edge[1] > wgh:
                heap[x] = edge
                restart = True
        if restart:
            continue

        merged_id = clustered.unite(u, v, wgh)
        heap.pop(u, None)
        heap.pop(v, None)
        edge = clustered.clusters[merged_id].highest_priority_edge()
        if edge is not None:
            heap[merged_id] = edge

    return clustered.dendrogram()