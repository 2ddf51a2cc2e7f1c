"""Cluster bookkeeping for hierarchical agglomerative clustering."""

from __future__ import annotations

from collections import deque
from functools import reduce
from typing import Any, Optional

from .graph import Graph
from .linkage import Linkage

DendrogramEntry = tuple[Optional[int], Any]


class ClusteredVertex:
    """A cluster: its neighbouring clusters and the weights of the edges to them."""

    def __init__(self, vtx_id: int, graph: Graph, weights: Linkage):
        if not graph.has_edge_labels:
            raise ValueError("clustering needs a graph with edge weights")
        self._weights = weights
        self.neighbors: dict[int, Any] = {}
        for n, u in enumerate(graph.neighbors(vtx_id)):
            self.neighbors[u] = weights.get_weight(vtx_id, u, graph.edge_label(vtx_id, n))
        self.staleness = graph.degree(vtx_id)
        self.active = True
        self.current_id = vtx_id

    def highest_priority_edge(self) -> tuple[int, Any] | None:
        """The (neighbour, weight) edge of highest priority; ties go to the smallest id."""
        if not self.neighbors:
            return None
        best = reduce(self._weights.augmented_combine, self.neighbors.values())
        ngh = min(k for k, w in self.neighbors.items() if w == best)
        return ngh, self.neighbors[ngh]

    def size(self) -> int:
        """Number of neighbouring clusters."""
        return len(self.neighbors)


class ClusteredGraph:
    """The original vertices as clusters, merged pairwise while recording a dendrogram."""

    def __init__(self, graph: Graph, weights: Linkage):
        self.graph = graph
        self.weights = weights
        self.n = graph.num_vertices()
        self.last_cluster_id = self.n
        self.num_merges_performed = 0
        self.clusters = [ClusteredVertex(v, graph, weights) for v in range(self.n)]
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
        if self.clusters[a].size() < self.clusters[b].size():
            smaller, larger = a, b
        else:
            larger, smaller = a, b
        small = self.clusters[smaller]
        large = self.clusters[larger]
        if larger not in small.neighbors or smaller not in large.neighbors:
            raise ValueError(f"clusters {a} and {b} are not adjacent")

        small.active = False
        link = self.weights.linkage
        small_ngh = small.neighbors
        small.neighbors = {}
        del small_ngh[larger]
        large_ngh = large.neighbors
        del large_ngh[smaller]
        smaller_keys = sorted(small_ngh)

        merged = dict(small_ngh)
        for key, weight in large_ngh.items():
            merged[key] = link(merged[key], weight) if key in merged else weight
        large.neighbors = merged

        current_a = self.clusters[a].current_id
        current_b = self.clusters[b].current_id
        new_id = self.new_cluster_id()
        self.num_merges_performed += 1
        self._dendrogram[current_a] = (new_id, wgh)
        self._dendrogram[current_b] = (new_id, wgh)
        large.current_id = new_id

        for w in smaller_keys:
            w_ngh = self.clusters[w].neighbors
            found = w_ngh.pop(smaller)
            w_ngh[larger] = link(w_ngh[larger], found) if larger in w_ngh else found
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