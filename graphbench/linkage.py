"""Linkage functions and weight types for hierarchical agglomerative clustering."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Sequence


class ClusteringType(Enum):
    """Similarity merges the heaviest edges first; dissimilarity the lightest."""

    SIMILARITY = "similarity"
    DISSIMILARITY = "dissimilarity"


@total_ordering
@dataclass(eq=False)
class NormAvgLinkWeight:
    """A bundle of edges whose weight is their mean."""

    bundle_size: int = 0
    total_weight: float = 0.0

    def weight(self) -> float:
        if self.bundle_size == 0:
            return math.nan
        return self.total_weight / self.bundle_size

    def __eq__(self, other):
        if not isinstance(other, NormAvgLinkWeight):
            return NotImplemented
        return self.weight() == other.weight()

    def __lt__(self, other):
        if not isinstance(other, NormAvgLinkWeight):
            return NotImplemented
        return self.weight() < other.weight()

    def __hash__(self):
        return hash(self.weight())


@total_ordering
@dataclass(eq=False)
class AvgLinkWeight:
    """Total weight across a cut and that total divided by the product of cluster sizes."""

    total_weight: float = 0.0
    current_weight: float = 0.0

    def weight(self) -> float:
        return self.current_weight

    def __eq__(self, other):
        if not isinstance(other, AvgLinkWeight):
            return NotImplemented
        return self.weight() == other.weight()

    def __lt__(self, other):
        if not isinstance(other, AvgLinkWeight):
            return NotImplemented
        return self.weight() < other.weight()

    def __hash__(self):
        return hash(self.weight())


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6f}"
    return str(value)


class Linkage(ABC):
    """Edge weights, priority order and merge rule for one clustering run.

    Initial edge weights are the graph's edge labels.
    """

    def __init__(self, graph=None, clustering: ClusteringType = ClusteringType.DISSIMILARITY):
        self.graph = graph
        self.clustering = ClusteringType(clustering)

    @property
    def similarity(self) -> bool:
        return self.clustering is ClusteringType.SIMILARITY

    def get_weight(self, u: int, v: int, wgh):
        """Initial weight of the edge (u, v) carrying label ``wgh``."""
        return wgh

    def augmented_combine(self, lhs, rhs):
        """The higher-priority of two weights."""
        return max(lhs, rhs) if self.similarity else min(lhs, rhs)

    def _from_number(self, value):
        return value

    def identity(self):
        """The weight no edge ever loses to."""
        return self._from_number(0 if self.similarity else math.inf)

    @abstractmethod
    def linkage(self, lhs, rhs):
        """Weight of the edge formed when two parallel edges are merged."""

    def as_string(self, wgh) -> str:
        return _format_number(wgh)


class MaxLinkage(Linkage):
    """Merged edges keep the larger weight."""

    def linkage(self, lhs, rhs):
        return max(lhs, rhs)


class MinLinkage(Linkage):
    """Merged edges keep the smaller weight."""

    def linkage(self, lhs, rhs):
        return min(lhs, rhs)


class WeightedAverageLinkage(Linkage):
    """Merged edges take the mean of the two weights."""

    def get_weight(self, u: int, v: int, wgh) -> float:
        return float(wgh)

    def _from_number(self, value) -> float:
        return float(value)

    def linkage(self, lhs: float, rhs: float) -> float:
        return (lhs + rhs) / 2.0

    def as_string(self, wgh) -> str:
        return f"{float(wgh):.6f}"


class NormAverageLinkage(Linkage):
    """Merged edges pool their bundles; the weight is the mean over all edges."""

    def get_weight(self, u: int, v: int, wgh) -> NormAvgLinkWeight:
        return NormAvgLinkWeight(1, float(wgh))

    def _from_number(self, value) -> NormAvgLinkWeight:
        return NormAvgLinkWeight(1, float(value))

    def linkage(self, lhs: NormAvgLinkWeight, rhs: NormAvgLinkWeight) -> NormAvgLinkWeight:
        return NormAvgLinkWeight(
            lhs.bundle_size + rhs.bundle_size, lhs.total_weight + rhs.total_weight
        )

    def as_string(self, wgh: NormAvgLinkWeight) -> str:
        return f"{wgh.weight():.6f}"


Value = tuple[int, AvgLinkWeight]


class ApproxAverageLinkage(Linkage):
    """Average linkage whose weights are rescaled by the sizes of the clusters."""

    def get_weight(self, u: int, v: int, wgh) -> AvgLinkWeight:
        total = float(wgh)
        return AvgLinkWeight(total, total)

    def _from_number(self, value) -> AvgLinkWeight:
        return AvgLinkWeight(float(value), float(value))

    def linkage(self, lhs, rhs):
        raise TypeError("average linkage needs cluster sizes; use get_linkage")

    def get_linkage(self, clusters: Sequence, our_size: int) -> Callable[[Value, Value], Value]:
        """Merge rule for (neighbour id, weight) values of a cluster of ``our_size``."""

        def merge(lhs: Value, rhs: Value) -> Value:
            ngh_id = lhs[0]
            ngh_size = clusters[ngh_id].size()
            total = lhs[1].total_weight + rhs[1].total_weight
            return ngh_id, AvgLinkWeight(total, total / (our_size * ngh_size))

        return merge

    def update_weight(self, clusters: Sequence, value: Value, our_size: int) -> Value:
        """Recompute the average weight of ``value`` for the current cluster sizes."""
        ngh_id = value[0]
        ngh_size = clusters[ngh_id].size()
        total = value[1].total_weight
        return ngh_id, AvgLinkWeight(total, total / (our_size * ngh_size))

    def as_string(self, wgh: AvgLinkWeight) -> str:
        return f"{wgh.weight():.6f}"