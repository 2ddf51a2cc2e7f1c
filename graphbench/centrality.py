"""Approximate betweenness centrality (Brandes) from a single source."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from .graph import Graph
from .sliding_queue import SlidingQueue

DEFAULT_RELATIVE_TOL = 1e-4
DEFAULT_ABSOLUTE_TOL = 1e-4


def almost_equal(
    a: float,
    b: float,
    abs_tol: float = DEFAULT_ABSOLUTE_TOL,
    rel_tol: float = DEFAULT_RELATIVE_TOL,
) -> bool:
    """Whether a and b agree within the combined absolute and relative tolerance."""
    return not abs(a - b) > rel_tol * (abs(a) + abs(b)) + abs_tol


def check_almost_equal(tested: Sequence[float], expected: Sequence[float]) -> bool:
    """Whether two score vectors agree element by element."""
    if len(tested) != len(expected):
        return False
    return all(almost_equal(a, b) for a, b in zip(tested, expected))


@dataclass
class BFSResult:
    """Shortest-path counts, depths, successor edges and vertices per depth."""

    path_counts: list[int]
    depths: list[int]
    successors: set[int] = field(default_factory=set)
    levels: list[list[int]] = field(default_factory=list)


def _check_source(graph: Graph, source: int) -> None:
    if not 0 <= source < graph.num_vertices():
        raise IndexError(f"source vertex {source} out of range")


def pbfs(graph: Graph, source: int) -> BFSResult:
    """Level-synchronous BFS recording path counts and successor edge ids."""
    _check_source(graph, source)
    n = graph.num_vertices()
    result = BFSResult([0] * n, [-1] * n)
    result.depths[source] = 0
    result.path_counts[source] = 1
    queue: SlidingQueue[int] = SlidingQueue()
    queue.push_back(source)
    queue.slide_window()
    depth = 0
    while not queue.empty():
        frontier = queue.window()
        result.levels.append(frontier)
        depth += 1
        for src in frontier:
            offset = graph.edge_begin(src)
            for dst in graph.neighbors(src):
                if result.depths[dst] == -1:
                    result.depths[dst] = depth
                    queue.push_back(dst)
                if result.depths[dst] == depth:
                    result.successors.add(offset)
                    result.path_counts[dst] += result.path_counts[src]
                offset += 1
        queue.slide_window()
    return result


def _normalize(scores: list[float]) -> list[float]:
    biggest = max(scores, default=0.0)
    if biggest == 0:
        return [math.nan] * len(scores)
    return [score / biggest for score in scores]


def bc_solver(graph: Graph, source: int = 0) -> list[float]:
    """Betweenness scores from ``source``, normalized so the largest is 1."""
    bfs = pbfs(graph, source)
    scores = [0.0] * graph.num_vertices()
    deltas = [0.0] * graph.num_vertices()
    for level in reversed(bfs.levels):
        for src in level:
            delta_src = 0.0
            offset = graph.edge_begin(src)
            for dst in graph.neighbors(src):
                if offset in bfs.successors:
                    delta_src += bfs.path_counts[src] / bfs.path_counts[dst] * (1 + deltas[dst])
                offset += 1
            deltas[src] = delta_src
            scores[src] += delta_src
    return _normalize(scores)


def bc_verifier(graph: Graph, source: int = 0, num_iters: int = 1) -> list[float]:
    """Reference serial Brandes computation, rebuilding successors from depths."""
    _check_source(graph, source)
    n = graph.num_vertices()
    scores = [0.0] * n
    for _ in range(num_iters):
        depths = [-1] * n
        depths[source] = 0
        path_counts = [0] * n
        path_counts[source] = 1
        to_visit = [source]
        for src in to_visit:
            for dst in graph.neighbors(src):
                if depths[dst] == -1:
                    depths[dst] = depths[src] + 1
                    to_visit.append(dst)
                if depths[dst] == depths[src] + 1:
                    path_counts[dst] += path_counts[src]
        verts_at_depth: list[list[int]] = []
        for v, d in enumerate(depths):
            if d != -1:
                while d >= len(verts_at_depth):
                    verts_at_depth.append([])
                verts_at_depth[d].append(v)
        deltas = [0.0] * n
        for level in reversed(verts_at_depth):
            for src in level:
                delta_src = sum(
                    path_counts[src] / path_counts[dst] * (1 + deltas[dst])
                    for dst in graph.neighbors(src)
                    if depths[dst] == depths[src] + 1
                )
                deltas[src] = delta_src
                scores[src] += delta_src
    return _normalize(scores)