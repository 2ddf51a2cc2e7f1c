"""Greedy vertex colouring: serial first-fit, largest-degree-first and speculative."""

from __future__ import annotations

import copy
from typing import Sequence

from .graph import Graph
from .sliding_queue import QueueBuffer, SlidingQueue


def _first_free_color(neighbor_colors: set[int]) -> int:
    color = 0
    while color in neighbor_colors:
        color += 1
    return color


def color_serial(graph: Graph) -> list[int | None]:
    """Colour vertices in id order, each with the smallest colour unused by its neighbours.

    Only neighbours that already carry a colour are taken into account.
    """
    colors: list[int | None] = [None] * graph.num_vertices()
    max_color = 0
    for u in range(graph.num_vertices()):
        marked = {colors[v] for v in graph.neighbors(u) if colors[v] is not None}
        vertex_color = 0
        while vertex_color < max_color and vertex_color in marked:
            vertex_color += 1
        if vertex_color == max_color:
            max_color += 1
        colors[u] = vertex_color
    return colors


def color_ldf(graph: Graph) -> list[int | None]:
    """Serial colouring of the degree-oriented graph.

    The graph is oriented so that each vertex only sees neighbours of higher
    (degree, id); the input graph is left untouched.
    """
    oriented = copy.deepcopy(graph)
    oriented.orientation()
    return color_serial(oriented)


def _first_fit(graph: Graph, worklist: list[int], colors: list[int | None]) -> None:
    # Every vertex in the worklist reads the colours as they were before the
    # round, as if all of them were coloured at the same time.
    snapshot = list(colors)
    for u in worklist:
        forbidden = {
            snapshot[v] for v in graph.neighbors(u) if v != u and snapshot[v] is not None
        }
        colors[u] = _first_free_color(forbidden)


def _conflict_resolve(
    graph: Graph, queue: SlidingQueue[int], worklist: list[int], colors: list[int | None]
) -> None:
    buffer: QueueBuffer[int] = QueueBuffer(queue)
    for src in worklist:
        if any(src < dst and colors[src] == colors[dst] for dst in graph.neighbors(src)):
            buffer.push_back(src)
    buffer.flush()


def color_speculative(graph: Graph) -> list[int | None]:
    """Speculative colouring: colour a worklist at once, then recolour the losers of conflicts.

    In a conflict between two adjacent vertices of equal colour, the one with
    the smaller id is queued for the next round.
    """
    colors: list[int | None] = [None] * graph.num_vertices()
    queue: SlidingQueue[int] = SlidingQueue()
    for v in range(graph.num_vertices()):
        queue.push_back(v)
    queue.slide_window()
    while not queue.empty():
        worklist = queue.window()
        _first_fit(graph, worklist, colors)
        _conflict_resolve(graph, queue, worklist, colors)
        queue.slide_window()
    return colors


def num_colors(colors: Sequence[int]) -> int:
    """Number of colours used, taken as the largest colour plus one."""
    return max(colors, default=-1) + 1


def is_valid_coloring(graph: Graph, colors: Sequence[int | None]) -> bool:
    """Whether every vertex is coloured and no edge joins two vertices of one colour."""
    if len(colors) != graph.num_vertices() or any(c is None for c in colors):
        return False
    return all(
        colors[v] != colors[u]
        for v in range(graph.num_vertices())
        for u in graph.neighbors(v)
        if u != v
    )