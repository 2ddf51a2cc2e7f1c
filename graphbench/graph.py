"""In-memory graph in compressed sparse row (CSR) form."""

from __future__ import annotations

from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Sequence


class Graph:
    """A CSR graph with optional vertex and edge labels."""

    def __init__(
        self,
        rowptr: Sequence[int],
        colidx: Sequence[int],
        vlabels: Sequence | None = None,
        elabels: Sequence | None = None,
        directed: bool = False,
    ):
        rowptr = list(rowptr)
        colidx = list(colidx)
        if not rowptr or rowptr[0] != 0:
            raise ValueError("row pointers must start with 0")
        if any(b < a for a, b in zip(rowptr, rowptr[1:])):
            raise ValueError("row pointers must be non-decreasing")
        if rowptr[-1] != len(colidx):
            raise ValueError("last row pointer must equal the number of edges")
        nv = len(rowptr) - 1
        if any(not 0 <= u < nv for u in colidx):
            raise ValueError("column index out of range")
        if vlabels is not None and len(vlabels) != nv:
            raise ValueError("one vertex label per vertex is required")
        if elabels is not None and len(elabels) != len(colidx):
            raise ValueError("one edge label per edge is required")
        self._rowptr = rowptr
        self._colidx = colidx
        self._vlabels = list(vlabels) if vlabels is not None else None
        self._elabels = list(elabels) if elabels is not None else None
        self._directed = directed

    @classmethod
    def from_edges(
        cls,
        num_vertices: int,
        edges: Iterable[tuple[int, int]],
        weights: Iterable | None = None,
        directed: bool = False,
    ) -> "Graph":
        """Build a graph from an edge list; undirected edges are stored both ways.

        Neighbour lists come out sorted by destination.
        """
        edges = list(edges)
        weight_list = list(weights) if weights is not None else None
        if weight_list is not None and len(weight_list) != len(edges):
            raise ValueError("one weight per edge is required")
        adjacency: list[list[tuple[int, object]]] = [[] for _ in range(num_vertices)]
        for index, (src, dst) in enumerate(edges):
            if not (0 <= src < num_vertices and 0 <= dst < num_vertices):
                raise ValueError(f"edge ({src}, {dst}) out of range")
            label = weight_list[index] if weight_list is not None else None
            adjacency[src].append((dst, label))
            if not directed and src != dst:
                adjacency[dst].append((src, label))
        return cls._from_adjacency(adjacency, None, weight_list is not None, directed)

    @classmethod
    def _from_adjacency(cls, adjacency, vlabels, labelled, directed) -> "Graph":
        rowptr = [0]
        colidx: list[int] = []
        elabels: list = []
        for entries in adjacency:
            entries = sorted(entries, key=lambda entry: entry[0])
            colidx.extend(dst for dst, _ in entries)
            elabels.extend(label for _, label in entries)
            rowptr.append(len(colidx))
        return cls(rowptr, colidx, vlabels, elabels if labelled else None, directed)

    def _adjacency(self) -> list[list[tuple[int, object]]]:
        return [
            [
                (self._colidx[e], self._elabels[e] if self._elabels is not None else None)
                for e in range(self.edge_begin(v), self.edge_end(v))
            ]
            for v in range(self.num_vertices())
        ]

    def _replace(self, other: "Graph") -> None:
        self._rowptr = other._rowptr
        self._colidx = other._colidx
        self._elabels = other._elabels
        self._directed = other._directed

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def rowptr(self) -> tuple[int, ...]:
        return tuple(self._rowptr)

    @property
    def colidx(self) -> tuple[int, ...]:
        return tuple(self._colidx)

    @property
    def has_vertex_labels(self) -> bool:
        return self._vlabels is not None

    @property
    def has_edge_labels(self) -> bool:
        return self._elabels is not None

    def num_vertices(self) -> int:
        return len(self._rowptr) - 1

    def num_edges(self) -> int:
        return len(self._colidx)

    def max_degree(self) -> int:
        return max((self.degree(v) for v in range(self.num_vertices())), default=0)

    def degree(self, v: int) -> int:
        return self._rowptr[v + 1] - self._rowptr[v]

    def edge_begin(self, v: int) -> int:
        return self._rowptr[v]

    def edge_end(self, v: int) -> int:
        return self._rowptr[v + 1]

    def neighbors(self, v: int) -> list[int]:
        return self._colidx[self._rowptr[v]:self._rowptr[v + 1]]

    def vertex_label(self, v: int):
        if self._vlabels is None:
            raise LookupError("graph has no vertex labels")
        return self._vlabels[v]

    def edge_label(self, v: int, n: int):
        """Label of the n-th edge of vertex v."""
        if self._elabels is None:
            raise LookupError("graph has no edge labels")
        if not 0 <= n < self.degree(v):
            raise IndexError(f"vertex {v} has no edge {n}")
        return self._elabels[self._rowptr[v] + n]

    def is_connected(self, v: int, u: int) -> bool:
        """Whether u is in the (sorted) neighbour list of v."""
        begin, end = self.edge_begin(v), self.edge_end(v)
        pos = bisect_left(self._colidx, u, begin, end)
        return pos < end and self._colidx[pos] == u

    def intersect_num(self, v: int, u: int) -> int:
        """Number of common neighbours of v and u (neighbour lists sorted)."""
        a, b = self.neighbors(v), self.neighbors(u)
        i = j = count = 0
        while i < len(a) and j < len(b):
            if a[i] < b[j]:
                i += 1
            elif a[i] > b[j]:
                j += 1
            else:
                count += 1
                i += 1
                j += 1
        return count

    def sort_neighbors(self) -> None:
        """Sort every neighbour list, carrying edge labels along."""
        self._replace(
            self._from_adjacency(self._adjacency(), None, self.has_edge_labels, self._directed)
        )

    def symmetrize(self) -> None:
        """Add the reverse of every edge, dropping duplicates; the graph becomes undirected."""
        seen: dict[tuple[int, int], object] = {}
        for v, entries in enumerate(self._adjacency()):
            for u, label in entries:
                seen.setdefault((v, u), label)
        for (v, u), label in list(seen.items()):
            seen.setdefault((u, v), label)
        adjacency: list[list[tuple[int, object]]] = [[] for _ in range(self.num_vertices())]
        for (v, u), label in seen.items():
            adjacency[v].append((u, label))
        self._replace(self._from_adjacency(adjacency, None, self.has_edge_labels, False))

    def orientation(self) -> None:
        """Turn an undirected graph into a DAG, keeping edges toward higher (degree, id)."""
        degrees = [self.degree(v) for v in range(self.num_vertices())]
        adjacency = [
            [
                (u, label)
                for u, label in entries
                if degrees[v] < degrees[u] or (degrees[v] == degrees[u] and v < u)
            ]
            for v, entries in enumerate(self._adjacency())
        ]
        self._replace(self._from_adjacency(adjacency, None, self.has_edge_labels, True))

    def init_edgelist(self, sym_break: bool = False, ascend: bool = False) -> list[tuple[int, int]]:
        """Edge list in COO form; with ``sym_break`` only one direction of each edge is kept."""
        edges = []
        for v in range(self.num_vertices()):
            for u in self.neighbors(v):
                if sym_break and (u <= v if ascend else u >= v):
                    continue
                edges.append((v, u))
        return edges

    def degree_histogram(self, bin_width: int = 100) -> list[int]:
        """Vertex counts per degree bin ``[i*bin_width, (i+1)*bin_width)``."""
        if bin_width <= 0:
            raise ValueError("bin width must be positive")
        histogram = [0] * (self.max_degree() // bin_width + 1)
        for v in range(self.num_vertices()):
            histogram[self.degree(v) // bin_width] += 1
        return histogram

    def meta_data(self) -> dict:
        return {
            "vertices": self.num_vertices(),
            "edges": self.num_edges(),
            "max_degree": self.max_degree(),
            "directed": self._directed,
            "vertex_labels": self.has_vertex_labels,
            "edge_labels": self.has_edge_labels,
        }


def _parse_number(text: str):
    try:
        return int(text)
    except ValueError:
        return float(text)


def load_edgelist(path, directed: bool = False) -> Graph:
    """Read ``src dst [weight]`` lines; '#' and '%' lines are comments."""
    edges: list[tuple[int, int]] = []
    weights: list = []
    weighted: bool | None = None
    with Path(path).open() as handle:
        for lineno, line in enumerate(handle, start=1):
            stripped = line.strip()
            if not stripped or stripped[0] in "#%":
                continue
            fields = stripped.split()
            if len(fields) not in (2, 3):
                raise ValueError(f"line {lineno}: expected 2 or 3 fields")
            has_weight = len(fields) == 3
            if weighted is None:
                weighted = has_weight
            elif weighted != has_weight:
                raise ValueError(f"line {lineno}: inconsistent weight column")
            edges.append((int(fields[0]), int(fields[1])))
            if has_weight:
                weights.append(_parse_number(fields[2]))
    num_vertices = max((max(e) for e in edges), default=-1) + 1
    return Graph.from_edges(num_vertices, edges, weights if weighted else None, directed)