"""Command-line entry points for centrality, colouring and clustering."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .avg_linkage import approx_average_hac
from .centrality import bc_solver, bc_verifier, check_almost_equal
from .clustered_graph import DendrogramEntry
from .coloring import color_ldf, color_serial, color_speculative, num_colors
from .graph import Graph, load_edgelist
from .hac import heap_hac, nn_chain_hac
from .linkage import (
    ApproxAverageLinkage,
    ClusteringType,
    Linkage,
    MaxLinkage,
    MinLinkage,
    NormAverageLinkage,
    WeightedAverageLinkage,
)
from .timer import Timer

DEFAULT_EPSILON = 0.1

_AVERAGE_LINKAGES = {
    "weightedavg": WeightedAverageLinkage,
    "normalizedavg": NormAverageLinkage,
}

_COLORING_ALGORITHMS = {
    "serial": color_serial,
    "ldf": color_ldf,
    "speculative": color_speculative,
}


def _make_weights(graph: Graph, linkage: str, clustering: ClusteringType) -> Linkage:
    similarity = clustering is ClusteringType.SIMILARITY
    if linkage == "complete":
        cls = MinLinkage if similarity else MaxLinkage
    elif linkage == "single":
        cls = MaxLinkage if similarity else MinLinkage
    elif linkage in _AVERAGE_LINKAGES:
        cls = _AVERAGE_LINKAGES[linkage]
    elif linkage == "avg":
        cls = ApproxAverageLinkage
    else:
        raise ValueError(f"unknown linkage option: {linkage}")
    return cls(graph, clustering)


def run_hac(
    graph: Graph,
    linkage: str = "complete",
    similarity: bool = True,
    heap_based: bool = True,
) -> tuple[Linkage, list[DendrogramEntry]]:
    """Cluster ``graph`` under the named linkage; return the weights used and the dendrogram."""
    if not heap_based and linkage in ("avg", "appx-avg"):
        raise ValueError("the approximate average linkage algorithm only supports heap-based clustering")
    clustering = ClusteringType.SIMILARITY if similarity else ClusteringType.DISSIMILARITY
    weights = _make_weights(graph, linkage, clustering)
    if isinstance(weights, ApproxAverageLinkage):
        return weights, approx_average_hac(graph, weights, DEFAULT_EPSILON)
    if heap_based:
        return weights, heap_hac(graph, weights)
    return weights, nn_chain_hac(graph, weights)


def write_dendrogram(weights: Linkage, dendrogram: Sequence[DendrogramEntry], path) -> int:
    """Write ``child parent weight`` lines; return the number of non-self parent pointers."""
    wrote = 0
    with Path(path).open("w") as out:
        for child, (parent, weight) in enumerate(dendrogram):
            if parent == child:
                continue
            if parent is not None:
                out.write(f"{child} {parent} {weights.as_string(weight)}\n")
            wrote += 1
    print(f"Wrote {wrote} parent-pointers.")
    return wrote


def _print_meta(graph: Graph) -> None:
    for key, value in graph.meta_data().items():
        print(f"{key}: {value}")


def _argv(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _load(path: str) -> Graph | None:
    try:
        return load_edgelist(path)
    except (OSError, ValueError) as exc:
        print(f"cannot load graph {path}: {exc}", file=sys.stderr)
        return None


def centrality_main(argv: Sequence[str] | None = None) -> int:
    """Betweenness centrality from one source, checked against the reference computation."""
    print("Betweenness Centrality")
    args = _argv(argv)
    if not args:
        print(
            "Usage: centrality <graph> [num_gpu(1)] [chunk_size(1024)] "
            "[symmetrize(0/1)] [reverse(0/1)] [source_id(0)]"
        )
        return 1
    parser = argparse.ArgumentParser(prog="centrality")
    parser.add_argument("graph")
    parser.add_argument("num_gpu", nargs="?", type=int, default=1)
    parser.add_argument("chunk_size", nargs="?", type=int, default=1024)
    parser.add_argument("symmetrize", nargs="?", type=int, default=0)
    parser.add_argument("reverse", nargs="?", type=int, default=0)
    parser.add_argument("source", nargs="?", type=int, default=0)
    ns = parser.parse_args(args)
    graph = _load(ns.graph)
    if graph is None:
        return 1
    _print_meta(graph)
    try:
        with Timer("bc") as timer:
            scores = bc_solver(graph, ns.source)
    except IndexError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"runtime [bc] = {timer.seconds()} sec")
    print("Verifying...")
    expected = bc_verifier(graph, ns.source, 1)
    print("Correct" if check_almost_equal(scores, expected) else "POSSIBLE FAILURE")
    return 0


def coloring_main(argv: Sequence[str] | None = None) -> int:
    """Greedy vertex colouring; prints the number of colours used."""
    args = _argv(argv)
    if not args:
        print("Usage: coloring <graph> [oriented(1)] [--algorithm serial|ldf|speculative]")
        return 1
    print("Vertex Coloring")
    parser = argparse.ArgumentParser(prog="coloring")
    parser.add_argument("graph")
    parser.add_argument("oriented", nargs="?", type=int, default=1)
    parser.add_argument("--algorithm", choices=sorted(_COLORING_ALGORITHMS), default="serial")
    ns = parser.parse_args(args)
    graph = _load(ns.graph)
    if graph is None:
        return 1
    _print_meta(graph)
    with Timer(ns.algorithm) as timer:
        colors = _COLORING_ALGORITHMS[ns.algorithm](graph)
    print(f"runtime [{ns.algorithm}] = {timer.seconds()} sec")
    print(f"total_num_colors = {num_colors(colors)}")
    return 0


def clustering_main(argv: Sequence[str] | None = None) -> int:
    """Hierarchical agglomerative clustering of a weighted graph."""
    parser = argparse.ArgumentParser(prog="clustering")
    parser.add_argument("graph")
    parser.add_argument("--linkage", default="complete")
    parser.add_argument("--nn-chain", action="store_true", help="use nearest-neighbour chains")
    parser.add_argument("--dissimilarity", action="store_true")
    parser.add_argument("-o", "--output", default="")
    ns = parser.parse_args(_argv(argv))
    graph = _load(ns.graph)
    if graph is None:
        return 1
    heap_based = not ns.nn_chain
    print("### Application: HAC")
    _print_meta(graph)
    print(f"### Params: heap-based = {int(heap_based)} linkage = {ns.linkage}")
    print("### ------------------------------------")
    try:
        with Timer("hac") as timer:
            weights, dendrogram = run_hac(graph, ns.linkage, not ns.dissimilarity, heap_based)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"### Running Time: {timer.seconds()}")
    if ns.output:
        write_dendrogram(weights, dendrogram, ns.output)
    return 0


_COMMANDS = {
    "centrality": centrality_main,
    "coloring": coloring_main,
    "clustering": clustering_main,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the graph kernels named by the first argument."""
    parser = argparse.ArgumentParser(prog="graphbench")
    parser.add_argument("command", choices=sorted(_COMMANDS))
    parser.add_argument("args", nargs=argparse.REMAINDER)
    ns = parser.parse_args(_argv(argv))
    return _COMMANDS[ns.command](ns.args)


if __name__ == "__main__":
    sys.exit(main())