# graphbench

Graph analytics kernels on graphs held in compressed sparse row (CSR) form:

- **Betweenness centrality** from one source vertex (Brandes' algorithm),
  with a serial reference computation to check the result against.
- **Vertex coloring**: greedy first-fit in vertex order, the same on a
  degree-oriented graph ("ldf"), and a speculative color-then-resolve
  variant.
- **Hierarchical agglomerative clustering (HAC)** with single, complete,
  weighted-average, normalized-average and approximate-average linkage,
  driven by nearest-neighbour chains or by a map of each cluster's best
  edge. The result is a dendrogram of parent pointers.

It needs nothing beyond the Python standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Input format

`graphbench.graph.load_edgelist` reads a plain edge list, one edge per
line: two vertex ids and an optional weight (an integer or a float),
separated by whitespace. Lines starting with `#` or `%` are skipped, and
either every edge line carries a weight or none does. The number of
vertices is the largest id plus one. Unless `directed=True` is given, each
edge is stored in both directions. Neighbour lists are sorted.

```
# src dst [weight]
0 1 3
1 2 5
2 0 1
```

Clustering needs a weighted graph; the edge weights are its initial
similarities (or dissimilarities).

## Command line

```
graphbench-centrality graph.txt
graphbench-coloring graph.txt
graphbench-clustering graph.txt
```

The `graphbench` command runs the same three as sub-commands:

```
graphbench centrality graph.txt
graphbench coloring graph.txt
graphbench clustering graph.txt
```

- `centrality <graph> [num_gpu] [chunk_size] [symmetrize] [reverse] [source]`
  computes normalized scores from `source` (default 0) and prints `Correct`
  or `POSSIBLE FAILURE` after comparing them with the reference
  computation. The four positions before `source` are accepted but have no
  effect.
- `coloring <graph> [oriented] [--algorithm serial|ldf|speculative]`
  prints `total_num_colors`. The `oriented` position is accepted but has no
  effect; use `--algorithm ldf` for the oriented variant.
- `clustering <graph> [--linkage NAME] [--nn-chain] [--dissimilarity] [-o FILE]`
  clusters with the heap-based method unless `--nn-chain` is given.
  `NAME` is `complete` (default), `single`, `weightedavg`, `normalizedavg`
  or `avg`; `avg` works only with the heap-based method. With `-o`, the
  merges are written as `child parent weight` lines.

## Library use

```python
from graphbench.graph import Graph, load_edgelist
from graphbench.centrality import bc_solver, bc_verifier, check_almost_equal
from graphbench.coloring import color_serial, num_colors, is_valid_coloring
from graphbench.linkage import MinLinkage, ClusteringType
from graphbench.hac import nn_chain_hac

g = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3)], weights=[3, 5, 1])

scores = bc_solver(g, 0)
assert check_almost_equal(scores, bc_verifier(g, 0))

colors = color_serial(g)
assert is_valid_coloring(g, colors)
print(num_colors(colors))

weights = MinLinkage(g, ClusteringType.SIMILARITY)
dendrogram = nn_chain_hac(g, weights)
```

Centrality scores are divided by the largest score; if every score is zero
they come back as NaN.

A dendrogram is a list indexed by cluster id of `(parent, weight)` pairs;
the root's parent is `None`. Clusters `0 .. n-1` are the vertices and each
merge creates a new id. Separate components are joined under new clusters
carrying the linkage's identity weight.

`graphbench.cli.run_hac(graph, linkage, similarity, heap_based)` picks the
linkage by name and returns the weights object and the dendrogram;
`graphbench.cli.write_dendrogram(weights, dendrogram, path)` writes it out.
`graphbench.avg_linkage.approx_average_hac` runs approximate average
linkage directly, with an `epsilon` that controls how often cluster weights
are refreshed.

Smaller helpers:

- `graphbench.prefix`: `prefix_sum`, `split`, `parse_symmetric_size`,
  reservoir sampling (`select_k_items`) and weighted choice
  (`select_one_item`).
- `graphbench.sliding_queue`: `SlidingQueue`, a double-buffered queue, and
  `QueueBuffer` for bulk appends to it.
- `graphbench.timer`: `Timer`, usable as a context manager, and `time_this`.
- `graphbench.unary_decoder`: `UnaryDecoder` reads gamma and zeta codes
  from a bit stream packed into 32-bit words.

## What it does not do

- Graphs are read only from text edge lists; there is no binary CSR file
  format, and graphs are not written back to disk.
- There is no compressed graph storage: `UnaryDecoder` decodes codes, but
  nothing in the package encodes a graph or builds neighbour lists from a
  compressed stream.
- Everything runs serially in one process; there is no GPU or multi-thread
  execution and no graph partitioning.