"""Graph analytics kernels on CSR graphs: centrality, coloring and hierarchical clustering."""

__version__ = "0.1.0"

__all__ = [
    "avg_linkage",
    "centrality",
    "cli",
    "clustered_graph",
    "coloring",
    "graph",
    "hac",
    "linkage",
    "prefix",
    "sliding_queue",
    "timer",
    "unary_decoder",
]