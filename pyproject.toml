[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphbench"
version = "0.1.0"
description = "Graph analytics kernels: betweenness centrality, vertex coloring and hierarchical agglomerative clustering over CSR graphs"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "csr", "betweenness-centrality", "graph-coloring", "clustering", "hac", "dendrogram"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
graphbench = "graphbench.cli:main"
graphbench-centrality = "graphbench.cli:centrality_main"
graphbench-coloring = "graphbench.cli:coloring_main"
graphbench-clustering = "graphbench.cli:clustering_main"

[tool.hatch.build.targets.wheel]
packages = ["graphbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
