"""Graph algorithms written against the capability protocols."""

from cliquegraph.algorithms.adjacency import AdjacencyMatrix, build_adjacency_oracle
from cliquegraph.algorithms.cliques import (
    SearchStats,
    enumerate_maximal_cliques,
    enumerate_maximal_cliques_parallel,
    iter_maximal_cliques,
)

__all__ = [
    "AdjacencyMatrix",
    "SearchStats",
    "build_adjacency_oracle",
    "enumerate_maximal_cliques",
    "enumerate_maximal_cliques_parallel",
    "iter_maximal_cliques",
]
