"""cliquegraph: capability-based graph views and maximal clique enumeration.

Algorithms are written against structural graph protocols, so they run over
any conforming representation, including node-filtered views that nest.

Primary API:
    build_filtered_view() - Wrap a graph in a read-only node-filtered view
    build_adjacency_oracle() - Precompute an O(1) adjacency matrix
    enumerate_maximal_cliques() - All maximal cliques (Bron–Kerbosch)
    NxGraph, from_edges() - Capability adapter over NetworkX graphs

Example:
    from cliquegraph import enumerate_maximal_cliques, build_filtered_view, from_edges

    graph = from_edges(range(6), [(0, 1), (0, 4), (1, 4), (1, 2), (2, 3), (3, 4), (4, 5)])
    cliques = enumerate_maximal_cliques(graph)

    # Same algorithm, restricted subgraph
    view = build_filtered_view(graph, {0, 1, 2, 4})
    sub_cliques = enumerate_maximal_cliques(view)
"""

from __future__ import annotations

from cliquegraph import logging
from cliquegraph._version import __version__
from cliquegraph.algorithms.adjacency import AdjacencyMatrix, build_adjacency_oracle
from cliquegraph.algorithms.cliques import (
    SearchStats,
    enumerate_maximal_cliques,
    enumerate_maximal_cliques_parallel,
    iter_maximal_cliques,
)
from cliquegraph.config import CLIQUE_CONFIG, CliqueConfig
from cliquegraph.exceptions import (
    CapacityExceeded,
    CliqueGraphError,
    EnumerationCancelled,
    InvalidNodeId,
)
from cliquegraph.graph.filter import (
    BitSetFilter,
    Filtered,
    FnFilter,
    HashSetFilter,
    NodeFilter,
    build_filtered_view,
)
from cliquegraph.graph.nx import NxGraph, from_edges
from cliquegraph.graph.protocols import Graph
from cliquegraph.graph.visit import FixedBitSet, HashSetVisitMap
from cliquegraph.types.base import Clique, Direction, NodeID

__all__ = [
    # Version
    "__version__",
    # Graph capabilities and views
    "Graph",
    "Direction",
    "NodeID",
    "Filtered",
    "NodeFilter",
    "FnFilter",
    "BitSetFilter",
    "HashSetFilter",
    "FixedBitSet",
    "HashSetVisitMap",
    "build_filtered_view",
    # Adapters
    "NxGraph",
    "from_edges",
    # Algorithms
    "AdjacencyMatrix",
    "build_adjacency_oracle",
    "Clique",
    "SearchStats",
    "enumerate_maximal_cliques",
    "enumerate_maximal_cliques_parallel",
    "iter_maximal_cliques",
    # Configuration and errors
    "CliqueConfig",
    "CLIQUE_CONFIG",
    "CliqueGraphError",
    "InvalidNodeId",
    "CapacityExceeded",
    "EnumerationCancelled",
    # Utilities
    "logging",
]
