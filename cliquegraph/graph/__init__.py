"""Graph capability protocols, views and adapters.

This package defines the structural capability contract (`protocols`), visit
maps (`visit`), node-filtered views (`filter`) and the NetworkX adapter
(`nx`).
"""

from cliquegraph.graph.filter import (
    BitSetFilter,
    Filtered,
    FilteredNeighbors,
    FnFilter,
    HashSetFilter,
    NodeFilter,
    as_node_filter,
    build_filtered_view,
)
from cliquegraph.graph.nx import NodeMap, NxGraph, from_edges
from cliquegraph.graph.protocols import Graph, IndexedGraph
from cliquegraph.graph.visit import FixedBitSet, HashSetVisitMap

__all__ = [
    "BitSetFilter",
    "Filtered",
    "FilteredNeighbors",
    "FixedBitSet",
    "FnFilter",
    "Graph",
    "HashSetFilter",
    "HashSetVisitMap",
    "IndexedGraph",
    "NodeFilter",
    "NodeMap",
    "NxGraph",
    "as_node_filter",
    "build_filtered_view",
    "from_edges",
]
