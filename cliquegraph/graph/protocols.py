"""Graph capability protocols.

Algorithms in this package are written against these structural interfaces
rather than a concrete graph class. Any object providing the methods
satisfies a protocol; no inheritance is required. This is what lets a
``Filtered`` view stand in for the graph it wraps, including nested views.

Capabilities:
    IntoNodeIdentifiers: restartable iteration over all node identifiers.
    IntoNeighbors: successors (directed) or incident nodes (undirected).
    IntoNeighborsDirected: direction-qualified neighbors.
    GraphProp: ``is_directed`` flag.
    NodeIndexable: bijection between node identifiers and ``[0, node_bound)``.
    Visitable: fresh visit maps sized to the index space.
    GetAdjacencyMatrix: optional precomputed adjacency structure.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, runtime_checkable

from cliquegraph.types.base import Direction, NodeID

__all__ = [
    "VisitMap",
    "IntoNodeIdentifiers",
    "IntoNeighbors",
    "IntoNeighborsDirected",
    "GraphProp",
    "NodeIndexable",
    "Visitable",
    "GetAdjacencyMatrix",
    "Graph",
    "IndexedGraph",
]


@runtime_checkable
class VisitMap(Protocol):
    """Mutable membership set used for visited-node bookkeeping."""

    def visit(self, node: NodeID) -> bool:
        """Mark ``node`` visited; return True if it was not visited before."""
        ...

    def is_visited(self, node: NodeID) -> bool: ...


@runtime_checkable
class IntoNodeIdentifiers(Protocol):
    def node_identifiers(self) -> Iterator[NodeID]:
        """Return a fresh iterator over all node identifiers."""
        ...


@runtime_checkable
class IntoNeighbors(Protocol):
    def neighbors(self, node: NodeID) -> Iterator[NodeID]:
        """Return nodes directly reachable from ``node``."""
        ...


@runtime_checkable
class IntoNeighborsDirected(Protocol):
    def neighbors_directed(
        self, node: NodeID, direction: Direction
    ) -> Iterator[NodeID]: ...


@runtime_checkable
class GraphProp(Protocol):
    @property
    def is_directed(self) -> bool: ...


@runtime_checkable
class NodeIndexable(Protocol):
    def node_bound(self) -> int:
        """Return an upper bound (exclusive) on node indices."""
        ...

    def to_index(self, node: NodeID) -> int: ...

    def from_index(self, index: int) -> NodeID: ...


@runtime_checkable
class Visitable(Protocol):
    def visit_map(self) -> VisitMap:
        """Return a fresh, empty visit map sized to ``node_bound``."""
        ...

    def reset_map(self, visit_map: Any) -> None: ...


@runtime_checkable
class GetAdjacencyMatrix(Protocol):
    def adjacency_matrix(self) -> Any: ...

    def is_adjacent(self, matrix: Any, a: NodeID, b: NodeID) -> bool: ...


@runtime_checkable
class IndexedGraph(IntoNodeIdentifiers, IntoNeighbors, NodeIndexable, Protocol):
    """Minimum needed to build an adjacency oracle or enumerate cliques."""


@runtime_checkable
class Graph(
    IntoNodeIdentifiers,
    IntoNeighbors,
    IntoNeighborsDirected,
    GraphProp,
    NodeIndexable,
    Visitable,
    Protocol,
):
    """The full capability contract shared by graphs and graph views."""
