"""NetworkX adapter implementing the graph capability protocols.

``NxGraph`` wraps a NetworkX graph without copying its edges. Node identifiers
are the NetworkX nodes themselves; dense indices follow ``G.nodes()``
insertion order and are fixed when the adapter is created.

Example:
    >>> import networkx as nx
    >>> from cliquegraph.graph.nx import NxGraph
    >>>
    >>> G = nx.Graph([("a", "b"), ("b", "c")])
    >>> graph = NxGraph(G)
    >>> graph.to_index("b")
    1
    >>> list(graph.neighbors("b"))
    ['a', 'c']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, Iterator, List, Tuple

import numpy as np

from cliquegraph.exceptions import InvalidNodeId
from cliquegraph.graph.visit import FixedBitSet
from cliquegraph.types.base import Direction, NodeID

if TYPE_CHECKING:
    import networkx as nx

__all__ = ["NodeMap", "NxGraph", "from_edges"]


@dataclass
class NodeMap:
    """Bidirectional mapping between node identifiers and dense indices.

    Attributes:
        to_index: Maps node identifiers to integer indices.
        to_name: Index-ordered list of node identifiers.
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: List[Hashable] = field(default_factory=list)

    @classmethod
    def from_names(cls, names: Iterable[Hashable]) -> "NodeMap":
        """Create a NodeMap from node identifiers in index order."""
        to_name = list(names)
        to_index = {name: i for i, name in enumerate(to_name)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_name)


class NxGraph:
    """Capability adapter over a NetworkX ``Graph``/``DiGraph``.

    Multigraphs are accepted; parallel edges collapse to a single neighbor.
    The wrapped graph must not gain or lose nodes while the adapter is in use,
    since the index bijection is captured at construction.

    Args:
        G: NetworkX graph (Graph, DiGraph, MultiGraph or MultiDiGraph).

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
    """

    def __init__(self, G: "nx.Graph") -> None:
        import networkx as nx

        if not isinstance(G, nx.Graph):
            raise TypeError(f"Expected NetworkX graph, got {type(G).__name__}")
        self._G = G
        self._node_map = NodeMap.from_names(G.nodes())

    @property
    def nx_graph(self) -> "nx.Graph":
        return self._G

    @property
    def node_map(self) -> NodeMap:
        return self._node_map

    def _check(self, node: NodeID) -> None:
        if node not in self._node_map.to_index:
            raise InvalidNodeId(node)

    # GraphProp

    @property
    def is_directed(self) -> bool:
        return self._G.is_directed()

    # IntoNodeIdentifiers / IntoNeighbors / IntoNeighborsDirected

    def node_identifiers(self) -> Iterator[NodeID]:
        return iter(self._node_map.to_name)

    def neighbors(self, node: NodeID) -> Iterator[NodeID]:
        self._check(node)
        # For DiGraph, G.neighbors is G.successors
        return iter(self._G.neighbors(node))

    def neighbors_directed(
        self, node: NodeID, direction: Direction
    ) -> Iterator[NodeID]:
        self._check(node)
        if self.is_directed and direction == Direction.INCOMING:
            return iter(self._G.predecessors(node))
        return iter(self._G.neighbors(node))

    # NodeIndexable

    def node_bound(self) -> int:
        return len(self._node_map)

    def to_index(self, node: NodeID) -> int:
        try:
            return self._node_map.to_index[node]
        except (KeyError, TypeError):
            raise InvalidNodeId(node) from None

    def from_index(self, index: int) -> NodeID:
        if not 0 <= index < len(self._node_map):
            raise InvalidNodeId(
                index, f"Index {index} is outside [0, {len(self._node_map)})."
            )
        return self._node_map.to_name[index]

    # Visitable

    def visit_map(self) -> FixedBitSet:
        return FixedBitSet(self.node_bound(), self.to_index)

    def reset_map(self, visit_map: Any) -> None:
        visit_map.clear()

    # GetAdjacencyMatrix

    def adjacency_matrix(self) -> np.ndarray:
        """Return a dense boolean matrix; entry ``(i, j)`` marks an edge ``i -> j``."""
        n = self.node_bound()
        matrix = np.zeros((n, n), dtype=bool)
        for u, v in self._G.edges():
            i, j = self.to_index(u), self.to_index(v)
            matrix[i, j] = True
            if not self.is_directed:
                matrix[j, i] = True
        return matrix

    def is_adjacent(self, matrix: np.ndarray, a: NodeID, b: NodeID) -> bool:
        return bool(matrix[self.to_index(a), self.to_index(b)])

    def __repr__(self) -> str:
        kind = "directed" if self.is_directed else "undirected"
        return (
            f"NxGraph({kind}, nodes={self._G.number_of_nodes()}, "
            f"edges={self._G.number_of_edges()})"
        )


def from_edges(
    nodes: Iterable[NodeID],
    edges: Iterable[Tuple[NodeID, NodeID]],
    *,
    directed: bool = False,
) -> NxGraph:
    """Build an ``NxGraph`` from explicit node and edge lists.

    Nodes are indexed in the order given. Edges may only reference listed
    nodes.

    Raises:
        InvalidNodeId: If an edge endpoint is not in ``nodes``.
    """
    import networkx as nx

    G = nx.DiGraph() if directed else nx.Graph()
    G.add_nodes_from(nodes)
    for u, v in edges:
        for endpoint in (u, v):
            if endpoint not in G:
                raise InvalidNodeId(endpoint)
        G.add_edge(u, v)
    return NxGraph(G)
