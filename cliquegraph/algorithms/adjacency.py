"""Dense adjacency oracle for O(1) edge queries.

The oracle is a square boolean numpy matrix over the graph's dense index
space. Entry ``(i, j)`` is set iff ``from_index(j)`` appears in
``neighbors(from_index(i))``. No symmetric closure is applied: for directed
graphs the matrix records direction, for undirected graphs symmetry comes
from ``neighbors`` itself.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import numpy as np

from cliquegraph.config import CLIQUE_CONFIG, CliqueConfig
from cliquegraph.exceptions import CapacityExceeded, InvalidNodeId
from cliquegraph.logging import get_logger
from cliquegraph.types.base import NodeID

__all__ = ["AdjacencyMatrix", "build_adjacency_oracle"]

logger = get_logger(__name__)


class AdjacencyMatrix:
    """Immutable adjacency oracle.

    Args:
        matrix: Square boolean array; made read-only on construction.
        to_index: Maps node identifiers to row/column indices.
    """

    __slots__ = ("_matrix", "_to_index")

    def __init__(self, matrix: np.ndarray, to_index: Callable[[NodeID], int]) -> None:
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got {matrix.shape}.")
        matrix = np.array(matrix, dtype=bool)
        matrix.flags.writeable = False
        self._matrix = matrix
        self._to_index = to_index

    @property
    def node_bound(self) -> int:
        return int(self._matrix.shape[0])

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the underlying boolean matrix."""
        return self._matrix

    @property
    def edge_count(self) -> int:
        """Number of directed entries set in the matrix."""
        return int(np.count_nonzero(self._matrix))

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._matrix.shape[0]:
            raise InvalidNodeId(
                index, f"Index {index} is outside [0, {self._matrix.shape[0]})."
            )
        return index

    def is_adjacent_index(self, i: int, j: int) -> bool:
        """Return True if the edge ``i -> j`` exists, by dense index."""
        return bool(self._matrix[self._check_index(i), self._check_index(j)])

    def is_adjacent(self, u: NodeID, v: NodeID) -> bool:
        """Return True if the edge ``u -> v`` exists."""
        return self.is_adjacent_index(self._to_index(u), self._to_index(v))

    def is_mutually_adjacent(self, u: NodeID, v: NodeID) -> bool:
        """Return True if both ``u -> v`` and ``v -> u`` exist."""
        i = self._check_index(self._to_index(u))
        j = self._check_index(self._to_index(v))
        return bool(self._matrix[i, j] and self._matrix[j, i])

    def __repr__(self) -> str:
        return f"AdjacencyMatrix(node_bound={self.node_bound}, edges={self.edge_count})"


def build_adjacency_oracle(
    graph: Any, *, config: Optional[CliqueConfig] = None
) -> AdjacencyMatrix:
    """Build an adjacency oracle from any indexable graph or graph view.

    Args:
        graph: Object providing ``node_identifiers``, ``neighbors``,
            ``node_bound`` and ``to_index``.
        config: Limits to apply; defaults to ``CLIQUE_CONFIG``.

    Returns:
        AdjacencyMatrix sized ``node_bound x node_bound``.

    Raises:
        CapacityExceeded: If ``node_bound`` exceeds the configured limit.
        InvalidNodeId: If the graph yields a node whose index is out of range.
    """
    cfg = config or CLIQUE_CONFIG
    bound = graph.node_bound()
    limit = cfg.oracle_limit()
    if bound > limit:
        raise CapacityExceeded(bound, limit)

    start = time.perf_counter()
    matrix = np.zeros((bound, bound), dtype=bool)
    to_index = graph.to_index
    for u in graph.node_identifiers():
        i = to_index(u)
        if not 0 <= i < bound:
            raise InvalidNodeId(u, f"Index {i} of node '{u}' is outside [0, {bound}).")
        for v in graph.neighbors(u):
            j = to_index(v)
            if not 0 <= j < bound:
                raise InvalidNodeId(
                    v, f"Index {j} of node '{v}' is outside [0, {bound})."
                )
            matrix[i, j] = True

    oracle = AdjacencyMatrix(matrix, to_index)
    logger.debug(
        "Built adjacency oracle: node_bound=%d entries=%d in %.6fs",
        bound,
        oracle.edge_count,
        time.perf_counter() - start,
    )
    return oracle
