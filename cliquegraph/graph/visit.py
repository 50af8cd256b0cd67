"""Visit maps: mutable node-membership sets.

``FixedBitSet`` addresses a numpy boolean array through the owning graph's
dense index; ``HashSetVisitMap`` stores node identifiers directly. Both are
returned by ``visit_map()`` implementations and both can back a node filter.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional, Set

import numpy as np

from cliquegraph.exceptions import InvalidNodeId
from cliquegraph.types.base import NodeID

__all__ = ["FixedBitSet", "HashSetVisitMap"]


def _identity(node: NodeID) -> int:
    try:
        return int(node)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise InvalidNodeId(node, f"Node '{node}' is not an integer index.") from None


class FixedBitSet:
    """Fixed-size bit set over a dense index space.

    Args:
        size: Number of addressable indices.
        to_index: Maps a node identifier to its dense index. Defaults to
            ``int(node)`` for graphs whose identifiers are already indices.
    """

    __slots__ = ("_bits", "_to_index")

    def __init__(
        self, size: int, to_index: Optional[Callable[[NodeID], int]] = None
    ) -> None:
        if size < 0:
            raise ValueError(f"Bit set size must be non-negative, got {size}.")
        self._bits = np.zeros(size, dtype=bool)
        self._to_index = to_index or _identity

    @classmethod
    def from_nodes(
        cls,
        size: int,
        nodes: Iterable[NodeID],
        to_index: Optional[Callable[[NodeID], int]] = None,
    ) -> "FixedBitSet":
        """Create a bit set with ``nodes`` already visited."""
        bits = cls(size, to_index)
        for node in nodes:
            bits.visit(node)
        return bits

    def _index(self, node: NodeID) -> int:
        index = self._to_index(node)
        if not 0 <= index < self._bits.shape[0]:
            raise InvalidNodeId(
                node,
                f"Index {index} of node '{node}' is outside [0, {self._bits.shape[0]}).",
            )
        return index

    @property
    def size(self) -> int:
        return int(self._bits.shape[0])

    def visit(self, node: NodeID) -> bool:
        index = self._index(node)
        was_set = bool(self._bits[index])
        self._bits[index] = True
        return not was_set

    def is_visited(self, node: NodeID) -> bool:
        return bool(self._bits[self._index(node)])

    def clear(self) -> None:
        self._bits[:] = False

    def ones(self) -> Iterator[int]:
        """Iterate over set indices in ascending order."""
        return (int(i) for i in np.flatnonzero(self._bits))

    def __contains__(self, node: NodeID) -> bool:
        return self.is_visited(node)

    def __len__(self) -> int:
        return int(np.count_nonzero(self._bits))

    def __repr__(self) -> str:
        return f"FixedBitSet(size={self.size}, set={len(self)})"


class HashSetVisitMap:
    """Visit map backed by a Python set of node identifiers."""

    __slots__ = ("_seen",)

    def __init__(self, nodes: Iterable[NodeID] = ()) -> None:
        self._seen: Set[NodeID] = set(nodes)

    def visit(self, node: NodeID) -> bool:
        if node in self._seen:
            return False
        self._seen.add(node)
        return True

    def is_visited(self, node: NodeID) -> bool:
        return node in self._seen

    def include_node(self, node: NodeID) -> bool:
        """Filter hook: a visited node is included in a view."""
        return node in self._seen

    def clear(self) -> None:
        self._seen.clear()

    def __contains__(self, node: NodeID) -> bool:
        return node in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self._seen)

    def __repr__(self) -> str:
        return f"HashSetVisitMap({len(self._seen)} nodes)"
