"""Base types shared by graph capabilities and algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import FrozenSet, Hashable

#: Opaque node identifier; hashable and mapped to a dense index by the graph.
NodeID = Hashable

#: A clique is an unordered set of node identifiers.
Clique = FrozenSet[NodeID]


class Direction(IntEnum):
    """Edge direction for direction-qualified neighbor queries."""

    #: Edges leaving the node (successors).
    OUTGOING = 0
    #: Edges entering the node (predecessors).
    INCOMING = 1

    def opposite(self) -> "Direction":
        """Return the reverse direction."""
        return Direction.INCOMING if self is Direction.OUTGOING else Direction.OUTGOING
