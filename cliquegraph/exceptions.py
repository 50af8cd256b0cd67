"""Exceptions raised by cliquegraph.

All errors signal caller mistakes (contract violations) rather than transient
faults; nothing in the library retries.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Hashable, Optional, Set


class CliqueGraphError(Exception):
    """Base class for cliquegraph errors."""


class InvalidNodeId(CliqueGraphError, KeyError):
    """A node identifier or dense index is not part of the graph.

    Attributes:
        node: The offending node identifier or index.
    """

    def __init__(self, node: Any, message: Optional[str] = None) -> None:
        self.node = node
        super().__init__(message or f"Node '{node}' is not part of this graph.")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class CapacityExceeded(CliqueGraphError, ValueError):
    """The graph is too large for a dense adjacency oracle.

    Attributes:
        node_bound: Requested index space size.
        limit: Largest supported index space size.
    """

    def __init__(self, node_bound: int, limit: int) -> None:
        self.node_bound = node_bound
        self.limit = limit
        super().__init__(
            f"Graph index space of {node_bound} nodes exceeds the oracle limit "
            f"of {limit} nodes."
        )


class EnumerationCancelled(CliqueGraphError):
    """Raised when a cooperative stop check ends an enumeration early.

    Attributes:
        partial: Maximal cliques emitted before the stop was observed. Each one
            is a genuine maximal clique; the collection is incomplete.
    """

    def __init__(self, partial: Set[FrozenSet[Hashable]]) -> None:
        self.partial = partial
        super().__init__(
            f"Clique enumeration cancelled after {len(partial)} cliques."
        )
