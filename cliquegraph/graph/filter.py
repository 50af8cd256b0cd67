"""Node-filtered, read-only views of graphs.

A ``Filtered`` view pairs a base graph with a node filter and re-exposes the
base graph's capabilities by delegation. Sequence capabilities
(``node_identifiers``, ``neighbors``, ``neighbors_directed``) are narrowed to
included nodes; indexing, directedness and visit maps pass through unchanged,
so the view shares the base graph's index space. Because a view satisfies
the same protocols as its base, views nest to any depth.

Example:
    >>> view = build_filtered_view(graph, {0, 1, 4})
    >>> list(view.node_identifiers())
    [0, 1, 4]
    >>> inner = build_filtered_view(view, lambda n: n != 4)
    >>> list(inner.node_identifiers())
    [0, 1]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    AbstractSet,
    Any,
    Callable,
    Iterable,
    Iterator,
    Protocol,
    Union,
    runtime_checkable,
)

from cliquegraph.graph.visit import FixedBitSet
from cliquegraph.types.base import Direction, NodeID

__all__ = [
    "NodeFilter",
    "FnFilter",
    "BitSetFilter",
    "HashSetFilter",
    "as_node_filter",
    "FilteredNeighbors",
    "Filtered",
    "build_filtered_view",
]


@runtime_checkable
class NodeFilter(Protocol):
    """Decides whether a node participates in a view.

    Implementations must be total and must not change their answer while a
    traversal over the view is in progress.
    """

    def include_node(self, node: NodeID) -> bool: ...


@dataclass(frozen=True)
class FnFilter:
    """Include nodes for which ``fn(node)`` is truthy."""

    fn: Callable[[NodeID], bool]

    def include_node(self, node: NodeID) -> bool:
        return bool(self.fn(node))


@dataclass(frozen=True)
class BitSetFilter:
    """Include nodes whose bit is set in a ``FixedBitSet``."""

    bits: FixedBitSet

    def include_node(self, node: NodeID) -> bool:
        return self.bits.is_visited(node)


@dataclass(frozen=True)
class HashSetFilter:
    """Include nodes contained in a set."""

    nodes: AbstractSet[NodeID]

    def include_node(self, node: NodeID) -> bool:
        return node in self.nodes


Predicate = Union[NodeFilter, FixedBitSet, AbstractSet[NodeID], Callable[[NodeID], bool]]


def as_node_filter(predicate: Predicate) -> NodeFilter:
    """Coerce a predicate into a ``NodeFilter``.

    Args:
        predicate: A ``NodeFilter`` (a ``HashSetVisitMap`` is one), a
            ``FixedBitSet``, a set of nodes, or a callable taking a node and
            returning a bool.

    Returns:
        The matching filter adapter (or ``predicate`` itself if it already
        implements ``include_node``).

    Raises:
        TypeError: If ``predicate`` matches none of the supported forms.
    """
    if isinstance(predicate, NodeFilter):
        return predicate
    if isinstance(predicate, FixedBitSet):
        return BitSetFilter(predicate)
    if isinstance(predicate, AbstractSet):
        return HashSetFilter(predicate)
    if callable(predicate):
        return FnFilter(predicate)
    raise TypeError(
        f"Expected a NodeFilter, FixedBitSet, set or callable, "
        f"got {type(predicate).__name__}"
    )


class FilteredNeighbors:
    """Lazy iterator yielding the items of ``iterable`` that pass a filter.

    When ``include_source`` is False the iterator is empty regardless of
    ``iterable``: an excluded node contributes no edges.
    """

    __slots__ = ("_include_source", "_iter", "_filter")

    def __init__(
        self, include_source: bool, iterable: Iterable[NodeID], node_filter: NodeFilter
    ) -> None:
        self._include_source = include_source
        self._iter = iter(iterable)
        self._filter = node_filter

    def __iter__(self) -> "FilteredNeighbors":
        return self

    def __next__(self) -> NodeID:
        if not self._include_source:
            raise StopIteration
        include = self._filter.include_node
        for node in self._iter:
            if include(node):
                return node
        raise StopIteration


@dataclass(frozen=True)
class Filtered:
    """Read-only view of ``base`` restricted to nodes passing ``node_filter``.

    The view owns no node or edge storage and must not outlive ``base``.
    Mutating ``base`` while iterating the view is undefined.

    Attributes:
        base: Wrapped graph (any object implementing the capability protocols,
            including another ``Filtered``).
        node_filter: Inclusion predicate.
    """

    base: Any
    node_filter: NodeFilter

    # Sequence capabilities: narrowed by the filter

    def node_identifiers(self) -> Iterator[NodeID]:
        return FilteredNeighbors(True, self.base.node_identifiers(), self.node_filter)

    def neighbors(self, node: NodeID) -> Iterator[NodeID]:
        return FilteredNeighbors(
            self.node_filter.include_node(node),
            self.base.neighbors(node),
            self.node_filter,
        )

    def neighbors_directed(
        self, node: NodeID, direction: Direction
    ) -> Iterator[NodeID]:
        return FilteredNeighbors(
            self.node_filter.include_node(node),
            self.base.neighbors_directed(node, direction),
            self.node_filter,
        )

    def include_node(self, node: NodeID) -> bool:
        """Return True if ``node`` passes this view's filter."""
        return self.node_filter.include_node(node)

    # Delegated capabilities: unchanged index space and directedness

    @property
    def is_directed(self) -> bool:
        return self.base.is_directed

    def node_bound(self) -> int:
        return self.base.node_bound()

    def to_index(self, node: NodeID) -> int:
        return self.base.to_index(node)

    def from_index(self, index: int) -> NodeID:
        return self.base.from_index(index)

    def visit_map(self) -> Any:
        return self.base.visit_map()

    def reset_map(self, visit_map: Any) -> None:
        self.base.reset_map(visit_map)


def build_filtered_view(base: Any, predicate: Predicate) -> Filtered:
    """Wrap ``base`` in a node-filtered view.

    Args:
        base: Graph or graph view implementing the capability protocols.
        predicate: Anything accepted by ``as_node_filter``.

    Returns:
        A ``Filtered`` view satisfying the same capabilities as ``base``.
    """
    return Filtered(base, as_node_filter(predicate))
