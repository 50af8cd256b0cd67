"""Maximal clique enumeration (Bron–Kerbosch).

Enumerates every inclusion-maximal set of mutually adjacent nodes. Two nodes
``u`` and ``v`` are clique-adjacent iff the adjacency oracle holds both
``u -> v`` and ``v -> u``. For undirected graphs this only confirms what
``neighbors`` already reports; for directed graphs it restricts cliques to
mutual edges, so a node with only one-way edges forms a singleton clique.

The search keeps three disjoint sets per level: ``R`` (committed members),
``P`` (candidates) and ``X`` (candidates already explored at this level).
``R`` is emitted when ``P`` and ``X`` are both empty. After a candidate's
branch is explored it moves from ``P`` to ``X``, which is what keeps a
maximal clique from being reported twice.

Candidates are visited in ascending dense-index order. With pivoting enabled
the search branches only on candidates outside the neighborhood of a pivot
``u`` chosen from ``P ∪ X`` to maximize ``|P ∩ N(u)|``; this prunes the
search tree without changing the result set.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
)

from cliquegraph.algorithms.adjacency import AdjacencyMatrix, build_adjacency_oracle
from cliquegraph.config import CLIQUE_CONFIG, CliqueConfig
from cliquegraph.exceptions import EnumerationCancelled
from cliquegraph.logging import get_logger
from cliquegraph.types.base import Clique, NodeID

__all__ = [
    "SearchStats",
    "enumerate_maximal_cliques",
    "enumerate_maximal_cliques_parallel",
    "iter_maximal_cliques",
]

logger = get_logger(__name__)

StopCheck = Callable[[], bool]
Branch = Tuple[FrozenSet[NodeID], Set[NodeID], Set[NodeID]]

_DONE = object()


@dataclass
class SearchStats:
    """Counters collected during one enumeration.

    Attributes:
        calls: Search nodes visited (including leaves).
        branches: Candidates expanded.
        cliques: Maximal cliques emitted.
    """

    calls: int = 0
    branches: int = 0
    cliques: int = 0

    def merge(self, other: "SearchStats") -> None:
        self.calls += other.calls
        self.branches += other.branches
        self.cliques += other.cliques


class _Cancelled(Exception):
    """Internal signal raised at a branch boundary when the stop check fires."""


class _CliqueSearch:
    """Backtracking state shared by one enumeration (or one worker)."""

    def __init__(
        self,
        graph: Any,
        oracle: AdjacencyMatrix,
        *,
        pivot: bool,
        should_stop: Optional[StopCheck],
        stats: SearchStats,
    ) -> None:
        self._graph = graph
        self._oracle = oracle
        self._pivot = pivot
        self._should_stop = should_stop
        self._index = graph.to_index
        self._neighbors: Dict[NodeID, FrozenSet[NodeID]] = {}
        self.stats = stats

    def clique_neighbors(self, v: NodeID) -> FrozenSet[NodeID]:
        """Return the structural neighbors of ``v`` that are clique-adjacent to it."""
        cached = self._neighbors.get(v)
        if cached is None:
            mutual = self._oracle.is_mutually_adjacent
            cached = frozenset(
                u for u in self._graph.neighbors(v) if u != v and mutual(u, v)
            )
            self._neighbors[v] = cached
        return cached

    def ordered(self, nodes: Iterable[NodeID]) -> List[NodeID]:
        return sorted(nodes, key=self._index)

    def candidates(self, P: Set[NodeID], X: Set[NodeID]) -> List[NodeID]:
        """Return the nodes of ``P`` to branch on, in deterministic order."""
        if not self._pivot or not P:
            return self.ordered(P)
        pivot = max(
            self.ordered(P | X),
            key=lambda u: len(P & self.clique_neighbors(u)),
        )
        return self.ordered(P - self.clique_neighbors(pivot))

    def check_stop(self) -> None:
        if self._should_stop is not None and self._should_stop():
            raise _Cancelled()

    def expand(
        self, R: FrozenSet[NodeID], P: Set[NodeID], X: Set[NodeID]
    ) -> Iterator[Clique]:
        """Recursive engine. ``P`` and ``X`` are consumed."""
        self.stats.calls += 1
        if not P and not X:
            self.stats.cliques += 1
            yield R
            return
        for v in self.candidates(P, X):
            self.check_stop()
            self.stats.branches += 1
            nv = self.clique_neighbors(v)
            yield from self.expand(R | {v}, P & nv, X & nv)
            P.discard(v)
            X.add(v)

    def expand_iterative(
        self, R: FrozenSet[NodeID], P: Set[NodeID], X: Set[NodeID]
    ) -> Iterator[Clique]:
        """Explicit-stack engine; emits the same cliques in the same order as ``expand``."""
        self.stats.calls += 1
        if not P and not X:
            self.stats.cliques += 1
            yield R
            return
        stack = [(R, P, X, iter(self.candidates(P, X)))]
        while stack:
            R, P, X, todo = stack[-1]
            v = next(todo, _DONE)
            if v is _DONE:
                stack.pop()
                continue
            self.check_stop()
            self.stats.branches += 1
            nv = self.clique_neighbors(v)
            child_R, child_P, child_X = R | {v}, P & nv, X & nv
            # v is not in nv, so moving it now leaves the child sets unchanged
            P.discard(v)
            X.add(v)
            self.stats.calls += 1
            if not child_P and not child_X:
                self.stats.cliques += 1
                yield child_R
            else:
                stack.append(
                    (child_R, child_P, child_X, iter(self.candidates(child_P, child_X)))
                )

    def run(
        self, R: FrozenSet[NodeID], P: Set[NodeID], X: Set[NodeID], iterative: bool
    ) -> Iterator[Clique]:
        if iterative:
            return self.expand_iterative(R, P, X)
        return self.expand(R, P, X)

    def top_level_branches(self, P: Set[NodeID]) -> List[Branch]:
        """Split the root of the search into independent branches.

        Mirrors one level of ``expand``: each branch gets the candidates and
        exclusions in effect when it would have been explored sequentially.
        """
        X: Set[NodeID] = set()
        branches: List[Branch] = []
        for v in self.candidates(P, X):
            nv = self.clique_neighbors(v)
            branches.append((frozenset((v,)), P & nv, X & nv))
            P.discard(v)
            X.add(v)
        return branches


def iter_maximal_cliques(
    graph: Any,
    *,
    pivot: Optional[bool] = None,
    iterative: Optional[bool] = None,
    should_stop: Optional[StopCheck] = None,
    stats: Optional[SearchStats] = None,
    config: Optional[CliqueConfig] = None,
) -> Iterator[Clique]:
    """Yield every maximal clique of ``graph`` exactly once.

    Args:
        graph: Graph or graph view providing ``node_identifiers``,
            ``neighbors``, ``node_bound`` and ``to_index``.
        pivot: Enable pivot selection. Defaults to ``config.pivot``.
        iterative: Use the explicit-stack engine. Defaults to ``config.iterative``.
        should_stop: Polled before every branch; returning True stops the search.
        stats: Optional counters to fill in.
        config: Defaults for unset arguments; ``CLIQUE_CONFIG`` if omitted.

    Yields:
        Cliques as frozensets of node identifiers. An empty graph yields a
        single empty clique.

    Raises:
        EnumerationCancelled: When ``should_stop`` returns True. Cliques already
            yielded were delivered to the caller, so ``partial`` is empty here.
        CapacityExceeded: If the graph is too large for the adjacency oracle.
    """
    cfg = (config or CLIQUE_CONFIG).with_overrides(pivot=pivot, iterative=iterative)
    oracle = build_adjacency_oracle(graph, config=cfg)
    search = _CliqueSearch(
        graph,
        oracle,
        pivot=cfg.pivot,
        should_stop=should_stop,
        stats=stats if stats is not None else SearchStats(),
    )
    P = set(graph.node_identifiers())
    try:
        yield from search.run(frozenset(), P, set(), cfg.iterative)
    except _Cancelled:
        logger.info(
            "Clique enumeration cancelled after %d cliques", search.stats.cliques
        )
        raise EnumerationCancelled(set()) from None


def enumerate_maximal_cliques(
    graph: Any,
    *,
    pivot: Optional[bool] = None,
    iterative: Optional[bool] = None,
    should_stop: Optional[StopCheck] = None,
    stats: Optional[SearchStats] = None,
    config: Optional[CliqueConfig] = None,
) -> Set[Clique]:
    """Return the set of all maximal cliques of ``graph``.

    Builds an adjacency oracle, then runs Bron–Kerbosch over all node
    identifiers. No returned clique equals or is a subset of another.

    Args:
        graph: Graph or graph view; see ``iter_maximal_cliques``.
        pivot: Enable pivot selection. Defaults to ``config.pivot``.
        iterative: Use the explicit-stack engine. Defaults to ``config.iterative``.
        should_stop: Cooperative cancellation check, polled at branch boundaries.
        stats: Optional counters to fill in.
        config: Defaults for unset arguments; ``CLIQUE_CONFIG`` if omitted.

    Returns:
        Set of frozensets. ``{frozenset()}`` for a graph with no nodes.

    Raises:
        EnumerationCancelled: When ``should_stop`` returns True; ``partial``
            holds the cliques found so far.
        CapacityExceeded: If the graph is too large for the adjacency oracle.

    Example:
        >>> from cliquegraph.graph.nx import from_edges
        >>> g = from_edges(range(3), [(0, 1), (1, 2)])
        >>> sorted(sorted(c) for c in enumerate_maximal_cliques(g))
        [[0, 1], [1, 2]]
    """
    stats = stats if stats is not None else SearchStats()
    start = time.perf_counter()
    cliques: Set[Clique] = set()
    try:
        for clique in iter_maximal_cliques(
            graph,
            pivot=pivot,
            iterative=iterative,
            should_stop=should_stop,
            stats=stats,
            config=config,
        ):
            cliques.add(clique)
    except EnumerationCancelled:
        raise EnumerationCancelled(cliques) from None

    logger.debug(
        "Enumerated %d maximal cliques (calls=%d branches=%d) in %.6fs",
        len(cliques),
        stats.calls,
        stats.branches,
        time.perf_counter() - start,
    )
    return cliques


def enumerate_maximal_cliques_parallel(
    graph: Any,
    *,
    max_workers: Optional[int] = None,
    pivot: Optional[bool] = None,
    iterative: Optional[bool] = None,
    should_stop: Optional[StopCheck] = None,
    stats: Optional[SearchStats] = None,
    config: Optional[CliqueConfig] = None,
) -> Set[Clique]:
    """Enumerate maximal cliques, exploring top-level branches on a thread pool.

    The graph and oracle are shared read-only. Each branch runs in its own
    search state, so no ``(R, P, X)`` sets cross threads. Results are merged
    by set equality and equal those of ``enumerate_maximal_cliques``.

    Args:
        graph: Graph or graph view; see ``iter_maximal_cliques``.
        max_workers: Thread count. Defaults to ``config.parallel_workers``.
        pivot: Enable pivot selection. Defaults to ``config.pivot``.
        iterative: Use the explicit-stack engine inside each branch.
        should_stop: Cooperative cancellation check, polled by every worker.
        stats: Optional counters; per-branch counters are summed into it.
        config: Defaults for unset arguments; ``CLIQUE_CONFIG`` if omitted.

    Returns:
        Set of frozensets, as ``enumerate_maximal_cliques``.

    Raises:
        EnumerationCancelled: When ``should_stop`` returns True; ``partial``
            holds every clique emitted before the stop, including those of
            interrupted branches. Branches not yet started are cancelled.
    """
    cfg = (config or CLIQUE_CONFIG).with_overrides(
        pivot=pivot, iterative=iterative, parallel_workers=max_workers
    )
    stats = stats if stats is not None else SearchStats()
    start = time.perf_counter()

    oracle = build_adjacency_oracle(graph, config=cfg)
    root = _CliqueSearch(
        graph, oracle, pivot=cfg.pivot, should_stop=should_stop, stats=stats
    )
    P = set(graph.node_identifiers())
    stats.calls += 1
    if not P:
        stats.cliques += 1
        return {frozenset()}
    branches = root.top_level_branches(P)
    stats.branches += len(branches)

    def run_branch(
        branch: Branch, found: List[Clique], branch_stats: SearchStats
    ) -> None:
        search = _CliqueSearch(
            graph,
            oracle,
            pivot=cfg.pivot,
            should_stop=should_stop,
            stats=branch_stats,
        )
        R, branch_P, branch_X = branch
        # Appended as emitted so a cancelled branch keeps what it found
        for clique in search.run(R, branch_P, branch_X, cfg.iterative):
            found.append(clique)

    outputs: List[Tuple[Branch, List[Clique], SearchStats]] = [
        (branch, [], SearchStats()) for branch in branches
    ]
    cancelled = False
    with ThreadPoolExecutor(max_workers=cfg.parallel_workers) as pool:
        futures = [pool.submit(run_branch, *output) for output in outputs]
        for future in as_completed(futures):
            if future.cancelled():
                continue
            try:
                future.result()
            except _Cancelled:
                if not cancelled:
                    cancelled = True
                    for pending in futures:
                        pending.cancel()

    cliques: Set[Clique] = set()
    for _, found, branch_stats in outputs:
        cliques.update(found)
        stats.merge(branch_stats)

    if cancelled:
        logger.info(
            "Parallel clique enumeration cancelled after %d cliques", len(cliques)
        )
        raise EnumerationCancelled(cliques)

    logger.debug(
        "Enumerated %d maximal cliques over %d branches in %.6fs",
        len(cliques),
        len(branches),
        time.perf_counter() - start,
    )
    return cliques
