"""Global pytest configuration and shared graph fixtures.

Sample graphs are built through the NetworkX adapter. Reference clique
enumerators are exposed as fixtures so tests in any folder can use them
without importing helper modules from the tests tree.
"""

from __future__ import annotations

from itertools import combinations
from typing import Callable, FrozenSet, Hashable, Set

import networkx as nx
import pytest

from cliquegraph.graph.nx import NxGraph, from_edges

CliqueSet = Set[FrozenSet[Hashable]]


@pytest.fixture
def scenario_a() -> NxGraph:
    # 5 - 3 - 4 - 0
    #     |   | /
    #     2 - 1
    return from_edges(
        range(6),
        [(0, 1), (0, 4), (1, 4), (1, 2), (2, 3), (3, 4), (4, 5)],
    )


@pytest.fixture
def scenario_b() -> NxGraph:
    # 5 <- 3 = 4 == 0
    #      ||  || //
    #      2 <- 1
    return from_edges(
        range(6),
        [
            (0, 1),
            (1, 0),
            (0, 4),
            (4, 0),
            (1, 4),
            (4, 1),
            (1, 2),
            (2, 3),
            (3, 2),
            (3, 4),
            (4, 3),
            (4, 5),
        ],
        directed=True,
    )


@pytest.fixture
def empty_graph() -> NxGraph:
    return NxGraph(nx.Graph())


def _mutual_adjacency(graph) -> Set[FrozenSet[Hashable]]:
    arcs = {(u, v) for u in graph.node_identifiers() for v in graph.neighbors(u)}
    return {frozenset((u, v)) for u, v in arcs if u != v and (v, u) in arcs}


def brute_force_cliques(graph) -> CliqueSet:
    """Check every node subset; only practical for small graphs."""
    nodes = list(graph.node_identifiers())
    pairs = _mutual_adjacency(graph)

    def is_clique(members) -> bool:
        return all(frozenset(p) in pairs for p in combinations(members, 2))

    cliques = [
        frozenset(members)
        for size in range(len(nodes) + 1)
        for members in combinations(nodes, size)
        if is_clique(members)
    ]
    return {
        c
        for c in cliques
        if not any(v not in c and is_clique(c | {v}) for v in nodes)
    }


def networkx_cliques(graph) -> CliqueSet:
    """Maximal cliques of the mutual-edge graph, computed by NetworkX."""
    nodes = list(graph.node_identifiers())
    if not nodes:
        return {frozenset()}
    G = nx.Graph()
    G.add_nodes_from(nodes)
    G.add_edges_from(tuple(p) for p in _mutual_adjacency(graph))
    return {frozenset(c) for c in nx.find_cliques(G)}


@pytest.fixture
def brute_force() -> Callable[..., CliqueSet]:
    return brute_force_cliques


@pytest.fixture
def nx_reference() -> Callable[..., CliqueSet]:
    return networkx_cliques
