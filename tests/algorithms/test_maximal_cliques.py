import networkx as nx
import pytest

from cliquegraph.algorithms.cliques import (
    SearchStats,
    enumerate_maximal_cliques,
    enumerate_maximal_cliques_parallel,
    iter_maximal_cliques,
)
from cliquegraph.config import CliqueConfig
from cliquegraph.exceptions import CapacityExceeded, EnumerationCancelled
from cliquegraph.graph.filter import build_filtered_view
from cliquegraph.graph.nx import NxGraph, from_edges

SCENARIO_A = {
    frozenset({0, 1, 4}),
    frozenset({1, 2}),
    frozenset({2, 3}),
    frozenset({3, 4}),
    frozenset({4, 5}),
}

SCENARIO_B = {
    frozenset({0, 1, 4}),
    frozenset({2, 3}),
    frozenset({3, 4}),
    frozenset({5}),
}

ENGINES = [
    pytest.param({"pivot": True, "iterative": False}, id="pivot-recursive"),
    pytest.param({"pivot": False, "iterative": False}, id="plain-recursive"),
    pytest.param({"pivot": True, "iterative": True}, id="pivot-iterative"),
    pytest.param({"pivot": False, "iterative": True}, id="plain-iterative"),
]


@pytest.mark.parametrize("engine", ENGINES)
def test_undirected_scenario(scenario_a, engine):
    assert enumerate_maximal_cliques(scenario_a, **engine) == SCENARIO_A


@pytest.mark.parametrize("engine", ENGINES)
def test_directed_scenario_requires_mutual_edges(scenario_b, engine):
    cliques = enumerate_maximal_cliques(scenario_b, **engine)
    assert cliques == SCENARIO_B
    # 1 -> 2 and 4 -> 5 are one-way, so neither pair is a clique
    assert frozenset({1, 2}) not in cliques
    assert frozenset({4, 5}) not in cliques


@pytest.mark.parametrize("engine", ENGINES)
def test_empty_graph_yields_single_empty_clique(empty_graph, engine):
    assert enumerate_maximal_cliques(empty_graph, **engine) == {frozenset()}


def test_isolated_node_is_singleton_clique():
    g = from_edges(["a", "b", "c"], [("a", "b")])
    assert enumerate_maximal_cliques(g) == {frozenset({"a", "b"}), frozenset({"c"})}


def test_self_loop_does_not_extend_clique():
    G = nx.Graph()
    G.add_edges_from([(0, 0), (0, 1), (2, 2)])
    cliques = enumerate_maximal_cliques(NxGraph(G))
    assert cliques == {frozenset({0, 1}), frozenset({2})}


def test_complete_graph_has_one_clique():
    g = NxGraph(nx.complete_graph(7))
    assert enumerate_maximal_cliques(g) == {frozenset(range(7))}


def test_edgeless_graph_all_singletons():
    g = NxGraph(nx.empty_graph(5))
    assert enumerate_maximal_cliques(g) == {frozenset({i}) for i in range(5)}


def test_directed_one_way_triangle_is_all_singletons():
    g = from_edges(range(3), [(0, 1), (1, 2), (2, 0)], directed=True)
    assert enumerate_maximal_cliques(g) == {frozenset({i}) for i in range(3)}


def test_results_are_complete_maximal_and_non_redundant(scenario_b):
    cliques = enumerate_maximal_cliques(scenario_b)
    nx_graph = scenario_b.nx_graph

    def mutual(u, v):
        return nx_graph.has_edge(u, v) and nx_graph.has_edge(v, u)

    for clique in cliques:
        members = sorted(clique)
        for i, u in enumerate(members):
            for v in members[i + 1 :]:
                assert mutual(u, v)
        for v in nx_graph.nodes():
            if v not in clique:
                assert not all(mutual(u, v) for u in clique)
    for c1 in cliques:
        for c2 in cliques:
            assert c1 == c2 or not c1 < c2


def test_pivoting_reduces_branches_without_changing_results():
    g = NxGraph(nx.complete_graph(6))
    plain, pivoted = SearchStats(), SearchStats()
    assert enumerate_maximal_cliques(
        g, pivot=False, stats=plain
    ) == enumerate_maximal_cliques(g, pivot=True, stats=pivoted)
    assert pivoted.branches < plain.branches
    assert plain.cliques == pivoted.cliques == 1


def test_iterative_and_recursive_emit_same_order(scenario_a):
    recursive = list(iter_maximal_cliques(scenario_a, iterative=False))
    iterative = list(iter_maximal_cliques(scenario_a, iterative=True))
    assert recursive == iterative
    assert len(recursive) == len(set(recursive))


def test_iterative_engine_handles_large_clique():
    # Search depth equals the clique size
    g = NxGraph(nx.complete_graph(60))
    cliques = enumerate_maximal_cliques(g, iterative=True, pivot=True)
    assert cliques == {frozenset(range(60))}


def test_config_defaults_are_used_and_overridable(scenario_a):
    cfg = CliqueConfig(pivot=False, iterative=True)
    stats = SearchStats()
    assert enumerate_maximal_cliques(scenario_a, config=cfg, stats=stats) == SCENARIO_A
    assert stats.cliques == len(SCENARIO_A)

    with pytest.raises(CapacityExceeded):
        enumerate_maximal_cliques(scenario_a, config=CliqueConfig(max_oracle_nodes=5))


@pytest.mark.parametrize("workers", [1, 4])
def test_parallel_matches_sequential(scenario_a, scenario_b, workers):
    assert enumerate_maximal_cliques_parallel(scenario_a, max_workers=workers) == (
        SCENARIO_A
    )
    assert enumerate_maximal_cliques_parallel(scenario_b, max_workers=workers) == (
        SCENARIO_B
    )


def test_parallel_empty_graph(empty_graph):
    assert enumerate_maximal_cliques_parallel(empty_graph) == {frozenset()}


def test_parallel_stats_add_up(scenario_a):
    stats = SearchStats()
    enumerate_maximal_cliques_parallel(scenario_a, max_workers=2, stats=stats)
    assert stats.cliques == len(SCENARIO_A)
    assert stats.branches >= len(SCENARIO_A)


def test_cancellation_returns_partial_results(scenario_a):
    calls = {"n": 0}

    def stop_after_three():
        calls["n"] += 1
        return calls["n"] > 3

    with pytest.raises(EnumerationCancelled) as exc_info:
        enumerate_maximal_cliques(scenario_a, pivot=False, should_stop=stop_after_three)
    partial = exc_info.value.partial
    assert partial < SCENARIO_A


def test_cancellation_before_first_branch(scenario_a):
    with pytest.raises(EnumerationCancelled) as exc_info:
        enumerate_maximal_cliques(scenario_a, should_stop=lambda: True)
    assert exc_info.value.partial == set()


def test_cancellation_in_generator_keeps_yielded_cliques(scenario_a):
    state = {"stop": False}
    gen = iter_maximal_cliques(scenario_a, should_stop=lambda: state["stop"])
    first = next(gen)
    assert first in SCENARIO_A
    state["stop"] = True
    with pytest.raises(EnumerationCancelled) as exc_info:
        list(gen)
    assert exc_info.value.partial == set()


def test_parallel_cancellation(scenario_a):
    with pytest.raises(EnumerationCancelled) as exc_info:
        enumerate_maximal_cliques_parallel(scenario_a, should_stop=lambda: True)
    assert exc_info.value.partial == set()


@pytest.mark.parametrize("iterative", [False, True])
def test_parallel_cancellation_keeps_interrupted_branch(iterative):
    # One top-level branch: {0, 1} is emitted before the second stop check fires
    g = from_edges(range(3), [(0, 1), (1, 2)])
    calls = {"n": 0}

    def stop_on_second_check():
        calls["n"] += 1
        return calls["n"] > 1

    stats = SearchStats()
    with pytest.raises(EnumerationCancelled) as exc_info:
        enumerate_maximal_cliques_parallel(
            g, iterative=iterative, should_stop=stop_on_second_check, stats=stats
        )
    assert exc_info.value.partial == {frozenset({0, 1})}
    assert stats.cliques == 1
    assert stats.branches == 2


def test_enumeration_over_filtered_view(scenario_a):
    view = build_filtered_view(scenario_a, lambda n: n != 4)
    assert enumerate_maximal_cliques(view) == {
        frozenset({0, 1}),
        frozenset({1, 2}),
        frozenset({2, 3}),
        frozenset({5}),
    }


def test_enumeration_over_nested_views(scenario_a):
    outer = build_filtered_view(scenario_a, {0, 1, 2, 4})
    inner = build_filtered_view(outer, lambda n: n != 2)
    assert enumerate_maximal_cliques(inner) == {frozenset({0, 1, 4})}


def test_enumeration_over_fully_excluded_view(scenario_a):
    view = build_filtered_view(scenario_a, frozenset())
    assert enumerate_maximal_cliques(view) == {frozenset()}


def test_string_node_identifiers():
    g = from_edges(
        ["x", "y", "z", "w"],
        [("x", "y"), ("y", "z"), ("x", "z"), ("z", "w")],
    )
    assert enumerate_maximal_cliques(g) == {
        frozenset({"x", "y", "z"}),
        frozenset({"z", "w"}),
    }
