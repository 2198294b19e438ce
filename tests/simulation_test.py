import pytest

from dual_iso.random_utils import random_graph
from dual_iso.simulation import (
    Simulation,
    dual_simulation,
    initial_candidates,
    simple_simulation,
)
from tests.dual_iso_test_utils import build_graph, paper_graph, paper_pattern


def test_initial_candidates_borrow_label_index():
    graph = paper_graph()
    candidates = initial_candidates(graph, paper_pattern())
    assert candidates == [(1, 2, 5), (0, 4, 6, 8), (3, 7)]
    assert candidates[0] is graph.nodes_with_label("a")


def test_simple_simulation():
    graph = paper_graph()
    candidates = initial_candidates(graph, paper_pattern())
    assert simple_simulation(graph, paper_pattern(), candidates)
    # node 8 has no relationship to any c node
    assert candidates == [(1, 2, 5), (0, 4, 6), (3, 7)]
    # untouched candidate sets are still the graph's own
    assert candidates[0] is graph.nodes_with_label("a")
    assert candidates[2] is graph.nodes_with_label("c")


def test_dual_simulation():
    graph = paper_graph()
    candidates = initial_candidates(graph, paper_pattern())
    assert dual_simulation(graph, paper_pattern(), candidates)
    # additionally, node 0 is not reachable from any a node
    assert candidates == [(1, 2, 5), (4, 6), (3, 7)]


def test_simulation_does_not_touch_label_index():
    graph = paper_graph()
    for simulation in Simulation:
        candidates = initial_candidates(graph, paper_pattern())
        assert simulation.refine(graph, paper_pattern(), candidates)
    assert graph.nodes_with_label("b") == (0, 4, 6, 8)


@pytest.mark.parametrize("simulation", list(Simulation))
def test_simulation_is_idempotent(simulation):
    graph = paper_graph()
    candidates = initial_candidates(graph, paper_pattern())
    assert simulation.refine(graph, paper_pattern(), candidates)

    refined = list(candidates)
    assert simulation.refine(graph, paper_pattern(), candidates)
    assert candidates == refined
    for (before, after) in zip(refined, candidates):
        assert before is after


@pytest.mark.parametrize("simulation", list(Simulation))
def test_absent_label_is_infeasible(simulation):
    graph = paper_graph()
    pattern = build_graph(["a", "z"])
    candidates = initial_candidates(graph, pattern)
    assert not simulation.refine(graph, pattern, candidates)


@pytest.mark.parametrize("simulation", list(Simulation))
def test_missing_relationship_is_infeasible(simulation):
    # no c node has any outgoing relationship
    graph = paper_graph()
    pattern = build_graph(["c", "a"], [(0, 1)])
    candidates = initial_candidates(graph, pattern)
    assert not simulation.refine(graph, pattern, candidates)


@pytest.mark.parametrize("simulation", list(Simulation))
def test_self_loop(simulation):
    graph = build_graph(["a", "a"], [(0, 0), (0, 1)])
    pattern = build_graph(["a"], [(0, 0)])
    candidates = initial_candidates(graph, pattern)
    assert simulation.refine(graph, pattern, candidates)
    assert candidates == [(0,)]


@pytest.mark.parametrize("seed", range(10))
def test_dual_simulation_is_at_least_as_tight(seed):
    graph = random_graph(30, 0.1, labels=("a", "b", "c"), seed=seed)
    pattern = random_graph(4, 0.4, labels=("a", "b", "c"), seed=seed + 1000)

    simple_candidates = initial_candidates(graph, pattern)
    simple_feasible = simple_simulation(graph, pattern, simple_candidates)
    dual_candidates = initial_candidates(graph, pattern)
    dual_feasible = dual_simulation(graph, pattern, dual_candidates)

    if dual_feasible:
        assert simple_feasible
        for (simple, dual) in zip(simple_candidates, dual_candidates):
            assert set(dual) <= set(simple)
            assert list(dual) == sorted(set(dual))
