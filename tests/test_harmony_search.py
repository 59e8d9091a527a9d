"""Unit tests for orienteering/algorithms/harmony_search.py."""

from __future__ import annotations

import random
from collections import Counter

import numpy as np
import pytest

from orienteering.algorithms.harmony_memory import HarmonyMemory
from orienteering.algorithms.harmony_search import HarmonySearch, filter_available
from orienteering.config import HarmonySearchConfig
from orienteering.events import RecordingObserver
from orienteering.models.graph import Graph
from orienteering.models.solution import Solution


def _search(seed: int = 0, **overrides) -> HarmonySearch:
    params = {"harmony_memory_size": 5, "hmcr": 0.9, "par": 0.3, "iterations": 50}
    params.update(overrides)
    return HarmonySearch(HarmonySearchConfig(**params), random.Random(seed))


class TestFilterAvailable:
    def test_keeps_only_closable_vertices(self, line_graph: Graph) -> None:
        # At vertex 2 having spent 2 of 5, going back to 1 would overrun.
        kept = filter_available([1, 3, 4], line_graph, 2, 2.0, 5, 5.0)
        assert kept == [3, 4]

    def test_boundary_is_inclusive(self, chain_graph: Graph) -> None:
        assert filter_available([1, 2], chain_graph, 0, 0.0, 3, 30.0) == [1, 2]
        assert filter_available([1, 2], chain_graph, 0, 0.0, 3, 29.0) == []


class TestPitchAdjust:
    def test_single_available_vertex_chosen_directly(self, line_graph: Graph) -> None:
        search = _search()
        assert search._pitch_adjust(0, [3], line_graph) == 3

    def test_prefers_high_prize(self) -> None:
        # Equidistant vertices: weights come from the prize ranking only
        # plus a tie-broken distance rank, so the top prize dominates.
        graph = Graph.from_positions(
            [0.0, 1.0, 50.0, 2.0],
            [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (-1.0, 0.0)],
        )
        search = _search(seed=1)
        counts = Counter(search._pitch_adjust(0, [1, 2, 3], graph) for _ in range(3000))
        assert counts.most_common(1)[0][0] == 2

    def test_weights_follow_rank_formula(self, line_graph: Graph) -> None:
        # From vertex 0 the available vertices 1..4 rank by prize 4,3,2,1
        # and by proximity 1 (closest, rank 3) .. 4 (farthest, rank 0):
        # w = 0.8*(3,2,1,0) + 0.2*(0,1,2,3) = 2.4, 1.8, 1.2, 0.6
        search = _search(seed=2)
        draws = Counter(
            search._pitch_adjust(0, [1, 2, 3, 4], line_graph) for _ in range(6000)
        )
        total = 2.4 + 1.8 + 1.2 + 0.6
        assert draws[4] / 6000 == pytest.approx(2.4 / total, abs=0.03)
        assert draws[1] / 6000 == pytest.approx(0.6 / total, abs=0.03)


class TestImprovise:
    def test_improvised_path_is_feasible(self, line_graph: Graph) -> None:
        search = _search(seed=3)
        memory = HarmonyMemory.generate(line_graph, 3, 0, 5, 5.0, search.rng)
        assert memory is not None
        for _ in range(20):
            sol = search.improvise(memory, line_graph, 0, 5, 5.0)
            assert sol.path[0] == 0 and sol.path[-1] == 5
            assert sol.cost <= 5.0

    def test_random_only_mode(self, line_graph: Graph) -> None:
        search = _search(seed=4, hmcr=0.0)
        memory = HarmonyMemory(1, [Solution.evaluate([0, 5], line_graph)])
        sol = search.improvise(memory, line_graph, 0, 5, 5.0)
        assert sol.validate_feasibility(line_graph, 0, 5, 5.0) == []


class TestGeneratePath:
    def test_unreachable_end_returns_none(self, chain_graph: Graph) -> None:
        assert _search().generate_path(chain_graph, 0, 3, 15.0) is None

    def test_chain_scenario_budget_respected(self, chain_graph: Graph) -> None:
        sol = _search().generate_path(chain_graph, 0, 3, 20.0)
        assert sol is not None
        assert sol.cost <= 20.0
        if sol.score == 200.0:
            assert sol.cost == 20.0

    def test_finds_full_chain_when_affordable(self, chain_graph: Graph) -> None:
        sol = _search(iterations=100).generate_path(chain_graph, 0, 3, 30.0)
        assert sol is not None
        assert sol.score == 200.0
        assert sol.path == (0, 1, 2, 3)

    def test_collects_everything_on_a_line(self, line_graph: Graph) -> None:
        sol = _search(seed=5, iterations=1000).generate_path(line_graph, 0, 5, 5.0)
        assert sol is not None
        assert sol.path == (0, 1, 2, 3, 4, 5)

    def test_zero_iterations_returns_best_initial(self, line_graph: Graph) -> None:
        observer = RecordingObserver()
        search = HarmonySearch(
            HarmonySearchConfig(harmony_memory_size=4, iterations=0),
            random.Random(0),
            observer,
        )
        sol = search.generate_path(line_graph, 0, 5, 5.0)
        assert sol is not None
        [generated] = observer.named("generated")
        assert sol.score == generated.data["best"]

    def test_never_worse_than_initial_memory(self, random_graph) -> None:
        graph = random_graph(random.Random(8), n=12)
        observer = RecordingObserver()
        search = HarmonySearch(
            HarmonySearchConfig(harmony_memory_size=5, iterations=100),
            random.Random(8),
            observer,
        )
        sol = search.generate_path(graph, 0, 11, 200.0)
        assert sol is not None
        assert sol.score >= observer.named("generated")[0].data["best"]

    def test_same_seed_same_result(self, random_graph) -> None:
        graph = random_graph(random.Random(12), n=10)
        a = _search(seed=6).generate_path(graph, 0, 9, 150.0)
        b = _search(seed=6).generate_path(graph, 0, 9, 150.0)
        assert a == b

    def test_equal_endpoints_rejected(self, line_graph: Graph) -> None:
        with pytest.raises(ValueError):
            _search().generate_path(line_graph, 1, 1, 5.0)


@pytest.mark.property
def test_never_exceeds_budget(seed: int, random_graph) -> None:
    rng = random.Random(seed)
    graph = random_graph(rng)
    start, end = rng.sample(list(graph.vertices), 2)
    budget = float(np.max(graph.costs)) * rng.uniform(0.3, 2.5)
    search = _search(
        seed=seed,
        harmony_memory_size=rng.randint(1, 6),
        hmcr=rng.random(),
        par=rng.random(),
        iterations=30,
    )

    sol = search.generate_path(graph, start, end, budget)

    if graph.cost(start, end) > budget:
        assert sol is None
    else:
        assert sol is not None
        assert sol.validate_feasibility(graph, start, end, budget) == []
