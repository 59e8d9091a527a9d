"""Harmony Search metaheuristic for the Orienteering Problem.

A slight generalisation of Szwarc and Boryczka's harmony search: new paths
("harmonies") are improvised vertex by vertex, each choice drawn from the
harmony memory, from a prize/proximity heuristic (pitch adjustment) or
uniformly at random.  The center-of-gravity heuristic of the original
method is not used since it only applies to metric instances.

Reference:
    Szwarc, K., & Boryczka, U. (2019). A novel approach to the orienteering
    problem based on the harmony search algorithm. PLoS ONE 14(2).
"""

from __future__ import annotations

import random

from orienteering.algorithms.base import check_endpoints
from orienteering.algorithms.harmony_memory import HarmonyMemory
from orienteering.algorithms.sampling import choose_weighted
from orienteering.config import (
    PITCH_DISTANCE_WEIGHT,
    PITCH_PRIZE_WEIGHT,
    HarmonySearchConfig,
)
from orienteering.events import EventLevel, SearchObserver, emit
from orienteering.models.graph import Graph
from orienteering.models.solution import Solution

_SOURCE = "harmony-search"


def filter_available(
    available: list[int],
    graph: Graph,
    current: int,
    current_cost: float,
    end: int,
    budget: float,
) -> list[int]:
    """Keep the vertices that can follow ``current`` and still reach ``end``.

    Args:
        available: Candidate vertices, in ascending order.
        graph: The instance graph.
        current: Last vertex of the path under construction.
        current_cost: Cost of the path so far.
        end: Terminal vertex.
        budget: Total cost budget.

    Returns:
        The affordable subset of ``available``, order preserved.
    """
    return [
        v
        for v in available
        if current_cost + graph.cost(current, v) + graph.cost(v, end) <= budget
    ]


class HarmonySearch:
    """Harmony Search optimiser for the Orienteering Problem.

    Keeps a bounded memory of good paths and repeatedly improvises new ones.
    A new path that beats the worst remembered one replaces it; the best
    remembered path is returned once all iterations are done.

    Attributes:
        config: Hyperparameter configuration, validated on construction.
        rng: Random source owned by this instance.
        observer: Optional receiver of search events.
    """

    def __init__(
        self,
        config: HarmonySearchConfig | None = None,
        rng: random.Random | None = None,
        observer: SearchObserver | None = None,
    ) -> None:
        """Initialise the optimiser.

        Args:
            config: Algorithm hyperparameters. Defaults to
                ``HarmonySearchConfig()`` when omitted.
            rng: Random source. A fresh unseeded ``random.Random`` is
                created when omitted.
            observer: Receiver of search events.
        """
        self.config: HarmonySearchConfig = config or HarmonySearchConfig()
        self.rng: random.Random = rng or random.Random()
        self.observer = observer

    # ------------------------------------------------------------------
    # Vertex selection
    # ------------------------------------------------------------------

    def _pitch_adjust(self, current: int, available: list[int], graph: Graph) -> int:
        """Pick a vertex favouring high prizes and, to a lesser degree,
        proximity to ``current``."""
        if len(available) == 1:
            return available[0]

        m = len(available)
        by_prize = sorted(available, key=graph.prize, reverse=True)
        by_distance = sorted(
            available, key=lambda v: graph.cost(current, v), reverse=True
        )
        # Farthest vertex gets rank 0, closest gets rank m - 1.
        distance_rank = {v: rank for rank, v in enumerate(by_distance)}
        weights = [
            PITCH_PRIZE_WEIGHT * (m - i - 1) + PITCH_DISTANCE_WEIGHT * distance_rank[v]
            for i, v in enumerate(by_prize)
        ]
        return choose_weighted(by_prize, weights, self.rng)

    def _choose_vertex(
        self,
        current: int,
        available: list[int],
        memory: HarmonyMemory,
        graph: Graph,
    ) -> int:
        """Choose the next vertex from memory, by pitch adjustment, or at
        random, according to ``hmcr`` and ``par``."""
        if self.rng.random() < self.config.hmcr:
            if self.rng.random() < self.config.par:
                return self._pitch_adjust(current, available, graph)
            return memory.choose_next(current, available, graph, self.rng)
        return self.rng.choice(available)

    # ------------------------------------------------------------------
    # Improvisation
    # ------------------------------------------------------------------

    def improvise(
        self,
        memory: HarmonyMemory,
        graph: Graph,
        start: int,
        end: int,
        budget: float,
    ) -> Solution:
        """Build one new feasible path guided by ``memory``.

        The direct edge from ``start`` to ``end`` must fit in ``budget``;
        that holds whenever ``memory`` was generated for the same instance.
        """
        path = [start]
        current_cost = 0.0
        available = filter_available(
            [v for v in graph.vertices if v != start and v != end],
            graph, start, current_cost, end, budget,
        )

        while available:
            chosen = self._choose_vertex(path[-1], available, memory, graph)
            current_cost += graph.cost(path[-1], chosen)
            path.append(chosen)
            available.remove(chosen)
            available = filter_available(
                available, graph, chosen, current_cost, end, budget
            )
        path.append(end)
        return Solution.evaluate(path, graph)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def generate_path(
        self, graph: Graph, start: int, end: int, budget: float
    ) -> Solution | None:
        """Run harmony search and return the best path found.

        Returns:
            The highest-scoring Solution in the final harmony memory, or
            ``None`` when no initial path fits the budget.
        """
        check_endpoints(graph, start, end)

        memory = HarmonyMemory.generate(
            graph,
            self.config.harmony_memory_size,
            start,
            end,
            budget,
            self.rng,
            self.observer,
        )
        if memory is None:
            emit(self.observer, _SOURCE, "no_initial_memory", EventLevel.INFO)
            return None

        for iteration in range(self.config.iterations):
            harmony = self.improvise(memory, graph, start, end, budget)
            stored = memory.insert(harmony)
            emit(
                self.observer, _SOURCE, "iteration", EventLevel.TRACE,
                iteration=iteration, score=harmony.score, stored=stored,
            )

        best = memory.best()
        if best is not None:
            emit(
                self.observer, _SOURCE, "completed", EventLevel.INFO,
                iterations=self.config.iterations, score=best.score, cost=best.cost,
            )
        return best
