"""Tsiligirides' S-Algorithm: randomized greedy path construction.

At every step the vertices that can still be visited without losing the
ability to reach the end vertex are ranked by desirability
``(prize / cost) ** power_factor``.  One of the best ``num_considered`` is
drawn with probability proportional to its desirability.

Reference:
    Tsiligirides, T. (1984). Heuristic methods applied to orienteering.
    Journal of the Operational Research Society, 35(9), 797–809.
"""

from __future__ import annotations

import math
import random

from orienteering.algorithms.base import check_endpoints
from orienteering.algorithms.sampling import choose_weighted
from orienteering.config import SAlgorithmConfig
from orienteering.events import EventLevel, SearchObserver, emit
from orienteering.models.graph import Graph
from orienteering.models.solution import Solution

_SOURCE = "s-algorithm"


class SAlgorithm:
    """Desirability-weighted restricted-candidate path construction.

    Attributes:
        config: Algorithm hyperparameters.
        rng: Random source owned by this instance.
        observer: Optional receiver of search events.
    """

    def __init__(
        self,
        config: SAlgorithmConfig | None = None,
        rng: random.Random | None = None,
        observer: SearchObserver | None = None,
    ) -> None:
        """Initialise the heuristic.

        Args:
            config: Hyperparameters. Defaults to ``SAlgorithmConfig()``.
            rng: Random source. A fresh unseeded ``random.Random`` is
                created when omitted.
            observer: Receiver of search events.
        """
        self.config: SAlgorithmConfig = config or SAlgorithmConfig()
        self.rng: random.Random = rng or random.Random()
        self.observer = observer

    def _shortlist(
        self,
        graph: Graph,
        current: int,
        current_cost: float,
        visited: set[int],
        end: int,
        budget: float,
    ) -> list[tuple[int, float]]:
        """Return the top ``num_considered`` affordable (vertex, desirability)
        pairs, most desirable first."""
        candidates: list[tuple[int, float]] = []
        for v in graph.vertices:
            if v in visited or v == end:
                continue
            if current_cost + graph.cost(current, v) + graph.cost(v, end) > budget:
                continue
            try:
                desirability = graph.ratio(current, v) ** self.config.power_factor
            except OverflowError:
                desirability = math.inf
            candidates.append((v, desirability))
        candidates.sort(key=lambda c: c[1], reverse=True)
        return candidates[: self.config.num_considered]

    def generate_path(
        self, graph: Graph, start: int, end: int, budget: float
    ) -> Solution | None:
        """Build one path from ``start`` to ``end`` within ``budget``.

        Returns:
            The constructed Solution, or ``None`` when the end vertex can
            no longer be reached within the budget.
        """
        check_endpoints(graph, start, end)

        current = start
        path = [start]
        current_cost = 0.0
        visited = {start}

        while current != end:
            shortlist = self._shortlist(
                graph, current, current_cost, visited, end, budget
            )
            if not shortlist:
                if current_cost + graph.cost(current, end) > budget:
                    emit(
                        self.observer, _SOURCE, "aborted", EventLevel.DEBUG,
                        current=current, cost=current_cost,
                    )
                    return None
                path.append(end)
                current_cost += graph.cost(current, end)
                current = end
                continue

            current = choose_weighted(
                [v for v, _ in shortlist],
                [d for _, d in shortlist],
                self.rng,
            )
            emit(
                self.observer, _SOURCE, "step", EventLevel.TRACE,
                chosen=current, shortlist=len(shortlist),
            )
            current_cost += graph.cost(path[-1], current)
            path.append(current)
            visited.add(current)

        solution = Solution.evaluate(path, graph)
        emit(
            self.observer, _SOURCE, "completed", EventLevel.DEBUG,
            score=solution.score, cost=solution.cost, length=len(solution),
        )
        return solution
