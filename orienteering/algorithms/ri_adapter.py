"""Reorder/insert local search for improving an existing path.

Each round applies two operators:

* **reorder** tries, for every pair of interior positions, swapping the two
  vertices and reversing the segment between them, keeping whichever
  strictly shortens the path;
* **augment** inserts the unvisited vertex with the cheapest feasible
  insertion, collecting its prize.

Reorder only ever lowers the cost and augment only ever raises the score,
so the result never regresses against the input.
"""

from __future__ import annotations

from orienteering.config import RIConfig
from orienteering.events import EventLevel, SearchObserver, emit
from orienteering.models.graph import Graph
from orienteering.models.solution import Solution

_SOURCE = "ri-adapter"


def path_cost(path: list[int], graph: Graph) -> float:
    """Sum the edge costs along ``path``, left to right."""
    cost = 0.0
    for u, v in zip(path, path[1:]):
        cost += graph.cost(u, v)
    return cost


def reorder(path: list[int], cost: float, graph: Graph) -> tuple[float, bool]:
    """Shorten ``path`` in place by interior swaps and segment reversals.

    For every pair ``first < second`` of interior positions the full cost
    of the swapped and of the reversed layout is computed.  If either is
    strictly cheaper than the current cost the cheaper one is applied
    immediately (a tie goes to the swap) and the scan continues on the new
    path.

    Args:
        path: Vertex sequence to improve (mutated in place).
        cost: Current cost of ``path``.
        graph: The instance graph.

    Returns:
        The new cost and whether any move was applied.
    """
    improved = False
    last = len(path) - 1
    for first in range(1, last):
        for second in range(first + 1, last):
            swapped = path.copy()
            swapped[first], swapped[second] = swapped[second], swapped[first]
            reversed_ = path[:first] + path[first : second + 1][::-1] + path[second + 1 :]

            swap_cost = path_cost(swapped, graph)
            reverse_cost = path_cost(reversed_, graph)
            if swap_cost >= cost and reverse_cost >= cost:
                continue

            if swap_cost <= reverse_cost:
                path[:] = swapped
                cost = swap_cost
            else:
                path[:] = reversed_
                cost = reverse_cost
            improved = True
    return cost, improved


def augment(
    path: list[int],
    cost: float,
    graph: Graph,
    budget: float,
) -> tuple[float, int | None]:
    """Insert the unvisited vertex whose cheapest insertion costs least.

    Only vertices with a positive prize are considered.  Each candidate is
    placed at the adjacent pair ``(prev, next)`` minimising
    ``cost(prev, v) + cost(v, next) - cost(prev, next)``; candidates that
    would exceed ``budget`` are dropped.  The lowest increment wins, a tie
    going to the higher prize.  When rounding pushes the exact cost of the
    extended path over ``budget``, the next candidate in that order is
    tried.

    Args:
        path: Vertex sequence to extend (mutated in place).
        cost: Current cost of ``path``.
        graph: The instance graph.
        budget: Total cost budget.

    Returns:
        The new cost and the inserted vertex, or ``None`` when nothing fits.
    """
    on_path = set(path)
    candidates: list[tuple[float, float, int, int]] = []  # (increment, -prize, vertex, index)

    for v in graph.vertices:
        prize = graph.prize(v)
        if prize <= 0 or v in on_path:
            continue

        increment, index = min(
            (
                (graph.cost(prev, v) + graph.cost(v, nxt) - graph.cost(prev, nxt), i + 1)
                for i, (prev, nxt) in enumerate(zip(path, path[1:]))
            ),
            key=lambda item: item[0],
        )
        if cost + increment > budget:
            continue
        candidates.append((increment, -prize, v, index))

    # Stable on vertex order among exact ties.
    candidates.sort(key=lambda c: c[:2])
    for _, _, vertex, index in candidates:
        extended = path[:index] + [vertex] + path[index:]
        new_cost = path_cost(extended, graph)
        if new_cost > budget:
            continue
        path[:] = extended
        return new_cost, vertex
    return cost, None


class RIAdapter:
    """Reorder/insert improver applicable to any generator's output.

    Attributes:
        config: Number of rounds to run.
        observer: Optional receiver of search events.
    """

    def __init__(
        self,
        config: RIConfig | None = None,
        observer: SearchObserver | None = None,
    ) -> None:
        self.config: RIConfig = config or RIConfig()
        self.observer = observer

    def adapt_path(self, graph: Graph, solution: Solution, budget: float) -> Solution:
        """Improve ``solution`` without exceeding ``budget``.

        A round that changes nothing leaves every later round with the same
        input, so the remaining rounds are skipped.

        Args:
            graph: The instance graph.
            solution: Solution to improve (left untouched).
            budget: Total cost budget.

        Returns:
            A new, re-evaluated Solution.
        """
        path = list(solution.path)
        if len(path) < 2:
            return Solution.evaluate(path, graph)
        cost = path_cost(path, graph)

        for round_number in range(self.config.rounds):
            cost, reordered = reorder(path, cost, graph)
            cost, inserted = augment(path, cost, graph, budget)
            emit(
                self.observer, _SOURCE, "round", EventLevel.TRACE,
                round=round_number, cost=cost, reordered=reordered, inserted=inserted,
            )
            if not reordered and inserted is None:
                emit(
                    self.observer, _SOURCE, "converged", EventLevel.DEBUG,
                    round=round_number,
                )
                break

        adapted = Solution.evaluate(path, graph)
        emit(
            self.observer, _SOURCE, "completed", EventLevel.DEBUG,
            score_before=solution.score, score=adapted.score,
            cost_before=solution.cost, cost=adapted.cost,
        )
        return adapted
