"""Bounded, score-ordered pool of solutions used by harmony search."""

from __future__ import annotations

import bisect
import random
from collections.abc import Collection, Iterator

from orienteering.algorithms.sampling import choose_weighted
from orienteering.config import MEMORY_FAILURE_FACTOR
from orienteering.errors import ConfigurationError, EmptyCandidateSetError
from orienteering.events import EventLevel, SearchObserver, emit
from orienteering.models.graph import Graph
from orienteering.models.solution import Solution

_SOURCE = "harmony-memory"


def random_path(
    graph: Graph,
    start: int,
    end: int,
    budget: float,
    rng: random.Random,
) -> Solution | None:
    """Build a uniformly random feasible path from ``start`` to ``end``.

    Vertices are visited in random order; each is kept only if the path can
    still be closed to ``end`` within ``budget`` after adding it.

    Returns:
        The random Solution, or ``None`` if even the direct edge from
        ``start`` to ``end`` exceeds the budget.
    """
    if graph.cost(start, end) > budget:
        return None

    remaining = [v for v in graph.vertices if v != start and v != end]
    rng.shuffle(remaining)

    path = [start]
    current_cost = 0.0
    for v in remaining:
        to_v = graph.cost(path[-1], v)
        if current_cost + to_v + graph.cost(v, end) <= budget:
            path.append(v)
            current_cost += to_v
    path.append(end)
    return Solution.evaluate(path, graph)


class HarmonyMemory:
    """Up to ``capacity`` solutions, kept sorted ascending by score.

    Attributes:
        capacity: Maximum number of stored solutions.
    """

    def __init__(
        self,
        capacity: int,
        harmonies: list[Solution] | None = None,
        observer: SearchObserver | None = None,
    ) -> None:
        """Create a memory, optionally pre-filled.

        Args:
            capacity: Maximum number of stored solutions.
            harmonies: Initial solutions. Only the best ``capacity`` are kept.
            observer: Receiver of memory events.

        Raises:
            ConfigurationError: If ``capacity`` is not positive.
        """
        if capacity <= 0:
            raise ConfigurationError("capacity", capacity, "must be greater than 0")
        self.capacity = capacity
        self.observer = observer
        ordered = sorted(harmonies or [], key=lambda s: s.score)
        self._harmonies: list[Solution] = ordered[-capacity:]

    @classmethod
    def generate(
        cls,
        graph: Graph,
        capacity: int,
        start: int,
        end: int,
        budget: float,
        rng: random.Random,
        observer: SearchObserver | None = None,
    ) -> HarmonyMemory | None:
        """Fill a new memory with random feasible paths.

        Gives up after ``MEMORY_FAILURE_FACTOR * capacity`` failed attempts,
        keeping whatever was found by then.

        Returns:
            The memory, or ``None`` if not a single path was found.
        """
        if capacity <= 0:
            raise ConfigurationError("capacity", capacity, "must be greater than 0")

        found: list[Solution] = []
        fails = 0
        while len(found) < capacity:
            solution = random_path(graph, start, end, budget, rng)
            if solution is None:
                fails += 1
                if fails >= MEMORY_FAILURE_FACTOR * capacity:
                    break
                continue
            found.append(solution)

        if not found:
            emit(observer, _SOURCE, "generation_failed", EventLevel.DEBUG, attempts=fails)
            return None

        memory = cls(capacity, found, observer)
        emit(
            observer, _SOURCE, "generated", EventLevel.DEBUG,
            size=len(memory), failures=fails, best=memory.best().score,
        )
        return memory

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._harmonies)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self._harmonies)

    def __getitem__(self, index: int) -> Solution:
        return self._harmonies[index]

    @property
    def scores(self) -> list[float]:
        """Scores of the stored solutions, ascending."""
        return [s.score for s in self._harmonies]

    def is_full(self) -> bool:
        return len(self._harmonies) >= self.capacity

    def best(self) -> Solution | None:
        """Return the highest-scoring stored solution, if any."""
        return self._harmonies[-1] if self._harmonies else None

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def insert(self, solution: Solution) -> bool:
        """Store ``solution`` if there is room or it beats the worst entry.

        When full, a solution scoring no higher than the current minimum is
        discarded; otherwise the minimum is evicted.  Equal scores are
        placed after existing ones.

        Returns:
            True if the solution was stored.
        """
        if self.is_full():
            worst = self._harmonies[0].score
            if solution.score <= worst:
                emit(
                    self.observer, _SOURCE, "rejected", EventLevel.TRACE,
                    score=solution.score, worst=worst,
                )
                return False
            self._harmonies.pop(0)
            emit(
                self.observer, _SOURCE, "replaced", EventLevel.DEBUG,
                score=solution.score, evicted=worst,
            )
        else:
            emit(self.observer, _SOURCE, "inserted", EventLevel.DEBUG, score=solution.score)

        index = bisect.bisect_right(self.scores, solution.score)
        self._harmonies.insert(index, solution)
        return True

    # ------------------------------------------------------------------
    # Improvisation support
    # ------------------------------------------------------------------

    def choose_next(
        self,
        current: int,
        available: Collection[int],
        graph: Graph,
        rng: random.Random,
    ) -> int:
        """Choose the vertex to visit after ``current``.

        Every stored path in which ``current`` is directly followed by an
        available vertex votes for that follower with its score.  When no
        stored path offers one, every available vertex is weighted by its
        prize per unit of cost from ``current`` instead.

        Args:
            current: The vertex the new path currently ends at.
            available: Vertices that may still be appended.
            graph: The instance graph.
            rng: Random source of the calling search.

        Returns:
            The chosen vertex.

        Raises:
            EmptyCandidateSetError: If ``available`` is empty.
        """
        if not available:
            raise EmptyCandidateSetError(
                f"no available vertex to follow vertex {current}"
            )

        followers: list[int] = []
        weights: list[float] = []
        for harmony in self._harmonies:
            path = harmony.path
            for i, v in enumerate(path[:-1]):
                if v == current and path[i + 1] in available:
                    followers.append(path[i + 1])
                    weights.append(harmony.score)

        if not followers:
            followers = sorted(available)
            weights = [graph.ratio(current, v) for v in followers]

        return choose_weighted(followers, weights, rng)

    def __repr__(self) -> str:
        return f"HarmonyMemory(capacity={self.capacity}, scores={self.scores})"
