"""Solution container for the Orienteering Problem."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from orienteering.models.graph import Graph


@dataclass(frozen=True)
class Solution:
    """A start-to-end path together with its collected score and cost.

    ``score`` and ``cost`` are derived from ``path``; build solutions through
    ``Solution.evaluate`` so the two can never drift apart.

    Attributes:
        path: Vertex indices in visiting order, start first and end last.
        score: Sum of the prizes of all vertices on the path.
        cost: Sum of the edge costs between consecutive vertices.
    """

    path: tuple[int, ...]
    score: float
    cost: float

    @classmethod
    def evaluate(cls, path: Iterable[int], graph: Graph) -> Solution:
        """Compute score and cost of ``path`` against ``graph``.

        Costs are accumulated left to right, the same order in which the
        algorithms grow their running cost, so a path accepted under a
        budget check evaluates to exactly the checked value.

        Args:
            path: Vertex indices in visiting order.
            graph: The graph the path lives in.

        Returns:
            A new Solution.
        """
        vertices = tuple(path)
        score = 0.0
        for v in vertices:
            score += graph.prize(v)
        cost = 0.0
        for u, v in zip(vertices, vertices[1:]):
            cost += graph.cost(u, v)
        return cls(vertices, score, cost)

    def __len__(self) -> int:
        return len(self.path)

    def validate_feasibility(
        self,
        graph: Graph,
        start: int,
        end: int,
        budget: float,
    ) -> list[str]:
        """Check the solution against an instance and return violations.

        Checks:

        - The path starts at ``start`` and ends at ``end``.
        - No vertex is visited twice.
        - The total cost does not exceed ``budget``.
        - ``score`` and ``cost`` match the values recomputed from the path.

        Returns:
            Empty list when the solution is feasible; otherwise one
            human-readable message per detected problem.
        """
        violations: list[str] = []
        if not self.path:
            return ["Path is empty."]

        if self.path[0] != start:
            violations.append(
                f"Path starts at vertex {self.path[0]}, expected {start}."
            )
        if self.path[-1] != end:
            violations.append(
                f"Path ends at vertex {self.path[-1]}, expected {end}."
            )

        seen: set[int] = set()
        for v in self.path:
            if v in seen:
                violations.append(f"Vertex {v} is visited more than once.")
            seen.add(v)

        if self.cost > budget:
            violations.append(
                f"Cost {self.cost:.4f} exceeds budget {budget:.4f}."
            )

        recomputed = Solution.evaluate(self.path, graph)
        if not math.isclose(recomputed.score, self.score, abs_tol=1e-9):
            violations.append(
                f"Stated score {self.score:.4f} differs from recomputed "
                f"{recomputed.score:.4f}."
            )
        if not math.isclose(recomputed.cost, self.cost, abs_tol=1e-9):
            violations.append(
                f"Stated cost {self.cost:.4f} differs from recomputed "
                f"{recomputed.cost:.4f}."
            )
        return violations
