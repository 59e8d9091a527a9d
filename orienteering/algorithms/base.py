"""Interfaces shared by every path generator and path improver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from orienteering.models.graph import Graph
from orienteering.models.solution import Solution


@runtime_checkable
class PathGenerator(Protocol):
    """Builds a start-to-end path within a cost budget.

    Implementations return ``None`` when their method finds no path whose
    cost stays within ``budget``; that is a normal outcome, not an error.
    A returned solution always satisfies ``solution.cost <= budget``.
    """

    def generate_path(
        self, graph: Graph, start: int, end: int, budget: float
    ) -> Solution | None: ...


@runtime_checkable
class PathAdapter(Protocol):
    """Post-processes a solution without breaking the budget.

    The result never has a lower score than the input, and never a higher
    cost unless its score is strictly higher.
    """

    def adapt_path(self, graph: Graph, solution: Solution, budget: float) -> Solution: ...


@dataclass
class Chain:
    """A generator followed by an improver, usable as a generator itself.

    Attributes:
        generator: Produces the initial solution.
        adapter: Improves whatever the generator produced.
    """

    generator: PathGenerator
    adapter: PathAdapter

    def generate_path(
        self, graph: Graph, start: int, end: int, budget: float
    ) -> Solution | None:
        solution = self.generator.generate_path(graph, start, end, budget)
        if solution is None:
            return None
        return self.adapter.adapt_path(graph, solution, budget)


def check_endpoints(graph: Graph, start: int, end: int) -> None:
    """Reject start/end indices no path could connect.

    Raises:
        ValueError: If either index is out of range or both are equal.
    """
    n = len(graph)
    for name, vertex in (("start", start), ("end", end)):
        if not 0 <= vertex < n:
            raise ValueError(f"{name} vertex {vertex} is not in [0, {n})")
    if start == end:
        raise ValueError(f"start and end must differ, both are {start}")
