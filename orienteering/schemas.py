"""Pydantic v2 schema for solutions written to disk by the CLI.

Decoupled from the internal ``Solution`` dataclass so the JSON layout stays
stable when the in-memory model changes.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator, model_validator

from orienteering.models.solution import Solution


class SolutionRecord(BaseModel):
    """The best path found for one instance run.

    Attributes:
        algorithm: Name of the algorithm (chain) that produced the path.
        start: Start vertex of the instance.
        end: End vertex of the instance.
        budget: Cost budget the path had to respect.
        path: Vertex indices in visiting order.
        score: Total prize collected.
        cost: Total travel cost.
    """

    algorithm: str
    start: int
    end: int
    budget: float
    path: list[int]
    score: float
    cost: float

    @field_validator("path")
    @classmethod
    def at_least_one_vertex(cls, v: list[int]) -> list[int]:
        """Ensure the path is non-empty and has no repeated vertex."""
        if len(v) < 1:
            raise ValueError("path must contain at least one vertex.")
        if len(set(v)) != len(v):
            raise ValueError("path must not visit a vertex twice.")
        return v

    @field_validator("score", "cost")
    @classmethod
    def non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("score and cost must be non-negative.")
        return v

    @model_validator(mode="after")
    def endpoints_and_budget(self) -> SolutionRecord:
        """Ensure the path connects start to end within the budget."""
        if self.path[0] != self.start or self.path[-1] != self.end:
            raise ValueError(
                f"path must run from {self.start} to {self.end}, "
                f"got {self.path[0]} .. {self.path[-1]}."
            )
        if self.cost > self.budget:
            raise ValueError(f"cost {self.cost} exceeds budget {self.budget}.")
        return self

    @classmethod
    def from_solution(
        cls,
        solution: Solution,
        algorithm: str,
        start: int,
        end: int,
        budget: float,
    ) -> SolutionRecord:
        """Build a record from an in-memory Solution."""
        return cls(
            algorithm=algorithm,
            start=start,
            end=end,
            budget=budget,
            path=list(solution.path),
            score=solution.score,
            cost=solution.cost,
        )
