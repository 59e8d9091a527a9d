"""Unit tests for orienteering/schemas.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from orienteering.models.graph import Graph
from orienteering.models.solution import Solution
from orienteering.schemas import SolutionRecord


def _record(**overrides) -> SolutionRecord:
    fields = {
        "algorithm": "s-algorithm",
        "start": 0,
        "end": 3,
        "budget": 30.0,
        "path": [0, 1, 2, 3],
        "score": 200.0,
        "cost": 30.0,
    }
    fields.update(overrides)
    return SolutionRecord(**fields)


def test_from_solution(chain_graph: Graph) -> None:
    sol = Solution.evaluate([0, 1, 2, 3], chain_graph)
    record = SolutionRecord.from_solution(sol, "harmony-search+ri", 0, 3, 30.0)
    assert record.path == [0, 1, 2, 3]
    assert record.score == 200.0
    assert record.algorithm == "harmony-search+ri"


def test_json_round_trip() -> None:
    record = _record()
    assert SolutionRecord.model_validate_json(record.model_dump_json()) == record


def test_empty_path_rejected() -> None:
    with pytest.raises(ValidationError, match="at least one vertex"):
        _record(path=[])


def test_repeated_vertex_rejected() -> None:
    with pytest.raises(ValidationError, match="twice"):
        _record(path=[0, 1, 1, 3])


def test_wrong_endpoints_rejected() -> None:
    with pytest.raises(ValidationError, match="must run from 0 to 3"):
        _record(path=[0, 1, 2])


def test_over_budget_rejected() -> None:
    with pytest.raises(ValidationError, match="exceeds budget"):
        _record(cost=31.0)


def test_negative_score_rejected() -> None:
    with pytest.raises(ValidationError, match="non-negative"):
        _record(score=-1.0)
