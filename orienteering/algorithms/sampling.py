"""Weighted random selection shared by all randomized heuristics."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import TypeVar

from orienteering.errors import EmptyCandidateSetError

T = TypeVar("T")


def weighted_index(weights: Sequence[float], rng: random.Random) -> int:
    """Draw an index with probability proportional to its weight.

    Infinite weights dominate every finite one: when any are present the
    draw is uniform among them.

    Args:
        weights: Non-negative weights, one per candidate.
        rng: Random source owned by the calling algorithm.

    Returns:
        Index into ``weights``.

    Raises:
        EmptyCandidateSetError: If ``weights`` is empty or all zero.
        ValueError: If a weight is negative or NaN.
    """
    if not weights:
        raise EmptyCandidateSetError("cannot choose from an empty candidate set")
    for i, w in enumerate(weights):
        if math.isnan(w) or w < 0:
            raise ValueError(f"weight {i} is {w}; weights must be non-negative")

    infinite = [i for i, w in enumerate(weights) if math.isinf(w)]
    if infinite:
        return rng.choice(infinite)
    if sum(weights) <= 0:
        raise EmptyCandidateSetError(
            f"all {len(weights)} candidate weights are zero"
        )
    return rng.choices(range(len(weights)), weights=weights)[0]


def choose_weighted(
    candidates: Sequence[T],
    weights: Sequence[float],
    rng: random.Random,
) -> T:
    """Pick one candidate by weight, uniformly if every weight is zero.

    Raises:
        EmptyCandidateSetError: If ``candidates`` is empty.
    """
    if len(candidates) != len(weights):
        raise ValueError(
            f"{len(candidates)} candidates but {len(weights)} weights"
        )
    if candidates and not any(weights):
        return candidates[rng.randrange(len(candidates))]
    return candidates[weighted_index(weights, rng)]
