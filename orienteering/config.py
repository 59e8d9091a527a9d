"""Global constants and algorithm configuration for the orienteering solver.

Every configuration record validates itself on construction, so an
out-of-range value is reported before any search begins.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from orienteering.errors import ConfigurationError

#: Weight of the prize rank in the pitch-adjustment composite weight.
PITCH_PRIZE_WEIGHT: float = 0.8

#: Weight of the proximity rank in the pitch-adjustment composite weight.
PITCH_DISTANCE_WEIGHT: float = 0.2

#: The initial harmony memory gives up after this many failures per slot.
MEMORY_FAILURE_FACTOR: int = 2


def _require_rate(field: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(field, value, "must be a finite number")
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(field, value, "must be between 0 and 1")


@dataclass(frozen=True)
class SAlgorithmConfig:
    """Hyperparameters for Tsiligirides' S-Algorithm.

    Attributes:
        power_factor: Greediness exponent applied to the prize/cost ratio.
            ``0`` makes every affordable candidate equally likely.
        num_considered: Size of the shortlist sampled from at each step.
    """

    power_factor: float = 0.5
    num_considered: int = 10

    def __post_init__(self) -> None:
        if not isinstance(self.power_factor, (int, float)) or not math.isfinite(
            self.power_factor
        ):
            raise ConfigurationError(
                "power_factor", self.power_factor, "must be a finite number"
            )
        if self.power_factor < 0:
            raise ConfigurationError(
                "power_factor", self.power_factor, "must not be negative"
            )
        if not isinstance(self.num_considered, int) or self.num_considered < 1:
            raise ConfigurationError(
                "num_considered", self.num_considered, "must be a positive integer"
            )


@dataclass(frozen=True)
class HarmonySearchConfig:
    """Hyperparameters for the harmony-search metaheuristic.

    Attributes:
        harmony_memory_size: Maximum number of solutions kept in memory.
        hmcr: Harmony Memory Consideration Rate, the probability that the
            next vertex is derived from memory rather than chosen at random.
        par: Pitch Adjustment Rate, the probability that a memory-derived
            choice is replaced by the prize/proximity heuristic.
        iterations: Number of improvisation rounds.
    """

    harmony_memory_size: int = 10
    hmcr: float = 0.9
    par: float = 0.3
    iterations: int = 1000

    def __post_init__(self) -> None:
        if (
            not isinstance(self.harmony_memory_size, int)
            or self.harmony_memory_size <= 0
        ):
            raise ConfigurationError(
                "harmony_memory_size",
                self.harmony_memory_size,
                "must be greater than 0",
            )
        _require_rate("hmcr", self.hmcr)
        _require_rate("par", self.par)
        if not isinstance(self.iterations, int) or self.iterations < 0:
            raise ConfigurationError(
                "iterations", self.iterations, "must be a non-negative integer"
            )


@dataclass(frozen=True)
class RIConfig:
    """Settings for the reorder/insert local-search improver.

    Attributes:
        rounds: Number of reorder + augment rounds to apply.
    """

    rounds: int = 10

    def __post_init__(self) -> None:
        if not isinstance(self.rounds, int) or self.rounds < 0:
            raise ConfigurationError(
                "rounds", self.rounds, "must be a non-negative integer"
            )
