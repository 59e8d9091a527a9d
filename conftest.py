"""Root pytest configuration for the orienteering test suite.

* Tests marked ``property`` receive a ``seed`` argument and are run once per
  seed.  The number of seeds defaults to 20 and can be raised for a longer
  soak with ``ORIENTEERING_PROPERTY_SEEDS=200``.
* Shared graph fixtures live here so every test module builds instances the
  same way.
"""

from __future__ import annotations

import os
import random
from collections.abc import Callable

import matplotlib
import pytest

from orienteering.models.graph import Graph

matplotlib.use("Agg")

_DEFAULT_PROPERTY_SEEDS = 20


def _property_seed_count() -> int:
    raw = os.environ.get("ORIENTEERING_PROPERTY_SEEDS", "").strip()
    return int(raw) if raw else _DEFAULT_PROPERTY_SEEDS


# ---------------------------------------------------------------------------
# pytest hooks
# ---------------------------------------------------------------------------

def pytest_report_header(config: pytest.Config) -> list[str]:
    """Emit a status banner at the top of every test run."""
    sep = "─" * 60
    return [
        sep,
        "Orienteering Test Suite",
        f"  Property seeds : {_property_seed_count()}  "
        "(set ORIENTEERING_PROPERTY_SEEDS to change)",
        sep,
    ]


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrise ``property`` tests over a range of RNG seeds."""
    if "seed" in metafunc.fixturenames and metafunc.definition.get_closest_marker(
        "property"
    ):
        metafunc.parametrize("seed", range(_property_seed_count()))


# ---------------------------------------------------------------------------
# Graph fixtures
# ---------------------------------------------------------------------------

def _build_random_graph(rng: random.Random, n: int | None = None) -> Graph:
    n = n if n is not None else rng.randint(3, 12)
    positions = [(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(n)]
    prizes = [0.0 if rng.random() < 0.15 else float(rng.randint(1, 50)) for _ in range(n)]
    return Graph.from_positions(prizes, positions)


@pytest.fixture()
def random_graph() -> Callable[..., Graph]:
    """Factory for small complete graphs with random prizes and costs.

    Call it as ``random_graph(rng, n=None)``.  Costs are Euclidean distances
    between random points, so the triangle inequality holds; a few prizes
    are zero.
    """
    return _build_random_graph


@pytest.fixture()
def chain_graph() -> Graph:
    """``s - v1 - v2 - e`` with chain edges of 10 and cross edges of 20."""
    return Graph.from_edges(
        [0.0, 100.0, 100.0, 0.0],
        {
            (0, 1): 10.0,
            (1, 2): 10.0,
            (2, 3): 10.0,
            (0, 2): 20.0,
            (0, 3): 20.0,
            (1, 3): 20.0,
        },
    )


@pytest.fixture()
def line_graph() -> Graph:
    """Six vertices on a line at x = 0..5, prize equal to the index."""
    return Graph.from_positions(
        [0.0, 1.0, 2.0, 3.0, 4.0, 5.0],
        [(float(x), 0.0) for x in range(6)],
    )
