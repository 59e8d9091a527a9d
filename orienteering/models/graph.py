"""Complete, undirected, weighted graph for the Orienteering Problem."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np

from orienteering.errors import IncompleteGraphError


class Graph:
    """Immutable complete graph with per-vertex prizes and per-edge costs.

    Vertices are the dense indices ``0 .. n-1``.  Edge costs live in a
    symmetric ``n x n`` matrix whose diagonal is zero; the matrix is marked
    read-only so a graph can be shared between independent searches.

    Completeness is checked once here.  A ``NaN`` entry off the diagonal
    means the edge is missing and raises ``IncompleteGraphError``; ``inf``
    is a legitimate (never affordable) cost.

    Attributes:
        prizes: Prize of every vertex, indexed by vertex.
        costs: Read-only ``n x n`` cost matrix.
    """

    def __init__(self, prizes: Sequence[float], costs: np.ndarray | Sequence[Sequence[float]]) -> None:
        """Validate and store prizes and edge costs.

        Args:
            prizes: Non-negative prize per vertex.
            costs: Square, symmetric matrix of non-negative edge costs.

        Raises:
            IncompleteGraphError: If an off-diagonal cost is missing (NaN).
            ValueError: If shapes disagree, or any prize or cost is negative,
                or the matrix is not symmetric.
        """
        prize_array = np.asarray(prizes, dtype=float)
        cost_matrix = np.array(costs, dtype=float)
        if prize_array.ndim != 1:
            raise ValueError("prizes must be a flat sequence")
        n = prize_array.shape[0]

        if cost_matrix.shape != (n, n):
            raise ValueError(
                f"cost matrix shape {cost_matrix.shape} does not match "
                f"{n} vertices"
            )
        if np.isnan(prize_array).any() or (prize_array < 0).any():
            bad = int(np.flatnonzero(np.isnan(prize_array) | (prize_array < 0))[0])
            raise ValueError(f"vertex {bad} has invalid prize {prize_array[bad]}")

        np.fill_diagonal(cost_matrix, 0.0)
        missing = np.argwhere(np.isnan(cost_matrix))
        if missing.size:
            u, v = sorted(int(i) for i in missing[0])
            raise IncompleteGraphError(u, v)
        if (cost_matrix < 0).any():
            u, v = (int(i) for i in np.argwhere(cost_matrix < 0)[0])
            raise ValueError(
                f"edge ({u}, {v}) has negative cost {cost_matrix[u, v]}"
            )
        if not np.array_equal(cost_matrix, cost_matrix.T):
            u, v = (int(i) for i in np.argwhere(cost_matrix != cost_matrix.T)[0])
            raise ValueError(
                f"graph must be undirected: cost({u}, {v}) != cost({v}, {u})"
            )

        cost_matrix.setflags(write=False)
        self.costs: np.ndarray = cost_matrix
        self.prizes: tuple[float, ...] = tuple(float(p) for p in prize_array)
        # Nested lists keep the hot lookups free of numpy scalar overhead.
        self._cost_rows: list[list[float]] = cost_matrix.tolist()

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_edges(
        cls,
        prizes: Sequence[float],
        edges: Mapping[tuple[int, int], float],
    ) -> Graph:
        """Build a graph from an explicit ``{(u, v): cost}`` mapping.

        Each unordered pair needs exactly one entry in either orientation.

        Raises:
            IncompleteGraphError: If some pair of vertices has no entry.
        """
        n = len(prizes)
        matrix = np.full((n, n), math.nan)
        for (u, v), cost in edges.items():
            if u == v:
                continue
            matrix[u, v] = cost
            matrix[v, u] = cost
        return cls(prizes, matrix)

    @classmethod
    def from_positions(
        cls,
        prizes: Sequence[float],
        positions: Sequence[tuple[float, float]],
    ) -> Graph:
        """Build a graph whose edge costs are Euclidean distances."""
        coords = np.asarray(positions, dtype=float).reshape(-1, 2)
        deltas = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
        return cls(prizes, np.sqrt((deltas**2).sum(axis=-1)))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.prizes)

    @property
    def vertices(self) -> range:
        """All vertex indices."""
        return range(len(self.prizes))

    def prize(self, v: int) -> float:
        """Return the prize collected at vertex ``v``."""
        return self.prizes[v]

    def cost(self, u: int, v: int) -> float:
        """Return the cost of the edge between ``u`` and ``v``."""
        return self._cost_rows[u][v]

    def ratio(self, current: int, v: int) -> float:
        """Prize of ``v`` per unit of cost of reaching it from ``current``.

        A free edge yields ``inf`` for a rewarding vertex and ``0`` for a
        worthless one.
        """
        prize = self.prizes[v]
        cost = self._cost_rows[current][v]
        if cost > 0:
            return prize / cost
        return math.inf if prize > 0 else 0.0

    def __repr__(self) -> str:
        return f"Graph(n={len(self)}, total_prize={sum(self.prizes):.4f})"
