"""Visualisation utilities for orienteering solutions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt

from orienteering.models.graph import Graph
from orienteering.models.solution import Solution


def plot_solution(
    positions: Sequence[tuple[float, float]],
    graph: Graph,
    solution: Solution,
    output_path: str | Path = "plot.png",
    show: bool = True,
) -> None:
    """Render vertex locations with the chosen path drawn on top.

    Marker area grows with the vertex prize; visited vertices are red, the
    start and end vertices are drawn as squares.

    Args:
        positions: ``(x, y)`` of every vertex, indexed like ``graph``.
        graph: The instance graph, used for prizes.
        solution: The path to draw.
        output_path: Filesystem path for the saved PNG image.
        show: Whether to call ``plt.show()`` after saving.
    """
    fig, ax = plt.subplots(figsize=(10, 8))

    max_prize = max(graph.prizes, default=0.0) or 1.0
    sizes = [20 + 180 * graph.prize(v) / max_prize for v in graph.vertices]
    visited = set(solution.path)
    colors = ["red" if v in visited else "lightgray" for v in graph.vertices]
    xs = [p[0] for p in positions]
    ys = [p[1] for p in positions]
    ax.scatter(xs, ys, s=sizes, c=colors, edgecolors="black", zorder=3)

    path_x = [positions[v][0] for v in solution.path]
    path_y = [positions[v][1] for v in solution.path]
    ax.plot(path_x, path_y, color="red", linewidth=1.5, zorder=2, label="Path")

    for v, marker, label in ((solution.path[0], "s", "Start"), (solution.path[-1], "D", "End")):
        ax.scatter(
            [positions[v][0]], [positions[v][1]],
            marker=marker, s=120, c="black", zorder=4, label=label,
        )

    ax.set_xlabel("X Coordinate")
    ax.set_ylabel("Y Coordinate")
    ax.legend(loc="best")
    ax.set_title(
        f"Score {solution.score:.2f} / cost {solution.cost:.2f} "
        f"({len(solution.path)} vertices)"
    )
    fig.tight_layout()
    fig.savefig(output_path, bbox_inches="tight")

    if show:
        plt.show()
    plt.close(fig)


def to_dot(graph: Graph, solution: Solution | None = None) -> str:
    """Render ``graph`` as Graphviz DOT, highlighting ``solution`` in red.

    Args:
        graph: The instance graph.
        solution: Optional path to highlight.

    Returns:
        The DOT source of an undirected graph.
    """
    path = solution.path if solution is not None else ()
    on_path = set(path)
    path_edges = {frozenset(pair) for pair in zip(path, path[1:])}

    lines = ["graph {"]
    for v in graph.vertices:
        attrs = f'label="{v} ({graph.prize(v):g})"'
        if v in on_path:
            attrs += ", color=red"
        lines.append(f"    {v} [ {attrs} ]")
    for u in graph.vertices:
        for v in range(u + 1, len(graph)):
            attrs = f'label="{graph.cost(u, v):g}"'
            if frozenset((u, v)) in path_edges:
                attrs += ", color=red"
            lines.append(f"    {u} -- {v} [ {attrs} ]")
    lines.append("}")
    return "\n".join(lines) + "\n"
