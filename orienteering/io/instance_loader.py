"""I/O utilities for reading orienteering instance files.

Instance files use whitespace-delimited columns with no header row, one
vertex per line::

    x  y  score

Edge costs are not stored; they are the Euclidean distances between every
pair of vertices.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from orienteering.errors import InvalidTokenError, MissingTokenError
from orienteering.models.graph import Graph

_FIELDS = ("x coordinate", "y coordinate", "score")


@dataclass(frozen=True)
class Instance:
    """A loaded instance.

    Attributes:
        graph: Complete Euclidean graph with vertex scores as prizes.
        positions: ``(x, y)`` of every vertex, indexed like the graph.
    """

    graph: Graph
    positions: list[tuple[float, float]]


def _read_rows(path: str | Path) -> list[tuple[int, list[str]]]:
    """Read a whitespace-delimited file and return non-empty rows of tokens.

    Args:
        path: Filesystem path to the input file.

    Returns:
        ``(line_number, tokens)`` for every non-blank line, 1-based.
    """
    with open(path) as fh:
        return [
            (number, line.split())
            for number, line in enumerate(fh, start=1)
            if line.strip()
        ]


def _parse_float(token: str, field: str, line: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise InvalidTokenError(token, field, "floating point number", line) from None


def parse_row(tokens: list[str], line: int) -> tuple[float, float, float]:
    """Parse one ``x y score`` row; extra trailing tokens are ignored.

    Raises:
        MissingTokenError: If the row has fewer than three tokens.
        InvalidTokenError: If a token is not a number.
    """
    values = []
    for index, field in enumerate(_FIELDS):
        if index >= len(tokens):
            raise MissingTokenError(field, line)
        values.append(_parse_float(tokens[index], field, line))
    x, y, score = values
    return x, y, score


def load_instance(path: str | Path) -> Instance:
    """Load an instance file into a complete Euclidean graph.

    Args:
        path: Path to the instance file.

    Returns:
        The parsed Instance.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InstanceReadError: If a line cannot be parsed.
    """
    positions: list[tuple[float, float]] = []
    prizes: list[float] = []
    for line, tokens in _read_rows(path):
        x, y, score = parse_row(tokens, line)
        positions.append((x, y))
        prizes.append(score)
    return Instance(Graph.from_positions(prizes, positions), positions)
