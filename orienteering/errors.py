"""Exception hierarchy for the orienteering solver.

Two families matter to callers:

* ``ConfigurationError`` is raised synchronously when an algorithm
  configuration is built with out-of-range values.
* ``FatalInvariantError`` signals a broken precondition (an incomplete graph,
  an empty candidate set reaching a weighted choice).  These abort the
  current search; they are never part of the normal "no feasible path"
  outcome, which is reported as ``None``.

Instance-file problems are reported by the loader through
``InstanceReadError`` and its subclasses.
"""

from __future__ import annotations

from typing import Any


class OrienteeringError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(OrienteeringError, ValueError):
    """An algorithm parameter is outside its permitted range.

    Attributes:
        field: Name of the offending configuration field.
        value: The rejected value.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid {field}={value!r}: {reason}")


class FatalInvariantError(OrienteeringError, RuntimeError):
    """A precondition the algorithms rely on does not hold."""


class IncompleteGraphError(FatalInvariantError):
    """The graph lacks an edge between two distinct vertices.

    Attributes:
        u: First vertex of the missing edge.
        v: Second vertex of the missing edge.
    """

    def __init__(self, u: int, v: int) -> None:
        self.u = u
        self.v = v
        super().__init__(
            f"graph is not complete: no edge between vertex {u} and vertex {v}"
        )


class EmptyCandidateSetError(FatalInvariantError):
    """A weighted choice was requested over no usable candidates."""


class InstanceReadError(OrienteeringError):
    """Base class for instance-file parsing failures."""


class MissingTokenError(InstanceReadError):
    """A line ended before all required fields were read.

    Attributes:
        field: Name of the missing field.
        line: 1-based line number in the source file.
    """

    def __init__(self, field: str, line: int) -> None:
        self.field = field
        self.line = line
        super().__init__(f"line {line}: missing token \"{field}\"")


class InvalidTokenError(InstanceReadError):
    """A token could not be parsed as the type its field requires.

    Attributes:
        token: The raw token text.
        field: Name of the field the token belongs to.
        expected_type: Human-readable name of the expected type.
        line: 1-based line number in the source file.
    """

    def __init__(self, token: str, field: str, expected_type: str, line: int) -> None:
        self.token = token
        self.field = field
        self.expected_type = expected_type
        self.line = line
        super().__init__(
            f"line {line}: invalid token \"{token}\" for {field}, "
            f"expected {expected_type}"
        )
