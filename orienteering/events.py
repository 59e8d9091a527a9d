"""Structured search events and the observers that receive them.

Algorithms report what they do by handing ``SearchEvent`` objects to an
optional observer.  Observers are side-effect only: they must not raise into
the search, feed back into its decisions, or draw from its random source.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol

from rich.console import Console


class EventLevel(IntEnum):
    """Severity of a search event, lowest first."""

    TRACE = 10
    DEBUG = 20
    INFO = 30


@dataclass(frozen=True)
class SearchEvent:
    """One thing that happened inside a search.

    Attributes:
        source: Short name of the emitting algorithm, e.g. ``"s-algorithm"``.
        name: Event name, e.g. ``"memory.inserted"``.
        level: Severity used for filtering.
        data: Event-specific payload.
    """

    source: str
    name: str
    level: EventLevel = EventLevel.DEBUG
    data: Mapping[str, Any] = field(default_factory=dict)


class SearchObserver(Protocol):
    """Anything that can receive search events."""

    def notify(self, event: SearchEvent) -> None: ...


def emit(
    observer: SearchObserver | None,
    source: str,
    name: str,
    level: EventLevel = EventLevel.DEBUG,
    **data: Any,
) -> None:
    """Send an event to ``observer`` if there is one."""
    if observer is not None:
        observer.notify(SearchEvent(source, name, level, data))


class RecordingObserver:
    """Keep every received event in memory, in arrival order."""

    def __init__(self) -> None:
        self.events: list[SearchEvent] = []

    def notify(self, event: SearchEvent) -> None:
        self.events.append(event)

    def named(self, name: str) -> list[SearchEvent]:
        """Return the recorded events called ``name``."""
        return [e for e in self.events if e.name == name]


class ConsoleObserver:
    """Print events at or above a minimum level to a rich console.

    Attributes:
        console: Destination console; stderr by default so it never mixes
            with the solution summary on stdout.
        min_level: Events below this level are dropped.
    """

    _STYLES = {
        EventLevel.TRACE: "dim",
        EventLevel.DEBUG: "cyan",
        EventLevel.INFO: "bold green",
    }

    def __init__(
        self,
        min_level: EventLevel = EventLevel.INFO,
        console: Console | None = None,
    ) -> None:
        self.min_level = min_level
        self.console = console or Console(stderr=True)

    def notify(self, event: SearchEvent) -> None:
        if event.level < self.min_level:
            return
        payload = " ".join(f"{k}={v}" for k, v in event.data.items())
        self.console.print(
            f"[{event.source}] {event.name} {payload}".rstrip(),
            style=self._STYLES[event.level],
            markup=False,
            highlight=False,
        )
