"""Status sinks for pipeline progress and diagnostics.

Every stage receives a ``StatusSink`` explicitly and reports through it:

- ``update(text)``  — stage transition / progress text.
- ``warn(text)``    — non-fatal diagnostic (e.g. unknown type code).
- ``error(text)``   — non-fatal error-level diagnostic (e.g. missing code).
- ``fail(text)``    — fatal failure; the run stops after this.
- ``succeed(text)`` — the run completed.

The pipeline never consumes a return value from a sink.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field

logger = logging.getLogger("shp_geojson.status")


class StatusSink(abc.ABC):
    """Abstract receiver of pipeline status events."""

    @abc.abstractmethod
    def update(self, text: str) -> None:
        """Report progress text for the current stage."""

    @abc.abstractmethod
    def warn(self, text: str) -> None:
        """Report a non-fatal warning."""

    @abc.abstractmethod
    def error(self, text: str) -> None:
        """Report a non-fatal error-level diagnostic."""

    @abc.abstractmethod
    def fail(self, text: str) -> None:
        """Report a fatal failure."""

    @abc.abstractmethod
    def succeed(self, text: str) -> None:
        """Report successful completion."""


class LoggingStatusSink(StatusSink):
    """Forward status events to a stdlib logger.

    Progress updates are logged at DEBUG so that a default INFO console
    only shows diagnostics and the final outcome.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def update(self, text: str) -> None:
        self._log.debug(text)

    def warn(self, text: str) -> None:
        self._log.warning(text)

    def error(self, text: str) -> None:
        self._log.error(text)

    def fail(self, text: str) -> None:
        self._log.error("FAILED | %s", text)

    def succeed(self, text: str) -> None:
        self._log.info(text)


@dataclass(frozen=True, slots=True)
class StatusEvent:
    """A single recorded status event."""

    level: str
    text: str


@dataclass
class RecordingStatusSink(StatusSink):
    """Collect status events in memory (tests, dry runs)."""

    events: list[StatusEvent] = field(default_factory=list)

    def update(self, text: str) -> None:
        self.events.append(StatusEvent("update", text))

    def warn(self, text: str) -> None:
        self.events.append(StatusEvent("warn", text))

    def error(self, text: str) -> None:
        self.events.append(StatusEvent("error", text))

    def fail(self, text: str) -> None:
        self.events.append(StatusEvent("fail", text))

    def succeed(self, text: str) -> None:
        self.events.append(StatusEvent("succeed", text))

    def texts(self, level: str) -> list[str]:
        """Return the texts of all events recorded at *level*."""
        return [event.text for event in self.events if event.level == level]
