"""Simulation log — a structured trace of what the disk head decided.

The step list in an ``AlgorithmResult`` says *where* the head went.  The
log says *why*: a request was intercepted on the way, the arm bounced
off an edge, a frozen batch was sealed, the clock skipped ahead while
the queue sat empty.

Like a kernel's ``dmesg`` buffer, the logger is a plain append-only list
of records:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source,
  simulated instant).
- **Logger** — an append-only log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Simulated time, not wall time** — entries carry the simulation
      clock, so two runs with the same input produce the same log.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.

    The simulator writes state transitions at DEBUG, head decisions at
    INFO, and tolerated oddities in the input (a C-SCAN wrap landing
    outside the disk bounds) at WARNING.  ERROR is left to callers that
    share the logger.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The algorithm that generated the event (e.g. "C-SCAN").
        instant: The simulated clock value when the event happened.

    """

    level: LogLevel
    message: str
    source: str
    instant: float = 0

    def __str__(self) -> str:
        """Format as ``[LEVEL] t=instant source: message``."""
        return f"[{self.level.name}] t={self.instant:g} {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    The logger collects ``LogEntry`` records and provides simple
    querying by level and/or source.  One logger may be shared by
    several simulations; the ``source`` field tells them apart.
    """

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        instant: float = 0,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Algorithm that generated the event.
            instant: Simulated time of the event.

        """
        self._entries.append(
            LogEntry(level=level, message=message, source=source, instant=instant)
        )

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def lines(self) -> list[str]:
        """Return every entry formatted as a display line."""
        return [str(e) for e in self._entries]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
