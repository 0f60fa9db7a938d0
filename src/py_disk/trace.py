"""Trace records — what a simulation run produces.

A run is described by an ordered list of **steps**.  Each step is one
head movement: where it started, where it stopped, how far it went, and
what the queues looked like when the move began.  Zero-distance steps
are legal (servicing a request the head is already sitting on).

Not every movement services a request:

- ``StepKind.SERVICE`` — the head moves to a request and services it.
- ``StepKind.EDGE`` — SCAN-style sweep to the physical edge of the disk.
- ``StepKind.WRAP`` — circular return to the far side.  C-SCAN's wrap
  services nothing; C-LOOK's wrap lands on a request and services it.

The ``request_id`` field is the single source of truth for "was
something serviced here", so callers never need to guess from the kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Direction(StrEnum):
    """Sweep direction of the head."""

    ASC = "asc"
    DESC = "desc"

    @property
    def going_up(self) -> bool:
        """Return True for the ascending direction."""
        return self is Direction.ASC


class StepKind(StrEnum):
    """Why the head moved."""

    SERVICE = "service"
    EDGE = "edge"
    WRAP = "wrap"


@dataclass(frozen=True)
class Step:
    """One recorded head movement.

    Attributes:
        from_track: Track where the move begins.
        to_track: Track where the move ends.
        distance: Tracks traversed, ``abs(to_track - from_track)``.
        remaining: Tracks in the Active queue when the move began.
        instant: Simulated time at which the move begins.
        kind: Why the head moved (service, edge sweep, or wrap).
        arrival_instant: Arrival time of the serviced request, if any.
        buffer: Tracks waiting outside the Active queue, for the
            algorithms that keep such a queue.
        request_id: Id of the serviced request, or None.

    """

    from_track: int
    to_track: int
    distance: int
    remaining: tuple[int, ...]
    instant: float
    kind: StepKind = StepKind.SERVICE
    arrival_instant: float | None = None
    buffer: tuple[int, ...] | None = None
    request_id: int | None = None

    @property
    def is_service(self) -> bool:
        """Return True if this movement serviced a request."""
        return self.request_id is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON view of this step (camelCase keys)."""
        data: dict[str, Any] = {
            "from": self.from_track,
            "to": self.to_track,
            "distance": self.distance,
            "remaining": list(self.remaining),
            "instant": self.instant,
            "kind": str(self.kind),
        }
        if self.buffer is not None:
            data["buffer"] = list(self.buffer)
        if self.arrival_instant is not None:
            data["arrivalInstant"] = self.arrival_instant
        return data


@dataclass(frozen=True)
class AlgorithmResult:
    """The complete, immutable outcome of one simulation run.

    Attributes:
        sequence: Tracks visited *for service*, in order.  Edge sweeps
            and non-servicing wraps are not listed.
        total_tracks: Sum of every step distance, service or not.
        steps: Every head movement, in order.
        total_time: Final value of the simulated clock.

    """

    sequence: tuple[int, ...]
    total_tracks: int
    steps: tuple[Step, ...]
    total_time: float

    @classmethod
    def from_steps(cls, steps: tuple[Step, ...], *, total_time: float) -> AlgorithmResult:
        """Build a result, deriving the sequence and track total from *steps*."""
        return cls(
            sequence=tuple(s.to_track for s in steps if s.is_service),
            total_tracks=sum(s.distance for s in steps),
            steps=steps,
            total_time=total_time,
        )

    def service_steps(self) -> list[Step]:
        """Return only the steps that serviced a request."""
        return [s for s in self.steps if s.is_service]

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON view of this result (camelCase keys)."""
        return {
            "sequence": list(self.sequence),
            "totalTracks": self.total_tracks,
            "steps": [s.to_dict() for s in self.steps],
            "totalTime": self.total_time,
        }
