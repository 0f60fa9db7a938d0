"""Simulation engine — the disk head, the clock, and the trace.

Every algorithm in this package is a loop that asks the same few
questions ("is there a request here?", "what is the nearest one
ahead?") and then does one of the same few things:

- **service** a request (move to its track, pay seek + service time),
- **move** without servicing (sweep to an edge, wrap around),
- **wait** for the next arrival (the clock jumps, the head stays put),
- **reverse** the sweep direction.

``Simulation`` owns the mutable state those actions touch: head
position, direction, clock, and the step list.  Calculators own the
queues and the decisions.

The head is also an explicit state machine::

    IDLE ──▶ SWEEPING / DRAINING ──▶ WAITING ──▶ SWEEPING / DRAINING
                    │      ▲
                    ▼      │
                  WRAPPING ┘            ... ──▶ IDLE (result taken)

``SWEEPING`` is used by algorithms that admit requests as they arrive;
``DRAINING`` by the batch algorithms, which work through a sealed set.
Every transition is written to the log (when one is attached), which
makes a run easy to follow step by step.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from py_disk.logging import LogLevel
from py_disk.trace import AlgorithmResult, Direction, Step, StepKind

if TYPE_CHECKING:
    from py_disk.logging import Logger
    from py_disk.requests import DiskRequest


class HeadState(StrEnum):
    """What the disk head is currently doing."""

    IDLE = "idle"
    SWEEPING = "sweeping"
    WAITING = "waiting"
    DRAINING = "draining"
    WRAPPING = "wrapping"


class Simulation:
    """Mutable state of one run: head, direction, clock, and steps.

    Args:
        source: Algorithm tag, used as the log source.
        head: Initial track of the head.
        direction: Initial sweep direction.
        time_per_track: Seek cost of crossing one track.
        time_per_request: Fixed overhead paid after each service.
        mode: State entered while moving (SWEEPING or DRAINING).
        logger: Optional log that receives decisions and transitions.

    """

    def __init__(
        self,
        *,
        source: str,
        head: int,
        direction: Direction = Direction.ASC,
        time_per_track: float = 1,
        time_per_request: float = 0,
        mode: HeadState = HeadState.SWEEPING,
        logger: Logger | None = None,
    ) -> None:
        """Create a simulation with the head parked at *head*."""
        self._source = source
        self._head = head
        self._going_up = direction.going_up
        self._time_per_track = time_per_track
        self._time_per_request = time_per_request
        self._mode = mode
        self._logger = logger
        self._clock: float = 0
        self._state = HeadState.IDLE
        self._steps: list[Step] = []

    @property
    def head(self) -> int:
        """Return the current head track."""
        return self._head

    @property
    def clock(self) -> float:
        """Return the current simulated time."""
        return self._clock

    @property
    def going_up(self) -> bool:
        """Return True while sweeping towards higher tracks."""
        return self._going_up

    @property
    def direction(self) -> Direction:
        """Return the current sweep direction."""
        return Direction.ASC if self._going_up else Direction.DESC

    @property
    def time_per_track(self) -> float:
        """Return the seek cost of one track."""
        return self._time_per_track

    @property
    def state(self) -> HeadState:
        """Return the current head state."""
        return self._state

    @property
    def steps(self) -> tuple[Step, ...]:
        """Return the steps recorded so far."""
        return tuple(self._steps)

    def log(self, message: str, *, level: LogLevel = LogLevel.INFO) -> None:
        """Write *message* to the attached logger, stamped with the clock."""
        if self._logger is not None:
            self._logger.log(level, message, source=self._source, instant=self._clock)

    def enter(self, state: HeadState) -> None:
        """Move the head state machine to *state*."""
        if state is self._state:
            return
        self.log(f"state {self._state} -> {state}", level=LogLevel.DEBUG)
        self._state = state

    def reverse(self) -> None:
        """Flip the sweep direction."""
        self._going_up = not self._going_up
        self.log(f"reverse at track {self._head}, now {self.direction}")

    def wait_until(self, instant: float | None) -> None:
        """Let the clock run to *instant* without moving the head.

        Does nothing if *instant* is None or not in the future.
        """
        if instant is None or instant <= self._clock:
            return
        self.enter(HeadState.WAITING)
        self.log(f"idle at track {self._head} until t={instant:g}")
        self._clock = instant

    def service(
        self,
        request: DiskRequest,
        *,
        remaining: tuple[int, ...],
        buffer: tuple[int, ...] | None = None,
        kind: StepKind = StepKind.SERVICE,
    ) -> Step:
        """Move to *request* and service it.

        Seek time is charged for the distance, then the fixed
        per-request overhead.
        """
        step = self._travel(
            request.track,
            kind=kind,
            remaining=remaining,
            buffer=buffer,
            request=request,
        )
        self._clock += self._time_per_request
        return step

    def move(
        self,
        target: int,
        *,
        kind: StepKind,
        remaining: tuple[int, ...],
        buffer: tuple[int, ...] | None = None,
    ) -> Step:
        """Move to *target* without servicing anything (edge sweep or wrap)."""
        self.log(f"{kind} move {self._head} -> {target}")
        return self._travel(target, kind=kind, remaining=remaining, buffer=buffer, request=None)

    def result(self) -> AlgorithmResult:
        """Finish the run and return its immutable result."""
        self.enter(HeadState.IDLE)
        return AlgorithmResult.from_steps(tuple(self._steps), total_time=self._clock)

    def _travel(
        self,
        target: int,
        *,
        kind: StepKind,
        remaining: tuple[int, ...],
        buffer: tuple[int, ...] | None,
        request: DiskRequest | None,
    ) -> Step:
        """Record a step from the head to *target* and advance the clock."""
        self.enter(HeadState.WRAPPING if kind is StepKind.WRAP else self._mode)
        distance = abs(target - self._head)
        step = Step(
            from_track=self._head,
            to_track=target,
            distance=distance,
            remaining=remaining,
            instant=self._clock,
            kind=kind,
            arrival_instant=request.arrival_time if request is not None else None,
            buffer=buffer,
            request_id=request.rid if request is not None else None,
        )
        self._steps.append(step)
        self._head = target
        self._clock += distance * self._time_per_track
        return step
