"""Sweep engine — SCAN, C-SCAN, LOOK, and C-LOOK.

All "elevator" algorithms share one loop.  Each pass of the loop:

1. **Admit** requests into the Active queue.  *How* depends on the
   admission strategy: immediately on arrival (this module), in frozen
   batches of N (``py_disk.batch``), or through a double buffer
   (``py_disk.fscan``).
2. **Service in place** — a request sitting exactly under the head is
   serviced first, with a zero-distance step.
3. **Go to the nearest request strictly ahead** in the sweep direction.
   Requests that have not been admitted yet may intercept that move.
4. **Nothing ahead?**  What happens now is the algorithm's personality:

   ==========  ===========  ===========================================
   Algorithm   Turns at     Then
   ==========  ===========  ===========================================
   SCAN        disk edge    bounce: reverse direction
   C-SCAN      disk edge    wrap: jump to the opposite edge, same way
   LOOK        last request bounce: reverse direction
   C-LOOK      last request wrap: go to the far extreme request and
                            service it
   ==========  ===========  ===========================================

So an algorithm is just a ``SweepRule`` (where to turn, what to do
there) plus an ``Admission`` strategy.  Adding a variant means writing
a rule, not copying a loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from py_disk.engine import HeadState, Simulation
from py_disk.intercept import find_earliest_intercept
from py_disk.logging import LogLevel
from py_disk.requests import RequestQueue, by_arrival, normalize_requests
from py_disk.trace import Direction, StepKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_disk.logging import Logger
    from py_disk.requests import RequestInput
    from py_disk.trace import AlgorithmResult

DEFAULT_MIN_TRACK = 0
DEFAULT_MAX_TRACK = 999


class Boundary(StrEnum):
    """Where a sweep stops when nothing is left ahead."""

    EDGE = "edge"
    REQUEST = "request"


class Exhaustion(StrEnum):
    """What the head does once a sweep has nothing left ahead."""

    BOUNCE = "bounce"
    WRAP = "wrap"


@dataclass(frozen=True)
class SweepRule:
    """The personality of one sweep algorithm.

    Attributes:
        name: Algorithm tag, also used as the log source.
        boundary: Turn at the disk edge or at the last request.
        exhaustion: Reverse direction or wrap around.

    """

    name: str
    boundary: Boundary
    exhaustion: Exhaustion

    @property
    def circular(self) -> bool:
        """Return True for the wrap-around (C-) variants."""
        return self.exhaustion is Exhaustion.WRAP


SCAN_RULE = SweepRule("SCAN", Boundary.EDGE, Exhaustion.BOUNCE)
CSCAN_RULE = SweepRule("C-SCAN", Boundary.EDGE, Exhaustion.WRAP)
LOOK_RULE = SweepRule("LOOK", Boundary.REQUEST, Exhaustion.BOUNCE)
CLOOK_RULE = SweepRule("C-LOOK", Boundary.REQUEST, Exhaustion.WRAP)


@dataclass(frozen=True)
class Geometry:
    """Track bounds of the disk surface.

    Request tracks are not clamped to these bounds; only edge sweeps
    and wraps use them.
    """

    min_track: int = DEFAULT_MIN_TRACK
    max_track: int = DEFAULT_MAX_TRACK

    def edge(self, *, going_up: bool) -> int:
        """Return the edge the head reaches when sweeping this way."""
        return self.max_track if going_up else self.min_track

    def wrap_target(self, *, going_up: bool, active: RequestQueue) -> int:
        """Return where a C-SCAN wrap lands.

        Normally the opposite edge.  A request outside the bounds widens
        the landing point so the next sweep can still reach it.
        """
        if going_up:
            lowest = active.extreme(lowest=True)
            return min(self.min_track, lowest.track) if lowest else self.min_track
        highest = active.extreme(lowest=False)
        return max(self.max_track, highest.track) if highest else self.max_track


class Admission(Protocol):
    """How requests enter the Active queue (Strategy pattern)."""

    @property
    def active(self) -> RequestQueue:
        """Return the queue the sweep services from."""
        ...  # pragma: no cover

    def has_work(self) -> bool:
        """Return True while any request is still unserviced."""
        ...  # pragma: no cover

    def admit(self, sim: Simulation) -> None:
        """Fill the Active queue, waiting for arrivals if needed.

        After this returns, the Active queue is non-empty whenever
        ``has_work`` was True.
        """
        ...  # pragma: no cover

    def interception_pool(self) -> RequestQueue | None:
        """Return requests allowed to intercept a move, or None."""
        ...  # pragma: no cover

    def buffer(self, clock: float) -> tuple[int, ...] | None:
        """Return the tracks waiting outside Active, or None if untracked."""
        ...  # pragma: no cover


class ImmediateAdmission:
    """Admit every request the moment it arrives.

    Requests that have not arrived yet stay pending and may intercept
    a move that passes over them.
    """

    def __init__(self, requests: Iterable[RequestInput]) -> None:
        """Create the pending queue in arrival order."""
        self._pending = RequestQueue(by_arrival(normalize_requests(requests)))
        self._active = RequestQueue()

    @property
    def active(self) -> RequestQueue:
        """Return the Active queue."""
        return self._active

    def has_work(self) -> bool:
        """Return True while anything is active or pending."""
        return bool(self._active) or bool(self._pending)

    def admit(self, sim: Simulation) -> None:
        """Admit arrivals; if none are active, wait for the next one."""
        self._active.extend(self._pending.pop_arrived(sim.clock))
        if not self._active:
            sim.wait_until(self._pending.next_arrival())
            self._active.extend(self._pending.pop_arrived(sim.clock))

    def interception_pool(self) -> RequestQueue | None:
        """Return the pending queue."""
        return self._pending

    def buffer(self, clock: float) -> tuple[int, ...] | None:  # noqa: ARG002
        """Immediate admission keeps no buffer."""
        return None


def run_sweep(
    rule: SweepRule,
    admission: Admission,
    *,
    initial_track: int,
    direction: Direction | str = Direction.ASC,
    geometry: Geometry | None = None,
    time_per_track: float = 1,
    time_per_request: float = 0,
    mode: HeadState = HeadState.SWEEPING,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Run the shared sweep loop until *admission* has no work left.

    Args:
        rule: Where to turn and what to do there.
        admission: How requests become Active.
        initial_track: Starting head position.
        direction: Initial sweep direction.
        geometry: Disk bounds (only used by edge-bounded rules).
        time_per_track: Seek cost of crossing one track.
        time_per_request: Fixed overhead paid after each service.
        mode: Head state while moving.
        logger: Optional log for decisions and state changes.

    Returns:
        The complete trace of the run.

    """
    geometry = geometry or Geometry()
    sim = Simulation(
        source=rule.name,
        head=initial_track,
        direction=Direction(direction),
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        mode=mode,
        logger=logger,
    )

    while admission.has_work():
        admission.admit(sim)
        active = admission.active
        remaining = active.tracks()
        buffer = admission.buffer(sim.clock)

        here = active.at(sim.head)
        if here is not None:
            active.remove(here)
            sim.service(here, remaining=remaining, buffer=buffer)
            continue

        target = active.nearest_ahead(sim.head, going_up=sim.going_up)
        if target is not None:
            if not _intercept(sim, target.track, admission, remaining, buffer):
                active.remove(target)
                sim.service(target, remaining=remaining, buffer=buffer)
            continue

        if rule.boundary is Boundary.REQUEST:
            if rule.circular:
                _wrap_to_request(sim, active, remaining, buffer)
            else:
                sim.reverse()
            continue

        edge = geometry.edge(going_up=sim.going_up)
        if sim.head != edge:
            if _intercept(sim, edge, admission, remaining, buffer):
                continue
            sim.move(edge, kind=StepKind.EDGE, remaining=remaining, buffer=buffer)
        if rule.circular:
            landing = geometry.wrap_target(going_up=sim.going_up, active=active)
            if not geometry.min_track <= landing <= geometry.max_track:
                sim.log(
                    f"wrap widened to track {landing}, outside the disk bounds",
                    level=LogLevel.WARNING,
                )
            sim.move(landing, kind=StepKind.WRAP, remaining=remaining, buffer=buffer)
        else:
            sim.reverse()

    return sim.result()


def _intercept(
    sim: Simulation,
    target: int,
    admission: Admission,
    remaining: tuple[int, ...],
    buffer: tuple[int, ...] | None,
) -> bool:
    """Service a request caught on the way to *target*, if any.

    Returns True when an interception happened.
    """
    pool = admission.interception_pool()
    if pool is None:
        return False
    intercept = find_earliest_intercept(
        sim.head,
        target,
        clock=sim.clock,
        time_per_track=sim.time_per_track,
        pool=pool,
        direction=sim.direction,
    )
    if intercept is None:
        return False
    pool.remove(intercept.request)
    sim.log(f"intercepted track {intercept.track} on the way to {target}")
    sim.service(intercept.request, remaining=remaining, buffer=buffer)
    return True


def _wrap_to_request(
    sim: Simulation,
    active: RequestQueue,
    remaining: tuple[int, ...],
    buffer: tuple[int, ...] | None,
) -> None:
    """Jump to the far extreme request and service it (C-LOOK)."""
    extreme = active.extreme(lowest=sim.going_up)
    assert extreme is not None  # noqa: S101
    active.remove(extreme)
    sim.log(f"wrap {sim.head} -> {extreme.track}")
    sim.service(extreme, remaining=remaining, buffer=buffer, kind=StepKind.WRAP)


# -- Public calculators --------------------------------------------------------


def calculate_scan(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    max_track: int = DEFAULT_MAX_TRACK,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    min_track: int = DEFAULT_MIN_TRACK,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate SCAN: sweep to the disk edge, then reverse.

    The arm services everything in its path, travels all the way to
    ``max_track`` (or ``min_track``) even if no request is there, and
    bounces back.
    """
    return run_sweep(
        SCAN_RULE,
        ImmediateAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        geometry=Geometry(min_track=min_track, max_track=max_track),
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        logger=logger,
    )


def calculate_cscan(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    max_track: int = DEFAULT_MAX_TRACK,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    min_track: int = DEFAULT_MIN_TRACK,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate C-SCAN: sweep to the edge, wrap to the other edge.

    Requests are only ever serviced in one direction.  The return trip
    is a separate WRAP step that services nothing but still costs its
    full track distance.
    """
    return run_sweep(
        CSCAN_RULE,
        ImmediateAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        geometry=Geometry(min_track=min_track, max_track=max_track),
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        logger=logger,
    )


def calculate_look(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate LOOK: like SCAN, but turn at the last request."""
    return run_sweep(
        LOOK_RULE,
        ImmediateAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        logger=logger,
    )


def calculate_clook(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate C-LOOK: sweep to the last request, wrap to the first.

    Unlike C-SCAN the wrap lands on the far extreme request and
    services it.
    """
    return run_sweep(
        CLOOK_RULE,
        ImmediateAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        logger=logger,
    )
