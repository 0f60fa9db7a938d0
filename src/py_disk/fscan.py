"""F-SCAN and F-LOOK — two queues, one sealed.

F-SCAN keeps two queues:

- **Active** — a sealed batch the head is currently draining.
- **Buffer** — everything that arrives while Active drains.

When Active empties, the whole Buffer is promoted to Active in one go
(a *swap*) and a fresh, empty Buffer starts collecting.  If both are
empty the head idles until something arrives, then admits everything
that has arrived by that instant.

Why two queues?  Because the batch being served is sealed, a flood of
new requests next to the head cannot push an older request back
forever.  Every request is serviced, at the latest, during the batch
after the one that was draining when it arrived.

F-SCAN drains with SCAN rules (sweep to the disk edge, bounce);
F-LOOK with LOOK rules (turn at the last request).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_disk.engine import HeadState
from py_disk.requests import RequestQueue, by_arrival, normalize_requests
from py_disk.sweep import (
    DEFAULT_MAX_TRACK,
    DEFAULT_MIN_TRACK,
    Boundary,
    Exhaustion,
    Geometry,
    SweepRule,
    run_sweep,
)
from py_disk.trace import Direction

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_disk.engine import Simulation
    from py_disk.logging import Logger
    from py_disk.requests import RequestInput
    from py_disk.trace import AlgorithmResult

FSCAN_RULE = SweepRule("F-SCAN", Boundary.EDGE, Exhaustion.BOUNCE)
FLOOK_RULE = SweepRule("F-LOOK", Boundary.REQUEST, Exhaustion.BOUNCE)


class DoubleBufferAdmission:
    """Admit requests through a Buffer that is swapped in wholesale."""

    def __init__(self, requests: Iterable[RequestInput]) -> None:
        """Create the archive in arrival order with empty queues."""
        self._archive = RequestQueue(by_arrival(normalize_requests(requests)))
        self._buffer = RequestQueue()
        self._active = RequestQueue()

    @property
    def active(self) -> RequestQueue:
        """Return the sealed batch being drained."""
        return self._active

    def has_work(self) -> bool:
        """Return True while any of the three queues holds a request."""
        return bool(self._active) or bool(self._buffer) or bool(self._archive)

    def admit(self, sim: Simulation) -> None:
        """Collect arrivals into Buffer; swap it in once Active is empty."""
        self._buffer.extend(self._archive.pop_arrived(sim.clock))
        if self._active:
            return
        if not self._buffer:
            sim.wait_until(self._archive.next_arrival())
            self._buffer.extend(self._archive.pop_arrived(sim.clock))
        batch = self._buffer.drain()
        self._active.extend(batch)
        sim.log(f"swap: buffer {[r.track for r in batch]} becomes active")

    def interception_pool(self) -> RequestQueue | None:
        """The sealed batch is never intercepted."""
        return None

    def buffer(self, clock: float) -> tuple[int, ...] | None:  # noqa: ARG002
        """Return the tracks collected for the next batch."""
        return self._buffer.tracks()


def calculate_fscan(
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
    """Simulate F-SCAN: drain sealed batches with SCAN rules."""
    return run_sweep(
        FSCAN_RULE,
        DoubleBufferAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        geometry=Geometry(min_track=min_track, max_track=max_track),
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        mode=HeadState.DRAINING,
        logger=logger,
    )


def calculate_flook(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate F-LOOK: drain sealed batches with LOOK rules."""
    return run_sweep(
        FLOOK_RULE,
        DoubleBufferAdmission(requests),
        initial_track=initial_track,
        direction=direction,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        mode=HeadState.DRAINING,
        logger=logger,
    )
