"""N-step algorithms — SCAN-N and LOOK-N.

Plain SCAN and LOOK let newly arrived requests join the sweep at any
time.  A burst of requests near the head can then keep the arm busy
forever while an older request far away waits: **starvation**.

The N-step variants fix this by working in **frozen batches**:

1. Take up to N requests that have already arrived, oldest first.
   If none have arrived, wait for the next one.
2. Seal that batch.  Drain it completely with SCAN rules (SCAN-N) or
   LOOK rules (LOOK-N).
3. Anything that arrives meanwhile waits in the archive for a later
   batch.  No interception from outside the batch.

SCAN-N has one extra habit: when the archive has nothing ready, the
head finishes its sweep to the disk edge before idling, as a real
elevator would return to its parking floor.

Each step reports the *visible archive* (requests that have arrived but
are not in the current batch) as its ``buffer``.
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
from py_disk.trace import Direction, StepKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_disk.engine import Simulation
    from py_disk.logging import Logger
    from py_disk.requests import RequestInput
    from py_disk.trace import AlgorithmResult

DEFAULT_N_STEP = 2

SCAN_N_RULE = SweepRule("SCAN-N", Boundary.EDGE, Exhaustion.BOUNCE)
LOOK_N_RULE = SweepRule("LOOK-N", Boundary.REQUEST, Exhaustion.BOUNCE)


class BatchAdmission:
    """Admit requests in sealed batches of at most *n_step*.

    Args:
        requests: Raw request input.
        n_step: Maximum batch size.
        idle_geometry: If set, the head sweeps to the edge of this
            geometry before idling on an empty archive (SCAN-N).

    Raises:
        ValueError: If *n_step* is smaller than 1.

    """

    def __init__(
        self,
        requests: Iterable[RequestInput],
        *,
        n_step: int,
        idle_geometry: Geometry | None = None,
    ) -> None:
        """Create the archive in arrival order."""
        if n_step < 1:
            msg = f"Batch size must be at least 1, got {n_step}"
            raise ValueError(msg)
        self._archive = RequestQueue(by_arrival(normalize_requests(requests)))
        self._active = RequestQueue()
        self._n_step = n_step
        self._idle_geometry = idle_geometry

    @property
    def active(self) -> RequestQueue:
        """Return the current sealed batch."""
        return self._active

    def has_work(self) -> bool:
        """Return True while a batch is draining or the archive is not empty."""
        return bool(self._active) or bool(self._archive)

    def admit(self, sim: Simulation) -> None:
        """Seal the next batch once the current one has drained."""
        if self._active:
            return
        if not self._archive.arrived(sim.clock):
            self._idle(sim)
            sim.wait_until(self._archive.next_arrival())
        batch = self._archive.pop_arrived(sim.clock, limit=self._n_step)
        self._active.extend(batch)
        sim.log(f"sealed batch {[r.track for r in batch]}")

    def interception_pool(self) -> RequestQueue | None:
        """Sealed batches are never intercepted."""
        return None

    def buffer(self, clock: float) -> tuple[int, ...] | None:
        """Return the tracks that have arrived but wait for a later batch."""
        return tuple(r.track for r in self._archive.arrived(clock))

    def _idle(self, sim: Simulation) -> None:
        """Finish the sweep to the edge before idling (SCAN-N only)."""
        if self._idle_geometry is None:
            return
        edge = self._idle_geometry.edge(going_up=sim.going_up)
        if sim.head == edge:
            return
        sim.move(edge, kind=StepKind.EDGE, remaining=(), buffer=())
        sim.reverse()


def calculate_scan_n(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    n_step: int = DEFAULT_N_STEP,
    max_track: int = DEFAULT_MAX_TRACK,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    min_track: int = DEFAULT_MIN_TRACK,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate SCAN-N: drain batches of *n_step* requests with SCAN rules.

    Raises:
        ValueError: If *n_step* is smaller than 1.

    """
    geometry = Geometry(min_track=min_track, max_track=max_track)
    return run_sweep(
        SCAN_N_RULE,
        BatchAdmission(requests, n_step=n_step, idle_geometry=geometry),
        initial_track=initial_track,
        direction=direction,
        geometry=geometry,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        mode=HeadState.DRAINING,
        logger=logger,
    )


def calculate_look_n(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    n_step: int = DEFAULT_N_STEP,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate LOOK-N: drain batches of *n_step* requests with LOOK rules.

    Raises:
        ValueError: If *n_step* is smaller than 1.

    """
    return run_sweep(
        LOOK_N_RULE,
        BatchAdmission(requests, n_step=n_step),
        initial_track=initial_track,
        direction=direction,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        mode=HeadState.DRAINING,
        logger=logger,
    )
