"""SSTF — Shortest Seek Time First, with dynamic arrivals.

At every step the head goes to the nearest admitted request.  Like an
elevator that always answers the closest call, it keeps total movement
low but can starve requests far from a busy region.

With arrival times in play two things change:

- If nothing has arrived yet, the clock jumps to the next arrival.  The
  head does not move and no distance is charged.
- Before committing to the nearest request, the head checks whether a
  request that has *not* been admitted yet would be caught on the way
  (see ``py_disk.intercept``).  If so, that one is serviced first and
  the original pick stays queued for a later step.

Ties between equally near requests go to the one admitted first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_disk.engine import Simulation
from py_disk.intercept import find_earliest_intercept
from py_disk.requests import RequestQueue, by_arrival, normalize_requests
from py_disk.trace import Direction

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_disk.logging import Logger
    from py_disk.requests import RequestInput
    from py_disk.trace import AlgorithmResult

SOURCE = "SSTF"


def calculate_sstf(
    initial_track: int,
    requests: Iterable[RequestInput],
    *,
    time_per_track: float = 1,
    time_per_request: float = 0,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Simulate SSTF from *initial_track* over *requests*.

    Args:
        initial_track: Starting head position.
        requests: Track numbers or ``{track, arrival_time}`` items.
        time_per_track: Seek cost of crossing one track.
        time_per_request: Fixed overhead paid after each service.
        logger: Optional log for decisions and state changes.

    Returns:
        The complete trace of the run.

    """
    sim = Simulation(
        source=SOURCE,
        head=initial_track,
        time_per_track=time_per_track,
        time_per_request=time_per_request,
        logger=logger,
    )
    pending = RequestQueue(by_arrival(normalize_requests(requests)))
    active = RequestQueue()

    while active or pending:
        active.extend(pending.pop_arrived(sim.clock))
        if not active:
            sim.wait_until(pending.next_arrival())
            continue

        selected = active.nearest(sim.head)
        assert selected is not None  # noqa: S101
        remaining = active.tracks()
        direction = Direction.ASC if selected.track > sim.head else Direction.DESC
        intercept = find_earliest_intercept(
            sim.head,
            selected.track,
            clock=sim.clock,
            time_per_track=time_per_track,
            pool=pending,
            direction=direction,
        )
        if intercept is not None:
            # The original pick stays in the active queue
            pending.remove(intercept.request)
            sim.log(f"intercepted track {intercept.track} on the way to {selected.track}")
            sim.service(intercept.request, remaining=remaining)
        else:
            active.remove(selected)
            sim.service(selected, remaining=remaining)

    return sim.result()
