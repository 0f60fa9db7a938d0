"""Interception — catching requests that appear along the way.

A head movement is not instantaneous.  While the arm travels from track
A to track B, new requests keep arriving.  If one of them sits between
A and B *and* has arrived by the time the arm passes over its track, it
would be silly to fly past it.  Interception redirects the move to that
request instead.

The rule, precisely:

1. Only requests strictly between *current* and *target* count (the
   target itself is already the destination).
2. A candidate qualifies if ``arrival_time <= now + distance * cost``,
   i.e. it is there no later than the head.
3. Among qualifying candidates the one **closest to the head** wins,
   not the one that arrived first.  Equal distances keep pool order.

This function is pure: it never touches the pool.  Whoever owns the
pool removes the intercepted request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_disk.requests import DiskRequest
    from py_disk.trace import Direction


@dataclass(frozen=True)
class Intercept:
    """An intercepted request and the track where the head stops for it."""

    track: int
    request: DiskRequest


def find_earliest_intercept(
    current: int,
    target: int,
    *,
    clock: float,
    time_per_track: float,
    pool: Iterable[DiskRequest],
    direction: Direction,
) -> Intercept | None:
    """Return the nearest request the head would catch on its way, or None.

    Args:
        current: Track where the move begins.
        target: Track the move is heading for.
        clock: Simulated time at which the move begins.
        time_per_track: Cost of crossing one track.
        pool: Requests not yet admitted (not modified).
        direction: Direction of the move.

    """
    if direction.going_up:
        in_path = [r for r in pool if current < r.track < target]
    else:
        in_path = [r for r in pool if target < r.track < current]

    for request in sorted(in_path, key=lambda r: abs(r.track - current)):
        reached_at = clock + abs(request.track - current) * time_per_track
        if request.arrival_time <= reached_at:
            return Intercept(track=request.track, request=request)
    return None
