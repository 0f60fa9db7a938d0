"""Disk requests and the queues that hold them.

A disk request is one pending I/O operation: "move the arm to track
*t*".  In a dynamic simulation requests also carry an **arrival time**
— the instant the request shows up in the system.  Before that instant
the scheduler must pretend it does not exist.

Every request passes through a few queues during a run:

- **Pending / Archive** — not yet admitted, ordered by arrival time.
- **Active** — admitted and eligible for service.
- **Buffer** — (F-SCAN / F-LOOK only) arrived while a sealed batch was
  draining; promoted to Active as a whole when that batch empties.

A request occupies exactly one queue at a time and is consumed exactly
once.  Two requests with the same track and arrival time are still two
separate jobs, so queues track membership by a per-run **request id**
(``rid``) instead of comparing values.

Why a dict instead of a list?
    ``dict`` keeps insertion order (so "first found" tie-breaking is
    stable) *and* gives O(1) removal by id.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


class RequestError(ValueError):
    """Raise when a request item cannot be turned into a ``DiskRequest``."""


@dataclass(frozen=True)
class DiskRequest:
    """A single track request.

    Attributes:
        rid: Stable id of the request within one run (its input index).
        track: The track the head must visit.
        arrival_time: Simulated instant the request becomes known.

    """

    rid: int
    track: int
    arrival_time: float = 0


RequestInput = int | Mapping[str, Any] | DiskRequest


def normalize_requests(requests: Iterable[RequestInput]) -> list[DiskRequest]:
    """Turn caller input into ``DiskRequest`` objects with fresh ids.

    Each item may be a plain track number (arrival time 0), a mapping
    with ``track`` and an optional ``arrival_time`` / ``arrivalTime``,
    or an existing ``DiskRequest`` (its id is replaced).

    Raises:
        RequestError: If an item has no integer track or a bad arrival time.

    """
    return [_normalize_one(index, item) for index, item in enumerate(requests)]


def _normalize_one(index: int, item: RequestInput) -> DiskRequest:
    """Normalise a single request item."""
    if isinstance(item, DiskRequest):
        track = item.track
        arrival = item.arrival_time
    elif isinstance(item, Mapping):
        if "track" not in item:
            msg = f"Request #{index} has no 'track'"
            raise RequestError(msg)
        track = item["track"]
        arrival = item.get("arrival_time", item.get("arrivalTime", 0))
    else:
        track = item
        arrival = 0

    if not _is_int(track):
        msg = f"Request #{index} has a non-integer track: {track!r}"
        raise RequestError(msg)
    if arrival is None:
        arrival = 0
    if not _is_number(arrival) or not math.isfinite(arrival) or arrival < 0:
        msg = f"Request #{index} has an invalid arrival time: {arrival!r}"
        raise RequestError(msg)
    return DiskRequest(rid=index, track=track, arrival_time=arrival)


def _is_int(value: object) -> bool:
    """Return True for real integers (``bool`` is not a track)."""
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    """Return True for ints and floats, excluding ``bool``."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def by_arrival(requests: Iterable[DiskRequest]) -> list[DiskRequest]:
    """Return requests in arrival order, stable for equal arrival times."""
    return sorted(requests, key=lambda r: r.arrival_time)


class RequestQueue:
    """An ordered set of requests keyed by request id.

    Iteration order is insertion order.  The same class backs every
    queue role; the calculators decide what each queue *means*.
    """

    def __init__(self, requests: Iterable[DiskRequest] = ()) -> None:
        """Create a queue holding *requests* in the given order."""
        self._items: dict[int, DiskRequest] = {r.rid: r for r in requests}

    def __len__(self) -> int:
        """Return the number of queued requests."""
        return len(self._items)

    def __bool__(self) -> bool:
        """Return True while the queue holds at least one request."""
        return bool(self._items)

    def __iter__(self) -> Iterator[DiskRequest]:
        """Iterate over requests in queue order."""
        return iter(list(self._items.values()))

    def tracks(self) -> tuple[int, ...]:
        """Return the queued tracks in queue order."""
        return tuple(r.track for r in self._items.values())

    def push(self, request: DiskRequest) -> None:
        """Append *request* to the back of the queue."""
        self._items[request.rid] = request

    def extend(self, requests: Iterable[DiskRequest]) -> None:
        """Append several requests, keeping their order."""
        for request in requests:
            self.push(request)

    def remove(self, request: DiskRequest) -> None:
        """Remove *request* from the queue.

        Raises:
            KeyError: If the request is not queued here.

        """
        del self._items[request.rid]

    def drain(self) -> list[DiskRequest]:
        """Remove and return every request, in queue order."""
        items = list(self._items.values())
        self._items.clear()
        return items

    # -- Arrival-gated access (Pending / Archive role) -------------------------

    def next_arrival(self) -> float | None:
        """Return the earliest arrival time in the queue, or None if empty."""
        if not self._items:
            return None
        return min(r.arrival_time for r in self._items.values())

    def arrived(self, instant: float) -> list[DiskRequest]:
        """Return requests that have arrived by *instant*, in queue order."""
        return [r for r in self._items.values() if r.arrival_time <= instant]

    def pop_arrived(self, instant: float, *, limit: int | None = None) -> list[DiskRequest]:
        """Remove and return up to *limit* requests that arrived by *instant*."""
        taken = self.arrived(instant)
        if limit is not None:
            taken = taken[:limit]
        for request in taken:
            self.remove(request)
        return taken

    # -- Track-based selection (Active role) ----------------------------------

    def at(self, track: int) -> DiskRequest | None:
        """Return the first request sitting exactly on *track*, or None."""
        for request in self._items.values():
            if request.track == track:
                return request
        return None

    def nearest(self, track: int) -> DiskRequest | None:
        """Return the request closest to *track* (first found wins ties)."""
        best: DiskRequest | None = None
        for request in self._items.values():
            if best is None or abs(request.track - track) < abs(best.track - track):
                best = request
        return best

    def nearest_ahead(self, track: int, *, going_up: bool) -> DiskRequest | None:
        """Return the closest request strictly ahead of *track*, or None.

        "Ahead" means a higher track when *going_up*, a lower one otherwise.
        Ties on the same track keep queue order.
        """
        if going_up:
            ahead = [r for r in self._items.values() if r.track > track]
            return min(ahead, key=lambda r: r.track, default=None)
        ahead = [r for r in self._items.values() if r.track < track]
        return max(ahead, key=lambda r: r.track, default=None)

    def extreme(self, *, lowest: bool) -> DiskRequest | None:
        """Return the lowest (or highest) track request, first found on ties."""
        if lowest:
            return min(self._items.values(), key=lambda r: r.track, default=None)
        return max(self._items.values(), key=lambda r: r.track, default=None)
