"""Algorithm dispatch — one entry point for all nine calculators.

``calculate_algorithm`` takes an algorithm tag plus the union of every
calculator's parameters and forwards only the ones the chosen
calculator understands (LOOK has no idea what ``max_track`` is).

The registry maps each ``Algorithm`` to its calculator and the parameter
names that calculator accepts.  Adding an algorithm means writing the
calculator and adding one line here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from py_disk.batch import DEFAULT_N_STEP, calculate_look_n, calculate_scan_n
from py_disk.fscan import calculate_flook, calculate_fscan
from py_disk.sstf import calculate_sstf
from py_disk.sweep import (
    DEFAULT_MAX_TRACK,
    DEFAULT_MIN_TRACK,
    calculate_clook,
    calculate_cscan,
    calculate_look,
    calculate_scan,
)
from py_disk.trace import Direction

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from py_disk.logging import Logger
    from py_disk.requests import RequestInput
    from py_disk.trace import AlgorithmResult


class Algorithm(StrEnum):
    """Tags of the supported scheduling algorithms."""

    SSTF = "SSTF"
    SCAN = "SCAN"
    LOOK = "LOOK"
    C_SCAN = "C-SCAN"
    C_LOOK = "C-LOOK"
    SCAN_N = "SCAN-N"
    LOOK_N = "LOOK-N"
    F_SCAN = "F-SCAN"
    F_LOOK = "F-LOOK"


class UnknownAlgorithmError(ValueError):
    """Raise when an algorithm tag is not recognised."""


_GEOMETRY_KEYS = ("max_track", "min_track")
_COST_KEYS = ("time_per_track", "time_per_request", "logger")
_TIMING_KEYS = ("direction", *_COST_KEYS)

_REGISTRY: dict[Algorithm, tuple[Callable[..., AlgorithmResult], tuple[str, ...]]] = {
    Algorithm.SSTF: (calculate_sstf, _COST_KEYS),
    Algorithm.SCAN: (calculate_scan, _GEOMETRY_KEYS + _TIMING_KEYS),
    Algorithm.LOOK: (calculate_look, _TIMING_KEYS),
    Algorithm.C_SCAN: (calculate_cscan, _GEOMETRY_KEYS + _TIMING_KEYS),
    Algorithm.C_LOOK: (calculate_clook, _TIMING_KEYS),
    Algorithm.SCAN_N: (calculate_scan_n, ("n_step", *_GEOMETRY_KEYS, *_TIMING_KEYS)),
    Algorithm.LOOK_N: (calculate_look_n, ("n_step", *_TIMING_KEYS)),
    Algorithm.F_SCAN: (calculate_fscan, _GEOMETRY_KEYS + _TIMING_KEYS),
    Algorithm.F_LOOK: (calculate_flook, _TIMING_KEYS),
}


def parse_algorithm(tag: Algorithm | str) -> Algorithm:
    """Return the ``Algorithm`` for *tag*.

    Raises:
        UnknownAlgorithmError: If *tag* names no supported algorithm.

    """
    try:
        return Algorithm(tag)
    except ValueError as e:
        msg = f"Unknown algorithm: {tag!r}"
        raise UnknownAlgorithmError(msg) from e


def calculate_algorithm(  # noqa: PLR0913
    algorithm: Algorithm | str,
    initial_track: int,
    requests: Iterable[RequestInput],
    max_track: int | None = None,
    direction: Direction | str = Direction.ASC,
    time_per_track: float = 1,
    time_per_request: float = 0,
    min_track: int = DEFAULT_MIN_TRACK,
    n_step: int = DEFAULT_N_STEP,
    *,
    logger: Logger | None = None,
) -> AlgorithmResult:
    """Run *algorithm* and return its trace.

    Args:
        algorithm: One of the ``Algorithm`` tags (e.g. ``"C-SCAN"``).
        initial_track: Starting head position.
        requests: Track numbers or ``{track, arrival_time}`` items.
        max_track: Upper disk bound; ``None`` means 999.
        direction: Initial sweep direction, ``"asc"`` or ``"desc"``.
        time_per_track: Seek cost of crossing one track.
        time_per_request: Fixed overhead paid after each service.
        min_track: Lower disk bound.
        n_step: Batch size for SCAN-N and LOOK-N.
        logger: Optional log for decisions and state changes.

    Raises:
        UnknownAlgorithmError: If *algorithm* is not a supported tag.

    """
    chosen = parse_algorithm(algorithm)
    params: dict[str, object] = {
        "max_track": DEFAULT_MAX_TRACK if max_track is None else max_track,
        "min_track": min_track,
        "direction": Direction(direction),
        "time_per_track": time_per_track,
        "time_per_request": time_per_request,
        "n_step": n_step,
        "logger": logger,
    }
    calculator, keys = _REGISTRY[chosen]
    return calculator(initial_track, requests, **{k: params[k] for k in keys})
