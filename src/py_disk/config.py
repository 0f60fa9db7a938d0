"""Scenarios — a complete, reusable description of one simulation.

A scenario bundles everything ``calculate_algorithm`` needs: which
algorithm, where the head starts, the request list, the disk bounds,
and the timing costs.  Scenarios can be written by hand as JSON::

    {
      "algorithm": "C-LOOK",
      "initialTrack": 50,
      "requests": [82, {"track": 170, "arrivalTime": 4}, 43],
      "direction": "asc",
      "timePerTrack": 1
    }

Both camelCase (as the browser sends it) and snake_case keys are
accepted.  Anything left out takes the usual default.  Validation
happens once, here, so the calculators can trust their input.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_disk.algorithms import (
    Algorithm,
    UnknownAlgorithmError,
    calculate_algorithm,
    parse_algorithm,
)
from py_disk.batch import DEFAULT_N_STEP
from py_disk.requests import DiskRequest, RequestError, normalize_requests
from py_disk.sweep import DEFAULT_MAX_TRACK, DEFAULT_MIN_TRACK
from py_disk.trace import Direction

if TYPE_CHECKING:
    from pathlib import Path

    from py_disk.logging import Logger
    from py_disk.trace import AlgorithmResult

DEFAULT_TIME_PER_TRACK = 1
DEFAULT_TIME_PER_REQUEST = 0

# snake_case field -> accepted camelCase alias
_ALIASES = {
    "initial_track": "initialTrack",
    "max_track": "maxTrack",
    "min_track": "minTrack",
    "time_per_track": "timePerTrack",
    "time_per_request": "timePerRequest",
    "n_step": "nStep",
}


class ConfigError(ValueError):
    """Raise when a scenario mapping or file is malformed."""


@dataclass(frozen=True)
class Scenario:
    """Everything needed to run one simulation.

    Attributes:
        algorithm: Which scheduler to run.
        initial_track: Starting head position.
        requests: Normalised requests (ids are input positions).
        max_track: Upper disk bound.
        direction: Initial sweep direction.
        time_per_track: Seek cost of crossing one track.
        time_per_request: Fixed overhead paid after each service.
        min_track: Lower disk bound.
        n_step: Batch size for SCAN-N and LOOK-N.

    """

    algorithm: Algorithm
    initial_track: int
    requests: tuple[DiskRequest, ...]
    max_track: int = DEFAULT_MAX_TRACK
    direction: Direction = Direction.ASC
    time_per_track: float = DEFAULT_TIME_PER_TRACK
    time_per_request: float = DEFAULT_TIME_PER_REQUEST
    min_track: int = DEFAULT_MIN_TRACK
    n_step: int = DEFAULT_N_STEP

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Scenario:
        """Build and validate a scenario from a JSON-style mapping.

        Raises:
            ConfigError: If a field is missing, mistyped, or out of range.

        """
        if not isinstance(data, Mapping):
            msg = "Scenario must be a JSON object"
            raise ConfigError(msg)
        if "algorithm" not in data:
            msg = "Scenario has no 'algorithm'"
            raise ConfigError(msg)

        try:
            algorithm = parse_algorithm(data["algorithm"])
            requests = tuple(normalize_requests(_field(data, "requests", [])))
            direction = Direction(_field(data, "direction", Direction.ASC))
        except (UnknownAlgorithmError, RequestError) as e:
            raise ConfigError(str(e)) from e
        except (ValueError, TypeError) as e:
            msg = f"Invalid scenario: {e}"
            raise ConfigError(msg) from e

        max_track = _field(data, "max_track", None)
        scenario = cls(
            algorithm=algorithm,
            initial_track=_int(data, "initial_track", None),
            requests=requests,
            max_track=DEFAULT_MAX_TRACK if max_track is None else _int(data, "max_track"),
            direction=direction,
            time_per_track=_number(data, "time_per_track", DEFAULT_TIME_PER_TRACK),
            time_per_request=_number(data, "time_per_request", DEFAULT_TIME_PER_REQUEST),
            min_track=_int(data, "min_track", DEFAULT_MIN_TRACK),
            n_step=_int(data, "n_step", DEFAULT_N_STEP),
        )
        if scenario.n_step < 1:
            msg = f"nStep must be at least 1, got {scenario.n_step}"
            raise ConfigError(msg)
        return scenario

    @classmethod
    def load(cls, path: Path) -> Scenario:
        """Read a scenario from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or parsed.

        """
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot load scenario: {e}"
            raise ConfigError(msg) from e
        return cls.from_mapping(data)

    def run(self, *, logger: Logger | None = None) -> AlgorithmResult:
        """Run the scenario's algorithm and return its trace."""
        return calculate_algorithm(
            self.algorithm,
            self.initial_track,
            self.requests,
            max_track=self.max_track,
            direction=self.direction,
            time_per_track=self.time_per_track,
            time_per_request=self.time_per_request,
            min_track=self.min_track,
            n_step=self.n_step,
            logger=logger,
        )


def _field(data: Mapping[str, Any], name: str, default: Any) -> Any:  # noqa: ANN401
    """Return *name* or its camelCase alias from *data*, else *default*."""
    if name in data:
        return data[name]
    alias = _ALIASES.get(name)
    if alias is not None and alias in data:
        return data[alias]
    return default


def _int(data: Mapping[str, Any], name: str, default: int | None = None) -> int:
    """Return an integer field, rejecting booleans and missing values."""
    value = _field(data, name, default)
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"Scenario field '{_ALIASES.get(name, name)}' must be an integer, got {value!r}"
        raise ConfigError(msg)
    return value


def _number(data: Mapping[str, Any], name: str, default: float) -> float:
    """Return a non-negative numeric field."""
    value = _field(data, name, default)
    if not _is_finite_number(value) or value < 0:
        field = _ALIASES.get(name, name)
        msg = f"Scenario field '{field}' must be a non-negative number, got {value!r}"
        raise ConfigError(msg)
    return value


def _is_finite_number(value: object) -> bool:
    """Return True for finite ints and floats, excluding ``bool``."""
    if not isinstance(value, int | float) or isinstance(value, bool):
        return False
    return math.isfinite(value)
