"""py-disk — an educational disk (HDD) I/O scheduling simulator.

Re-exports the public symbols so callers can write::

    from py_disk import calculate_algorithm

    result = calculate_algorithm("SCAN", 50, [82, 170, 43, 140, 24, 16, 190])
    print(result.sequence, result.total_tracks)
"""

from py_disk.algorithms import (
    Algorithm,
    UnknownAlgorithmError,
    calculate_algorithm,
    parse_algorithm,
)
from py_disk.batch import DEFAULT_N_STEP, calculate_look_n, calculate_scan_n
from py_disk.config import ConfigError, Scenario
from py_disk.engine import HeadState, Simulation
from py_disk.fscan import calculate_flook, calculate_fscan
from py_disk.intercept import Intercept, find_earliest_intercept
from py_disk.logging import LogEntry, Logger, LogLevel
from py_disk.requests import DiskRequest, RequestError, RequestQueue, normalize_requests
from py_disk.sstf import calculate_sstf
from py_disk.sweep import (
    DEFAULT_MAX_TRACK,
    DEFAULT_MIN_TRACK,
    Geometry,
    SweepRule,
    calculate_clook,
    calculate_cscan,
    calculate_look,
    calculate_scan,
)
from py_disk.trace import AlgorithmResult, Direction, Step, StepKind

__all__ = [
    "DEFAULT_MAX_TRACK",
    "DEFAULT_MIN_TRACK",
    "DEFAULT_N_STEP",
    "Algorithm",
    "AlgorithmResult",
    "ConfigError",
    "Direction",
    "DiskRequest",
    "Geometry",
    "HeadState",
    "Intercept",
    "LogEntry",
    "LogLevel",
    "Logger",
    "RequestError",
    "RequestQueue",
    "Scenario",
    "Simulation",
    "Step",
    "StepKind",
    "SweepRule",
    "UnknownAlgorithmError",
    "calculate_algorithm",
    "calculate_clook",
    "calculate_cscan",
    "calculate_flook",
    "calculate_fscan",
    "calculate_look",
    "calculate_look_n",
    "calculate_scan",
    "calculate_scan_n",
    "calculate_sstf",
    "find_earliest_intercept",
    "normalize_requests",
    "parse_algorithm",
]
