"""Tests for the elevator family: SCAN, C-SCAN, LOOK, C-LOOK.

Static cases use the textbook queue with the head at 53 on a 0-199
disk.  Dynamic cases use requests with arrival times so the
interception rule comes into play.
"""

import pytest

from py_disk.logging import Logger, LogLevel
from py_disk.requests import RequestQueue, normalize_requests
from py_disk.sweep import (
    CLOOK_RULE,
    CSCAN_RULE,
    LOOK_RULE,
    SCAN_RULE,
    Geometry,
    calculate_clook,
    calculate_cscan,
    calculate_look,
    calculate_scan,
)
from py_disk.trace import Direction, StepKind

_HEAD = 53
_QUEUE = [98, 183, 37, 122, 14, 124, 65, 67]
_MAX = 199

# Requests as they reach the controller: (track, arrival time)
_TIMED = [
    {"track": 10, "arrivalTime": 0},
    {"track": 19, "arrivalTime": 1},
    {"track": 3, "arrivalTime": 2},
    {"track": 14, "arrivalTime": 3},
    {"track": 12, "arrivalTime": 6},
    {"track": 9, "arrivalTime": 7},
]


# -- Rules and geometry --------------------------------------------------------


class TestSweepRules:
    """Each algorithm is a boundary plus an exhaustion policy."""

    def test_circular_flags(self) -> None:
        """Only the C- variants wrap."""
        assert not SCAN_RULE.circular
        assert not LOOK_RULE.circular
        assert CSCAN_RULE.circular
        assert CLOOK_RULE.circular

    def test_edge(self) -> None:
        """The edge depends on the sweep direction."""
        geometry = Geometry(min_track=5, max_track=_MAX)
        expected_low = 5
        assert geometry.edge(going_up=True) == _MAX
        assert geometry.edge(going_up=False) == expected_low

    def test_wrap_target_is_opposite_edge(self) -> None:
        """Normally a wrap lands on the opposite edge."""
        active = RequestQueue(normalize_requests([20, 40]))
        geometry = Geometry(min_track=0, max_track=_MAX)
        assert geometry.wrap_target(going_up=True, active=active) == 0
        assert geometry.wrap_target(going_up=False, active=active) == _MAX

    def test_wrap_target_widens_for_out_of_range(self) -> None:
        """A request below min_track pulls the landing point down."""
        active = RequestQueue(normalize_requests([5]))
        geometry = Geometry(min_track=10, max_track=_MAX)
        expected = 5
        assert geometry.wrap_target(going_up=True, active=active) == expected


# -- SCAN ----------------------------------------------------------------------


class TestScan:
    """SCAN sweeps to the disk edge and bounces."""

    def test_textbook_up(self) -> None:
        """Going up, SCAN serves everything above, hits 199, comes back."""
        result = calculate_scan(_HEAD, _QUEUE, max_track=_MAX)
        assert result.sequence == (65, 67, 98, 122, 124, 183, 37, 14)
        expected_total = 331
        assert result.total_tracks == expected_total

    def test_edge_step_not_in_sequence(self) -> None:
        """The sweep to the edge is a step but not a service."""
        result = calculate_scan(_HEAD, _QUEUE, max_track=_MAX)
        edges = [s for s in result.steps if s.kind is StepKind.EDGE]
        assert len(edges) == 1
        assert edges[0].to_track == _MAX
        assert not edges[0].is_service
        assert _MAX not in result.sequence

    def test_textbook_down(self) -> None:
        """Going down, SCAN visits track 0 before reversing."""
        result = calculate_scan(_HEAD, _QUEUE, max_track=_MAX, direction="desc")
        assert result.sequence == (37, 14, 65, 67, 98, 122, 124, 183)
        expected_total = 236
        assert result.total_tracks == expected_total
        assert any(s.kind is StepKind.EDGE and s.to_track == 0 for s in result.steps)

    def test_stays_within_bounds(self) -> None:
        """No step leaves [min_track, max_track]."""
        result = calculate_scan(_HEAD, _QUEUE, max_track=_MAX)
        assert all(0 <= s.to_track <= _MAX for s in result.steps)

    def test_service_time_only_after_service(self) -> None:
        """time_per_request is charged for services, not edge sweeps."""
        result = calculate_scan(50, [60, 40], max_track=99, time_per_request=2)
        expected_tracks = 108
        expected_time = 112
        assert result.total_tracks == expected_tracks
        assert result.total_time == expected_time

    def test_no_final_edge_sweep(self) -> None:
        """The run ends when the last request is served."""
        result = calculate_scan(50, [60, 70], max_track=99)
        assert result.steps[-1].to_track == 70

    def test_empty(self) -> None:
        """No requests, no movement."""
        result = calculate_scan(_HEAD, [], max_track=_MAX)
        assert result.steps == ()
        assert result.total_time == 0


# -- C-SCAN --------------------------------------------------------------------


class TestCScan:
    """C-SCAN services in one direction and wraps at the edge."""

    def test_textbook_up(self) -> None:
        """Up to 199, wrap to 0, then continue upward."""
        result = calculate_cscan(_HEAD, _QUEUE, max_track=_MAX)
        assert result.sequence == (65, 67, 98, 122, 124, 183, 14, 37)
        expected_total = 382
        assert result.total_tracks == expected_total

    def test_wrap_step_is_not_a_service(self) -> None:
        """The return trip is a WRAP step from the edge to the other edge."""
        result = calculate_cscan(_HEAD, _QUEUE, max_track=_MAX)
        (wrap,) = [s for s in result.steps if s.kind is StepKind.WRAP]
        assert (wrap.from_track, wrap.to_track) == (_MAX, 0)
        assert wrap.distance == _MAX
        assert not wrap.is_service

    def test_textbook_down(self) -> None:
        """Going down, the wrap goes from 0 to 199."""
        result = calculate_cscan(_HEAD, _QUEUE, max_track=_MAX, direction=Direction.DESC)
        assert result.sequence == (37, 14, 183, 124, 122, 98, 67, 65)
        expected_total = 386
        assert result.total_tracks == expected_total

    def test_unidirectional_service(self) -> None:
        """Every service and edge move goes upward; only the wrap goes down."""
        result = calculate_cscan(_HEAD, _QUEUE, max_track=_MAX)
        for step in result.steps:
            if step.kind is StepKind.WRAP:
                assert step.to_track < step.from_track
            else:
                assert step.to_track >= step.from_track

    def test_head_already_at_edge(self) -> None:
        """No zero-length edge step when the head starts on the edge."""
        result = calculate_cscan(99, [10, 20], max_track=99)
        assert [s.kind for s in result.steps] == [
            StepKind.WRAP,
            StepKind.SERVICE,
            StepKind.SERVICE,
        ]
        expected_total = 119
        assert result.total_tracks == expected_total

    def test_request_below_min_track_terminates(self) -> None:
        """An out-of-range request is still reached after the wrap."""
        result = calculate_cscan(50, [5], min_track=10, max_track=99)
        assert result.sequence == (5,)
        expected_total = 143
        assert result.total_tracks == expected_total

    def test_widened_wrap_is_a_warning(self) -> None:
        """Wrapping past the disk bounds is logged at WARNING."""
        logger = Logger()
        calculate_cscan(50, [5], min_track=10, max_track=99, logger=logger)
        warnings = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings) == 1
        assert "track 5" in warnings[0].message

    def test_in_range_wrap_has_no_warning(self) -> None:
        """An ordinary wrap logs nothing above INFO."""
        logger = Logger()
        calculate_cscan(_HEAD, _QUEUE, max_track=_MAX, logger=logger)
        assert logger.filter(min_level=LogLevel.WARNING) == []

    @pytest.mark.parametrize("direction", [Direction.ASC, Direction.DESC])
    def test_stays_within_bounds(self, direction: Direction) -> None:
        """Every C-SCAN move, wrap included, stays on the disk."""
        result = calculate_cscan(_HEAD, _QUEUE, max_track=_MAX, direction=direction)
        assert all(0 <= s.from_track <= _MAX for s in result.steps)
        assert all(0 <= s.to_track <= _MAX for s in result.steps)

    def test_interception_on_edge_sweep(self) -> None:
        """A request arriving ahead of the sweep is caught on the way out."""
        result = calculate_cscan(
            50,
            [{"track": 40, "arrivalTime": 0}, {"track": 80, "arrivalTime": 10}],
            max_track=99,
        )
        assert result.sequence == (80, 40)
        assert result.steps[0].instant == 0
        expected_total = 188
        assert result.total_tracks == expected_total
        assert result.total_time == expected_total

    def test_wrap_is_logged(self) -> None:
        """Non-servicing moves appear in the log."""
        logger = Logger()
        calculate_cscan(_HEAD, _QUEUE, max_track=_MAX, logger=logger)
        messages = [e.message for e in logger.entries]
        assert "edge move 183 -> 199" in messages
        assert "wrap move 199 -> 0" in messages


# -- LOOK ----------------------------------------------------------------------


class TestLook:
    """LOOK turns at the last request rather than the edge."""

    def test_textbook_up(self) -> None:
        """Turn at 183 instead of 199."""
        result = calculate_look(_HEAD, _QUEUE)
        assert result.sequence == (65, 67, 98, 122, 124, 183, 37, 14)
        expected_total = 299
        assert result.total_tracks == expected_total

    def test_textbook_down(self) -> None:
        """Turn at 14 instead of 0."""
        result = calculate_look(_HEAD, _QUEUE, direction="desc")
        assert result.sequence == (37, 14, 65, 67, 98, 122, 124, 183)
        expected_total = 208
        assert result.total_tracks == expected_total

    def test_no_edge_or_wrap_steps(self) -> None:
        """LOOK only ever moves to requests."""
        result = calculate_look(_HEAD, _QUEUE)
        assert all(s.kind is StepKind.SERVICE for s in result.steps)

    def test_dynamic_arrivals(self) -> None:
        """Track 12 arrives before the head passes it and is intercepted."""
        result = calculate_look(10, _TIMED, time_per_track=5)
        assert result.sequence == (10, 12, 14, 19, 9, 3)
        assert [s.instant for s in result.steps] == [0, 1, 11, 21, 46, 96]
        expected_tracks = 25
        expected_time = 126
        assert result.total_tracks == expected_tracks
        assert result.total_time == expected_time

    def test_dynamic_first_step_serves_in_place(self) -> None:
        """The request on the start track is served with zero distance."""
        result = calculate_look(10, _TIMED, time_per_track=5)
        first = result.steps[0]
        assert (first.from_track, first.to_track, first.distance) == (10, 10, 0)

    def test_intercepted_step_snapshot(self) -> None:
        """The intercept step records the active queue at the time."""
        result = calculate_look(10, _TIMED, time_per_track=5)
        intercepted = result.steps[1]
        assert intercepted.remaining == (19,)
        expected_arrival = 6
        assert intercepted.arrival_instant == expected_arrival


# -- C-LOOK --------------------------------------------------------------------


class TestCLook:
    """C-LOOK wraps from the last request to the far extreme request."""

    def test_wrap_services_lowest(self) -> None:
        """From 50 up: 55, 90, wrap to 10 (served), then 20."""
        result = calculate_clook(50, [55, 90, 10, 20])
        assert result.sequence == (55, 90, 10, 20)
        expected_total = 130
        assert result.total_tracks == expected_total

    def test_wrap_step_is_a_service(self) -> None:
        """The C-LOOK wrap carries the id of the request it lands on."""
        result = calculate_clook(_HEAD, _QUEUE)
        (wrap,) = [s for s in result.steps if s.kind is StepKind.WRAP]
        assert (wrap.from_track, wrap.to_track) == (183, 14)
        assert wrap.request_id == _QUEUE.index(14)
        assert wrap.is_service

    def test_textbook_total(self) -> None:
        """Textbook C-LOOK total is 322."""
        expected_total = 322
        assert calculate_clook(_HEAD, _QUEUE).total_tracks == expected_total

    def test_descending(self) -> None:
        """Going down, the wrap lands on the highest request."""
        result = calculate_clook(50, [55, 90, 10, 20], direction="desc")
        assert result.sequence == (20, 10, 90, 55)
        expected_total = 155
        assert result.total_tracks == expected_total
