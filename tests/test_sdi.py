"""Tests for the three SDI rules and their dispatcher."""

from enforcer.analysis.sdi import (
    check_sdi,
    fails_sdi_rule_one,
    fails_sdi_rule_three,
    fails_sdi_rule_two,
    find_sdi_violations,
)
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import ControllerType
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream


def _x_coords(*xs: float) -> list[Coord]:
    return [Coord(x, 0.0) for x in xs]


def _stream(coords) -> PlayerStream:
    coords = tuple(coords)
    return PlayerStream(
        player_index=0,
        frames=tuple(range(len(coords))),
        main_coords=coords,
        c_coords=(Coord(0.0, 0.0),) * len(coords),
        action_states=(0,) * len(coords),
    )


N = Coord(0.0, 1.0)
NE = Coord(0.8, 0.8)
NW = Coord(-0.8, 0.8)
E = Coord(1.0, 0.0)


class TestRuleOne:
    """Neutral-bounce detection."""

    def test_no_movement(self):
        assert fails_sdi_rule_one(_x_coords(0, 0, 0, 0, 0, 0)) == []

    def test_rapid_neutral_bounce(self):
        violations = fails_sdi_rule_one(_x_coords(0, 1, 0, 1, 0, 1))
        assert len(violations) >= 1
        assert violations[0].metric == 0
        assert violations[0].reason == "Failed SDI rule #1"

    def test_evidence_is_ten_frame_window(self):
        coords = _x_coords(0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1)
        violations = fails_sdi_rule_one(coords)
        assert len(violations[0].evidence) == 10

    def test_long_tilt_ramp_does_not_count(self):
        coords = _x_coords(0, 0.3, 0.32, 0.35, 0.4, 1, 0, 1)
        assert fails_sdi_rule_one(coords) == []

    def test_slowest_possible_sdi_is_legal(self):
        coords = _x_coords(0, 0.3, 0.35, 0.4, 1, 0, 0.35, 0.4, 1)
        assert fails_sdi_rule_one(coords) == []

    def test_travel_time_between_hits_is_legal(self):
        coords = _x_coords(0, 0.3, 1, 0, 0.3, 1)
        assert fails_sdi_rule_one(coords) == []

    def test_repeat_leniency_is_configurable(self):
        """Allowing three distinct values turns the same repeat into a violation."""
        coords = _x_coords(0, 0.3, 1, 0, 0.3, 1)
        assert len(fails_sdi_rule_one(coords, repeat_max_distinct=3)) == 1

        strict = DetectionConfig(sdi_repeat_max_distinct=3)
        result = check_sdi(_stream(coords), strict, ControllerType.BOX)
        assert result.result is True
        assert check_sdi(_stream(coords), controller_type=ControllerType.BOX).result is False

    def test_travel_after_the_bounce_does_not_excuse_it(self):
        coords = _x_coords(0, 1, 0, 1, 0.3, 0.35, 0.4)
        assert len(fails_sdi_rule_one(coords)) >= 1

    def test_short_lookahead(self):
        """Hits further apart than the lookahead are never paired."""
        coords = _x_coords(0, 1, 0, 1)
        assert fails_sdi_rule_one(coords, lookahead=2) == []


class TestRuleTwo:
    """Cardinal/diagonal alternation."""

    def test_alternating_with_same_diagonal(self):
        violations = fails_sdi_rule_two([N, NE, N, NE, N])
        assert len(violations) >= 1
        assert violations[0].metric == 0
        assert violations[0].reason == "Failed SDI rule #2"
        assert len(violations[0].evidence) == 5

    def test_different_diagonals_do_not_count(self):
        assert fails_sdi_rule_two([N, NE, N, NW, N]) == []

    def test_holding_a_diagonal_counts_once(self):
        assert fails_sdi_rule_two([N, NE, NE, NE, NE]) == []

    def test_non_adjacent_diagonal_ignored(self):
        se = Coord(0.8, -0.8)
        assert fails_sdi_rule_two([N, se, N, se, N]) == []


class TestRuleThree:
    """Diagonal/diagonal bounce."""

    def test_bounce_to_adjacent_diagonal_and_back(self):
        violations = fails_sdi_rule_three([NE, NW, NE])
        assert len(violations) == 1
        assert violations[0].metric == 0
        assert violations[0].reason == "Failed SDI rule #3"

    def test_every_return_is_a_violation(self):
        violations = fails_sdi_rule_three([NE, NW, NE, NW, NE])
        anchored_at_start = [v for v in violations if v.metric == 0]
        assert len(anchored_at_start) == 2

    def test_opposite_diagonal_is_not_adjacent(self):
        sw = Coord(-0.8, -0.8)
        assert fails_sdi_rule_three([NE, sw, NE]) == []

    def test_return_outside_window(self):
        assert fails_sdi_rule_three([NE, NW, NW, NW, NW, NE]) == []


class TestDispatch:
    """Rule order and controller gating."""

    def test_clean_stream_passes(self):
        result = find_sdi_violations(_x_coords(0, 0, 1, 1, 1, 1, 0, 0))
        assert result.result is False
        assert result.violations == ()

    def test_first_failing_rule_wins(self):
        # Rule 1 fires on the neutral bounce; rule 3 would fire on the tail
        coords = _x_coords(0, 1, 0, 1) + [NE, NW, NE]
        result = find_sdi_violations(coords)
        assert result.result is True
        assert {v.reason for v in result.violations} == {"Failed SDI rule #1"}

    def test_falls_through_to_rule_three(self):
        result = find_sdi_violations([NE, NW, NE])
        assert result.result is True
        assert result.violations[0].reason == "Failed SDI rule #3"

    def test_analog_streams_pass(self):
        stream = _stream(_x_coords(0, 1, 0, 1, 0, 1))
        assert check_sdi(stream, controller_type=ControllerType.ANALOG).result is False
        assert check_sdi(stream, controller_type=ControllerType.BOX).result is True
