"""Tests for the single-shot legality checks."""

import pytest

from enforcer.analysis.crouch_uptilt import check_crouch_uptilt, find_crouch_uptilt_violations
from enforcer.analysis.disallowed_analog import (
    check_disallowed_cstick,
    get_cstick_violations,
    has_disallowed_cstick_coords,
)
from enforcer.analysis.goomwave import check_goomwave, has_goomwave_clamping
from enforcer.analysis.travel_time import (
    average_travel_coord_hit_rate,
    check_travel_time,
    find_travel_time_violations,
)
from enforcer.analysis.uptilt_rounding import check_uptilt_rounding, get_uptilt_check
from enforcer.analysis.visualization import control_stick_viz, cstick_viz
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import FIRST_FRAME, ActionState, ControllerType
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream

ORIGIN = Coord(0.0, 0.0)


def _stream(main, c_coords=None, action_states=None, first_frame=FIRST_FRAME) -> PlayerStream:
    main = tuple(main)
    n = len(main)
    return PlayerStream(
        player_index=0,
        frames=tuple(range(first_frame, first_frame + n)),
        main_coords=main,
        c_coords=tuple(c_coords) if c_coords is not None else (ORIGIN,) * n,
        action_states=tuple(action_states) if action_states is not None else (0,) * n,
    )


class TestTravelTime:
    """Tests for the box travel-time ratio."""

    A = Coord(0.0, 0.0)
    B = Coord(1.0, 1.0)
    M = Coord(0.5, 0.5)

    def test_hit_rate(self):
        coords = [self.A] * 3 + [self.B] * 2 + [self.M] + [Coord(-1.0, -1.0)] * 2
        assert average_travel_coord_hit_rate(coords) == 0.5

    def test_no_travel_fails(self):
        coords = ([self.A] * 5 + [self.B] * 5) * 4
        result = find_travel_time_violations(coords, 0.25)
        assert result.result is True
        assert result.violations[0].metric == 0.0
        assert result.violations[0].reason == "Box travel time too fast"

    def test_enough_travel_passes(self):
        coords = ([self.A] * 5 + [self.M] + [self.B] * 5 + [self.M]) * 4
        assert find_travel_time_violations(coords, 0.25).result is False

    def test_only_applies_to_box(self):
        stream = _stream(([self.A] * 5 + [self.B] * 5) * 4)
        assert check_travel_time(stream, controller_type=ControllerType.BOX).result is True
        assert check_travel_time(stream, controller_type=ControllerType.ANALOG).result is False

    def test_threshold_from_config(self):
        coords = ([self.A] * 5 + [self.M] + [self.B] * 5 + [self.B] * 5) * 4
        stream = _stream(coords)
        strict = DetectionConfig(travel_time_min_ratio=0.9)
        assert check_travel_time(stream, strict, ControllerType.BOX).result is True


class TestGoomwave:
    """Tests for cardinal clamping detection."""

    def test_all_off_axis_values_far_from_axes_flagged(self):
        coords = [Coord(0.5, 0.5), Coord(0.09, 0.7), Coord(-0.3, -0.1)]
        assert has_goomwave_clamping(coords)

    def test_one_small_value_clears(self):
        coords = [Coord(0.5, 0.5), Coord(0.0875, 0.7)]
        assert not has_goomwave_clamping(coords)

    def test_on_axis_samples_ignored(self):
        coords = [Coord(0.0, 0.05), Coord(0.05, 0.0), Coord(0.5, 0.5)]
        assert has_goomwave_clamping(coords)

    def test_older_threshold_via_config(self):
        coords = [Coord(0.5, 0.5), Coord(0.085, 0.7)]
        assert not has_goomwave_clamping(coords)
        assert has_goomwave_clamping(coords, threshold=0.08)

    def test_check_reports_full_coordinate_list(self):
        coords = [Coord(0.5, 0.5), Coord(0.2, 0.7)]
        result = check_goomwave(_stream(coords), controller_type=ControllerType.ANALOG)
        assert result.result is True
        assert result.violations[0].reason == "Evidence of cardinal clamping"
        assert list(result.violations[0].evidence) == coords

    def test_box_streams_pass(self):
        coords = [Coord(0.5, 0.5), Coord(0.2, 0.7)]
        assert check_goomwave(_stream(coords), controller_type=ControllerType.BOX).result is False


class TestDisallowedCStick:
    """Tests for disallowed c-stick values."""

    def test_each_bad_sample_flagged(self):
        coords = [Coord(0.8, 0.0), Coord(1.0, 0.0), Coord(-0.6625, 0.1), Coord(0.0, 0.8)]
        violations = get_cstick_violations(coords)
        assert [v.metric for v in violations] == [0, 2]
        assert list(violations[0].evidence) == [Coord(0.8, 0.0)]

    def test_full_press_allowed(self):
        assert not has_disallowed_cstick_coords([Coord(1.0, 0.0), Coord(-1.0, 0.0)])
        assert has_disallowed_cstick_coords([Coord(0.6625, 0.0)])

    def test_check_reads_c_stick_channel(self):
        main = [ORIGIN] * 4
        c_coords = [ORIGIN, Coord(0.8, 0.0), ORIGIN, ORIGIN]
        stream = _stream(main, c_coords=c_coords)
        result = check_disallowed_cstick(stream, controller_type=ControllerType.BOX)
        assert result.result is True
        assert len(result.violations) == 1
        assert result.violations[0].metric == 1

    def test_independent_of_main_stick_class(self):
        stream = _stream([ORIGIN] * 2, c_coords=[Coord(0.8, 0.0)] * 2)
        for controller_type in (ControllerType.BOX, ControllerType.ANALOG, None):
            result = check_disallowed_cstick(stream, controller_type=controller_type)
            assert result.result is True
            assert len(result.violations) == 2


class TestUptiltRounding:
    """Tests for uptilt rounding detection."""

    BOUNDARY = Coord(0.0, 0.2875)

    def test_boundary_without_band_fails(self):
        coords = [self.BOUNDARY] * 5 + [Coord(0.0, 1.0)]
        result = get_uptilt_check(coords)
        assert result.result is True
        assert set(result.violations[0].evidence) == {self.BOUNDARY, Coord(0.0, 1.0)}

    def test_band_sample_clears(self):
        coords = [self.BOUNDARY] * 5 + [Coord(0.1, 0.25)]
        assert get_uptilt_check(coords).result is False

    def test_too_few_boundary_hits(self):
        assert get_uptilt_check([self.BOUNDARY] * 4).result is False

    def test_box_streams_pass(self):
        stream = _stream([self.BOUNDARY] * 5)
        assert check_uptilt_rounding(stream, controller_type=ControllerType.BOX).result is False
        assert check_uptilt_rounding(stream, controller_type=ControllerType.ANALOG).result is True


class TestCrouchUptilt:
    """Tests for fast crouch-to-uptilt detection."""

    def test_fast_crouch_uptilt(self):
        states = [0] * 200
        states[50] = ActionState.SQUAT
        states[52] = ActionState.ATTACK_HI3
        states[53] = ActionState.ATTACK_HI3
        stream = _stream([ORIGIN] * 200, action_states=states)

        violations = find_crouch_uptilt_violations(stream)
        assert len(violations) == 1
        assert violations[0].metric == FIRST_FRAME + 50
        assert len(violations[0].evidence) == 4

    def test_slow_crouch_uptilt_is_legal(self):
        states = [0] * 200
        states[50] = ActionState.SQUAT
        states[55] = ActionState.ATTACK_HI3
        stream = _stream([ORIGIN] * 200, action_states=states)
        assert find_crouch_uptilt_violations(stream) == []

    def test_uptilt_without_crouch_is_legal(self):
        states = [0] * 20
        states[1] = ActionState.ATTACK_HI3
        stream = _stream([ORIGIN] * 20, action_states=states)
        assert find_crouch_uptilt_violations(stream) == []

    def test_gap_counts_toward_distance(self):
        frames = (10, 11, 20, 21)
        states = (0, ActionState.SQUAT, ActionState.ATTACK_HI3, 0)
        stream = PlayerStream(
            player_index=0,
            frames=frames,
            main_coords=(ORIGIN,) * 4,
            c_coords=(ORIGIN,) * 4,
            action_states=states,
        )
        assert find_crouch_uptilt_violations(stream) == []

    def test_check_gates_on_box(self):
        states = [0] * 10
        states[2] = ActionState.SQUAT
        states[3] = ActionState.ATTACK_HI3
        stream = _stream([ORIGIN] * 10, action_states=states)
        assert check_crouch_uptilt(stream, controller_type=ControllerType.BOX).result is True
        assert check_crouch_uptilt(stream, controller_type=ControllerType.ANALOG).result is False


class TestVisualization:
    """Visualization evidence never fails."""

    @pytest.mark.parametrize("viz", [control_stick_viz, cstick_viz])
    def test_never_a_violation(self, viz):
        stream = _stream([ORIGIN, Coord(1.0, 0.0)], c_coords=[Coord(0.0, 1.0)] * 2)
        result = viz(stream)
        assert result.result is False
        assert len(result.violations) == 1
        assert len(result.violations[0].evidence) == 2

    def test_channels(self):
        stream = _stream([Coord(1.0, 0.0)], c_coords=[Coord(0.0, 1.0)])
        assert control_stick_viz(stream).violations[0].evidence == (Coord(1.0, 0.0),)
        assert cstick_viz(stream).violations[0].evidence == (Coord(0.0, 1.0),)
