"""Tests for the coordinate model and the stick quantizer."""

import math

import numpy as np
import pytest

from enforcer.analysis.decompose import get_unique_coords
from enforcer.core.coords import (
    ORIGIN,
    Coord,
    InvalidCoordinateError,
    as_coords,
    coords_to_list,
    float_equals,
    is_equal_coord,
    validate_axis,
)
from enforcer.core.quantize import process_analog_stick, quantize_stick_array


class TestCoord:
    """Tests for Coord construction, equality and hashing."""

    def test_equality_uses_quantized_key(self):
        assert Coord(0.5, 0.5) == Coord(0.50002, 0.49998)
        assert Coord(0.5, 0.5) != Coord(0.5002, 0.5)

    def test_equal_coords_share_a_set_slot(self):
        coords = {Coord(0.2875, 0.0), Coord(0.2875, 0.0), Coord(-0.2875, 0.0)}
        assert len(coords) == 2
        assert Coord(0.28752, 0.0) in coords

    def test_equality_agrees_with_hash_off_grid(self):
        """Values within epsilon but in different key cells are not equal."""
        a = Coord(0.00004, 0.0)
        b = Coord(0.00011, 0.0)
        assert is_equal_coord(a, b)
        assert a != b
        assert b not in {a}
        assert (a == b) == (hash(a) == hash(b))
        assert len(get_unique_coords([a, b])) == 2

    def test_key_is_quantized(self):
        assert Coord(0.1, -0.2).key() == (1000, -2000)

    def test_out_of_range_rejected(self):
        with pytest.raises(InvalidCoordinateError):
            Coord(1.01, 0.0)
        with pytest.raises(InvalidCoordinateError):
            Coord(0.0, -1.5)

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidCoordinateError):
            Coord(math.nan, 0.0)
        with pytest.raises(InvalidCoordinateError):
            Coord(0.0, math.inf)

    def test_invalid_coordinate_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_axis("abc")

    def test_boundaries_accepted(self):
        assert Coord(1.0, -1.0).x == 1.0

    def test_origin(self):
        assert ORIGIN.is_origin
        assert not Coord(0.0, 0.0125).is_origin

    def test_magnitude(self):
        assert Coord(0.6, 0.8).magnitude == pytest.approx(1.0)

    def test_float_equals(self):
        assert float_equals(0.8, 0.80009)
        assert not float_equals(0.8, 0.8002)

    def test_is_equal_coord(self):
        assert is_equal_coord(Coord(0.1, 0.1), Coord(0.10001, 0.1))


class TestCoordConversion:
    """Tests for the sequence helpers."""

    def test_as_coords_accepts_mixed_inputs(self):
        coords = as_coords([Coord(0.1, 0.2), (0.3, 0.4), {"x": 0.5, "y": 0.6}])
        assert isinstance(coords, tuple)
        assert coords == (Coord(0.1, 0.2), Coord(0.3, 0.4), Coord(0.5, 0.6))

    def test_coords_to_list(self):
        assert coords_to_list([Coord(0.25, -0.5)]) == [{"x": 0.25, "y": -0.5}]


class TestProcessAnalogStick:
    """Tests for single-sample quantization."""

    def test_near_zero_snaps_to_center(self):
        assert process_analog_stick(0.01, 0.01) == Coord(0.0, 0.0)

    def test_full_down(self):
        assert process_analog_stick(0, -80) == Coord(0.0, -1.0)

    def test_overshoot_is_clamped(self):
        assert process_analog_stick(100, 0) == Coord(1.0, 0.0)
        assert process_analog_stick(-100, 0) == Coord(-1.0, 0.0)

    def test_clamp_floors_for_positive_x(self):
        result = process_analog_stick(90, 50)
        assert result == Coord(69 / 80, 38 / 80)

    def test_clamp_ceils_for_negative_x(self):
        # Both axes follow x's direction, so y is ceiled too
        result = process_analog_stick(-90, 50)
        assert result == Coord(-69 / 80, 39 / 80)

    def test_deadzone_zeroes_small_axes(self):
        assert process_analog_stick(20, 60, deadzone=True) == Coord(0.0, 0.75)
        assert process_analog_stick(20, 60, deadzone=False) == Coord(0.25, 0.75)

    def test_rounds_half_away_from_zero(self):
        assert process_analog_stick(10.5, 0) == Coord(11 / 80, 0.0)
        assert process_analog_stick(-10.5, 0) == Coord(-11 / 80, 0.0)

    def test_outputs_are_single_precision_values(self):
        result = process_analog_stick(23, 0)
        assert result.x == float(np.float32(23) / np.float32(80))


class TestQuantizeStickArray:
    """Tests for the vectorized quantizer."""

    def test_matches_scalar_quantizer(self):
        xs = np.array([0, 0, 100, -100, 90, -90, 20, 10.5, 0.01])
        ys = np.array([0, -80, 0, 0, 50, 50, 60, 0, 0.01])
        out_x, out_y = quantize_stick_array(xs, ys)
        for x, y, qx, qy in zip(xs, ys, out_x, out_y):
            expected = process_analog_stick(x, y)
            assert qx == expected.x
            assert qy == expected.y

    def test_deadzone_matches_scalar_quantizer(self):
        xs = np.array([20, -22, 30])
        ys = np.array([60, 10, -24])
        out_x, out_y = quantize_stick_array(xs, ys, deadzone=True)
        for x, y, qx, qy in zip(xs, ys, out_x, out_y):
            expected = process_analog_stick(x, y, deadzone=True)
            assert (qx, qy) == (expected.x, expected.y)

    def test_length_mismatch_rejected(self):
        with pytest.raises(ValueError):
            quantize_stick_array(np.zeros(3), np.zeros(2))
