"""
Stick Quantizer

Reproduces the game engine's discretization of a raw stick reading. The
engine works in single precision, so every step here is done on float32
values; the output must match recorded joystick values exactly.

Steps:
1. Readings with squared magnitude < 1e-3 snap to the center.
2. Readings beyond the clamp radius (80 raw units) are scaled back onto it.
   The scaled axes are floored when the unscaled x is positive and ceiled
   otherwise; both axes follow x's direction.
3. Optionally zero any axis inside the raw deadzone (|v| < 23).
4. Round to the nearest integer and divide by 80.
"""

from __future__ import annotations

import logging

import numpy as np

from enforcer.core.constants import (
    STICK_CLAMP_RADIUS,
    STICK_DEADZONE_RAW,
    STICK_ZERO_MAGNITUDE_SQ,
)
from enforcer.core.coords import Coord

logger = logging.getLogger(__name__)

_RADIUS = np.float32(STICK_CLAMP_RADIUS)
_DEADZONE = np.float32(STICK_DEADZONE_RAW)
_ZERO_SQ = np.float32(STICK_ZERO_MAGNITUDE_SQ)
_HALF = np.float32(0.5)


def _round_half_away(value: np.ndarray | np.float32):
    """Round to nearest, ties away from zero (C roundf)."""
    return np.copysign(np.floor(np.abs(value) + _HALF), value).astype(np.float32)


def process_analog_stick(x: float, y: float, deadzone: bool = False) -> Coord:
    """
    Quantize one raw stick reading.

    Args:
        x: Raw x axis (roughly -128..127)
        y: Raw y axis
        deadzone: Apply the engine's per-axis deadzone

    Returns:
        Normalized Coord in [-1, 1]
    """
    fx = np.float32(x)
    fy = np.float32(y)

    magnitude_sq = fx * fx + fy * fy
    if magnitude_sq < _ZERO_SQ:
        return Coord(0.0, 0.0)

    magnitude = np.sqrt(magnitude_sq)
    if magnitude > _RADIUS:
        shrink = _RADIUS / magnitude
        if fx > 0:
            fx = np.floor(fx * shrink)
            fy = np.floor(fy * shrink)
        else:
            fx = np.ceil(fx * shrink)
            fy = np.ceil(fy * shrink)

    if deadzone:
        if abs(fx) < _DEADZONE:
            fx = np.float32(0.0)
        if abs(fy) < _DEADZONE:
            fy = np.float32(0.0)

    fx = _round_half_away(np.float32(fx))
    fy = _round_half_away(np.float32(fy))

    # Normalize in float32, then widen
    return Coord(float(np.float32(fx / _RADIUS)), float(np.float32(fy / _RADIUS)))


def quantize_stick_array(
    xs: np.ndarray, ys: np.ndarray, deadzone: bool = False
) -> tuple[np.ndarray, np.ndarray]:
    """
    Vectorized process_analog_stick over whole columns.

    Args:
        xs: Raw x values
        ys: Raw y values (same length as xs)
        deadzone: Apply the engine's per-axis deadzone

    Returns:
        (x, y) float64 arrays of normalized values
    """
    fx = np.asarray(xs, dtype=np.float32)
    fy = np.asarray(ys, dtype=np.float32)
    if fx.shape != fy.shape:
        raise ValueError(f"Axis length mismatch: {fx.shape} vs {fy.shape}")

    magnitude_sq = fx * fx + fy * fy
    is_zero = magnitude_sq < _ZERO_SQ
    magnitude = np.sqrt(magnitude_sq)

    over = magnitude > _RADIUS
    with np.errstate(divide="ignore", invalid="ignore"):
        shrink = np.where(over, _RADIUS / magnitude, np.float32(1.0)).astype(np.float32)
    sx = (fx * shrink).astype(np.float32)
    sy = (fy * shrink).astype(np.float32)
    positive = fx > 0
    sx = np.where(over, np.where(positive, np.floor(sx), np.ceil(sx)), fx).astype(np.float32)
    sy = np.where(over, np.where(positive, np.floor(sy), np.ceil(sy)), fy).astype(np.float32)

    if deadzone:
        sx = np.where(np.abs(sx) < _DEADZONE, np.float32(0.0), sx).astype(np.float32)
        sy = np.where(np.abs(sy) < _DEADZONE, np.float32(0.0), sy).astype(np.float32)

    sx = _round_half_away(sx)
    sy = _round_half_away(sy)

    out_x = np.where(is_zero, np.float32(0.0), (sx / _RADIUS).astype(np.float32))
    out_y = np.where(is_zero, np.float32(0.0), (sy / _RADIUS).astype(np.float32))
    logger.debug(f"Quantized {len(out_x)} stick samples ({int(over.sum())} clamped)")
    return out_x.astype(np.float64), out_y.astype(np.float64)
