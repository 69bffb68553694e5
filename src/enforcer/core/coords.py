"""
Stick coordinates.

A Coord is one normalized stick reading. Equality and hashing both go
through an epsilon-quantized key, so coordinates can live in sets and dict
keys. Tolerant comparisons (within FLOAT_EPSILON either side) use
is_equal_coord and float_equals instead.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from enforcer.core.constants import COORD_MAX, COORD_MIN, FLOAT_EPSILON


class InvalidCoordinateError(ValueError):
    """Raised for coordinates that are non-finite or outside [-1, 1]."""


def float_equals(a: float, b: float) -> bool:
    """Float equality with FLOAT_EPSILON tolerance."""
    return abs(a - b) < FLOAT_EPSILON


def validate_axis(value: float, name: str = "value") -> float:
    """
    Check that a single axis value is usable by the heuristics.

    Args:
        value: Axis value to check
        name: Axis name for the error message

    Returns:
        The value as a float

    Raises:
        InvalidCoordinateError: if the value is non-finite or out of range
    """
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidCoordinateError(f"{name} is not a number: {value!r}") from e
    if not math.isfinite(value):
        raise InvalidCoordinateError(f"{name} is not finite: {value!r}")
    if value < COORD_MIN or value > COORD_MAX:
        raise InvalidCoordinateError(f"{name} outside [-1, 1]: {value!r}")
    return value


@dataclass(frozen=True, eq=False, slots=True)
class Coord:
    """A normalized stick position."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", validate_axis(self.x, "x"))
        object.__setattr__(self, "y", validate_axis(self.y, "y"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coord):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def key(self) -> tuple[int, int]:
        """Epsilon-quantized value key."""
        return (round(self.x / FLOAT_EPSILON), round(self.y / FLOAT_EPSILON))

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def is_origin(self) -> bool:
        return float_equals(self.x, 0.0) and float_equals(self.y, 0.0)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


ORIGIN = Coord(0.0, 0.0)


def is_equal_coord(one: Coord, other: Coord) -> bool:
    """Epsilon equality of two coordinates."""
    return float_equals(one.x, other.x) and float_equals(one.y, other.y)


def as_coords(points: Iterable[Coord | tuple[float, float] | dict]) -> tuple[Coord, ...]:
    """
    Build an immutable coordinate sequence.

    Accepts Coord objects, (x, y) pairs or {"x": .., "y": ..} dicts.
    """
    result = []
    for point in points:
        if isinstance(point, Coord):
            result.append(point)
        elif isinstance(point, dict):
            result.append(Coord(point["x"], point["y"]))
        else:
            x, y = point
            result.append(Coord(x, y))
    return tuple(result)


def coords_to_list(coords: Sequence[Coord]) -> list[dict]:
    """Serialize coordinates for JSON output."""
    return [c.to_dict() for c in coords]
