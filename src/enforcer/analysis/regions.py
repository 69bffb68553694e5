"""
Region Classifier

Maps a stick coordinate to a discrete region. Both classifiers are total:
every in-domain coordinate lands in exactly one region.

The deadzone is axis-wise (|x| <= 0.2875 and |y| <= 0.2875), not a circle.
Corners are tested before cardinals, so a point that satisfies both resolves
to the corner. The SDI variant also needs magnitude >= 0.7 for a full
directional hit; anything else outside the deadzone is TILT.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from enforcer.core.constants import (
    CARDINALS,
    DEADZONE_THRESHOLD,
    DIAGONAL_ADJACENCY,
    DIAGONALS,
    REGION_ADJACENCY,
    SDI_MAGNITUDE_THRESHOLD,
    JoystickRegion,
    SDIRegion,
)
from enforcer.core.coords import Coord, validate_axis


def is_in_deadzone(x: float, y: float) -> bool:
    return abs(x) <= DEADZONE_THRESHOLD and abs(y) <= DEADZONE_THRESHOLD


def get_joystick_region(x: float, y: float) -> JoystickRegion:
    """Classify a coordinate into one of nine regions."""
    x = validate_axis(x, "x")
    y = validate_axis(y, "y")
    t = DEADZONE_THRESHOLD

    if is_in_deadzone(x, y):
        return JoystickRegion.DZ

    if x >= t and y >= t:
        return JoystickRegion.NE
    if x >= t and y <= -t:
        return JoystickRegion.SE
    if x <= -t and y <= -t:
        return JoystickRegion.SW
    if x <= -t and y >= t:
        return JoystickRegion.NW

    if y >= t:
        return JoystickRegion.N
    if x >= t:
        return JoystickRegion.E
    if y <= -t:
        return JoystickRegion.S
    # Outside the deadzone with every other test failed: x < -t
    return JoystickRegion.W


def get_sdi_region(x: float, y: float) -> SDIRegion:
    """Classify a coordinate for the SDI rules (adds TILT)."""
    x = validate_axis(x, "x")
    y = validate_axis(y, "y")
    t = DEADZONE_THRESHOLD
    full = SDI_MAGNITUDE_THRESHOLD

    if is_in_deadzone(x, y):
        return SDIRegion.DZ

    magnitude = math.sqrt(x**2 + y**2)
    if magnitude >= full:
        if x >= t and y >= t:
            return SDIRegion.NE
        if x >= t and y <= -t:
            return SDIRegion.SE
        if x <= -t and y <= -t:
            return SDIRegion.SW
        if x <= -t and y >= t:
            return SDIRegion.NW

    # A single axis past 0.7 already implies magnitude >= 0.7
    if y >= full:
        return SDIRegion.N
    if x >= full:
        return SDIRegion.E
    if y <= -full:
        return SDIRegion.S
    if x <= -full:
        return SDIRegion.W

    return SDIRegion.TILT


def coord_region(coord: Coord) -> JoystickRegion:
    return get_joystick_region(coord.x, coord.y)


def sdi_regions(coords: Sequence[Coord]) -> tuple[SDIRegion, ...]:
    """SDI region of every sample in a sequence."""
    return tuple(get_sdi_region(c.x, c.y) for c in coords)


def is_region_adjacent(region_a: SDIRegion, region_b: SDIRegion) -> bool:
    """Cardinal <-> neighbouring diagonal adjacency."""
    return region_b in REGION_ADJACENCY.get(region_a, frozenset())


def is_diagonal_adjacent(region_a: SDIRegion, region_b: SDIRegion) -> bool:
    """Diagonals sharing a cardinal axis (NE-NW, NE-SE, SW-SE, SW-NW)."""
    return region_b in DIAGONAL_ADJACENCY.get(region_a, frozenset())


def is_diagonal(region: SDIRegion) -> bool:
    return region in DIAGONALS


def is_cardinal(region: SDIRegion) -> bool:
    return region in CARDINALS
