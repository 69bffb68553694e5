"""
Uptilt rounding check.

Legal analog sticks pass through the band just below the up-tilt boundary
when the player tilts up. Firmware that rounds that band up lands exactly on
the boundary instead, and never reports anything inside the band.
"""

from __future__ import annotations

from collections.abc import Sequence

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.decompose import get_unique_coords
from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import (
    UPTILT_BOUNDARY_MIN_HITS,
    UPTILT_BOUNDARY_Y,
    UPTILT_X_MAX,
    UPTILT_Y_MAX,
    UPTILT_Y_MIN,
    ControllerType,
)
from enforcer.core.coords import Coord, float_equals
from enforcer.core.frames import PlayerStream


def _in_uptilt_band(coord: Coord) -> bool:
    return abs(coord.x) < UPTILT_X_MAX and UPTILT_Y_MIN < coord.y < UPTILT_Y_MAX


def _on_uptilt_boundary(coord: Coord) -> bool:
    return abs(coord.x) < UPTILT_X_MAX and float_equals(coord.y, UPTILT_BOUNDARY_Y)


def get_uptilt_check(
    coords: Sequence[Coord], min_boundary_hits: int = UPTILT_BOUNDARY_MIN_HITS
) -> CheckResult:
    """Rounding check without the controller gate."""
    if any(_in_uptilt_band(coord) for coord in coords):
        return CheckResult.passed()

    boundary_hits = sum(1 for coord in coords if _on_uptilt_boundary(coord))
    if boundary_hits < min_boundary_hits:
        return CheckResult.passed()

    return CheckResult.failed(
        [
            Violation(
                metric=0,
                reason="Uptilt rounding observed. No coordinates seen below uptilt area.",
                evidence=tuple(get_unique_coords(coords)),
            )
        ]
    )


def check_uptilt_rounding(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """Analog only."""
    config = config or DetectionConfig()
    controller_type = controller_type or classify_stream(stream, config)
    if controller_type != ControllerType.ANALOG:
        return CheckResult.passed()
    return get_uptilt_check(stream.main_coords, config.uptilt_boundary_min_hits)
