"""
GoomWave clamping check.

Some modded analog controllers snap anything close to an axis onto the
cardinal. A legal stick eventually reports a small off-axis value; a clamped
one never does.
"""

from __future__ import annotations

from collections.abc import Sequence

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import GOOMWAVE_CLAMP_THRESHOLD, ControllerType
from enforcer.core.coords import Coord, float_equals
from enforcer.core.frames import PlayerStream


def has_goomwave_clamping(
    coords: Sequence[Coord], threshold: float = GOOMWAVE_CLAMP_THRESHOLD
) -> bool:
    """
    True if no off-cardinal sample ever came within threshold of an axis.

    Samples exactly on an axis are ignored. With nothing left to inspect the
    result is True.
    """
    for coord in coords:
        if float_equals(coord.x, 0) or float_equals(coord.y, 0):
            continue
        if abs(coord.x) < threshold or abs(coord.y) < threshold:
            return False
    return True


def check_goomwave(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """Analog only."""
    config = config or DetectionConfig()
    controller_type = controller_type or classify_stream(stream, config)
    if controller_type != ControllerType.ANALOG:
        return CheckResult.passed()

    coords = stream.main_coords
    if has_goomwave_clamping(coords, config.goomwave_clamp_threshold):
        return CheckResult.failed(
            [Violation(metric=0, reason="Evidence of cardinal clamping", evidence=coords)]
        )
    return CheckResult.passed()
