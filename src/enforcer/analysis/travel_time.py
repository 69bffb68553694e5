"""
Box travel-time check.

A box jumps between its fixed coordinates, but the hardware still reports
intermediate values on some frames while the signal settles. A stream that
almost never shows those in-between samples was most likely edited to skip
them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.decompose import count_targets_and_travel
from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import ControllerType
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream

logger = logging.getLogger(__name__)


def average_travel_coord_hit_rate(coords: Sequence[Coord]) -> float:
    """Travel transitions per target-to-target move (0 with fewer than 2 targets)."""
    return count_targets_and_travel(coords).travel_ratio


def find_travel_time_violations(coords: Sequence[Coord], min_ratio: float) -> CheckResult:
    counts = count_targets_and_travel(coords)
    ratio = counts.travel_ratio
    logger.debug(f"Travel ratio {ratio:.3f} ({counts.travels} travels / {counts.targets} targets)")
    if ratio < min_ratio:
        return CheckResult.failed(
            [Violation(metric=ratio, reason="Box travel time too fast")]
        )
    return CheckResult.passed()


def check_travel_time(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """Box only. Fails when the travel ratio is below the configured minimum."""
    config = config or DetectionConfig()
    controller_type = controller_type or classify_stream(stream, config)
    if controller_type != ControllerType.BOX:
        return CheckResult.passed()
    return find_travel_time_violations(stream.main_coords, config.travel_time_min_ratio)
