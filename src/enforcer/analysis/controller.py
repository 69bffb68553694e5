"""
Controller-Type Classifier

Decides whether a stick stream came from a digital box or a true analog
stick. Two signals, checked in order:

1. Off-center rests inside the deadzone. An analog stick can settle slightly
   off center; a box always returns to exactly (0, 0).
2. Palette size. A box can only produce a small fixed set of coordinates,
   so it produces few distinct values per second of play.

This is statistical. Very short clips or single-touch sessions can be
misclassified.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from enforcer.analysis.decompose import get_target_coords, get_unique_coords
from enforcer.analysis.regions import coord_region
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import (
    ANALOG_DEADZONE_TARGET_MIN,
    BOX_MAX_UNIQUE_COORDS_PER_SECOND,
    FRAMES_PER_SECOND,
    ControllerType,
    JoystickRegion,
)
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream
from enforcer.core.utils import safe_divide

logger = logging.getLogger(__name__)


def count_deadzone_rest_targets(coords: Sequence[Coord]) -> int:
    """Distinct non-zero dwell values that sit inside the deadzone."""
    return sum(
        1
        for target in get_target_coords(coords)
        if not target.is_origin and coord_region(target) == JoystickRegion.DZ
    )


def unique_coords_per_second(coords: Sequence[Coord]) -> float:
    """Distinct coordinate count normalized to one second of frames."""
    return safe_divide(len(get_unique_coords(coords)) * FRAMES_PER_SECOND, len(coords))


def classify_controller(
    coords: Sequence[Coord],
    deadzone_target_min: int = ANALOG_DEADZONE_TARGET_MIN,
    max_unique_per_second: float = BOX_MAX_UNIQUE_COORDS_PER_SECOND,
) -> ControllerType:
    """
    Infer the controller class of a main-stick stream.

    Args:
        coords: Per-frame main-stick coordinates
        deadzone_target_min: Off-center deadzone rests that imply analog
        max_unique_per_second: Largest palette rate still considered a box

    Returns:
        ControllerType.BOX or ControllerType.ANALOG
    """
    dz_rests = count_deadzone_rest_targets(coords)
    if dz_rests >= deadzone_target_min:
        logger.debug(f"Classified analog: {dz_rests} off-center deadzone rests")
        return ControllerType.ANALOG

    rate = unique_coords_per_second(coords)
    if rate > max_unique_per_second:
        logger.debug(f"Classified analog: {rate:.2f} unique coords/s over {len(coords)} frames")
        return ControllerType.ANALOG

    logger.debug(
        f"Classified box: {dz_rests} deadzone rests, {rate:.2f} unique coords/s "
        f"over {len(coords)} frames"
    )
    return ControllerType.BOX


def is_box_controller(coords: Sequence[Coord]) -> bool:
    return classify_controller(coords) == ControllerType.BOX


def classify_stream(stream: PlayerStream, config: DetectionConfig | None = None) -> ControllerType:
    """Classify a player's main stick using the configured thresholds."""
    config = config or DetectionConfig()
    return classify_controller(
        stream.main_coords,
        deadzone_target_min=config.analog_deadzone_target_min,
        max_unique_per_second=config.box_max_unique_coords_per_second,
    )
