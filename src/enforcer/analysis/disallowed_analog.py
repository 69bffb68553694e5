"""
Disallowed c-stick values.

Certain c-stick x magnitudes can only be produced by firmware that emulates
an analog c-stick on a digital controller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import DISALLOWED_CSTICK_VALUES, ControllerType
from enforcer.core.coords import Coord, float_equals
from enforcer.core.frames import PlayerStream

logger = logging.getLogger(__name__)


def is_disallowed_cstick_coord(
    coord: Coord, values: Iterable[float] = DISALLOWED_CSTICK_VALUES
) -> bool:
    return any(float_equals(abs(coord.x), value) for value in values)


def get_cstick_violations(
    coords: Sequence[Coord], values: Iterable[float] = DISALLOWED_CSTICK_VALUES
) -> list[Violation]:
    """One violation per sample, anchored at the sample index."""
    values = tuple(values)
    return [
        Violation(metric=i, reason="Disallowed c-stick coordinate", evidence=(coord,))
        for i, coord in enumerate(coords)
        if is_disallowed_cstick_coord(coord, values)
    ]


def has_disallowed_cstick_coords(coords: Sequence[Coord]) -> bool:
    return any(is_disallowed_cstick_coord(coord) for coord in coords)


def check_disallowed_cstick(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """
    Inspects the c-stick channel for every controller class.

    The main-stick classification says nothing about the c-stick, so
    controller_type is accepted for a uniform runner signature and ignored.
    """
    config = config or DetectionConfig()
    violations = get_cstick_violations(stream.c_coords, config.disallowed_cstick_values)
    if violations:
        logger.debug(f"Player {stream.player_index}: {len(violations)} disallowed c-stick samples")
    return CheckResult.from_violations(violations)
