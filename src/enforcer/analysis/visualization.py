"""
Stick visualization evidence.

Not legality checks. They never fail; they carry the full coordinate list so
a reviewer can plot it next to the verdict.
"""

from __future__ import annotations

from collections.abc import Sequence

from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import ControllerType
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream


def coords_viz(coords: Sequence[Coord], label: str) -> CheckResult:
    return CheckResult(result=False, violations=(Violation(0, label, tuple(coords)),))


def control_stick_viz(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    return coords_viz(stream.main_coords, "Control Stick Viz")


def cstick_viz(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    return coords_viz(stream.c_coords, "C Stick Viz")
