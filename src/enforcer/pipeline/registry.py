"""
Check registry.

Every check the engine knows about, with the controller classes it applies
to. The engine dispatches from this list; external callers can use it to
run a single check by key.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from enforcer.analysis.crouch_uptilt import check_crouch_uptilt
from enforcer.analysis.disallowed_analog import check_disallowed_cstick
from enforcer.analysis.goomwave import check_goomwave
from enforcer.analysis.models import CheckResult
from enforcer.analysis.sdi import check_sdi
from enforcer.analysis.travel_time import check_travel_time
from enforcer.analysis.uptilt_rounding import check_uptilt_rounding
from enforcer.analysis.visualization import control_stick_viz, cstick_viz
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import ControllerType
from enforcer.core.frames import PlayerStream

CheckRunner = Callable[[PlayerStream, DetectionConfig, ControllerType], CheckResult]

BOX_ONLY = frozenset({ControllerType.BOX})
ANALOG_ONLY = frozenset({ControllerType.ANALOG})
ANY_CONTROLLER = frozenset(ControllerType)

# What a violation metric points at, when it points at a moment in the replay
ANCHOR_FRAME = "frame"
ANCHOR_INDEX = "index"


@dataclass(frozen=True)
class CheckInfo:
    """A registered check."""

    key: str
    name: str
    runner: CheckRunner
    applies_to: frozenset[ControllerType]
    visualization: bool = False
    anchor: str | None = None

    def applies(self, controller_type: ControllerType) -> bool:
        return controller_type in self.applies_to

    def run(
        self,
        stream: PlayerStream,
        config: DetectionConfig | None = None,
        controller_type: ControllerType | None = None,
    ) -> CheckResult:
        return self.runner(stream, config or DetectionConfig(), controller_type)


_CHECKS: tuple[CheckInfo, ...] = (
    CheckInfo("travel_time", "Box Travel Time", check_travel_time, BOX_ONLY),
    CheckInfo(
        "disallowed_cstick",
        "Disallowed Analog C-Stick Values",
        check_disallowed_cstick,
        ANY_CONTROLLER,
        anchor=ANCHOR_INDEX,
    ),
    CheckInfo("uptilt_rounding", "Uptilt Rounding", check_uptilt_rounding, ANALOG_ONLY),
    CheckInfo(
        "crouch_uptilt",
        "Fast Crouch Uptilt",
        check_crouch_uptilt,
        BOX_ONLY,
        anchor=ANCHOR_FRAME,
    ),
    CheckInfo("sdi", "Illegal SDI", check_sdi, BOX_ONLY, anchor=ANCHOR_INDEX),
    CheckInfo("goomwave", "GoomWave Clamping", check_goomwave, ANALOG_ONLY),
    CheckInfo(
        "control_stick_viz",
        "Control Stick Visualization",
        control_stick_viz,
        ANY_CONTROLLER,
        visualization=True,
    ),
    CheckInfo(
        "cstick_viz",
        "C-Stick Visualization",
        cstick_viz,
        ANY_CONTROLLER,
        visualization=True,
    ),
)


def list_checks() -> list[CheckInfo]:
    """All registered checks, in display order."""
    return list(_CHECKS)


def get_check(key: str) -> CheckInfo:
    for check in _CHECKS:
        if check.key == key:
            return check
    raise KeyError(f"Unknown check: {key}")


def legality_checks(controller_type: ControllerType) -> list[CheckInfo]:
    """Non-visualization checks that apply to a controller class."""
    return [c for c in _CHECKS if not c.visualization and c.applies(controller_type)]


def visualization_checks() -> list[CheckInfo]:
    return [c for c in _CHECKS if c.visualization]
