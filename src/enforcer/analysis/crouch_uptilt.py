"""
Fast crouch-uptilt check.

Going from crouch to up-tilt needs the stick to travel from the bottom
of the stick to the top. Doing it within three frames is beyond human
reaction on a box and points at a macro.

Unlike the other checks this one reads game state (action states) rather
than raw inputs.
"""

from __future__ import annotations

import logging

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.models import CheckResult, Violation
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import (
    CROUCH_UPTILT_EVIDENCE_FRAMES,
    CROUCH_UPTILT_MAX_FRAMES,
    ActionState,
    ControllerType,
)
from enforcer.core.frames import PlayerStream

logger = logging.getLogger(__name__)


def find_crouch_uptilt_violations(
    stream: PlayerStream, max_frames: int = CROUCH_UPTILT_MAX_FRAMES
) -> list[Violation]:
    """
    Every entry into up-tilt that comes at most max_frames after a crouch.

    Frames are read from the stream, so gaps (frames the player was absent)
    count toward the distance.
    """
    violations = []
    last_crouch: int | None = None
    last_crouch_pos = 0
    previous_state: int | None = None

    for pos, (frame, state) in enumerate(zip(stream.frames, stream.action_states)):
        if state == ActionState.SQUAT:
            last_crouch = frame
            last_crouch_pos = pos
        elif (
            state == ActionState.ATTACK_HI3
            and previous_state != ActionState.ATTACK_HI3
            and last_crouch is not None
        ):
            elapsed = frame - last_crouch
            if elapsed <= max_frames:
                evidence = stream.main_coords[
                    last_crouch_pos : last_crouch_pos + CROUCH_UPTILT_EVIDENCE_FRAMES
                ]
                violations.append(
                    Violation(
                        metric=last_crouch,
                        reason=(
                            f"Crouch-uptilt occurred within {elapsed} frames "
                            f"(frame {last_crouch} to {frame})"
                        ),
                        evidence=evidence,
                    )
                )
        previous_state = state

    return violations


def check_crouch_uptilt(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """Box only."""
    config = config or DetectionConfig()
    controller_type = controller_type or classify_stream(stream, config)
    if controller_type != ControllerType.BOX:
        return CheckResult.passed()

    violations = find_crouch_uptilt_violations(stream, config.crouch_uptilt_max_frames)
    if violations:
        logger.debug(f"Player {stream.player_index}: {len(violations)} fast crouch-uptilts")
    return CheckResult.from_violations(violations)
