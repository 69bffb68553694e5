"""
SDI Rule Engine

Three independent sliding-window detectors over the per-frame SDI region
sequence of a box controller. Each rule models an input pattern that switches
regions faster than legal hardware allows.

Rule 1: tapping the same direction out of neutral twice within 4 frames.
Rule 2: alternating a cardinal with the same adjacent diagonal twice within 4 frames.
Rule 3: bouncing from a diagonal to an adjacent diagonal and back within 4 frames.

The dispatcher runs them in order and returns the first rule that finds
anything.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.models import CheckResult, Violation
from enforcer.analysis.regions import (
    is_cardinal,
    is_diagonal,
    is_diagonal_adjacent,
    is_region_adjacent,
    sdi_regions,
)
from enforcer.core.config import DetectionConfig
from enforcer.core.constants import (
    SDI_ALTERNATION_LOOKAHEAD,
    SDI_ALTERNATION_MIN,
    SDI_DIAGONAL_LOOKAHEAD,
    SDI_EVIDENCE_FRAMES,
    SDI_MAX_TILT_FRAMES,
    SDI_NEUTRAL_LOOKAHEAD,
    SDI_REPEAT_MAX_DISTINCT,
    SDI_REPEAT_WINDOW,
    SDI_RULE_ONE_EVIDENCE,
    ControllerType,
    SDIRegion,
)
from enforcer.core.coords import Coord
from enforcer.core.frames import PlayerStream

logger = logging.getLogger(__name__)

_NEUTRAL_OR_TILT = (SDIRegion.DZ, SDIRegion.TILT)


def _distinct_count(coords: Sequence[Coord]) -> int:
    return len({coord.key() for coord in coords})


def fails_sdi_rule_one(
    coords: Sequence[Coord],
    lookahead: int = SDI_NEUTRAL_LOOKAHEAD,
    max_tilt_frames: int = SDI_MAX_TILT_FRAMES,
    repeat_window: int = SDI_REPEAT_WINDOW,
    repeat_max_distinct: int = SDI_REPEAT_MAX_DISTINCT,
) -> list[Violation]:
    """
    Neutral-bounce macro: two SDI hits from neutral too close together.

    From every deadzone frame, scan ahead. The first full region reached is
    the SDI direction. Returning to it counts as a new hit only if the stick
    came from DZ or TILT, did not linger in TILT for more than
    max_tilt_frames, and touched DZ since the previous counted hit.

    Two hits within repeat_window frames are a violation, unless the stick
    passed through intermediate values on the way (more than
    repeat_max_distinct distinct coordinates since the scan started).
    """
    regions = sdi_regions(coords)
    violations = []

    for i, region in enumerate(regions):
        if region != SDIRegion.DZ:
            continue

        last_region = SDIRegion.DZ
        first_hit: SDIRegion | None = None
        last_hit_frame = -1000
        tilt_run = 0
        touched_dz = True

        for j in range(1, lookahead + 1):
            if i + j >= len(regions):
                break
            current = regions[i + j]

            if current == SDIRegion.DZ:
                touched_dz = True
            if current == SDIRegion.TILT:
                tilt_run += 1
            elif current != SDIRegion.DZ and first_hit is None:
                first_hit = current

            if (
                touched_dz
                and last_region in _NEUTRAL_OR_TILT
                and current == first_hit
                and tilt_run <= max_tilt_frames
            ):
                if (
                    i + j <= last_hit_frame + repeat_window
                    and _distinct_count(coords[i : i + j]) <= repeat_max_distinct
                ):
                    violations.append(
                        Violation(
                            metric=i,
                            reason="Failed SDI rule #1",
                            evidence=tuple(coords[i : i + SDI_RULE_ONE_EVIDENCE]),
                        )
                    )
                last_hit_frame = i + j
                touched_dz = False

            last_region = current
            if current != SDIRegion.TILT:
                tilt_run = 0

    return violations


def fails_sdi_rule_two(
    coords: Sequence[Coord],
    lookahead: int = SDI_ALTERNATION_LOOKAHEAD,
) -> list[Violation]:
    """
    Cardinal/diagonal alternation: from a cardinal, entering the same
    adjacent diagonal at least twice within the window.
    """
    regions = sdi_regions(coords)
    violations = []

    for i, start in enumerate(regions):
        if not is_cardinal(start):
            continue

        hits = 0
        hit_diagonal: SDIRegion | None = None
        for j in range(1, lookahead + 1):
            if i + j >= len(regions):
                break
            current = regions[i + j]
            if current == regions[i + j - 1]:
                continue
            if is_diagonal(current) and is_region_adjacent(start, current):
                if hit_diagonal is None or hit_diagonal == current:
                    hit_diagonal = current
                    hits += 1

        if hits >= SDI_ALTERNATION_MIN:
            violations.append(
                Violation(
                    metric=i,
                    reason="Failed SDI rule #2",
                    evidence=tuple(coords[i : i + SDI_EVIDENCE_FRAMES]),
                )
            )

    return violations


def fails_sdi_rule_three(
    coords: Sequence[Coord],
    lookahead: int = SDI_DIAGONAL_LOOKAHEAD,
) -> list[Violation]:
    """
    Diagonal bounce: from a diagonal, visiting an adjacent diagonal and then
    coming back. Every return inside the window is its own violation.
    """
    regions = sdi_regions(coords)
    violations = []

    for i, start in enumerate(regions):
        if not is_diagonal(start):
            continue

        hit_adjacent = False
        for j in range(i + 1, min(i + lookahead, len(regions) - 1) + 1):
            if is_diagonal_adjacent(regions[j], start):
                hit_adjacent = True
            if hit_adjacent and regions[j] == start:
                violations.append(
                    Violation(
                        metric=i,
                        reason="Failed SDI rule #3",
                        evidence=tuple(coords[i : i + SDI_EVIDENCE_FRAMES]),
                    )
                )

    return violations


def find_sdi_violations(
    coords: Sequence[Coord],
    neutral_lookahead: int = SDI_NEUTRAL_LOOKAHEAD,
    max_tilt_frames: int = SDI_MAX_TILT_FRAMES,
    repeat_window: int = SDI_REPEAT_WINDOW,
    repeat_max_distinct: int = SDI_REPEAT_MAX_DISTINCT,
) -> CheckResult:
    """Run rules 1, 2 and 3 in order; the first rule with violations decides."""
    rules = (
        (
            "rule 1",
            lambda: fails_sdi_rule_one(
                coords, neutral_lookahead, max_tilt_frames, repeat_window, repeat_max_distinct
            ),
        ),
        ("rule 2", lambda: fails_sdi_rule_two(coords)),
        ("rule 3", lambda: fails_sdi_rule_three(coords)),
    )
    for name, rule in rules:
        violations = rule()
        if violations:
            logger.debug(f"SDI {name} flagged {len(violations)} window(s)")
            return CheckResult.failed(violations)
    return CheckResult.passed()


def check_sdi(
    stream: PlayerStream,
    config: DetectionConfig | None = None,
    controller_type: ControllerType | None = None,
) -> CheckResult:
    """Box only."""
    config = config or DetectionConfig()
    controller_type = controller_type or classify_stream(stream, config)
    if controller_type != ControllerType.BOX:
        return CheckResult.passed()
    return find_sdi_violations(
        stream.main_coords,
        neutral_lookahead=config.sdi_neutral_lookahead,
        max_tilt_frames=config.sdi_max_tilt_frames,
        repeat_window=config.sdi_repeat_window,
        repeat_max_distinct=config.sdi_repeat_max_distinct,
    )
