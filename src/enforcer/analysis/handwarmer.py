"""
Handwarmer detection.

A handwarmer is a warm-up game played before the real set. These are not
adjudicated: they are short, or a player leaves the stick idle for long
stretches while still alive.
"""

from __future__ import annotations

import logging

from enforcer.core.constants import (
    DEADZONE_THRESHOLD,
    HANDWARMER_IDLE_FRAMES,
    HANDWARMER_MIN_FRAMES,
)
from enforcer.core.frames import GameFrames, PlayerStream

logger = logging.getLogger(__name__)


def _strictly_in_deadzone(x: float, y: float) -> bool:
    return abs(x) < DEADZONE_THRESHOLD and abs(y) < DEADZONE_THRESHOLD


def longest_idle_run(stream: PlayerStream) -> int:
    """
    Longest run of consecutive live frames with the stick at rest.

    Missing frames and frames with zero stocks end the run.
    """
    longest = 0
    run = 0
    previous_frame: int | None = None

    for pos, (frame, coord) in enumerate(zip(stream.frames, stream.main_coords)):
        if previous_frame is not None and frame != previous_frame + 1:
            run = 0
        previous_frame = frame

        stocks = stream.stocks[pos] if stream.stocks else None
        if stocks == 0:
            run = 0
            continue

        if _strictly_in_deadzone(coord.x, coord.y):
            run += 1
            longest = max(longest, run)
        else:
            run = 0

    return longest


def is_handwarmer(
    game: GameFrames,
    min_frames: int = HANDWARMER_MIN_FRAMES,
    idle_frames: int = HANDWARMER_IDLE_FRAMES,
) -> bool:
    """True for empty or short games, or if any player idled too long while alive."""
    total = game.total_frames
    if total == 0:
        return True
    if total < min_frames:
        logger.debug(f"Handwarmer: only {total} frames")
        return True

    for player_index in game.player_indices:
        stream = game.get_stream(player_index)
        if stream is None:
            continue
        idle = longest_idle_run(stream)
        if idle > idle_frames:
            logger.debug(f"Handwarmer: player {player_index} idle for {idle} frames")
            return True

    return False
