"""
Utility functions for Enforcer.

This module provides:
- Performance timing helpers
- Game timer formatting for evidence frames
- Small numeric helpers
"""

import logging
import math
import time

from enforcer.core.constants import FRAMES_PER_SECOND, TimerType

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Context manager for monitoring performance of code blocks.

    Usage:
        with PerformanceMonitor("analyzing replay"):
            engine.analyze_game(frames)
    """

    def __init__(self, operation_name: str, log_level: int = logging.INFO):
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: float | None = None
        self.elapsed: float = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - (self.start_time or 0)
        if exc_type is not None:
            logger.error(f"{self.operation_name} failed after {self.elapsed:.3f}s: {exc_val}")
        else:
            logger.log(self.log_level, f"{self.operation_name} completed in {self.elapsed:.3f}s")
        return False


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is 0.

    Args:
        numerator: Top of fraction
        denominator: Bottom of fraction
        default: Value to return if denominator is 0

    Returns:
        Result of division or default
    """
    if denominator == 0:
        return default
    return numerator / denominator


def frame_to_game_timer(
    frame: int,
    timer_type: TimerType,
    starting_timer_seconds: int | None = None,
) -> str:
    """
    Convert a frame number to the in-game clock shown at that frame.

    Args:
        frame: Frame index (0 = GO)
        timer_type: Timer mode from the game settings
        starting_timer_seconds: Starting clock for decreasing timers

    Returns:
        "MM:SS.CC", "Infinite" for untimed games, or "Unknown" when a
        decreasing timer has no starting value
    """
    if timer_type == TimerType.NONE:
        return "Infinite"

    sub_frame = int(math.fmod(frame, FRAMES_PER_SECOND))

    if timer_type == TimerType.DECREASING:
        if starting_timer_seconds is None:
            return "Unknown"
        remainder = (FRAMES_PER_SECOND - sub_frame) % FRAMES_PER_SECOND
        centiseconds = math.ceil(remainder * 99 / 59)
        total_seconds = max(0, int(starting_timer_seconds - frame / FRAMES_PER_SECOND))
    else:
        centiseconds = max(0, math.floor(sub_frame * 99 / 59))
        total_seconds = max(0, int(frame / FRAMES_PER_SECOND))

    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}.{centiseconds:02d}"
