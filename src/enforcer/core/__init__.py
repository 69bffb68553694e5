"""
Enforcer Core - Foundation modules for input processing.

This module contains the fundamental components:
- constants: Thresholds, region enums and action states
- coords: Coordinate model with epsilon equality
- config: Application configuration management
- quantize: Raw stick quantization
- frames: Frame table adapter and per-player streams
- utils: General utility functions
"""

from enforcer.core.constants import (
    DEADZONE_THRESHOLD,
    FIRST_FRAME,
    FLOAT_EPSILON,
    FRAMES_PER_SECOND,
    ActionState,
    ControllerType,
    JoystickRegion,
    SDIRegion,
    TimerType,
)
from enforcer.core.coords import ORIGIN, Coord, InvalidCoordinateError, float_equals
from enforcer.core.frames import (
    GameFrames,
    GameSettings,
    PlayerFrame,
    PlayerSettings,
    PlayerStream,
    build_game_frames,
    build_game_frames_from_records,
    load_game_frames,
)
from enforcer.core.quantize import process_analog_stick, quantize_stick_array
from enforcer.core.utils import frame_to_game_timer

__all__ = [
    # Constants
    "DEADZONE_THRESHOLD",
    "FIRST_FRAME",
    "FLOAT_EPSILON",
    "FRAMES_PER_SECOND",
    "ActionState",
    "ControllerType",
    "JoystickRegion",
    "SDIRegion",
    "TimerType",
    # Coordinates
    "ORIGIN",
    "Coord",
    "InvalidCoordinateError",
    "float_equals",
    # Frames
    "GameFrames",
    "GameSettings",
    "PlayerFrame",
    "PlayerSettings",
    "PlayerStream",
    "build_game_frames",
    "build_game_frames_from_records",
    "load_game_frames",
    # Quantization
    "process_analog_stick",
    "quantize_stick_array",
    # Utils
    "frame_to_game_timer",
]
