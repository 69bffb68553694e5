"""
Enforcer - Constants

Stick regions, controller classes, action states and every threshold used by
the legality checks. Values are in normalized stick space (-1.0 to 1.0) unless
noted otherwise. One raw stick unit is 1/80 of the normalized range.
"""

from enum import Enum, StrEnum


class JoystickRegion(int, Enum):
    """
    Nine-way stick region (deadzone, four diagonals, four cardinals).

    Integer values match the ordering used by existing tooling.
    """

    DZ = 0
    NE = 1
    SE = 2
    SW = 3
    NW = 4
    N = 5
    E = 6
    S = 7
    W = 8


class SDIRegion(int, Enum):
    """
    Stick region used by the SDI rules.

    Same as JoystickRegion plus TILT: outside the deadzone but below the
    magnitude needed for a full directional input.
    """

    DZ = 0
    NE = 1
    SE = 2
    SW = 3
    NW = 4
    N = 5
    E = 6
    S = 7
    W = 8
    TILT = 9


class ControllerType(StrEnum):
    """Inferred controller class for a stick stream."""

    BOX = "box"  # Digital switches, small fixed coordinate palette
    ANALOG = "analog"  # Continuous sensor (GCC, Xbox, modded analog)


class TimerType(int, Enum):
    """In-game timer modes (values from the replay's game settings)."""

    NONE = 0
    DECREASING = 2
    INCREASING = 3


class ActionState(int, Enum):
    """Action-state ids the checks care about."""

    SQUAT = 0x28  # Crouch start
    ATTACK_HI3 = 0x38  # Uptilt


DIAGONALS = frozenset({SDIRegion.NE, SDIRegion.SE, SDIRegion.SW, SDIRegion.NW})
CARDINALS = frozenset({SDIRegion.N, SDIRegion.E, SDIRegion.S, SDIRegion.W})

# Cardinal <-> neighbouring diagonal
REGION_ADJACENCY: dict[SDIRegion, frozenset[SDIRegion]] = {
    SDIRegion.N: frozenset({SDIRegion.NW, SDIRegion.NE}),
    SDIRegion.NE: frozenset({SDIRegion.N, SDIRegion.E}),
    SDIRegion.E: frozenset({SDIRegion.NE, SDIRegion.SE}),
    SDIRegion.SE: frozenset({SDIRegion.E, SDIRegion.S}),
    SDIRegion.S: frozenset({SDIRegion.SE, SDIRegion.SW}),
    SDIRegion.SW: frozenset({SDIRegion.S, SDIRegion.W}),
    SDIRegion.W: frozenset({SDIRegion.SW, SDIRegion.NW}),
    SDIRegion.NW: frozenset({SDIRegion.W, SDIRegion.N}),
}

# Diagonals sharing a cardinal axis. Opposite corners are NOT adjacent.
DIAGONAL_ADJACENCY: dict[SDIRegion, frozenset[SDIRegion]] = {
    SDIRegion.NE: frozenset({SDIRegion.NW, SDIRegion.SE}),
    SDIRegion.NW: frozenset({SDIRegion.NE, SDIRegion.SW}),
    SDIRegion.SW: frozenset({SDIRegion.SE, SDIRegion.NW}),
    SDIRegion.SE: frozenset({SDIRegion.NE, SDIRegion.SW}),
}

# =============================================================================
# Coordinates
# =============================================================================

FLOAT_EPSILON = 0.0001
COORD_MIN = -1.0
COORD_MAX = 1.0

# =============================================================================
# Stick quantization (raw units)
# =============================================================================

STICK_CLAMP_RADIUS = 80.0
STICK_DEADZONE_RAW = 23.0
STICK_ZERO_MAGNITUDE_SQ = 1e-3

# =============================================================================
# Regions
# =============================================================================

DEADZONE_THRESHOLD = 0.2875
SDI_MAGNITUDE_THRESHOLD = 0.7

# =============================================================================
# Frames
# =============================================================================

FIRST_FRAME = -123  # Pre-match countdown starts here
FRAMES_PER_SECOND = 60

# =============================================================================
# Controller classification
# =============================================================================

ANALOG_DEADZONE_TARGET_MIN = 2
BOX_MAX_UNIQUE_COORDS_PER_SECOND = 5.0

# =============================================================================
# SDI rules
# =============================================================================

SDI_NEUTRAL_LOOKAHEAD = 9  # Older revisions scanned 5 frames
SDI_MAX_TILT_FRAMES = 3
SDI_REPEAT_WINDOW = 4
# Distinct values allowed between the scan start and a repeat hit
SDI_REPEAT_MAX_DISTINCT = 2
SDI_ALTERNATION_LOOKAHEAD = 4
SDI_ALTERNATION_MIN = 2
SDI_DIAGONAL_LOOKAHEAD = 4
SDI_RULE_ONE_EVIDENCE = 10
SDI_EVIDENCE_FRAMES = 5

# =============================================================================
# Single-shot checks
# =============================================================================

CROUCH_UPTILT_MAX_FRAMES = 3
CROUCH_UPTILT_EVIDENCE_FRAMES = 4

GOOMWAVE_CLAMP_THRESHOLD = 0.09  # Older revisions used 0.08

DISALLOWED_CSTICK_VALUES = (0.8, 0.6625)

UPTILT_X_MAX = 0.2876
UPTILT_Y_MIN = 0.199
UPTILT_Y_MAX = 0.2749
UPTILT_BOUNDARY_Y = 0.2875
UPTILT_BOUNDARY_MIN_HITS = 5

# Legal box samples sit around 0.36
TRAVEL_TIME_MIN_RATIO = 0.25

# =============================================================================
# Handwarmers
# =============================================================================

HANDWARMER_MIN_FRAMES = 3600  # One minute
HANDWARMER_IDLE_FRAMES = 600  # Ten seconds
