"""
Enforcer Analysis - Legality checks over stick input streams.

This module contains:
- regions: Joystick and SDI region classification
- decompose: Target/travel decomposition of coordinate sequences
- controller: Box vs analog classification
- sdi, travel_time, crouch_uptilt: Box checks
- disallowed_analog: c-stick check for every controller
- goomwave, uptilt_rounding: Analog checks
- visualization: Coordinate evidence for plotting
- handwarmer: Warm-up game detection
"""

from enforcer.analysis.controller import classify_controller, classify_stream, is_box_controller
from enforcer.analysis.handwarmer import is_handwarmer
from enforcer.analysis.models import CheckResult, GameAnalysis, PlayerAnalysis, Violation
from enforcer.analysis.regions import get_joystick_region, get_sdi_region

__all__: list[str] = [
    "CheckResult",
    "GameAnalysis",
    "PlayerAnalysis",
    "Violation",
    "classify_controller",
    "classify_stream",
    "is_box_controller",
    "is_handwarmer",
    "get_joystick_region",
    "get_sdi_region",
]
