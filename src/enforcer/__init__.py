"""
Enforcer - Controller Legality Detection for Slippi Replays

Inspects per-frame stick inputs from Super Smash Bros. Melee replays and
flags controller behaviour that legal hardware cannot produce. Intended for
tournament organisers adjudicating equipment legality; results are evidence
for a human, not proof.

Usage:
    from enforcer import EnforcerEngine, load_config, load_game_frames

    engine = EnforcerEngine(load_config())
    analysis = engine.analyze_game(load_game_frames("game.csv"))

    for index, player in analysis.players.items():
        print(f"P{index + 1} ({player.controller_type}): legal={player.is_legal}")
"""

__version__ = "0.1.0"
__author__ = "Enforcer Contributors"


def __getattr__(name):
    """Lazy import for heavy dependencies."""
    # Engine
    if name == "EnforcerEngine":
        from enforcer.pipeline.orchestrator import EnforcerEngine
        return EnforcerEngine
    elif name == "analyze_frames":
        from enforcer.pipeline.orchestrator import analyze_frames
        return analyze_frames
    elif name == "analyze_frame_files":
        from enforcer.pipeline.batch import analyze_frame_files
        return analyze_frame_files
    elif name == "list_checks":
        from enforcer.pipeline.registry import list_checks
        return list_checks
    # Input
    elif name == "load_game_frames":
        from enforcer.core.frames import load_game_frames
        return load_game_frames
    elif name == "build_game_frames":
        from enforcer.core.frames import build_game_frames
        return build_game_frames
    elif name == "process_analog_stick":
        from enforcer.core.quantize import process_analog_stick
        return process_analog_stick
    # Config
    elif name == "load_config":
        from enforcer.core.config import load_config
        return load_config
    elif name == "EnforcerConfig":
        from enforcer.core.config import EnforcerConfig
        return EnforcerConfig
    # Models
    elif name == "Coord":
        from enforcer.core.coords import Coord
        return Coord
    elif name == "CheckResult":
        from enforcer.analysis.models import CheckResult
        return CheckResult
    elif name == "Violation":
        from enforcer.analysis.models import Violation
        return Violation
    elif name == "ControllerType":
        from enforcer.core.constants import ControllerType
        return ControllerType
    raise AttributeError(f"module 'enforcer' has no attribute '{name}'")


__all__ = [
    # Version
    "__version__",
    # Engine
    "EnforcerEngine",
    "analyze_frames",
    "analyze_frame_files",
    "list_checks",
    # Input
    "load_game_frames",
    "build_game_frames",
    "process_analog_stick",
    # Config
    "load_config",
    "EnforcerConfig",
    # Models
    "Coord",
    "CheckResult",
    "Violation",
    "ControllerType",
]
