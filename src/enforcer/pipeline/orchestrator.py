"""
Enforcer Engine - aggregates per-player legality checks.

Classifies each player's controller once, dispatches only the checks that
apply to that class, and folds the results into a verdict.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import pandas as pd

from enforcer.analysis.controller import classify_stream
from enforcer.analysis.handwarmer import is_handwarmer
from enforcer.analysis.models import CheckResult, GameAnalysis, PlayerAnalysis
from enforcer.core.config import EnforcerConfig
from enforcer.core.frames import (
    GameFrames,
    GameSettings,
    PlayerStream,
    build_game_frames,
    load_game_frames,
)
from enforcer.core.utils import PerformanceMonitor, frame_to_game_timer
from enforcer.pipeline.registry import (
    ANCHOR_INDEX,
    CheckInfo,
    legality_checks,
    visualization_checks,
)

logger = logging.getLogger(__name__)


class EnforcerEngine:
    """
    Runs the legality checks for replays.

    The engine carries its configuration explicitly; there is no process-wide
    state, so engines with different thresholds can run side by side.

    Usage:
        engine = EnforcerEngine(load_config())
        analysis = engine.analyze_file(Path("game.csv"))
        print(analysis.to_dict())
    """

    def __init__(self, config: EnforcerConfig | None = None):
        self.config = config or EnforcerConfig()

    def analyze_player(
        self, stream: PlayerStream, settings: GameSettings | None = None
    ) -> PlayerAnalysis:
        """
        Classify one player's controller and run the checks that apply.

        Violations of checks anchored in time get the replay frame they point
        at, and the in-game clock at that frame when settings carry a timer.
        """
        detection = self.config.detection
        controller_type = classify_stream(stream, detection)

        checks = {
            check.key: _anchor_violations(
                check, check.run(stream, detection, controller_type), stream, settings
            )
            for check in legality_checks(controller_type)
        }
        visualization = {}
        if detection.include_visualization:
            visualization = {
                check.key: check.run(stream, detection, controller_type)
                for check in visualization_checks()
            }

        analysis = PlayerAnalysis(
            player_index=stream.player_index,
            controller_type=controller_type,
            checks=checks,
            visualization=visualization,
            frame_count=stream.frame_count,
        )
        if analysis.is_legal:
            logger.debug(f"Player {stream.player_index} ({controller_type}): legal")
        else:
            logger.info(
                f"Player {stream.player_index} ({controller_type}) failed: "
                f"{', '.join(analysis.failed_checks)}"
            )
        return analysis

    def analyze_game(self, game: GameFrames) -> GameAnalysis:
        """Analyze every player in a replay. Players without data are skipped."""
        label = game.source or "game"
        with PerformanceMonitor(f"Analyzing {label}", log_level=logging.DEBUG):
            players = {}
            for player_index in game.player_indices:
                stream = game.get_stream(player_index)
                if stream is None or len(stream) == 0:
                    logger.warning(f"No frames for player {player_index}, skipping")
                    continue
                players[player_index] = self.analyze_player(stream, game.settings)

            result = GameAnalysis(
                players=players,
                is_handwarmer=is_handwarmer(game),
                first_frame=game.first_frame,
                last_frame=game.last_frame,
                source=game.source,
            )

        logger.info(
            f"Analyzed {label}: {len(players)} players, all legal={result.all_legal}, "
            f"handwarmer={result.is_handwarmer}"
        )
        return result

    def analyze_dataframe(
        self,
        df: pd.DataFrame,
        settings: GameSettings | None = None,
        source: str = "",
    ) -> GameAnalysis:
        game = build_game_frames(df, settings=settings, config=self.config.input, source=source)
        return self.analyze_game(game)

    def analyze_file(self, path: Path, settings: GameSettings | None = None) -> GameAnalysis:
        game = load_game_frames(path, settings=settings, config=self.config.input)
        return self.analyze_game(game)


def analyze_frames(
    df: pd.DataFrame,
    settings: GameSettings | None = None,
    config: EnforcerConfig | None = None,
) -> GameAnalysis:
    """One-shot convenience wrapper around EnforcerEngine."""
    return EnforcerEngine(config).analyze_dataframe(df, settings=settings)


def _anchor_violations(
    check: CheckInfo,
    result: CheckResult,
    stream: PlayerStream,
    settings: GameSettings | None,
) -> CheckResult:
    """Fill in frame and game_timer on violations whose metric locates them."""
    if check.anchor is None or not result.violations:
        return result

    timer_type = settings.timer_type if settings is not None else None
    violations = []
    for violation in result.violations:
        position = int(violation.metric)
        if check.anchor == ANCHOR_INDEX:
            if not 0 <= position < len(stream.frames):
                violations.append(violation)
                continue
            frame = stream.frames[position]
        else:
            frame = position
        game_timer = None
        if timer_type is not None:
            game_timer = frame_to_game_timer(frame, timer_type, settings.starting_timer_seconds)
        violations.append(replace(violation, frame=frame, game_timer=game_timer))

    return CheckResult(result=result.result, violations=tuple(violations))
