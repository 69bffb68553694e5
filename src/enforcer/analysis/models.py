"""
Result models for the legality checks.

Violation and CheckResult are what every rule returns; PlayerAnalysis and
GameAnalysis are what the engine returns. to_dict() output is the shape
locked in enforcer.pipeline.contract.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from enforcer.core.constants import ControllerType
from enforcer.core.coords import Coord, coords_to_list


@dataclass(frozen=True)
class Violation:
    """A single rule violation.

    metric is usually the frame (or sample index) the violation is anchored
    to; evidence is a short coordinate window for human review. frame and
    game_timer are filled in by the engine for checks anchored in time.
    """

    metric: float
    reason: str
    evidence: tuple[Coord, ...] = ()
    frame: int | None = None
    game_timer: str | None = None

    def to_dict(self) -> dict:
        return {
            "metric": self.metric,
            "reason": self.reason,
            "evidence": coords_to_list(self.evidence),
            "frame": self.frame,
            "game_timer": self.game_timer,
        }


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check. result=True means a violation was detected."""

    result: bool
    violations: tuple[Violation, ...] = ()

    @classmethod
    def passed(cls) -> CheckResult:
        return cls(result=False)

    @classmethod
    def failed(cls, violations: Sequence[Violation]) -> CheckResult:
        return cls(result=True, violations=tuple(violations))

    @classmethod
    def from_violations(cls, violations: Sequence[Violation]) -> CheckResult:
        """Fail if there are any violations, pass otherwise."""
        return cls(result=len(violations) > 0, violations=tuple(violations))

    def to_dict(self) -> dict:
        return {
            "result": self.result,
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass
class PlayerAnalysis:
    """Legality verdict for one player in one replay."""

    player_index: int
    controller_type: ControllerType
    checks: dict[str, CheckResult] = field(default_factory=dict)
    visualization: dict[str, CheckResult] = field(default_factory=dict)
    frame_count: int = 0

    @property
    def is_legal(self) -> bool:
        return not any(check.result for check in self.checks.values())

    @property
    def failed_checks(self) -> list[str]:
        return [name for name, check in self.checks.items() if check.result]

    @property
    def violation_count(self) -> int:
        return sum(len(check.violations) for check in self.checks.values())

    def to_dict(self) -> dict:
        return {
            "player_index": self.player_index,
            "controller_type": str(self.controller_type),
            "is_legal": self.is_legal,
            "frame_count": self.frame_count,
            "failed_checks": self.failed_checks,
            "checks": {name: check.to_dict() for name, check in self.checks.items()},
            "visualization": {
                name: check.to_dict() for name, check in self.visualization.items()
            },
        }


@dataclass
class GameAnalysis:
    """Legality verdicts for every player in one replay."""

    players: dict[int, PlayerAnalysis] = field(default_factory=dict)
    is_handwarmer: bool = False
    first_frame: int = 0
    last_frame: int = 0
    source: str = ""

    @property
    def all_legal(self) -> bool:
        return all(p.is_legal for p in self.players.values())

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "is_handwarmer": self.is_handwarmer,
            "first_frame": self.first_frame,
            "last_frame": self.last_frame,
            "all_legal": self.all_legal,
            "players": {str(idx): p.to_dict() for idx, p in self.players.items()},
        }
