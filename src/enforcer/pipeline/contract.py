"""
Enforcer Output Contract - the single source of truth.

Defines the exact JSON structure that EnforcerEngine results serialize to
(PlayerAnalysis.to_dict() and GameAnalysis.to_dict()). Every field name,
nesting level, and type is locked here.

Rules:
  1. The models MUST produce output matching PLAYER_CONTRACT.
  2. Consumers MUST read fields using the paths defined here.
  3. Any new field goes here FIRST, then gets wired through the models.

Validated by: tests/test_contract.py
"""

from __future__ import annotations

# ─── Shared shapes ───────────────────────────────────────────────────
VIOLATION_CONTRACT: dict = {
    "metric": (int, float),
    "reason": str,
    "evidence": list,  # [{"x": float, "y": float}, ...]
    "frame": (int,),  # None unless the check is anchored in time
    "game_timer": (str,),  # "MM:SS.CC"; None without timer settings
}

CHECK_RESULT_CONTRACT: dict = {
    "result": bool,
    "violations": list,  # -> VIOLATION_CONTRACT
}

# ─── Top-level result shape ──────────────────────────────────────────
RESULT_CONTRACT: dict = {
    "source": str,
    "is_handwarmer": bool,
    "first_frame": int,
    "last_frame": int,
    "all_legal": bool,
    "players": dict,  # keyed by player index string -> PLAYER_CONTRACT
}

# ─── Per-player shape ────────────────────────────────────────────────
PLAYER_CONTRACT: dict = {
    "player_index": int,
    "controller_type": str,  # "box" | "analog"
    "is_legal": bool,
    "frame_count": int,
    "failed_checks": list,
    "checks": dict,  # check key -> CHECK_RESULT_CONTRACT
    "visualization": dict,  # check key -> CHECK_RESULT_CONTRACT
}


def validate_player(player_data: dict, errors: list[str] | None = None) -> list[str]:
    """Validate a player dict against the contract. Returns list of errors."""
    if errors is None:
        errors = []
    _validate_player(player_data, "player", errors)
    return errors


def validate_result(result: dict) -> list[str]:
    """Validate a full GameAnalysis dict. Returns list of errors."""
    errors: list[str] = []
    _validate_dict(result, RESULT_CONTRACT, "result", errors)

    players = result.get("players", {}) if isinstance(result, dict) else {}
    if isinstance(players, dict):
        for idx, pdata in players.items():
            _validate_player(pdata, f"players[{idx}]", errors)
    return errors


def _validate_player(player_data: dict, path: str, errors: list[str]) -> None:
    _validate_dict(player_data, PLAYER_CONTRACT, path, errors)
    if not isinstance(player_data, dict):
        return
    for section in ("checks", "visualization"):
        results = player_data.get(section)
        if isinstance(results, dict):
            for key, check in results.items():
                _validate_check(check, f"{path}.{section}.{key}", errors)


def _validate_check(check: dict, path: str, errors: list[str]) -> None:
    _validate_dict(check, CHECK_RESULT_CONTRACT, path, errors)
    if not isinstance(check, dict):
        return
    violations = check.get("violations")
    if isinstance(violations, list):
        for i, violation in enumerate(violations):
            _validate_dict(violation, VIOLATION_CONTRACT, f"{path}.violations[{i}]", errors)


def _validate_dict(data: dict, contract: dict, path: str, errors: list[str]) -> None:
    """Recursively validate data against contract schema."""
    if not isinstance(data, dict):
        errors.append(f"{path}: expected dict, got {type(data).__name__}")
        return

    for key, expected_type in contract.items():
        full_path = f"{path}.{key}"
        if key not in data:
            errors.append(f"MISSING {full_path}")
            continue

        value = data[key]

        if isinstance(expected_type, dict):
            _validate_dict(value, expected_type, full_path, errors)
        elif isinstance(expected_type, tuple):
            if value is not None and not isinstance(value, expected_type):
                errors.append(
                    f"TYPE {full_path}: expected {expected_type}, "
                    f"got {type(value).__name__} = {value!r}"
                )
        elif expected_type is not None:
            if value is not None and not isinstance(value, expected_type):
                errors.append(
                    f"TYPE {full_path}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} = {value!r}"
                )
