"""
Frame Source Adapter

Materializes decoded replay frames into immutable per-player streams. The
replay decoder is an external collaborator; it hands over a frame table with
one row per (frame, player) and these columns:

    frame               Frame index, starting at -123
    player_index        Port index (0-3)
    raw_joystick_x/y    Raw main-stick readings (nullable; older replays lack them)
    joystick_x/y        Engine-normalized main stick
    cstick_x/y          Engine-normalized c-stick
    action_state_id     Post-frame action state
    stocks              Stocks remaining (optional)

Frames where a player has no data (unused doubles slot, eliminated player)
are skipped for that player rather than failing the game.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from enforcer.core.config import InputConfig
from enforcer.core.constants import FIRST_FRAME, TimerType
from enforcer.core.coords import Coord
from enforcer.core.quantize import process_analog_stick, quantize_stick_array

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("frame", "player_index", "cstick_x", "cstick_y", "action_state_id")
RAW_STICK_COLUMNS = ("raw_joystick_x", "raw_joystick_y")
NORMALIZED_STICK_COLUMNS = ("joystick_x", "joystick_y")


@dataclass(frozen=True)
class PlayerFrame:
    """One player's data for one frame."""

    frame: int
    player_index: int
    cstick_x: float
    cstick_y: float
    action_state_id: int
    raw_joystick_x: float | None = None
    raw_joystick_y: float | None = None
    joystick_x: float | None = None
    joystick_y: float | None = None
    stocks: int | None = None


@dataclass(frozen=True)
class PlayerSettings:
    """Per-player game settings. Used for dispatch only."""

    player_index: int
    character_id: int = 0
    player_type: int = 0
    character_color: int = 0


@dataclass(frozen=True)
class GameSettings:
    """Game settings metadata from the replay header."""

    stage_id: int = 0
    players: tuple[PlayerSettings, ...] = ()
    # Unknown when None; violations then carry no in-game clock
    timer_type: TimerType | None = None
    starting_timer_seconds: int | None = None

    @property
    def player_indices(self) -> list[int]:
        return [p.player_index for p in self.players]


@dataclass(frozen=True)
class PlayerStream:
    """
    Immutable per-player input columns.

    All tuples are aligned: position k holds the data for frames[k]. Only
    frames where the player had data are present.
    """

    player_index: int
    frames: tuple[int, ...]
    main_coords: tuple[Coord, ...]
    c_coords: tuple[Coord, ...]
    action_states: tuple[int, ...]
    stocks: tuple[int | None, ...] = ()

    def __post_init__(self):
        n = len(self.frames)
        lengths = {len(self.main_coords), len(self.c_coords), len(self.action_states)}
        if self.stocks:
            lengths.add(len(self.stocks))
        if lengths != {n}:
            raise ValueError(f"Player {self.player_index}: stream columns are not aligned")

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def position_of(self, frame: int) -> int | None:
        """Index into the stream columns for a frame, or None if absent."""
        # Streams are sorted and usually contiguous, so try the direct offset first
        if self.frames:
            guess = frame - self.frames[0]
            if 0 <= guess < len(self.frames) and self.frames[guess] == frame:
                return guess
        pos = int(np.searchsorted(np.asarray(self.frames), frame))
        if pos < len(self.frames) and self.frames[pos] == frame:
            return pos
        return None


@dataclass(frozen=True)
class GameFrames:
    """All player streams for one replay."""

    streams: dict[int, PlayerStream] = field(default_factory=dict)
    first_frame: int = FIRST_FRAME
    last_frame: int = FIRST_FRAME - 1
    settings: GameSettings | None = None
    source: str = ""

    @property
    def total_frames(self) -> int:
        return max(0, self.last_frame - self.first_frame + 1)

    @property
    def player_indices(self) -> list[int]:
        """Players to analyze: settings order when known, else every stream."""
        if self.settings and self.settings.players:
            return self.settings.player_indices
        return sorted(self.streams)

    def get_stream(self, player_index: int) -> PlayerStream | None:
        return self.streams.get(player_index)


# =============================================================================
# Builders
# =============================================================================


def _stream_from_columns(
    player_index: int,
    frames: np.ndarray,
    main_x: np.ndarray,
    main_y: np.ndarray,
    c_x: np.ndarray,
    c_y: np.ndarray,
    states: np.ndarray,
    stocks: np.ndarray | None,
) -> PlayerStream:
    return PlayerStream(
        player_index=int(player_index),
        frames=tuple(int(f) for f in frames),
        main_coords=tuple(Coord(float(x), float(y)) for x, y in zip(main_x, main_y)),
        c_coords=tuple(Coord(float(x), float(y)) for x, y in zip(c_x, c_y)),
        action_states=tuple(int(s) for s in states),
        stocks=(
            tuple(None if pd.isna(s) else int(s) for s in stocks) if stocks is not None else ()
        ),
    )


def _main_stick_columns(df: pd.DataFrame, config: InputConfig) -> tuple[np.ndarray, np.ndarray]:
    """Quantize raw readings; fall back to normalized values where raw is missing."""
    n = len(df)
    main_x = np.full(n, np.nan)
    main_y = np.full(n, np.nan)

    has_raw = all(col in df.columns for col in RAW_STICK_COLUMNS)
    has_normalized = all(col in df.columns for col in NORMALIZED_STICK_COLUMNS)

    if has_raw:
        raw_x = df["raw_joystick_x"].to_numpy(dtype=float, na_value=np.nan)
        raw_y = df["raw_joystick_y"].to_numpy(dtype=float, na_value=np.nan)
        raw_ok = ~(np.isnan(raw_x) | np.isnan(raw_y))
        if raw_ok.any():
            qx, qy = quantize_stick_array(raw_x[raw_ok], raw_y[raw_ok], config.apply_deadzone)
            main_x[raw_ok] = qx
            main_y[raw_ok] = qy

    if has_normalized and config.fallback_to_normalized:
        missing = np.isnan(main_x) | np.isnan(main_y)
        if missing.any():
            main_x[missing] = df["joystick_x"].to_numpy(dtype=float, na_value=np.nan)[missing]
            main_y[missing] = df["joystick_y"].to_numpy(dtype=float, na_value=np.nan)[missing]

    return main_x, main_y


def build_game_frames(
    df: pd.DataFrame,
    settings: GameSettings | None = None,
    config: InputConfig | None = None,
    source: str = "",
) -> GameFrames:
    """
    Build per-player streams from a frame table.

    Args:
        df: Frame table (see module docstring for columns)
        settings: Optional game settings metadata
        config: Input options (deadzone, normalized fallback)
        source: Label for logs and results (usually the file name)

    Returns:
        GameFrames with one PlayerStream per player that has any data

    Raises:
        ValueError: if required columns are missing
    """
    config = config or InputConfig()

    missing_cols = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing_cols:
        raise ValueError(f"Frame table missing required columns: {missing_cols}")
    has_raw = all(c in df.columns for c in RAW_STICK_COLUMNS)
    has_normalized = all(c in df.columns for c in NORMALIZED_STICK_COLUMNS)
    if not has_raw and not has_normalized:
        raise ValueError(
            f"Frame table needs main-stick columns {RAW_STICK_COLUMNS} "
            f"or {NORMALIZED_STICK_COLUMNS}"
        )

    if df.empty:
        logger.warning(f"Frame table {source or '<memory>'} is empty")
        return GameFrames(settings=settings, source=source)

    before = len(df)
    df = df.sort_values(["player_index", "frame"], kind="stable")
    df = df.drop_duplicates(subset=["player_index", "frame"], keep="first")
    if len(df) != before:
        logger.warning(f"Dropped {before - len(df)} duplicate (frame, player) rows")

    main_x, main_y = _main_stick_columns(df, config)
    c_x = df["cstick_x"].to_numpy(dtype=float, na_value=np.nan)
    c_y = df["cstick_y"].to_numpy(dtype=float, na_value=np.nan)
    states = df["action_state_id"].to_numpy(dtype=float, na_value=np.nan)

    present = ~(
        np.isnan(main_x) | np.isnan(main_y) | np.isnan(c_x) | np.isnan(c_y) | np.isnan(states)
    )
    skipped = int((~present).sum())
    if skipped:
        logger.debug(f"Skipping {skipped} frame rows without player data")

    frames = df["frame"].to_numpy()
    players = df["player_index"].to_numpy()
    stocks = df["stocks"].to_numpy() if "stocks" in df.columns else None

    streams: dict[int, PlayerStream] = {}
    for player_index in pd.unique(players[present]):
        mask = present & (players == player_index)
        streams[int(player_index)] = _stream_from_columns(
            player_index,
            frames[mask],
            main_x[mask],
            main_y[mask],
            c_x[mask],
            c_y[mask],
            states[mask],
            stocks[mask] if stocks is not None else None,
        )

    first_frame = int(df["frame"].min())
    last_frame = int(df["frame"].max())
    logger.info(
        f"Loaded {len(streams)} player stream(s) over frames {first_frame}..{last_frame}"
        f"{' from ' + source if source else ''}"
    )
    return GameFrames(
        streams=streams,
        first_frame=first_frame,
        last_frame=last_frame,
        settings=settings,
        source=source,
    )


def build_game_frames_from_records(
    records: Iterable[PlayerFrame],
    settings: GameSettings | None = None,
    config: InputConfig | None = None,
    source: str = "",
) -> GameFrames:
    """
    Build per-player streams from PlayerFrame records.

    Same semantics as build_game_frames, for callers that decode frames one
    at a time instead of as a table.
    """
    config = config or InputConfig()
    by_player: dict[int, dict[int, PlayerFrame]] = {}
    first_frame: int | None = None
    last_frame: int | None = None

    for record in records:
        first_frame = record.frame if first_frame is None else min(first_frame, record.frame)
        last_frame = record.frame if last_frame is None else max(last_frame, record.frame)
        by_player.setdefault(record.player_index, {}).setdefault(record.frame, record)

    streams: dict[int, PlayerStream] = {}
    for player_index, frames in by_player.items():
        ordered = [frames[f] for f in sorted(frames)]
        kept_frames, mains, cs, states, stocks = [], [], [], [], []
        for rec in ordered:
            if rec.raw_joystick_x is not None and rec.raw_joystick_y is not None:
                main = process_analog_stick(
                    rec.raw_joystick_x, rec.raw_joystick_y, config.apply_deadzone
                )
            elif (
                config.fallback_to_normalized
                and rec.joystick_x is not None
                and rec.joystick_y is not None
            ):
                main = Coord(rec.joystick_x, rec.joystick_y)
            else:
                continue
            kept_frames.append(rec.frame)
            mains.append(main)
            cs.append(Coord(rec.cstick_x, rec.cstick_y))
            states.append(rec.action_state_id)
            stocks.append(rec.stocks)
        if kept_frames:
            streams[player_index] = PlayerStream(
                player_index=player_index,
                frames=tuple(kept_frames),
                main_coords=tuple(mains),
                c_coords=tuple(cs),
                action_states=tuple(states),
                stocks=tuple(stocks),
            )

    if first_frame is None:
        return GameFrames(settings=settings, source=source)
    return GameFrames(
        streams=streams,
        first_frame=first_frame,
        last_frame=last_frame,
        settings=settings,
        source=source,
    )


def read_frame_table(path: str | Path) -> pd.DataFrame:
    """
    Read a decoded frame table from disk.

    Supports .csv, .json (records orientation) and .parquet.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".json":
        return pd.read_json(path, orient="records")
    if suffix in (".parquet", ".pq"):
        return pd.read_parquet(path)
    raise ValueError(f"Unsupported frame table format: {suffix}")


def load_game_frames(
    path: str | Path,
    settings: GameSettings | None = None,
    config: InputConfig | None = None,
) -> GameFrames:
    """Read a frame table file and build its player streams."""
    path = Path(path)
    df = read_frame_table(path)
    return build_game_frames(df, settings=settings, config=config, source=path.name)
