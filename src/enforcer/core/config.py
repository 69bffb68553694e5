"""
Configuration Management for Enforcer

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables

Configuration precedence (highest to lowest):
1. Environment variables (ENFORCER_*)
2. Configuration file
3. Default values

There is no process-wide configuration object. Load an EnforcerConfig and
hand it to the engine that needs it.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from enforcer.core import constants

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class DetectionConfig:
    """Thresholds for controller classification and the legality checks."""

    # Controller classification
    analog_deadzone_target_min: int = constants.ANALOG_DEADZONE_TARGET_MIN
    box_max_unique_coords_per_second: float = constants.BOX_MAX_UNIQUE_COORDS_PER_SECOND

    # SDI
    sdi_neutral_lookahead: int = constants.SDI_NEUTRAL_LOOKAHEAD
    sdi_max_tilt_frames: int = constants.SDI_MAX_TILT_FRAMES
    sdi_repeat_window: int = constants.SDI_REPEAT_WINDOW
    sdi_repeat_max_distinct: int = constants.SDI_REPEAT_MAX_DISTINCT

    # Single-shot checks
    crouch_uptilt_max_frames: int = constants.CROUCH_UPTILT_MAX_FRAMES
    goomwave_clamp_threshold: float = constants.GOOMWAVE_CLAMP_THRESHOLD
    disallowed_cstick_values: list[float] = field(
        default_factory=lambda: list(constants.DISALLOWED_CSTICK_VALUES)
    )
    uptilt_boundary_min_hits: int = constants.UPTILT_BOUNDARY_MIN_HITS
    travel_time_min_ratio: float = constants.TRAVEL_TIME_MIN_RATIO

    # Attach full-stream visualization evidence to each player result
    include_visualization: bool = False


@dataclass
class InputConfig:
    """Configuration for materializing frame tables."""

    # Run raw main-stick readings through the engine's per-axis deadzone
    apply_deadzone: bool = False
    # Use the engine-normalized joystick columns when raw readings are missing
    fallback_to_normalized: bool = True


@dataclass
class BatchConfig:
    """Configuration for batch analysis."""

    max_workers: int = max(1, (os.cpu_count() or 4) - 1)
    skip_handwarmers: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class EnforcerConfig:
    """Main configuration container."""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    input: InputConfig = field(default_factory=InputConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Version of the config format
    config_version: str = "1.0"


# ============================================================================
# Configuration Loading
# ============================================================================


CONFIG_FILE_NAMES = ("enforcer.yaml", "enforcer.yml", "enforcer.toml", "enforcer.json")


def get_default_config_paths() -> list[Path]:
    """Config files looked up in the working directory, in priority order."""
    return [Path.cwd() / name for name in CONFIG_FILE_NAMES]


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    import yaml

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    import tomllib

    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


def _convert_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        "ENFORCER_LOG_LEVEL": ("logging", "level"),
        "ENFORCER_LOG_FILE": ("logging", "file"),
        "ENFORCER_MAX_WORKERS": ("batch", "max_workers"),
        "ENFORCER_SKIP_HANDWARMERS": ("batch", "skip_handwarmers"),
        "ENFORCER_APPLY_DEADZONE": ("input", "apply_deadzone"),
        "ENFORCER_INCLUDE_VISUALIZATION": ("detection", "include_visualization"),
        "ENFORCER_SDI_LOOKAHEAD": ("detection", "sdi_neutral_lookahead"),
        "ENFORCER_SDI_REPEAT_MAX_DISTINCT": ("detection", "sdi_repeat_max_distinct"),
        "ENFORCER_GOOMWAVE_THRESHOLD": ("detection", "goomwave_clamp_threshold"),
        "ENFORCER_TRAVEL_MIN_RATIO": ("detection", "travel_time_min_ratio"),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            config.setdefault(section, {})[key] = _convert_env_value(value)

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> EnforcerConfig:
    """Convert a dictionary to EnforcerConfig. Unknown keys are ignored."""
    config = EnforcerConfig()

    for section in ("detection", "input", "batch", "logging"):
        if section not in data:
            continue
        target = getattr(config, section)
        for key, value in data[section].items():
            if hasattr(target, key):
                setattr(target, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {section}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> EnforcerConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged EnforcerConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


def config_to_dict(config: EnforcerConfig) -> dict[str, Any]:
    """Convert EnforcerConfig to a dictionary."""
    return asdict(config)


def save_config(config: EnforcerConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (.yaml, .yml or .json)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        import yaml

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown config format: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Logging Setup
# ============================================================================


def configure_logging(config: LoggingConfig) -> None:
    """Apply a LoggingConfig to the root logger."""
    root = logging.getLogger()
    root.setLevel(config.level.upper())

    formatter = logging.Formatter(config.format)
    if not root.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if config.file:
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
