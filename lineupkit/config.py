"""
Configuration management for lineupkit.

Handles loading, validation, and access to engine defaults. Every transform
takes explicit arguments; the values here are what it falls back to when an
argument is omitted.
"""

import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["LineupKitConfig"] = None


class BlockShuffleConfig(BaseModel):
    """Block shuffle defaults and perfect-sync limits."""
    block_size: int = Field(default=3, ge=1)
    shuffle_type: Literal["fixed", "random"] = "fixed"
    loop_blocks: bool = True
    perfect_sync: bool = False
    show_order: Literal["asc", "desc"] = "asc"
    movie_sort: Literal["alpha", "release_date"] = "release_date"
    movie_order: Literal["asc", "desc"] = "asc"

    # Upper bounds checked by can_use_perfect_sync
    max_perfect_sync_loops: int = 10_000
    max_perfect_sync_programs: int = 30_000


class PaddingConfig(BaseModel):
    """Start-time padding settings."""
    flex_threshold_ms: int = 30_000  # Leftovers at or below this are absorbed
    default_mod_minutes: int = 1  # Used when no padding option is selected


class FlexConfig(BaseModel):
    """Flex filler settings."""
    intersperse_duration_ms: int = 30_000


class BreaksConfig(BaseModel):
    """Defaults for inserting flex breaks between programs."""
    after_minutes: int = 60
    min_minutes: int = 2
    max_minutes: int = 5


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = "logs/lineupkit.log"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_console: bool = True
    log_to_file: bool = False


class LineupKitConfig(BaseModel):
    """Main lineupkit configuration."""
    block_shuffle: BlockShuffleConfig = Field(default_factory=BlockShuffleConfig)
    padding: PaddingConfig = Field(default_factory=PaddingConfig)
    flex: FlexConfig = Field(default_factory=FlexConfig)
    breaks: BreaksConfig = Field(default_factory=BreaksConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> LineupKitConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to lineupkit.yaml in the
            working directory or project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        possible_paths = [
            Path("lineupkit.yaml"),
            Path(__file__).parent.parent / "lineupkit.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = LineupKitConfig(**config_data)
    return _config


def get_config() -> LineupKitConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> LineupKitConfig:
    """
    Reload configuration from disk.

    Returns:
        Freshly loaded configuration.
    """
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_map = {
        "LINEUPKIT_LOG_LEVEL": ("logging", "level"),
        "LINEUPKIT_LOG_FILE": ("logging", "file"),
        "LINEUPKIT_BLOCK_SIZE": ("block_shuffle", "block_size"),
        "LINEUPKIT_PADDING_THRESHOLD_MS": ("padding", "flex_threshold_ms"),
        "LINEUPKIT_INTERSPERSE_MS": ("flex", "intersperse_duration_ms"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
