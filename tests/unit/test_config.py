"""
Unit tests for configuration module.
"""

import os

import pytest
from pydantic import ValidationError

import lineupkit.config as config_module
from lineupkit.config import (
    BlockShuffleConfig,
    LineupKitConfig,
    LoggingConfig,
    PaddingConfig,
    get_config,
    load_config,
    reload_config,
)


@pytest.mark.unit
class TestBlockShuffleConfig:
    """Tests for BlockShuffleConfig."""

    def test_default_values(self):
        """Test default block shuffle configuration values."""
        config = BlockShuffleConfig()

        assert config.block_size == 3
        assert config.shuffle_type == "fixed"
        assert config.loop_blocks is True
        assert config.perfect_sync is False
        assert config.max_perfect_sync_loops == 10_000
        assert config.max_perfect_sync_programs == 30_000

    def test_block_size_validation(self):
        """Test that block size must be positive."""
        with pytest.raises(ValidationError):
            BlockShuffleConfig(block_size=0)

    def test_shuffle_type_validation(self):
        """Test that unknown shuffle types are rejected."""
        with pytest.raises(ValidationError):
            BlockShuffleConfig(shuffle_type="sideways")


@pytest.mark.unit
class TestPaddingConfig:
    """Tests for PaddingConfig."""

    def test_default_values(self):
        config = PaddingConfig()

        assert config.flex_threshold_ms == 30_000
        assert config.default_mod_minutes == 1


@pytest.mark.unit
class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self):
        """Test default logging configuration."""
        config = LoggingConfig()

        assert config.level == "INFO"
        assert "%(asctime)s" in config.format
        assert config.log_to_file is False


@pytest.mark.unit
class TestLoadConfig:
    """Tests for config loading functions."""

    def test_get_config_returns_config(self):
        """Test that get_config returns a LineupKitConfig instance."""
        assert isinstance(get_config(), LineupKitConfig)

    def test_get_config_caching(self):
        """Test that get_config returns cached config."""
        assert get_config() is get_config()

    def test_load_from_yaml(self, temp_dir):
        """Test loading values from a YAML file."""
        path = temp_dir / "lineupkit.yaml"
        path.write_text(
            "block_shuffle:\n"
            "  block_size: 5\n"
            "  perfect_sync: true\n"
            "padding:\n"
            "  flex_threshold_ms: 10000\n"
        )

        config = load_config(str(path))

        assert config.block_shuffle.block_size == 5
        assert config.block_shuffle.perfect_sync is True
        assert config.padding.flex_threshold_ms == 10_000
        # Untouched sections keep defaults
        assert config.flex.intersperse_duration_ms == 30_000
        assert get_config() is config

    def test_empty_yaml_file(self, temp_dir):
        """Test that an empty file yields defaults."""
        path = temp_dir / "lineupkit.yaml"
        path.write_text("")

        config = load_config(str(path))

        assert config.block_shuffle.block_size == 3

    def test_env_overrides(self, temp_dir):
        """Test environment variables override file values."""
        path = temp_dir / "lineupkit.yaml"
        path.write_text("block_shuffle:\n  block_size: 5\n")
        os.environ["LINEUPKIT_BLOCK_SIZE"] = "7"
        os.environ["LINEUPKIT_LOG_LEVEL"] = "DEBUG"
        os.environ["LINEUPKIT_INTERSPERSE_MS"] = "15000"

        config = load_config(str(path))

        assert config.block_shuffle.block_size == 7
        assert config.logging.level == "DEBUG"
        assert config.flex.intersperse_duration_ms == 15_000

    def test_reload_config(self, temp_dir, monkeypatch):
        """Test that reload_config discards the cached instance."""
        monkeypatch.chdir(temp_dir)
        first = get_config()

        config = reload_config()

        assert config is not first
        assert config_module._config is config


@pytest.mark.unit
class TestEnvValueParsing:
    """Tests for environment value parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", True),
            ("No", False),
            ("42", 42),
            ("1.5", 1.5),
            ("DEBUG", "DEBUG"),
        ],
    )
    def test_parse_env_value(self, raw, expected):
        assert config_module._parse_env_value(raw) == expected

    def test_deep_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        config_module._deep_merge(base, {"a": {"b": 10}, "e": 4})

        assert base == {"a": {"b": 10, "c": 2}, "d": 3, "e": 4}
