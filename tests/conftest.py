"""
lineupkit Test Configuration

Shared fixtures and configuration for all tests.
"""

import os
import random
import tempfile
from pathlib import Path
from typing import Generator

import pytest

import lineupkit.config as config_module
from lineupkit.config import LineupKitConfig
from lineupkit.programs.materializer import extract_lookup_entries
from lineupkit.programs.models import Program

from tests.fixtures.factories import ContentProgramFactory, CustomProgramFactory, flex, redirect


# ============ Configuration Fixtures ============


@pytest.fixture(autouse=True)
def default_config() -> Generator[LineupKitConfig, None, None]:
    """Use default configuration, independent of any lineupkit.yaml on disk."""
    config = LineupKitConfig()
    config_module._config = config
    yield config
    config_module._config = None


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables for each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LINEUPKIT_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============ Randomness ============


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


# ============ Sample Data Fixtures ============


@pytest.fixture
def mixed_programs() -> list[Program]:
    """A lineup with every kind of program."""
    return [
        ContentProgramFactory.create_episode("show-a", 1, 1),
        ContentProgramFactory.create_movie("Zodiac", release_date=1_000),
        flex(),
        ContentProgramFactory.create_episode("show-a", 1, 2),
        redirect("channel-2"),
        CustomProgramFactory.create(
            "custom-1",
            id="custom-program-1",
            index=0,
            program=ContentProgramFactory.create_movie("Custom Movie", id="custom-program-1"),
        ),
        ContentProgramFactory.create_track("artist-1", 1, 1),
    ]


@pytest.fixture
def lookup_for():
    """Build a lookup table for a list of programs."""
    return extract_lookup_entries


# ============ Markers ============


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
