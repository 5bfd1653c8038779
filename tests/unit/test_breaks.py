"""
Unit tests for flex breaks.
"""

import random

import pytest

from lineupkit.programs.models import FlexProgram
from lineupkit.transforms.breaks import AddBreaksOptions, add_breaks

from tests.fixtures.factories import MINUTE, ContentProgramFactory, flex


@pytest.mark.unit
class TestAddBreaks:
    """Tests for add_breaks."""

    @pytest.fixture
    def options(self):
        return AddBreaksOptions(
            after_duration=60 * MINUTE,
            min_duration=2 * MINUTE,
            max_duration=5 * MINUTE,
        )

    def test_break_before_program_that_crosses(self, options, rng):
        programs = [ContentProgramFactory.create_episode(duration=25 * MINUTE) for _ in range(6)]

        result = add_breaks(programs, options, rng)

        # 25 + 25 = 50, third crosses 60 -> break; counter restarts at zero
        assert [isinstance(p, FlexProgram) for p in result] == [
            False, False, True, False, False, False, True, False,
        ]
        for gap in (result[2], result[6]):
            assert 2 * MINUTE <= gap.duration <= 5 * MINUTE

    def test_existing_flex_resets_counter(self, options, rng):
        programs = [
            ContentProgramFactory.create_episode(duration=40 * MINUTE),
            flex(MINUTE),
            ContentProgramFactory.create_episode(duration=40 * MINUTE),
        ]

        assert add_breaks(programs, options, rng) == programs

    def test_from_config(self):
        options = AddBreaksOptions.from_config()

        assert options.after_duration == 60 * MINUTE
        assert options.min_duration == 2 * MINUTE
        assert options.max_duration == 5 * MINUTE

    def test_reproducible(self, options):
        programs = [ContentProgramFactory.create_movie(duration=90 * MINUTE) for _ in range(3)]

        assert add_breaks(programs, options, random.Random(3)) == add_breaks(
            programs, options, random.Random(3)
        )

    def test_empty(self, options, rng):
        assert add_breaks([], options, rng) == []
