"""
Unit tests for criteria-based removal.
"""

import pytest

from lineupkit.programs.models import ContentSubtype, FlexProgram
from lineupkit.transforms.removal import (
    RemoveProgrammingRequest,
    program_matches,
    remove_programming,
)

from tests.fixtures.factories import MINUTE, ContentProgramFactory, CustomProgramFactory, flex, redirect


@pytest.fixture
def lineup():
    return [
        ContentProgramFactory.create_episode("show-1", 1, 1),
        ContentProgramFactory.create_episode("show-1", 0, 1),
        ContentProgramFactory.create_episode("show-2", 0, 2),
        ContentProgramFactory.create_movie("Movie"),
        ContentProgramFactory.create_track("artist-1"),
        ContentProgramFactory.create(ContentSubtype.OTHER),
        CustomProgramFactory.create("custom-1"),
        redirect("channel-1"),
        flex(2 * MINUTE),
    ]


@pytest.mark.unit
class TestRemoveProgramming:
    """Tests for remove_programming."""

    def test_empty_request_matches_nothing(self, lineup):
        assert remove_programming(lineup, RemoveProgrammingRequest()) == lineup

    def test_remove_flex(self, lineup):
        result = remove_programming(lineup, RemoveProgrammingRequest(flex=True))

        assert not any(isinstance(p, FlexProgram) for p in result)
        assert result == lineup[:-1]

    def test_remove_show(self, lineup):
        result = remove_programming(lineup, RemoveProgrammingRequest(show_ids={"show-1"}))

        assert result == lineup[2:]

    def test_remove_specials(self, lineup):
        result = remove_programming(lineup, RemoveProgrammingRequest(specials=True))

        assert result == [lineup[0]] + lineup[3:]

    @pytest.mark.parametrize(
        "request_kwargs, removed_index",
        [
            ({"movies": True}, 3),
            ({"artist_ids": {"artist-1"}}, 4),
            ({"custom_show_ids": {"custom-1"}}, 6),
            ({"redirect_channel_ids": {"channel-1"}}, 7),
        ],
    )
    def test_remove_by_kind(self, lineup, request_kwargs, removed_index):
        result = remove_programming(lineup, RemoveProgrammingRequest(**request_kwargs))

        assert result == lineup[:removed_index] + lineup[removed_index + 1:]

    def test_replace_with_flex_keeps_duration(self, lineup):
        request = RemoveProgrammingRequest(movies=True, show_ids={"show-2"})

        result = remove_programming(lineup, request, replace_with_flex=True)

        assert len(result) == len(lineup)
        assert sum(p.duration for p in result) == sum(p.duration for p in lineup)
        assert result[2] == FlexProgram(duration=lineup[2].duration)
        assert result[3] == FlexProgram(duration=lineup[3].duration)

    def test_other_content_never_matches(self, lineup):
        request = RemoveProgrammingRequest(movies=True, specials=True, flex=True)

        assert program_matches(lineup[5], request) is False
        assert program_matches("junk", request) is False
