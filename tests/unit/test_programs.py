"""
Unit tests for the program model and identity helpers.
"""

import pytest

from lineupkit.programs.grouping import (
    channel_program_unique_id,
    content_of,
    episode_order_key,
    get_program_grouping_key,
    program_title,
)
from lineupkit.programs.models import (
    CondensedContentProgram,
    ContentSubtype,
    ExternalId,
    FlexProgram,
    IndexedProgram,
    ProgramType,
    RedirectProgram,
    UnhandledProgramTypeError,
    create_flex_program,
    create_redirect_program,
    is_program,
)

from tests.fixtures.factories import ContentProgramFactory, CustomProgramFactory, flex, redirect


@pytest.mark.unit
class TestProgramModels:
    """Tests for program dataclasses."""

    def test_type_tags(self):
        assert ContentProgramFactory.create_movie().type == ProgramType.CONTENT
        assert CondensedContentProgram(id="1", duration=1).type == ProgramType.CONTENT
        assert CustomProgramFactory.create().type == ProgramType.CUSTOM
        assert redirect("c").type == ProgramType.REDIRECT
        assert flex().type == ProgramType.FLEX

    def test_unique_id_persisted(self):
        """Persisted content is identified by its database id."""
        program = ContentProgramFactory.create_movie(id="db-1")

        assert program.unique_id == "db-1"

    def test_unique_id_unpersisted(self):
        """Unsaved content is identified by its first external id."""
        program = ContentProgramFactory.create_unpersisted("abc", "def", id="tmp-1")

        assert program.unique_id == "plex|server-1|abc"

    def test_unique_id_without_external_ids(self):
        program = ContentProgramFactory.create(id="tmp-2", persisted=False)

        assert program.unique_id == "tmp-2"

    def test_external_id_key_without_source_id(self):
        assert ExternalId(source="local", id="42").key() == "local||42"

    def test_indexed_program_offsets(self):
        entry = IndexedProgram(program=flex(5_000), original_index=3, start_time_offset=1_000)

        assert entry.duration == 5_000
        assert entry.end_time_offset == 6_000

    def test_factories(self):
        flex_program = create_flex_program(10_000)
        redirect_program = create_redirect_program("channel-9", 20_000, "Nine")

        assert flex_program == FlexProgram(duration=10_000)
        assert redirect_program.channel_id == "channel-9"
        assert redirect_program.channel_name == "Nine"
        assert redirect_program.persisted is False

    def test_is_program(self):
        assert is_program(flex())
        assert not is_program({"type": "flex"})


@pytest.mark.unit
class TestGroupingKey:
    """Tests for get_program_grouping_key."""

    def test_episode_by_show_id(self):
        program = ContentProgramFactory.create_episode("show-7")

        assert get_program_grouping_key(program) == "show:show-7"

    def test_episode_falls_back_to_grandparent_title(self):
        program = ContentProgramFactory.create(
            ContentSubtype.EPISODE,
            grandparent_title="The Show",
        )

        assert get_program_grouping_key(program) == "show:The Show"

    def test_track_by_artist(self):
        program = ContentProgramFactory.create_track("artist-3")

        assert get_program_grouping_key(program) == "track:artist-3"

    def test_orphan_episodes_keyed_by_unique_id(self):
        first = ContentProgramFactory.create(ContentSubtype.EPISODE, id="e1")
        second = ContentProgramFactory.create(ContentSubtype.EPISODE, id="e2")

        assert get_program_grouping_key(first) == "show:e1"
        assert get_program_grouping_key(first) != get_program_grouping_key(second)

    def test_orphan_track_keyed_by_external_id(self):
        track = ContentProgramFactory.create_unpersisted("abc", subtype=ContentSubtype.TRACK)

        assert get_program_grouping_key(track) == "track:plex|server-1|abc"

    def test_movies_share_one_group(self):
        a = ContentProgramFactory.create_movie("A")
        b = ContentProgramFactory.create_movie("B")

        assert get_program_grouping_key(a) == get_program_grouping_key(b) == "movie"

    def test_custom_by_show(self):
        program = CustomProgramFactory.create("custom-5")

        assert get_program_grouping_key(program) == "custom:custom-5"

    def test_redirect_and_flex_have_no_key(self):
        assert get_program_grouping_key(redirect("c")) is None
        assert get_program_grouping_key(flex()) is None

    def test_unhandled_variant_raises(self):
        with pytest.raises(UnhandledProgramTypeError):
            get_program_grouping_key("not a program")


@pytest.mark.unit
class TestProgramIdentity:
    """Tests for unique ids, titles and order keys."""

    def test_unique_ids(self):
        custom = CustomProgramFactory.create("cs", id="p1")
        content = ContentProgramFactory.create_movie(id="m1")

        assert channel_program_unique_id(custom) == "custom.cs.p1"
        assert channel_program_unique_id(content) == "content.m1"
        assert channel_program_unique_id(CondensedContentProgram(id="m2", duration=1)) == "content.m2"
        assert channel_program_unique_id(redirect("ch")) == "redirect.ch"
        assert channel_program_unique_id(flex()) == "flex"

    def test_unique_id_unhandled(self):
        with pytest.raises(UnhandledProgramTypeError):
            channel_program_unique_id(object())

    def test_content_of(self):
        movie = ContentProgramFactory.create_movie()
        custom = CustomProgramFactory.create(program=movie)

        assert content_of(movie) is movie
        assert content_of(custom) is movie
        assert content_of(flex()) is None

    def test_program_title(self):
        movie = ContentProgramFactory.create_movie("Alien")

        assert program_title(movie) == "Alien"
        assert program_title(CustomProgramFactory.create(program=movie)) == "Alien"
        assert program_title(CustomProgramFactory.create()) == ""
        assert program_title(RedirectProgram(channel_id="7", duration=1)) == "Redirect to 7"
        assert program_title(flex()) == "Flex"

    def test_episode_order_key(self):
        episode = ContentProgramFactory.create_episode("s", 2, 5)
        custom = CustomProgramFactory.create(index=4)

        assert episode_order_key(episode) == (2, 5)
        assert episode_order_key(custom) == (4, 0)
        assert episode_order_key(ContentProgramFactory.create_movie()) == (0, 0)
        assert episode_order_key(redirect("c")) == (0, 0)
