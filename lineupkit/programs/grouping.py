"""
Program identity helpers.

Grouping keys cluster programs that belong to the same show, artist or
custom show; unique ids identify a single program for deduplicated
persistence.
"""

from typing import Any, Optional

from lineupkit.programs.models import (
    CondensedContentProgram,
    ContentProgram,
    ContentSubtype,
    CustomProgram,
    FlexProgram,
    RedirectProgram,
    UnhandledProgramTypeError,
)


def get_program_grouping_key(program: Any) -> Optional[str]:
    """
    Get the identity string used to group a program.

    Redirect and flex programs have no grouping key and return None;
    transforms that group programs filter them out first.

    Episodes and tracks with no show, artist or parent title are keyed by
    their own unique id so unrelated orphans never share a group.

    Raises:
        UnhandledProgramTypeError: If program is not a materialized program.
    """
    if isinstance(program, ContentProgram):
        if program.subtype == ContentSubtype.EPISODE:
            return f"show:{program.show_id or program.grandparent_title or program.unique_id}"
        if program.subtype == ContentSubtype.TRACK:
            return f"track:{program.artist_id or program.grandparent_title or program.unique_id}"
        if program.subtype == ContentSubtype.MOVIE:
            return "movie"
        return "other"
    if isinstance(program, CustomProgram):
        return f"custom:{program.custom_show_id}"
    if isinstance(program, (RedirectProgram, FlexProgram)):
        return None
    raise UnhandledProgramTypeError(program)


def channel_program_unique_id(program: Any) -> str:
    """Get a string that identifies one program across a lineup."""
    if isinstance(program, CustomProgram):
        return f"custom.{program.custom_show_id}.{program.id}"
    if isinstance(program, ContentProgram):
        return f"content.{program.unique_id}"
    if isinstance(program, CondensedContentProgram):
        return f"content.{program.id}"
    if isinstance(program, RedirectProgram):
        return f"redirect.{program.channel_id}"
    if isinstance(program, FlexProgram):
        return "flex"
    raise UnhandledProgramTypeError(program)


def content_of(program: Any) -> Optional[ContentProgram]:
    """Get the content behind a program, unwrapping custom show entries."""
    if isinstance(program, ContentProgram):
        return program
    if isinstance(program, CustomProgram):
        return program.program
    return None


def program_title(program: Any) -> str:
    """Display title used for alphabetical ordering."""
    if isinstance(program, ContentProgram):
        return program.title
    if isinstance(program, CustomProgram):
        return program.program.title if program.program else ""
    if isinstance(program, RedirectProgram):
        return f"Redirect to {program.channel_name or program.channel_id}"
    if isinstance(program, FlexProgram):
        return "Flex"
    raise UnhandledProgramTypeError(program)


def episode_order_key(program: Any) -> tuple[int, int]:
    """
    In-group order of a program: (season, episode) for content, the
    custom-show position for custom programs.
    """
    if isinstance(program, CustomProgram):
        return (program.index, 0)
    content = content_of(program)
    if content is None:
        return (0, 0)
    season = content.season_index if content.season_index is not None else 0
    episode = content.episode_index if content.episode_index is not None else 0
    return (season, episode)
