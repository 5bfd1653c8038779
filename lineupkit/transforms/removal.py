"""Criteria-based removal of programming from a lineup."""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from lineupkit.programs.models import (
    ContentProgram,
    ContentSubtype,
    CustomProgram,
    FlexProgram,
    Program,
    RedirectProgram,
    create_flex_program,
)

logger = logging.getLogger(__name__)


@dataclass
class RemoveProgrammingRequest:
    """
    What to remove. Each program is tested only against the criterion for
    its own kind; an empty request matches nothing.
    """

    show_ids: set[str] = field(default_factory=set)
    artist_ids: set[str] = field(default_factory=set)
    movies: bool = False
    redirect_channel_ids: set[str] = field(default_factory=set)
    custom_show_ids: set[str] = field(default_factory=set)
    flex: bool = False
    specials: bool = False  # Episodes in season 0


def program_matches(program: Any, request: RemoveProgrammingRequest) -> bool:
    """Check whether a program is selected by a removal request."""
    if isinstance(program, ContentProgram):
        if program.subtype == ContentSubtype.EPISODE:
            if request.specials and program.season_index == 0:
                return True
            return program.show_id in request.show_ids
        if program.subtype == ContentSubtype.TRACK:
            return program.artist_id in request.artist_ids
        if program.subtype == ContentSubtype.MOVIE:
            return request.movies
        return False
    if isinstance(program, CustomProgram):
        return program.custom_show_id in request.custom_show_ids
    if isinstance(program, RedirectProgram):
        return program.channel_id in request.redirect_channel_ids
    if isinstance(program, FlexProgram):
        return request.flex
    return False


def remove_programming(
    programs: Sequence[Program],
    request: RemoveProgrammingRequest,
    replace_with_flex: bool = False,
) -> list[Program]:
    """
    Remove matching programs.

    Args:
        programs: Materialized lineup.
        request: Removal criteria.
        replace_with_flex: Replace matches with flex of the same duration
            instead of dropping them, keeping the lineup's total duration.

    Returns:
        New lineup with the remaining programs in their original order.
    """
    result: list[Program] = []
    matched = 0
    for program in programs:
        if not program_matches(program, request):
            result.append(program)
            continue
        matched += 1
        if replace_with_flex:
            result.append(create_flex_program(program.duration))

    logger.debug(
        f"{'Replaced' if replace_with_flex else 'Removed'} {matched} of {len(programs)} programs"
    )
    return result
