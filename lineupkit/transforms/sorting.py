"""
Sort transforms: alphabetical, by episode number, and by release date.

All sorts are stable, so programs with equal keys keep their relative order.
"""

import math
from enum import Enum
from typing import Any, Sequence, Union

from lineupkit.programs.grouping import content_of, episode_order_key, program_title
from lineupkit.programs.models import ContentProgram, ContentSubtype, Program


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


def _is_descending(order: Union[SortOrder, str]) -> bool:
    return SortOrder(order) == SortOrder.DESC


def sort_programs_alphabetically(
    programs: Sequence[Program],
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> list[Program]:
    """Sort programs by title."""
    return sorted(programs, key=program_title, reverse=_is_descending(order))


def _is_episode(program: Any) -> bool:
    return isinstance(program, ContentProgram) and program.subtype == ContentSubtype.EPISODE


def sort_programs_by_episode(
    programs: Sequence[Program],
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> list[Program]:
    """
    Sort episodes by show, season and episode.

    Everything that is not an episode keeps its relative order and goes
    after the episodes, whatever the direction.
    """
    shows = [p for p in programs if _is_episode(p)]
    others = [p for p in programs if not _is_episode(p)]

    def key(program: ContentProgram) -> tuple[str, int, int]:
        return (program.show_id or program.grandparent_title or "", *episode_order_key(program))

    return sorted(shows, key=key, reverse=_is_descending(order)) + others


def release_date_sort_key(program: Any) -> tuple[float, int]:
    """
    Release date, then a season/episode tiebreak.

    Undated content sorts as epoch 0; programs without content sort last in
    ascending order.
    """
    content = content_of(program)
    if content is None:
        return (math.inf, 0)
    season, episode = episode_order_key(content)
    return (content.release_date or 0, season * 10_000 + episode * 100)


def sort_programs_by_release_date(
    programs: Sequence[Program],
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> list[Program]:
    """Sort programs by release date."""
    return sorted(programs, key=release_date_sort_key, reverse=_is_descending(order))
