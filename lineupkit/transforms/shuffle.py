"""
Shuffle transforms.

Random shuffle reorders the whole lineup, or whole shows when grouped by
show. Cyclic shuffle randomizes which
show plays next while each show still plays its own programs in season and
episode order, continuing from where it left off.
"""

import logging
import random
from enum import Enum
from typing import Optional, Sequence, Union

from lineupkit.programs.grouping import episode_order_key, get_program_grouping_key
from lineupkit.programs.models import ContentProgram, CustomProgram, Program
from lineupkit.transforms.dedupe import remove_duplicate_programs

logger = logging.getLogger(__name__)


class ShuffleGrouping(str, Enum):
    """What a random shuffle moves as a unit."""

    NONE = "none"  # Every program on its own
    SHOW = "show"  # Each show, artist or custom show as one run


def random_shuffle(
    programs: Sequence[Program],
    rng: Optional[random.Random] = None,
    grouping: Union[ShuffleGrouping, str] = ShuffleGrouping.NONE,
) -> list[Program]:
    """
    Return the programs in random order.

    With show grouping the order of the groups is shuffled instead; each
    group plays through in season and episode order, and programs without
    a group (flex, redirects) follow in their original order. Duplicates
    are dropped in that mode.
    """
    rng = rng or random.Random()
    if ShuffleGrouping(grouping) == ShuffleGrouping.NONE:
        shuffled = list(programs)
        rng.shuffle(shuffled)
        return shuffled

    groups = [
        sorted(members, key=episode_order_key)
        for members in group_programs(programs).values()
    ]
    rng.shuffle(groups)
    ungrouped = [p for p in programs if not isinstance(p, (ContentProgram, CustomProgram))]

    logger.debug(f"Random shuffle of {len(groups)} groups")
    return [p for members in groups for p in members] + ungrouped


def group_programs(programs: Sequence[Program]) -> dict[str, list[Program]]:
    """
    Deduplicate content and custom programs and group them by grouping key.

    Groups keep first-encounter order, as do the programs inside them.
    """
    candidates = [
        p for p in remove_duplicate_programs(programs)
        if isinstance(p, (ContentProgram, CustomProgram))
    ]
    groups: dict[str, list[Program]] = {}
    for program in candidates:
        groups.setdefault(get_program_grouping_key(program), []).append(program)
    return groups


def cyclic_shuffle(
    programs: Sequence[Program],
    rng: Optional[random.Random] = None,
) -> list[Program]:
    """
    Shuffle which group plays at each position, keeping in-group order.

    Each group is sorted by season and episode (custom shows by position)
    and given a cursor at a random start. The deduplicated candidates are
    shuffled; at each step the group of the current candidate emits the
    program under its cursor, and the cursor advances with wraparound.

    Args:
        programs: Materialized lineup.
        rng: Random source.

    Returns:
        Shuffled lineup of content and custom programs.
    """
    rng = rng or random.Random()
    groups = {
        key: sorted(members, key=episode_order_key)
        for key, members in group_programs(programs).items()
    }
    cursors = {key: rng.randrange(len(members)) for key, members in groups.items()}

    candidates = [p for members in groups.values() for p in members]
    rng.shuffle(candidates)

    result: list[Program] = []
    for candidate in candidates:
        key = get_program_grouping_key(candidate)
        members = groups[key]
        result.append(members[cursors[key]])
        cursors[key] = (cursors[key] + 1) % len(members)

    logger.debug(f"Cyclic shuffle of {len(result)} programs across {len(groups)} groups")
    return result
