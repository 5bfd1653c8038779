"""
Block shuffle.

Splits each show, artist or custom show into runs of `block_size` programs
and alternates the runs across groups (AAA BBB CCC AAA BBB CCC ...).

Groups shorter than the longest one are looped so every group fills the same
number of blocks. In perfect-sync mode the number of block rounds is the
least common multiple of the per-group counts, so the whole schedule repeats
cleanly with every group ending on a block boundary. Check
can_use_perfect_sync first; the planner itself does not bound its output.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, TypeVar

from lineupkit.config import BlockShuffleConfig, get_config
from lineupkit.programs.grouping import episode_order_key, program_title
from lineupkit.programs.models import Program
from lineupkit.transforms.shuffle import group_programs
from lineupkit.transforms.sorting import SortOrder, release_date_sort_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ShuffleType(str, Enum):
    """How programs are ordered before blocks are cut."""

    FIXED = "fixed"  # Sorted within each group
    RANDOM = "random"  # Shuffled before grouping


class MovieSort(str, Enum):
    """Order of the movie group in fixed mode."""

    ALPHA = "alpha"
    RELEASE_DATE = "release_date"


@dataclass
class BlockShuffleOptions:
    """Options for a block shuffle."""

    block_size: int = 3
    shuffle_type: ShuffleType = ShuffleType.FIXED
    loop_blocks: bool = True
    perfect_sync: bool = False
    show_order: SortOrder = SortOrder.ASC
    movie_sort: MovieSort = MovieSort.RELEASE_DATE
    movie_order: SortOrder = SortOrder.ASC

    @classmethod
    def from_config(cls, config: Optional[BlockShuffleConfig] = None) -> "BlockShuffleOptions":
        """Build options from the configured defaults."""
        config = config or get_config().block_shuffle
        return cls(
            block_size=config.block_size,
            shuffle_type=ShuffleType(config.shuffle_type),
            loop_blocks=config.loop_blocks,
            perfect_sync=config.perfect_sync,
            show_order=SortOrder(config.show_order),
            movie_sort=MovieSort(config.movie_sort),
            movie_order=SortOrder(config.movie_order),
        )


def lcm_of(values: Sequence[int]) -> int:
    """
    Least common multiple of all values, folded pairwise through gcd.

    Returns -1 for an empty sequence, which callers treat as "no groups".
    """
    if not values:
        return -1
    result = values[0]
    for value in values[1:]:
        result = abs(result * value) // math.gcd(result, value)
    return result


def perfect_sync_count(length: int, block_size: int) -> int:
    """
    A group's contribution to the perfect-sync target.

    A group that divides evenly into blocks counts its block total; any other
    group counts its raw length so no partial block is ever invented.
    """
    if length % block_size == 0:
        return length // block_size
    return length


def perfect_sync_loops(groups: dict[str, list[Program]], block_size: int) -> int:
    """Number of block rounds a perfect-sync schedule needs."""
    return lcm_of([perfect_sync_count(len(members), block_size) for members in groups.values()])


def can_use_perfect_sync(
    programs: Sequence[Program],
    block_size: int,
    config: Optional[BlockShuffleConfig] = None,
) -> bool:
    """
    Check that a perfect-sync block shuffle stays within the size limits.

    Args:
        programs: Materialized lineup.
        block_size: Programs per block.
        config: Limits; defaults to the loaded configuration.

    Returns:
        False when the loop count or the resulting program count would
        exceed the configured maximum, or when block_size is not
        positive.
    """
    if block_size < 1:
        return False
    config = config or get_config().block_shuffle
    loops = perfect_sync_loops(group_programs(programs), block_size)
    if loops > config.max_perfect_sync_loops:
        return False
    if loops * block_size > config.max_perfect_sync_programs:
        return False
    return True


def _cycle_to_length(items: Sequence[T], length: int) -> list[T]:
    """Repeat items in order until the list has exactly length entries."""
    return [items[i % len(items)] for i in range(length)]


def _chunk(items: Sequence[T], size: int) -> list[list[T]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def _sort_group(key: str, members: list[Program], options: BlockShuffleOptions) -> list[Program]:
    if key in ("movie", "other"):
        reverse = options.movie_order == SortOrder.DESC
        if options.movie_sort == MovieSort.ALPHA:
            return sorted(members, key=program_title, reverse=reverse)
        return sorted(members, key=release_date_sort_key, reverse=reverse)
    return sorted(members, key=episode_order_key, reverse=options.show_order == SortOrder.DESC)


def block_shuffle(
    programs: Sequence[Program],
    options: Optional[BlockShuffleOptions] = None,
    rng: Optional[random.Random] = None,
) -> list[Program]:
    """
    Rearrange grouped programs into alternating blocks.

    Flex, redirects and duplicates are dropped. Block round i emits the i-th
    block of every group that has one, in the order groups were first seen.

    Args:
        programs: Materialized lineup.
        options: Block shuffle options; defaults to the configured ones.
        rng: Random source for random mode.

    Returns:
        Block shuffled lineup.
    """
    options = options or BlockShuffleOptions.from_config()
    block_size = options.block_size
    if block_size < 1:
        logger.debug(f"Block shuffle skipped, block size {block_size} is not positive")
        return []
    if not programs:
        return []

    candidates = list(programs)
    if options.shuffle_type == ShuffleType.RANDOM:
        (rng or random.Random()).shuffle(candidates)

    groups = group_programs(candidates)
    if not groups:
        return []

    if options.shuffle_type == ShuffleType.FIXED:
        groups = {key: _sort_group(key, members, options) for key, members in groups.items()}

    if options.perfect_sync:
        loops = perfect_sync_loops(groups, block_size)
        groups = {
            key: _cycle_to_length(members, loops * block_size)
            for key, members in groups.items()
        }
        logger.debug(f"Perfect sync block shuffle: {len(groups)} groups, {loops} loops")
    elif options.loop_blocks:
        max_length = max(len(members) for members in groups.values())
        groups = {key: _cycle_to_length(members, max_length) for key, members in groups.items()}

    chunks = {key: _chunk(members, block_size) for key, members in groups.items()}
    loops = max(len(blocks) for blocks in chunks.values())

    result: list[Program] = []
    for i in range(loops):
        for blocks in chunks.values():
            if i < len(blocks):
                result.extend(blocks[i])

    return result
