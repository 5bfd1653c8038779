"""
lineupkit transforms

Each transform takes a materialized lineup and returns a new lineup; none of
them mutate their input.

Components:
- Dedupe: first-occurrence duplicate elimination
- Sorting: alphabetical, episode number, release date
- Shuffle: random and cyclic shuffle
- Block shuffle: alternating blocks per group, with perfect-sync planning
- Padding: flex to align start times to clock boundaries
- Removal: criteria-based removal or replacement with flex
- Intersperse / Breaks: flex between programs
"""

from .block_shuffle import (
    BlockShuffleOptions,
    MovieSort,
    ShuffleType,
    block_shuffle,
    can_use_perfect_sync,
    lcm_of,
)
from .breaks import AddBreaksOptions, add_breaks
from .dedupe import remove_duplicate_programs
from .intersperse import intersperse_flex
from .padding import (
    START_TIME_PADDING_OPTIONS,
    PaddedLineup,
    StartTimePadding,
    get_padding_option,
    pad_start_times,
)
from .removal import RemoveProgrammingRequest, remove_programming
from .shuffle import ShuffleGrouping, cyclic_shuffle, random_shuffle
from .sorting import (
    SortOrder,
    sort_programs_alphabetically,
    sort_programs_by_episode,
    sort_programs_by_release_date,
)

__all__ = [
    # Block shuffle
    "BlockShuffleOptions",
    "MovieSort",
    "ShuffleType",
    "block_shuffle",
    "can_use_perfect_sync",
    "lcm_of",
    # Breaks
    "AddBreaksOptions",
    "add_breaks",
    # Dedupe
    "remove_duplicate_programs",
    # Intersperse
    "intersperse_flex",
    # Padding
    "START_TIME_PADDING_OPTIONS",
    "PaddedLineup",
    "StartTimePadding",
    "get_padding_option",
    "pad_start_times",
    # Removal
    "RemoveProgrammingRequest",
    "remove_programming",
    # Shuffle
    "ShuffleGrouping",
    "cyclic_shuffle",
    "random_shuffle",
    # Sorting
    "SortOrder",
    "sort_programs_alphabetically",
    "sort_programs_by_episode",
    "sort_programs_by_release_date",
]
