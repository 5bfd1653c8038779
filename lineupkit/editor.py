"""
Channel editor.

Holds the lineup store, the program lookup table and the channel start-time
anchor for one edited channel, custom show or filler list, and replays
transforms through the store: materialize, transform, condense, replace.
"""

import logging
import random
from typing import Callable, Mapping, Optional, Sequence, Union

from lineupkit.config import LineupKitConfig, get_config
from lineupkit.programs.materializer import condense, extract_lookup_entries, materialize
from lineupkit.programs.models import (
    CondensedProgram,
    ContentProgram,
    IndexedProgram,
    Program,
    create_flex_program,
    create_redirect_program,
)
from lineupkit.programs.serialization import (
    LineupUpdateRequest,
    build_lineup_request,
    resolve_lineup_request,
)
from lineupkit.programs.store import LineupStore
from lineupkit.transforms.block_shuffle import (
    BlockShuffleOptions,
    block_shuffle,
    can_use_perfect_sync,
)
from lineupkit.transforms.breaks import AddBreaksOptions, add_breaks
from lineupkit.transforms.dedupe import remove_duplicate_programs
from lineupkit.transforms.intersperse import intersperse_flex
from lineupkit.transforms.padding import StartTimePadding, pad_start_times
from lineupkit.transforms.removal import RemoveProgrammingRequest, remove_programming
from lineupkit.transforms.shuffle import ShuffleGrouping, cyclic_shuffle, random_shuffle
from lineupkit.transforms.sorting import (
    SortOrder,
    sort_programs_alphabetically,
    sort_programs_by_episode,
    sort_programs_by_release_date,
)

logger = logging.getLogger(__name__)


class ChannelEditor:
    """
    Editing session for one lineup.

    Usage:
        editor = ChannelEditor()
        editor.load(lineup, lookup, start_time=channel_start)

        editor.block_shuffle(BlockShuffleOptions(block_size=2))
        editor.pad_start_times(15)

        request = editor.to_lineup_request()
        editor.commit()
    """

    def __init__(self, config: Optional[LineupKitConfig] = None):
        self.config = config or get_config()
        self.store = LineupStore()
        self.program_lookup: dict[str, ContentProgram] = {}
        self.start_time = 0
        self._original_start_time = 0

    @property
    def dirty(self) -> bool:
        return self.store.dirty

    def load(
        self,
        lineup: Sequence[CondensedProgram],
        programs: Optional[Mapping[str, ContentProgram]] = None,
        start_time: int = 0,
    ) -> None:
        """
        Load programming, replacing the current lineup and its snapshot.

        Args:
            lineup: Condensed lineup.
            programs: Lookup entries to merge.
            start_time: Channel start time in epoch ms.
        """
        self.store.load(lineup)
        if programs:
            self.program_lookup.update(programs)
        self.start_time = start_time
        self._original_start_time = start_time
        logger.info(f"Loaded lineup of {len(lineup)} programs")

    def load_lineup_request(self, request: LineupUpdateRequest, start_time: int = 0) -> None:
        """Load programming from a saved lineup request."""
        resolved = resolve_lineup_request(request)
        self.load(resolved.lineup, resolved.programs, start_time=start_time)

    def materialized(self) -> list[IndexedProgram[Program]]:
        """Current lineup joined against the lookup table."""
        return materialize(self.store.lineup, self.program_lookup)

    def programs(self) -> list[Program]:
        """Current materialized programs without index annotations."""
        return [entry.program for entry in self.materialized()]

    def _merge_lookup(self, programs: Sequence[Program]) -> None:
        for key, content in extract_lookup_entries(programs).items():
            self.program_lookup.setdefault(key, content)

    def add_programs(self, programs: Sequence[Program]) -> None:
        """Append programs and remember their content for materializing."""
        self._merge_lookup(programs)
        self.store.append([condense(p) for p in programs])

    def add_flex(self, duration: int) -> None:
        self.store.append([create_flex_program(duration)])

    def add_redirect(self, channel_id: str, duration: int, channel_name: Optional[str] = None) -> None:
        self.store.append([create_redirect_program(channel_id, duration, channel_name)])

    def replace_at(self, program: Program, index: int) -> bool:
        self._merge_lookup([program])
        return self.store.replace_at(condense(program), index)

    def move(self, original_index: int, to_position: int) -> bool:
        return self.store.move_by_original_index(original_index, to_position)

    def delete_at(self, index: int) -> bool:
        return self.store.delete_at(index)

    def reset(self) -> None:
        """Discard edits, restoring the loaded lineup and start time."""
        self.store.reset_to_original()
        self.start_time = self._original_start_time

    def commit(self) -> None:
        """Mark the current lineup and start time as saved."""
        self.store.commit()
        self._original_start_time = self.start_time

    def to_lineup_request(self, append: bool = False) -> LineupUpdateRequest:
        return build_lineup_request(self.programs(), append=append)

    def _apply(self, name: str, transform: Callable[[list[Program]], list[Program]]) -> bool:
        programs = self.programs()
        if not programs:
            logger.debug(f"Skipping {name} on an empty lineup")
            return False
        result = transform(programs)
        self._merge_lookup(result)
        self.store.set_lineup([condense(p) for p in result], dirty=True)
        logger.info(f"Applied {name}: {len(programs)} -> {len(result)} programs")
        return True

    def sort_alphabetically(self, order: Union[SortOrder, str] = SortOrder.ASC) -> bool:
        return self._apply(
            "alphabetical sort",
            lambda programs: sort_programs_alphabetically(programs, order),
        )

    def sort_by_episode(self, order: Union[SortOrder, str] = SortOrder.ASC) -> bool:
        return self._apply(
            "episode sort",
            lambda programs: sort_programs_by_episode(programs, order),
        )

    def sort_by_release_date(self, order: Union[SortOrder, str] = SortOrder.ASC) -> bool:
        return self._apply(
            "release date sort",
            lambda programs: sort_programs_by_release_date(programs, order),
        )

    def random_shuffle(
        self,
        rng: Optional[random.Random] = None,
        grouping: Union[ShuffleGrouping, str] = ShuffleGrouping.NONE,
    ) -> bool:
        return self._apply(
            "random shuffle",
            lambda programs: random_shuffle(programs, rng, grouping),
        )

    def cyclic_shuffle(self, rng: Optional[random.Random] = None) -> bool:
        return self._apply("cyclic shuffle", lambda programs: cyclic_shuffle(programs, rng))

    def can_use_perfect_sync(self, block_size: int) -> bool:
        return can_use_perfect_sync(self.programs(), block_size, self.config.block_shuffle)

    def block_shuffle(
        self,
        options: Optional[BlockShuffleOptions] = None,
        rng: Optional[random.Random] = None,
    ) -> bool:
        options = options or BlockShuffleOptions.from_config(self.config.block_shuffle)
        if options.block_size < 1:
            logger.debug(f"Skipping block shuffle with block size {options.block_size}")
            return False
        return self._apply(
            "block shuffle",
            lambda programs: block_shuffle(programs, options, rng),
        )

    def pad_start_times(self, padding: Union[StartTimePadding, int, None] = None) -> bool:
        """Pad start times and move the start-time anchor to the boundary."""
        padded_start_time = self.start_time

        def transform(programs: list[Program]) -> list[Program]:
            nonlocal padded_start_time
            padded = pad_start_times(programs, self.start_time, padding, self.config.padding)
            padded_start_time = padded.start_time
            return padded.programs

        applied = self._apply("start time padding", transform)
        self.start_time = padded_start_time
        return applied

    def remove_duplicates(self) -> bool:
        return self._apply("duplicate removal", remove_duplicate_programs)

    def remove_programming(
        self,
        request: RemoveProgrammingRequest,
        replace_with_flex: bool = False,
    ) -> bool:
        return self._apply(
            "programming removal",
            lambda programs: remove_programming(programs, request, replace_with_flex),
        )

    def intersperse_flex(self, duration: Optional[int] = None) -> bool:
        if duration is None:
            duration = self.config.flex.intersperse_duration_ms
        return self._apply("flex intersperse", lambda programs: intersperse_flex(programs, duration))

    def add_breaks(
        self,
        options: Optional[AddBreaksOptions] = None,
        rng: Optional[random.Random] = None,
    ) -> bool:
        options = options or AddBreaksOptions.from_config(self.config.breaks)
        return self._apply("breaks", lambda programs: add_breaks(programs, options, rng))
