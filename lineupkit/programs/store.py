"""
Lineup store.

Owns the ordered sequence of condensed programs for one channel, custom show
or filler list, together with the snapshot it was loaded from. Every mutation
builds a complete new list, with original indexes and start-time offsets
recomputed, before swapping it in.
"""

import logging
from typing import Iterable, Iterator, Optional, Sequence, TypeVar

from lineupkit.programs.models import CondensedProgram, IndexedProgram

logger = logging.getLogger(__name__)

T = TypeVar("T")


def add_indexes_and_offsets(
    items: Iterable[T],
    first_offset: int = 0,
    first_index: int = 0,
) -> list[IndexedProgram[T]]:
    """
    Annotate items with consecutive original indexes and running offsets.

    Args:
        items: Programs in lineup order.
        first_offset: Offset of the first item in ms.
        first_index: Original index of the first item.

    Returns:
        Indexed programs.
    """
    result: list[IndexedProgram[T]] = []
    running_offset = first_offset
    for i, item in enumerate(items):
        result.append(
            IndexedProgram(
                program=item,
                original_index=first_index + i,
                start_time_offset=running_offset,
            )
        )
        running_offset += item.duration
    return result


def recalculate_offsets(entries: Iterable[IndexedProgram[T]]) -> list[IndexedProgram[T]]:
    """Recompute start-time offsets from 0, keeping original indexes."""
    result: list[IndexedProgram[T]] = []
    running_offset = 0
    for entry in entries:
        result.append(
            IndexedProgram(
                program=entry.program,
                original_index=entry.original_index,
                start_time_offset=running_offset,
            )
        )
        running_offset += entry.program.duration
    return result


def _next_offset(entries: Sequence[IndexedProgram]) -> int:
    if not entries:
        return 0
    return entries[-1].end_time_offset


class LineupStore:
    """
    Authoritative ordered lineup with offset and index bookkeeping.

    Usage:
        store = LineupStore()
        store.load(condensed_lineup)
        store.append([create_flex_program(30_000)])
        store.move_by_original_index(0, 3)
        store.reset_to_original()
    """

    def __init__(self):
        self._lineup: list[IndexedProgram[CondensedProgram]] = []
        self._original: list[IndexedProgram[CondensedProgram]] = []
        self.dirty = False
        self.loaded = False

    def __len__(self) -> int:
        return len(self._lineup)

    def __iter__(self) -> Iterator[IndexedProgram[CondensedProgram]]:
        return iter(list(self._lineup))

    def __getitem__(self, index: int) -> IndexedProgram[CondensedProgram]:
        return self._lineup[index]

    @property
    def lineup(self) -> list[IndexedProgram[CondensedProgram]]:
        """Current lineup entries."""
        return list(self._lineup)

    @property
    def original_lineup(self) -> list[IndexedProgram[CondensedProgram]]:
        """Snapshot the lineup was last loaded from."""
        return list(self._original)

    @property
    def programs(self) -> list[CondensedProgram]:
        """Current lineup without index annotations."""
        return [entry.program for entry in self._lineup]

    @property
    def total_duration(self) -> int:
        """Summed duration of every entry in ms."""
        return _next_offset(self._lineup)

    def load(self, items: Sequence[CondensedProgram]) -> list[IndexedProgram[CondensedProgram]]:
        """
        Load a lineup and make it the snapshot that resets return to.

        Args:
            items: Condensed programs in lineup order.

        Returns:
            Indexed lineup.
        """
        entries = add_indexes_and_offsets(items)
        self._lineup = entries
        self._original = list(entries)
        self.dirty = False
        self.loaded = True
        logger.debug(f"Loaded lineup with {len(entries)} programs")
        return list(entries)

    def set_lineup(
        self,
        items: Sequence[CondensedProgram],
        dirty: Optional[bool] = None,
    ) -> list[IndexedProgram[CondensedProgram]]:
        """
        Replace the whole lineup.

        Original indexes are reassigned from position and offsets recomputed
        from 0. The loaded snapshot is left untouched.

        Args:
            items: Condensed programs in lineup order.
            dirty: New dirty flag; unchanged when None.

        Returns:
            Indexed lineup.
        """
        entries = add_indexes_and_offsets(items)
        self._lineup = entries
        self.loaded = True
        if dirty is not None:
            self.dirty = dirty
        return list(entries)

    def append(
        self,
        items: Sequence[CondensedProgram],
        dirty: Optional[bool] = None,
    ) -> list[IndexedProgram[CondensedProgram]]:
        """
        Append programs to the end of the lineup.

        Args:
            items: Condensed programs to append.
            dirty: New dirty flag; when None the lineup becomes dirty if
                anything was appended.

        Returns:
            The newly appended entries.
        """
        added = add_indexes_and_offsets(
            items,
            first_offset=_next_offset(self._lineup),
            first_index=len(self._lineup),
        )
        self._lineup = self._lineup + added
        if dirty is None:
            self.dirty = self.dirty or len(added) > 0
        else:
            self.dirty = dirty
        return added

    def replace_at(self, item: CondensedProgram, index: int) -> bool:
        """
        Replace the entry at index.

        The entry and everything after it are re-appended, starting with the
        new item, so every later offset follows the new duration.

        Returns:
            True if the lineup changed, False for an out-of-range index.
        """
        if not 0 <= index < len(self._lineup):
            logger.debug(f"replace_at ignored, index {index} out of range")
            return False

        head = self._lineup[:index]
        tail = [entry.program for entry in self._lineup[index + 1:]]
        self._lineup = head + add_indexes_and_offsets(
            [item, *tail],
            first_offset=_next_offset(head),
            first_index=index,
        )
        self.dirty = True
        return True

    def move_by_original_index(self, original_index: int, to_position: int) -> bool:
        """
        Swap the entry with the given original index and the entry at
        to_position.

        This is a pairwise exchange, not an insert: the entry previously at
        to_position lands where the moved entry was.

        Returns:
            True if the lineup changed, False if nothing matched.
        """
        from_position = next(
            (
                i for i, entry in enumerate(self._lineup)
                if entry.original_index == original_index
            ),
            -1,
        )
        if from_position < 0 or not 0 <= to_position < len(self._lineup):
            logger.debug(
                f"move ignored, original index {original_index} -> {to_position}"
            )
            return False

        entries = list(self._lineup)
        entries[from_position], entries[to_position] = (
            entries[to_position],
            entries[from_position],
        )
        self._lineup = recalculate_offsets(entries)
        self.dirty = True
        return True

    def delete_at(self, index: int) -> bool:
        """
        Remove the entry at index.

        Returns:
            True if the lineup changed, False for an out-of-range index.
        """
        if not 0 <= index < len(self._lineup):
            logger.debug(f"delete_at ignored, index {index} out of range")
            return False

        self._lineup = recalculate_offsets(
            self._lineup[:index] + self._lineup[index + 1:]
        )
        self.dirty = True
        return True

    def reset_to_original(self) -> list[IndexedProgram[CondensedProgram]]:
        """Discard edits and restore the loaded snapshot."""
        self._lineup = recalculate_offsets(self._original)
        self.dirty = False
        return list(self._lineup)

    def commit(self) -> None:
        """Make the current lineup the snapshot, e.g. after it was saved."""
        self._original = list(self._lineup)
        self.dirty = False

    def clear(self) -> None:
        """Forget the lineup and its snapshot."""
        self._lineup = []
        self._original = []
        self.dirty = False
        self.loaded = False
