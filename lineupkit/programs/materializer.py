"""
Program materializer.

Joins condensed lineup entries against the program lookup table. Entries whose
content is missing from the lookup are dropped rather than emitted partially;
the lookup may still be filling in while a lineup is shown.
"""

import dataclasses
import logging
from typing import Iterable, Mapping, Union

from lineupkit.programs.models import (
    CondensedContentProgram,
    CondensedProgram,
    ContentProgram,
    CustomProgram,
    FlexProgram,
    IndexedProgram,
    Program,
    RedirectProgram,
    UnhandledProgramTypeError,
)

logger = logging.getLogger(__name__)

ProgramLookup = Mapping[str, ContentProgram]


def _materialize_one(
    program: Union[CondensedProgram, Program],
    lookup: ProgramLookup,
) -> Union[Program, None]:
    if isinstance(program, (CondensedContentProgram, ContentProgram)):
        detail = lookup.get(program.id)
        if detail is None:
            return None
        # The lineup's duration wins; it may differ from the source runtime.
        return dataclasses.replace(detail, duration=program.duration)
    if isinstance(program, CustomProgram):
        detail = lookup.get(program.id)
        if detail is None:
            return None
        return dataclasses.replace(program, program=detail)
    if isinstance(program, (RedirectProgram, FlexProgram)):
        return program
    raise UnhandledProgramTypeError(program)


def materialize(
    lineup: Iterable[Union[IndexedProgram, CondensedProgram, Program]],
    lookup: ProgramLookup,
) -> list[IndexedProgram[Program]]:
    """
    Produce fully detailed programs from a condensed lineup.

    Indexed entries keep their original index; bare programs get their input
    position. Offsets are recomputed from 0 over the entries that resolved.

    Args:
        lineup: Condensed lineup, indexed or bare.
        lookup: Program id to content detail.

    Returns:
        Materialized, indexed programs.

    Raises:
        UnhandledProgramTypeError: If an entry is not a program.
    """
    result: list[IndexedProgram[Program]] = []
    running_offset = 0
    dropped = 0

    for position, entry in enumerate(lineup):
        if isinstance(entry, IndexedProgram):
            program, original_index = entry.program, entry.original_index
        else:
            program, original_index = entry, position

        materialized = _materialize_one(program, lookup)
        if materialized is None:
            dropped += 1
            continue

        result.append(
            IndexedProgram(
                program=materialized,
                original_index=original_index,
                start_time_offset=running_offset,
            )
        )
        running_offset += materialized.duration

    if dropped:
        logger.debug(f"Dropped {dropped} lineup entries missing from the program lookup")

    return result


def condense(program: Union[Program, CondensedProgram]) -> CondensedProgram:
    """
    Reduce a program to the form stored in a lineup.

    Raises:
        UnhandledProgramTypeError: If program is not a program.
    """
    if isinstance(program, ContentProgram):
        return CondensedContentProgram(
            id=program.id,
            duration=program.duration,
            persisted=program.persisted,
        )
    if isinstance(program, CustomProgram):
        if program.program is None:
            return program
        return dataclasses.replace(program, program=None)
    if isinstance(program, (CondensedContentProgram, RedirectProgram, FlexProgram)):
        return program
    raise UnhandledProgramTypeError(program)


def extract_lookup_entries(programs: Iterable[Program]) -> dict[str, ContentProgram]:
    """Collect the content behind programs, keyed by lookup id."""
    entries: dict[str, ContentProgram] = {}
    for program in programs:
        if isinstance(program, ContentProgram):
            entries.setdefault(program.id, program)
        elif isinstance(program, CustomProgram) and program.program is not None:
            entries.setdefault(program.id, program.program)
    return entries
