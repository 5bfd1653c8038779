"""
Saved-lineup wire format.

A lineup is saved as a list of unique programs plus one lineup item per
entry. Each item either points at a program in that list by index or names an
already persisted program directly. Both carry the entry's duration. Entries
with a non-positive duration would only create empty slots and are never
written.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Annotated, Any, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from lineupkit.programs.grouping import channel_program_unique_id
from lineupkit.programs.materializer import condense, extract_lookup_entries
from lineupkit.programs.models import (
    CondensedContentProgram,
    CondensedProgram,
    ContentProgram,
    ContentSubtype,
    CustomProgram,
    ExternalId,
    FlexProgram,
    Program,
    ProgramType,
    RedirectProgram,
    UnhandledProgramTypeError,
)

logger = logging.getLogger(__name__)


class IndexLineupItem(BaseModel):
    """Lineup item pointing into the request's program list."""
    type: Literal["index"] = "index"
    index: int = Field(ge=0)
    duration: int


class PersistedLineupItem(BaseModel):
    """Lineup item naming a program that is already stored."""
    type: Literal["persisted"] = "persisted"
    program_id: str
    custom_show_id: Optional[str] = None
    duration: int


LineupItem = Annotated[
    Union[IndexLineupItem, PersistedLineupItem],
    Field(discriminator="type"),
]


class LineupUpdateRequest(BaseModel):
    """Manual lineup save request."""
    type: Literal["manual"] = "manual"
    lineup: list[LineupItem] = Field(default_factory=list)
    programs: list[dict[str, Any]] = Field(default_factory=list)
    append: bool = False


@dataclass
class ResolvedLineup:
    """A saved lineup read back into condensed form."""

    lineup: list[CondensedProgram] = field(default_factory=list)
    programs: dict[str, ContentProgram] = field(default_factory=dict)


def program_to_dict(program: Union[Program, CondensedProgram]) -> dict[str, Any]:
    """Convert a program to a plain dictionary."""
    if isinstance(program, ContentProgram):
        return {
            "type": ProgramType.CONTENT.value,
            "id": program.id,
            "subtype": program.subtype.value,
            "title": program.title,
            "duration": program.duration,
            "persisted": program.persisted,
            "show_id": program.show_id,
            "artist_id": program.artist_id,
            "grandparent_title": program.grandparent_title,
            "season_index": program.season_index,
            "episode_index": program.episode_index,
            "release_date": program.release_date,
            "external_ids": [
                {"source": eid.source, "source_id": eid.source_id, "id": eid.id}
                for eid in program.external_ids
            ],
        }
    if isinstance(program, CondensedContentProgram):
        return {
            "type": ProgramType.CONTENT.value,
            "id": program.id,
            "duration": program.duration,
            "persisted": program.persisted,
        }
    if isinstance(program, CustomProgram):
        return {
            "type": ProgramType.CUSTOM.value,
            "custom_show_id": program.custom_show_id,
            "id": program.id,
            "index": program.index,
            "duration": program.duration,
            "persisted": program.persisted,
            "program": program_to_dict(program.program) if program.program else None,
        }
    if isinstance(program, RedirectProgram):
        return {
            "type": ProgramType.REDIRECT.value,
            "channel_id": program.channel_id,
            "channel_name": program.channel_name,
            "duration": program.duration,
            "persisted": program.persisted,
        }
    if isinstance(program, FlexProgram):
        return {
            "type": ProgramType.FLEX.value,
            "duration": program.duration,
            "persisted": program.persisted,
        }
    raise UnhandledProgramTypeError(program)


def program_from_dict(data: dict[str, Any]) -> Union[Program, CondensedProgram]:
    """
    Build a program from a dictionary produced by program_to_dict.

    Content without a subtype is read as a condensed reference.

    Raises:
        UnhandledProgramTypeError: For an unknown type tag.
    """
    program_type = data.get("type")
    persisted = bool(data.get("persisted", False))

    if program_type == ProgramType.CONTENT.value:
        if "subtype" not in data:
            return CondensedContentProgram(
                id=data["id"],
                duration=data["duration"],
                persisted=persisted,
            )
        return ContentProgram(
            id=data["id"],
            subtype=ContentSubtype(data["subtype"]),
            title=data.get("title", ""),
            duration=data["duration"],
            persisted=persisted,
            show_id=data.get("show_id"),
            artist_id=data.get("artist_id"),
            grandparent_title=data.get("grandparent_title"),
            season_index=data.get("season_index"),
            episode_index=data.get("episode_index"),
            release_date=data.get("release_date"),
            external_ids=tuple(
                ExternalId(
                    source=eid["source"],
                    id=eid["id"],
                    source_id=eid.get("source_id"),
                )
                for eid in data.get("external_ids") or []
            ),
        )
    if program_type == ProgramType.CUSTOM.value:
        nested = data.get("program")
        return CustomProgram(
            custom_show_id=data["custom_show_id"],
            id=data["id"],
            index=data.get("index", 0),
            duration=data["duration"],
            persisted=persisted,
            program=program_from_dict(nested) if nested else None,
        )
    if program_type == ProgramType.REDIRECT.value:
        return RedirectProgram(
            channel_id=data["channel_id"],
            duration=data["duration"],
            persisted=persisted,
            channel_name=data.get("channel_name"),
        )
    if program_type == ProgramType.FLEX.value:
        return FlexProgram(duration=data["duration"], persisted=persisted)
    raise UnhandledProgramTypeError(data)


def build_lineup_request(
    programs: Sequence[Program],
    append: bool = False,
) -> LineupUpdateRequest:
    """
    Build the save request for a materialized lineup.

    Persisted content and custom programs are written by id; everything else
    is written once into the program list and referenced by index.

    Args:
        programs: Lineup in order.
        append: Whether the server should append instead of replace.

    Returns:
        Save request.
    """
    lineup: list[Union[IndexLineupItem, PersistedLineupItem]] = []
    unique_programs: list[dict[str, Any]] = []
    index_by_unique_id: dict[str, int] = {}
    skipped = 0

    for program in programs:
        if program.duration <= 0:
            skipped += 1
            continue

        if isinstance(program, ContentProgram) and program.persisted:
            lineup.append(
                PersistedLineupItem(program_id=program.id, duration=program.duration)
            )
            continue
        if isinstance(program, CustomProgram) and program.persisted:
            lineup.append(
                PersistedLineupItem(
                    program_id=program.id,
                    custom_show_id=program.custom_show_id,
                    duration=program.duration,
                )
            )
            continue

        unique_id = channel_program_unique_id(program)
        if unique_id not in index_by_unique_id:
            index_by_unique_id[unique_id] = len(unique_programs)
            unique_programs.append(program_to_dict(program))
        lineup.append(
            IndexLineupItem(index=index_by_unique_id[unique_id], duration=program.duration)
        )

    if skipped:
        logger.debug(f"Excluded {skipped} zero-length programs from save request")

    return LineupUpdateRequest(lineup=lineup, programs=unique_programs, append=append)


def resolve_lineup_request(request: LineupUpdateRequest) -> ResolvedLineup:
    """
    Read a save request back into a condensed lineup plus lookup entries.

    Index items past the end of the program list are skipped. Persisted custom
    items are numbered by their order of appearance within their show.
    """
    programs = [program_from_dict(data) for data in request.programs]
    resolved = ResolvedLineup(programs=extract_lookup_entries(programs))
    custom_positions: dict[str, int] = {}

    for item in request.lineup:
        if isinstance(item, IndexLineupItem):
            if item.index >= len(programs):
                logger.debug(f"Skipping lineup item with unknown index {item.index}")
                continue
            program = replace(programs[item.index], duration=item.duration)
            resolved.lineup.append(condense(program))
        elif item.custom_show_id is not None:
            position = custom_positions.get(item.custom_show_id, 0)
            custom_positions[item.custom_show_id] = position + 1
            resolved.lineup.append(
                CustomProgram(
                    custom_show_id=item.custom_show_id,
                    id=item.program_id,
                    index=position,
                    duration=item.duration,
                    persisted=True,
                )
            )
        else:
            resolved.lineup.append(
                CondensedContentProgram(
                    id=item.program_id,
                    duration=item.duration,
                    persisted=True,
                )
            )

    return resolved
