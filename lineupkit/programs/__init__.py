"""
lineupkit program model

Lineup entries, their condensed and materialized forms, and the store that
keeps a lineup's offsets consistent.
"""

from lineupkit.programs.grouping import (
    channel_program_unique_id,
    content_of,
    get_program_grouping_key,
    program_title,
)
from lineupkit.programs.materializer import condense, extract_lookup_entries, materialize
from lineupkit.programs.models import (
    CondensedContentProgram,
    CondensedProgram,
    ContentProgram,
    ContentSubtype,
    CustomProgram,
    ExternalId,
    FlexProgram,
    IndexedProgram,
    Program,
    ProgramType,
    RedirectProgram,
    UnhandledProgramTypeError,
    create_flex_program,
    create_redirect_program,
)
from lineupkit.programs.serialization import (
    IndexLineupItem,
    LineupUpdateRequest,
    PersistedLineupItem,
    build_lineup_request,
    program_from_dict,
    program_to_dict,
    resolve_lineup_request,
)
from lineupkit.programs.store import LineupStore

__all__ = [
    # Models
    "CondensedContentProgram",
    "CondensedProgram",
    "ContentProgram",
    "ContentSubtype",
    "CustomProgram",
    "ExternalId",
    "FlexProgram",
    "IndexedProgram",
    "Program",
    "ProgramType",
    "RedirectProgram",
    "UnhandledProgramTypeError",
    "create_flex_program",
    "create_redirect_program",
    # Identity
    "channel_program_unique_id",
    "content_of",
    "get_program_grouping_key",
    "program_title",
    # Store and materializer
    "LineupStore",
    "condense",
    "extract_lookup_entries",
    "materialize",
    # Persistence
    "IndexLineupItem",
    "LineupUpdateRequest",
    "PersistedLineupItem",
    "build_lineup_request",
    "program_from_dict",
    "program_to_dict",
    "resolve_lineup_request",
]
