"""
Start-time padding.

Inserts flex after programs so that each one starts on a clock boundary
(e.g. :00, :15, :30, :45).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from lineupkit.config import PaddingConfig, get_config
from lineupkit.programs.models import FlexProgram, Program, create_flex_program

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000


@dataclass(frozen=True)
class StartTimePadding:
    """A selectable padding boundary, in minutes."""

    key: int
    mod: int
    description: str


START_TIME_PADDING_OPTIONS: tuple[StartTimePadding, ...] = (
    StartTimePadding(key=-1, mod=-1, description="None"),
    StartTimePadding(key=5, mod=5, description=":00, :05, ..., :55"),
    StartTimePadding(key=10, mod=10, description=":00, :10, ..., :50"),
    StartTimePadding(key=15, mod=15, description=":00, :15, :30, :45"),
    StartTimePadding(key=20, mod=20, description=":00, :20, :40"),
    StartTimePadding(key=30, mod=30, description=":00, :30"),
    StartTimePadding(key=60, mod=60, description=":00"),
)


@dataclass
class PaddedLineup:
    """Result of padding: the realigned start time and the new lineup."""

    start_time: int
    programs: list[Program] = field(default_factory=list)


def get_padding_option(key: int) -> Optional[StartTimePadding]:
    """Find a padding option by key."""
    return next((opt for opt in START_TIME_PADDING_OPTIONS if opt.key == key), None)


def pad_start_times(
    programs: Sequence[Program],
    start_time: int,
    padding: Union[StartTimePadding, int, None] = None,
    config: Optional[PaddingConfig] = None,
) -> PaddedLineup:
    """
    Pad programs so each starts on a multiple of the padding boundary.

    Existing flex is removed first. The start time is rounded down to the
    boundary. Each program is given a slot of the smallest boundary multiple
    that fits its duration; when the unused part of the slot is larger than
    the flex threshold it is filled with flex, otherwise the next program
    starts right after.

    Args:
        programs: Materialized lineup.
        start_time: Channel start time in epoch ms.
        padding: Padding option or a boundary in minutes. None, or a
            non-positive boundary, selects the configured default.
        config: Padding settings; defaults to the loaded configuration.

    Returns:
        New start time and padded lineup.
    """
    config = config or get_config().padding
    mod_minutes = padding.mod if isinstance(padding, StartTimePadding) else padding
    if not mod_minutes or mod_minutes <= 0:
        mod_minutes = config.default_mod_minutes
    mod_ms = mod_minutes * MINUTE_MS

    new_start_time = start_time - start_time % mod_ms
    result: list[Program] = []
    padded = 0

    for program in programs:
        if isinstance(program, FlexProgram):
            continue
        result.append(program)

        slot = -(-program.duration // mod_ms) * mod_ms
        leftover = slot - program.duration
        if leftover > config.flex_threshold_ms:
            result.append(create_flex_program(leftover))
            padded += 1

    logger.debug(
        f"Padded {padded} programs to {mod_minutes} minute boundaries, "
        f"{sum(p.duration for p in result)} ms total"
    )
    return PaddedLineup(start_time=new_start_time, programs=result)
