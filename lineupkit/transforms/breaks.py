"""
Flex breaks.

Inserts a flex break of random length whenever enough programming has played
since the last break.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from lineupkit.config import BreaksConfig, get_config
from lineupkit.programs.models import FlexProgram, Program, create_flex_program

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000


@dataclass
class AddBreaksOptions:
    """Break settings in ms."""

    after_duration: int
    min_duration: int
    max_duration: int

    @classmethod
    def from_config(cls, config: Optional[BreaksConfig] = None) -> "AddBreaksOptions":
        config = config or get_config().breaks
        return cls(
            after_duration=config.after_minutes * MINUTE_MS,
            min_duration=config.min_minutes * MINUTE_MS,
            max_duration=config.max_minutes * MINUTE_MS,
        )


def add_breaks(
    programs: Sequence[Program],
    options: Optional[AddBreaksOptions] = None,
    rng: Optional[random.Random] = None,
) -> list[Program]:
    """
    Add flex breaks between programs.

    A running total of program time is kept; existing flex resets it. When
    a program would push the total past `after_duration`, a break of random
    length in [min_duration, max_duration] goes in before that program and
    the total starts again from zero.

    Args:
        programs: Materialized lineup.
        options: Break settings; defaults to the configured ones.
        rng: Random source for break lengths.

    Returns:
        Lineup with breaks.
    """
    options = options or AddBreaksOptions.from_config()
    rng = rng or random.Random()
    result: list[Program] = []
    since_break = 0
    breaks = 0

    for program in programs:
        if isinstance(program, FlexProgram):
            result.append(program)
            since_break = 0
            continue

        since_break += program.duration
        if since_break > options.after_duration:
            result.append(
                create_flex_program(rng.randint(options.min_duration, options.max_duration))
            )
            since_break = 0
            breaks += 1
        result.append(program)

    logger.debug(f"Inserted {breaks} breaks")
    return result
