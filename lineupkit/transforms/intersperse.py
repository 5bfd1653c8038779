"""Flex interspersing."""

from typing import Optional, Sequence

from lineupkit.config import get_config
from lineupkit.programs.models import Program, create_flex_program


def intersperse_flex(
    programs: Sequence[Program],
    duration: Optional[int] = None,
) -> list[Program]:
    """Insert a flex gap after every program (30s unless configured otherwise)."""
    if duration is None:
        duration = get_config().flex.intersperse_duration_ms
    result: list[Program] = []
    for program in programs:
        result.append(program)
        result.append(create_flex_program(duration))
    return result
