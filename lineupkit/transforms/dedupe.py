"""Duplicate elimination for lineups."""

import logging
from typing import Iterable, TypeVar

from lineupkit.programs.models import (
    CondensedContentProgram,
    ContentProgram,
    CustomProgram,
    FlexProgram,
    RedirectProgram,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def remove_duplicate_programs(programs: Iterable[T]) -> list[T]:
    """
    Keep the first occurrence of every program, in order.

    Flex is always removed. Redirects are identified by target channel,
    custom programs by (show, program). Persisted content is identified by
    its database id; content that was never saved is a duplicate when any of
    its external ids has been seen. Anything else is dropped.

    Args:
        programs: Lineup in order.

    Returns:
        Deduplicated lineup.
    """
    seen_redirects: set[str] = set()
    seen_custom: set[tuple[str, str]] = set()
    seen_ids: set[str] = set()
    seen_external_ids: set[str] = set()
    result: list[T] = []

    for program in programs:
        if isinstance(program, FlexProgram):
            continue

        if isinstance(program, RedirectProgram):
            if program.channel_id in seen_redirects:
                continue
            seen_redirects.add(program.channel_id)
            result.append(program)

        elif isinstance(program, CustomProgram):
            key = (program.custom_show_id, program.id)
            if key in seen_custom:
                continue
            seen_custom.add(key)
            result.append(program)

        elif isinstance(program, CondensedContentProgram):
            if program.id in seen_ids:
                continue
            seen_ids.add(program.id)
            result.append(program)

        elif isinstance(program, ContentProgram):
            if program.persisted and program.id:
                if program.id in seen_ids:
                    continue
                seen_ids.add(program.id)
                result.append(program)
            else:
                keys = [eid.key() for eid in program.external_ids]
                if any(key in seen_external_ids for key in keys):
                    continue
                seen_external_ids.update(keys)
                result.append(program)

        else:
            logger.debug(f"Dropping unrecognized lineup entry {type(program).__name__}")

    return result
