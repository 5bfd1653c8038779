"""
Test Fixtures

Shared program factories for lineup tests.
"""

from .factories import (
    MINUTE,
    ContentProgramFactory,
    CustomProgramFactory,
    flex,
    redirect,
)

__all__ = [
    "MINUTE",
    "ContentProgramFactory",
    "CustomProgramFactory",
    "flex",
    "redirect",
]
