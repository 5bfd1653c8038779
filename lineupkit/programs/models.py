"""
Program model for channel lineups.

A lineup entry is one of four variants: content (movie, episode, track or
other video), a custom-show reference, a redirect to another channel, or a
flex gap. Content is stored condensed in a lineup (only its lookup key and
duration) and joined against a program lookup table when the full detail is
needed. All durations are integer milliseconds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union


class ProgramType(str, Enum):
    """Tag of a lineup entry."""

    CONTENT = "content"
    CUSTOM = "custom"
    REDIRECT = "redirect"
    FLEX = "flex"


class ContentSubtype(str, Enum):
    """Kind of content program."""

    MOVIE = "movie"
    EPISODE = "episode"
    TRACK = "track"
    OTHER = "other"


class UnhandledProgramTypeError(TypeError):
    """Raised when an object outside the program union reaches the engine."""

    def __init__(self, program: Any):
        self.program = program
        super().__init__(f"Unhandled program type: {type(program).__name__}")


@dataclass(frozen=True)
class ExternalId:
    """Identifier of a program in an external media source."""

    source: str  # plex, jellyfin, emby, local
    id: str
    source_id: Optional[str] = None  # Media server the id belongs to

    def key(self) -> str:
        """Stable string form used for identity comparisons."""
        return f"{self.source}|{self.source_id or ''}|{self.id}"


@dataclass(frozen=True)
class ContentProgram:
    """
    Fully detailed content program.

    `id` is the database id when `persisted`, otherwise a temporary id
    assigned when the program was picked from a media source. Season and
    episode indexes double as album and track indexes for music.
    """

    id: str
    subtype: ContentSubtype
    title: str
    duration: int
    persisted: bool = False
    show_id: Optional[str] = None
    artist_id: Optional[str] = None
    grandparent_title: Optional[str] = None
    season_index: Optional[int] = None
    episode_index: Optional[int] = None
    release_date: Optional[int] = None  # Epoch ms
    external_ids: tuple[ExternalId, ...] = ()

    type: ClassVar[ProgramType] = ProgramType.CONTENT

    @property
    def unique_id(self) -> str:
        """Database id for persisted programs, else the first external id."""
        if self.persisted and self.id:
            return self.id
        if self.external_ids:
            return self.external_ids[0].key()
        return self.id


@dataclass(frozen=True)
class CondensedContentProgram:
    """Content reference as stored in a lineup: the lookup key and duration."""

    id: str
    duration: int
    persisted: bool = False

    type: ClassVar[ProgramType] = ProgramType.CONTENT


@dataclass(frozen=True)
class CustomProgram:
    """
    Reference into a custom show's ordered program list.

    In condensed form `program` is None; materializing nests the looked-up
    content under it.
    """

    custom_show_id: str
    id: str
    index: int
    duration: int
    persisted: bool = False
    program: Optional[ContentProgram] = None

    type: ClassVar[ProgramType] = ProgramType.CUSTOM


@dataclass(frozen=True)
class RedirectProgram:
    """Hands playback to another channel for its duration."""

    channel_id: str
    duration: int
    persisted: bool = False
    channel_name: Optional[str] = None

    type: ClassVar[ProgramType] = ProgramType.REDIRECT


@dataclass(frozen=True)
class FlexProgram:
    """Filler gap with no identity beyond its duration."""

    duration: int
    persisted: bool = False

    type: ClassVar[ProgramType] = ProgramType.FLEX


Program = Union[ContentProgram, CustomProgram, RedirectProgram, FlexProgram]
CondensedProgram = Union[CondensedContentProgram, CustomProgram, RedirectProgram, FlexProgram]

PROGRAM_CLASSES = (
    ContentProgram,
    CondensedContentProgram,
    CustomProgram,
    RedirectProgram,
    FlexProgram,
)

P = TypeVar("P")


@dataclass(frozen=True)
class IndexedProgram(Generic[P]):
    """
    A lineup entry annotated with its position data.

    `original_index` is assigned when the entry entered the lineup and
    survives swaps; `start_time_offset` is the summed duration of every
    entry before it.
    """

    program: P
    original_index: int
    start_time_offset: int

    @property
    def duration(self) -> int:
        return self.program.duration

    @property
    def end_time_offset(self) -> int:
        return self.start_time_offset + self.program.duration


def create_flex_program(duration: int, persisted: bool = False) -> FlexProgram:
    """Create a flex gap of the given width in ms."""
    return FlexProgram(duration=duration, persisted=persisted)


def create_redirect_program(
    channel_id: str,
    duration: int,
    channel_name: Optional[str] = None,
) -> RedirectProgram:
    """Create a redirect to another channel."""
    return RedirectProgram(
        channel_id=channel_id,
        duration=duration,
        channel_name=channel_name,
    )


def is_program(obj: Any) -> bool:
    """Check whether obj belongs to the program union (condensed or full)."""
    return isinstance(obj, PROGRAM_CLASSES)
