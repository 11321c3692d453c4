"""Subtitle providers.

A provider supplies a controller with either already-structured entries or a
raw text payload that still needs parsing. The result is a two-case tagged
value so callers match on it exhaustively.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
import enum

from app.models.subtitle import Subtitle


class SubtitleType(enum.Enum):
    """Discriminant of a provider result."""

    PARSED_DATA = "parsed_data"
    RAW_DATA = "raw_data"


class SubtitleFormat(str, enum.Enum):
    """Raw subtitle formats understood by the parser (pysubs2 format ids)."""

    SRT = "srt"
    VTT = "vtt"
    ASS = "ass"
    SSA = "ssa"
    MICRODVD = "microdvd"
    MPL2 = "mpl2"
    TMP = "tmp"
    AUTO = "auto"


@dataclass(frozen=True)
class ParsedData:
    """Entries that need no further parsing."""

    subtitles: list[Subtitle] = field(default_factory=list)

    @property
    def type(self) -> SubtitleType:
        return SubtitleType.PARSED_DATA


@dataclass(frozen=True)
class RawData:
    """Raw subtitle text plus a format hint."""

    content: str
    format: SubtitleFormat = SubtitleFormat.SRT
    fps: float | None = None

    @property
    def type(self) -> SubtitleType:
        return SubtitleType.RAW_DATA


ProviderResult = ParsedData | RawData


class SubtitleProvider(ABC):
    """Base class of every subtitle source consumed by a controller."""

    @abstractmethod
    async def get_subtitle(self) -> ProviderResult:
        """Fetch the subtitle payload."""
        ...


class ParsedDataProvider(SubtitleProvider):
    """Provider wrapping entries that are already structured."""

    def __init__(self, subtitles: Iterable[Subtitle]):
        self.subtitles = list(subtitles)

    async def get_subtitle(self) -> ProviderResult:
        return ParsedData(subtitles=list(self.subtitles))


class StringSubtitleProvider(SubtitleProvider):
    """Provider for subtitle text already held in memory."""

    def __init__(
        self,
        content: str,
        format: SubtitleFormat | str = SubtitleFormat.SRT,
        fps: float | None = None,
    ):
        self.content = content
        self.format = SubtitleFormat(format)
        self.fps = fps

    async def get_subtitle(self) -> ProviderResult:
        return RawData(content=self.content, format=self.format, fps=self.fps)
