"""Subtitle entry model."""

from dataclasses import dataclass, replace
from datetime import timedelta

_ONE_MS = timedelta(milliseconds=1)


def format_timestamp(value: timedelta) -> str:
    """Format a duration as an SRT-style timestamp (HH:MM:SS,mmm)."""
    ms = value // _ONE_MS
    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    milliseconds = ms % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


@dataclass(frozen=True)
class Subtitle:
    """A single subtitle entry valid over the closed interval [start, end].

    Entries are ordered by ``start`` only. Instances are immutable; use
    ``copy_with`` to derive a changed entry.
    """

    index: int
    start: timedelta
    end: timedelta
    text: str

    @property
    def start_ms(self) -> int:
        return self.start // _ONE_MS

    @property
    def end_ms(self) -> int:
        return self.end // _ONE_MS

    def in_range(self, position: timedelta) -> bool:
        """Check whether ``position`` falls inside this entry (bounds included)."""
        return self.start <= position <= self.end

    def is_after(self, position: timedelta) -> bool:
        """Check whether this entry begins strictly after ``position``.

        Not used by ``duration_search``, which branches on ``is_larg``.
        """
        return self.start > position

    def is_larg(self, position: timedelta) -> bool:
        """Check whether ``position`` lies past the whole entry."""
        return position > self.start and position > self.end

    def copy_with(
        self,
        index: int | None = None,
        start: timedelta | None = None,
        end: timedelta | None = None,
        text: str | None = None,
    ) -> "Subtitle":
        changes = {}
        if index is not None:
            changes["index"] = index
        if start is not None:
            changes["start"] = start
        if end is not None:
            changes["end"] = end
        if text is not None:
            changes["text"] = text
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "text": self.text,
        }

    def __lt__(self, other: "Subtitle") -> bool:
        if not isinstance(other, Subtitle):
            return NotImplemented
        return self.start < other.start

    def __str__(self) -> str:
        return (
            f"{self.index}: {format_timestamp(self.start)} --> "
            f"{format_timestamp(self.end)} {self.text}"
        )
