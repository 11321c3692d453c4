"""Subtitle parser and composer built on pysubs2.

Turns raw subtitle text delivered by a provider into ``Subtitle`` entries, and
renders entries back to text for callers that need a file again.
"""

from collections.abc import Iterable
from datetime import timedelta

import pysubs2
from pysubs2.exceptions import UnknownFPSError

from app.core.exceptions import SubtitleParseError
from app.core.logging import get_logger
from app.models.subtitle import Subtitle
from app.services.subtitle_provider import RawData, SubtitleFormat

logger = get_logger(__name__)


def _pysubs2_format(format: SubtitleFormat) -> str | None:
    """Map a format hint to the pysubs2 format id (None means autodetect)."""
    if format is SubtitleFormat.AUTO:
        return None
    return format.value


class SubtitleParser:
    """Parse a raw provider payload into subtitle entries."""

    def __init__(self, raw: RawData):
        self.raw = raw

    def parsing(self) -> list[Subtitle]:
        """Parse the raw payload.

        Returns:
            Entries in file order, indexed from 1. No ordering by time is
            guaranteed.

        Raises:
            SubtitleParseError: If the content is empty or unreadable
        """
        content = self.raw.content
        if not content or not content.strip():
            raise SubtitleParseError("Subtitle content is empty")

        try:
            subs = pysubs2.SSAFile.from_string(
                content, format_=_pysubs2_format(self.raw.format), fps=self.raw.fps
            )
        except Exception as e:
            raise SubtitleParseError(f"Failed to parse {self.raw.format.value}: {e}") from e

        entries = []
        for line in subs:
            if line.is_comment:
                continue
            entries.append(
                Subtitle(
                    index=len(entries) + 1,
                    start=timedelta(milliseconds=line.start),
                    end=timedelta(milliseconds=line.end),
                    text=line.plaintext,
                )
            )

        logger.debug("Parsed %d entries from %s content", len(entries), self.raw.format.value)
        return entries


def compose_subtitles(
    subtitles: Iterable[Subtitle],
    format: SubtitleFormat = SubtitleFormat.SRT,
    fps: float | None = None,
) -> str:
    """Render entries back to subtitle text.

    Args:
        subtitles: Entries to render, emitted in the given order
        format: Output format; AUTO falls back to SRT
        fps: Frame rate, required by frame-based formats such as MicroDVD

    Returns:
        Subtitle file content as string

    Raises:
        ValueError: If a frame-based format is requested without fps
    """
    subs = pysubs2.SSAFile()

    for entry in subtitles:
        event = pysubs2.SSAEvent(start=entry.start_ms, end=entry.end_ms)
        event.plaintext = entry.text
        subs.append(event)

    if format is SubtitleFormat.AUTO:
        format = SubtitleFormat.SRT
    try:
        return subs.to_string(format.value, fps=fps)
    except UnknownFPSError as e:
        raise ValueError(f"Framerate (fps) is required for {format.value} output") from e
