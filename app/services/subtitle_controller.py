"""Subtitle controllers.

A controller owns one track: the time-ordered list of entries loaded from a
provider. It answers "which entry is active at T" and "which entries overlap
T", and two controllers can be merged into a new one.
"""

from abc import ABC, abstractmethod
import asyncio
from datetime import timedelta

from app.core.exceptions import NotInitializedError
from app.core.logging import get_logger
from app.models.subtitle import Subtitle
from app.services.subtitle_parser import SubtitleParser
from app.services.subtitle_provider import (
    ParsedData,
    ParsedDataProvider,
    RawData,
    SubtitleProvider,
)

logger = get_logger(__name__)


class BaseSubtitleController(ABC):
    """Base class of every subtitle controller.

    Subclasses supply the search algorithms; loading, sorting and formatting
    are shared.
    """

    def __init__(self, provider: SubtitleProvider):
        self._provider = provider
        self.subtitles: list[Subtitle] = []
        self._parser: SubtitleParser | None = None
        self._init_lock = asyncio.Lock()

    @property
    def provider(self) -> SubtitleProvider:
        return self._provider

    @property
    def parser(self) -> SubtitleParser | None:
        """The parser created on initialization.

        None when the provider delivered already-parsed entries.

        Raises:
            NotInitializedError: If the controller is not initialized yet
        """
        if not self.initialized:
            raise NotInitializedError()
        return self._parser

    @property
    def initialized(self) -> bool:
        return self._parser is not None or bool(self.subtitles)

    @abstractmethod
    def duration_search(self, duration: timedelta) -> Subtitle | None:
        """Return the entry active at ``duration``, if any."""
        ...

    @abstractmethod
    def multi_duration_search(self, duration: timedelta) -> list[Subtitle]:
        """Return every entry whose interval contains ``duration``."""
        ...

    async def initial(self) -> None:
        """Load entries from the provider once.

        Raw payloads are parsed and sorted by start time. Parsed payloads are
        appended as delivered, without sorting; keeping them ordered is the
        provider's responsibility.

        Provider and parser errors propagate unchanged.
        """
        async with self._init_lock:
            if self.initialized:
                return

            result = await self._provider.get_subtitle()

            match result:
                case ParsedData(subtitles=subtitles):
                    self.subtitles.extend(subtitles or [])
                    logger.debug("Loaded %d pre-parsed entries", len(self.subtitles))
                case RawData():
                    self._parser = SubtitleParser(result)
                    self.subtitles.extend(self._parser.parsing())
                    self.sort()
                    logger.debug(
                        "Loaded %d entries from %s content",
                        len(self.subtitles),
                        result.format.value,
                    )
                case _:
                    raise TypeError(f"Unsupported provider result: {type(result).__name__}")

    def sort(self) -> None:
        """Sort entries by start time, keeping the relative order of ties."""
        self.subtitles.sort(key=lambda subtitle: subtitle.start)

    def get_all(self, separator: str = ", ") -> str:
        """Join the string form of every entry with ``separator``."""
        return separator.join(str(subtitle) for subtitle in self.subtitles)


class SubtitleController(BaseSubtitleController):
    """Default controller: binary search for single lookups, linear scan for overlaps."""

    @staticmethod
    async def merge(
        sc1: "SubtitleController",
        sc2: "SubtitleController",
        delta_ms: int = 0,
        join_with: str = "\n",
    ) -> "SubtitleController":
        """Merge two tracks into a new, initialized controller.

        Entries of ``sc2`` whose start lies within ``delta_ms`` of an entry of
        ``sc1`` are folded into it as ``"{s1.text}{join_with}{s2.text}"``.
        Every other entry is kept unchanged. Both tracks must be sorted by
        start time; the output keeps that order and is reindexed from 0.

        Args:
            sc1: Source track, its timing wins on merged entries
            sc2: Target track
            delta_ms: Tolerance between start times, in milliseconds
            join_with: Separator placed between the two texts

        Returns:
            A new controller holding the merged track
        """
        merged_subtitles: list[Subtitle] = []
        src_subtitles = list(sc1.subtitles)
        target_subtitles = list(sc2.subtitles)

        index = 0
        target_index = 0
        merged_count = 0

        for s1 in src_subtitles:
            be_merged = False
            while target_index < len(target_subtitles):
                s2 = target_subtitles[target_index]
                diff = s1.start_ms - s2.start_ms
                if abs(diff) <= delta_ms:
                    merged_subtitles.append(
                        s1.copy_with(index=index, text=f"{s1.text}{join_with}{s2.text}")
                    )
                    be_merged = True
                    merged_count += 1
                elif diff > 0:
                    merged_subtitles.append(s2.copy_with(index=index))
                else:
                    break
                index += 1
                target_index += 1

            if not be_merged:
                merged_subtitles.append(s1.copy_with(index=index))
                index += 1

        for s2 in target_subtitles[target_index:]:
            merged_subtitles.append(s2.copy_with(index=index))
            index += 1

        logger.info(
            "Merged %d + %d entries into %d (%d aligned, delta_ms=%d)",
            len(src_subtitles),
            len(target_subtitles),
            len(merged_subtitles),
            merged_count,
            delta_ms,
        )

        controller = SubtitleController(provider=ParsedDataProvider(merged_subtitles))
        await controller.initial()
        return controller

    def duration_search(self, duration: timedelta) -> Subtitle | None:
        """Fetch the entry active at ``duration`` by binary search.

        Assumes entries are sorted and do not overlap; use
        ``multi_duration_search`` for overlapping tracks.

        Raises:
            NotInitializedError: If the controller is not initialized yet
        """
        if not self.initialized:
            raise NotInitializedError()

        index = self._binary_search(0, len(self.subtitles) - 1, duration)
        if index > -1:
            return self.subtitles[index]
        return None

    def _binary_search(self, l: int, r: int, duration: timedelta) -> int:
        if r < l:
            return -1

        mid = l + (r - l) // 2
        subtitle = self.subtitles[mid]

        if subtitle.in_range(duration):
            return mid

        # duration lies past the mid entry, so only the right half can hold it
        if subtitle.is_larg(duration):
            return self._binary_search(mid + 1, r, duration)

        return self._binary_search(l, mid - 1, duration)

    def multi_duration_search(self, duration: timedelta) -> list[Subtitle]:
        return [subtitle for subtitle in self.subtitles if subtitle.in_range(duration)]
