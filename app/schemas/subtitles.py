"""Pydantic schemas for subtitle lookup and merge API."""

from pydantic import BaseModel, Field

from app.services.subtitle_provider import SubtitleFormat


class SubtitleTrack(BaseModel):
    """Raw subtitle content of one track."""

    content: str = Field(..., description="Subtitle file content", min_length=1)
    format: SubtitleFormat = Field(
        SubtitleFormat.SRT,
        description="Subtitle format of the content ('auto' lets the parser detect it)",
    )
    fps: float | None = Field(
        None, description="Frame rate, only needed for frame-based formats (MicroDVD)", gt=0
    )


class SubtitleEntryResponse(BaseModel):
    """A single subtitle entry."""

    index: int
    start_ms: int
    end_ms: int
    text: str


class SearchRequest(SubtitleTrack):
    """Request model for the search endpoint."""

    position_ms: int = Field(..., description="Playback position to look up, in ms", ge=0)
    multiple: bool = Field(
        False,
        description="Return every overlapping entry instead of the single active one",
    )


class SearchResponse(BaseModel):
    """Response model for the search endpoint."""

    matches: list[SubtitleEntryResponse] = Field(
        ..., description="Entries active at the requested position, in track order"
    )
    count: int = Field(..., description="Number of matching entries")


class MergeRequest(BaseModel):
    """Request model for the merge endpoint."""

    primary: SubtitleTrack = Field(..., description="Track whose timing wins on merged entries")
    secondary: SubtitleTrack = Field(..., description="Track folded into the primary one")
    delta_ms: int | None = Field(
        None, description="Start time tolerance for aligning entries, in ms", ge=0
    )
    join_with: str | None = Field(None, description="Separator placed between merged texts")
    output_format: SubtitleFormat | None = Field(
        None, description="Format of the merged content (default: srt)"
    )


class MergeResponse(BaseModel):
    """Response model for the merge endpoint."""

    merged_content: str = Field(..., description="Merged track rendered as a subtitle file")
    entry_count: int = Field(..., description="Number of entries in the merged track")
    entries: list[SubtitleEntryResponse]


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    endpoints: dict[str, list[str]] = Field(default_factory=dict)
