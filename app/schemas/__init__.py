"""Pydantic schemas for API request/response validation."""

from app.schemas.subtitles import (
    HealthResponse,
    MergeRequest,
    MergeResponse,
    SearchRequest,
    SearchResponse,
    SubtitleEntryResponse,
    SubtitleTrack,
)

__all__ = [
    "SubtitleTrack",
    "SubtitleEntryResponse",
    "SearchRequest",
    "SearchResponse",
    "MergeRequest",
    "MergeResponse",
    "HealthResponse",
]
