"""Subtitle lookup and merge endpoints."""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.models.subtitle import Subtitle
from app.schemas import (
    MergeRequest,
    MergeResponse,
    SearchRequest,
    SearchResponse,
    SubtitleEntryResponse,
    SubtitleTrack,
)
from app.services.subtitle_controller import SubtitleController
from app.services.subtitle_parser import compose_subtitles
from app.services.subtitle_provider import StringSubtitleProvider, SubtitleFormat

logger = get_logger(__name__)

router = APIRouter()


async def load_track(track: SubtitleTrack, settings: Settings) -> SubtitleController:
    """Build and initialize a controller over request-supplied content.

    Raises:
        ValueError: If the content is too large or holds no entries
    """
    if len(track.content) > settings.max_content_length:
        raise ValueError(
            f"Subtitle content exceeds {settings.max_content_length} characters"
        )

    controller = SubtitleController(
        provider=StringSubtitleProvider(track.content, track.format, fps=track.fps)
    )
    await controller.initial()

    if not controller.subtitles:
        raise ValueError("No subtitle entries found in content")
    return controller


def _to_response(subtitles: list[Subtitle]) -> list[SubtitleEntryResponse]:
    return [SubtitleEntryResponse(**subtitle.to_dict()) for subtitle in subtitles]


@router.post(
    "/search",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Find subtitle entries at a position",
    description="Returns the entry active at a playback position, or every overlapping entry",
)
async def search_subtitles(
    request: SearchRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Look up the subtitle entries active at ``position_ms``.

    Raises:
        HTTPException: If parsing fails or the content holds no entries
    """
    try:
        controller = await load_track(request, settings)
        position = timedelta(milliseconds=request.position_ms)

        if request.multiple:
            matches = controller.multi_duration_search(position)
        else:
            active = controller.duration_search(position)
            matches = [active] if active is not None else []

        return SearchResponse(matches=_to_response(matches), count=len(matches))

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid subtitle content: {str(e)}",
        )
    except Exception as e:
        logger.exception("Subtitle search failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )


@router.post(
    "/merge",
    response_model=MergeResponse,
    status_code=status.HTTP_200_OK,
    summary="Merge two subtitle tracks",
    description="Aligns entries that start within delta_ms of each other and joins their text",
)
async def merge_subtitles(
    request: MergeRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Merge the secondary track into the primary one.

    Raises:
        HTTPException: If either track cannot be parsed
    """
    delta_ms = request.delta_ms if request.delta_ms is not None else settings.default_delta_ms
    join_with = request.join_with if request.join_with is not None else settings.default_join_with
    output_format = request.output_format or SubtitleFormat(settings.default_output_format)

    try:
        primary = await load_track(request.primary, settings)
        secondary = await load_track(request.secondary, settings)

        merged = await SubtitleController.merge(
            primary, secondary, delta_ms=delta_ms, join_with=join_with
        )
        merged_content = compose_subtitles(
            merged.subtitles, output_format, fps=request.primary.fps or request.secondary.fps
        )

        return MergeResponse(
            merged_content=merged_content,
            entry_count=len(merged.subtitles),
            entries=_to_response(merged.subtitles),
        )

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid subtitle content: {str(e)}",
        )
    except Exception as e:
        logger.exception("Subtitle merge failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )
