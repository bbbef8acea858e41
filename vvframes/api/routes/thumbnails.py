"""Thumbnail Routes — text search → frame previews, and direct frame lookup.

Invariants:
    - /search: only a search-API NetworkError surfaces (502); per-item failures
      become diagnostics, zero matches is an empty image list
    - /{folder_id}/{frame_seconds}: raw WebP bytes; 404 when the index has no such
      frame, 502 EXTRACTION_FAILURE when the index or archive fetch fails
    - One AsyncClient per request (get_http_client dependency)

Design Decisions:
    - Routes stay thin: all lookup logic lives in services/ and core/
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response

from vvframes.config import Settings, get_settings
from vvframes.core.data_url import WEBP_MIME_TYPE, to_data_url
from vvframes.core.domain_types import Diagnostic, DiagnosticKind
from vvframes.core.errors import ErrorContext, ExtractionError, FrameNotFoundError
from vvframes.core.frame_key import group_index
from vvframes.infrastructure.http_client import get_http_client
from vvframes.schemas.thumbnail import (
    DiagnosticOut, ThumbnailDataUrlResponse, ThumbnailSearchResponse,
)
from vvframes.services.extract_frame import extract_frame
from vvframes.services.search_client import clamp_count, fetch_search_results
from vvframes.services.thumbnail_batch import build_thumbnail_batch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/thumbnails", tags=["thumbnails"])


@router.get("/search", response_model=ThumbnailSearchResponse)
async def search_thumbnails(
    query: str = Query(..., min_length=1),
    count: int | None = Query(None),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Search by text and return a preview image per resolvable match."""
    effective = clamp_count(
        count, settings.search_default_count, settings.search_max_count,
    )
    api_text = await fetch_search_results(client, query, effective, settings)
    batch = await build_thumbnail_batch(client, api_text, settings.archive_base_url)
    return ThumbnailSearchResponse(
        query=query,
        count=effective,
        images=batch.data_urls,
        diagnostics=[DiagnosticOut.from_domain(d) for d in batch.diagnostics],
    )


async def _extract_or_raise(
    client: httpx.AsyncClient, folder_id: int, frame_seconds: int, settings: Settings,
) -> bytes:
    diagnostics: list[Diagnostic] = []
    frame = await extract_frame(
        client, folder_id, frame_seconds, settings.archive_base_url, diagnostics,
    )
    if frame is not None:
        return frame
    failure = next(
        (d for d in diagnostics if d.kind == DiagnosticKind.EXTRACTION_FAILURE), None,
    )
    if failure is not None:
        raise ExtractionError(failure.message, context=ErrorContext(
            folder_id=folder_id,
            frame_seconds=frame_seconds,
            group_index=group_index(folder_id),
        ))
    raise FrameNotFoundError(folder_id, frame_seconds)


@router.get("/{folder_id}/{frame_seconds}")
async def get_frame_image(
    folder_id: int = Path(..., ge=1),
    frame_seconds: int = Path(..., ge=0),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Raw WebP bytes of one frame."""
    frame = await _extract_or_raise(client, folder_id, frame_seconds, settings)
    return Response(content=frame, media_type=WEBP_MIME_TYPE)


@router.get(
    "/{folder_id}/{frame_seconds}/data-url",
    response_model=ThumbnailDataUrlResponse,
)
async def get_frame_data_url(
    folder_id: int = Path(..., ge=1),
    frame_seconds: int = Path(..., ge=0),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """One frame as an inline data URL."""
    frame = await _extract_or_raise(client, folder_id, frame_seconds, settings)
    return ThumbnailDataUrlResponse(
        folder_id=folder_id,
        frame_seconds=frame_seconds,
        data_url=to_data_url(frame),
    )
