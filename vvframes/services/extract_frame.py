"""Range Extractor — resolve a frame key and pull its bytes out of the packed archive.

Invariants:
    - Never raises: the result is bytes or None
    - Index miss → None with a LOOKUP_MISS diagnostic (not a failure)
    - Ranged GET first; 416 or any non-2xx → exactly one unranged GET of the archive
    - Final non-2xx or empty body → ExtractionError, absorbed as EXTRACTION_FAILURE
    - The unranged fallback returns the whole archive, not just the frame

Design Decisions:
    - diagnostics list is optional and append-only; callers that do not care pass None
"""

import logging

import httpx

from vvframes.core.domain_types import Diagnostic, DiagnosticKind
from vvframes.core.errors import (
    ErrorContext, ExtractionError, IndexFormatError, NetworkError,
)
from vvframes.core.frame_index import ByteRange, locate_frame, range_header_value
from vvframes.core.frame_key import group_index as compute_group_index
from vvframes.infrastructure.http_client import send_get
from vvframes.services.fetch_index import fetch_index

logger = logging.getLogger(__name__)


def archive_url(base_url: str, group_index: int) -> str:
    return f"{base_url.rstrip('/')}/{group_index}.webp"


async def extract_frame(
    client: httpx.AsyncClient,
    folder_id: int,
    frame_num: int,
    base_url: str,
    diagnostics: list[Diagnostic] | None = None,
) -> bytes | None:
    """Fetch the image bytes for (folder_id, frame_num), or None."""
    group = compute_group_index(folder_id)
    log_extra = {"folder_id": folder_id, "frame_seconds": frame_num, "group_index": group}
    context = ErrorContext(
        folder_id=folder_id, frame_seconds=frame_num, group_index=group,
    )
    try:
        index_data = await fetch_index(client, group, base_url)
        byte_range = locate_frame(index_data, folder_id, frame_num)
        if byte_range is None:
            logger.warning(
                f"Frame {frame_num} not found in folder {folder_id}", extra=log_extra,
            )
            _record(diagnostics, DiagnosticKind.LOOKUP_MISS,
                    f"frame {frame_num} not in index of folder {folder_id}",
                    folder_id, frame_num)
            return None
        return await _fetch_range(
            client, archive_url(base_url, group), byte_range, context,
        )
    except (NetworkError, IndexFormatError, ExtractionError) as e:
        logger.error(
            f"Extracting frame {frame_num} of folder {folder_id} failed: {e.message}",
            extra={**log_extra, "error_code": e.code},
        )
        _record(diagnostics, DiagnosticKind.EXTRACTION_FAILURE, e.message,
                folder_id, frame_num)
        return None


async def _fetch_range(
    client: httpx.AsyncClient,
    url: str,
    byte_range: ByteRange,
    context: ErrorContext,
) -> bytes:
    """Ranged GET with unranged fallback; raises ExtractionError on failure."""
    range_value = range_header_value(byte_range)
    response = await send_get(client, url, headers={"Range": range_value}, context=context)
    if not response.is_success:
        logger.info(
            f"Range request answered {response.status_code}, retrying unranged",
            extra={"url": url, "status_code": response.status_code,
                   "byte_range": range_value},
        )
        response = await send_get(client, url, context=context)

    if not response.is_success:
        raise ExtractionError(
            f"HTTP error: {response.status_code} {response.reason_phrase}",
            context=context,
        )
    if not response.content:
        raise ExtractionError("Empty response body", context=context)
    return response.content


def _record(
    diagnostics: list[Diagnostic] | None,
    kind: DiagnosticKind,
    message: str,
    folder_id: int,
    frame_num: int,
) -> None:
    if diagnostics is not None:
        diagnostics.append(Diagnostic(
            kind=kind, message=message,
            folder_id=folder_id, frame_seconds=frame_num,
        ))
