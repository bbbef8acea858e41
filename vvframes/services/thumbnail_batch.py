"""Thumbnail Batch — search API text in, ordered list of WebP data URLs out.

Invariants:
    - Lines processed strictly in sequence: parse → key → extract → encode
    - A malformed line, a missing/unmatched filename or timestamp, a lookup miss,
      or an extraction failure skips that item only; the batch always completes
    - data_urls preserves input order of the items that succeeded (no placeholders)
    - len(data_urls) <= number of non-blank input lines

Design Decisions:
    - No fan-out: total latency is the sum of individual lookups
    - Diagnostics collected alongside results, never raised
"""

import logging
from dataclasses import dataclass, field

import httpx

from vvframes.core.data_url import to_data_url
from vvframes.core.domain_types import Diagnostic, DiagnosticKind
from vvframes.core.frame_key import derive_frame_key
from vvframes.core.search_results import parse_search_lines
from vvframes.services.extract_frame import extract_frame

logger = logging.getLogger(__name__)


@dataclass
class ThumbnailBatch:
    data_urls: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


async def thumbnail_data_url(
    client: httpx.AsyncClient,
    folder_id: int,
    frame_num: int,
    base_url: str,
    diagnostics: list[Diagnostic] | None = None,
) -> str | None:
    """Data URL for one frame, or None when it cannot be extracted."""
    frame = await extract_frame(client, folder_id, frame_num, base_url, diagnostics)
    if frame is None:
        return None
    return to_data_url(frame)


async def build_thumbnail_batch(
    client: httpx.AsyncClient, api_text: str, base_url: str,
) -> ThumbnailBatch:
    """Resolve every search record in api_text to a data URL, skipping failures."""
    batch = ThumbnailBatch()
    for parsed in parse_search_lines(api_text):
        if parsed.record is None:
            logger.error(
                f"Dropping unparseable search line: {parsed.diagnostic.message}",
                extra={"line_number": parsed.line_number},
            )
            batch.diagnostics.append(parsed.diagnostic)
            continue

        key = derive_frame_key(
            parsed.record.get("filename"), parsed.record.get("timestamp"),
        )
        if key is None:
            logger.debug(
                "Skipping record without usable filename/timestamp",
                extra={"line_number": parsed.line_number},
            )
            batch.diagnostics.append(Diagnostic(
                kind=DiagnosticKind.MALFORMED_RECORD,
                message="missing or unmatched filename/timestamp",
                line_number=parsed.line_number,
            ))
            continue

        data_url = await thumbnail_data_url(
            client, key.folder_id, key.frame_seconds, base_url, batch.diagnostics,
        )
        if data_url is not None:
            batch.data_urls.append(data_url)

    logger.info(
        f"Thumbnail batch resolved {len(batch.data_urls)} frame(s), "
        f"skipped {len(batch.diagnostics)}",
    )
    return batch
