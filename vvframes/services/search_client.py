"""Search API Client — fetch newline-delimited JSON matches for a text query.

Invariants:
    - count clamped to [1, search_max_count]; missing or < 1 → search_default_count
    - Empty/whitespace query rejected before any request (MalformedRecordError)
    - Non-2xx or transport failure → NetworkError, propagated to the caller
    - Response body returned verbatim; parsing belongs to the batch
"""

import logging

import httpx

from vvframes.config import Settings
from vvframes.core.errors import MalformedRecordError
from vvframes.infrastructure.http_client import ensure_success, send_get

logger = logging.getLogger(__name__)


def clamp_count(count: int | None, default: int, maximum: int) -> int:
    if count is None or count < 1:
        return default
    return min(count, maximum)


def build_search_params(query: str, count: int, settings: Settings) -> dict[str, str]:
    return {
        "query": query,
        "min_ratio": str(settings.search_min_ratio),
        "min_similarity": str(settings.search_min_similarity),
        "max_results": str(count),
    }


async def fetch_search_results(
    client: httpx.AsyncClient,
    query: str,
    count: int | None,
    settings: Settings,
) -> str:
    """Run a text search and return the raw NDJSON response text."""
    if not query or not query.strip():
        raise MalformedRecordError("Search query must not be empty", "query")
    max_results = clamp_count(
        count, settings.search_default_count, settings.search_max_count,
    )
    url = str(httpx.URL(
        settings.search_api_url,
        params=build_search_params(query, max_results, settings),
    ))
    response = ensure_success(await send_get(client, url))
    logger.info(
        f"Search returned {len(response.content)} bytes",
        extra={"url": settings.search_api_url, "status_code": response.status_code},
    )
    return response.text
