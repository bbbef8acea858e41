"""Index Fetcher — download a group's .index file.

Invariants:
    - GET {base_url}/{group_index}.index, full body returned as bytes
    - Non-2xx or transport failure → NetworkError (status code + reason)
    - No retries and no caching: every call re-fetches
"""

import logging

import httpx

from vvframes.core.errors import ErrorContext
from vvframes.infrastructure.http_client import ensure_success, send_get

logger = logging.getLogger(__name__)


def index_url(base_url: str, group_index: int) -> str:
    return f"{base_url.rstrip('/')}/{group_index}.index"


async def fetch_index(
    client: httpx.AsyncClient, group_index: int, base_url: str,
) -> bytes:
    """Fetch the raw bytes of one group's index file."""
    url = index_url(base_url, group_index)
    context = ErrorContext(group_index=group_index)
    response = ensure_success(await send_get(client, url, context=context), context)
    logger.debug(
        "Fetched index",
        extra={"group_index": group_index, "url": url, "size": len(response.content)},
    )
    return response.content
