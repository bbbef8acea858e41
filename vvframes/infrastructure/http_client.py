"""HTTP Client — httpx.AsyncClient factory and error mapping for archive/search requests.

Invariants:
    - No retries here: callers own fallback policy (e.g. unranged archive fetch)
    - Transport failures (httpx.HTTPError) and unusable URLs (httpx.InvalidURL)
      mapped to NetworkError(status_code=None)
    - Non-2xx responses mapped to NetworkError only via ensure_success()
    - Timeout None in settings keeps the httpx default timeout

Design Decisions:
    - One client per request scope: connection pooling without cross-request state
    - get_http_client is a FastAPI dependency so tests can swap in a MockTransport
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx

from vvframes.config import Settings, get_settings
from vvframes.core.errors import ErrorContext, NetworkError

logger = logging.getLogger(__name__)


def create_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build an AsyncClient configured from settings."""
    kwargs: dict = {
        "headers": {"User-Agent": settings.user_agent},
        "follow_redirects": True,
    }
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = settings.http_timeout_seconds
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


@asynccontextmanager
async def open_http_client(
    settings: Settings | None = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Client scoped to one unit of work; closed on exit."""
    client = create_http_client(settings or get_settings())
    try:
        yield client
    finally:
        await client.aclose()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency: one AsyncClient per request."""
    async with open_http_client() as client:
        yield client


async def send_get(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str] | None = None,
    context: ErrorContext | None = None,
) -> httpx.Response:
    """GET url; transport-level failures become NetworkError."""
    try:
        return await client.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"GET {url} failed: {e!r}", extra={"url": url})
        raise NetworkError(url, None, str(e) or type(e).__name__, context=context) from e


def ensure_success(
    response: httpx.Response, context: ErrorContext | None = None,
) -> httpx.Response:
    """Raise NetworkError unless the response status is 2xx."""
    if not response.is_success:
        raise NetworkError(
            str(response.request.url),
            response.status_code,
            response.reason_phrase,
            context=context,
        )
    return response
