"""API test fixtures — FastAPI test client wired to the fake archive.

Invariants:
    - get_http_client dependency overridden: routes talk to FakeArchiveServer only
    - Overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from vvframes.infrastructure.http_client import get_http_client
from vvframes.main import app


@pytest.fixture
async def client(archive):
    """FastAPI test client with the outbound HTTP client overridden."""
    async def override_get_http_client():
        async with archive.client() as outbound:
            yield outbound

    app.dependency_overrides[get_http_client] = override_get_http_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
