"""Root conftest — shared test configuration and fake archive fixtures."""

import os

import pytest

# Ensure tests never reach the real archive or search hosts
os.environ.setdefault("VVFRAMES_ARCHIVE_BASE_URL", "http://archive.test")
os.environ.setdefault("VVFRAMES_SEARCH_API_URL", "http://search.test/search")
os.environ.setdefault("VVFRAMES_LOG_FORMAT", "text")

from tests.fake_archive import FakeArchiveServer  # noqa: E402


@pytest.fixture
def archive():
    return FakeArchiveServer()


@pytest.fixture
async def archive_client(archive):
    async with archive.client() as client:
        yield client
