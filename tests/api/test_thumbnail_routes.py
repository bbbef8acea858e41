"""Thumbnail Route tests — search → previews, direct frame lookup, error envelopes.

Invariants verified:
    - /search returns images in input order plus diagnostics for skipped items
    - /search with zero resolvable frames is 200 with an empty list
    - Search API failure → 502 NETWORK_ERROR envelope
    - count clamped to the configured maximum before reaching the search API
    - Direct lookup: WebP bytes, data-url JSON, 404 FRAME_NOT_FOUND on an index miss
    - Index or archive fetch failure on direct lookup → 502 EXTRACTION_FAILURE
    - Invalid path parameters → 400 VALIDATION_ERROR
"""

import base64

import pytest

from tests.fake_archive import search_line


@pytest.fixture
def frames(archive):
    return archive.add_group(6, [
        (70, 2057, b"webp-70-2057"),
        (70, 3000, b"webp-70-3000"),
    ])


async def test_search_returns_previews_in_order(client, archive, frames):
    archive.search_text = "\n".join([
        search_line("[P070]70 百年未有之大变局（下）.json", "50m0s", similarity=0.9),
        "not json",
        search_line("[P070]70 百年未有之大变局（下）.json", "34m17s", similarity=0.8),
    ])
    res = await client.get(
        "/api/v1/thumbnails/search", params={"query": "我不是针对谁", "count": 3},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["query"] == "我不是针对谁"
    assert body["count"] == 3
    assert [base64.b64decode(u.split(",", 1)[1]) for u in body["images"]] == [
        b"webp-70-3000", b"webp-70-2057",
    ]
    assert [d["kind"] for d in body["diagnostics"]] == ["malformed_record"]


async def test_search_without_matches_is_empty(client, archive, frames):
    archive.search_text = ""
    res = await client.get("/api/v1/thumbnails/search", params={"query": "nothing"})
    assert res.status_code == 200
    assert res.json()["images"] == []
    assert res.json()["count"] == 1


async def test_search_count_is_clamped(client, archive, frames):
    res = await client.get(
        "/api/v1/thumbnails/search", params={"query": "vv", "count": 50},
    )
    assert res.json()["count"] == 5
    assert archive.requests[0].url.params["max_results"] == "5"


async def test_search_api_failure_is_502(client, archive):
    archive.search_status = 503
    res = await client.get("/api/v1/thumbnails/search", params={"query": "vv"})
    assert res.status_code == 502
    assert res.json()["error"]["code"] == "NETWORK_ERROR"


async def test_search_blank_query_is_400(client, archive):
    res = await client.get("/api/v1/thumbnails/search", params={"query": "  "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MALFORMED_RECORD"
    assert archive.requests == []


async def test_search_missing_query_is_validation_error(client):
    res = await client.get("/api/v1/thumbnails/search")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_frame_image_bytes(client, frames):
    res = await client.get("/api/v1/thumbnails/70/2057")
    assert res.status_code == 200
    assert res.headers["content-type"] == "image/webp"
    assert res.content == b"webp-70-2057"


async def test_frame_data_url(client, frames):
    res = await client.get("/api/v1/thumbnails/70/3000/data-url")
    assert res.status_code == 200
    body = res.json()
    assert body["folder_id"] == 70
    assert body["frame_seconds"] == 3000
    assert body["data_url"] == "data:image/webp;base64," + base64.b64encode(
        b"webp-70-3000",
    ).decode()


async def test_unknown_frame_is_404(client, frames):
    res = await client.get("/api/v1/thumbnails/70/9999")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "FRAME_NOT_FOUND"
    assert error["context"]["folder_id"] == 70


async def test_missing_group_index_is_502(client, frames):
    res = await client.get("/api/v1/thumbnails/15/1/data-url")
    assert res.status_code == 502
    assert res.json()["error"]["code"] == "EXTRACTION_FAILURE"


async def test_archive_outage_is_502_not_404(client, archive, frames):
    archive.range_status = 503
    archive.full_status = 503
    res = await client.get("/api/v1/thumbnails/70/2057")
    assert res.status_code == 502
    error = res.json()["error"]
    assert error["code"] == "EXTRACTION_FAILURE"
    assert error["context"] == {"folder_id": 70, "frame_seconds": 2057, "group_index": 6}


async def test_folder_id_must_be_positive(client):
    res = await client.get("/api/v1/thumbnails/0/5")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
