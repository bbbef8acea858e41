"""Error Hierarchy tests — codes, statuses, and REST envelope shape."""

from vvframes.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, ExtractionError,
    FrameNotFoundError, IndexFormatError, MalformedRecordError, NetworkError,
    VvFramesError,
)


def test_network_error_carries_status_and_reason():
    err = NetworkError("http://archive.test/6.index", 404, "Not Found")
    assert err.status_code == 404
    assert err.reason == "Not Found"
    assert "404 Not Found" in err.message
    assert err.context.url == "http://archive.test/6.index"
    assert err.http_status == 502
    assert err.category == ErrorCategory.EXTERNAL_API


def test_network_error_transport_failure_has_no_status():
    err = NetworkError("http://archive.test/6.index", None, "connection refused")
    assert err.status_code is None
    assert err.message.endswith("connection refused")


def test_frame_not_found_fills_context():
    err = FrameNotFoundError(70, 2057)
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "FRAME_NOT_FOUND"
    assert body["context"]["folder_id"] == 70
    assert body["context"]["frame_seconds"] == 2057


def test_all_errors_share_base():
    errors = [
        NetworkError("u", 500, "x"),
        IndexFormatError("short"),
        ExtractionError("empty"),
        MalformedRecordError("bad", "query"),
        FrameNotFoundError(1, 1),
    ]
    assert all(isinstance(e, VvFramesError) for e in errors)
    assert len({e.code for e in errors}) == len(errors)


def test_response_envelope_shape():
    ctx = ErrorContext(folder_id=3, frame_seconds=9, group_index=0)
    err = ExtractionError("Empty response body", context=ctx)
    body = err.to_response()["error"]
    assert body["code"] == "EXTRACTION_FAILURE"
    assert body["severity"] == ErrorSeverity.ERROR.value
    assert body["context"]["group_index"] == 0
    assert "timestamp" in body
