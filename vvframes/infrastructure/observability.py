"""Structured Logging — JSON lines keyed by the frame being looked up.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Lookup coordinates (folder_id, frame_seconds, group_index) nest under "frame"
    - Outbound request details (url, status_code, byte_range, size) nest under "http"
    - httpx/httpcore per-request INFO chatter is suppressed unless level is DEBUG
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - stdlib logging with a custom formatter; services pass fields via `extra=`
"""

import json
import logging
from datetime import datetime, timezone

_FRAME_FIELDS = ("folder_id", "frame_seconds", "group_index")
_HTTP_FIELDS = ("url", "status_code", "byte_range", "size")
_FLAT_FIELDS = ("error_code", "line_number", "path")
_CLIENT_LOGGERS = ("httpx", "httpcore")


def _collect(record: logging.LogRecord, keys: tuple[str, ...]) -> dict:
    return {
        key: record.__dict__[key]
        for key in keys
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, lookup fields grouped."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        frame = _collect(record, _FRAME_FIELDS)
        if frame:
            log["frame"] = frame
        http = _collect(record, _HTTP_FIELDS)
        if http:
            log["http"] = http
        log.update(_collect(record, _FLAT_FIELDS))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _VvFramesHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the vvframes stream handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _VvFramesHandler)]:
        root.removeHandler(existing)

    handler = _VvFramesHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    client_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in _CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)
    return handler
