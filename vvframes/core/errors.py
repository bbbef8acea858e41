"""Error Hierarchy — typed, categorized exceptions for frame lookup failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Per-item errors (index format, extraction) never leave the Range Extractor
    - NetworkError is the only error a batch request may surface to its caller
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with VvFramesError base: FastAPI global handler catches all
    - ErrorContext as dataclass: lookup coordinates travel with the error
      without coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    DATA_FORMAT = "data_format"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Lookup coordinates and debug data attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    folder_id: int | None = None
    frame_seconds: int | None = None
    group_index: int | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None


class VvFramesError(Exception):
    """Base exception for all vvframes errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "folder_id": self.context.folder_id,
                    "frame_seconds": self.context.frame_seconds,
                    "group_index": self.context.group_index,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class MalformedRecordError(VvFramesError):
    """A search record or request parameter could not be interpreted."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_RECORD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class FrameNotFoundError(VvFramesError):
    """No frame could be resolved for the requested key."""
    def __init__(
        self, folder_id: int, frame_seconds: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.folder_id = folder_id
        ctx.frame_seconds = frame_seconds
        super().__init__(
            f"Frame {frame_seconds}s of folder {folder_id} not found",
            "FRAME_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.folder_id = folder_id
        self.frame_seconds = frame_seconds


# ─── Remote / Data Errors (500-level) ───────────────────────────

class NetworkError(VvFramesError):
    """An HTTP request returned a non-success status or never completed.

    status_code is None when the request failed at the transport level.
    """
    def __init__(
        self,
        url: str,
        status_code: int | None,
        reason: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.url = url
        if status_code is None:
            message = f"Request to {url} failed: {reason}"
        else:
            message = f"Request to {url} failed: {status_code} {reason}"
        super().__init__(
            message, "NETWORK_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.url = url
        self.status_code = status_code
        self.reason = reason


class IndexFormatError(VvFramesError):
    """Index buffer is shorter than its own header says it is."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed index: {message}",
            "INDEX_FORMAT_ERROR", ErrorCategory.DATA_FORMAT,
            ErrorSeverity.ERROR, context, 502,
        )


class ExtractionError(VvFramesError):
    """Archive bytes for a located frame could not be retrieved."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "EXTRACTION_FAILURE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
