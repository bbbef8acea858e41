"""Error Handlers — map frame-lookup failures to JSON error envelopes.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - VvFramesError: its own http_status and to_response(); lookup context logged
    - Bad query/path parameters (query, count, folder_id, frame_seconds) → 400
      VALIDATION_ERROR listing each offending parameter and where it came from
    - httpx failure that escaped a service (archive or search host) → 502
      UPSTREAM_ERROR, upstream URL logged but not returned
    - Anything else → 500 INTERNAL_ERROR with no internal details

Design Decisions:
    - Handlers registered from one place so main.py stays declarative
"""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vvframes.core.errors import ErrorCategory, ErrorSeverity, VvFramesError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VvFramesError, _handle_vvframes_error)
    app.add_exception_handler(RequestValidationError, _handle_bad_parameters)
    app.add_exception_handler(httpx.HTTPError, _handle_upstream_error)
    app.add_exception_handler(httpx.InvalidURL, _handle_upstream_error)
    app.add_exception_handler(Exception, _handle_unexpected)


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **fields,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }


async def _handle_vvframes_error(request: Request, exc: VvFramesError):
    ctx = exc.context
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "folder_id": ctx.folder_id,
            "frame_seconds": ctx.frame_seconds,
            "group_index": ctx.group_index,
            "url": ctx.url,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _parameter_problems(exc: RequestValidationError) -> list[dict]:
    problems = []
    for err in exc.errors():
        loc = err.get("loc", ())
        problems.append({
            "parameter": str(loc[-1]) if loc else None,
            "in": str(loc[0]) if len(loc) > 1 else None,
            "message": err.get("msg", ""),
        })
    return problems


async def _handle_bad_parameters(request: Request, exc: RequestValidationError):
    problems = _parameter_problems(exc)
    names = ", ".join(p["parameter"] for p in problems if p["parameter"])
    logger.info(
        f"Rejected parameters on {request.url.path}: {names}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR",
            f"Invalid request parameters: {names}" if names else "Invalid request",
            ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING,
            details=problems,
        ),
    )


async def _handle_upstream_error(request: Request, exc: Exception):
    upstream = None
    if isinstance(exc, httpx.HTTPError):
        try:
            upstream = str(exc.request.url)
        except RuntimeError:
            upstream = None
    logger.error(
        f"Upstream request failed on {request.url.path}: {exc!r}",
        extra={"error_code": "UPSTREAM_ERROR", "path": request.url.path, "url": upstream},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_envelope(
            "UPSTREAM_ERROR",
            "The frame archive or search service could not be reached",
            ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR,
        ),
    )


async def _handle_unexpected(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        ),
    )
