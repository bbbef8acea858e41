"""Thumbnail Schemas — Pydantic models for thumbnail API responses.

Invariants:
    - images are data URLs in input order; diagnostics never affect them
    - DiagnosticOut mirrors core Diagnostic one-to-one
"""

from pydantic import BaseModel

from vvframes.core.domain_types import Diagnostic, DiagnosticKind


class DiagnosticOut(BaseModel):
    """A search record that produced no image, and why."""
    kind: DiagnosticKind
    message: str
    line_number: int | None = None
    folder_id: int | None = None
    frame_seconds: int | None = None

    @classmethod
    def from_domain(cls, diagnostic: Diagnostic) -> "DiagnosticOut":
        return cls(
            kind=diagnostic.kind,
            message=diagnostic.message,
            line_number=diagnostic.line_number,
            folder_id=diagnostic.folder_id,
            frame_seconds=diagnostic.frame_seconds,
        )


class ThumbnailSearchResponse(BaseModel):
    query: str
    count: int
    images: list[str] = []
    diagnostics: list[DiagnosticOut] = []


class ThumbnailDataUrlResponse(BaseModel):
    folder_id: int
    frame_seconds: int
    data_url: str
