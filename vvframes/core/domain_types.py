"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - FolderId is the number inside a "[P<digits>]" filename tag (1-based)
    - FrameSeconds is a frame's time offset in whole seconds
    - GroupIndex = (FolderId - 1) // 10, always >= 0 for FolderId >= 1
    - Diagnostics are immutable records; collecting them never alters a result

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FolderId = NewType("FolderId", int)
FrameSeconds = NewType("FrameSeconds", int)
GroupIndex = NewType("GroupIndex", int)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class FrameKey:
    """Logical address of one frame: containing folder + time offset."""
    folder_id: FolderId
    frame_seconds: FrameSeconds


# ─── Enums ───────────────────────────────────────────────────────

class DiagnosticKind(str, Enum):
    """Why a batch item contributed nothing to the output."""
    MALFORMED_RECORD = "malformed_record"
    LOOKUP_MISS = "lookup_miss"
    EXTRACTION_FAILURE = "extraction_failure"


@dataclass(frozen=True)
class Diagnostic:
    """One skipped item, kept for observability only."""
    kind: DiagnosticKind
    message: str
    line_number: int | None = None
    folder_id: int | None = None
    frame_seconds: int | None = None
