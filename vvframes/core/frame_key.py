"""Frame Key Derivation — (filename, timestamp) → FrameKey, and folder → group.

Invariants:
    - Pure and total: any input (including None / non-str) returns a key or None
    - Folder id comes from the first "[P<digits>]" anywhere in the filename
    - Timestamp must match "<minutes>m<seconds>s" exactly (anchored)
    - Digits are ASCII only; digit runs too long to convert are a skip
    - group_index(folder_id) == (folder_id - 1) // 10

Design Decisions:
    - No match is a skip, not an error: callers decide whether to record it
"""

import re

from vvframes.core.domain_types import (
    FolderId, FrameKey, FrameSeconds, GroupIndex,
)

FOLDERS_PER_GROUP = 10

_FOLDER_TAG = re.compile(r"\[P(\d+)\]", re.ASCII)
_TIMESTAMP = re.compile(r"(\d+)m(\d+)s", re.ASCII)


def _to_int(digits: str) -> int | None:
    try:
        return int(digits, 10)
    except ValueError:
        # beyond the interpreter's int conversion limit
        return None


def parse_folder_id(filename: object) -> FolderId | None:
    """Extract the folder id from a "[P070]..." style filename."""
    if not isinstance(filename, str):
        return None
    match = _FOLDER_TAG.search(filename)
    if match is None:
        return None
    folder_id = _to_int(match.group(1))
    return None if folder_id is None else FolderId(folder_id)


def parse_timestamp(timestamp: object) -> FrameSeconds | None:
    """Convert "34m17s" to total seconds (2057)."""
    if not isinstance(timestamp, str):
        return None
    match = _TIMESTAMP.fullmatch(timestamp)
    if match is None:
        return None
    minutes = _to_int(match.group(1))
    seconds = _to_int(match.group(2))
    if minutes is None or seconds is None:
        return None
    return FrameSeconds(minutes * 60 + seconds)


def derive_frame_key(filename: object, timestamp: object) -> FrameKey | None:
    """Build a FrameKey from a search record's filename and timestamp."""
    folder_id = parse_folder_id(filename)
    frame_seconds = parse_timestamp(timestamp)
    if folder_id is None or frame_seconds is None:
        return None
    return FrameKey(folder_id=folder_id, frame_seconds=frame_seconds)


def group_index(folder_id: int) -> GroupIndex:
    """Index/archive group holding a folder (ten folders per group)."""
    return GroupIndex((folder_id - 1) // FOLDERS_PER_GROUP)
