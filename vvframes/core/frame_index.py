"""Frame Index Decoder & Locator — binary search of a group's sorted .index file.

Layout (all fields little-endian):

    offset 0   uint32 grid_width
    offset 4   uint32 grid_height
    offset 8   uint32 folder_count
    offset 12  folder_count * 4 bytes   (reserved, opaque)
    ...        uint32 file_count
    ...        file_count * FrameRecord (uint32 folder, uint32 frame, uint64 offset)

Invariants:
    - Pure: no IO, operates on an in-memory buffer
    - Records ascend strictly by (folder, frame); only probed records are decoded
    - A hit at record i spans [offset[i], offset[i + 1]); the last record is open-ended
    - Offsets are decoded as uint64 into Python int (no precision loss)
    - A buffer shorter than its declared layout raises IndexFormatError

Design Decisions:
    - Duplicate keys are not detected; the first record the search probes wins
    - grid_width / grid_height are decoded and carried but not interpreted
"""

import struct
from dataclasses import dataclass

from vvframes.core.errors import IndexFormatError

_HEADER = struct.Struct("<III")
_WORD = struct.Struct("<I")
_RECORD = struct.Struct("<IIQ")

HEADER_SIZE = _HEADER.size          # 12
RESERVED_WORD_SIZE = _WORD.size     # 4
RECORD_SIZE = _RECORD.size          # 16


@dataclass(frozen=True)
class IndexHeader:
    grid_width: int
    grid_height: int
    folder_count: int


@dataclass(frozen=True)
class FrameRecord:
    folder: int
    frame: int
    offset: int


@dataclass(frozen=True)
class ByteRange:
    """Half-open span [start, end) inside a packed archive; end None = to EOF."""
    start: int
    end: int | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None


class RecordTable:
    """Random access over the fixed-size record table of an index buffer."""

    def __init__(self, buf: bytes | bytearray | memoryview, start: int, count: int):
        needed = start + count * RECORD_SIZE
        if len(buf) < needed:
            raise IndexFormatError(
                f"{count} records need {needed} bytes, buffer has {len(buf)}",
            )
        self._buf = buf
        self._start = start
        self._count = count

    def __len__(self) -> int:
        return self._count

    def record_at(self, i: int) -> FrameRecord:
        folder, frame, offset = _RECORD.unpack_from(
            self._buf, self._start + i * RECORD_SIZE,
        )
        return FrameRecord(folder=folder, frame=frame, offset=offset)

    def offset_at(self, i: int) -> int:
        return self.record_at(i).offset


def decode_index(buf: bytes | bytearray | memoryview) -> tuple[IndexHeader, RecordTable]:
    """Decode header + file count and return a table over the records."""
    if len(buf) < HEADER_SIZE:
        raise IndexFormatError(
            f"header needs {HEADER_SIZE} bytes, buffer has {len(buf)}",
        )
    header = IndexHeader(*_HEADER.unpack_from(buf, 0))

    pos = HEADER_SIZE + header.folder_count * RESERVED_WORD_SIZE
    if len(buf) < pos + _WORD.size:
        raise IndexFormatError(
            f"file count at byte {pos} lies past end of buffer ({len(buf)} bytes)",
        )
    (file_count,) = _WORD.unpack_from(buf, pos)
    pos += _WORD.size

    return header, RecordTable(buf, pos, file_count)


def find_record(table: RecordTable, folder_id: int, frame_num: int) -> int | None:
    """Binary search for (folder_id, frame_num); returns the record position."""
    target = (folder_id, frame_num)
    left, right = 0, len(table) - 1
    while left <= right:
        mid = (left + right) // 2
        record = table.record_at(mid)
        current = (record.folder, record.frame)
        if current == target:
            return mid
        if current < target:
            left = mid + 1
        else:
            right = mid - 1
    return None


def locate_frame(
    buf: bytes | bytearray | memoryview, folder_id: int, frame_num: int,
) -> ByteRange | None:
    """Resolve a frame key to its byte range in the group's archive."""
    _, table = decode_index(buf)
    mid = find_record(table, folder_id, frame_num)
    if mid is None:
        return None
    start = table.offset_at(mid)
    if mid < len(table) - 1:
        return ByteRange(start=start, end=table.offset_at(mid + 1))
    return ByteRange(start=start)


def range_header_value(byte_range: ByteRange) -> str:
    """HTTP Range header value: "bytes=start-(end-1)" or "bytes=start-"."""
    if byte_range.end is None:
        return f"bytes={byte_range.start}-"
    return f"bytes={byte_range.start}-{byte_range.end - 1}"
