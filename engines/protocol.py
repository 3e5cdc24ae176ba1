"""
Versioned binary framing shared by the codec file formats.

Layout, all fields unsigned and big-endian:

    magic          8 bytes   codec-specific
    version major  1 byte
    version minor  1 byte
    gradient scale 1 byte    only in versions that carry it
    box size       1 byte
    boxes wide     1 byte
    boxes high     1 byte
    record count   3 bytes
    records        record count x fixed-size record, each starting x, y

The readable versions of each codec form a closed table of ``FormatVersion``
entries keyed on (major, minor). Absent gradient stops travel as (0, 0).
"""

import logging
import struct
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from models.errors import EncodingLimitExceeded, FormatError
from models.pixels import Position
from utils.constants import GRADIENT_SCALE_MAX, GRADIENT_SCALE_STEPS

logger = logging.getLogger(__name__)

MAGIC_SIZE = 8
PREFIX = struct.Struct('>8sBB')   # magic, major, minor
GRID = struct.Struct('>BBB')      # box size, boxes wide, boxes high
COUNT_SIZE = 3

MAX_FIELD = 0xFF
MAX_RECORDS = 1 << 24


@dataclass(frozen=True)
class FormatVersion:
    """One readable revision of a file format."""

    major: int
    minor: int
    has_gradient_scale: bool = False
    packed_index: bool = False

    @property
    def tag(self) -> Tuple[int, int]:
        return (self.major, self.minor)

    def __str__(self):
        return f"{self.major}.{self.minor}"


def version_table(*versions: FormatVersion) -> Dict[Tuple[int, int], FormatVersion]:
    return {v.tag: v for v in versions}


@dataclass(frozen=True)
class Header:
    version: FormatVersion
    box_size: int
    boxes_wide: int
    boxes_high: int
    record_count: int
    gradient_scale_byte: Optional[int] = None

    @property
    def size(self) -> int:
        scale = 1 if self.version.has_gradient_scale else 0
        return PREFIX.size + scale + GRID.size + COUNT_SIZE


def check_limits(box_size: int, boxes_wide: int, boxes_high: int, record_count: int) -> None:
    """Raise EncodingLimitExceeded when the grid does not fit the header fields."""
    if box_size > MAX_FIELD:
        raise EncodingLimitExceeded(f"Box size too large to be serialised: {box_size}")
    if boxes_wide > MAX_FIELD:
        raise EncodingLimitExceeded(
            f"Image width too large to be serialised: {boxes_wide} boxes wide of size {box_size}"
        )
    if boxes_high > MAX_FIELD:
        raise EncodingLimitExceeded(
            f"Image height too large to be serialised: {boxes_high} boxes tall of size {box_size}"
        )
    if record_count >= MAX_RECORDS:
        raise EncodingLimitExceeded(
            f"Image data too large to be serialised: {record_count} records (24-bit limit)"
        )


def pack_header(magic: bytes, header: Header) -> bytes:
    check_limits(header.box_size, header.boxes_wide, header.boxes_high, header.record_count)
    version = header.version
    buf = bytearray(PREFIX.pack(magic, version.major, version.minor))
    if version.has_gradient_scale:
        buf.append(header.gradient_scale_byte)
    buf.extend(GRID.pack(header.box_size, header.boxes_wide, header.boxes_high))
    buf.extend(header.record_count.to_bytes(COUNT_SIZE, 'big'))
    return bytes(buf)


def unpack_header(
    data: bytes, magic: bytes, versions: Dict[Tuple[int, int], FormatVersion], kind: str
) -> Header:
    """Parse and validate a header. Nothing past the magic is read on a mismatch."""
    data = bytes(data[:PREFIX.size + 1 + GRID.size + COUNT_SIZE])
    if data[:MAGIC_SIZE] != magic:
        raise FormatError(f"Incorrect filetype, expecting .{kind} file (header magic mismatch)")
    if len(data) < PREFIX.size:
        raise FormatError(f"Truncated {kind} header: {len(data)} bytes")

    _, major, minor = PREFIX.unpack_from(data)
    version = versions.get((major, minor))
    if version is None:
        raise FormatError(f"Unsupported {kind} version {major}.{minor}")

    scale_size = 1 if version.has_gradient_scale else 0
    offset = PREFIX.size + scale_size
    if len(data) < offset + GRID.size + COUNT_SIZE:
        raise FormatError(f"Truncated {kind} header: {len(data)} bytes")
    scale_byte = data[PREFIX.size] if scale_size else None
    if scale_byte == 0:
        raise FormatError(f"Invalid {kind} gradient scale byte 0")

    box_size, boxes_wide, boxes_high = GRID.unpack_from(data, offset)
    offset += GRID.size
    record_count = int.from_bytes(data[offset:offset + COUNT_SIZE], 'big')
    if box_size == 0:
        raise FormatError(f"Invalid {kind} box size 0")

    logger.debug("Loaded %s file, version %s", kind, version)
    return Header(
        version=version,
        box_size=box_size,
        boxes_wide=boxes_wide,
        boxes_high=boxes_high,
        record_count=record_count,
        gradient_scale_byte=scale_byte,
    )


def unpack_records(data: bytes, header: Header, record_size: int) -> np.ndarray:
    """(record_count, record_size) uint8 view of the record section."""
    expected = header.size + header.record_count * record_size
    if len(data) != expected:
        problem = 'truncated' if len(data) < expected else 'trailing bytes in'
        raise FormatError(f"Malformed record section: {problem} file ({len(data)} bytes, expected {expected})")
    if header.record_count == 0:
        return np.zeros((0, record_size), dtype=np.uint8)

    records = np.frombuffer(data, dtype=np.uint8, count=header.record_count * record_size, offset=header.size)
    records = records.reshape(header.record_count, record_size)

    xs, ys = records[:, 0], records[:, 1]
    if int(xs.max()) >= header.boxes_wide or int(ys.max()) >= header.boxes_high:
        raise FormatError(
            f"Box coordinates outside the {header.boxes_wide}x{header.boxes_high} grid"
        )
    return records


def encode_stop(pos: Optional[Position]) -> Tuple[int, int]:
    return (0, 0) if pos is None else (pos.x, pos.y)


def decode_stop(x: int, y: int) -> Optional[Position]:
    if x == 0 and y == 0:
        return None
    return Position(int(x), int(y))


def gradient_scale_to_byte(scale: float) -> int:
    """Quantise a gradient scale in (0, max] to 1..255."""
    return max(1, int(np.floor((scale / GRADIENT_SCALE_MAX) * GRADIENT_SCALE_STEPS + 0.5)))


def byte_to_gradient_scale(value: int) -> float:
    return (value / GRADIENT_SCALE_STEPS) * GRADIENT_SCALE_MAX
