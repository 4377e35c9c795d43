"""
layout.py – PACK wire format, independent of any I/O.

Archive layout
--------------
  [0x00..0x03]  magic b"PACK"
  [0x04..0x07]  index_offset  (uint32 LE)
  [0x08..0x0b]  index_size    (uint32 LE), a multiple of 64
  [0x0c..]      entry data blocks, back to back
  [index_offset..index_offset+index_size]
                directory, index_size / 64 records of
                  name        56 bytes, NUL padded
                  data_offset uint32 LE, from the start of the archive
                  data_length uint32 LE

The blocking and async drivers both go through these helpers, so the two
stay byte-for-byte consistent.
"""

from __future__ import annotations

import struct
from typing import Iterable, NamedTuple

from .errors import FormatError
from .fixedstr import NAME_WIDTH, decode_fixed, encode_fixed


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAGIC       = b"PACK"
HEADER_SIZE = 12
RECORD_SIZE = 64
UINT32_MAX  = 0xFFFFFFFF

_HEADER = struct.Struct("<4sII")
_RECORD = struct.Struct(f"<{NAME_WIDTH}sII")


class DirRecord(NamedTuple):
    """One directory record."""
    name: str
    offset: int
    length: int


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def parse_header(data: bytes | bytearray) -> tuple[int, int]:
    """
    Validate a 12-byte header and return ``(index_offset, index_size)``.

    Raises FormatError on a bad magic or a directory size that is not a whole
    number of records.
    """
    magic, index_offset, index_size = _HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise FormatError("not a valid PACK file")
    if index_size % RECORD_SIZE:
        raise FormatError(
            f"directory size {index_size} is not a multiple of {RECORD_SIZE}"
        )
    return index_offset, index_size


def parse_directory(data: bytes | bytearray) -> list[DirRecord]:
    """Split a directory blob into records, in file order."""
    if len(data) % RECORD_SIZE:
        raise FormatError(
            f"directory size {len(data)} is not a multiple of {RECORD_SIZE}"
        )
    records: list[DirRecord] = []
    for base in range(0, len(data), RECORD_SIZE):
        raw_name, offset, length = _RECORD.unpack_from(data, base)
        records.append(DirRecord(decode_fixed(raw_name), offset, length))
    return records


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def build_header(index_offset: int, index_size: int) -> bytes:
    return _HEADER.pack(MAGIC, index_offset, index_size)


def build_directory(records: Iterable[DirRecord]) -> bytes:
    """Serialise *records*; raises NameTooLongError for an oversized name."""
    out = bytearray()
    for rec in records:
        out += _RECORD.pack(encode_fixed(rec.name), rec.offset, rec.length)
    return bytes(out)


def plan_layout(entries: Iterable) -> tuple[bytes, bytes]:
    """
    Lay out *entries* (anything with ``name`` and ``size``) for writing.

    Data blocks follow the header in sequence order, so each offset is the
    running total so far.  Returns ``(header, directory)``; every name is
    encoded here, before a single byte reaches the output.
    """
    records: list[DirRecord] = []
    cursor = HEADER_SIZE
    for entry in entries:
        records.append(DirRecord(entry.name, cursor, entry.size))
        cursor += entry.size

    index_offset = cursor
    index_size   = len(records) * RECORD_SIZE
    if index_offset > UINT32_MAX or index_size > UINT32_MAX:
        raise FormatError(
            f"archive too large for 32-bit offsets ({index_offset} data bytes)"
        )

    directory = build_directory(records)
    return build_header(index_offset, index_size), directory
