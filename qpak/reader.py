"""
reader.py – blocking PACK decoder.

Reads header, then directory, then each entry's data, seeking to the
absolute offsets the directory gives.  Offsets are taken relative to the
stream position at the time of the call, so an archive embedded in a larger
file can be read by positioning the stream at its first byte.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from .errors import FormatError
from .layout import HEADER_SIZE, parse_directory, parse_header
from .pak import Entry, PakArchive
from .streamio import read_exact


def read_pak(stream: BinaryIO) -> PakArchive:
    """
    Decode a complete archive from a seekable binary stream.

    Raises FormatError for a stream that is not a PACK archive and
    TruncatedStreamError if any region is cut short.  Nothing is returned
    unless the whole archive was read.
    """
    base = stream.tell()
    index_offset, index_size = parse_header(read_exact(stream, HEADER_SIZE))

    stream.seek(base + index_offset)
    records = parse_directory(read_exact(stream, index_size))

    pak = PakArchive()
    for rec in records:
        stream.seek(base + rec.offset)
        pak.append(Entry(rec.name, read_exact(stream, rec.length)))
    return pak


def load_pak(path: str | os.PathLike) -> PakArchive:
    """Read the archive stored at *path*."""
    with open(path, "rb") as fh:
        return read_pak(fh)


def is_pak(path: str | os.PathLike) -> bool:
    """Return True if *path* is a file starting with a valid PACK header."""
    path = Path(path)
    if not path.is_file():
        return False
    try:
        with path.open("rb") as fh:
            parse_header(read_exact(fh, HEADER_SIZE))
    except (FormatError, OSError):
        return False
    return True
