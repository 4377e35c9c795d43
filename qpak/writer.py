"""
writer.py – blocking PACK encoder.

Writes the header, every entry's data in sequence order, then the
directory.  The header and directory are computed up front, so a name that
does not fit fails before the stream is touched.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from .layout import plan_layout
from .pak import PakArchive
from .streamio import write_all


def write_pak(pak: PakArchive, stream: BinaryIO) -> int:
    """
    Encode *pak* to *stream* (which only needs ``write``).

    Returns the number of bytes written.
    """
    header, directory = plan_layout(pak)
    written = write_all(stream, header)
    for entry in pak:
        if entry.size:
            written += write_all(stream, entry.data)
    written += write_all(stream, directory)
    return written


def encode_pak(pak: PakArchive) -> bytes:
    """Return the archive as a bytes object."""
    header, directory = plan_layout(pak)
    return header + b"".join(e.data for e in pak) + directory


def save_pak(pak: PakArchive, path: str | os.PathLike) -> int:
    """
    Write *pak* to *path* atomically (via a temp file + rename).

    On failure the temp file is removed and any existing *path* is left as
    it was.
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(suffix=".pak.tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            written = write_pak(pak, fh)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    return written
