"""
aio.py – PACK decoder and encoder on non-blocking file I/O.

Works on aiofiles file objects, or on anything exposing coroutine
``read``/``seek``/``tell`` (decoding) or ``write`` (encoding).  These are
independent implementations sharing only the wire-format helpers in
``qpak.layout``; they never call into the blocking reader or writer.

Data moves in fixed-size chunks with an await between them, so cancelling
the calling task stops the transfer at a chunk boundary.  A cancelled decode
returns nothing, and a cancelled save_pak_async leaves the destination file
untouched.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from .layout import HEADER_SIZE, parse_directory, parse_header, plan_layout
from .pak import Entry, PakArchive
from .streamio import read_exact_async, write_all_async


async def read_pak_async(stream: Any) -> PakArchive:
    """Async counterpart of :func:`qpak.reader.read_pak`."""
    base = await stream.tell()
    index_offset, index_size = parse_header(
        await read_exact_async(stream, HEADER_SIZE)
    )

    await stream.seek(base + index_offset)
    records = parse_directory(await read_exact_async(stream, index_size))

    pak = PakArchive()
    for rec in records:
        await stream.seek(base + rec.offset)
        pak.append(Entry(rec.name, await read_exact_async(stream, rec.length)))
    return pak


async def load_pak_async(path: str | os.PathLike) -> PakArchive:
    """Read the archive stored at *path*."""
    async with aiofiles.open(path, "rb") as fh:
        return await read_pak_async(fh)


async def write_pak_async(pak: PakArchive, stream: Any) -> int:
    """Async counterpart of :func:`qpak.writer.write_pak`."""
    header, directory = plan_layout(pak)
    written = await write_all_async(stream, header)
    for entry in pak:
        if entry.size:
            written += await write_all_async(stream, entry.data)
    written += await write_all_async(stream, directory)
    return written


async def save_pak_async(pak: PakArchive, path: str | os.PathLike) -> int:
    """Write *pak* to *path* via a temp file in the same directory + rename."""
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        async with aiofiles.open(tmp_path, "wb") as fh:
            written = await write_pak_async(pak, fh)
        await aiofiles.os.replace(tmp_path, path)
    except BaseException:
        # CancelledError is a BaseException
        if await aiofiles.os.path.exists(tmp_path):
            await aiofiles.os.remove(tmp_path)
        raise
    return written
