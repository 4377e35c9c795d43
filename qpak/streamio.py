"""
streamio.py – exact-length transfers over byte streams.

Both variants move data in CHUNK_SIZE pieces.  The async ones await between
pieces, so a cancelled task stops at a chunk boundary.  Neither variant is
built on top of the other.
"""

from __future__ import annotations

from typing import Any, BinaryIO

from .errors import ShortWriteError, TruncatedStreamError

CHUNK_SIZE = 32 * 1024


# ---------------------------------------------------------------------------
# Blocking
# ---------------------------------------------------------------------------

def read_exact(stream: BinaryIO, count: int) -> bytes:
    """Read exactly *count* bytes from *stream* or raise TruncatedStreamError."""
    buf = bytearray()
    while len(buf) < count:
        chunk = stream.read(min(CHUNK_SIZE, count - len(buf)))
        if not chunk:
            raise TruncatedStreamError()
        buf += chunk
    return bytes(buf)


def write_all(stream: BinaryIO, data: bytes | bytearray | memoryview) -> int:
    """Write all of *data* to *stream*; returns the number of bytes written."""
    view = memoryview(data)
    done = 0
    while done < len(view):
        chunk = view[done: done + CHUNK_SIZE]
        n = stream.write(chunk)
        if not n:
            raise ShortWriteError(f"stream accepted no bytes at offset {done}")
        done += n
    return done


# ---------------------------------------------------------------------------
# Async (aiofiles file objects, or anything with coroutine read/write)
# ---------------------------------------------------------------------------

async def read_exact_async(stream: Any, count: int) -> bytes:
    """Async read_exact."""
    buf = bytearray()
    while len(buf) < count:
        chunk = await stream.read(min(CHUNK_SIZE, count - len(buf)))
        if not chunk:
            raise TruncatedStreamError()
        buf += chunk
    return bytes(buf)


async def write_all_async(stream: Any, data: bytes | bytearray | memoryview) -> int:
    """Async write_all."""
    view = memoryview(data)
    done = 0
    while done < len(view):
        chunk = bytes(view[done: done + CHUNK_SIZE])
        n = await stream.write(chunk)
        if not n:
            raise ShortWriteError(f"stream accepted no bytes at offset {done}")
        done += n
    return done
