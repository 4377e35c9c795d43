"""
fixedstr.py – fixed-width, NUL-padded name fields.

Directory records store the entry name in a 56-byte field: the encoded name
followed by zero bytes.  A name that fills the whole field has no terminator.
Names are UTF-8 with ``surrogateescape`` so that arbitrary bytes read from a
foreign archive decode to a str that encodes back to the very same bytes.
"""

from __future__ import annotations

from .errors import NameTooLongError

NAME_WIDTH    = 56
NAME_ENCODING = "utf-8"
NAME_ERRORS   = "surrogateescape"


def name_bytes(text: str) -> bytes:
    """Return the stored (unpadded) form of *text*."""
    return text.encode(NAME_ENCODING, NAME_ERRORS)


def check_name(text: str, width: int = NAME_WIDTH) -> bytes:
    """Return the encoded *text*, raising NameTooLongError if over *width*."""
    raw = name_bytes(text)
    if len(raw) > width:
        raise NameTooLongError(text, len(raw), width)
    return raw


def encode_fixed(text: str, width: int = NAME_WIDTH) -> bytes:
    """Encode *text* into exactly *width* bytes, zero padded."""
    raw = check_name(text, width)
    return raw + b"\x00" * (width - len(raw))


def decode_fixed(data: bytes | bytearray | memoryview, width: int = NAME_WIDTH) -> str:
    """
    Decode the first *width* bytes of *data* up to the first NUL.

    Bytes after the first NUL are ignored, whatever they are.
    """
    raw = bytes(data[:width])
    nul = raw.find(b"\x00")
    if nul != -1:
        raw = raw[:nul]
    return raw.decode(NAME_ENCODING, NAME_ERRORS)
