"""
errors.py – exception types raised by the qpak codec.

FormatError and NameTooLongError derive from ValueError (bad data),
the stream errors derive from OSError (== IOError).
"""

from __future__ import annotations


class FormatError(ValueError):
    """The bytes are not a well-formed PACK archive."""


class NameTooLongError(ValueError):
    """An entry name does not fit the 56-byte directory field."""

    def __init__(self, name: str, size: int, width: int) -> None:
        super().__init__(
            f"entry name {name!r} is {size} bytes, maximum is {width}"
        )
        self.name  = name
        self.size  = size
        self.width = width


class TruncatedStreamError(OSError):
    """Fewer bytes were available than the archive layout requires."""

    def __init__(self, message: str = "unexpected end of stream") -> None:
        super().__init__(message)


class ShortWriteError(OSError):
    """The output stream accepted fewer bytes than were written."""
