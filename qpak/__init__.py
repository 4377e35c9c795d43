"""
qpak – Python implementation of the Quake PACK (.pak) archive format.

Public API re-exports:

  from qpak.pak     import Entry, PakArchive
  from qpak.reader  import read_pak, load_pak, is_pak
  from qpak.writer  import write_pak, encode_pak, save_pak
  from qpak.aio     import (read_pak_async, load_pak_async,
                            write_pak_async, save_pak_async)
  from qpak.ops     import extract_pak, create_pak, add_to_pak, remove_from_pak
  from qpak.errors  import (FormatError, NameTooLongError,
                            TruncatedStreamError, ShortWriteError)
"""

from .errors   import FormatError, NameTooLongError, ShortWriteError, TruncatedStreamError
from .fixedstr import NAME_WIDTH, decode_fixed, encode_fixed
from .pak      import Entry, PakArchive
from .reader   import is_pak, load_pak, read_pak
from .writer   import encode_pak, save_pak, write_pak
from .aio      import load_pak_async, read_pak_async, save_pak_async, write_pak_async
from .ops      import add_to_pak, create_pak, extract_pak, remove_from_pak

__all__ = [
    "FormatError",
    "NameTooLongError",
    "ShortWriteError",
    "TruncatedStreamError",
    "NAME_WIDTH",
    "decode_fixed",
    "encode_fixed",
    "Entry",
    "PakArchive",
    "is_pak",
    "load_pak",
    "read_pak",
    "encode_pak",
    "save_pak",
    "write_pak",
    "load_pak_async",
    "read_pak_async",
    "save_pak_async",
    "write_pak_async",
    "add_to_pak",
    "create_pak",
    "extract_pak",
    "remove_from_pak",
]
