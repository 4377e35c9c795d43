"""
pak.py – in-memory PACK archive model.

A PakArchive is an ordered list of Entry objects.  Order is the directory
order, duplicates are allowed, and lookups return the first match.  Entry
names are checked against the 56-byte directory field when assigned, so an
archive that cannot be written is never built in the first place.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Iterable, Iterator, Optional, overload

from .fixedstr import NAME_WIDTH, check_name


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

class Entry:
    """One named blob.  ``name`` uses '/' as the directory separator."""

    __slots__ = ("_name", "_data")

    def __init__(self, name: str, data: bytes | bytearray | None = b"") -> None:
        self._name = ""
        self._data = b""
        self.name = name
        self.data = data

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        check_name(value, NAME_WIDTH)
        self._name = value

    @property
    def data(self) -> bytes:
        return self._data

    @data.setter
    def data(self, value: bytes | bytearray | None) -> None:
        if value is None:
            self._data = b""
            return
        try:
            self._data = bytes(memoryview(value))
        except TypeError:
            raise TypeError(
                f"entry data must be bytes-like, not {type(value).__name__}"
            ) from None

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def extension(self) -> str:
        """Lower-cased text after the last '.' of the base name, or ''."""
        base = self._name.rpartition("/")[2]
        _, dot, ext = base.rpartition(".")
        return ext.lower() if dot else ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._name == other._name and self._data == other._data

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Entry({self._name!r}, <{self.size} bytes>)"


# ---------------------------------------------------------------------------
# Extension view
# ---------------------------------------------------------------------------

class ExtensionView:
    """
    Lazy filtered view of an archive's entries by extension.

    Each iteration scans the archive afresh, so the view can be iterated any
    number of times and reflects later changes to the archive.
    """

    def __init__(self, archive: "PakArchive", extension: str) -> None:
        self._archive = archive
        self.extension = extension.lstrip(".").lower()

    def __iter__(self) -> Iterator[Entry]:
        for entry in self._archive:
            if entry.extension == self.extension:
                yield entry

    def __repr__(self) -> str:
        return f"ExtensionView({self.extension!r})"


# ---------------------------------------------------------------------------
# Archive
# ---------------------------------------------------------------------------

class PakArchive(MutableSequence):
    """Ordered collection of Entry objects."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: list[Entry] = []
        self.extend(entries)

    @staticmethod
    def _check(value: object) -> Entry:
        if not isinstance(value, Entry):
            raise TypeError(f"PakArchive holds Entry objects, not {type(value).__name__}")
        return value

    # -- MutableSequence protocol ------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    @overload
    def __getitem__(self, index: int) -> Entry: ...
    @overload
    def __getitem__(self, index: slice) -> "PakArchive": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PakArchive(self._entries[index])
        return self._entries[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._entries[index] = [self._check(v) for v in value]
        else:
            self._entries[index] = self._check(value)

    def __delitem__(self, index) -> None:
        del self._entries[index]

    def insert(self, index: int, value: Entry) -> None:
        self._entries.insert(index, self._check(value))

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PakArchive):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PakArchive(<{len(self)} entries, {self.total_size()} bytes>)"

    # -- Queries -----------------------------------------------------------

    def add(self, name: str, data: bytes | bytearray | None = b"") -> Entry:
        """Append a new entry and return it."""
        entry = Entry(name, data)
        self._entries.append(entry)
        return entry

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def find_by_name(self, name: str) -> Optional[Entry]:
        """
        Return the first entry whose name equals *name* ignoring case, or None.
        """
        wanted = name.lower()
        for entry in self._entries:
            if entry.name.lower() == wanted:
                return entry
        return None

    def entries_by_extension(self, extension: str) -> ExtensionView:
        """Entries whose extension matches *extension* (with or without '.')."""
        return ExtensionView(self, extension)

    def total_size(self) -> int:
        return sum(e.size for e in self._entries)
