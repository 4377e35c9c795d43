"""
ops.py – whole-file operations on PACK archives: extract, create, add,
remove.  These back the ``python -m qpak`` commands.
"""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator

from .errors import FormatError
from .fixedstr import NAME_WIDTH, check_name
from .pak import Entry, PakArchive
from .reader import load_pak
from .writer import save_pak


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def entry_relpath(name: str) -> PurePosixPath:
    """Map an entry name onto a relative path, refusing escapes."""
    rel = PurePosixPath(name.replace("\\", "/"))
    if not rel.parts or rel.is_absolute() or ".." in rel.parts:
        raise FormatError(f"refusing to extract unsafe entry name {name!r}")
    return rel


def name_matches(name: str, patterns: Iterable[str] | None) -> bool:
    if patterns is None:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, p.lower()) for p in patterns)


def _is_save_temp(name: str, target: str) -> bool:
    """Match the temp names save_pak and save_pak_async write next to *target*."""
    return name.endswith(".pak.tmp") or (
        name.startswith(f".{target}.") and name.endswith(".tmp")
    )


def _iter_files(source_dir: Path, skip: Path | None = None) -> Iterator[tuple[Path, str]]:
    """
    Yield (path, archive name with forward slashes) for each file under
    source_dir.  *skip* (resolved) and its temp files from an interrupted
    save are left out.
    """
    for f in sorted(source_dir.rglob("*")):
        if not f.is_file():
            continue
        if skip is not None:
            resolved = f.resolve()
            if resolved == skip:
                continue
            if resolved.parent == skip.parent and _is_save_temp(resolved.name, skip.name):
                continue
        yield f, f.relative_to(source_dir).as_posix()


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def extract_pak(
    pak_path: str | os.PathLike,
    output_dir: str | os.PathLike = ".",
    patterns: Iterable[str] | None = None,
    verbose: bool = False,
) -> list[str]:
    """
    Extract all (or glob-selected) entries of *pak_path* into *output_dir*.

    *patterns* are case-insensitive shell globs matched against the entry
    name.  When names repeat, later entries overwrite earlier files.
    Returns the list of paths written.
    """
    output_dir = Path(output_dir)
    pak = load_pak(pak_path)
    patterns = list(patterns) if patterns is not None else None

    written: list[str] = []
    for entry in pak:
        if not name_matches(entry.name, patterns):
            continue
        out_path = output_dir.joinpath(*entry_relpath(entry.name).parts)
        if verbose:
            print(f"Extracting {entry.name}")
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(entry.data)
        written.append(str(out_path))
    return written


def create_pak(
    source_dir: str | os.PathLike,
    output_path: str | os.PathLike,
    verbose: bool = False,
) -> int:
    """
    Pack every file under *source_dir* into a new archive at *output_path*.

    Returns the number of entries written.
    """
    source = Path(source_dir)
    if not source.is_dir():
        raise NotADirectoryError(f"Source is not a directory: {source}")

    # The archive being written may live inside source_dir.
    output = Path(output_path).resolve()
    files = list(_iter_files(source, skip=output))

    # Check every name before reading any data.
    for _, name in files:
        check_name(name, NAME_WIDTH)

    pak = PakArchive()
    for path, name in files:
        if verbose:
            print(f"Adding {name}")
        pak.append(Entry(name, path.read_bytes()))

    if verbose:
        print(f"Writing archive {Path(output_path).name}")
    save_pak(pak, output_path)
    return len(pak)


def add_to_pak(
    pak_path: str | os.PathLike,
    file_paths: Iterable[str | os.PathLike],
    base_dir: str | os.PathLike | None = None,
    verbose: bool = False,
) -> int:
    """
    Add or replace entries in *pak_path*, creating it if it does not exist.

    Each file is stored under its path relative to *base_dir* (or under its
    bare file name when *base_dir* is None).  A file whose name matches an
    existing entry, ignoring case, replaces the first such entry in place;
    anything else is appended.  Returns the number of files stored.
    """
    pak_path = Path(pak_path)
    pak = load_pak(pak_path) if pak_path.is_file() else PakArchive()

    added = 0
    for fp in (Path(f) for f in file_paths):
        if not fp.is_file():
            print(f"Warning: file not found: {fp}")
            continue
        if base_dir is not None:
            name = fp.resolve().relative_to(Path(base_dir).resolve()).as_posix()
        else:
            name = fp.name
        blob = fp.read_bytes()

        existing = pak.find_by_name(name)
        if existing is not None:
            if verbose:
                print(f"Replacing {existing.name}")
            existing.data = blob
        else:
            if verbose:
                print(f"Adding {name}")
            pak.add(name, blob)
        added += 1

    if not added:
        raise RuntimeError("no files to process")

    if verbose:
        print(f"Writing archive {pak_path.name}")
    save_pak(pak, pak_path)
    return added


def remove_from_pak(
    pak_path: str | os.PathLike,
    names: Iterable[str],
    verbose: bool = False,
) -> int:
    """
    Remove every entry of *pak_path* whose name matches one of *names*,
    ignoring case.  Returns the number of entries removed; the file is only
    rewritten when that is non-zero.
    """
    pak_path = Path(pak_path)
    pak = load_pak(pak_path)
    wanted = {n.lower() for n in names}

    kept = PakArchive(e for e in pak if e.name.lower() not in wanted)
    removed = len(pak) - len(kept)
    if removed == 0:
        print("No entries to remove.")
        return 0

    if not kept:
        print("Warning: all archive contents removed")

    if verbose:
        print(f"Rebuilding archive {pak_path.name}")
    save_pak(kept, pak_path)
    return removed
