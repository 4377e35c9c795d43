"""
__main__.py – CLI entry-point for the qpak package.

Usage:  python -m qpak <command> [options] <args…>

Commands
--------
list     PAK [GLOB…]          List archive contents.
extract  PAK [GLOB…]          Extract entries (all, or those matching GLOB).
create   DIR PAK              Pack a directory tree into a new archive.
add      PAK FILE…            Add/replace files in an archive.
remove   PAK NAME…            Remove entries from an archive.
lmp2png  PAK [GLOB…]          Convert picture .lmp entries to PNG.
png2lmp  PALETTE FILE…        Convert PNG files to picture .lmp.

GLOBs are matched case-insensitively against the full entry name, e.g.
  maps/*.bsp   gfx/*   *.wav
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------

def cmd_list(args: argparse.Namespace) -> int:
    from qpak.ops    import name_matches
    from qpak.reader import load_pak

    pak_path = Path(args.pak)
    try:
        pak = load_pak(pak_path)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    patterns = args.patterns or None
    shown = 0
    for entry in pak:
        if not name_matches(entry.name, patterns):
            continue
        print(f"{entry.size:>10}  {entry.name}")
        shown += 1
    if args.verbose:
        print(f"{shown} of {len(pak)} entries, {pak.total_size()} bytes")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    from qpak.ops import extract_pak

    outdir = Path(args.outdir) if args.outdir else Path(".")
    try:
        written = extract_pak(args.pak, outdir, patterns=args.patterns or None,
                              verbose=args.verbose)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if args.verbose:
        print(f"Extracted {len(written)} file(s).")
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    from qpak.ops import create_pak

    try:
        n = create_pak(args.source, args.pak, verbose=args.verbose)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Packed {n} file(s) into {args.pak}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    from qpak.ops import add_to_pak

    try:
        add_to_pak(args.pak, args.files, base_dir=args.base, verbose=args.verbose)
    except (ValueError, OSError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    from qpak.ops import remove_from_pak

    try:
        remove_from_pak(args.pak, args.names, verbose=args.verbose)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Image conversion
# ---------------------------------------------------------------------------

def cmd_lmp2png(args: argparse.Namespace) -> int:
    """Convert picture .lmp entries of an archive to PNG files."""
    from qpak.lmp    import is_picture, palette_from_pak, read_lmp
    from qpak.ops    import entry_relpath, name_matches
    from qpak.reader import load_pak

    outdir = Path(args.outdir) if args.outdir else Path(".")
    try:
        pak     = load_pak(args.pak)
        palette = palette_from_pak(pak)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    patterns = args.patterns or None
    errors = 0
    for entry in pak.entries_by_extension("lmp"):
        if not name_matches(entry.name, patterns) or not is_picture(entry.data):
            continue
        try:
            rel  = entry_relpath(entry.name).with_suffix(".png")
            dest = outdir.joinpath(*rel.parts)
            if args.verbose:
                print(f"Converting {entry.name} → {dest}")
            dest.parent.mkdir(parents=True, exist_ok=True)
            read_lmp(entry.data, palette, transparent=True).save(str(dest))
        except (ValueError, OSError) as exc:
            print(f"Error converting {entry.name}: {exc}", file=sys.stderr)
            errors += 1
    return 1 if errors else 0


def cmd_png2lmp(args: argparse.Namespace) -> int:
    """Convert PNG files to picture .lmp using a palette from a PAK or palette.lmp."""
    from PIL import Image as PILImage
    from qpak.lmp    import palette_from_pak, read_palette, write_lmp
    from qpak.reader import is_pak, load_pak

    src = Path(args.palette)
    try:
        if is_pak(src):
            palette = palette_from_pak(load_pak(src))
        else:
            palette = read_palette(src.read_bytes())
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    outdir = Path(args.outdir) if args.outdir else None
    if outdir:
        outdir.mkdir(parents=True, exist_ok=True)

    errors = 0
    for fp in (Path(f) for f in args.files):
        dest = (outdir or fp.parent) / (fp.stem + ".lmp")
        if args.verbose:
            print(f"Converting {fp.name} → {dest.name}")
        try:
            with PILImage.open(str(fp)) as img:
                dest.write_bytes(write_lmp(img, palette))
        except (ValueError, OSError) as exc:
            print(f"Error converting {fp.name}: {exc}", file=sys.stderr)
            errors += 1
    return 1 if errors else 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    # Options shared by the top-level parser and every sub-command, so
    # they may appear on either side of the command name.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true",
                        default=argparse.SUPPRESS,
                        help="Print progress messages.")
    common.add_argument("-o", "--outdir", metavar="DIR",
                        default=argparse.SUPPRESS,
                        help="Output directory (default: current directory).")

    parser = argparse.ArgumentParser(
        prog="python -m qpak",
        description="Quake PACK (.pak) archive tool.",
        parents=[common],
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    # list
    p_list = sub.add_parser("list", parents=[common], help="List archive contents.")
    p_list.add_argument("pak", metavar="PAK")
    p_list.add_argument("patterns", nargs="*", metavar="GLOB")

    # extract
    p_ext = sub.add_parser("extract", parents=[common], help="Extract entries.")
    p_ext.add_argument("pak", metavar="PAK")
    p_ext.add_argument("patterns", nargs="*", metavar="GLOB")

    # create
    p_new = sub.add_parser("create", parents=[common],
                           help="Pack a directory tree into a new archive.")
    p_new.add_argument("source", metavar="DIR")
    p_new.add_argument("pak", metavar="PAK")

    # add
    p_add = sub.add_parser("add", parents=[common], help="Add/replace files in an archive.")
    p_add.add_argument("pak", metavar="PAK")
    p_add.add_argument("files", nargs="+", metavar="FILE")
    p_add.add_argument("-b", "--base", metavar="DIR",
                       help="Store files by their path relative to DIR "
                            "(default: bare file name).")

    # remove
    p_rem = sub.add_parser("remove", parents=[common], help="Remove entries from an archive.")
    p_rem.add_argument("pak", metavar="PAK")
    p_rem.add_argument("names", nargs="+", metavar="NAME")

    # lmp2png
    p_l2p = sub.add_parser("lmp2png", parents=[common],
                           help="Convert picture .lmp entries to PNG.")
    p_l2p.add_argument("pak", metavar="PAK")
    p_l2p.add_argument("patterns", nargs="*", metavar="GLOB")

    # png2lmp
    p_p2l = sub.add_parser("png2lmp", parents=[common],
                           help="Convert PNG files to picture .lmp.")
    p_p2l.add_argument("palette", metavar="PALETTE",
                       help="A .pak holding gfx/palette.lmp, or a palette.lmp file.")
    p_p2l.add_argument("files", nargs="+", metavar="FILE")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_COMMANDS = {
    "list":    cmd_list,
    "extract": cmd_extract,
    "create":  cmd_create,
    "add":     cmd_add,
    "remove":  cmd_remove,
    "lmp2png": cmd_lmp2png,
    "png2lmp": cmd_png2lmp,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args   = parser.parse_args(argv)

    # Fill in global flags that were given nowhere
    if not hasattr(args, "verbose"):
        args.verbose = False
    if not hasattr(args, "outdir"):
        args.outdir = None

    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
