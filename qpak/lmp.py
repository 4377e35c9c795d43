"""
lmp.py – Quake LMP picture / palette ↔ Pillow image converter.

Palette (gfx/palette.lmp)
-------------------------
  256 × 3 bytes RGB, 768 bytes total.

Picture (gfx/*.lmp)
-------------------
  [0x00..0x03]  width   (int32 LE)
  [0x04..0x07]  height  (int32 LE)
  [0x08..]      width*height palette indices, row-major

Index 255 is drawn as transparent by the game.  Other .lmp entries
(colormap.lmp, palette.lmp itself) have no picture header; is_picture()
tells them apart by checking that the header accounts for the exact size.
"""
from __future__ import annotations

import struct

from PIL import Image as PILImage

from .errors import FormatError
from .pak import PakArchive

DEFAULT_PALETTE_NAME = "gfx/palette.lmp"
PALETTE_SIZE         = 256 * 3
TRANSPARENT_INDEX    = 255

_DIMS = struct.Struct("<ii")


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

def read_palette(data: bytes) -> bytes:
    """Return the 768-byte RGB palette held in *data*."""
    if len(data) < PALETTE_SIZE:
        raise FormatError(f"palette is {len(data)} bytes, need {PALETTE_SIZE}")
    return bytes(data[:PALETTE_SIZE])


def palette_from_pak(pak: PakArchive, name: str = DEFAULT_PALETTE_NAME) -> bytes:
    """Look up *name* in *pak* and return its palette."""
    entry = pak.find_by_name(name)
    if entry is None:
        raise FormatError(f"archive has no {name}")
    return read_palette(entry.data)


# ---------------------------------------------------------------------------
# Pictures
# ---------------------------------------------------------------------------

def is_picture(data: bytes) -> bool:
    """Return True if *data* is a picture .lmp (header matches the size)."""
    if len(data) < _DIMS.size:
        return False
    width, height = _DIMS.unpack_from(data, 0)
    return width > 0 and height > 0 and _DIMS.size + width * height == len(data)


def read_lmp(data: bytes, palette: bytes, transparent: bool = False) -> PILImage.Image:
    """Decode a picture .lmp to a P-mode PIL Image."""
    if len(data) < _DIMS.size:
        raise FormatError("LMP: truncated header")
    width, height = _DIMS.unpack_from(data, 0)
    if width < 0 or height < 0:
        raise FormatError(f"LMP: bad dimensions {width}x{height}")
    n_pixels = width * height
    if len(data) < _DIMS.size + n_pixels:
        raise FormatError(
            f"LMP: {width}x{height} needs {n_pixels} pixel bytes, "
            f"have {len(data) - _DIMS.size}"
        )
    img = PILImage.frombytes("P", (width, height), bytes(data[_DIMS.size: _DIMS.size + n_pixels]))
    img.putpalette(read_palette(palette))
    if transparent:
        img.info["transparency"] = TRANSPARENT_INDEX
    return img


def write_lmp(img: PILImage.Image, palette: bytes) -> bytes:
    """
    Encode a PIL Image as a picture .lmp.

    P-mode images are taken to already use *palette*; anything else is
    quantised onto it without dithering.
    """
    w, h = img.size
    if img.mode == "P":
        indices = img.tobytes()
    else:
        pal_img = PILImage.new("P", (1, 1))
        pal_img.putpalette(read_palette(palette))
        indices = img.convert("RGB").quantize(
            palette=pal_img, dither=PILImage.Dither.NONE
        ).tobytes()
    return _DIMS.pack(w, h) + indices
