"""Loading BMP and PNG images as 8-bit indexed bitmaps.

Pixels of 24 and 32 bpp bitmaps are kept in R, G, B(, A) byte order.
"""

from __future__ import annotations

import io
import struct
from collections.abc import Iterator
from typing import Optional

from PIL import Image

from .bitmap import Bitmap, Palette, pack_rgb32
from .files import AssetLoader

MAX_COLORS = 255
TRANSPARENT_COLOR = 0xFFFF00FF

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_FILE_HEADER_SIZE = 14
_V5_HEADER_SIZE = 124

_PNG_DEPTHS = {"P": 8, "L": 8, "LA": 16, "RGB": 24, "RGBA": 32}


def _pixels(bitmap: Bitmap, size: int) -> Iterator[tuple[int, int, memoryview]]:
    """Yield ``(y, x, view)`` for every pixel, ``view`` being its bytes."""
    for y in range(bitmap.height):
        row = bitmap.row(y)
        for x in range(bitmap.width):
            yield y, x, row[x * size : x * size + size]


class _ColorSet:
    """Ordered set of at most 255 colours, refusing more once full."""

    def __init__(self) -> None:
        self.items: dict[tuple[int, int, int], int] = {}

    def add(self, color: tuple[int, int, int]) -> bool:
        if len(self.items) == MAX_COLORS:
            return False
        self.items.setdefault(color, len(self.items))
        return True

    def palette(self) -> Palette:
        palette = Palette(len(self.items) + 1)
        palette.colors[0] = TRANSPARENT_COLOR
        for color, index in self.items.items():
            palette.colors[index + 1] = pack_rgb32(*color)
        return palette


def convert_24_to_indexed(source: Bitmap) -> Optional[Bitmap]:
    """Index a 24 bpp bitmap; ``None`` if it holds too many colours."""
    colors = _ColorSet()
    for _, _, view in _pixels(source, 3):
        if not colors.add((view[0], view[1], view[2])):
            return None

    bitmap = Bitmap(source.width, source.height, 8)
    for y, x, view in _pixels(source, 3):
        bitmap.set_pixel(x, y, colors.items[(view[0], view[1], view[2])] + 1)
    bitmap.palette = colors.palette()
    return bitmap


def convert_32_to_indexed(source: Bitmap) -> Optional[Bitmap]:
    """Index a 32 bpp bitmap, mapping alpha below 128 to index 0.

    The source's alpha channel is normalised to 0 or 255 in place.
    """
    colors = _ColorSet()
    for _, _, view in _pixels(source, 4):
        if view[3] >= 128:
            view[3] = 255
            if not colors.add((view[0], view[1], view[2])):
                return None
        else:
            view[3] = 0

    bitmap = Bitmap(source.width, source.height, 8)
    for y, x, view in _pixels(source, 4):
        if view[3]:
            bitmap.set_pixel(x, y, colors.items[(view[0], view[1], view[2])] + 1)
    bitmap.palette = colors.palette()
    return bitmap


def parse_png(data: bytes) -> Optional[Bitmap]:
    """Decode a PNG image; ``None`` if the data is not a supported PNG."""
    if not data.startswith(_PNG_SIGNATURE):
        return None
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            bpp = _PNG_DEPTHS.get(image.mode)
            if bpp is None:
                return None
            raw = image.tobytes()
            palette_data = image.getpalette() if image.mode == "P" else None
            width, height = image.size
    except (OSError, SyntaxError, ValueError):
        return None

    bitmap = Bitmap(width, height, bpp)
    row_bytes = width * bpp // 8
    for y in range(height):
        bitmap.row(y)[:row_bytes] = raw[y * row_bytes : (y + 1) * row_bytes]

    if palette_data is not None:
        entries = len(palette_data) // 3
        palette = Palette(entries)
        for index in range(entries):
            palette.set_color(index, *palette_data[3 * index : 3 * index + 3])
        bitmap.palette = palette
    return bitmap


def _swap_red_blue(bitmap: Bitmap) -> None:
    size = bitmap.bpp // 8
    span = bitmap.width * size
    for y in range(bitmap.height):
        row = bitmap.row(y)
        pixels = bytearray(row[:span])
        pixels[0::size], pixels[2::size] = pixels[2::size], pixels[0::size]
        row[:span] = pixels


def parse_bmp(data: bytes) -> Optional[Bitmap]:
    """Decode an uncompressed BMP image; ``None`` if it is not one."""
    if len(data) < _FILE_HEADER_SIZE + 4 or data[:2] != b"BM":
        return None
    offset_data = struct.unpack_from("<I", data, 10)[0]
    header_size = struct.unpack_from("<I", data, _FILE_HEADER_SIZE)[0]
    header = bytes(
        data[_FILE_HEADER_SIZE : _FILE_HEADER_SIZE + min(header_size, _V5_HEADER_SIZE)]
    ).ljust(_V5_HEADER_SIZE, b"\0")
    width, height = struct.unpack_from("<ii", header, 4)
    bit_count = struct.unpack_from("<H", header, 14)[0]
    colors_used = struct.unpack_from("<I", header, 32)[0]
    if width <= 0 or height <= 0 or bit_count == 0:
        return None

    bitmap = Bitmap(width, height, bit_count)
    for line in range(height):
        start = offset_data + line * bitmap.pitch
        chunk = data[start : start + bitmap.pitch]
        bitmap.row(height - line - 1)[: len(chunk)] = chunk

    if bit_count in (24, 32):
        _swap_red_blue(bitmap)

    if bit_count == 8:
        if colors_used == 0:
            colors_used = max(0, (offset_data - _FILE_HEADER_SIZE - header_size) // 4)
        base = _FILE_HEADER_SIZE + header_size
        palette = Palette(colors_used)
        for index in range(colors_used):
            quad = data[base + 4 * index : base + 4 * index + 4]
            if len(quad) < 4:
                break
            palette.set_color(index, quad[2], quad[1], quad[0])
        bitmap.palette = palette
    return bitmap


def load_bitmap(loader: AssetLoader, filename: str) -> Bitmap:
    """Load a PNG or BMP file as an 8 bpp indexed bitmap.

    True-colour images with up to 255 distinct colours are converted.
    Raises :class:`FileNotFoundError` when the file is missing and
    :class:`ValueError` when it cannot be turned into an 8 bpp bitmap.
    """
    if not loader.exists(filename):
        raise FileNotFoundError(filename)
    data = loader.load(filename)

    bitmap = parse_png(data)
    if bitmap is None:
        bitmap = parse_bmp(data)
    if bitmap is None:
        raise ValueError(f"{filename}: unrecognised image format")

    if bitmap.bpp == 24:
        bitmap = convert_24_to_indexed(bitmap) or bitmap
    elif bitmap.bpp == 32:
        bitmap = convert_32_to_indexed(bitmap) or bitmap

    if bitmap.bpp != 8:
        raise ValueError(f"{filename}: cannot reduce image to 8 bpp")
    return bitmap