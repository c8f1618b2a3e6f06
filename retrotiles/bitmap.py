"""In-memory bitmaps and colour palettes."""

from __future__ import annotations

from typing import Optional


def pack_rgb32(r: int, g: int, b: int) -> int:
    """Pack an opaque colour as a 32-bit ARGB value."""
    return 0xFF000000 | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


class Palette:
    """A fixed-size table of packed 32-bit colours."""

    def __init__(self, entries: int) -> None:
        if entries < 0:
            raise ValueError("palette size must not be negative")
        self.colors = [0] * entries

    def __len__(self) -> int:
        return len(self.colors)

    def set_color(self, index: int, r: int, g: int, b: int) -> None:
        if not 0 <= index < len(self.colors):
            raise IndexError(f"palette index {index} out of range")
        self.colors[index] = pack_rgb32(r, g, b)

    def get_color(self, index: int) -> int:
        if not 0 <= index < len(self.colors):
            raise IndexError(f"palette index {index} out of range")
        return self.colors[index]

    def clone(self) -> "Palette":
        copy = Palette(len(self.colors))
        copy.colors = list(self.colors)
        return copy


class Bitmap:
    """A raster image with rows padded to a multiple of four bytes."""

    def __init__(self, width: int, height: int, bpp: int) -> None:
        if width < 0 or height < 0 or bpp <= 0:
            raise ValueError("invalid bitmap dimensions")
        self.width = width
        self.height = height
        self.bpp = bpp
        self.pitch = (((width * bpp) >> 3) + 3) & ~0x03
        self.data = bytearray(self.pitch * height)
        self.palette: Optional[Palette] = None

    def offset(self, x: int, y: int) -> int:
        """Byte offset of column byte ``x`` in row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x}, {y}) outside bitmap")
        return y * self.pitch + x

    def row(self, y: int) -> memoryview:
        """Writable view of one scanline, ``pitch`` bytes long."""
        start = self.offset(0, y)
        return memoryview(self.data)[start : start + self.pitch]

    def _pixel_span(self, x: int, y: int) -> tuple[int, int]:
        if self.bpp % 8:
            raise ValueError(f"pixel access not supported at {self.bpp} bpp")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x}, {y}) outside bitmap")
        size = self.bpp // 8
        start = y * self.pitch + x * size
        return start, start + size

    def get_pixel(self, x: int, y: int) -> int:
        start, end = self._pixel_span(x, y)
        return int.from_bytes(self.data[start:end], "little")

    def set_pixel(self, x: int, y: int, value: int) -> None:
        start, end = self._pixel_span(x, y)
        self.data[start:end] = value.to_bytes(end - start, "little")

    def clone(self) -> "Bitmap":
        """Copy of the pixels; the palette reference is shared."""
        copy = Bitmap(self.width, self.height, self.bpp)
        copy.data[:] = self.data
        copy.palette = self.palette
        return copy