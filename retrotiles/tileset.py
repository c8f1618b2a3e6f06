"""Tilesets: fixed-size tile graphics with per-tile attributes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .bitmap import Palette


class LayerType(Enum):
    NONE = 0
    TILE = 1
    OBJECT = 2
    BITMAP = 3


class TilesetType(Enum):
    NONE = 0
    TILES = 1
    IMAGES = 2


@dataclass
class TileAttributes:
    """Game attributes attached to one tile."""

    type: int = 0
    priority: bool = False


def _shift_of(size: int) -> int:
    if size <= 0 or size & (size - 1):
        raise ValueError(f"tile size {size} is not a power of two")
    return size.bit_length() - 1


class Tileset:
    """A set of ``numtiles`` 8-bit tiles of ``width`` x ``height`` pixels.

    Tile indexes are 1-based as in tilemaps; index 0 is the empty tile.
    """

    def __init__(
        self,
        numtiles: int,
        width: int,
        height: int,
        palette: Optional[Palette] = None,
        attributes: Optional[list[TileAttributes]] = None,
    ) -> None:
        if numtiles < 0:
            raise ValueError("numtiles must not be negative")
        self.tstype = TilesetType.TILES
        self.numtiles = numtiles
        self.width = width
        self.height = height
        self.hshift = _shift_of(width)
        self.vshift = _shift_of(height)
        self.hmask = width - 1
        self.vmask = height - 1
        self.palette = palette
        if attributes is not None and len(attributes) < numtiles:
            raise ValueError("fewer attributes than tiles")
        self.attributes = attributes
        self.sp: Any = None
        self.animations: list[Any] = []
        self.tiles = list(range(numtiles + 1))
        self.data = bytearray((numtiles + 1) * width * height)

    def _offset(self, index: int, x: int, y: int) -> int:
        if not 0 <= index <= self.numtiles:
            raise IndexError(f"tile {index} out of range")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside tile")
        return (((index << self.vshift) + y) << self.hshift) + x

    def pixel(self, index: int, x: int, y: int) -> int:
        return self.data[self._offset(index, x, y)]

    def set_pixel(self, index: int, x: int, y: int, value: int) -> None:
        self.data[self._offset(index, x, y)] = value