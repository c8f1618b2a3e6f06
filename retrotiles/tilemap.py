"""Tilemaps and loading tile layers from .tmx files."""

from __future__ import annotations

import re
import struct
import xml.etree.ElementTree as ET
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from .base64dec import b64decode
from .files import AssetLoader, split_filename
from .tileset import LayerType
from .tmx import load_tmx

_UINT = re.compile(r"\s*\+?(\d+)")


@dataclass
class Tile:
    """A map cell: 1-based tile index (0 = empty) and flag bits."""

    index: int = 0
    flags: int = 0

    @classmethod
    def from_value(cls, value: int) -> "Tile":
        return cls(value & 0xFFFF, (value >> 16) & 0xFFFF)


class Tilemap:
    """A grid of ``rows`` x ``cols`` tiles."""

    def __init__(
        self,
        rows: int,
        cols: int,
        tiles: list[Tile],
        bgcolor: int = 0,
        tileset: Any = None,
    ) -> None:
        if len(tiles) != rows * cols:
            raise ValueError("tile count does not match map size")
        self.rows = rows
        self.cols = cols
        self.tiles = tiles
        self.bgcolor = bgcolor
        self.tileset = tileset
        self.id = 0
        self.visible = True
        self.maxindex = max((tile.index for tile in tiles), default=0)

    def tile(self, row: int, col: int) -> Tile:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"cell ({row}, {col}) outside map")
        return self.tiles[row * self.cols + col]


def decode_csv(text: str, numtiles: int) -> list[int]:
    """Read up to ``numtiles`` comma separated values, zero padded."""
    values: list[int] = []
    for token in re.split(r"[,\n]", text):
        if len(values) >= numtiles:
            break
        if not token or token.startswith("\r"):
            continue
        match = _UINT.match(token)
        values.append(int(match.group(1)) & 0xFFFFFFFF if match else 0)
    return values + [0] * (numtiles - len(values))


def decode_base64(text: str, compression: Optional[str], numtiles: int) -> list[int]:
    """Decode base64 tile data, optionally zlib compressed."""
    size = numtiles * 4
    if compression in (None, ""):
        raw = b64decode(text, size)
    elif compression == "zlib":
        try:
            raw = zlib.decompress(b64decode(text, size))[:size]
        except zlib.error as exc:
            raise ValueError(f"corrupt zlib data: {exc}") from exc
    else:
        raise ValueError(f"unsupported compression {compression!r}")
    raw = raw.ljust(size, b"\0")
    return list(struct.unpack(f"<{numtiles}I", raw[:size]))


def _layer_values(root: ET.Element, name: str, numtiles: int) -> Optional[list[int]]:
    for element in root.iter():
        if element.tag.lower() != "layer":
            continue
        attrs = {k.lower(): v for k, v in element.attrib.items()}
        if attrs.get("name", "").lower() != name.lower():
            continue
        for data in element:
            if data.tag.lower() != "data":
                continue
            dattrs = {k.lower(): v.lower() for k, v in data.attrib.items()}
            encoding = dattrs.get("encoding")
            text = data.text or ""
            if encoding is None:
                return [0] * numtiles
            if encoding == "csv":
                return decode_csv(text, numtiles)
            if encoding == "base64":
                compression = dattrs.get("compression")
                if compression == "gzip":
                    return None
                return decode_base64(text, compression, numtiles)
            return None
    return None


def load_tilemap(
    loader: AssetLoader,
    filename: str,
    layername: Optional[str] = None,
    tileset_loader: Optional[Callable[[str], Any]] = None,
) -> Tilemap:
    """Load one tile layer (the first if unnamed) from a .tmx file.

    ``tileset_loader`` receives the path of the matching .tsx file.
    Raises :class:`FileNotFoundError`, :class:`LookupError` for a missing
    layer and :class:`ValueError` for unreadable data.
    """
    info = load_tmx(loader, filename)
    layer = info.layer(layername) if layername else info.first_layer(LayerType.TILE)
    if layer is None:
        raise LookupError(f"{filename}: no such layer {layername!r}")

    numtiles = layer.width * layer.height
    try:
        root = ET.fromstring(loader.load(filename))
    except ET.ParseError as exc:
        raise ValueError(f"malformed tmx: {exc}") from exc
    values = _layer_values(root, layer.name, numtiles)
    if values is None:
        raise ValueError(f"{filename}: unsupported layer data")

    tiles = [Tile.from_value(value) for value in values]
    gid = next((tile.index for tile in tiles if tile.index > 0), 0)
    tmxtileset = info.suitable_tileset(gid)
    tileset = None
    if tileset_loader is not None:
        path = split_filename(filename).path
        tileset = tileset_loader(f"{path}/{tmxtileset.source}" if path else tmxtileset.source)

    for tile in tiles:
        if tile.index > 0:
            tile.index = tile.index - tmxtileset.firstgid + 1

    tilemap = Tilemap(layer.height, layer.width, tiles, info.bgcolor, tileset)
    tilemap.id = layer.id
    tilemap.visible = layer.visible
    return tilemap