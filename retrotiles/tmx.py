"""Reading the general structure of Tiled .tmx map files."""

from __future__ import annotations

import copy
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional, Union

from .files import AssetLoader
from .tileset import LayerType

TMX_MAX_LAYER = 64
TMX_MAX_TILESET = 64

_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_HEX = re.compile(r"\s*(?:0[xX])?([0-9A-Fa-f]+)")


def _atoi(text: str) -> int:
    m = _INT.match(text)
    return int(m.group(1)) if m else 0


def _atof(text: str) -> float:
    m = _FLOAT.match(text)
    return float(m.group(1)) if m else 0.0


def _hex(text: str) -> int:
    m = _HEX.match(text)
    return int(m.group(1), 16) & 0xFFFFFFFF if m else 0


@dataclass
class TmxLayer:
    kind: LayerType
    name: str = ""
    image: str = ""
    width: int = 0
    height: int = 0
    num_objects: int = 0
    id: int = 0
    visible: bool = True
    locked: bool = False
    parallaxx: float = 1.0
    parallaxy: float = 1.0
    offsetx: float = 0.0
    offsety: float = 0.0
    opacity: float = 0.0
    tintcolor: int = 0


@dataclass
class TmxTileset:
    source: str = ""
    firstgid: int = 0


@dataclass
class TmxInfo:
    """Map size, tilesets and layers of a .tmx file."""

    filename: str = ""
    width: int = 0
    height: int = 0
    tilewidth: int = 0
    tileheight: int = 0
    bgcolor: int = 0
    layers: list[TmxLayer] = field(default_factory=list)
    tilesets: list[TmxTileset] = field(default_factory=list)

    def suitable_tileset(self, gid: int) -> TmxTileset:
        """Tileset whose gid range holds ``gid``; the last one otherwise."""
        if not self.tilesets:
            raise LookupError("map has no tilesets")
        for current, following in zip(self.tilesets, self.tilesets[1:]):
            if current.firstgid <= gid < following.firstgid:
                return current
        return self.tilesets[-1]

    def first_layer(self, kind: LayerType) -> Optional[TmxLayer]:
        return next((layer for layer in self.layers if layer.kind is kind), None)

    def layer(self, name: str) -> Optional[TmxLayer]:
        lowered = name.lower()
        return next((layer for layer in self.layers if layer.name.lower() == lowered), None)


_LAYER_TAGS = {
    "layer": LayerType.TILE,
    "objectgroup": LayerType.OBJECT,
    "imagelayer": LayerType.BITMAP,
}


def _layer_attr(layer: TmxLayer, attr: str, value: str) -> None:
    if attr == "name":
        layer.name = value[:63]
    elif attr == "id":
        layer.id = _atoi(value)
    elif attr == "visible":
        layer.visible = bool(_atoi(value))
    elif attr == "width":
        layer.width = _atoi(value)
    elif attr == "height":
        layer.height = _atoi(value)
    elif attr in ("parallaxx", "parallaxy", "offsetx", "offsety", "opacity"):
        setattr(layer, attr, _atof(value))
    elif attr == "tintcolor":
        layer.tintcolor = _hex(value[1:])


def _walk(element: ET.Element, info: TmxInfo, current: Optional[TmxLayer]) -> None:
    tag = element.tag.lower()
    attrs = {k.lower(): v for k, v in element.attrib.items()}

    if tag == "map":
        for key in ("width", "height", "tilewidth", "tileheight"):
            if key in attrs:
                setattr(info, key, _atoi(attrs[key]))
        if "backgroundcolor" in attrs:
            info.bgcolor = (_hex(attrs["backgroundcolor"][1:]) + 0xFF000000) & 0xFFFFFFFF
    elif tag == "tileset":
        tileset = TmxTileset()
        if "firstgid" in attrs:
            tileset.firstgid = _atoi(attrs["firstgid"])
        if "source" in attrs:
            tileset.source = attrs["source"][:63]
        if len(info.tilesets) < TMX_MAX_TILESET - 1:
            info.tilesets.append(tileset)
    elif tag in _LAYER_TAGS:
        current = TmxLayer(_LAYER_TAGS[tag])
        for attr, value in attrs.items():
            _layer_attr(current, attr, value)
    elif tag == "image" and current is not None:
        if "source" in attrs:
            current.image = attrs["source"][:63]
        if "width" in attrs:
            current.width = _atoi(attrs["width"])
        if "height" in attrs:
            current.height = _atoi(attrs["height"])

    for child in element:
        _walk(child, info, current)

    if tag == "object" and current is not None:
        current.num_objects += 1
    elif tag in _LAYER_TAGS and len(info.layers) < TMX_MAX_LAYER - 1:
        info.layers.append(current)


def parse_tmx(text: Union[str, bytes]) -> TmxInfo:
    """Parse .tmx XML; raises :class:`ValueError` if malformed."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"malformed tmx: {exc}") from exc
    info = TmxInfo()
    _walk(root, info, None)
    return info


_cache: Optional[TmxInfo] = None


def load_tmx(loader: AssetLoader, filename: str) -> TmxInfo:
    """Load a .tmx file; the most recent one is cached by name."""
    global _cache
    if _cache is not None and _cache.filename.lower() == filename.lower():
        return copy.deepcopy(_cache)
    if not loader.exists(filename):
        raise FileNotFoundError(filename)
    info = parse_tmx(loader.load(filename))
    info.filename = filename
    _cache = info
    return copy.deepcopy(info)