"""Sprite atlas descriptors (json, csv or txt) paired with an image."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional

from .bitmap import Bitmap
from .files import AssetLoader, build_file_path, split_filename
from .loadbitmap import load_bitmap

MAX_NAME = 64

_INT = re.compile(r"\s*([+-]?\d+)")
_EQUALS = re.compile(r"\s*=")


@dataclass
class SpriteData:
    """Name and rectangle of one sprite inside the atlas image."""

    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


def _read_ints(text: str, pos: int, separator: Optional[str]) -> list[int]:
    values: list[int] = []
    while len(values) < 4:
        if values and separator:
            if not text.startswith(separator, pos):
                break
            pos += len(separator)
        match = _INT.match(text, pos)
        if not match:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def _parse_line(line: str) -> SpriteData:
    entry = SpriteData()
    if "=" in line:
        match = re.match(r"\s*(\S+)", line)
        if not match:
            return entry
        entry.name = match.group(1)
        eq = _EQUALS.match(line, match.end())
        values = _read_ints(line, eq.end(), None) if eq else []
    elif "," in line:
        match = re.match(r"[^,]{1,%d}" % MAX_NAME, line)
        if not match:
            return entry
        entry.name = match.group(0)
        pos = match.end()
        values = _read_ints(line, pos + 1, ",") if line.startswith(",", pos) else []
    else:
        return entry
    for attr, value in zip(("x", "y", "w", "h"), values):
        setattr(entry, attr, value)
    return entry


def parse_txt_csv(text: str) -> list[SpriteData]:
    """One entry per line: ``name = x y w h`` or ``name,x,y,w,h``."""
    return [_parse_line(line) for line in text.splitlines()]


def parse_json(text: str) -> Optional[list[SpriteData]]:
    """Read the ``frames`` array format; ``None`` if not applicable."""
    try:
        root = json.loads(text)
    except ValueError:
        return None
    frames = root.get("frames") if isinstance(root, dict) else None
    if not isinstance(frames, list):
        return None
    entries = []
    for item in frames:
        entry = SpriteData()
        if isinstance(item, dict):
            if isinstance(item.get("filename"), str):
                entry.name = item["filename"][:MAX_NAME]
            frame = item.get("frame")
            if isinstance(frame, dict):
                for key in ("x", "y", "w", "h"):
                    if isinstance(frame.get(key), (int, float)):
                        setattr(entry, key, int(frame[key]))
        entries.append(entry)
    return entries


def load_sprite_atlas(loader: AssetLoader, name: str) -> tuple[Bitmap, list[SpriteData]]:
    """Load an atlas image (png assumed without extension) and its descriptor.

    Descriptors are tried as json, csv, then txt; raises
    :class:`FileNotFoundError` when none is found.
    """
    info = split_filename(name)
    image = name if info.ext else build_file_path(info.path, info.name, "png")
    bitmap = load_bitmap(loader, image)

    for ext, parser in (("json", parse_json), ("csv", parse_txt_csv), ("txt", parse_txt_csv)):
        path = build_file_path(info.path, info.name, ext)
        if not loader.exists(path):
            continue
        entries = parser(loader.load(path).decode("utf-8", "replace"))
        if entries is not None:
            return bitmap, entries
    raise FileNotFoundError(f"no atlas descriptor for {name}")