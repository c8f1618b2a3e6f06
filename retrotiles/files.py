"""Locating and reading asset files relative to a base load path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

MAX_PATH = 300

_SLASH = "/"
_BACKSLASH = "\\"


@dataclass(frozen=True)
class FileInfo:
    """A file name split into directory, base name and extension."""

    path: str = ""
    name: str = ""
    ext: str = ""


class AssetLoader:
    """Opens files relative to a configurable base directory."""

    def __init__(self, path: str | None = None) -> None:
        self.path = "."
        self.set_load_path(path)

    def set_load_path(self, path: str | None) -> None:
        """Set the base directory; ``None`` means the current one."""
        value = "." if path is None else path
        value = value[: MAX_PATH - 1]
        if len(value) > 1 and value[-1] in (_SLASH, _BACKSLASH):
            value = value[:-1]
        self.path = value

    def resolve(self, filename: str) -> str:
        """Full path of ``filename`` with native separators."""
        full = f"{self.path}/{filename}"[:MAX_PATH]
        if os.sep == _BACKSLASH:
            return full.replace(_SLASH, _BACKSLASH)
        return full.replace(_BACKSLASH, _SLASH)

    def open(self, filename: str) -> BinaryIO:
        """Open a file for binary reading; raises :class:`OSError` on failure."""
        return open(self.resolve(filename), "rb")

    def load(self, filename: str) -> bytes:
        """Read a whole file into memory."""
        with self.open(filename) as handle:
            return handle.read()

    def exists(self, filename: str) -> bool:
        """Whether the file can be opened."""
        try:
            with self.open(filename):
                return True
        except OSError:
            return False


def split_filename(filename: str) -> FileInfo:
    """Split a file name into path, name and extension."""
    slash = filename.rfind(_SLASH)
    if slash == -1:
        slash = filename.rfind(_BACKSLASH)
    dot = filename.rfind(".")

    if slash != -1:
        path = filename[:slash]
        start = slash + 1
    else:
        path = ""
        start = 0

    if dot != -1 and dot > start:
        return FileInfo(path, filename[start:dot], filename[dot + 1 :])
    return FileInfo(path, filename[start:], "")


def build_file_path(path: str | None, name: str, ext: str | None) -> str:
    """Join an optional directory, a name and an optional extension."""
    if path and ext:
        return f"{path}/{name}.{ext}"
    if path:
        return f"{path}/{name}"
    if ext:
        return f"{name}.{ext}"
    return name