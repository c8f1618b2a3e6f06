"""Base64 decoding with the tolerant rules used for map data."""

from __future__ import annotations

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

_WHITESPACE = 64
_EQUALS = 65
_INVALID = 66


def _build_table() -> bytes:
    table = [_INVALID] * 256
    table[ord("\t")] = _WHITESPACE
    for value, char in enumerate(_ALPHABET):
        table[ord(char)] = value
    table[ord("=")] = _EQUALS
    return bytes(table)


_TABLE = _build_table()


def _check_room(produced: int, limit: int | None) -> None:
    if limit is not None and produced > limit:
        raise ValueError("decoded data exceeds the output limit")


def b64decode(data: bytes | str, limit: int | None = None) -> bytes:
    """Decode base64 text.

    Leading characters below ``'A'`` are skipped, tabs are ignored, and the
    first ``'='`` ends the data. Any other character outside the alphabet
    raises :class:`ValueError`, as does output longer than ``limit`` bytes.
    """
    if isinstance(data, str):
        data = data.encode("latin-1")

    start = 0
    while start < len(data) and data[start] < ord("A"):
        start += 1

    out = bytearray()
    buf = 1
    for byte in data[start:]:
        code = _TABLE[byte]
        if code == _WHITESPACE:
            continue
        if code == _INVALID:
            raise ValueError(f"invalid base64 character {chr(byte)!r}")
        if code == _EQUALS:
            break
        buf = (buf << 6) | code
        if buf & 0x1000000:
            _check_room(len(out) + 3, limit)
            out += bytes(((buf >> 16) & 0xFF, (buf >> 8) & 0xFF, buf & 0xFF))
            buf = 1

    if buf & 0x40000:
        _check_room(len(out) + 2, limit)
        out += bytes(((buf >> 10) & 0xFF, (buf >> 2) & 0xFF))
    elif buf & 0x1000:
        _check_room(len(out) + 1, limit)
        out.append((buf >> 4) & 0xFF)

    return bytes(out)