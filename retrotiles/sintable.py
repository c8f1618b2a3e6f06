"""Integer sine and cosine from 8.8 fixed-point lookup tables."""

from __future__ import annotations

import math

_SIN_TABLE = tuple(int(math.sin(c * math.pi / 180) * 256) for c in range(360))
_COS_TABLE = tuple(int(math.cos(c * math.pi / 180) * 256) for c in range(360))


def _lookup(table: tuple[int, ...], angle: int, factor: int) -> int:
    if angle < 0:
        raise ValueError("angle must not be negative")
    if angle > 359:
        angle %= 360
    return (table[angle] * factor) >> 8


def calc_sin(angle: int, factor: int) -> int:
    """``sin(angle degrees) * factor`` as an integer."""
    return _lookup(_SIN_TABLE, angle, factor)


def calc_cos(angle: int, factor: int) -> int:
    """``cos(angle degrees) * factor`` as an integer."""
    return _lookup(_COS_TABLE, angle, factor)