"""2D affine matrices for layer transforms and clip rectangle helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

Row = tuple[float, float, float]


@dataclass(frozen=True)
class Affine:
    """Rotation in degrees, a pivot displacement and scale factors."""

    angle: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    sx: float = 1.0
    sy: float = 1.0


@dataclass(frozen=True)
class Matrix3:
    """A 3x3 matrix acting on column vectors ``(x, y, 1)``."""

    rows: tuple[Row, Row, Row]

    @staticmethod
    def identity() -> "Matrix3":
        return Matrix3(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

    @staticmethod
    def translation(dx: float, dy: float) -> "Matrix3":
        return Matrix3(((1.0, 0.0, float(dx)), (0.0, 1.0, float(dy)), (0.0, 0.0, 1.0)))

    @staticmethod
    def rotation(angle: float) -> "Matrix3":
        """Counter-clockwise rotation by ``angle`` degrees."""
        rad = math.radians(angle)
        c, s = math.cos(rad), math.sin(rad)
        return Matrix3(((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0)))

    @staticmethod
    def scale(sx: float, sy: float) -> "Matrix3":
        return Matrix3(((float(sx), 0.0, 0.0), (0.0, float(sy), 0.0), (0.0, 0.0, 1.0)))

    def __matmul__(self, other: "Matrix3") -> "Matrix3":
        if not isinstance(other, Matrix3):
            return NotImplemented
        columns = list(zip(*other.rows))
        return Matrix3(
            tuple(
                tuple(sum(a * b for a, b in zip(row, col)) for col in columns)
                for row in self.rows
            )
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Transform the point ``(x, y)``."""
        (a, b, c), (d, e, f), _ = self.rows
        return a * x + b * y + c, d * x + e * y + f


def affine_matrix(hstart: float, vstart: float, affine: Affine) -> Matrix3:
    """Matrix mapping screen positions to layer positions.

    Points are rotated by ``-angle`` and scaled by ``1/sx``, ``1/sy`` around
    the pivot ``(hstart + dx, vstart + dy)``.
    """
    if affine.sx == 0 or affine.sy == 0:
        raise ValueError("scale factors must not be zero")
    dx = hstart + affine.dx
    dy = vstart + affine.dy
    angle = math.fmod(-affine.angle, 360.0)
    return (
        Matrix3.translation(dx, dy)
        @ Matrix3.scale(1 / affine.sx, 1 / affine.sy)
        @ Matrix3.rotation(angle)
        @ Matrix3.translation(-dx, -dy)
    )


def clip_rect(
    x1: int, y1: int, x2: int, y2: int, width: int, height: int
) -> tuple[int, int, int, int]:
    """Clip rectangle with out-of-range edges replaced by the frame edges."""
    return (
        x1 if 0 <= x1 <= width else 0,
        y1 if 0 <= y1 <= height else 0,
        x2 if 0 <= x2 <= width else width,
        y2 if 0 <= y2 <= height else height,
    )