"""Scanline blitters that copy 8-bit indexed pixels into a target buffer.

Targets are either 8 bpp (one byte per pixel) or 32 bpp (four bytes per
pixel, little-endian packed colours).  Offsets into 32 bpp targets are byte
offsets.  Blend tables hold 65536 entries; the result of blending source
component ``a`` over target component ``b`` is ``blend[(a << 8) | b]``.
Scaled blitters walk the source with a 16.16 fixed-point ``offset`` that
advances by ``dx`` per target pixel; plain blitters step the source by
``dx`` whole pixels, so a negative ``dx`` draws mirrored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Optional

from .bitmap import Palette

FIXED_BITS = 16

Blitter = Callable[..., None]


def _trunc_fixed(value: int) -> int:
    """Integer part of a fixed-point value, rounded toward zero."""
    whole = abs(value) >> FIXED_BITS
    return whole if value >= 0 else -whole


def _source_positions(
    src_offset: int, width: int, dx: int, offset: int, scaling: bool
) -> Iterator[int]:
    if scaling:
        return (src_offset + _trunc_fixed(offset + k * dx) for k in range(width))
    return (src_offset + k * dx for k in range(width))


def _blend_pixel(dst: bytearray, pos: int, color: int, blend: Sequence[int]) -> None:
    for shift, channel in ((0, pos), (8, pos + 1), (16, pos + 2)):
        component = (color >> shift) & 0xFF
        dst[channel] = blend[(component << 8) | dst[channel]]


def _make_blitter(to32: bool, key: bool, scaling: bool, use_blend: bool) -> Blitter:
    step = 4 if to32 else 1

    def blit(
        src: Sequence[int],
        src_offset: int,
        palette: Optional[Palette],
        dst: bytearray,
        dst_offset: int,
        width: int,
        dx: int,
        offset: int = 0,
        blend: Optional[Sequence[int]] = None,
    ) -> None:
        if use_blend and blend is None:
            raise ValueError("blending blitter needs a blend table")
        if to32 and palette is None:
            raise ValueError("32 bpp blitter needs a palette")
        pos = dst_offset
        for source in _source_positions(src_offset, width, dx, offset, scaling):
            value = src[source]
            if value or not key:
                if not to32:
                    dst[pos] = value
                elif use_blend:
                    _blend_pixel(dst, pos, palette.colors[value], blend)
                else:
                    dst[pos : pos + 4] = palette.colors[value].to_bytes(4, "little")
            pos += step

    blit.__name__ = "blit{}{}{}_8_{}".format(
        "Key" if key else "Fast",
        "Blend" if use_blend else "",
        "Scaling" if scaling else "",
        32 if to32 else 8,
    )
    return blit


_BLITTERS: dict[tuple[bool, bool, bool, bool], Blitter] = {
    (to32, key, scaling, use_blend): _make_blitter(to32, key, scaling, use_blend)
    for to32 in (False, True)
    for key in (False, True)
    for scaling in (False, True)
    for use_blend in (False, True)
    if to32 or not use_blend
}


def get_blitter(bpp: int, key: bool, scaling: bool, blend: bool) -> Optional[Blitter]:
    """Select a scanline blitter.

    ``bpp`` 32 selects a palette-expanding blitter, anything else an 8 bpp
    one.  There are no blending 8 bpp blitters; for those ``None`` is
    returned.
    """
    return _BLITTERS.get((bpp == 32, bool(key), bool(scaling), bool(blend)))


def blit_color(dst: bytearray, dst_offset: int, color: int, width: int) -> None:
    """Fill ``width`` 32 bpp pixels with one packed colour."""
    dst[dst_offset : dst_offset + 4 * width] = (color & 0xFFFFFFFF).to_bytes(
        4, "little"
    ) * width


def _mosaic_blocks(width: int, size: int) -> Iterator[tuple[int, int]]:
    if width > 0 and size <= 0:
        raise ValueError("mosaic size must be positive")
    done = 0
    while done < width:
        block = min(size, width - done)
        yield done, block
        done += block


def blit_mosaic_solid(
    src: Sequence[int],
    src_offset: int,
    palette: Palette,
    dst: bytearray,
    dst_offset: int,
    width: int,
    size: int,
) -> None:
    """Draw pixel blocks of ``size`` using the first source pixel of each block."""
    for start, block in _mosaic_blocks(width, size):
        value = src[src_offset + start]
        if value:
            pos = dst_offset + 4 * start
            dst[pos : pos + 4 * block] = palette.colors[value].to_bytes(4, "little") * block


def blit_mosaic_blend(
    src: Sequence[int],
    src_offset: int,
    palette: Palette,
    dst: bytearray,
    dst_offset: int,
    width: int,
    size: int,
    blend: Sequence[int],
) -> None:
    """Blending variant of :func:`blit_mosaic_solid`."""
    for start, block in _mosaic_blocks(width, size):
        value = src[src_offset + start]
        if value:
            color = palette.colors[value]
            for k in range(block):
                _blend_pixel(dst, dst_offset + 4 * (start + k), color, blend)