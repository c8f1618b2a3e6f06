import pytest

from retrotiles.bitmap import Palette, pack_rgb32
from retrotiles.blitters import (
    blit_color,
    blit_mosaic_blend,
    blit_mosaic_solid,
    get_blitter,
)

ONE = 1 << 16
SOURCE_WINS = bytes(i >> 8 for i in range(65536))
TARGET_WINS = bytes(i & 0xFF for i in range(65536))


def make_palette():
    palette = Palette(4)
    palette.set_color(1, 10, 20, 30)
    palette.set_color(2, 40, 50, 60)
    palette.set_color(3, 70, 80, 90)
    return palette


def px(palette, index):
    return palette.get_color(index).to_bytes(4, "little")


def test_no_blend_blitters_for_8bpp():
    assert get_blitter(8, False, False, True) is None
    assert get_blitter(8, True, True, True) is None


def test_fast_8_8_copies_and_mirrors():
    src = bytes([1, 2, 3])
    dst = bytearray(3)
    get_blitter(8, False, False, False)(src, 0, None, dst, 0, 3, 1)
    assert dst == src
    mirrored = bytearray(3)
    get_blitter(8, False, False, False)(src, 2, None, mirrored, 0, 3, -1)
    assert mirrored == bytes(reversed(src))


def test_key_8_8_skips_zero():
    dst = bytearray([9, 9, 9])
    get_blitter(8, True, False, False)(bytes([1, 0, 2]), 0, None, dst, 0, 3, 1)
    assert dst == bytearray([1, 9, 2])


def test_scaling_8_8_repeats_source():
    dst = bytearray(4)
    get_blitter(8, False, True, False)(bytes([1, 2]), 0, None, dst, 0, 4, ONE // 2, 0)
    assert dst == bytearray([1, 1, 2, 2])


def test_fast_8_32_expands_palette():
    palette = make_palette()
    dst = bytearray(12)
    get_blitter(32, False, False, False)(bytes([3, 1, 2]), 0, palette, dst, 0, 3, 1)
    assert dst == px(palette, 3) + px(palette, 1) + px(palette, 2)


def test_key_8_32_leaves_transparent_pixels():
    palette = make_palette()
    dst = bytearray(b"\xaa" * 8)
    get_blitter(32, True, False, False)(bytes([0, 2]), 0, palette, dst, 0, 2, 1)
    assert dst == b"\xaa" * 4 + px(palette, 2)


def test_scaling_8_32_downscale_skips_pixels():
    palette = make_palette()
    dst = bytearray(8)
    get_blitter(32, False, True, False)(bytes([1, 2, 3, 0]), 0, palette, dst, 0, 2, 2 * ONE, 0)
    assert dst == px(palette, 1) + px(palette, 3)


def test_blend_with_source_table_keeps_target_alpha():
    palette = make_palette()
    dst = bytearray(b"\x11\x22\x33\x44")
    get_blitter(32, False, False, True)(bytes([1]), 0, palette, dst, 0, 1, 1, 0, SOURCE_WINS)
    assert dst[:3] == px(palette, 1)[:3]
    assert dst[3] == 0x44


def test_blend_with_target_table_changes_nothing():
    palette = make_palette()
    original = bytes(range(8))
    dst = bytearray(original)
    get_blitter(32, True, True, True)(bytes([1, 2]), 0, palette, dst, 0, 2, ONE, 0, TARGET_WINS)
    assert dst == original


def test_blend_blitter_without_table_raises():
    with pytest.raises(ValueError):
        get_blitter(32, False, False, True)(bytes([1]), 0, make_palette(), bytearray(4), 0, 1, 1)


def test_blit_color_fills_range():
    color = pack_rgb32(1, 2, 3)
    dst = bytearray(16)
    blit_color(dst, 4, color, 2)
    assert dst[:4] == bytes(4)
    assert dst[4:12] == color.to_bytes(4, "little") * 2
    assert dst[12:] == bytes(4)


def test_mosaic_solid_uses_first_pixel_of_block():
    palette = make_palette()
    dst = bytearray(b"\xee" * 20)
    blit_mosaic_solid(bytes([1, 3, 0, 2, 2]), 0, palette, dst, 0, 5, 2)
    assert dst[:8] == px(palette, 1) * 2
    assert dst[8:16] == b"\xee" * 8
    assert dst[16:] == px(palette, 2)


def test_mosaic_blend_source_table_matches_solid_colour():
    palette = make_palette()
    dst = bytearray(12)
    blit_mosaic_blend(bytes([2, 0, 0]), 0, palette, dst, 0, 3, 3, SOURCE_WINS)
    for k in range(3):
        assert dst[4 * k : 4 * k + 3] == px(palette, 2)[:3]


def test_mosaic_rejects_zero_size():
    with pytest.raises(ValueError):
        blit_mosaic_solid(bytes([1]), 0, make_palette(), bytearray(4), 0, 1, 0)