import base64
import struct
import zlib

import pytest

from retrotiles.files import AssetLoader
from retrotiles.tilemap import Tile, Tilemap, decode_base64, decode_csv, load_tilemap


def test_decode_csv_pads_and_skips_cr():
    assert decode_csv("1,2,\r\n3", 5) == [1, 2, 3, 0, 0]
    assert decode_csv("4,5,6", 2) == [4, 5]


def test_decode_base64_plain_and_zlib():
    values = [1, 2, 0x80000003]
    raw = struct.pack("<3I", *values)
    assert decode_base64(base64.b64encode(raw).decode(), None, 3) == values
    packed = base64.b64encode(zlib.compress(raw)).decode()
    assert decode_base64(packed, "zlib", 3) == values


def test_decode_base64_gzip_rejected():
    with pytest.raises(ValueError):
        decode_base64("AAAA", "gzip", 1)


def test_tile_from_value():
    tile = Tile.from_value(0x80000005)
    assert (tile.index, tile.flags) == (5, 0x8000)


def test_tilemap_size_checked():
    with pytest.raises(ValueError):
        Tilemap(2, 2, [Tile()])


MAP = """<map width="3" height="2" tilewidth="8" tileheight="8">
 <tileset firstgid="1" source="a.tsx"/>
 <tileset firstgid="10" source="b.tsx"/>
 <layer id="7" name="Main" width="3" height="2">
  <data encoding="csv">0,10,11,
12,0,13</data>
 </layer>
</map>"""


def test_load_tilemap(tmp_path):
    sub = tmp_path / "maps"
    sub.mkdir()
    (sub / "t.tmx").write_text(MAP)
    seen = []
    tm = load_tilemap(AssetLoader(str(tmp_path)), "maps/t.tmx", None, lambda p: seen.append(p) or "TS")
    assert seen == ["maps/b.tsx"]
    assert tm.tileset == "TS"
    assert [t.index for t in tm.tiles] == [0, 1, 2, 3, 0, 4]
    assert (tm.rows, tm.cols, tm.id, tm.maxindex) == (2, 3, 7, 4)
    assert tm.tile(1, 2).index == 4


def test_missing_layer(tmp_path):
    (tmp_path / "u.tmx").write_text(MAP)
    with pytest.raises(LookupError):
        load_tilemap(AssetLoader(str(tmp_path)), "u.tmx", "nope")