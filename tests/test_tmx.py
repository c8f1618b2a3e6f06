import pytest

from retrotiles.files import AssetLoader
from retrotiles.tileset import LayerType
from retrotiles.tmx import TmxInfo, TmxTileset, load_tmx, parse_tmx

MAP = """<?xml version="1.0"?>
<map width="10" height="4" tilewidth="8" tileheight="8" backgroundcolor="#102030">
 <tileset firstgid="1" source="a.tsx"/>
 <tileset firstgid="50" source="b.tsx"/>
 <layer id="3" name="Ground" width="10" height="4" parallaxx="0.5"><data encoding="csv">0</data></layer>
 <objectgroup name="Props" visible="0"><object id="1"/><object id="2"/></objectgroup>
 <imagelayer name="Sky"><image source="sky.png" width="64" height="32"/></imagelayer>
</map>"""


def test_map_header():
    info = parse_tmx(MAP)
    assert (info.width, info.height, info.tilewidth, info.tileheight) == (10, 4, 8, 8)
    assert info.bgcolor == 0xFF102030


def test_layers():
    info = parse_tmx(MAP)
    assert [l.kind for l in info.layers] == [LayerType.TILE, LayerType.OBJECT, LayerType.BITMAP]
    ground = info.layer("ground")
    assert ground.id == 3 and ground.parallaxx == 0.5 and ground.parallaxy == 1.0
    props = info.layer("Props")
    assert props.num_objects == 2 and props.visible is False
    sky = info.first_layer(LayerType.BITMAP)
    assert (sky.image, sky.width, sky.height) == ("sky.png", 64, 32)
    assert info.layer("missing") is None


def test_suitable_tileset():
    info = parse_tmx(MAP)
    assert info.suitable_tileset(10).source == "a.tsx"
    assert info.suitable_tileset(60).source == "b.tsx"
    with pytest.raises(LookupError):
        TmxInfo().suitable_tileset(1)


def test_single_tileset():
    info = TmxInfo(tilesets=[TmxTileset("x.tsx", 1)])
    assert info.suitable_tileset(99).source == "x.tsx"


def test_malformed():
    with pytest.raises(ValueError):
        parse_tmx("<map")


def test_load(tmp_path):
    (tmp_path / "m1.tmx").write_text(MAP)
    info = load_tmx(AssetLoader(str(tmp_path)), "m1.tmx")
    assert info.filename == "m1.tmx"
    assert len(info.tilesets) == 2
    with pytest.raises(FileNotFoundError):
        load_tmx(AssetLoader(str(tmp_path)), "none.tmx")