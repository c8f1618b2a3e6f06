import json

import pytest
from PIL import Image

from retrotiles.atlas import SpriteData, load_sprite_atlas, parse_json, parse_txt_csv
from retrotiles.files import AssetLoader


def test_txt_format():
    assert parse_txt_csv("ship = 1 2 3 4\n") == [SpriteData("ship", 1, 2, 3, 4)]


def test_csv_format():
    assert parse_txt_csv("a b,5,6,7,8\nrubbish") == [
        SpriteData("a b", 5, 6, 7, 8),
        SpriteData(),
    ]


def test_json_format():
    doc = {"frames": [{"filename": "f0", "frame": {"x": 1, "y": 2, "w": 3, "h": 4}}, {}]}
    assert parse_json(json.dumps(doc)) == [SpriteData("f0", 1, 2, 3, 4), SpriteData()]
    assert parse_json("{}") is None
    assert parse_json("not json") is None


def _image(path):
    img = Image.new("P", (4, 4))
    img.putpalette([0, 0, 0, 255, 0, 0] + [0] * 762)
    img.save(path)


def test_load_prefers_json(tmp_path):
    _image(tmp_path / "s.png")
    (tmp_path / "s.json").write_text(json.dumps({"frames": [{"filename": "j"}]}))
    (tmp_path / "s.csv").write_text("c,0,0,1,1\n")
    bitmap, entries = load_sprite_atlas(AssetLoader(str(tmp_path)), "s")
    assert [e.name for e in entries] == ["j"]
    assert (bitmap.width, bitmap.height) == (4, 4)


def test_load_falls_back_to_txt(tmp_path):
    _image(tmp_path / "t.png")
    (tmp_path / "t.txt").write_text("a = 0 0 2 2\nb = 2 0 2 2\n")
    _, entries = load_sprite_atlas(AssetLoader(str(tmp_path)), "t.png")
    assert [e.name for e in entries] == ["a", "b"]


def test_missing_descriptor(tmp_path):
    _image(tmp_path / "u.png")
    with pytest.raises(FileNotFoundError):
        load_sprite_atlas(AssetLoader(str(tmp_path)), "u")