import base64

import pytest

from retrotiles.base64dec import b64decode


@pytest.mark.parametrize(
    "raw",
    [b"hello world", b"Man", b"Ma", b"M", b"tile data \x00\x01\x02\xff"],
)
def test_round_trip_with_standard_encoder(raw):
    encoded = base64.b64encode(raw)
    assert encoded[0] >= ord("A")
    assert b64decode(encoded) == raw


def test_accepts_str_input():
    encoded = base64.b64encode(b"hello world").decode("ascii")
    assert b64decode(encoded) == b"hello world"


def test_leading_characters_below_a_are_skipped():
    encoded = base64.b64encode(b"hello world")
    assert b64decode(b"\n   " + encoded) == b"hello world"


def test_tabs_are_ignored():
    encoded = base64.b64encode(b"hello world")
    with_tabs = encoded[:4] + b"\t" + encoded[4:]
    assert b64decode(with_tabs) == b"hello world"


def test_padding_ends_the_data():
    encoded = base64.b64encode(b"Ma")
    assert b64decode(encoded + b"!!!garbage") == b"Ma"


def test_newline_inside_data_is_invalid():
    encoded = base64.b64encode(b"hello world")
    with pytest.raises(ValueError):
        b64decode(encoded[:4] + b"\n" + encoded[4:])


def test_invalid_character_raises():
    with pytest.raises(ValueError):
        b64decode(b"TW!u")


def test_limit_exceeded_raises():
    encoded = base64.b64encode(b"hello world")
    with pytest.raises(ValueError):
        b64decode(encoded, limit=5)


def test_limit_exactly_met_is_accepted():
    encoded = base64.b64encode(b"hello world")
    assert b64decode(encoded, limit=len(b"hello world")) == b"hello world"


def test_empty_input_gives_empty_output():
    assert b64decode(b"") == b""