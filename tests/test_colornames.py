import pytest

from chatrender.colornames import lookup_color
from chatrender.style import Color


def test_basic_names():
    assert lookup_color("red") == Color.rgb(255, 0, 0)
    assert lookup_color("black") == Color.rgb(0, 0, 0)
    assert lookup_color("white") == Color.rgb(255, 255, 255)


def test_case_insensitive():
    assert lookup_color("AliceBlue") == Color.rgb(240, 248, 255)
    assert lookup_color("ALICEBLUE") == lookup_color("aliceblue")


@pytest.mark.parametrize(
    "first, second",
    [
        ("gray", "grey"),
        ("darkslategray", "darkslategrey"),
        ("aqua", "cyan"),
        ("fuchsia", "magenta"),
    ],
)
def test_aliases_match(first, second):
    assert lookup_color(first) == lookup_color(second)


def test_source_values():
    assert lookup_color("rebeccapurple") is None
    assert lookup_color("yellowgreen") == Color.rgb(154, 205, 50)
    assert lookup_color("darkgreen").hex == Color.DARK_GREEN.hex


@pytest.mark.parametrize("name", ["", "notacolor", "#ff0000", "red "])
def test_unknown_names(name):
    assert lookup_color(name) is None