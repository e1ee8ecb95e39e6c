import pytest

from chatrender.style import DEFAULT_STYLE, Color, Screen, Style
from chatrender.tstring import Cell, TString


def test_cell_requires_single_character():
    with pytest.raises(ValueError):
        Cell("ab")
    with pytest.raises(ValueError):
        Cell("")


def test_cell_width_and_draw_wide_character():
    screen = Screen(4, 1)
    cell = Cell("日")
    assert cell.rune_width() == 2
    assert cell.draw(screen, 0, 0) == 2
    assert screen.get_content(1, 0) == ("日", DEFAULT_STYLE)
    assert Cell("a").rune_width() == 1


def test_from_text_round_trip():
    assert str(TString.from_text("hello world")) == "hello world"
    assert len(TString.from_text("hello")) == len("hello")


def test_colored_sets_foreground():
    text = TString.colored("abc", Color.GREEN)
    assert all(cell.style.fg == Color.GREEN for cell in text)


def test_append_does_not_mutate():
    base = TString.from_text("ab")
    longer = base.append("cd")
    assert str(longer) == "abcd"
    assert str(base) == "ab"


def test_append_color_and_tstring():
    result = TString.from_text("a").append_color("b", Color.RED)
    result = result.append_tstring(TString.from_text("c"), TString.from_text("d"))
    assert str(result) == "abcd"
    assert result[1].style.fg == Color.RED
    assert result[0].style == DEFAULT_STYLE


def test_prepend_styles_only_new_part():
    result = TString.from_text("tail").prepend_color("head ", Color.GREEN)
    assert str(result) == "head tail"
    assert result[0].style.fg == Color.GREEN
    assert result[len("head ")].style == DEFAULT_STYLE
    assert str(TString.from_text("b").prepend("a")) == "ab"


def test_join_round_trip_with_split():
    original = TString.from_text("one, two, three")
    parts = original.split(",")
    assert len(parts) == original.count(",") + 1
    assert str(TString.join(parts, ",")) == str(original)


def test_join_empty_and_no_separator():
    assert len(TString.join([], ", ")) == 0
    parts = [TString.from_text("x"), TString.from_text("y")]
    assert str(TString.join(parts)) == "xy"


def test_join_separator_is_unstyled():
    parts = [TString.colored("a", Color.RED), TString.colored("b", Color.RED)]
    joined = TString.join(parts, "-")
    assert joined[1].style == DEFAULT_STYLE
    assert joined[2].style.fg == Color.RED


def test_split_without_separator():
    parts = TString.from_text("abc").split("\n")
    assert [str(p) for p in parts] == ["abc"]


def test_trim_space_matches_strip():
    text = "  \t padded text \n "
    assert str(TString.from_text(text).trim_space()) == text.strip()
    assert len(TString.from_text("   ").trim_space()) == 0


def test_trim_left_and_right_with_predicate():
    text = TString.from_text("xxabcxx")
    assert str(text.trim_left(lambda c: c == "x")) == "abcxx"
    assert str(text.trim_right(lambda c: c == "x")) == "xxabc"
    assert str(text.trim(lambda c: c == "x")) == "abc"


def test_colorize_only_affects_range():
    text = TString.from_text("abcdef")
    text.colorize(2, 2, Color.YELLOW)
    colors = [cell.style.fg for cell in text]
    assert colors[2] == colors[3] == Color.YELLOW
    assert all(c == Color.DEFAULT for i, c in enumerate(colors) if i not in (2, 3))


def test_adjust_style_out_of_range():
    text = TString.from_text("abc")
    with pytest.raises(IndexError):
        text.adjust_style(2, 5, lambda s: s.bold())
    with pytest.raises(IndexError):
        text.adjust_style(-1, 1, lambda s: s.bold())


def test_adjust_style_full():
    text = TString.from_text("abc")
    text.adjust_style_full(lambda s: s.bold())
    assert all(cell.style.is_bold for cell in text)


def test_truncate_fits_width():
    text = TString.from_text("日本語abc")
    for width in range(0, 10):
        cut = text.truncate(width)
        assert cut.rune_width() <= width
        if len(cut) < len(text):
            assert cut.rune_width() + text[len(cut)].rune_width() > width
    assert text.truncate(100) == text


def test_rune_width_sums_cells():
    text = TString.from_text("a日b")
    assert text.rune_width() == sum(cell.rune_width() for cell in text)


def test_index_and_count():
    text = TString.from_text("a,b,c")
    assert text.index(",") == 1
    assert text.index(",", 2) == 3
    assert text.index("z") == -1
    assert text.count(",") == 2


def test_slicing_returns_tstring():
    text = TString.from_text("hello")
    part = text[1:3]
    assert isinstance(part, TString) and str(part) == "el"
    assert text[0] == Cell("h")


def test_draw_onto_screen():
    screen = Screen(8, 1)
    style = Style().bold()
    TString.from_text("hi", style).draw(screen, 1, 0)
    assert screen.row_text(0).startswith(" hi")
    assert screen.get_content(2, 0) == ("i", style)