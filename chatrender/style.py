"""Colours, cell styles and in-memory terminal screens."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union


@dataclass(frozen=True)
class Color:
    """A terminal colour: either the terminal default or an RGB value."""

    name: str = "default"
    red: int | None = None
    green: int | None = None
    blue: int | None = None

    @staticmethod
    def rgb(r: int, g: int, b: int) -> Color:
        """Build a colour from 8-bit red, green and blue components."""
        for component in (r, g, b):
            if not 0 <= component <= 255:
                raise ValueError(f"colour component out of range: {component}")
        return Color(f"#{r:02x}{g:02x}{b:02x}", r, g, b)

    @property
    def is_default(self) -> bool:
        return self.red is None

    @property
    def hex(self) -> int:
        """The colour as 0xRRGGBB, or -1 for the terminal default."""
        if self.red is None or self.green is None or self.blue is None:
            return -1
        return (self.red << 16) | (self.green << 8) | self.blue


Color.DEFAULT = Color()
Color.BLACK = Color("black", 0x00, 0x00, 0x00)
Color.WHITE = Color("white", 0xFF, 0xFF, 0xFF)
Color.RED = Color("red", 0xFF, 0x00, 0x00)
Color.GREEN = Color("green", 0x00, 0x80, 0x00)
Color.YELLOW = Color("yellow", 0xFF, 0xFF, 0x00)
Color.BLUE = Color("blue", 0x00, 0x00, 0xFF)
Color.GRAY = Color("gray", 0x80, 0x80, 0x80)
Color.DIM_GRAY = Color("dimgray", 0x69, 0x69, 0x69)
Color.DARK_GREEN = Color("darkgreen", 0x00, 0x64, 0x00)
Color.DARK_SLATE_GRAY = Color("darkslategray", 0x2F, 0x4F, 0x4F)


@dataclass(frozen=True, kw_only=True)
class Style:
    """An immutable set of display attributes for one screen cell."""

    fg: Color = Color()
    bg: Color = Color()
    is_bold: bool = False
    is_italic: bool = False
    is_underline: bool = False
    is_strikethrough: bool = False
    url: str = ""
    url_id: str = ""

    def foreground(self, color: Color) -> Style:
        return replace(self, fg=color)

    def background(self, color: Color) -> Style:
        return replace(self, bg=color)

    def bold(self, on: bool = True) -> Style:
        return replace(self, is_bold=on)

    def italic(self, on: bool = True) -> Style:
        return replace(self, is_italic=on)

    def underline(self, on: bool = True) -> Style:
        return replace(self, is_underline=on)

    def strikethrough(self, on: bool = True) -> Style:
        return replace(self, is_strikethrough=on)

    def link(self, url: str, url_id: str) -> Style:
        return replace(self, url=url, url_id=url_id)


DEFAULT_STYLE = Style()
_BLANK = (" ", DEFAULT_STYLE)


class Screen:
    """A fixed-size grid of styled characters."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("screen size must not be negative")
        self._width = width
        self._height = height
        self._rows = [[_BLANK] * width for _ in range(height)]

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        """Put a character at (x, y); positions outside the screen are ignored."""
        if self._inside(x, y):
            self._rows[y][x] = (char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        if self._inside(x, y):
            return self._rows[y][x]
        return _BLANK

    def fill(self, char: str, style: Style) -> None:
        self._rows = [[(char, style)] * self._width for _ in range(self._height)]

    def clear(self) -> None:
        self.fill(" ", DEFAULT_STYLE)

    def row_text(self, y: int) -> str:
        """The characters of one row, without styling."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} is outside the screen")
        return "".join(char for char, _ in self._rows[y])


ScreenLike = Union[Screen, "ProxyScreen"]


@dataclass(eq=False)
class ProxyScreen:
    """A rectangular window onto a parent screen."""

    parent: ScreenLike
    offset_x: int = 0
    offset_y: int = 0
    width: int = 0
    height: int = 0
    style: Style = DEFAULT_STYLE

    @property
    def x_end(self) -> int:
        return self.offset_x + self.width

    @property
    def y_end(self) -> int:
        return self.offset_y + self.height

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        if self._inside(x, y):
            self.parent.set_content(x + self.offset_x, y + self.offset_y, char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        if self._inside(x, y):
            return self.parent.get_content(x + self.offset_x, y + self.offset_y)
        return _BLANK

    def fill(self, char: str, style: Style) -> None:
        for y in range(self.height):
            for x in range(self.width):
                self.set_content(x, y, char, style)

    def clear(self) -> None:
        self.fill(" ", self.style)

    def is_in_area(self, x: int, y: int) -> bool:
        """Whether the parent coordinate (x, y) falls inside this window."""
        return self.offset_x <= x < self.x_end and self.offset_y <= y < self.y_end