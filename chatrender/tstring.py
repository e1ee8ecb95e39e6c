"""Strings that carry a display style for every character."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, overload

from wcwidth import wcwidth

from .style import DEFAULT_STYLE, Color, Style

_GO_SPACES = frozenset("\t\n\v\f\r \x85\xa0")
_NOT_GO_SPACES = frozenset("\x1c\x1d\x1e\x1f")


def _char_width(char: str) -> int:
    return max(wcwidth(char), 0)


def _is_space(char: str) -> bool:
    return char in _GO_SPACES or (char.isspace() and char not in _NOT_GO_SPACES)


@dataclass(frozen=True)
class Cell:
    """One character with its style."""

    char: str
    style: Style = DEFAULT_STYLE

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"a cell holds exactly one character, got {self.char!r}")

    def rune_width(self) -> int:
        """Number of terminal columns this character occupies."""
        return _char_width(self.char)

    def draw(self, screen, x: int, y: int) -> int:
        """Draw the cell at (x, y) and return how many columns it used."""
        width = self.rune_width()
        for column in range(x, x + width):
            screen.set_content(column, y, self.char, self.style)
        return width


class TString:
    """A sequence of styled cells."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Cell] = ()) -> None:
        self._cells: list[Cell] = list(cells)

    @classmethod
    def from_text(cls, text: str, style: Style | None = None) -> TString:
        style = style or DEFAULT_STYLE
        return cls(Cell(char, style) for char in text)

    @classmethod
    def colored(cls, text: str, color: Color) -> TString:
        return cls.from_text(text, DEFAULT_STYLE.foreground(color))

    @classmethod
    def join(cls, parts: Iterable[TString], separator: str = "") -> TString:
        """Join styled strings with an unstyled separator between them."""
        items = list(parts)
        if not items:
            return cls()
        first, *rest = items
        return cls(first).append_tstring(*(part.prepend(separator) for part in rest))

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    @overload
    def __getitem__(self, index: int) -> Cell: ...

    @overload
    def __getitem__(self, index: slice) -> TString: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TString(self._cells[index])
        return self._cells[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TString):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: TString) -> TString:
        if not isinstance(other, TString):
            return NotImplemented
        return TString(self._cells + other._cells)

    def __str__(self) -> str:
        return "".join(cell.char for cell in self._cells)

    def __repr__(self) -> str:
        return f"TString({str(self)!r})"

    def append(self, text: str, style: Style | None = None) -> TString:
        return self + TString.from_text(text, style)

    def append_color(self, text: str, color: Color) -> TString:
        return self + TString.colored(text, color)

    def append_tstring(self, *args: TString) -> TString:
        cells = list(self._cells)
        for part in args:
            cells.extend(part)
        return TString(cells)

    def prepend(self, text: str, style: Style | None = None) -> TString:
        return TString.from_text(text, style) + self

    def prepend_color(self, text: str, color: Color) -> TString:
        return TString.colored(text, color) + self

    def trim_space(self) -> TString:
        return self.trim(_is_space)

    def trim(self, predicate: Callable[[str], bool]) -> TString:
        return self.trim_left(predicate).trim_right(predicate)

    def trim_left(self, predicate: Callable[[str], bool]) -> TString:
        for index, cell in enumerate(self._cells):
            if not predicate(cell.char):
                return TString(self._cells[index:])
        return TString()

    def trim_right(self, predicate: Callable[[str], bool]) -> TString:
        for index in reversed(range(len(self._cells))):
            if not predicate(self._cells[index].char):
                return TString(self._cells[: index + 1])
        return TString()

    def colorize(self, start: int, length: int, color: Color) -> None:
        """Set the foreground colour of a range of cells in place."""
        self.adjust_style(start, length, lambda style: style.foreground(color))

    def adjust_style(self, start: int, length: int, fn: Callable[[Style], Style]) -> None:
        """Apply fn to the style of a range of cells in place."""
        end = start + length
        if start < 0 or end > len(self._cells):
            raise IndexError(f"range {start}:{end} outside string of length {len(self._cells)}")
        self._cells[start:end] = [replace(cell, style=fn(cell.style)) for cell in self._cells[start:end]]

    def adjust_style_full(self, fn: Callable[[Style], Style]) -> None:
        self.adjust_style(0, len(self._cells), fn)

    def draw(self, screen, x: int, y: int) -> None:
        for cell in self._cells:
            x += cell.draw(screen, x, y)

    def rune_width(self) -> int:
        return sum(cell.rune_width() for cell in self._cells)

    def truncate(self, width: int) -> TString:
        """The longest prefix that fits in the given number of columns."""
        used = 0
        for index, cell in enumerate(self._cells):
            cell_width = cell.rune_width()
            if used + cell_width > width:
                return TString(self._cells[:index])
            used += cell_width
        return TString(self._cells)

    def index(self, char: str, start: int = 0) -> int:
        """Position of the first occurrence of char at or after start, or -1."""
        if start < 0:
            raise IndexError("start must not be negative")
        for position, cell in enumerate(self._cells[start:], start):
            if cell.char == char:
                return position
        return -1

    def count(self, char: str) -> int:
        return sum(1 for cell in self._cells if cell.char == char)

    def split(self, sep: str) -> list[TString]:
        parts: list[TString] = []
        start = 0
        for position, cell in enumerate(self._cells):
            if cell.char == sep:
                parts.append(TString(self._cells[start:position]))
                start = position + 1
        parts.append(TString(self._cells[start:]))
        return parts