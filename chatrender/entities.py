"""Renderable entities that make up a formatted message body."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Callable, Iterable

from wcwidth import wcwidth

from .style import DEFAULT_STYLE, ProxyScreen, Style

AdjustStyleFunc = Callable[[Style], Style]

_BOUNDARY = re.compile(r"[!-/:-@\[-`{-~][\t\n\f\r ]*|[\t\n\f\r ]+")
_BARE_BOUNDARY = re.compile(r"[\t\n\f\r ]+")
_SPACES = re.compile(r"[\t\n\f\r ]+")


class AdjustReason(enum.Enum):
    """Why a style adjustment is being applied."""

    NORMAL = 0
    HIDE_SPOILER = 1


@dataclass(frozen=True)
class DrawContext:
    """Options that affect how entities are laid out and drawn."""

    is_selected: bool = False
    bare_messages: bool = False


def _char_width(char: str) -> int:
    return max(wcwidth(char), 0)


def _string_width(text: str) -> int:
    return sum(_char_width(char) for char in text)


def _truncate(text: str, width: int) -> str:
    """The longest prefix of text that fits in width columns."""
    used = 0
    for index, char in enumerate(text):
        char_width = _char_width(char)
        if used + char_width > width:
            return text[:index]
        used += char_width
    return text


def _write_line(screen, text: str, x: int, y: int, max_width: int, style: Style) -> None:
    column = x
    limit = x + max_width
    for char in text:
        char_width = _char_width(char)
        if char_width == 0:
            continue
        if column + char_width > limit:
            break
        screen.set_content(column, y, char, style)
        column += char_width


def _indent_block(text: str) -> str:
    return "\n    ".join(text.rstrip("\n").split("\n"))


def trim_to_boundary(extract: str, full: str, bare: bool = False) -> tuple[str, bool]:
    """Shorten extract (a prefix of full) to end at a word boundary.

    Returns the new extract and whether it ends at a word boundary.
    Whitespace directly after the extract is pulled into it first.
    """
    if len(extract) == len(full):
        return extract, True
    spaces = _SPACES.match(full, len(extract))
    if spaces is not None:
        extract = full[: spaces.end()]
    pattern = _BARE_BOUNDARY if bare else _BOUNDARY
    last = None
    for last in pattern.finditer(extract):
        pass
    if last is not None and last.end() < len(extract):
        return extract[: last.end()], True
    return extract, bool(extract) and extract[-1] == " "


class BaseEntity:
    """An entity with a tag and style but no content of its own."""

    def __init__(
        self,
        tag: str = "",
        style: Style = DEFAULT_STYLE,
        block: bool = False,
        default_height: int = 0,
    ) -> None:
        self.tag = tag
        self.style = style
        self.block = block
        self.default_height = default_height
        self._start_x = 0
        self._height = 0
        self._prev_width = 0

    @property
    def height(self) -> int:
        """Render height computed by the last calculate_buffer call."""
        return self._height

    @property
    def start_x(self) -> int:
        """Column where this entity starts on its first line."""
        return self._start_x

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        self.style = fn(self.style)
        return self

    def is_empty(self) -> bool:
        return False

    def plain_text(self) -> str:
        return ""

    def clone(self) -> BaseEntity:
        return BaseEntity(
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
        )

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        """Prepare for rendering; returns the start column for the next entity."""
        self._height = self.default_height
        self._start_x = 0 if self.block else start_x
        return self._start_x

    def draw(self, screen, ctx: DrawContext) -> None:
        raise TypeError("a plain BaseEntity cannot be drawn")

    def _base_repr(self) -> str:
        return (
            f"BaseEntity(tag={self.tag!r}, style={self.style!r}, block={self.block}, "
            f"start_x={self._start_x}, height={self._height})"
        )

    def __repr__(self) -> str:
        return self._base_repr()


class ContainerEntity(BaseEntity):
    """An entity that lays out a list of child entities."""

    def __init__(
        self,
        tag: str = "",
        children: Iterable = (),
        *,
        style: Style = DEFAULT_STYLE,
        block: bool = False,
        default_height: int = 0,
        indent: int = 0,
    ) -> None:
        super().__init__(tag=tag, style=style, block=block, default_height=default_height)
        self.children = list(children)
        self.indent = indent

    def is_empty(self) -> bool:
        return not self.children

    def plain_text(self) -> str:
        if not self.children:
            return ""
        parts: list[str] = []
        newlined = False
        for child in self.children:
            text = child.plain_text()
            if not text.startswith("\n") and child.block and not newlined:
                parts.append("\n")
            newlined = False
            parts.append(text)
            if child.block:
                if not text.endswith("\n"):
                    parts.append("\n")
                newlined = True
        return "".join(parts).strip()

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        for child in self.children:
            child.adjust_style(fn, reason)
        self.style = fn(self.style)
        return self

    def clone(self) -> ContainerEntity:
        return ContainerEntity(
            tag=self.tag,
            children=[child.clone() for child in self.children],
            style=self.style,
            block=self.block,
            default_height=self.default_height,
            indent=self.indent,
        )

    def draw(self, screen, ctx: DrawContext) -> None:
        if not self.children:
            return
        width, _ = screen.size()
        proxy = ProxyScreen(screen, offset_x=self.indent, width=width - self.indent, style=self.style)
        prev_break = False
        for position, entity in enumerate(self.children):
            if position != 0 and entity.start_x == 0:
                proxy.offset_y += 1
            proxy.height = entity.height
            entity.draw(proxy, ctx)
            proxy.style = self.style
            proxy.offset_y += entity.height - 1
            is_break = isinstance(entity, BreakEntity)
            if prev_break and is_break:
                proxy.offset_y += 1
            prev_break = is_break

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        super().calculate_buffer(width, start_x, ctx)
        if self.children:
            self._height = 0
            child_start_x = self._start_x
            prev_break = False
            for entity in self.children:
                if entity.block or child_start_x == 0 or self._height == 0:
                    self._height += 1
                child_start_x = entity.calculate_buffer(width - self.indent, child_start_x, ctx)
                self._height += entity.height - 1
                is_break = isinstance(entity, BreakEntity)
                if prev_break and is_break:
                    self._height += 1
                prev_break = is_break
            if not self.block:
                return child_start_x
        return self._start_x

    def __repr__(self) -> str:
        head = f"ContainerEntity(base={self._base_repr()}, indent={self.indent}, children=["
        if not self.children:
            return head + "])"
        body = "".join("\n    " + _indent_block(repr(child)) for child in self.children)
        return head + body + "\n])"


class BreakEntity(BaseEntity):
    """A forced line break."""

    def __init__(self, style: Style = DEFAULT_STYLE) -> None:
        super().__init__(tag="br", style=style, block=True)

    def clone(self) -> BreakEntity:
        return BreakEntity()

    def plain_text(self) -> str:
        return "\n"

    def draw(self, screen, ctx: DrawContext) -> None:
        """Breaks draw nothing; containers handle the line change."""

    def __repr__(self) -> str:
        return "BreakEntity()"


class TextEntity(BaseEntity):
    """A run of text that wraps at word boundaries."""

    def __init__(
        self,
        text: str = "",
        *,
        tag: str = "text",
        style: Style = DEFAULT_STYLE,
        block: bool = False,
        default_height: int = 0,
    ) -> None:
        super().__init__(tag=tag, style=style, block=block, default_height=default_height)
        self.text = text
        self.buffer: list[str] = []

    def is_empty(self) -> bool:
        return not self.text

    def clone(self) -> TextEntity:
        return TextEntity(
            self.text,
            tag=self.tag,
            style=self.style,
            block=self.block,
            default_height=self.default_height,
        )

    def plain_text(self) -> str:
        return self.text

    def draw(self, screen, ctx: DrawContext) -> None:
        width, _ = screen.size()
        x = self._start_x
        for y, line in enumerate(self.buffer):
            _write_line(screen, line, x, y, width, self.style)
            x = 0

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        super().calculate_buffer(width, start_x, ctx)
        if not self.text:
            return self._start_x
        self._prev_width = width
        lines: list[str] = []
        text = self.text
        text_start_x = self._start_x
        while True:
            extract = _truncate(text, width - text_start_x)
            extract, word_wrapped = trim_to_boundary(extract, text, ctx.bare_messages)
            if not word_wrapped and text_start_x > 0:
                lines.append("")
                text_start_x = 0
                continue
            if not extract:
                # Nothing fits even on a fresh line; emit one character to make progress.
                extract = text[0]
            lines.append(extract)
            text = text[len(extract):]
            if not text:
                self.buffer = lines
                self._height = len(lines)
                if self.block:
                    return 0
                return text_start_x + _string_width(extract)
            text_start_x = 0

    def __repr__(self) -> str:
        return f"TextEntity(text={self.text!r}, base={self._base_repr()})"