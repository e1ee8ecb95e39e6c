"""Block-level entities: rules, quotes, lists, code blocks and spoilers."""

from __future__ import annotations

from typing import Iterable

from .entities import (
    AdjustReason,
    AdjustStyleFunc,
    BaseEntity,
    ContainerEntity,
    DrawContext,
    TextEntity,
    _indent_block,
    _write_line,
)
from .style import DEFAULT_STYLE, Color, ProxyScreen, Style

HORIZONTAL_LINE_CHAR = "━"
BLOCK_QUOTE_CHAR = ">"
BULLET_CHAR = "●"
SPOILER_COLOR = Color.YELLOW


def digits(num: int) -> int:
    """Number of decimal digits in a positive number; 0 for num <= 0."""
    if num <= 0:
        return 0
    return len(str(num))


def _copy_container_state(source: ContainerEntity, target: ContainerEntity) -> None:
    target.tag = source.tag
    target.style = source.style
    target.block = source.block
    target.default_height = source.default_height
    target.indent = source.indent


class HorizontalLineEntity(BaseEntity):
    """A horizontal rule spanning the full width."""

    def __init__(self) -> None:
        super().__init__(tag="hr", block=True, default_height=1)

    def clone(self) -> HorizontalLineEntity:
        return HorizontalLineEntity()

    def draw(self, screen, ctx: DrawContext) -> None:
        width, _ = screen.size()
        for x in range(width):
            screen.set_content(x, 0, HORIZONTAL_LINE_CHAR, self.style)

    def plain_text(self) -> str:
        return HORIZONTAL_LINE_CHAR * 5

    def __repr__(self) -> str:
        return "HorizontalLineEntity()"


class BlockquoteEntity(ContainerEntity):
    """A quoted block with a marker in the left margin."""

    def __init__(self, children: Iterable = ()) -> None:
        super().__init__("blockquote", children, block=True, indent=2)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        # Only the quote's own style changes; children keep theirs.
        self.style = fn(self.style)
        return self

    def clone(self) -> BlockquoteEntity:
        copy = BlockquoteEntity(child.clone() for child in self.children)
        _copy_container_state(self, copy)
        return copy

    def draw(self, screen, ctx: DrawContext) -> None:
        super().draw(screen, ctx)
        for y in range(self.height):
            screen.set_content(0, y, BLOCK_QUOTE_CHAR, self.style)

    def plain_text(self) -> str:
        if not self.children:
            return ""
        parts: list[str] = []
        newlined = False
        for position, child in enumerate(self.children):
            if position != 0 and child.block and not newlined:
                parts.append("\n")
            newlined = False
            parts.append("\n".join(f"> {row}" for row in child.plain_text().split("\n")))
            if child.block:
                parts.append("\n")
                newlined = True
        return "".join(parts).strip()

    def __repr__(self) -> str:
        return f"BlockquoteEntity({self._base_repr()})"


class ListEntity(ContainerEntity):
    """An ordered or unordered list of items."""

    def __init__(self, ordered: bool, start: int = 1, children: Iterable = ()) -> None:
        super().__init__("ul", children, block=True, indent=2)
        self.ordered = ordered
        self.start = start
        if ordered:
            self.tag = "ol"
            self.indent += digits(start + len(self.children) - 1)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        self.style = fn(self.style)
        super().adjust_style(fn, reason)
        return self

    def clone(self) -> ListEntity:
        copy = ListEntity(self.ordered, self.start, [child.clone() for child in self.children])
        _copy_container_state(self, copy)
        return copy

    def _marker(self, position: int) -> str:
        number = self.start + position
        return f"{number}. " + " " * (self.indent - 2 - digits(number))

    def draw(self, screen, ctx: DrawContext) -> None:
        width, _ = screen.size()
        proxy = ProxyScreen(screen, offset_x=self.indent, width=width - self.indent, style=self.style)
        for position, entity in enumerate(self.children):
            proxy.height = entity.height
            if self.ordered:
                _write_line(screen, self._marker(position), 0, proxy.offset_y, self.indent, self.style)
            else:
                screen.set_content(0, proxy.offset_y, BULLET_CHAR, self.style)
            entity.draw(proxy, ctx)
            proxy.style = self.style
            proxy.offset_y += entity.height

    def plain_text(self) -> str:
        if not self.children:
            return ""
        indent = " " * self.indent
        items = []
        for position, child in enumerate(self.children):
            marker = self._marker(position) if self.ordered else f"{BULLET_CHAR} "
            rows = child.plain_text().split("\n")
            items.append(marker + ("\n" + indent).join(rows) + "\n")
        return "".join(items).strip()

    def __repr__(self) -> str:
        return f"ListEntity(ordered={self.ordered}, start={self.start}, base={self._base_repr()})"


class CodeBlockEntity(ContainerEntity):
    """A preformatted block drawn on a filled background."""

    def __init__(self, children: Iterable = (), background: Style = DEFAULT_STYLE) -> None:
        super().__init__("pre", children, block=True)
        self.background = background

    def clone(self) -> CodeBlockEntity:
        copy = CodeBlockEntity([child.clone() for child in self.children], self.background)
        _copy_container_state(self, copy)
        return copy

    def draw(self, screen, ctx: DrawContext) -> None:
        screen.fill(" ", self.background)
        super().draw(screen, ctx)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        # Code keeps its highlighting; only spoiler hiding restyles it.
        if reason is not AdjustReason.NORMAL:
            super().adjust_style(fn, reason)
        return self

    def __repr__(self) -> str:
        return "Code" + super().__repr__()


class SpoilerEntity:
    """Content that is hidden unless its message is selected."""

    def __init__(self, visible: ContainerEntity, reason: str = "") -> None:
        hidden = visible.clone()
        hidden.adjust_style(
            lambda style: style.foreground(SPOILER_COLOR).background(SPOILER_COLOR),
            AdjustReason.HIDE_SPOILER,
        )
        if reason:
            reason_entity = TextEntity(f"({reason})")
            hidden.children.insert(0, reason_entity)
            visible.children.insert(0, reason_entity)
        self.reason = reason
        self.hidden = hidden
        self.visible = visible

    @classmethod
    def _from_parts(cls, reason: str, hidden: ContainerEntity, visible: ContainerEntity) -> SpoilerEntity:
        entity = cls.__new__(cls)
        entity.reason = reason
        entity.hidden = hidden
        entity.visible = visible
        return entity

    @property
    def block(self) -> bool:
        return False

    @property
    def tag(self) -> str:
        return "span"

    @property
    def height(self) -> int:
        return self.visible.height

    @property
    def start_x(self) -> int:
        return self.visible.start_x

    def clone(self) -> SpoilerEntity:
        return SpoilerEntity._from_parts(self.reason, self.hidden.clone(), self.visible.clone())

    def draw(self, screen, ctx: DrawContext) -> None:
        if ctx.is_selected:
            self.visible.draw(screen, ctx)
        else:
            self.hidden.draw(screen, ctx)

    def adjust_style(self, fn: AdjustStyleFunc, reason: AdjustReason = AdjustReason.NORMAL):
        if reason is not AdjustReason.HIDE_SPOILER:
            self.hidden.adjust_style(
                lambda style: fn(style).foreground(SPOILER_COLOR).background(SPOILER_COLOR),
                reason,
            )
            self.visible.adjust_style(fn, reason)
        return self

    def plain_text(self) -> str:
        if self.reason:
            return f"spoiler: {self.reason}"
        return "spoiler"

    def calculate_buffer(self, width: int, start_x: int, ctx: DrawContext) -> int:
        self.hidden.calculate_buffer(width, start_x, ctx)
        return self.visible.calculate_buffer(width, start_x, ctx)

    def is_empty(self) -> bool:
        return self.visible.is_empty()

    def __repr__(self) -> str:
        return (
            f"SpoilerEntity(reason={self.reason!r}"
            f"\n    visible={_indent_block(repr(self.visible))}"
            f"\n    hidden={_indent_block(repr(self.hidden))}"
            "\n)"
        )