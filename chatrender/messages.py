"""Chat messages as displayed in a room view, and their simple renderers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Protocol

from .entities import _string_width, _truncate, _write_line
from .style import DEFAULT_STYLE, Color, ProxyScreen, Style
from .tstring import TString
from .wrap import wrap_text

TIME_FORMAT = "%H:%M:%S"
REDACTION_CHAR = "█"
REDACTION_MAX_WIDTH = 40
REDACTION_STYLE = DEFAULT_STYLE.foreground(Color.rgb(50, 0, 0))
REPLY_BAR_CHAR = "▊"
REACTION_STYLE = DEFAULT_STYLE.background(Color.DARK_GREEN)
SELECTED_BACKGROUND = Color.DARK_GREEN


class OutgoingState(enum.Enum):
    """Delivery state of a message sent from this client."""

    DEFAULT = "default"
    LOCAL_ECHO = "local_echo"
    SEND_FAIL = "send_fail"


@dataclass
class ReactionItem:
    """A reaction key and how many times it was given."""

    key: str
    count: int = 1

    def __str__(self) -> str:
        return f"{self.count}×{self.key}"


class MessageRenderer(Protocol):
    def draw(self, screen, msg: UIMessage) -> None: ...

    def notification_content(self) -> str: ...

    def plain_text(self) -> str: ...

    def calculate_buffer(self, bare: bool, width: int, msg: UIMessage) -> None: ...

    def height(self) -> int: ...

    def clone(self) -> MessageRenderer: ...


@dataclass(eq=False)
class ExpandedTextRenderer:
    """Renders a styled string wrapped to the available width."""

    text: TString = field(default_factory=TString)
    buffer: list[TString] = field(default_factory=list)

    def clone(self) -> ExpandedTextRenderer:
        return ExpandedTextRenderer(TString(self.text))

    def notification_content(self) -> str:
        return str(self.text)

    def plain_text(self) -> str:
        return str(self.text)

    def calculate_buffer(self, bare: bool, width: int, msg: UIMessage) -> None:
        self.buffer = _calculate_buffer_with_text(bare, self.text, width, msg)

    def height(self) -> int:
        return len(self.buffer)

    def draw(self, screen, msg: UIMessage) -> None:
        for y, line in enumerate(self.buffer):
            line.draw(screen, 0, y)

    def __repr__(self) -> str:
        return f"ExpandedTextRenderer(text={str(self.text)!r})"


class RedactedRenderer:
    """Renders a redacted message as a solid bar."""

    def clone(self) -> RedactedRenderer:
        return RedactedRenderer()

    def notification_content(self) -> str:
        return ""

    def plain_text(self) -> str:
        return "[redacted]"

    def calculate_buffer(self, bare: bool, width: int, msg: UIMessage) -> None:
        """Redacted messages always take exactly one line."""

    def height(self) -> int:
        return 1

    def draw(self, screen, msg: UIMessage) -> None:
        width, _ = screen.size()
        for x in range(min(width, REDACTION_MAX_WIDTH)):
            screen.set_content(x, 0, REDACTION_CHAR, REDACTION_STYLE)

    def __repr__(self) -> str:
        return "RedactedRenderer()"


def _calculate_buffer_with_text(bare: bool, text: TString, width: int, msg: UIMessage) -> list[TString]:
    prefix = None
    if bare:
        prefix = TString.from_text(msg.format_time())
        sender = msg.sender()
        if sender:
            prefix = prefix.append_color(f" <{sender}> ", msg.sender_color())
        else:
            prefix = prefix.append(" ")
    return wrap_text(text, width, bare, prefix)


@dataclass(eq=False)
class UIMessage:
    """A message ready to be laid out and drawn in a message view."""

    event_id: str = ""
    txn_id: str = ""
    msg_type: str = ""
    sender_id: str = ""
    sender_name: str = ""
    default_sender_color: Color = Color.DEFAULT
    timestamp: datetime = field(default_factory=datetime.now)
    state: OutgoingState = OutgoingState.DEFAULT
    is_highlight: bool = False
    is_service: bool = False
    is_selected: bool = False
    edited: bool = False
    reply_to: UIMessage | None = None
    reactions: list[ReactionItem] = field(default_factory=list)
    renderer: MessageRenderer = field(default_factory=ExpandedTextRenderer)

    def __post_init__(self) -> None:
        self.reactions.sort(key=lambda item: item.key)

    def sender(self) -> str:
        """What to show as the sender: a state marker, blank for emotes, or the name."""
        if self.state is OutgoingState.LOCAL_ECHO:
            return "Sending..."
        if self.state is OutgoingState.SEND_FAIL:
            return "Error"
        if self.msg_type == "m.emote":
            return ""
        return self.sender_name

    def notification_sender_name(self) -> str:
        return self.sender_name

    def notification_content(self) -> str:
        return self.renderer.notification_content()

    def _state_color(self) -> Color:
        if self.state is OutgoingState.LOCAL_ECHO:
            return Color.GRAY
        if self.state is OutgoingState.SEND_FAIL:
            return Color.RED
        return Color.DEFAULT

    def sender_color(self) -> Color:
        state_color = self._state_color()
        if not state_color.is_default:
            return state_color
        if self.msg_type == "m.room.member":
            return self.default_sender_color
        if self.is_service:
            return Color.GRAY
        return self.default_sender_color

    def text_color(self) -> Color:
        state_color = self._state_color()
        if not state_color.is_default:
            return state_color
        if self.is_service or self.msg_type == "m.notice":
            return Color.GRAY
        if self.is_highlight:
            return Color.YELLOW
        if self.msg_type == "m.room.member":
            return Color.GREEN
        return Color.DEFAULT

    def timestamp_color(self) -> Color:
        if self.is_service:
            return Color.GRAY
        return self._state_color()

    def add_reaction(self, key: str) -> None:
        """Count one more reaction with the given key, keeping keys sorted."""
        for item in self.reactions:
            if item.key == key:
                item.count += 1
                break
        else:
            self.reactions.append(ReactionItem(key, 1))
        self.reactions.sort(key=lambda item: item.key)

    def reply_height(self) -> int:
        return 1 + self.reply_to.height() if self.reply_to is not None else 0

    def reaction_height(self) -> int:
        return 1 if self.reactions else 0

    def height(self) -> int:
        """Rows needed by the reply preview, the body and the reaction line."""
        return self.reply_height() + self.renderer.height() + self.reaction_height()

    def format_time(self) -> str:
        return self.timestamp.strftime(TIME_FORMAT)

    def format_date(self) -> str:
        ts = self.timestamp
        return f"{ts:%B} {ts.day:2d}, {ts.year}"

    def same_date(self, other: UIMessage) -> bool:
        return self.timestamp.date() == other.timestamp.date()

    def id(self) -> str:
        return self.event_id or self.txn_id

    def clone(self) -> UIMessage:
        """A copy without reply or reactions, with its own renderer."""
        return replace(self, reply_to=None, reactions=[], renderer=self.renderer.clone())

    def calculate_buffer(self, bare: bool, width: int) -> None:
        self.renderer.calculate_buffer(bare, width, self)
        if self.reply_to is not None:
            self.reply_to.calculate_buffer(bare, width - 1)

    def _draw_reply(self, screen):
        if self.reply_to is None:
            return screen
        width, height = screen.size()
        reply_height = self.reply_to.height()
        _write_line(screen, "In reply to", 1, 0, width - 1, DEFAULT_STYLE.foreground(Color.GREEN))
        _write_line(
            screen,
            self.reply_to.sender_name,
            13,
            0,
            width - 13,
            DEFAULT_STYLE.foreground(self.reply_to.sender_color()),
        )
        for y in range(1 + reply_height):
            screen.set_content(0, y, REPLY_BAR_CHAR, DEFAULT_STYLE)
        self.reply_to.draw(ProxyScreen(screen, 1, 1, width - 1, reply_height))
        return ProxyScreen(screen, 0, reply_height + 1, width, height - reply_height - 1)

    def _draw_reactions(self, screen) -> None:
        if not self.reactions:
            return
        width, height = screen.size()
        row = ProxyScreen(screen, 0, height - 1, width, 1)
        x = 0
        for item in self.reactions:
            text = _truncate(str(item), width - x)
            _write_line(row, text, x, 0, width - x, REACTION_STYLE)
            x += _string_width(text) + 1
            if x >= width:
                break

    def draw(self, screen) -> None:
        body = self._draw_reply(screen)
        self.renderer.draw(body, self)
        self._draw_reactions(body)
        if self.is_selected:
            width, height = screen.size()
            for x in range(width):
                for y in range(height):
                    char, style = screen.get_content(x, y)
                    if style.bg.is_default:
                        screen.set_content(x, y, char, style.background(SELECTED_BACKGROUND))

    def plain_text(self) -> str:
        return self.renderer.plain_text()


def service_message(text: str) -> UIMessage:
    """A message from the client itself, timestamped now."""
    return UIMessage(
        sender_id="*",
        sender_name="*",
        timestamp=datetime.now(),
        is_service=True,
        renderer=ExpandedTextRenderer(TString.from_text(text)),
    )


def date_change_message(text: str) -> UIMessage:
    """A green service message timestamped at today's midnight."""
    midnight = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    return UIMessage(
        sender_id="*",
        sender_name="*",
        timestamp=midnight,
        is_service=True,
        renderer=ExpandedTextRenderer(TString.colored(text, Color.GREEN)),
    )


__all__ = [
    "OutgoingState",
    "ReactionItem",
    "UIMessage",
    "ExpandedTextRenderer",
    "RedactedRenderer",
    "service_message",
    "date_change_message",
    "Style",
]