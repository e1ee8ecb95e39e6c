from datetime import datetime

import pytest

from chatrender.messages import (
    ExpandedTextRenderer,
    OutgoingState,
    ReactionItem,
    RedactedRenderer,
    UIMessage,
    date_change_message,
    service_message,
)
from chatrender.style import Color, Screen
from chatrender.tstring import TString


def _text_message(text="hello", **kwargs):
    return UIMessage(
        sender_name="alice",
        renderer=ExpandedTextRenderer(TString.from_text(text)),
        **kwargs,
    )


def test_service_message_properties():
    msg = service_message("note")
    assert msg.sender() == "*"
    assert msg.is_service
    assert msg.sender_color() == Color.GRAY
    assert msg.text_color() == Color.GRAY
    assert msg.timestamp_color() == Color.GRAY
    assert msg.plain_text() == "note"


def test_date_change_message_is_green_at_midnight():
    msg = date_change_message("day changed")
    assert msg.timestamp.hour == 0 and msg.timestamp.minute == 0
    assert all(cell.style.fg == Color.GREEN for cell in msg.renderer.text)
    assert msg.notification_content() == "day changed"


@pytest.mark.parametrize(
    "state, sender, color",
    [
        (OutgoingState.LOCAL_ECHO, "Sending...", Color.GRAY),
        (OutgoingState.SEND_FAIL, "Error", Color.RED),
    ],
)
def test_outgoing_state_overrides_sender(state, sender, color):
    msg = _text_message(state=state, default_sender_color=Color.BLUE)
    assert msg.sender() == sender
    assert msg.sender_color() == color
    assert msg.text_color() == color
    assert msg.timestamp_color() == color


def test_emote_has_blank_sender():
    msg = _text_message(msg_type="m.emote")
    assert msg.sender() == ""


def test_default_colors():
    msg = _text_message(default_sender_color=Color.BLUE)
    assert msg.sender_color() == Color.BLUE
    assert msg.text_color().is_default
    msg.is_highlight = True
    assert msg.text_color() == Color.YELLOW
    notice = _text_message(msg_type="m.notice")
    assert notice.text_color() == Color.GRAY
    member = _text_message(msg_type="m.room.member")
    assert member.text_color() == Color.GREEN


def test_add_reaction_counts_and_sorts():
    msg = _text_message()
    msg.add_reaction("b")
    msg.add_reaction("a")
    msg.add_reaction("b")
    assert [(r.key, r.count) for r in msg.reactions] == [("a", 1), ("b", 2)]


def test_reaction_item_str():
    assert str(ReactionItem("x", 3)) == "3×x"


def test_id_falls_back_to_transaction():
    assert _text_message(txn_id="txn1").id() == "txn1"
    assert _text_message(event_id="$ev", txn_id="txn1").id() == "$ev"


def test_format_time_and_date():
    msg = _text_message(timestamp=datetime(2006, 1, 2, 15, 4, 5))
    assert msg.format_time() == "15:04:05"
    assert msg.format_date() == "January  2, 2006"


def test_same_date():
    a = _text_message(timestamp=datetime(2020, 5, 1, 1, 0))
    b = _text_message(timestamp=datetime(2020, 5, 1, 23, 0))
    c = _text_message(timestamp=datetime(2020, 5, 2, 0, 0))
    assert a.same_date(b)
    assert not a.same_date(c)


def test_calculate_buffer_wraps_and_height():
    msg = _text_message("one two three four")
    msg.calculate_buffer(False, 9)
    lines = [str(line) for line in msg.renderer.buffer]
    assert "".join(lines) == "one two three four"
    assert all(len(line) <= 9 for line in lines)
    assert msg.height() == len(lines)
    msg.add_reaction("k")
    assert msg.height() == len(lines) + 1


def test_bare_buffer_has_time_and_sender_prefix():
    ts = datetime(2021, 3, 4, 5, 6, 7)
    msg = _text_message("hi", timestamp=ts)
    msg.calculate_buffer(True, 80)
    assert [str(line) for line in msg.renderer.buffer] == [msg.format_time() + " <alice> hi"]


def test_narrow_width_yields_empty_buffer():
    msg = _text_message("hi")
    msg.calculate_buffer(False, 1)
    assert msg.renderer.height() == 0


def test_draw_text_and_selection():
    msg = _text_message("hello", is_selected=True)
    msg.calculate_buffer(False, 10)
    screen = Screen(10, 1)
    msg.draw(screen)
    assert screen.row_text(0).startswith("hello")
    assert all(screen.get_content(x, 0)[1].bg == Color.DARK_GREEN for x in range(10))


def test_draw_reactions_line():
    msg = _text_message("hello")
    msg.add_reaction("a")
    msg.calculate_buffer(False, 20)
    screen = Screen(20, msg.height())
    msg.draw(screen)
    assert screen.row_text(1).startswith(str(ReactionItem("a", 1)))


def test_reply_adds_header_and_height():
    reply = _text_message("original")
    msg = _text_message("answer", reply_to=reply)
    msg.calculate_buffer(False, 30)
    assert msg.height() == 1 + reply.height() + msg.renderer.height()
    screen = Screen(30, msg.height())
    msg.draw(screen)
    assert "In reply to" in screen.row_text(0)
    assert "original" in screen.row_text(1)
    assert "answer" in screen.row_text(msg.height() - 1)


def test_clone_drops_reply_and_reactions():
    msg = _text_message("x", reply_to=_text_message("y"))
    msg.add_reaction("k")
    copy = msg.clone()
    assert copy.reply_to is None
    assert copy.reactions == []
    assert copy.renderer is not msg.renderer
    assert copy.plain_text() == msg.plain_text()


def test_redacted_renderer():
    msg = UIMessage(renderer=RedactedRenderer())
    msg.calculate_buffer(False, 50)
    assert msg.height() == 1
    assert msg.plain_text() == "[redacted]"
    assert msg.notification_content() == ""
    screen = Screen(50, 1)
    msg.draw(screen)
    assert screen.row_text(0) == "█" * 40 + " " * 10


def test_redacted_renderer_narrow_screen():
    renderer = RedactedRenderer()
    screen = Screen(5, 1)
    renderer.draw(screen, UIMessage(renderer=renderer))
    assert screen.row_text(0) == "█" * 5
    assert isinstance(renderer.clone(), RedactedRenderer)