# chatrender

`chatrender` lays out chat messages for a character-cell terminal. It holds
styled text, wraps it to a given width, arranges trees of message entities
(text, quotes, lists, code blocks, spoilers) and draws them onto an
in-memory screen.

## Installation

```
pip install chatrender
```

## What it offers

- `chatrender.style` – `Color` (with `Color.rgb` and named constants such as
  `Color.GREEN`), an immutable `Style`, an in-memory `Screen` with
  `row_text`, and a `ProxyScreen` window onto a parent screen.
- `chatrender.tstring` – `Cell` and `TString`, a string whose every character
  carries its own style, with appending, prepending, joining, trimming,
  splitting, colouring ranges in place and width-aware truncation.
- `chatrender.wrap` – `wrap_text` splits a `TString` into lines no wider than
  a given width, breaking at whitespace and punctuation (whitespace only in
  bare mode); `match_boundary` cuts a piece at its last boundary.
- `chatrender.entities` – `BaseEntity`, `ContainerEntity`, `BreakEntity` and
  `TextEntity`, with `DrawContext` and `AdjustReason`. Each entity has
  `calculate_buffer(width, start_x, ctx)`, `draw(screen, ctx)`,
  `plain_text()`, `adjust_style(fn, reason)` and `clone()`.
- `chatrender.blocks` – `HorizontalLineEntity`, `BlockquoteEntity`,
  `ListEntity` (ordered or bulleted), `CodeBlockEntity` and `SpoilerEntity`
  (hidden unless the message is selected), plus `digits`.
- `chatrender.messages` – `UIMessage` with sender, text and timestamp
  colours, outgoing state (`OutgoingState`), reply previews and sorted
  reactions (`ReactionItem`); the renderers `ExpandedTextRenderer` and
  `RedactedRenderer`; and `service_message` and `date_change_message`.
- `chatrender.colornames` – `lookup_color` turns a web colour name such as
  `"CornflowerBlue"` into a `Color`, or returns `None`.

## Examples

Wrapping styled text:

```python
from chatrender.style import Color, Screen
from chatrender.tstring import TString
from chatrender.wrap import wrap_text

text = TString.colored("Hello there, this is a fairly long line.", Color.rgb(0, 128, 0))
lines = wrap_text(text, 16)

screen = Screen(16, len(lines))
for y, line in enumerate(lines):
    line.draw(screen, 0, y)
print("\n".join(screen.row_text(y) for y in range(len(lines))))
```

Laying out an entity tree:

```python
from chatrender.blocks import ListEntity
from chatrender.entities import ContainerEntity, DrawContext, TextEntity
from chatrender.style import Screen

root = ContainerEntity("html", [
    ContainerEntity("p", [TextEntity("Hi "), TextEntity("there").adjust_style(lambda s: s.bold())], block=True),
    ListEntity(False, 1, [
        ContainerEntity("li", [TextEntity("one")], block=True),
        ContainerEntity("li", [TextEntity("two")], block=True),
    ]),
], block=True)

ctx = DrawContext()
root.calculate_buffer(40, 0, ctx)
print(root.plain_text())

screen = Screen(40, root.height)
root.draw(screen, ctx)
```

A service message:

```python
from chatrender.messages import service_message
from chatrender.style import Screen

msg = service_message("You joined the room")
msg.calculate_buffer(False, 40)
screen = Screen(40, msg.height())
msg.draw(screen)
```

## What it does not do

`chatrender` does not parse HTML or Markdown: entity trees are built in code
from the classes above. It has no syntax highlighting for code blocks, no
renderer that draws an entity tree as a message body, no network access and
no interactive terminal; drawing goes to the in-memory `Screen`.

## Running the tests

```
pip install -e ".[test]"
pytest
```