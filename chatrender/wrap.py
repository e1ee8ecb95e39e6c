"""Splitting styled text into lines of a given width."""

from __future__ import annotations

import re

from .tstring import TString

_BOUNDARY = re.compile(r"[!-/:-@\[-`{-~][\t\n\f\r ]*|[\t\n\f\r ]+")
_BARE_BOUNDARY = re.compile(r"[\t\n\f\r ]+")
_SPACES = re.compile(r"[\t\n\f\r ]+")


def match_boundary(extract: TString, bare: bool = False) -> TString:
    """Cut extract after its last word boundary, if that is not its end.

    In bare mode only whitespace counts as a boundary; otherwise
    punctuation does too.
    """
    pattern = _BARE_BOUNDARY if bare else _BOUNDARY
    last = None
    for last in pattern.finditer(str(extract)):
        pass
    if last is not None and last.end() < len(extract):
        return extract[: last.end()]
    return extract


def wrap_text(
    text: TString,
    width: int,
    bare: bool = False,
    prefix: TString | None = None,
) -> list[TString]:
    """Split text into lines at most width columns wide, breaking at words.

    A prefix, if given, is placed before the text first. Forced line breaks
    are honoured; a run of empty lines collapses to a single empty line.
    """
    if width < 2:
        return []
    if prefix is not None:
        text = prefix + text

    lines: list[TString] = []
    blank_run = 0
    for part in text.split("\n"):
        if not part and blank_run < 1:
            lines.append(TString())
            blank_run += 1
        else:
            blank_run = 0
        while part:
            extract = part.truncate(width)
            if len(extract) < len(part):
                spaces = _SPACES.match(str(part[len(extract):]))
                if spaces is not None:
                    extract = part[: len(extract) + spaces.end()]
                extract = match_boundary(extract, bare)
            lines.append(extract)
            part = part[len(extract):]
    return lines