"""Rich rendering of a plain transcript for terminal output."""

from __future__ import annotations

import re

from rich.text import Text

__all__ = ["colorize", "make_street_label"]

STREET_COLORS = {
    "preflop": "yellow",
    "flop": "green",
    "turn": "blue",
    "river": "red",
    "showdown": "bold white",
}

SUIT_COLORS = {"h": "red", "d": "blue", "c": "green", "s": "white"}

_HEADER_RE = re.compile(r"^\*\*\* (\w+) \*\*\*")
_CARD_RE = re.compile(r"\b([2-9TJQKA])([hdcs])\b")
_SECTION_LABELS = ("Stacks:", "Positions:")


def make_street_label(street: str) -> Text:
    """Colorized street header, e.g. ``*** Flop ***``."""
    return Text(f"*** {street} ***", style=STREET_COLORS.get(street.lower(), "white"))


def _append_cards(text: Text, chunk: str) -> None:
    pos = 0
    for match in _CARD_RE.finditer(chunk):
        text.append(chunk[pos:match.start()])
        rank, suit = match.groups()
        text.append(f"{rank}{suit}", style=f"bold {SUIT_COLORS[suit]}")
        pos = match.end()
    text.append(chunk[pos:])


def colorize(transcript: str) -> Text:
    """Color street headers, section labels and cards of a transcript."""
    result = Text()
    for line in transcript.splitlines(keepends=True):
        header = _HEADER_RE.match(line)
        if header:
            result.append_text(make_street_label(header.group(1)))
            _append_cards(result, line[header.end():])
        elif line.startswith(_SECTION_LABELS):
            result.append(line, style="bold")
        elif " shows " in line or " is next to act with " in line:
            _append_cards(result, line)
        else:
            result.append(line)
    return result
