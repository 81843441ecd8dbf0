"""Tokenizer for CHIP lines: chip amounts, cards, stacks, actions, settings.

Chip amounts accept an optional ``k``/``m`` suffix (case-insensitive), so
``"12.5k"`` is 12,500 and ``"2.5m"`` is 2,500,000. Cards are two characters
(rank then suit letter) and may be written with or without spaces between
them; a single reserved letter (``n`` by default) stands for a card that was
not revealed.
"""

from __future__ import annotations

import logging
import math
import re

from chipreplay.core.types import NO_CHANGE, Card, Suit, TableSettings

__all__ = [
    "NO_REVEAL",
    "NUMBER_RE",
    "SAME_STACK",
    "parse_actions",
    "parse_cards",
    "parse_number",
    "parse_stacks",
    "parse_table_settings",
    "scan_cards",
    "to_chips",
]

logger = logging.getLogger(__name__)

# Grammar of a chip amount inside a CHIP line
NUMBER_RE = re.compile(r"^\d+(\.\d+)?[km]?$", re.IGNORECASE)

# Looser decimal accepted by parse_number once the suffix is removed
_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

_MAGNITUDE = {"k": 1_000, "m": 1_000_000}

SUIT_LETTERS: dict[str, Suit] = {
    "s": Suit.SPADES,
    "h": Suit.HEARTS,
    "d": Suit.DIAMONDS,
    "c": Suit.CLUBS,
}
RANK_LETTERS = "23456789TJQKA"

NO_REVEAL = "n"
SAME_STACK = "-"


def parse_number(token: str | int | float) -> float:
    """Parse a chip amount, returning ``nan`` when it is not one.

    >>> parse_number("50k")
    50000.0
    >>> parse_number("2.5m")
    2500000.0
    """
    if isinstance(token, (int, float)):
        return float(token)
    if not token or not isinstance(token, str):
        return math.nan

    text = token.strip().lower()
    scale = _MAGNITUDE.get(text[-1:], 1)
    if scale != 1:
        text = text[:-1]
    if not _DECIMAL_RE.match(text):
        return math.nan
    return float(text) * scale


def to_chips(token: str) -> int:
    """Parse a chip amount into whole chips. Raises ValueError if unparsable."""
    value = parse_number(token)
    if math.isnan(value):
        raise ValueError(f"Not a chip amount: {token!r}")
    return int(round(value))


def _card_at(text: str, i: int) -> Card | None:
    rank = text[i].upper()
    suit = SUIT_LETTERS.get(text[i + 1].lower())
    if suit is None or rank not in RANK_LETTERS:
        return None
    return Card(rank=rank, suit=suit)


def scan_cards(text: str, no_reveal: str = NO_REVEAL) -> list[Card | None] | None:
    """Strictly scan concatenated cards.

    Returns None when any character is left over or malformed.
    """
    text = "".join(text.split())
    cards: list[Card | None] = []
    i = 0
    while i < len(text):
        if text[i].lower() == no_reveal.lower():
            cards.append(None)
            i += 1
            continue
        if i + 1 >= len(text):
            return None
        card = _card_at(text, i)
        if card is None:
            return None
        cards.append(card)
        i += 2
    return cards


def parse_cards(text: str, no_reveal: str = NO_REVEAL) -> list[Card | None]:
    """Parse a cards line, skipping fragments that are not cards.

    ``None`` entries are no-reveal markers.
    """
    text = "".join(text.split())
    cards: list[Card | None] = []
    i = 0
    while i < len(text):
        if text[i].lower() == no_reveal.lower():
            cards.append(None)
            i += 1
        elif i + 1 < len(text):
            card = _card_at(text, i)
            if card is not None:
                cards.append(card)
            i += 2
        else:
            i += 1
    return cards


def parse_stacks(line: str) -> list[int]:
    """Parse a stacks line. ``-`` becomes NO_CHANGE; junk counts as an empty seat."""
    stacks: list[int] = []
    for token in line.split():
        if token == SAME_STACK:
            stacks.append(NO_CHANGE)
            continue
        try:
            stacks.append(to_chips(token))
        except ValueError:
            logger.warning("Unreadable stack %r, treating the seat as empty", token)
            stacks.append(0)
    return stacks


def parse_actions(line: str) -> list[str | int]:
    """Parse an actions line into chip amounts and lower-cased action letters."""
    actions: list[str | int] = []
    for token in line.split():
        if NUMBER_RE.match(token):
            actions.append(to_chips(token))
        else:
            actions.append(token.lower())
    return actions


def parse_table_settings(line: str, defaults: TableSettings | None = None) -> TableSettings:
    """Parse ``small_blind big_blind [ante] num_seats button_seat``.

    The button seat is 1-based in CHIP and 0-based in the result. An omitted
    ante is 0 whatever the defaults say. Wrong arity or a non-numeric token
    falls back to ``defaults`` entirely; a zero or out-of-range field falls
    back to its own default.
    """
    defaults = defaults or TableSettings()
    tokens = line.split()

    if len(tokens) not in (4, 5) or not all(NUMBER_RE.match(t) for t in tokens):
        logger.warning("Unrecognized table settings %r, using defaults", line)
        return defaults

    values = [to_chips(t) for t in tokens]
    if len(values) == 4:
        small_blind, big_blind, num_seats, button = values
        ante = 0
    else:
        small_blind, big_blind, ante, num_seats, button = values

    num_seats = num_seats or defaults.num_seats
    button_seat = button - 1
    if not 0 <= button_seat < num_seats:
        fallback = defaults.button_seat if defaults.button_seat < num_seats else 0
        logger.warning(
            "Button seat %d is not on a %d-seat table, using seat %d",
            button, num_seats, fallback + 1,
        )
        button_seat = fallback

    return TableSettings(
        small_blind=small_blind or defaults.small_blind,
        big_blind=big_blind or defaults.big_blind,
        ante=ante,
        num_seats=num_seats,
        button_seat=button_seat,
    )
