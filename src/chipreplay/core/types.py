"""Domain types shared by the CHIP interpreter modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chipreplay.engine.base import Action, Card, ForcedBets, RoundOfBetting, Suit

__all__ = [
    "NO_CHANGE",
    "ActionResult",
    "Card",
    "ChipParseError",
    "HoleCards",
    "LineKind",
    "Position",
    "Suit",
    "TableSettings",
]

# Stack-update sentinel for "-": leave the seat as it is
NO_CHANGE = -1

# One entry per seat: the revealed pair (cards may be None), or None
HoleCards = list[tuple[Card | None, Card | None] | None]


class ChipParseError(ValueError):
    """Fatal CHIP input error. Aborts the whole parse."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        self.details = message
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class LineKind(Enum):
    """Grammars a CHIP line can satisfy."""

    STACKS = "stacks"
    ACTIONS = "actions"
    CARDS = "cards"
    NOISE = "noise"


class Position(str, Enum):
    """Seat position labels printed in transcripts."""

    BUTTON = "BTN"
    SMALL_BLIND = "SB"
    BIG_BLIND = "BB"
    UNDER_THE_GUN = "UTG"
    UNDER_THE_GUN_PLUS_ONE = "UTG+1"
    MIDDLE_POSITION = "MP"
    LOJACK = "LJ"
    HIJACK = "HJ"
    CUTOFF = "CO"
    BUTTON_SMALL_BLIND = "BTN/SB"
    EMPTY = "empty"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TableSettings:
    """First line of a CHIP document. button_seat is 0-based."""

    small_blind: int = 1
    big_blind: int = 2
    ante: int = 0
    num_seats: int = 6
    button_seat: int = 4

    @property
    def forced_bets(self) -> ForcedBets:
        return ForcedBets(small_blind=self.small_blind, big_blind=self.big_blind, ante=self.ante)


@dataclass(frozen=True)
class ActionResult:
    """One action as executed, with the street context of its batch.

    round_of_betting and forced_bets are captured before the first action
    of the batch.
    """

    seat_index: int
    position: str
    action_type: Action
    amount: int | None = None
    round_of_betting: RoundOfBetting | None = None
    forced_bets: ForcedBets | None = None
