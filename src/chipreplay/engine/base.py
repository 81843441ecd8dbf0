"""TableEngine: abstract capability interface for a seat-based poker table.

The CHIP interpreter drives a table only through these methods, so any
engine (the bundled HoldemTable, or a mock in tests) can stand behind it.

Class hierarchy:
    TableEngine (ABC)
    └── HoldemTable: No-Limit Texas Hold'em with antes and side pots
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum

__all__ = [
    "Action",
    "Card",
    "ForcedBets",
    "LegalActions",
    "Player",
    "Pot",
    "RoundOfBetting",
    "Suit",
    "TableEngine",
]

RANKS = "23456789TJQKA"


class Suit(Enum):
    """Card suits, valued by their full name."""

    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def letter(self) -> str:
        return self.value[0]


@dataclass(frozen=True)
class Card:
    """A playing card with rank and suit."""

    rank: str
    suit: Suit

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank!r}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.letter}"


class RoundOfBetting(IntEnum):
    """Betting streets, in dealing order."""

    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3


class Action(str, Enum):
    """Actions a player can take on their turn."""

    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"


@dataclass(frozen=True)
class ForcedBets:
    """Blinds and ante posted at the start of every hand."""

    small_blind: int
    big_blind: int
    ante: int = 0


@dataclass
class Player:
    """A seated player: chips behind plus chips bet this round."""

    stack: int
    bet_size: int = 0

    @property
    def total_chips(self) -> int:
        return self.stack + self.bet_size


@dataclass(frozen=True)
class Pot:
    """A pot with its size and the seats eligible to win it, in seat order."""

    size: int
    eligible_players: tuple[int, ...]


@dataclass(frozen=True)
class LegalActions:
    """Actions available to the player to act, with the bet/raise-to range."""

    actions: tuple[Action, ...]
    chip_range: tuple[int, int] | None = None

    def can(self, action: Action) -> bool:
        return action in self.actions


class TableEngine(ABC):
    """Abstract base for table engines.

    Seats are indexed ``0..num_seats()-1``. Per-seat lists returned by the
    engine hold ``None`` for empty (or, for hand players, folded) seats.
    """

    # ------------------------------------------------------------------
    # Table setup
    # ------------------------------------------------------------------

    @abstractmethod
    def forced_bets(self) -> ForcedBets:
        """Return the blinds and ante for this table."""

    @abstractmethod
    def num_seats(self) -> int:
        """Return the number of seats at the table."""

    @abstractmethod
    def seats(self) -> list[Player | None]:
        """Return the seated players, ``None`` for empty seats."""

    @abstractmethod
    def sit_down(self, seat: int, buy_in: int) -> None:
        """Seat a new player with the given stack."""

    @abstractmethod
    def stand_up(self, seat: int) -> None:
        """Remove the player from the given seat."""

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def start_hand(self, seat: int | None = None) -> None:
        """Start a hand, optionally placing the button at ``seat``."""

    @abstractmethod
    def is_hand_in_progress(self) -> bool:
        """Return True between start_hand() and the showdown."""

    @abstractmethod
    def button(self) -> int:
        """Return the button seat of the current (or last) hand."""

    @abstractmethod
    def hand_players(self) -> list[Player | None]:
        """Return players still holding cards, ``None`` for folded/empty seats."""

    @abstractmethod
    def initial_hand_players(self) -> list[Player | None]:
        """Return the seating as it was when the current hand started."""

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    @abstractmethod
    def player_to_act(self) -> int:
        """Return the seat whose turn it is."""

    @abstractmethod
    def round_of_betting(self) -> RoundOfBetting:
        """Return the current street."""

    @abstractmethod
    def is_betting_round_in_progress(self) -> bool:
        """Return True while some player still has to act this street."""

    @abstractmethod
    def is_in_middle_of_betting_round(self) -> bool:
        """Return True when the street has seen actions but is not closed."""

    @abstractmethod
    def is_at_start_of_betting_round(self) -> bool:
        """Return True when no one has acted yet on the current street."""

    @abstractmethod
    def are_betting_rounds_completed(self) -> bool:
        """Return True once no further betting can happen this hand."""

    @abstractmethod
    def legal_actions(self) -> LegalActions:
        """Return the legal actions for the player to act."""

    @abstractmethod
    def action_taken(self, action: Action | str, bet_size: int = 0) -> None:
        """Apply the action of the player to act. Raises ValueError if illegal."""

    @abstractmethod
    def end_betting_round(self) -> None:
        """Close a finished street and move to the next one."""

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    @abstractmethod
    def pots(self) -> list[Pot]:
        """Return main pot first, then side pots."""

    @abstractmethod
    def showdown(self) -> None:
        """Award every pot that has a single contender and end the hand."""

    @abstractmethod
    def manual_showdown(
        self,
        community_cards: list[Card],
        hole_cards: list[tuple[Card | None, Card | None] | None],
    ) -> None:
        """Evaluate the revealed hands against the board and end the hand."""

    @abstractmethod
    def winners(self) -> list[list[int]]:
        """Return the winning seats of each pot from the last showdown."""
