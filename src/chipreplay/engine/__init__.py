"""Seat-based poker table engine consumed by the CHIP interpreter."""

from .base import (
    Action,
    Card,
    ForcedBets,
    LegalActions,
    Player,
    Pot,
    RoundOfBetting,
    Suit,
    TableEngine,
)
from .table import HoldemTable

__all__ = [
    "Action",
    "Card",
    "ForcedBets",
    "HoldemTable",
    "LegalActions",
    "Player",
    "Pot",
    "RoundOfBetting",
    "Suit",
    "TableEngine",
]
