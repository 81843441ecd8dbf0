"""Seat position labels (BTN, SB, BB, UTG, ...) for the hand in progress.

Labels come from the seating as it was when the hand started, so a seat
keeps its label after folding.
"""

from __future__ import annotations

from chipreplay.core.types import ChipParseError, Position
from chipreplay.engine.base import Player, TableEngine

__all__ = ["POSITION_ORDERS", "player_position", "resolve_position"]

P = Position

# Labels clockwise from the button, keyed by players dealt in
POSITION_ORDERS: dict[int, tuple[Position, ...]] = {
    2: (P.BUTTON_SMALL_BLIND, P.BIG_BLIND),
    3: (P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND),
    4: (P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN),
    5: (P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN, P.CUTOFF),
    6: (P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN, P.HIJACK, P.CUTOFF),
    7: (
        P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN,
        P.LOJACK, P.HIJACK, P.CUTOFF,
    ),
    8: (
        P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN,
        P.UNDER_THE_GUN_PLUS_ONE, P.LOJACK, P.HIJACK, P.CUTOFF,
    ),
    9: (
        P.BUTTON, P.SMALL_BLIND, P.BIG_BLIND, P.UNDER_THE_GUN,
        P.UNDER_THE_GUN_PLUS_ONE, P.MIDDLE_POSITION, P.LOJACK, P.HIJACK, P.CUTOFF,
    ),
}


def _ordinal(players: list[Player | None], seat: int) -> int:
    """Number of occupied seats up to and including seat."""
    return sum(1 for p in players[: seat + 1] if p is not None)


def resolve_position(initial_players: list[Player | None], button: int, seat: int) -> str:
    """Return the position label of seat for a hand dealt to initial_players.

    Raises ChipParseError when no label table exists for the player count.
    """
    if initial_players[seat] is None:
        return str(Position.EMPTY)

    count = sum(1 for p in initial_players if p is not None)
    order = POSITION_ORDERS.get(count)
    if order is None:
        supported = ", ".join(str(n) for n in POSITION_ORDERS)
        raise ChipParseError(
            f"Unsupported number of hand players: {count}. Supported: {supported}"
        )

    offset = (_ordinal(initial_players, seat) - _ordinal(initial_players, button) + count) % count
    return str(order[offset])


def player_position(table: TableEngine, seat: int) -> str:
    """Position label of seat in the table's current (or last) hand."""
    return resolve_position(table.initial_hand_players(), table.button(), seat)
