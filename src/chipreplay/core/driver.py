"""Table driver: applies parsed stacks, actions and reveals to a TableEngine."""

from __future__ import annotations

import logging

from chipreplay.core.positions import player_position
from chipreplay.core.types import NO_CHANGE, ActionResult, ChipParseError, HoleCards
from chipreplay.engine.base import Action, Card, TableEngine

__all__ = ["reveal_hole_cards", "take_actions", "update_stacks"]

logger = logging.getLogger(__name__)

ACTION_LETTERS: dict[str, Action] = {
    "f": Action.FOLD,
    "x": Action.CHECK,
    "c": Action.CALL,
}


def update_stacks(table: TableEngine, stacks: list[int]) -> None:
    """Rebuy, top up or stand up players from one stacks vector.

    Seats past the end of the vector and seats given NO_CHANGE are left
    alone. Any other value replaces the seat: the current player stands up
    and, for a positive amount, a new player sits down with it.
    """
    for seat, player in enumerate(table.seats()):
        if seat >= len(stacks) or stacks[seat] == NO_CHANGE:
            continue
        if player is not None:
            table.stand_up(seat)
        if stacks[seat] > 0:
            table.sit_down(seat, stacks[seat])
    logger.debug("Stacks updated: %s", stacks)


def take_actions(table: TableEngine, actions: list[str | int]) -> list[ActionResult]:
    """Replay actions in turn order.

    A chip amount is a raise when the engine allows one, otherwise a bet.
    Every result carries the street and forced bets as they were before the
    first action of the batch.
    """
    round_of_betting = table.round_of_betting()
    forced_bets = table.forced_bets()

    results: list[ActionResult] = []
    for token in actions:
        seat = table.player_to_act()
        position = player_position(table, seat)

        amount = None
        if isinstance(token, int):
            if table.legal_actions().can(Action.RAISE):
                action = Action.RAISE
            else:
                action = Action.BET
            amount = token
            table.action_taken(action, amount)
        elif token in ACTION_LETTERS:
            action = ACTION_LETTERS[token]
            table.action_taken(action)
        else:
            raise ChipParseError(f"Unknown action: {token}")

        results.append(
            ActionResult(
                seat_index=seat,
                position=position,
                action_type=action,
                amount=amount,
                round_of_betting=round_of_betting,
                forced_bets=forced_bets,
            )
        )
    return results


def reveal_hole_cards(
    table: TableEngine, cards: list[Card | None], strict: bool = False
) -> HoleCards:
    """Pair revealed cards with the players still in the hand, in seat order.

    The k-th player still holding cards gets ``cards[2k]`` and
    ``cards[2k+1]``; a player whose pair runs past the end of the input gets
    nothing. With ``strict``, anything but exactly two cards per player is a
    ChipParseError.
    """
    hand_seats = [s for s, p in enumerate(table.hand_players()) if p is not None]
    if strict and len(cards) != 2 * len(hand_seats):
        raise ChipParseError(
            f"Expected {2 * len(hand_seats)} hole cards for {len(hand_seats)} players, "
            f"got {len(cards)}"
        )
    if len(cards) != 2 * len(hand_seats):
        logger.debug("Ragged reveal: %d cards for %d players", len(cards), len(hand_seats))

    hole_cards: HoleCards = [None] * table.num_seats()
    for k, seat in enumerate(hand_seats):
        if 2 * k + 1 >= len(cards):
            break
        hole_cards[seat] = (cards[2 * k], cards[2 * k + 1])
    return hole_cards
