"""Transcript formatter: renders table state and replayed actions as text.

Every function returns a self-contained chunk; the interpreter concatenates
them in input order.
"""

from __future__ import annotations

from chipreplay.core.positions import player_position
from chipreplay.core.tokens import NO_REVEAL
from chipreplay.core.types import ActionResult, HoleCards, Position
from chipreplay.engine.base import Action, Card, Pot, RoundOfBetting, TableEngine

__all__ = [
    "STREET_HEADERS",
    "distribute_pot",
    "format_actions",
    "format_card",
    "format_community_cards",
    "format_forced_bets",
    "format_hole_cards",
    "format_player_to_act",
    "format_positions",
    "format_stacks",
    "format_winners",
]

STACKS_LABEL = "Stacks:"
POSITIONS_LABEL = "Positions:"
SHOWDOWN_HEADER = "*** Showdown ***"

STREET_HEADERS: dict[RoundOfBetting, str] = {
    RoundOfBetting.PREFLOP: "*** Preflop ***",
    RoundOfBetting.FLOP: "*** Flop ***",
    RoundOfBetting.TURN: "*** Turn ***",
    RoundOfBetting.RIVER: "*** River ***",
}

ACTION_VERBS: dict[Action, str] = {
    Action.FOLD: "folds",
    Action.CHECK: "checks",
    Action.CALL: "calls",
    Action.BET: "bets",
    Action.RAISE: "raises to",
}


def format_forced_bets(table: TableEngine) -> str:
    forced = table.forced_bets()
    return (
        f"{forced.small_blind}/{forced.big_blind} (ante: {forced.ante}) "
        f"- {table.num_seats()} seats\n\n"
    )


def format_stacks(table: TableEngine) -> str:
    lines = [STACKS_LABEL]
    for i, player in enumerate(table.seats()):
        chips = "empty" if player is None else player.total_chips
        lines.append(f"Seat {i + 1}: {chips}")
    return "\n".join(lines) + "\n\n"


def format_positions(table: TableEngine) -> str:
    lines = [POSITIONS_LABEL]
    for i in range(table.num_seats()):
        lines.append(f"Seat {i + 1}: {player_position(table, i)}")
    return "\n".join(lines) + "\n\n"


def format_actions(table: TableEngine, results: list[ActionResult]) -> str:
    """Render one batch of actions.

    Every batch captured on the preflop round repeats the forced-bets
    header.
    """
    out = ""
    if results and results[0].round_of_betting == RoundOfBetting.PREFLOP:
        forced = results[0].forced_bets or table.forced_bets()
        out += f"{STREET_HEADERS[RoundOfBetting.PREFLOP]}\n"
        out += f"  All players post ante {forced.ante}\n"
        out += f"  {Position.SMALL_BLIND} posts small blind {forced.small_blind}\n"
        out += f"  {Position.BIG_BLIND} posts big blind {forced.big_blind}\n"

    for result in results:
        verb = ACTION_VERBS[result.action_type]
        if result.action_type in (Action.BET, Action.RAISE):
            out += f"  {result.position} {verb} {result.amount}\n"
        else:
            out += f"  {result.position} {verb}\n"
    return out


def format_card(card: Card | None, no_reveal: str = NO_REVEAL) -> str:
    return no_reveal if card is None else str(card)


def _join(cards: list[Card | None], no_reveal: str = NO_REVEAL) -> str:
    return " ".join(format_card(c, no_reveal) for c in cards)


def format_community_cards(table: TableEngine, cards: list[Card | None]) -> str:
    """Street header with the cards just dealt. Nothing for preflop."""
    street = table.round_of_betting()
    if street == RoundOfBetting.PREFLOP:
        return ""
    return f"{STREET_HEADERS[street]} {_join(cards)}\n"


def format_player_to_act(
    table: TableEngine, cards: list[Card | None], no_reveal: str = NO_REVEAL
) -> str:
    position = player_position(table, table.player_to_act())
    return f"\n{position} is next to act with {_join(cards, no_reveal)}\n"


def format_hole_cards(table: TableEngine, hole_cards: HoleCards, no_reveal: str = NO_REVEAL) -> str:
    out = f"{SHOWDOWN_HEADER}\n"
    for seat, pair in enumerate(hole_cards):
        if pair is None:
            continue
        position = player_position(table, seat)
        if all(card is None for card in pair):
            out += f"  {position} chucked\n"
        else:
            out += f"  {position} shows {_join(list(pair), no_reveal)}\n"
    return out


def distribute_pot(
    size: int, winners: list[int] | tuple[int, ...], button: int, num_seats: int
) -> list[tuple[int, int]]:
    """Split a pot among winners, odd chips first to those closest to the button.

    Returns ``(seat, chips)`` pairs ordered by clockwise distance from the
    button, the button itself counting as distance 0.

    >>> distribute_pot(1000, [1, 3, 5], button=0, num_seats=6)
    [(1, 334), (3, 333), (5, 333)]
    """
    if not winners:
        return []
    ordered = sorted(winners, key=lambda seat: (seat - button + num_seats) % num_seats)
    share, odd = divmod(size, len(ordered))
    return [(seat, share + (1 if i < odd else 0)) for i, seat in enumerate(ordered)]


def format_winners(table: TableEngine, pots: list[Pot]) -> str:
    """Render the payout of every pot captured before the showdown.

    Each pot is split among the winners the engine reported for it. When
    the engine reports no winners at all, the first eligible player of the
    main pot is shown taking the whole main pot.
    """
    out = f"{SHOWDOWN_HEADER}\n"
    winners = table.winners()

    if not winners:
        if pots and pots[0].eligible_players:
            seat = pots[0].eligible_players[0]
            out += f"  {player_position(table, seat)} wins {pots[0].size}\n"
        return out + "\n"

    button = table.button()
    num_seats = table.num_seats()
    for pot, pot_winners in zip(pots, winners):
        for seat, chips in distribute_pot(pot.size, pot_winners, button, num_seats):
            if chips > 0:
                out += f"  {player_position(table, seat)} wins {chips}\n"
    return out + "\n"
