"""No-Limit Texas Hold'em table engine (2-9 seats).

Implements the TableEngine ABC for a seat-based cash table:
- Seating, stand-up and re-buys between hands
- Button placement and rotation, antes, blinds (heads-up button posts SB)
- No-limit betting with min-raise tracking
- Street transitions: PREFLOP -> FLOP -> TURN -> RIVER
- Side pots split at all-in levels
- Showdown from revealed hole cards, odd chips by distance from the button
"""

from __future__ import annotations

import logging

from chipreplay.engine.base import (
    Action,
    Card,
    ForcedBets,
    LegalActions,
    Player,
    Pot,
    RoundOfBetting,
    TableEngine,
)
from chipreplay.engine.evaluator import best_score

__all__ = ["HoldemTable", "build_pots", "split_pot"]

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Pot construction and splitting
# ------------------------------------------------------------------

def build_pots(invested: dict[int, int], folded: set[int], all_in: set[int]) -> list[Pot]:
    """Build the main pot and side pots from per-seat hand investments.

    A new pot starts only at the investment level of a live all-in player;
    everything above the last such level stays together. Eligible players
    are the non-folded seats that reached the pot's level.

    Returns pots ordered from main pot to the last side pot.
    """
    caps = sorted({invested[seat] for seat in all_in if seat not in folded})
    seats = sorted(invested)
    pots: list[Pot] = []
    prev = 0

    for cap in [*caps, None]:
        if cap is None:
            size = sum(max(invested[s] - prev, 0) for s in seats)
            eligible = tuple(s for s in seats if s not in folded and invested[s] > prev)
        else:
            size = sum(min(invested[s], cap) - min(invested[s], prev) for s in seats)
            eligible = tuple(s for s in seats if s not in folded and invested[s] >= cap)
            prev = cap

        if size <= 0:
            continue
        if not eligible and pots:
            # Dead money above every live player goes to the previous pot
            last = pots[-1]
            pots[-1] = Pot(size=last.size + size, eligible_players=last.eligible_players)
        else:
            pots.append(Pot(size=size, eligible_players=eligible))

    return pots


def split_pot(size: int, winners: list[int], button: int, num_seats: int) -> dict[int, int]:
    """Split a pot evenly among winners.

    Odd chips go one each to the winners closest to the button, counting
    clockwise from the button seat itself.

    Returns {seat: chips_won}.
    """
    if not winners:
        return {}
    ordered = sorted(winners, key=lambda seat: (seat - button) % num_seats)
    share, odd = divmod(size, len(ordered))
    return {seat: share + (1 if i < odd else 0) for i, seat in enumerate(ordered)}


class HoldemTable(TableEngine):
    """No-Limit Hold'em table.

    Parameters
    ----------
    forced_bets : ForcedBets
        Small blind, big blind and ante posted every hand.
    num_seats : int
        Number of seats at the table (default 9).
    """

    def __init__(self, forced_bets: ForcedBets, num_seats: int = 9) -> None:
        if num_seats < 2:
            raise ValueError(f"A table needs at least 2 seats, got {num_seats}")

        self._forced_bets = forced_bets
        self._num_seats = num_seats
        self._seats: list[Player | None] = [None] * num_seats
        self._button: int = 0
        self._hands_started: int = 0

        # Per-hand state
        self._hand_in_progress: bool = False
        self._initial_players: list[Player | None] = [None] * num_seats
        self._in_hand: list[bool] = [False] * num_seats
        self._invested: dict[int, int] = {}  # chips put in this hand, antes included
        self._all_in: set[int] = set()
        self._winners: list[list[int]] = []

        # Betting state for the current street
        self._round: RoundOfBetting = RoundOfBetting.PREFLOP
        self._round_in_progress: bool = False
        self._rounds_completed: bool = False
        self._acted: set[int] = set()
        self._actions_this_round: int = 0
        self._biggest_bet: int = 0
        self._min_raise: int = 0
        self._to_act: int = 0

    # ------------------------------------------------------------------
    # Table setup
    # ------------------------------------------------------------------

    def forced_bets(self) -> ForcedBets:
        return self._forced_bets

    def num_seats(self) -> int:
        return self._num_seats

    def seats(self) -> list[Player | None]:
        return list(self._seats)

    def sit_down(self, seat: int, buy_in: int) -> None:
        self._check_seat(seat)
        if self._hand_in_progress:
            raise ValueError("Cannot sit down while a hand is in progress")
        if self._seats[seat] is not None:
            raise ValueError(f"Seat {seat} is already taken")
        if buy_in <= 0:
            raise ValueError(f"Buy-in must be positive, got {buy_in}")
        self._seats[seat] = Player(stack=buy_in)

    def stand_up(self, seat: int) -> None:
        self._check_seat(seat)
        if self._hand_in_progress:
            raise ValueError("Cannot stand up while a hand is in progress")
        if self._seats[seat] is None:
            raise ValueError(f"Seat {seat} is empty")
        self._seats[seat] = None

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def start_hand(self, seat: int | None = None) -> None:
        """Set up a new hand: place the button, post antes and blinds."""
        if self._hand_in_progress:
            raise ValueError("A hand is already in progress")
        occupied = self._occupied()
        if len(occupied) < 2:
            raise ValueError(f"Need at least 2 seated players, got {len(occupied)}")

        if seat is not None:
            self._check_seat(seat)
            self._button = self._next_seat(seat - 1, occupied)
        elif self._hands_started == 0:
            self._button = occupied[0]
        else:
            self._button = self._next_seat(self._button, occupied)
        self._hands_started += 1

        self._initial_players = list(self._seats)
        self._in_hand = [p is not None for p in self._seats]
        self._invested = {s: 0 for s in occupied}
        self._all_in = set()
        self._winners = []
        self._round = RoundOfBetting.PREFLOP
        self._rounds_completed = False
        self._hand_in_progress = True
        for s in occupied:
            self._seats[s].bet_size = 0

        forced = self._forced_bets
        if forced.ante > 0:
            for s in occupied:
                self._commit(s, forced.ante, as_bet=False)

        # Heads-up: button posts the small blind
        if len(occupied) == 2:
            sb_seat = self._button
        else:
            sb_seat = self._next_seat(self._button, occupied)
        bb_seat = self._next_seat(sb_seat, occupied)
        self._commit(sb_seat, forced.small_blind, as_bet=True)
        self._commit(bb_seat, forced.big_blind, as_bet=True)

        logger.debug(
            "Hand %d started: button=%d sb=%d bb=%d players=%s",
            self._hands_started, self._button, sb_seat, bb_seat, occupied,
        )

        self._biggest_bet = forced.big_blind
        self._min_raise = forced.big_blind
        self._start_round(after=bb_seat)

    def is_hand_in_progress(self) -> bool:
        return self._hand_in_progress

    def button(self) -> int:
        return self._button

    def hand_players(self) -> list[Player | None]:
        return [p if self._in_hand[s] else None for s, p in enumerate(self._seats)]

    def initial_hand_players(self) -> list[Player | None]:
        return list(self._initial_players)

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def player_to_act(self) -> int:
        self._require_betting()
        return self._to_act

    def round_of_betting(self) -> RoundOfBetting:
        return self._round

    def is_betting_round_in_progress(self) -> bool:
        return self._hand_in_progress and self._round_in_progress

    def is_in_middle_of_betting_round(self) -> bool:
        return self.is_betting_round_in_progress() and self._actions_this_round > 0

    def is_at_start_of_betting_round(self) -> bool:
        return (
            self._hand_in_progress
            and not self._rounds_completed
            and self._actions_this_round == 0
        )

    def are_betting_rounds_completed(self) -> bool:
        return self._hand_in_progress and self._rounds_completed

    def legal_actions(self) -> LegalActions:
        self._require_betting()
        player = self._seats[self._to_act]

        actions = [Action.FOLD]
        if player.bet_size >= self._biggest_bet:
            actions.append(Action.CHECK)
        else:
            actions.append(Action.CALL)

        chip_range = None
        if player.total_chips > self._biggest_bet:
            actions.append(Action.BET if self._biggest_bet == 0 else Action.RAISE)
            min_to = min(self._biggest_bet + self._min_raise, player.total_chips)
            chip_range = (min_to, player.total_chips)

        return LegalActions(actions=tuple(actions), chip_range=chip_range)

    def action_taken(self, action: Action | str, bet_size: int = 0) -> None:
        self._require_betting()
        action = Action(action)
        seat = self._to_act
        player = self._seats[seat]
        legal = self.legal_actions()

        if not legal.can(action):
            raise ValueError(
                f"Illegal action '{action.value}' for seat {seat}; "
                f"legal: {', '.join(a.value for a in legal.actions)}"
            )

        if action == Action.FOLD:
            self._in_hand[seat] = False
        elif action == Action.CALL:
            self._commit(seat, self._biggest_bet - player.bet_size, as_bet=True)
        elif action in (Action.BET, Action.RAISE):
            low, high = legal.chip_range
            if not low <= bet_size <= high:
                raise ValueError(
                    f"Cannot {action.value} to {bet_size}: legal range is {low}-{high}"
                )
            increment = bet_size - self._biggest_bet
            self._commit(seat, bet_size - player.bet_size, as_bet=True)
            if increment >= self._min_raise:
                self._min_raise = increment
            self._biggest_bet = bet_size
            # Everyone else must respond to the new bet
            self._acted = set()

        self._acted.add(seat)
        self._actions_this_round += 1
        logger.debug("Seat %d: %s %s", seat, action.value, bet_size or "")

        if sum(self._in_hand) <= 1:
            self._round_in_progress = False
            return
        nxt = self._next_to_act(seat)
        if nxt is None:
            self._round_in_progress = False
        else:
            self._to_act = nxt

    def end_betting_round(self) -> None:
        """Close the street; move to the next one or mark betting complete."""
        if not self._hand_in_progress or self._rounds_completed:
            raise ValueError("No betting round to end")
        if self._round_in_progress:
            raise ValueError("Betting round is still in progress")

        for s in self._invested:
            if self._seats[s] is not None:
                self._seats[s].bet_size = 0

        if sum(self._in_hand) <= 1 or self._round == RoundOfBetting.RIVER:
            self._rounds_completed = True
            logger.debug("Betting complete on %s", self._round.name.lower())
            return

        self._round = RoundOfBetting(self._round + 1)
        self._biggest_bet = 0
        self._min_raise = self._forced_bets.big_blind
        self._start_round(after=self._button)

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    def pots(self) -> list[Pot]:
        folded = {s for s in self._invested if not self._in_hand[s]}
        return build_pots(self._invested, folded, self._all_in)

    def showdown(self) -> None:
        """Award uncontested pots. Contested pots need manual_showdown()."""
        self._require_completed()
        results: list[list[int]] = []
        for pot in self.pots():
            if len(pot.eligible_players) != 1:
                raise ValueError(
                    f"Pot of {pot.size} is contested by seats {list(pot.eligible_players)}; "
                    "reveal hole cards with manual_showdown()"
                )
            results.append([pot.eligible_players[0]])
        self._award(results)

    def manual_showdown(
        self,
        community_cards: list[Card],
        hole_cards: list[tuple[Card | None, Card | None] | None],
    ) -> None:
        """Evaluate revealed hands. Players with no revealed cards muck."""
        self._require_completed()
        revealed = {
            seat: list(pair)
            for seat, pair in enumerate(hole_cards)
            if pair is not None and None not in pair and seat < self._num_seats and self._in_hand[seat]
        }
        scores: dict[int, int] = {}

        results: list[list[int]] = []
        for pot in self.pots():
            contenders = [s for s in pot.eligible_players if s in revealed]
            if not contenders:
                results.append(list(pot.eligible_players))
                continue
            if len(contenders) > 1:
                for s in contenders:
                    if s not in scores:
                        scores[s] = best_score(revealed[s] + list(community_cards))
                top = max(scores[s] for s in contenders)
                contenders = [s for s in contenders if scores[s] == top]
            results.append(contenders)
        self._award(results)

    def winners(self) -> list[list[int]]:
        return [list(w) for w in self._winners]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _award(self, pot_winners: list[list[int]]) -> None:
        """Pay out every pot, end the hand and stand up busted players."""
        for pot, winners in zip(self.pots(), pot_winners):
            for seat, amount in split_pot(pot.size, winners, self._button, self._num_seats).items():
                self._seats[seat].stack += amount
            logger.debug("Pot %d -> seats %s", pot.size, winners)

        self._winners = pot_winners
        self._invested = {}
        self._all_in = set()
        self._hand_in_progress = False
        self._round_in_progress = False

        for seat, player in enumerate(self._seats):
            if player is not None and player.total_chips == 0:
                self._seats[seat] = None

    def _commit(self, seat: int, amount: int, as_bet: bool) -> None:
        """Move chips from a stack into the pot, capped at the stack."""
        player = self._seats[seat]
        amount = min(amount, player.stack)
        player.stack -= amount
        if as_bet:
            player.bet_size += amount
        self._invested[seat] += amount
        if player.stack == 0:
            self._all_in.add(seat)

    def _start_round(self, after: int) -> None:
        self._acted = set()
        self._actions_this_round = 0
        nxt = self._next_to_act(after)
        self._round_in_progress = nxt is not None
        if nxt is not None:
            self._to_act = nxt

    def _can_act(self) -> list[int]:
        return [s for s in range(self._num_seats) if self._in_hand[s] and s not in self._all_in]

    def _needs_to_act(self, seat: int, can_act: list[int]) -> bool:
        if seat not in can_act:
            return False
        if self._seats[seat].bet_size < self._biggest_bet:
            return True
        # A lone player with nobody left to bet against does not act
        return seat not in self._acted and len(can_act) > 1

    def _next_to_act(self, start: int) -> int | None:
        can_act = self._can_act()
        for offset in range(1, self._num_seats + 1):
            seat = (start + offset) % self._num_seats
            if self._needs_to_act(seat, can_act):
                return seat
        return None

    def _next_seat(self, from_seat: int, pool: list[int]) -> int:
        """Return the next seat clockwise from from_seat that is in pool."""
        for offset in range(1, self._num_seats + 1):
            seat = (from_seat + offset) % self._num_seats
            if seat in pool:
                return seat
        return from_seat

    def _occupied(self) -> list[int]:
        return [s for s, p in enumerate(self._seats) if p is not None]

    def _check_seat(self, seat: int) -> None:
        if not 0 <= seat < self._num_seats:
            raise ValueError(f"Seat {seat} out of range 0-{self._num_seats - 1}")

    def _require_betting(self) -> None:
        if not self.is_betting_round_in_progress():
            raise ValueError("No betting round in progress")

    def _require_completed(self) -> None:
        if not self.are_betting_rounds_completed():
            raise ValueError("Betting rounds are not completed")
