"""Tests for transcript rendering."""

import pytest

from chipreplay.core.tokens import parse_cards
from chipreplay.core.transcript import (
    distribute_pot,
    format_actions,
    format_card,
    format_community_cards,
    format_forced_bets,
    format_hole_cards,
    format_player_to_act,
    format_positions,
    format_stacks,
    format_winners,
)
from chipreplay.core.types import ActionResult
from chipreplay.engine import Action, ForcedBets, Player, Pot, RoundOfBetting


def result(position, action, amount=None, street=RoundOfBetting.PREFLOP):
    return ActionResult(
        seat_index=0,
        position=position,
        action_type=action,
        amount=amount,
        round_of_betting=street,
        forced_bets=ForcedBets(small_blind=25, big_blind=50, ante=10),
    )


class TestTableBlocks:
    def test_forced_bets(self, mock_table):
        mock_table.forced_bets.return_value = ForcedBets(small_blind=25, big_blind=50, ante=10)
        mock_table.num_seats.return_value = 6
        assert format_forced_bets(mock_table) == "25/50 (ante: 10) - 6 seats\n\n"

    def test_stacks_count_chips_in_front(self, mock_table):
        mock_table.seats.return_value = [Player(100), None, Player(stack=90, bet_size=10)]
        assert format_stacks(mock_table) == (
            "Stacks:\nSeat 1: 100\nSeat 2: empty\nSeat 3: 100\n\n"
        )

    def test_positions(self, mock_table):
        assert format_positions(mock_table) == (
            "Positions:\nSeat 1: BTN\nSeat 2: SB\nSeat 3: BB\n\n"
        )


class TestFormatActions:
    def test_preflop_header(self, mock_table):
        text = format_actions(mock_table, [
            result("UTG", Action.FOLD),
            result("CO", Action.RAISE, 150),
        ])
        assert text == (
            "*** Preflop ***\n"
            "  All players post ante 10\n"
            "  SB posts small blind 25\n"
            "  BB posts big blind 50\n"
            "  UTG folds\n"
            "  CO raises to 150\n"
        )

    def test_later_preflop_batch_repeats_header(self, mock_table):
        text = format_actions(mock_table, [result("SB", Action.CALL)])
        assert text.startswith("*** Preflop ***\n  All players post ante 10\n")
        assert text.endswith("  BB posts big blind 50\n  SB calls\n")

    def test_no_header_after_preflop(self, mock_table):
        text = format_actions(mock_table, [
            result("SB", Action.CHECK, street=RoundOfBetting.FLOP),
            result("BB", Action.BET, 50, street=RoundOfBetting.FLOP),
        ])
        assert text == "  SB checks\n  BB bets 50\n"

    def test_empty_batch(self, mock_table):
        assert format_actions(mock_table, []) == ""


class TestCards:
    def test_format_card(self):
        ah = parse_cards("Ah")[0]
        assert format_card(ah) == "Ah"
        assert format_card(None) == "n"
        assert format_card(None, no_reveal="x") == "x"

    @pytest.mark.parametrize("street,header", [
        (RoundOfBetting.FLOP, "*** Flop *** As Kh Qd\n"),
        (RoundOfBetting.TURN, "*** Turn *** As Kh Qd\n"),
        (RoundOfBetting.RIVER, "*** River *** As Kh Qd\n"),
    ])
    def test_community_cards(self, mock_table, street, header):
        mock_table.round_of_betting.return_value = street
        assert format_community_cards(mock_table, parse_cards("AsKhQd")) == header

    def test_no_community_cards_preflop(self, mock_table):
        assert format_community_cards(mock_table, parse_cards("AsKhQd")) == ""

    def test_player_to_act(self, mock_table):
        mock_table.player_to_act.return_value = 1
        text = format_player_to_act(mock_table, parse_cards("Ah n"))
        assert text == "\nSB is next to act with Ah n\n"

    def test_hole_cards(self, mock_table):
        ac, sc = parse_cards("Ac 7c")
        text = format_hole_cards(mock_table, [(ac, sc), None, (None, None)])
        assert text == "*** Showdown ***\n  BTN shows Ac 7c\n  BB chucked\n"

    def test_half_revealed_hand_shows(self, mock_table):
        ac = parse_cards("Ac")[0]
        text = format_hole_cards(mock_table, [(ac, None), None, None])
        assert text == "*** Showdown ***\n  BTN shows Ac n\n"


class TestDistributePot:
    def test_odd_chip_to_closest_to_button(self):
        assert distribute_pot(1000, [5, 1, 3], button=0, num_seats=6) == [
            (1, 334), (3, 333), (5, 333),
        ]

    def test_even_split(self):
        assert distribute_pot(900, [1, 3, 5], button=0, num_seats=6) == [
            (1, 300), (3, 300), (5, 300),
        ]

    def test_distance_wraps_past_the_last_seat(self):
        assert distribute_pot(1000, [0, 2, 4], button=3, num_seats=6) == [
            (4, 334), (0, 333), (2, 333),
        ]

    def test_button_counts_as_closest(self):
        assert distribute_pot(5, [1, 3], button=3, num_seats=6) == [(3, 3), (1, 2)]

    def test_no_winners(self):
        assert distribute_pot(100, [], button=0, num_seats=6) == []


class TestFormatWinners:
    def test_one_winner_per_pot(self, mock_table):
        mock_table.winners.return_value = [[0], [1]]
        pots = [Pot(300, (0, 1, 2)), Pot(200, (1, 2))]
        assert format_winners(mock_table, pots) == (
            "*** Showdown ***\n  BTN wins 300\n  SB wins 200\n\n"
        )

    def test_split_pot(self, mock_table):
        mock_table.winners.return_value = [[2, 1]]
        assert format_winners(mock_table, [Pot(101, (1, 2))]) == (
            "*** Showdown ***\n  SB wins 51\n  BB wins 50\n\n"
        )

    def test_zero_shares_are_not_printed(self, mock_table):
        mock_table.winners.return_value = [[1, 2]]
        assert format_winners(mock_table, [Pot(1, (1, 2))]) == (
            "*** Showdown ***\n  SB wins 1\n\n"
        )

    def test_engine_winners_take_precedence_over_eligibility(self, mock_table):
        mock_table.winners.return_value = [[2]]
        assert format_winners(mock_table, [Pot(150, (1, 2))]) == (
            "*** Showdown ***\n  BB wins 150\n\n"
        )

    def test_falls_back_to_first_eligible_without_engine_winners(self, mock_table):
        mock_table.winners.return_value = []
        assert format_winners(mock_table, [Pot(150, (2, 1)), Pot(40, (1,))]) == (
            "*** Showdown ***\n  BB wins 150\n\n"
        )

    def test_nothing_to_award(self, mock_table):
        assert format_winners(mock_table, []) == "*** Showdown ***\n\n"
