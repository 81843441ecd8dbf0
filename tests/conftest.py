"""Shared test fixtures for chipreplay."""

from unittest.mock import MagicMock

import pytest

from chipreplay.engine import ForcedBets, HoldemTable, Player, RoundOfBetting, TableEngine


@pytest.fixture
def three_handed():
    """Seats 0-2 with 100/200/300 chips, blinds 1/2, first hand started (button 0)."""
    table = HoldemTable(ForcedBets(small_blind=1, big_blind=2), num_seats=6)
    table.sit_down(0, 100)
    table.sit_down(1, 200)
    table.sit_down(2, 300)
    table.start_hand()
    return table


@pytest.fixture
def mock_table():
    """A TableEngine mock: three seated players, button 0, preflop round open."""
    table = MagicMock(spec=TableEngine)
    players = [Player(stack=100), Player(stack=100), Player(stack=100)]
    table.forced_bets.return_value = ForcedBets(small_blind=1, big_blind=2)
    table.num_seats.return_value = 3
    table.seats.return_value = players
    table.initial_hand_players.return_value = players
    table.hand_players.return_value = players
    table.button.return_value = 0
    table.player_to_act.return_value = 0
    table.round_of_betting.return_value = RoundOfBetting.PREFLOP
    table.is_hand_in_progress.return_value = True
    table.is_betting_round_in_progress.return_value = True
    table.is_in_middle_of_betting_round.return_value = False
    table.is_at_start_of_betting_round.return_value = True
    table.are_betting_rounds_completed.return_value = False
    table.pots.return_value = []
    table.winners.return_value = []
    return table
