"""Tests for chip amount, card, stacks, actions and settings tokenizing."""

import logging
import math

import pytest

from chipreplay.core.tokens import (
    parse_actions,
    parse_cards,
    parse_number,
    parse_stacks,
    parse_table_settings,
    scan_cards,
    to_chips,
)
from chipreplay.core.types import NO_CHANGE, Card, Suit, TableSettings


class TestParseNumber:
    def test_thousands_suffix(self):
        assert parse_number("50k") == 50000

    def test_millions_suffix_with_fraction(self):
        assert parse_number("2.5m") == 2500000

    def test_suffix_is_case_insensitive(self):
        assert parse_number("1.5K") == 1500
        assert parse_number("3M") == 3000000

    def test_plain_numbers(self):
        assert parse_number("100") == 100
        assert parse_number("12.5") == 12.5

    def test_whitespace_is_trimmed(self):
        assert parse_number("  25k ") == 25000

    def test_numeric_input_passes_through(self):
        assert parse_number(42) == 42

    @pytest.mark.parametrize("token", ["", "abc", "k", "1x", "1.2.3", "m5"])
    def test_garbage_is_nan(self, token):
        assert math.isnan(parse_number(token))


class TestToChips:
    def test_whole_chips(self):
        assert to_chips("12.5k") == 12500
        assert to_chips("1.1k") == 1100

    def test_unparsable_raises(self):
        with pytest.raises(ValueError, match="Not a chip amount"):
            to_chips("lots")


class TestParseCards:
    def test_concatenated(self):
        assert parse_cards("2h3s4c5h") == [
            Card("2", Suit.HEARTS),
            Card("3", Suit.SPADES),
            Card("4", Suit.CLUBS),
            Card("5", Suit.HEARTS),
        ]

    def test_mixed_spacing_and_case(self):
        assert parse_cards("ahkd qc5h") == [
            Card("A", Suit.HEARTS),
            Card("K", Suit.DIAMONDS),
            Card("Q", Suit.CLUBS),
            Card("5", Suit.HEARTS),
        ]

    def test_no_reveal_letter(self):
        assert parse_cards("n") == [None]
        assert parse_cards("AhN") == [Card("A", Suit.HEARTS), None]

    def test_custom_no_reveal_letter(self):
        assert parse_cards("x Ah", no_reveal="x") == [None, Card("A", Suit.HEARTS)]

    def test_bad_fragments_are_skipped(self):
        assert parse_cards("Ah 1x Kd") == [Card("A", Suit.HEARTS), Card("K", Suit.DIAMONDS)]

    def test_trailing_character_is_skipped(self):
        assert parse_cards("AhK") == [Card("A", Suit.HEARTS)]


class TestScanCards:
    def test_clean_input(self):
        assert scan_cards("ahkd") == [Card("A", Suit.HEARTS), Card("K", Suit.DIAMONDS)]

    def test_leftover_character(self):
        assert scan_cards("Ahh") is None

    def test_bad_rank(self):
        assert scan_cards("1h") is None

    def test_no_reveal(self):
        assert scan_cards("n") == [None]

    def test_action_letters_are_not_cards(self):
        assert scan_cards("f") is None
        assert scan_cards("c") is None


class TestParseStacks:
    def test_amounts_and_placeholders(self):
        assert parse_stacks("12.5k 25k - 0") == [12500, 25000, NO_CHANGE, 0]

    def test_unreadable_stack_empties_seat(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_stacks("abc 100") == [0, 100]
        assert "Unreadable stack" in caplog.text


class TestParseActions:
    def test_letters_and_amounts(self):
        assert parse_actions("F x C 150 2.5k") == ["f", "x", "c", 150, 2500]

    def test_unknown_tokens_kept(self):
        assert parse_actions("f ai") == ["f", "ai"]


class TestParseTableSettings:
    def test_five_tokens(self):
        assert parse_table_settings("25 50 10 6 5") == TableSettings(
            small_blind=25, big_blind=50, ante=10, num_seats=6, button_seat=4
        )

    def test_four_tokens_omit_ante(self):
        settings = parse_table_settings("1k 2k 9 3")
        assert settings == TableSettings(
            small_blind=1000, big_blind=2000, ante=0, num_seats=9, button_seat=2
        )

    def test_button_on_first_seat(self):
        assert parse_table_settings("1 2 6 1").button_seat == 0

    def test_wrong_arity_uses_defaults(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_table_settings("1 2 3") == TableSettings()
        assert "using defaults" in caplog.text

    def test_non_numeric_uses_defaults(self):
        assert parse_table_settings("blinds 1 2 6 1") == TableSettings()

    def test_zero_fields_fall_back_individually(self):
        settings = parse_table_settings("0 0 0 0 0")
        assert settings == TableSettings(
            small_blind=1, big_blind=2, ante=0, num_seats=6, button_seat=4
        )

    def test_button_off_the_table(self):
        # Default button (index 4) does not fit a 3-seat table either
        assert parse_table_settings("10 20 3 7").button_seat == 0

    def test_custom_defaults(self):
        defaults = TableSettings(small_blind=5, big_blind=10, ante=1, num_seats=9, button_seat=0)
        assert parse_table_settings("", defaults) is defaults
        assert parse_table_settings("50 100 9 2 3", defaults).ante == 2

    def test_omitted_ante_ignores_default_ante(self):
        defaults = TableSettings(small_blind=5, big_blind=10, ante=1, num_seats=9, button_seat=0)
        assert parse_table_settings("50 100 9 2", defaults).ante == 0
