"""CHIP interpreter: replays a document against a table and builds the transcript.

Line 1 holds the table settings and line 2 the starting stacks. Every later
line is read according to the table state:

- between hands, a stacks line rebuys or tops up before the next hand starts;
- an actions line is replayed for the players to act;
- a cards line is a showdown reveal once betting is over, a peek at the
  next player's hand in the middle of a round, and the board at the start
  of a flop, turn or river.

Lines that fit none of these are ignored.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Callable

from chipreplay.config import ChipConfig
from chipreplay.core.driver import reveal_hole_cards, take_actions, update_stacks
from chipreplay.core.lines import classify
from chipreplay.core.tokens import parse_actions, parse_cards, parse_stacks, parse_table_settings
from chipreplay.core.transcript import (
    format_actions,
    format_community_cards,
    format_forced_bets,
    format_hole_cards,
    format_player_to_act,
    format_positions,
    format_stacks,
    format_winners,
)
from chipreplay.core.types import ChipParseError, LineKind
from chipreplay.engine.base import Card, ForcedBets, RoundOfBetting, TableEngine
from chipreplay.engine.table import HoldemTable

__all__ = ["ChipInterpreter", "TableFactory", "parse_chip", "split_lines"]

logger = logging.getLogger(__name__)

TableFactory = Callable[[ForcedBets, int], TableEngine]

_NEWLINE_RE = re.compile(r"\r?\n")


def split_lines(document: str, config: ChipConfig) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` for every line that carries content.

    Blank and comment lines are dropped; line numbers are 1-based positions
    in the input document.
    """
    lines = []
    for number, text in enumerate(_NEWLINE_RE.split(document), start=1):
        if not text.strip():
            continue
        if LineKind.NOISE in classify(text, config.no_reveal, config.noise_prefixes):
            logger.debug("Line %d is a comment", number)
            continue
        lines.append((number, text))
    return lines


class ChipInterpreter:
    """Replays one CHIP document. Create a new instance per document."""

    def __init__(self, config: ChipConfig | None = None, table_factory: TableFactory | None = None):
        self.config = config or ChipConfig()
        self.table_factory = table_factory or HoldemTable
        self.table: TableEngine | None = None
        self.community_cards: list[Card] = []

    def run(self, document: str) -> str:
        lines = split_lines(document, self.config)
        if len(lines) < 2:
            raise ChipParseError("A CHIP document needs a table settings line and a stacks line")

        (_, settings_line), (stacks_number, stacks_line) = lines[0], lines[1]
        settings = parse_table_settings(settings_line, self.config.defaults.to_settings())
        logger.debug("Table settings: %s", settings)

        self.table = self.table_factory(settings.forced_bets, settings.num_seats)
        output = format_forced_bets(self.table)

        with _at_line(stacks_number):
            update_stacks(self.table, parse_stacks(stacks_line))
            output += format_stacks(self.table)
            output += self._start_hand(settings.button_seat)

        for number, line in lines[2:]:
            with _at_line(number):
                output += self._feed(number, line)
        return output

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def _feed(self, number: int, line: str) -> str:
        table = self.table
        kinds = classify(line, self.config.no_reveal, self.config.noise_prefixes)
        output = ""

        if not table.is_hand_in_progress():
            rebuy = LineKind.STACKS in kinds
            if rebuy:
                update_stacks(table, parse_stacks(line))
            output += format_stacks(table)
            output += self._start_hand()
            if rebuy:
                return output

        if LineKind.ACTIONS in kinds:
            output += self._actions(line)
        elif LineKind.CARDS in kinds:
            output += self._cards(line)
        else:
            logger.debug("Line %d skipped: %r", number, line)
        return output

    def _start_hand(self, button: int | None = None) -> str:
        self.table.start_hand(button)
        self.community_cards = []
        logger.debug("Hand started, button on seat %d", self.table.button() + 1)
        output = format_positions(self.table)
        self._close_idle_round()
        return output

    def _actions(self, line: str) -> str:
        table = self.table
        results = take_actions(table, parse_actions(line))
        output = format_actions(table, results)

        if table.is_betting_round_in_progress():
            return output
        table.end_betting_round()
        pots = table.pots()
        if table.are_betting_rounds_completed() and pots and len(pots[0].eligible_players) == 1:
            logger.debug("Uncontested pot, showing down without a reveal")
            table.showdown()
            output += format_winners(table, pots)
        return output

    def _cards(self, line: str) -> str:
        table = self.table
        no_reveal = self.config.no_reveal
        cards = parse_cards(line, no_reveal)

        if table.are_betting_rounds_completed():
            hole_cards = reveal_hole_cards(table, cards, strict=self.config.strict_showdown)
            output = format_hole_cards(table, hole_cards, no_reveal)
            pots = table.pots()
            table.manual_showdown(list(self.community_cards), hole_cards)
            return output + format_winners(table, pots)

        if table.is_in_middle_of_betting_round() or (
            table.round_of_betting() == RoundOfBetting.PREFLOP
            and table.is_betting_round_in_progress()
        ):
            return format_player_to_act(table, cards, no_reveal)

        if table.is_at_start_of_betting_round():
            if any(card is None for card in cards):
                raise ChipParseError("Community cards cannot be unrevealed")
            self.community_cards.extend(cards)
            output = format_community_cards(table, cards)
            self._close_idle_round()
            return output

        return ""

    def _close_idle_round(self) -> None:
        """End a street nobody can act on, so the next board card opens the next one."""
        table = self.table
        if (
            table.is_hand_in_progress()
            and not table.are_betting_rounds_completed()
            and not table.is_betting_round_in_progress()
        ):
            logger.debug("No one left to act on %s", table.round_of_betting().name.lower())
            table.end_betting_round()


@contextmanager
def _at_line(number: int):
    """Attach a line number to ChipParseErrors raised inside the block."""
    try:
        yield
    except ChipParseError as e:
        if e.line_number is not None:
            raise
        raise ChipParseError(e.details, number) from e


def parse_chip(
    document: str,
    config: ChipConfig | None = None,
    table_factory: TableFactory | None = None,
) -> str:
    """Interpret a CHIP document and return its transcript.

    Raises ChipParseError for fatal input errors and lets the table
    engine's ValueErrors through unchanged.
    """
    return ChipInterpreter(config, table_factory).run(document)
