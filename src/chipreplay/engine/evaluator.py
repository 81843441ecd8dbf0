"""Hold'em hand strength scoring for the table engine's showdown.

Scores are plain integers: the hand category sits above bit 20 and up to
five tie-break ranks are packed 4 bits each below it, so comparing two
scores compares the hands.
"""

from __future__ import annotations

import itertools
from collections import Counter
from enum import IntEnum

from chipreplay.engine.base import RANKS, Card

__all__ = ["HandRank", "score_five", "best_score"]

RANK_VALUE: dict[str, int] = {r: i for i, r in enumerate(RANKS)}

_WHEEL = [12, 3, 2, 1, 0]


class HandRank(IntEnum):
    """Hand categories ordered from weakest to strongest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


def _pack(category: HandRank, ranks: list[int]) -> int:
    score = 0
    for i, value in enumerate(ranks[:5]):
        score |= value << (4 * (4 - i))
    return (category << 20) | score


def _straight_high(values: list[int]) -> int | None:
    """Return the top rank of a straight, or None. The wheel tops out at 5."""
    distinct = sorted(set(values), reverse=True)
    if len(distinct) != 5:
        return None
    if distinct[0] - distinct[4] == 4:
        return distinct[0]
    if distinct == _WHEEL:
        return 3
    return None


def score_five(hand: list[Card]) -> int:
    """Score exactly five cards. Higher is better."""
    if len(hand) != 5:
        raise ValueError(f"Expected 5 cards, got {len(hand)}")

    values = sorted((RANK_VALUE[c.rank] for c in hand), reverse=True)
    flush = len({c.suit for c in hand}) == 1
    high = _straight_high(values)

    if flush and high is not None:
        return _pack(HandRank.STRAIGHT_FLUSH, [high])
    score = _score_groups(values)
    if score >> 20 >= HandRank.FULL_HOUSE:
        return score
    if flush:
        return _pack(HandRank.FLUSH, values)
    if high is not None:
        return _pack(HandRank.STRAIGHT, [high])
    return score


def _score_groups(values: list[int]) -> int:
    """Score by rank groups alone: quads, full house, trips, pairs, kickers."""
    # (count, rank) pairs, biggest group first, ties by rank
    groups = sorted(Counter(values).items(), key=lambda g: (g[1], g[0]), reverse=True)
    shape = [count for _, count in groups]
    by_group = [rank for rank, _ in groups]

    if shape[0] == 4:
        return _pack(HandRank.FOUR_OF_A_KIND, by_group)
    if shape[:2] == [3, 2]:
        return _pack(HandRank.FULL_HOUSE, by_group)
    if shape[0] == 3:
        return _pack(HandRank.THREE_OF_A_KIND, by_group)
    if shape[:2] == [2, 2]:
        return _pack(HandRank.TWO_PAIR, by_group)
    if shape[0] == 2:
        return _pack(HandRank.PAIR, by_group)
    return _pack(HandRank.HIGH_CARD, sorted(values, reverse=True))


def best_score(cards: list[Card]) -> int:
    """Score the best five-card hand available in ``cards`` (hole + board).

    With fewer than five cards (a board that was never recorded) only rank
    groups and kickers count; straights and flushes need five cards.
    """
    if not cards:
        raise ValueError("No cards to score")
    if len(cards) < 5:
        return _score_groups([RANK_VALUE[c.rank] for c in cards])
    return max(score_five(list(combo)) for combo in itertools.combinations(cards, 5))
