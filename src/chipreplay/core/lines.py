"""Line classifier for CHIP documents.

Each predicate looks at one line in isolation. A line can satisfy several
grammars at once (``"100 200 300"`` is both a stacks and an actions line);
the interpreter picks the reading from the table state.
"""

from __future__ import annotations

import re

from chipreplay.core.tokens import NO_REVEAL, NUMBER_RE, SAME_STACK, scan_cards
from chipreplay.core.types import LineKind

__all__ = [
    "NOISE_PREFIXES",
    "classify",
    "is_actions_line",
    "is_cards_line",
    "is_noise_line",
    "is_stacks_line",
]

ACTION_RE = re.compile(r"^[fxc]$", re.IGNORECASE)

NOISE_PREFIXES = ("#", "//", "Note:")


def is_stacks_line(line: str) -> bool:
    """Every token is ``-`` or a chip amount."""
    tokens = line.split()
    return bool(tokens) and all(t == SAME_STACK or NUMBER_RE.match(t) for t in tokens)


def is_actions_line(line: str) -> bool:
    """Every token is ``f``, ``x``, ``c`` or a chip amount."""
    tokens = line.split()
    return bool(tokens) and all(ACTION_RE.match(t) or NUMBER_RE.match(t) for t in tokens)


def is_cards_line(line: str, no_reveal: str = NO_REVEAL) -> bool:
    """Every token scans into cards or no-reveal markers with nothing left over."""
    tokens = line.split()
    return bool(tokens) and all(scan_cards(t, no_reveal) is not None for t in tokens)


def is_noise_line(line: str, prefixes: tuple[str, ...] = NOISE_PREFIXES) -> bool:
    """Comment lines. Prefix match is case-sensitive."""
    return line.strip().startswith(tuple(prefixes))


def classify(
    line: str,
    no_reveal: str = NO_REVEAL,
    noise_prefixes: tuple[str, ...] = NOISE_PREFIXES,
) -> frozenset[LineKind]:
    """Return every kind the line satisfies. Empty set for unrecognized lines."""
    kinds = set()
    if is_noise_line(line, noise_prefixes):
        kinds.add(LineKind.NOISE)
    if is_stacks_line(line):
        kinds.add(LineKind.STACKS)
    if is_actions_line(line):
        kinds.add(LineKind.ACTIONS)
    if is_cards_line(line, no_reveal):
        kinds.add(LineKind.CARDS)
    return frozenset(kinds)
