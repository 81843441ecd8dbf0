"""chipreplay: replay CHIP poker hand notation into readable transcripts."""

__version__ = "0.1.0"

from chipreplay.core.interpreter import parse_chip
from chipreplay.core.types import ChipParseError

__all__ = ["ChipParseError", "parse_chip", "__version__"]
