"""CLI entry point: python -m chipreplay <hand.chip>"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from chipreplay.config import ChipConfig, ConfigError, load_config
from chipreplay.core.interpreter import parse_chip
from chipreplay.core.types import ChipParseError
from chipreplay.render import colorize


def _read_document(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    with open(source) as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="chipreplay",
        description="Replay a CHIP poker hand and print its transcript",
    )
    parser.add_argument(
        "source",
        help="Path to a CHIP file, or - to read stdin",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="YAML config with table defaults and parsing options",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the transcript to this file instead of stdout",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        default=False,
        help="Color street headers and cards",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log parsing decisions to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.source != "-" and not Path(args.source).exists():
        print(f"Error: CHIP file not found: {args.source}", file=sys.stderr)
        sys.exit(1)

    config = ChipConfig()
    if args.config:
        if not args.config.exists():
            print(f"Error: config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        try:
            config = load_config(args.config)
        except ConfigError as e:
            print(f"Error: invalid config: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        transcript = parse_chip(_read_document(args.source), config)
    except ChipParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        args.output.write_text(transcript)
        print(f"Transcript: {args.output}")
    elif args.color:
        Console(highlight=False).print(colorize(transcript), end="")
    else:
        sys.stdout.write(transcript)


if __name__ == "__main__":
    main()
