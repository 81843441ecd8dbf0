"""Interpreter configuration loader."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path

from chipreplay.core.lines import NOISE_PREFIXES
from chipreplay.core.schemas import load_schema, schema_error
from chipreplay.core.tokens import NO_REVEAL
from chipreplay.core.types import TableSettings

__all__ = ["ChipConfig", "ConfigError", "TableDefaults", "load_config", "parse_config"]


class ConfigError(ValueError):
    """Config file does not match schemas/config.json."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


@dataclass
class TableDefaults:
    """Fallback table settings. button_seat is 1-based, as in CHIP."""

    small_blind: int = 1
    big_blind: int = 2
    ante: int = 0
    num_seats: int = 6
    button_seat: int = 5

    def to_settings(self) -> TableSettings:
        return TableSettings(
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            ante=self.ante,
            num_seats=self.num_seats,
            button_seat=self.button_seat - 1,
        )


@dataclass
class ChipConfig:
    defaults: TableDefaults = field(default_factory=TableDefaults)
    no_reveal: str = NO_REVEAL
    noise_prefixes: tuple[str, ...] = NOISE_PREFIXES
    strict_showdown: bool = False  # reject reveals without two cards per player


def parse_config(raw: dict | None, path: Path | None = None) -> ChipConfig:
    """Validate a decoded config mapping and build a ChipConfig."""
    raw = raw or {}
    error = schema_error(raw, load_schema("config"))
    if error:
        raise ConfigError(error, path)

    d = raw.get("defaults", {})
    defaults = TableDefaults(
        small_blind=d.get("small_blind", 1),
        big_blind=d.get("big_blind", 2),
        ante=d.get("ante", 0),
        num_seats=d.get("num_seats", 6),
        button_seat=d.get("button_seat", 5),
    )
    if defaults.button_seat > defaults.num_seats:
        raise ConfigError(
            f"defaults/button_seat: {defaults.button_seat} is past seat {defaults.num_seats}",
            path,
        )

    return ChipConfig(
        defaults=defaults,
        no_reveal=raw.get("no_reveal", NO_REVEAL),
        noise_prefixes=tuple(raw.get("noise_prefixes", NOISE_PREFIXES)),
        strict_showdown=raw.get("strict_showdown", False),
    )


def load_config(path: Path) -> ChipConfig:
    """Load interpreter config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw, Path(path))
