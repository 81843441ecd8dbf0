"""Tests for config loading and schema validation."""

from pathlib import Path

import pytest

from chipreplay.config import ChipConfig, ConfigError, TableDefaults, load_config, parse_config
from chipreplay.core.schemas import load_schema, schema_error
from chipreplay.core.types import TableSettings

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "chip.yaml.example"


class TestTableDefaults:
    def test_builtin_defaults(self):
        assert TableDefaults().to_settings() == TableSettings()

    def test_button_converts_to_index(self):
        assert TableDefaults(button_seat=1).to_settings().button_seat == 0


class TestLoadConfig:
    def test_example_config_loads(self):
        config = load_config(EXAMPLE_CONFIG)
        assert config == ChipConfig()

    def test_overrides(self, tmp_path):
        path = tmp_path / "chip.yaml"
        path.write_text(
            "defaults:\n"
            "  small_blind: 50\n"
            "  big_blind: 100\n"
            "  num_seats: 9\n"
            "  button_seat: 1\n"
            "no_reveal: x\n"
            "noise_prefixes: ['--']\n"
            "strict_showdown: true\n"
        )
        config = load_config(path)
        assert config.defaults == TableDefaults(
            small_blind=50, big_blind=100, ante=0, num_seats=9, button_seat=1
        )
        assert config.no_reveal == "x"
        assert config.noise_prefixes == ("--",)
        assert config.strict_showdown is True

    def test_empty_file_is_all_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ChipConfig()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("blinds: [1, 2]\n")
        with pytest.raises(ConfigError, match="bad.yaml"):
            load_config(path)


class TestParseConfig:
    def test_rank_letter_cannot_mean_hidden_card(self):
        with pytest.raises(ConfigError, match="no_reveal"):
            parse_config({"no_reveal": "A"})

    def test_seat_count_bounds(self):
        with pytest.raises(ConfigError, match="defaults/num_seats"):
            parse_config({"defaults": {"num_seats": 12}})

    def test_button_past_last_seat(self):
        with pytest.raises(ConfigError, match="button_seat"):
            parse_config({"defaults": {"num_seats": 3, "button_seat": 5}})

    def test_config_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_config({"strict_showdown": "yes"})


class TestSchemas:
    def test_bare_name_resolves_to_bundled_schema(self):
        schema = load_schema("config")
        assert schema["type"] == "object"
        assert "defaults" in schema["properties"]

    def test_schema_error_message(self):
        error = schema_error({"defaults": {"ante": -1}}, load_schema("config"))
        assert error.startswith("defaults/ante: ")

    def test_valid_document(self):
        assert schema_error({"strict_showdown": False}, load_schema("config")) is None
