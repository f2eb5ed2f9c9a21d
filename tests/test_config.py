"""Tests for config.py parsing and secret loading."""

import pytest

import config
from config import ConfigMissingError, load_secrets


class TestLoadSecrets:
    def test_returns_both_secrets(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "token-123")
        monkeypatch.setenv("ETHERSCAN_API_KEY", "key-456")

        secrets = load_secrets()

        assert secrets.discord_token == "token-123"
        assert secrets.etherscan_api_key == "key-456"

    def test_missing_token_fails_fast(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        monkeypatch.setenv("ETHERSCAN_API_KEY", "key-456")

        with pytest.raises(ConfigMissingError) as exc_info:
            load_secrets()

        assert exc_info.value.missing == ["DISCORD_TOKEN"]
        assert "DISCORD_TOKEN" in str(exc_info.value)

    def test_reports_every_missing_secret(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        monkeypatch.setenv("ETHERSCAN_API_KEY", "   ")

        with pytest.raises(ConfigMissingError) as exc_info:
            load_secrets()

        assert exc_info.value.missing == ["DISCORD_TOKEN", "ETHERSCAN_API_KEY"]

    def test_config_missing_is_an_environment_error(self):
        assert issubclass(ConfigMissingError, EnvironmentError)


class TestParseHelpers:
    def test_parse_int(self, monkeypatch):
        monkeypatch.setenv("TEST_INT", "42")
        assert config._parse_int("TEST_INT", 1) == 42

    def test_parse_int_bad_value_uses_default(self, monkeypatch):
        monkeypatch.setenv("TEST_INT", "forty")
        assert config._parse_int("TEST_INT", 7) == 7

    def test_parse_float_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("TEST_FLOAT", raising=False)
        assert config._parse_float("TEST_FLOAT", 2.5) == 2.5

    @pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("no", False)])
    def test_parse_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("TEST_BOOL", raw)
        assert config._parse_bool("TEST_BOOL", not expected) is expected


def test_defaults_match_documented_values():
    assert config.COMMAND_DELIMITERS == (", ", " ")
    assert config.ETHERSCAN_API_URL.startswith("https://")
