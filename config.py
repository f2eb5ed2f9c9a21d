"""
Centralized configuration for the ETH price bot.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from services.error_codes import CONFIG_MISSING

load_dotenv()


class ConfigMissingError(EnvironmentError):
    """Raised at startup when a required secret is not set."""

    code = CONFIG_MISSING

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variable(s): {', '.join(missing)}")


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Secrets:
    discord_token: str
    etherscan_api_key: str


REQUIRED_SECRETS = ("DISCORD_TOKEN", "ETHERSCAN_API_KEY")


def load_secrets() -> Secrets:
    """
    Read the platform token and price API key from the environment.

    Raises:
        ConfigMissingError: if either variable is unset or blank
    """
    values = {name: (os.getenv(name) or "").strip() for name in REQUIRED_SECRETS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigMissingError(missing)
    return Secrets(
        discord_token=values["DISCORD_TOKEN"],
        etherscan_api_key=values["ETHERSCAN_API_KEY"],
    )


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "!")
COMMAND_DELIMITERS: tuple[str, ...] = (", ", " ")
IGNORE_BOTS = _parse_bool("IGNORE_BOTS", True)

# Etherscan price API
ETHERSCAN_API_URL = os.getenv("ETHERSCAN_API_URL", "https://api.etherscan.io/api")
PRICE_API_TIMEOUT_SECONDS = _parse_float("PRICE_API_TIMEOUT_SECONDS", 10.0)

# "emoji" bucket: pacing only, one use per user every N seconds
EMOJI_BUCKET_DELAY_SECONDS = _parse_float("EMOJI_BUCKET_DELAY_SECONDS", 5.0)

# "complicated" bucket: N uses per channel per window
COMPLICATED_BUCKET_LIMIT = _parse_int("COMPLICATED_BUCKET_LIMIT", 2)
COMPLICATED_BUCKET_WINDOW_SECONDS = _parse_float("COMPLICATED_BUCKET_WINDOW_SECONDS", 30.0)
COMPLICATED_BUCKET_AWAIT_LIMIT = _parse_int("COMPLICATED_BUCKET_AWAIT_LIMIT", 1)
