"""Environment-driven settings for the card bot."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv


DEFAULT_API_URL = "https://api.scryfall.com"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class Settings:
    """Runtime configuration, usually built with ``Settings.from_env()``."""

    discord_token: Optional[str] = None
    command_prefix: str = "!"
    api_url: str = DEFAULT_API_URL
    http_timeout: float = 10.0
    pager_timeout: float = 300.0
    log_level: str = "INFO"
    log_format: str = "text"
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the process environment and an optional .env file."""
        load_dotenv(find_dotenv(usecwd=True))

        log_format = os.getenv("LOG_FORMAT", "text").lower()
        if log_format not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {log_format!r}")

        return cls(
            discord_token=os.getenv("DISCORD_BOT_TOKEN"),
            command_prefix=os.getenv("COMMAND_PREFIX", "!"),
            api_url=os.getenv("SCRYFALL_API_URL", DEFAULT_API_URL).rstrip("/"),
            http_timeout=_float_env("HTTP_TIMEOUT", 10.0),
            pager_timeout=_float_env("PAGER_TIMEOUT", 300.0),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
            log_dir=os.getenv("LOG_DIR") or None,
        )
