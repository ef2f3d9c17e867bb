"""Logging configuration for the bot: stdout plus optional daily rotating JSON logs."""

import logging
import logging.handlers
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from .config import Settings

TEXT_PATTERN = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"
TEXT_DATEFMT = "%y/%m/%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "command": getattr(record, "command", None),
            "query": getattr(record, "query", None),
            "guild": getattr(record, "guild", None),
            "user": getattr(record, "user", None),
            "execution_time_ms": getattr(record, "execution_time_ms", None),
            "success": getattr(record, "success", None),
            "error": getattr(record, "error", None),
            "message": record.getMessage(),
        }

        # Remove None values to keep logs clean
        log_data = {k: v for k, v in log_data.items() if v is not None}

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the ``cardbot`` logger tree from settings."""
    logger = logging.getLogger("cardbot")
    logger.setLevel(settings.log_level)

    # Reconfiguring replaces our own handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        stream.setFormatter(JSONFormatter())
    else:
        stream.setFormatter(logging.Formatter(TEXT_PATTERN, datefmt=TEXT_DATEFMT))
    logger.addHandler(stream)

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_dir / "cardbot.log"),
            when="midnight",
            interval=1,
            backupCount=30,  # Keep 30 days of logs
            encoding="utf-8",
            utc=True,
        )
        # Set filename suffix for rotated files (YYYY-MM-DD)
        handler.suffix = "%Y-%m-%d"
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

    # Prevent duplicate logs from propagating to root logger
    logger.propagate = False

    # discord.py is chatty at DEBUG; keep it at our level or quieter
    logging.getLogger("discord").setLevel(max(logger.level, logging.INFO))

    return logger


def describe_origin(message, action: str, detail: str = "") -> str:
    """
    Build a log prefix describing where a command came from.

    Example: ``[Judge Chat#rules] [alice] [card] tarmogoyf``
    """
    guild = getattr(message, "guild", None)
    channel = getattr(message, "channel", None)
    channel_name = getattr(channel, "name", None)

    where = guild.name if guild else "direct message"
    if channel_name:
        where += f"#{channel_name}"

    author = getattr(message, "author", None)
    who = getattr(author, "name", None) or str(author)

    parts = [f"[{where}]", f"[{who}]", f"[{action}]"]
    if detail:
        parts.append(detail)
    return " ".join(parts)
