import json
import logging

import pytest

from cardbot.config import DEFAULT_API_URL, Settings
from cardbot.logging_config import JSONFormatter, describe_origin, setup_logging

ENV_VARS = [
    "DISCORD_BOT_TOKEN",
    "COMMAND_PREFIX",
    "SCRYFALL_API_URL",
    "HTTP_TIMEOUT",
    "PAGER_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # set first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env()

        assert settings.discord_token is None
        assert settings.command_prefix == "!"
        assert settings.api_url == DEFAULT_API_URL
        assert settings.http_timeout == 10.0
        assert settings.pager_timeout == 300.0
        assert settings.log_format == "text"

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
        monkeypatch.setenv("COMMAND_PREFIX", "?")
        monkeypatch.setenv("SCRYFALL_API_URL", "https://mirror.example/")
        monkeypatch.setenv("PAGER_TIMEOUT", "60")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.discord_token == "secret"
        assert settings.command_prefix == "?"
        assert settings.api_url == "https://mirror.example"
        assert settings.pager_timeout == 60.0
        assert settings.log_format == "json"
        assert settings.log_level == "DEBUG"

    def test_reads_dotenv_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("COMMAND_PREFIX=$\n", encoding="utf-8")
        assert Settings.from_env().command_prefix == "$"

    def test_invalid_number(self, monkeypatch) -> None:
        monkeypatch.setenv("HTTP_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="HTTP_TIMEOUT"):
            Settings.from_env()

    def test_invalid_log_format(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="LOG_FORMAT"):
            Settings.from_env()


class TestLogging:
    def test_json_formatter_drops_empty_fields(self) -> None:
        record = logging.LogRecord("cardbot.test", logging.INFO, __file__, 1, "hello", None, None)
        record.command = "card"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello"
        assert data["command"] == "card"
        assert "error" not in data

    def test_setup_logging_writes_rotating_file(self, tmp_path) -> None:
        settings = Settings(log_dir=str(tmp_path / "logs"), log_format="json")

        logger = setup_logging(settings)
        logger.getChild("test").info("written")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "logs" / "cardbot.log").read_text(encoding="utf-8")
        assert json.loads(content.splitlines()[-1])["message"] == "written"

        # reconfiguring replaces handlers
        setup_logging(Settings())
        assert len(logger.handlers) == 1

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True

    def test_describe_origin(self) -> None:
        class Named:
            def __init__(self, name):
                self.name = name

        class Message:
            guild = Named("Judges")
            channel = Named("rules")
            author = Named("alice")

        assert describe_origin(Message(), "card", "goyf") == "[Judges#rules] [alice] [card] goyf"

    def test_describe_origin_direct_message(self) -> None:
        class Message:
            guild = None
            channel = object()
            author = "bob#0001"

        assert describe_origin(Message(), "price") == "[direct message] [bob#0001] [price]"
