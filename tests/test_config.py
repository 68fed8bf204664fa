"""Tests for configuration loading."""

from unittest.mock import patch

import pytest

from core.config import DEFAULT_HOST, DEFAULT_PORT, WikiConfig, load_config
from core.errors import ConfigurationError

_ENV_VARS = (
    "MEDIAWIKI_BASE_URL",
    "MEDIAWIKI_API_TOKEN",
    "MEDIAWIKI_USERNAME",
    "MEDIAWIKI_PASSWORD",
    "MEDIAWIKI_MCP_HOST",
    "MEDIAWIKI_MCP_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_missing_base_url_is_fatal() -> None:
    """Test that load_config refuses to start without MEDIAWIKI_BASE_URL."""
    with patch("core.config.load_dotenv"):
        with pytest.raises(ConfigurationError, match="MEDIAWIKI_BASE_URL"):
            load_config()


def test_loads_base_url_and_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAWIKI_BASE_URL", "https://wiki.example.org/w/")
    monkeypatch.setenv("MEDIAWIKI_API_TOKEN", "secret-token")
    monkeypatch.setenv("MEDIAWIKI_USERNAME", "bot")

    with patch("core.config.load_dotenv"):
        settings = load_config()

    assert settings.wiki.base_url == "https://wiki.example.org/w"
    assert settings.wiki.api_token == "secret-token"
    assert settings.wiki.username == "bot"
    assert settings.wiki.password is None


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAWIKI_BASE_URL", "https://wiki.example.org")

    with patch("core.config.load_dotenv"):
        settings = load_config()

    assert settings.host == DEFAULT_HOST
    assert settings.port == DEFAULT_PORT
    assert settings.log_level == "INFO"
    assert settings.wiki.api_token is None


def test_custom_host_port_and_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAWIKI_BASE_URL", "https://wiki.example.org")
    monkeypatch.setenv("MEDIAWIKI_MCP_HOST", "0.0.0.0")
    monkeypatch.setenv("MEDIAWIKI_MCP_PORT", "8008")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    with patch("core.config.load_dotenv"):
        settings = load_config()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8008
    assert settings.log_level == "DEBUG"


def test_non_integer_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAWIKI_BASE_URL", "https://wiki.example.org")
    monkeypatch.setenv("MEDIAWIKI_MCP_PORT", "eighty")

    with patch("core.config.load_dotenv"):
        with pytest.raises(ConfigurationError, match="MEDIAWIKI_MCP_PORT"):
            load_config()


def test_wiki_config_strips_trailing_slash() -> None:
    assert WikiConfig(base_url="https://wiki.example.org///").base_url == "https://wiki.example.org"


def test_wiki_config_rejects_blank_base_url() -> None:
    with pytest.raises(ConfigurationError):
        WikiConfig(base_url="   ")


def test_password_is_not_in_repr() -> None:
    config = WikiConfig(base_url="https://wiki.example.org", password="hunter2")
    assert "hunter2" not in repr(config)
