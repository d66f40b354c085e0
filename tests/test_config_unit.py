"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from rss_whatsapp_bot.config import DEFAULT_WHAPI_ENDPOINT, Config, WhatsAppConfig
from rss_whatsapp_bot.exceptions import ConfigurationError

REQUIRED_ENV = {"WHATSAPP_API_TOKEN": "token-123", "WHATSAPP_CHANNEL": "chan@newsletter"}


class TestConfigUnit:
    """Unit tests for Config class."""

    def test_defaults(self):
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            config = Config()
            config.validate()

        assert config.feeds_file == "feeds.json"
        assert config.endpoint == DEFAULT_WHAPI_ENDPOINT
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.feed_timeout is None

    def test_environment_overrides(self):
        env = {
            **REQUIRED_ENV,
            "FEEDS_FILE": "/data/feeds.json",
            "WHAPI_ENDPOINT": "https://whapi.example.com/messages/text",
            "FEED_TIMEOUT": "12.5",
            "LOG_LEVEL": "debug",
            "LOG_FORMAT": "JSON",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config()
            config.validate()

        assert config.feeds_file == "/data/feeds.json"
        assert config.endpoint == "https://whapi.example.com/messages/text"
        assert config.feed_timeout == 12.5
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_arguments_override_environment(self):
        env = {**REQUIRED_ENV, "FEEDS_FILE": "env.json", "LOG_LEVEL": "ERROR"}
        with patch.dict(os.environ, env, clear=True):
            config = Config(feeds_file="cli.json", log_level="warning")

        assert config.feeds_file == "cli.json"
        assert config.log_level == "WARNING"

    @pytest.mark.parametrize(
        "env",
        [
            {},
            {"WHATSAPP_API_TOKEN": "token-123"},
            {"WHATSAPP_CHANNEL": "chan@newsletter"},
            {"WHATSAPP_API_TOKEN": "   ", "WHATSAPP_CHANNEL": "chan@newsletter"},
        ],
    )
    def test_missing_required_values_fail_validation(self, env):
        with patch.dict(os.environ, env, clear=True):
            config = Config()

        with pytest.raises(ConfigurationError, match="must be set"):
            config.validate()

    @pytest.mark.parametrize("timeout", ["abc", "0", "-3", "nan", "inf", "-inf"])
    def test_invalid_timeout(self, timeout):
        with patch.dict(os.environ, {**REQUIRED_ENV, "FEED_TIMEOUT": timeout}, clear=True):
            with pytest.raises(ConfigurationError, match="FEED_TIMEOUT"):
                Config()

    def test_invalid_log_format(self):
        with patch.dict(os.environ, {**REQUIRED_ENV, "LOG_FORMAT": "xml"}, clear=True):
            config = Config()

        with pytest.raises(ConfigurationError, match="LOG_FORMAT"):
            config.validate()

    def test_get_whatsapp_config(self):
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            whatsapp_config = Config().get_whatsapp_config()

        assert whatsapp_config == WhatsAppConfig(
            api_token="token-123",
            channel="chan@newsletter",
            endpoint=DEFAULT_WHAPI_ENDPOINT,
        )
