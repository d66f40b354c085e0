"""Configuration management for RSS WhatsApp Bot."""

import math
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

# Whapi.Cloud "send text message" endpoint
DEFAULT_WHAPI_ENDPOINT = "https://gate.whapi.cloud/messages/text"


@dataclass
class WhatsAppConfig:
    """Configuration for the Whapi.Cloud messaging API."""

    api_token: str
    channel: str
    endpoint: str = DEFAULT_WHAPI_ENDPOINT


class Config:
    """Main configuration manager."""

    # Default feeds file path
    FEEDS_FILE = "feeds.json"

    REQUIRED_VARIABLES = ("WHATSAPP_API_TOKEN", "WHATSAPP_CHANNEL")

    def __init__(self, feeds_file: str | None = None, log_level: str | None = None):
        """Initialize configuration from environment variables.

        Args:
            feeds_file: Overrides FEEDS_FILE when given (e.g. from the CLI)
            log_level: Overrides LOG_LEVEL when given
        """
        self.api_token = os.getenv("WHATSAPP_API_TOKEN", "").strip()
        self.channel = os.getenv("WHATSAPP_CHANNEL", "").strip()
        self.endpoint = os.getenv("WHAPI_ENDPOINT", DEFAULT_WHAPI_ENDPOINT)
        self.feeds_file = feeds_file or os.getenv("FEEDS_FILE", self.FEEDS_FILE)
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
        self.log_format = os.getenv("LOG_FORMAT", "text").lower()
        self.feed_timeout = self._parse_timeout(os.getenv("FEED_TIMEOUT", ""))

    def validate(self) -> None:
        """Check that every required setting is present.

        Raises:
            ConfigurationError: If a required variable is missing or blank
        """
        missing = [
            name
            for name, value in zip(
                self.REQUIRED_VARIABLES, (self.api_token, self.channel)
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"{' and '.join(self.REQUIRED_VARIABLES)} environment variables "
                f"must be set (missing: {', '.join(missing)})"
            )
        if self.log_format not in ("text", "json"):
            raise ConfigurationError(
                f"LOG_FORMAT must be 'text' or 'json', got '{self.log_format}'"
            )

    def get_whatsapp_config(self) -> WhatsAppConfig:
        """Get WhatsApp configuration."""
        return WhatsAppConfig(
            api_token=self.api_token,
            channel=self.channel,
            endpoint=self.endpoint,
        )

    @staticmethod
    def _parse_timeout(raw: str) -> float | None:
        if not raw.strip():
            return None
        try:
            timeout = float(raw)
        except ValueError:
            raise ConfigurationError(f"FEED_TIMEOUT must be a number, got '{raw}'")
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigurationError(
                f"FEED_TIMEOUT must be a positive finite number, got '{raw}'"
            )
        return timeout
