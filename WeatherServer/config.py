"""Process-wide configuration, read once at startup."""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from dotenv import load_dotenv

from weather_data import Source

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_SINK_URL = "https://in.logs.betterstack.com"


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""
    pass


class MockMode(Enum):
    """Mock-mode override: forced on, forced off, or decided by the API key."""
    ON = "on"
    OFF = "off"
    AUTO = "auto"

    @classmethod
    def parse(cls, value: Optional[str]) -> "MockMode":
        if value is None or not value.strip():
            return cls.AUTO
        normalized = value.strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return cls.ON
        if normalized in ("0", "false", "no", "off"):
            return cls.OFF
        if normalized == "auto":
            return cls.AUTO
        raise ConfigError(f"Invalid WEATHER_MOCK_MODE value: {value!r}")


@dataclass(frozen=True)
class ServerConfig:
    """Immutable settings shared by every request."""
    api_key: Optional[str] = None
    mock_mode: MockMode = MockMode.AUTO
    log_level: str = DEFAULT_LOG_LEVEL
    log_sink_token: Optional[str] = None
    log_sink_url: str = DEFAULT_LOG_SINK_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def use_mock(self) -> bool:
        if self.mock_mode is MockMode.ON:
            return True
        return not self.has_api_key

    @property
    def mock_source(self) -> Optional[Source]:
        """Which mock path applies, or None when requests go to the live API."""
        if self.mock_mode is MockMode.ON:
            return Source.MOCK_EXPLICIT
        if not self.has_api_key:
            return Source.MOCK_NO_KEY
        return None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """
    Build the configuration from the environment.

    A ``.env`` file is loaded first when reading the real process environment.

    Args:
        environ: Mapping to read instead of ``os.environ`` (used by tests)

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    api_key = (environ.get("OPENWEATHER_API_KEY") or "").strip() or None
    mock_mode = MockMode.parse(environ.get("WEATHER_MOCK_MODE"))

    log_level = (environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Invalid LOG_LEVEL value: {log_level!r}")

    timeout_raw = environ.get("OPENWEATHER_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError as exc:
        raise ConfigError(f"Invalid OPENWEATHER_TIMEOUT value: {timeout_raw!r}") from exc

    return ServerConfig(
        api_key=api_key,
        mock_mode=mock_mode,
        log_level=log_level,
        log_sink_token=(environ.get("LOGTAIL_SOURCE_TOKEN") or "").strip() or None,
        log_sink_url=environ.get("LOGTAIL_INGEST_URL") or DEFAULT_LOG_SINK_URL,
        timeout=timeout,
    )
