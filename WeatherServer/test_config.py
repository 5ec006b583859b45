"""Tests for configuration loading."""
import pytest
from config import DEFAULT_LOG_SINK_URL, ConfigError, MockMode, ServerConfig, load_config
from weather_data import Source


def test_load_config_defaults():
    config = load_config({})

    assert config == ServerConfig()
    assert config.api_key is None
    assert config.mock_mode is MockMode.AUTO
    assert config.log_level == "INFO"
    assert config.log_sink_token is None
    assert config.log_sink_url == DEFAULT_LOG_SINK_URL
    assert config.timeout == 10.0


def test_load_config_reads_environment():
    config = load_config({
        "OPENWEATHER_API_KEY": "abc123",
        "WEATHER_MOCK_MODE": "false",
        "LOG_LEVEL": "debug",
        "LOGTAIL_SOURCE_TOKEN": "tok",
        "LOGTAIL_INGEST_URL": "https://logs.example.com",
        "OPENWEATHER_TIMEOUT": "2.5",
    })

    assert config.api_key == "abc123"
    assert config.mock_mode is MockMode.OFF
    assert config.log_level == "DEBUG"
    assert config.log_sink_token == "tok"
    assert config.log_sink_url == "https://logs.example.com"
    assert config.timeout == 2.5


def test_blank_api_key_is_absent():
    config = load_config({"OPENWEATHER_API_KEY": "   "})

    assert config.api_key is None
    assert config.has_api_key is False


@pytest.mark.parametrize("value, expected", [
    (None, MockMode.AUTO),
    ("", MockMode.AUTO),
    ("auto", MockMode.AUTO),
    ("true", MockMode.ON),
    ("1", MockMode.ON),
    ("YES", MockMode.ON),
    ("on", MockMode.ON),
    ("false", MockMode.OFF),
    ("0", MockMode.OFF),
    ("Off", MockMode.OFF),
])
def test_mock_mode_parse(value, expected):
    assert MockMode.parse(value) is expected


def test_mock_mode_parse_rejects_garbage():
    with pytest.raises(ConfigError):
        MockMode.parse("sometimes")


def test_invalid_log_level():
    with pytest.raises(ConfigError):
        load_config({"LOG_LEVEL": "LOUD"})


def test_invalid_timeout():
    with pytest.raises(ConfigError):
        load_config({"OPENWEATHER_TIMEOUT": "soon"})


@pytest.mark.parametrize("api_key, mock_mode, use_mock, source", [
    (None, MockMode.AUTO, True, Source.MOCK_NO_KEY),
    (None, MockMode.OFF, True, Source.MOCK_NO_KEY),
    (None, MockMode.ON, True, Source.MOCK_EXPLICIT),
    ("key", MockMode.AUTO, False, None),
    ("key", MockMode.OFF, False, None),
    ("key", MockMode.ON, True, Source.MOCK_EXPLICIT),
])
def test_mode_selection(api_key, mock_mode, use_mock, source):
    config = ServerConfig(api_key=api_key, mock_mode=mock_mode)

    assert config.use_mock is use_mock
    assert config.mock_source is source
