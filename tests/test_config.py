import logging
import sys

import pytest

from weather_mcp.config import DEFAULT_WEATHER_CHOICES, Settings
from weather_mcp.logs import LOG_FILE_NAME, configure_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("OPENWEATHER_API_KEY", "WEATHER_CHOICES", "HTTP_TIMEOUT_SECONDS", "LOG_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.openweather_api_key == ""
    assert settings.openweather_base_url == "https://api.openweathermap.org/data/2.5"
    assert settings.weather_choices == DEFAULT_WEATHER_CHOICES
    assert settings.choices == ["balmy", "rainy", "stormy"]
    assert settings.http_timeout_seconds == 30.0


def test_values_read_from_environment(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    clean_env.setenv("WEATHER_CHOICES", "sunny, foggy ,,windy")
    clean_env.setenv("HTTP_TIMEOUT_SECONDS", "5")

    settings = Settings(_env_file=None)

    assert settings.openweather_api_key == "abc123"
    assert settings.choices == ["sunny", "foggy", "windy"]
    assert settings.http_timeout_seconds == 5.0


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_weather_choices_fall_back_to_default(clean_env, value):
    clean_env.setenv("WEATHER_CHOICES", value)
    assert Settings(_env_file=None).choices == ["balmy", "rainy", "stormy"]


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_logging_goes_to_file_and_stderr_only(tmp_path, restore_root_logging):
    settings = Settings(_env_file=None, log_dir=str(tmp_path / "logs"), log_level="debug")
    log_file = configure_logging(settings)

    assert log_file == str(tmp_path / "logs" / LOG_FILE_NAME)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    streams = [h.stream for h in root.handlers if type(h) is logging.StreamHandler]
    assert streams == [sys.stderr]
    assert all(getattr(h, "stream", None) is not sys.stdout for h in root.handlers)

    logging.getLogger("weather_mcp.test").info("hello from the test")
    for handler in root.handlers:
        handler.flush()
    assert "hello from the test" in (tmp_path / "logs" / LOG_FILE_NAME).read_text()
