from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_WEATHER_CHOICES = "balmy,rainy,stormy"

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openweather_api_key: str = Field(default="")
    openweather_base_url: str = Field(default=OPENWEATHER_BASE_URL)
    openweather_onecall_url: str = Field(default=OPENWEATHER_ONECALL_URL)
    http_timeout_seconds: float = Field(default=30.0, ge=1.0, le=120.0)

    # Comma-separated words for the GetCityWeather tool.
    weather_choices: str = Field(default=DEFAULT_WEATHER_CHOICES)

    log_dir: str = Field(default="logs")
    log_level: str = Field(default="INFO")

    @field_validator("weather_choices", mode="before")
    @classmethod
    def _blank_choices_use_default(cls, value):
        if value is None or not str(value).strip():
            return DEFAULT_WEATHER_CHOICES
        return value

    @property
    def choices(self) -> list[str]:
        words = [s.strip() for s in self.weather_choices.split(",") if s.strip()]
        return words or DEFAULT_WEATHER_CHOICES.split(",")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
