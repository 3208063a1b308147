"""Typed views of the OpenWeatherMap responses.

Field names follow the provider's JSON where they are already Pythonic and
use aliases elsewhere, so every model can be built straight from a decoded
response body with ``model_validate``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Coordinates(_Frozen):
    lat: float
    lon: float


class Condition(_Frozen):
    id: int | None = None
    main: str = Field(..., description="Condition group (Rain, Snow, Clear, ...).")
    description: str = ""


class Readings(_Frozen):
    """The provider's ``main`` block: temperatures in C, humidity and pressure."""

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int = 0
    humidity: int = 0


class Wind(_Frozen):
    speed: float = 0.0
    deg: int = 0
    gust: float | None = None


class Clouds(_Frozen):
    cloudiness: int = Field(0, alias="all")


class SystemInfo(_Frozen):
    country: str | None = None
    sunrise: int | None = None
    sunset: int | None = None


class CurrentWeather(_Frozen):
    name: str = ""
    coord: Coordinates
    weather: list[Condition] = Field(default_factory=list)
    main: Readings
    wind: Wind | None = None
    clouds: Clouds | None = None
    visibility: int | None = Field(None, description="Visibility in meters.")
    system: SystemInfo | None = Field(None, alias="sys")
    dt: int = Field(..., description="Observation time (unix seconds).")

    @property
    def country(self) -> str | None:
        return self.system.country if self.system else None


class ForecastEntry(_Frozen):
    dt: int
    main: Readings
    weather: list[Condition] = Field(default_factory=list)
    wind: Wind | None = None
    pop: float = Field(0.0, ge=0.0, le=1.0, description="Probability of precipitation.")


class City(_Frozen):
    name: str = ""
    country: str | None = None
    coord: Coordinates | None = None


class Forecast(_Frozen):
    count: int = Field(0, alias="cnt")
    entries: list[ForecastEntry] = Field(default_factory=list, alias="list")
    city: City | None = None


class WeatherAlert(_Frozen):
    sender_name: str | None = None
    event: str
    start: int
    end: int
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_are_empty(cls, value):
        return [] if value is None else value


class AlertsResult(_Frozen):
    alerts: list[WeatherAlert] = Field(default_factory=list)
