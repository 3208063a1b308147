from __future__ import annotations

import logging
from typing import Protocol

from .formatting import format_alerts, format_current_weather, format_forecast
from .models import AlertsResult, CurrentWeather, Forecast

logger = logging.getLogger("weather_mcp.service")

MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 5
DEFAULT_FORECAST_DAYS = 3


class WeatherProvider(Protocol):
    async def fetch_current_weather(self, location: str) -> CurrentWeather | None: ...

    async def fetch_forecast(self, location: str, days: int) -> Forecast | None: ...

    async def fetch_alerts(self, lat: float, lon: float) -> AlertsResult: ...


class WeatherService:
    """Turns provider data into text reports.

    None of the public methods raise: a provider failure becomes an apology
    naming the location.
    """

    def __init__(self, provider: WeatherProvider):
        self.provider = provider

    async def get_current_weather(self, location: str) -> str:
        try:
            weather = await self.provider.fetch_current_weather(location)
            if weather is None:
                return (
                    f"Unable to retrieve weather data for '{location}'. "
                    "Please check the location name and try again."
                )
            return format_current_weather(weather)
        except Exception:
            logger.exception(f"Error getting current weather for location: {location}")
            return f"An error occurred while retrieving weather data for '{location}'."

    async def get_forecast(self, location: str, days: int = DEFAULT_FORECAST_DAYS) -> str:
        try:
            days = max(MIN_FORECAST_DAYS, min(MAX_FORECAST_DAYS, days))
            forecast = await self.provider.fetch_forecast(location, days)
            if forecast is None:
                return (
                    f"Unable to retrieve forecast data for '{location}'. "
                    "Please check the location name and try again."
                )
            return format_forecast(forecast, days)
        except Exception:
            logger.exception(f"Error getting weather forecast for location: {location}")
            return f"An error occurred while retrieving forecast data for '{location}'."

    async def get_alerts(self, location: str) -> str:
        try:
            # Alerts are looked up by coordinates, which only the current weather call returns.
            weather = await self.provider.fetch_current_weather(location)
            if weather is None:
                return f"Unable to retrieve coordinates for '{location}' to check weather alerts."

            alerts = await self.provider.fetch_alerts(weather.coord.lat, weather.coord.lon)
            return format_alerts(alerts, location)
        except Exception:
            logger.exception(f"Error getting weather alerts for location: {location}")
            return f"An error occurred while retrieving weather alerts for '{location}'."
