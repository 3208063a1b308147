from __future__ import annotations

import logging
import random
from typing import Optional

from .service import DEFAULT_FORECAST_DAYS, MAX_FORECAST_DAYS, MIN_FORECAST_DAYS, WeatherService

logger = logging.getLogger("weather_mcp.tools")

INVALID_LOCATION_MESSAGE = "Please provide a valid city or location name."
INVALID_DAYS_MESSAGE = f"Number of days must be between {MIN_FORECAST_DAYS} and {MAX_FORECAST_DAYS}."


class WeatherTools:
    """Input validation in front of ``WeatherService``, one method per tool."""

    def __init__(self, service: WeatherService, choices: list[str], rng: Optional[random.Random] = None):
        self.service = service
        self.choices = list(choices)
        self.rng = rng or random.Random()

    async def get_current_weather(self, location: str) -> str:
        if not location or not location.strip():
            return INVALID_LOCATION_MESSAGE
        return await self.service.get_current_weather(location.strip())

    async def get_weather_forecast(self, location: str, days: int = DEFAULT_FORECAST_DAYS) -> str:
        if not location or not location.strip():
            return INVALID_LOCATION_MESSAGE
        if days < MIN_FORECAST_DAYS or days > MAX_FORECAST_DAYS:
            return INVALID_DAYS_MESSAGE
        return await self.service.get_forecast(location.strip(), days)

    async def get_weather_alerts(self, location: str) -> str:
        if not location or not location.strip():
            return INVALID_LOCATION_MESSAGE
        return await self.service.get_alerts(location.strip())

    def get_city_weather(self, city: str) -> str:
        choice = self.rng.choice(self.choices)
        logger.debug(f"Picked random weather '{choice}' for {city}")
        return f"The weather in {city} is {choice}."
