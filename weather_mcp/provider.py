from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .models import AlertsResult, CurrentWeather, Forecast, WeatherAlert

logger = logging.getLogger("weather_mcp.provider")

USER_AGENT = "weather-mcp/1.0"

# The 3-hourly forecast endpoint always covers five days.
FORECAST_HORIZON_DAYS = 5
SECONDS_PER_DAY = 86400


class OpenWeatherMapClient:
    """Async client for the OpenWeatherMap REST API.

    ``fetch_current_weather`` and ``fetch_forecast`` return ``None`` when no
    usable data could be obtained. ``fetch_alerts`` never does: an unreachable
    or unsupported alerts endpoint yields an empty ``AlertsResult``.

    Usage:
        client = OpenWeatherMapClient(get_settings())
        weather = await client.fetch_current_weather("London")
        await client.aclose()
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.api_key = settings.openweather_api_key.strip()
        self.base_url = settings.openweather_base_url.rstrip("/")
        self.onecall_url = settings.openweather_onecall_url
        self.timeout = settings.http_timeout_seconds
        self.clock = clock
        self._client = http_client

        if not self.api_key:
            logger.warning("OpenWeatherMap API key not found in environment variable OPENWEATHER_API_KEY")

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str, params: dict) -> httpx.Response:
        params = dict(params, appid=self.api_key)
        return await self.http_client.get(url, params=params)

    async def fetch_current_weather(self, location: str) -> CurrentWeather | None:
        if not self.api_key:
            logger.error("API key is not configured")
            return None

        logger.info(f"Fetching current weather for location: {location}")
        try:
            response = await self._get(f"{self.base_url}/weather", {"q": location, "units": "metric"})
            if not response.is_success:
                logger.error(
                    f"Failed to fetch weather data for {location}. "
                    f"Status: {response.status_code}, Content: {response.text}"
                )
                return None
            weather = CurrentWeather.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers both JSON decode errors and pydantic's ValidationError.
            logger.exception(f"Error fetching current weather for location {location}: {e}")
            return None

        logger.info(f"Successfully fetched current weather for {location}")
        return weather

    async def fetch_forecast(self, location: str, days: int = FORECAST_HORIZON_DAYS) -> Forecast | None:
        """Fetch the 3-hourly forecast, keeping only samples within ``days`` days from now."""
        if not self.api_key:
            logger.error("API key is not configured")
            return None

        logger.info(f"Fetching {days}-day forecast for location: {location}")
        try:
            response = await self._get(f"{self.base_url}/forecast", {"q": location, "units": "metric"})
            if not response.is_success:
                logger.error(
                    f"Failed to fetch forecast data for {location}. "
                    f"Status: {response.status_code}, Content: {response.text}"
                )
                return None
            forecast = Forecast.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.exception(f"Error fetching forecast for location {location}: {e}")
            return None

        if days < FORECAST_HORIZON_DAYS:
            cutoff = self.clock() + days * SECONDS_PER_DAY
            entries = [entry for entry in forecast.entries if entry.dt <= cutoff]
            forecast = forecast.model_copy(update={"entries": entries, "count": len(entries)})

        logger.info(f"Successfully fetched {days}-day forecast for {location} ({forecast.count} samples)")
        return forecast

    async def fetch_alerts(self, lat: float, lon: float) -> AlertsResult:
        if not self.api_key:
            logger.error("API key is not configured")
            return AlertsResult()

        logger.info(f"Fetching weather alerts for coordinates: {lat}, {lon}")
        params = {"lat": lat, "lon": lon, "exclude": "current,minutely,hourly,daily"}
        try:
            response = await self._get(self.onecall_url, params)
            if not response.is_success:
                logger.warning(
                    f"Failed to fetch weather alerts. Status: {response.status_code}. "
                    "This may be due to API plan limitations."
                )
                return AlertsResult()
            data = response.json()
        except Exception as e:
            # Alerts that cannot be fetched are reported as no alerts.
            logger.exception(f"Error fetching weather alerts for coordinates {lat}, {lon}: {e}")
            return AlertsResult()

        raw_alerts = data.get("alerts") if isinstance(data, dict) else None
        alerts = []
        for raw in raw_alerts or []:
            try:
                alerts.append(WeatherAlert.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"Skipping malformed alert entry: {e}")

        logger.info(f"Successfully fetched {len(alerts)} weather alerts for coordinates: {lat}, {lon}")
        return AlertsResult(alerts=alerts)
