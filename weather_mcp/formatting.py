"""Plain-text renderers for the weather tools."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from statistics import mean

from .models import AlertsResult, CurrentWeather, Forecast, ForecastEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"

NO_ALERTS_LINE = "✅ No active weather alerts for this location."
NO_FORECAST_DATA = "No forecast data available."


def utc_datetime(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_timestamp(timestamp: int) -> str:
    return utc_datetime(timestamp).strftime(TIMESTAMP_FORMAT)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_current_weather(weather: CurrentWeather) -> str:
    lines = [
        f"🌤️ Current Weather in {weather.name}, {weather.country or ''}".rstrip(", "),
        "=" * 41,
    ]

    if weather.weather:
        condition = weather.weather[0]
        lines.append(f"Condition: {condition.main} - {condition.description}")

    readings = weather.main
    lines.append(f"Temperature: {readings.temp:.1f}°C (feels like {readings.feels_like:.1f}°C)")
    lines.append(f"Min/Max: {readings.temp_min:.1f}°C / {readings.temp_max:.1f}°C")
    lines.append(f"Humidity: {readings.humidity}%")
    lines.append(f"Pressure: {readings.pressure} hPa")

    if weather.wind is not None:
        lines.append(f"Wind: {weather.wind.speed:g} m/s at {weather.wind.deg}°")
        if weather.wind.gust is not None:
            lines.append(f"Wind Gust: {weather.wind.gust:.1f} m/s")

    if weather.clouds is not None:
        lines.append(f"Cloudiness: {weather.clouds.cloudiness}%")

    if weather.visibility is not None:
        lines.append(f"Visibility: {weather.visibility / 1000.0:.1f} km")

    system = weather.system
    if system is not None and system.sunrise is not None and system.sunset is not None:
        sunrise = utc_datetime(system.sunrise).strftime("%H:%M")
        sunset = utc_datetime(system.sunset).strftime("%H:%M")
        lines.append(f"Sunrise: {sunrise} | Sunset: {sunset}")

    lines.append(f"Last Updated: {format_timestamp(weather.dt)}")
    return "\n".join(lines) + "\n"


def group_by_date(entries: list[ForecastEntry]) -> list[tuple[date, list[ForecastEntry]]]:
    """Group samples by UTC calendar date, in order of first appearance."""
    groups: dict[date, list[ForecastEntry]] = {}
    for entry in entries:
        groups.setdefault(utc_datetime(entry.dt).date(), []).append(entry)
    return list(groups.items())


def most_common_condition(entries: list[ForecastEntry]) -> str:
    """Most frequent condition group; ties go to the one seen first."""
    counts = Counter(condition.main for entry in entries for condition in entry.weather)
    if not counts:
        return "Unknown"
    return counts.most_common(1)[0][0]


def _first_in_hours(entries: list[ForecastEntry], start: int, end: int | None = None) -> ForecastEntry | None:
    for entry in entries:
        hour = utc_datetime(entry.dt).hour
        if hour >= start and (end is None or hour <= end):
            return entry
    return None


def _describe_sample(label: str, entry: ForecastEntry) -> str:
    description = entry.weather[0].description if entry.weather else "N/A"
    return f"  {label}: {entry.main.temp:.1f}°C, {description}"


def format_day(day: date, entries: list[ForecastEntry]) -> list[str]:
    lines = [
        "",
        f"📅 {day:%A, %B %d}",
        "-" * 30,
        f"Temperature: {min(e.main.temp_min for e in entries):.1f}°C - "
        f"{max(e.main.temp_max for e in entries):.1f}°C",
        f"Condition: {most_common_condition(entries)}",
    ]

    periods = (
        ("Morning", _first_in_hours(entries, 6, 12)),
        ("Afternoon", _first_in_hours(entries, 12, 18)),
        ("Evening", _first_in_hours(entries, 18)),
    )
    for label, entry in periods:
        if entry is not None:
            lines.append(_describe_sample(label, entry))

    avg_humidity = mean(e.main.humidity for e in entries)
    avg_wind = mean(e.wind.speed if e.wind else 0.0 for e in entries)
    lines.append(f"  Humidity: {round_half_up(avg_humidity)}% | Wind: {avg_wind:.1f} m/s")

    max_pop = max(e.pop for e in entries) * 100
    if max_pop > 0:
        lines.append(f"  Precipitation: {round_half_up(max_pop)}% chance")
    return lines


def format_forecast(forecast: Forecast, days: int) -> str:
    if not forecast.entries:
        return NO_FORECAST_DATA

    city = forecast.city
    place = f"{city.name}, {city.country or ''}".rstrip(", ") if city else ""
    lines = [f"🌦️ {days}-Day Weather Forecast for {place}", "=" * 51]
    for day, entries in group_by_date(forecast.entries)[:days]:
        lines.extend(format_day(day, entries))
    return "\n".join(lines) + "\n"


def format_alerts(result: AlertsResult, location: str) -> str:
    lines = [f"⚠️ Weather Alerts for {location}", "=" * 36]

    if not result.alerts:
        lines.append(NO_ALERTS_LINE)
        return "\n".join(lines) + "\n"

    for number, alert in enumerate(result.alerts, start=1):
        lines.append("")
        lines.append(f"🚨 Alert #{number}: {alert.event}")
        lines.append("-" * 25)
        if alert.sender_name:
            lines.append(f"Issued by: {alert.sender_name}")
        lines.append(f"Active from: {format_timestamp(alert.start)}")
        lines.append(f"Until: {format_timestamp(alert.end)}")
        if alert.description:
            lines.append(f"Description: {alert.description}")
        if alert.tags:
            lines.append(f"Tags: {', '.join(alert.tags)}")
    return "\n".join(lines) + "\n"
