from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import Settings, get_settings
from .logs import configure_logging
from .provider import OpenWeatherMapClient
from .service import WeatherService
from .tools import WeatherTools

logger = logging.getLogger("weather_mcp.server")

# A small registry to export tool metadata (server-first source of truth)
_TOOL_SPECS: list[dict] = []
# Decorated functions (and args/kwargs for mcp.tool) waiting for the MCP server
# to be created. FastMCP is only imported once the server actually starts.
_REGISTERED_FUNCS: list[tuple] = []
_registered_with_mcp = False

# The MCP instance is created lazily via `get_mcp()` / `register_tools_with_mcp()`.
mcp = None

# The tool adapter shared by every tool call, built once per process.
_tools: Optional[WeatherTools] = None

TRANSPORTS = ("stdio", "sse", "streamable-http")

LOCATION_SCHEMA = {
    "type": "string",
    "description": "Name of the city or location (e.g., 'London', 'New York', 'Tokyo')",
}


def get_mcp():
    """Lazily initialize and return the FastMCP server instance."""
    global mcp
    if mcp is not None:
        return mcp
    from mcp.server.fastmcp import FastMCP
    mcp = FastMCP("weather")
    return mcp


def register_tools_with_mcp():
    """Register all previously-decorated functions with the MCP instance."""
    global _registered_with_mcp
    if _registered_with_mcp:
        return
    m = get_mcp()
    for fn, args, kwargs in _REGISTERED_FUNCS:
        m.tool(*args, **kwargs)(fn)
    _registered_with_mcp = True


def tool(*args, schema: dict | None = None, **kwargs):
    """Lightweight decorator that records tool metadata without initializing MCP.

    Use as `@tool(name="GetSomething", schema={...})`. The functions are
    registered with the MCP instance when `register_tools_with_mcp()` is called
    (e.g., inside `run_server`).
    """
    def decorator(fn):
        spec = {
            "name": kwargs.get("name") or fn.__name__,
            "description": (fn.__doc__ or "").strip(),
            "input_schema": schema or {},
        }
        _TOOL_SPECS.append(spec)
        _REGISTERED_FUNCS.append((fn, args, kwargs))
        setattr(fn, "__tool_spec__", spec)
        return fn
    return decorator


def get_tool_specs() -> list[dict]:
    """Return a copy of the registered tool specs."""
    return [dict(s) for s in _TOOL_SPECS]


def export_tools_json(path: str = "tools.json") -> None:
    """Write the exported tool metadata to a JSON file."""
    import json
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(get_tool_specs(), fh, indent=2, ensure_ascii=False)


def build_tools(settings: Settings) -> WeatherTools:
    """Wire provider -> service -> tool adapter from one settings object."""
    provider = OpenWeatherMapClient(settings)
    return WeatherTools(WeatherService(provider), choices=settings.choices)


def set_tools(tools: WeatherTools) -> None:
    global _tools
    _tools = tools


def get_tools() -> WeatherTools:
    if _tools is None:
        set_tools(build_tools(get_settings()))
    return _tools


@tool(name="GetCurrentWeather", schema={
    "type": "object",
    "properties": {"location": LOCATION_SCHEMA},
    "required": ["location"],
    "additionalProperties": False,
})
async def get_current_weather(location: str) -> str:
    """Get current weather conditions for a specified location/city.

    Args:
        location: Name of the city or location to get current weather for
    """
    return await get_tools().get_current_weather(location)


@tool(name="GetWeatherForecast", schema={
    "type": "object",
    "properties": {
        "location": LOCATION_SCHEMA,
        "days": {
            "type": "integer",
            "description": "Number of days to forecast (1-5 days, default is 3)",
            "minimum": 1,
            "maximum": 5,
            "default": 3,
        },
    },
    "required": ["location"],
    "additionalProperties": False,
})
async def get_weather_forecast(location: str, days: int = 3) -> str:
    """Get weather forecast for a specified location for the next few days.

    Args:
        location: Name of the city or location to get the forecast for
        days: Number of days to forecast (1-5 days, default is 3)
    """
    return await get_tools().get_weather_forecast(location, days)


@tool(name="GetWeatherAlerts", schema={
    "type": "object",
    "properties": {"location": LOCATION_SCHEMA},
    "required": ["location"],
    "additionalProperties": False,
})
async def get_weather_alerts(location: str) -> str:
    """Get weather alerts and warnings for a specified location.

    Args:
        location: Name of the city or location to get weather alerts for
    """
    return await get_tools().get_weather_alerts(location)


@tool(name="GetCityWeather", schema={
    "type": "object",
    "properties": {"city": {"type": "string", "description": "Name of the city to return weather for"}},
    "required": ["city"],
    "additionalProperties": False,
})
def get_city_weather(city: str) -> str:
    """Describes random weather in the provided city. (Legacy tool for testing)

    Args:
        city: Name of the city to return weather for
    """
    return get_tools().get_city_weather(city)


def run_server(transport: str = "stdio") -> None:
    """Run the MCP server (convenience wrapper)."""
    # Ensure MCP instance is initialized and tools are registered prior to run.
    register_tools_with_mcp()
    m = get_mcp()
    logger.info(f"Starting weather MCP server on {transport} transport")
    m.run(transport=transport)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="weather-mcp", description="OpenWeatherMap tools over MCP")
    parser.add_argument("--transport", choices=TRANSPORTS, default="stdio")
    parser.add_argument("--export-tools", metavar="PATH", help="write the tool specs as JSON and exit")
    args = parser.parse_args(argv)

    if args.export_tools:
        export_tools_json(args.export_tools)
        return

    settings = get_settings()
    log_file = configure_logging(settings)
    logger.info(f"Logging to {log_file}")
    set_tools(build_tools(settings))
    run_server(args.transport)


if __name__ == "__main__":
    main()
