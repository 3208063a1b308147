"""OpenWeatherMap tools for MCP clients.

Server attributes are imported lazily so that starting the server with
`python -m weather_mcp.server` does not import `weather_mcp.server` twice
(which makes runpy emit a `RuntimeWarning`).
"""

from importlib import import_module

from .config import Settings, get_settings
from .provider import OpenWeatherMapClient
from .service import WeatherService
from .tools import WeatherTools

__all__ = [
    "Settings",
    "get_settings",
    "OpenWeatherMapClient",
    "WeatherService",
    "WeatherTools",
    "mcp",
    "get_tool_specs",
    "export_tools_json",
    "build_tools",
    "run_server",
]

# Attributes provided by the server module. We lazily import `weather_mcp.server`
# only when one of these attributes is accessed.
_server_attrs = {
    "mcp",
    "get_tool_specs",
    "export_tools_json",
    "build_tools",
    "run_server",
}


def _load_server():
    return import_module(".server", __package__)


def __getattr__(name: str):
    if name in _server_attrs:
        return getattr(_load_server(), name)
    raise AttributeError(f"module {__name__} has no attribute {name}")


def __dir__():
    return sorted(list(globals().keys()) + list(_server_attrs))
