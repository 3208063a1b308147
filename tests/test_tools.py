import random

import pytest
import respx
from httpx import Response

from payloads import current_payload, make_settings
from weather_mcp.formatting import NO_ALERTS_LINE
from weather_mcp.provider import OpenWeatherMapClient
from weather_mcp.service import WeatherService
from weather_mcp.tools import INVALID_DAYS_MESSAGE, INVALID_LOCATION_MESSAGE, WeatherTools

BLANK_LOCATIONS = ["", " ", "   ", "\t", "\n  \t"]


class StubService:
    def __init__(self):
        self.calls = []

    async def get_current_weather(self, location):
        self.calls.append(("current", location))
        return f"current:{location}"

    async def get_forecast(self, location, days=3):
        self.calls.append(("forecast", location, days))
        return f"forecast:{location}:{days}"

    async def get_alerts(self, location):
        self.calls.append(("alerts", location))
        return f"alerts:{location}"


def make_tools(service=None, choices=("balmy", "rainy", "stormy"), rng=None):
    return WeatherTools(service or StubService(), choices=list(choices), rng=rng)


@pytest.mark.asyncio
@pytest.mark.parametrize("location", BLANK_LOCATIONS)
async def test_blank_location_rejected_by_every_tool(location):
    service = StubService()
    tools = make_tools(service)

    assert await tools.get_current_weather(location) == INVALID_LOCATION_MESSAGE
    assert await tools.get_weather_forecast(location, 3) == INVALID_LOCATION_MESSAGE
    assert await tools.get_weather_alerts(location) == INVALID_LOCATION_MESSAGE
    assert service.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [-1, 0, 6, 30])
async def test_forecast_days_out_of_range_rejected(days):
    service = StubService()
    tools = make_tools(service)

    assert await tools.get_weather_forecast("London", days) == INVALID_DAYS_MESSAGE
    assert service.calls == []


@pytest.mark.asyncio
async def test_locations_are_trimmed_and_forwarded():
    service = StubService()
    tools = make_tools(service)

    assert await tools.get_current_weather("  London ") == "current:London"
    assert await tools.get_weather_forecast(" Paris", 5) == "forecast:Paris:5"
    assert await tools.get_weather_forecast("Tokyo") == "forecast:Tokyo:3"
    assert await tools.get_weather_alerts("Oslo  ") == "alerts:Oslo"
    assert service.calls == [
        ("current", "London"),
        ("forecast", "Paris", 5),
        ("forecast", "Tokyo", 3),
        ("alerts", "Oslo"),
    ]


def test_city_weather_uses_injected_randomness():
    tools = make_tools(choices=["sunny", "foggy", "windy"], rng=random.Random(7))
    expected = random.Random(7).choice(["sunny", "foggy", "windy"])

    assert tools.get_city_weather("Lisbon") == f"The weather in Lisbon is {expected}."


def test_city_weather_single_choice():
    tools = make_tools(choices=["drizzly"])
    assert tools.get_city_weather("Bergen") == "The weather in Bergen is drizzly."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "alerts_response",
    [
        Response(200, json={"lat": 51.5085, "lon": -0.1257, "alerts": []}),
        Response(401, json={"cod": 401, "message": "Invalid API key"}),
    ],
)
async def test_alerts_failure_and_empty_look_the_same(alerts_response):
    provider = OpenWeatherMapClient(make_settings())
    tools = WeatherTools(WeatherService(provider), choices=["balmy"])

    with respx.mock:
        respx.get("https://api.openweathermap.org/data/2.5/weather").mock(
            return_value=Response(200, json=current_payload())
        )
        respx.get("https://api.openweathermap.org/data/3.0/onecall").mock(return_value=alerts_response)
        text = await tools.get_weather_alerts("London")
    await provider.aclose()

    assert text.splitlines()[0] == "⚠️ Weather Alerts for London"
    assert NO_ALERTS_LINE in text


@pytest.mark.asyncio
async def test_alerts_for_unknown_location_never_call_alerts_endpoint():
    provider = OpenWeatherMapClient(make_settings())
    tools = WeatherTools(WeatherService(provider), choices=["balmy"])

    with respx.mock(assert_all_called=False) as router:
        router.get("https://api.openweathermap.org/data/2.5/weather").mock(
            return_value=Response(404, json={"cod": "404", "message": "city not found"})
        )
        alerts_route = router.get("https://api.openweathermap.org/data/3.0/onecall").mock(
            return_value=Response(200, json={"alerts": []})
        )
        text = await tools.get_weather_alerts("Atlantis")
        assert alerts_route.call_count == 0
    await provider.aclose()

    assert text == "Unable to retrieve coordinates for 'Atlantis' to check weather alerts."
