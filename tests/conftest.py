import pytest

from payloads import make_settings
from weather_mcp.config import Settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()
