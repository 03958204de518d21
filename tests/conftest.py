"""Pytest fixtures for ridecast tests.

This module provides test fixtures that ensure:
1. No external API calls are made (HTTP is served by httpx.MockTransport)
2. Isolated test environment with controlled configuration
"""

import os
from datetime import date
from typing import Any, Callable

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("RIDECAST_WEATHER_BASE_URL", "https://weather.test/v1/forecast")
os.environ.setdefault("RIDECAST_LOG_LEVEL", "DEBUG")

from ridecast.models.location import Coordinates
from ridecast.models.weather import Condition, CurrentWeather, DailyForecast
from ridecast.providers.openmeteo import OpenMeteoProvider


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from ridecast.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handle)


@pytest.fixture
def make_provider():
    """Factory for an OpenMeteoProvider served by a canned handler.

    Usage:
        provider, transport = make_provider(lambda req: httpx.Response(200, json={...}))
    """

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        **kwargs: Any,
    ) -> tuple[OpenMeteoProvider, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        provider = OpenMeteoProvider(
            base_url="https://weather.test/v1/forecast",
            client=client,
            **kwargs,
        )
        return provider, transport

    return _make


@pytest.fixture
def json_handler():
    """Factory for a handler answering every request with the same JSON payload."""

    def _factory(payload: Any, status_code: int = 200):
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        return _handler

    return _factory


# =============================================================================
# Provider Payloads
# =============================================================================


@pytest.fixture
def current_payload() -> dict[str, Any]:
    """Open-Meteo current_weather response."""
    return {
        "latitude": 50.44,
        "longitude": 30.52,
        "timezone": "Europe/Kyiv",
        "current_weather": {
            "temperature": 21.5,
            "windspeed": 3.4,
            "winddirection": 200,
            "weathercode": 2,
            "time": "2024-06-15T12:00",
        },
    }


def build_daily_payload(days: int, start: date = date(2024, 6, 15)) -> dict[str, Any]:
    """Open-Meteo daily response with `days` consecutive days."""
    times = [date.fromordinal(start.toordinal() + i).isoformat() for i in range(days)]
    return {
        "latitude": 50.44,
        "longitude": 30.52,
        "timezone": "Europe/Kyiv",
        "daily": {
            "time": times,
            "temperature_2m_max": [24.0 + i for i in range(days)],
            "temperature_2m_min": [14.0 + i for i in range(days)],
            "weathercode": [[0, 3, 61, 71, 95, 1, 2, 80, 45][i % 9] for i in range(days)],
            "windspeed_10m_max": [4.4 for _ in range(days)],
            "winddirection_10m_dominant": [181.5 for _ in range(days)],
            "relative_humidity_2m_max": [55.5 for _ in range(days)],
            "visibility_mean": [24140.0 for _ in range(days)],
            "precipitation_sum": [0.0 for _ in range(days)],
            "surface_pressure_mean": [1012.6 for _ in range(days)],
        },
    }


@pytest.fixture
def daily_payload() -> dict[str, Any]:
    """Open-Meteo daily response for one week."""
    return build_daily_payload(7)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_coordinates() -> Coordinates:
    """Sample coordinates for Kyiv."""
    return Coordinates(latitude=50.4501, longitude=30.5234)


@pytest.fixture
def ideal_day() -> DailyForecast:
    """A day that triggers no penalty at all."""
    return DailyForecast(
        date=date(2024, 6, 15),
        weekday="Sat",
        condition=Condition.SUNNY,
        temperature_c=20,
        temperature_min_c=15,
        temperature_max_c=25,
        wind_speed_ms=0,
        wind_direction_deg=180,
        relative_humidity_percent=50,
        visibility_m=10000,
        precipitation_mm=0,
        pressure_hpa=1010,
    )


@pytest.fixture
def mild_current() -> CurrentWeather:
    """Current conditions on a pleasant afternoon."""
    return CurrentWeather(
        temperature_c=21,
        wind_speed_ms=3,
        condition=Condition.CLOUDY,
    )


@pytest.fixture
def daily_payload_factory():
    """Factory for daily responses of arbitrary length."""
    return build_daily_payload
