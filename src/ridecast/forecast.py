"""Consumer-facing fetch functions.

Each call builds a provider from settings, performs a single request and
closes its client. Screens that may go away while a fetch is in flight
wrap the call in a `RequestGuard` and drop stale results.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

from ridecast.config import Settings, get_settings
from ridecast.models.location import Coordinates
from ridecast.models.weather import CurrentWeather, DailyForecast
from ridecast.providers.openmeteo import OpenMeteoProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_provider(settings: Settings | None = None) -> OpenMeteoProvider:
    """Build the weather provider from configuration."""
    settings = settings or get_settings()
    return OpenMeteoProvider(
        base_url=settings.weather_base_url,
        api_key=settings.weather_api_key,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout_seconds,
        forecast_days=settings.forecast_days,
    )


async def fetch_current_weather(
    latitude: float,
    longitude: float,
    settings: Settings | None = None,
) -> CurrentWeather:
    """Fetch current conditions for a location.

    Raises:
        NetworkError: If the weather service cannot be reached
        MalformedResponseError: If the response has the wrong shape
    """
    coordinates = Coordinates(latitude=latitude, longitude=longitude)
    async with create_provider(settings) as provider:
        return await provider.get_current_weather(coordinates)


async def fetch_seven_day_forecast(
    latitude: float,
    longitude: float,
    settings: Settings | None = None,
) -> list[DailyForecast]:
    """Fetch up to seven daily forecasts for a location.

    Raises:
        NetworkError: If the weather service cannot be reached
        MalformedResponseError: If the response has the wrong shape
    """
    coordinates = Coordinates(latitude=latitude, longitude=longitude)
    async with create_provider(settings) as provider:
        return await provider.get_seven_day_forecast(coordinates)


class RequestGuard:
    """Discards results of requests that were superseded or cancelled.

    Example:
        ```python
        guard = RequestGuard()
        days = await guard.run(fetch_seven_day_forecast(lat, lon))
        if days is None:
            return  # screen was refreshed or closed meanwhile
        ```
    """

    def __init__(self):
        self._latest = 0

    def begin(self) -> int:
        """Start a new request; earlier tokens become stale."""
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        """Check whether a token belongs to the latest live request."""
        return token == self._latest

    def cancel(self) -> None:
        """Invalidate every outstanding request."""
        self._latest += 1

    async def run(self, awaitable: Awaitable[T]) -> T | None:
        """Await a request and return its result, or None if it went stale.

        Errors of a current request propagate; errors of a stale one are
        logged and dropped.
        """
        token = self.begin()
        try:
            result = await awaitable
        except Exception as e:
            if not self.is_current(token):
                logger.debug(f"Dropping error from stale request {token}: {e!r}")
                return None
            raise
        if not self.is_current(token):
            logger.debug(f"Dropping result of stale request {token}")
            return None
        return result
