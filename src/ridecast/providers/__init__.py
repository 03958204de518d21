"""Weather data providers."""

from ridecast.providers.base import (
    MalformedResponseError,
    NetworkError,
    ProviderError,
    WeatherProvider,
)
from ridecast.providers.openmeteo import OpenMeteoProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "NetworkError",
    "MalformedResponseError",
    "OpenMeteoProvider",
]
