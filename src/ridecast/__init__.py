"""ridecast - current and 7-day weather with a cycling suitability score."""

from ridecast.forecast import (
    RequestGuard,
    fetch_current_weather,
    fetch_seven_day_forecast,
)
from ridecast.models import (
    Condition,
    Coordinates,
    CurrentWeather,
    DailyForecast,
    PermissionDenied,
    RideEntry,
)
from ridecast.providers import (
    MalformedResponseError,
    NetworkError,
    ProviderError,
)
from ridecast.providers.normalize import normalize_condition
from ridecast.scoring import calc_suitability

__version__ = "0.1.0"

__all__ = [
    "fetch_current_weather",
    "fetch_seven_day_forecast",
    "calc_suitability",
    "normalize_condition",
    "RequestGuard",
    "Condition",
    "Coordinates",
    "CurrentWeather",
    "DailyForecast",
    "PermissionDenied",
    "RideEntry",
    "ProviderError",
    "NetworkError",
    "MalformedResponseError",
]
