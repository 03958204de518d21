"""Domain models for ride weather."""

from ridecast.models.location import Coordinates, PermissionDenied
from ridecast.models.weather import (
    Condition,
    CurrentWeather,
    DailyForecast,
)
from ridecast.models.ride import RideEntry

__all__ = [
    # Location
    "Coordinates",
    "PermissionDenied",
    # Weather
    "Condition",
    "CurrentWeather",
    "DailyForecast",
    # Rides
    "RideEntry",
]
