"""Normalized weather models.

These are the provider-independent shapes consumed by scoring and display.
Every numeric field is an integer: providers report floats, and the
normalizer rounds them before constructing these models.
"""

from __future__ import annotations

from datetime import date as date_type
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Condition(str, Enum):
    """Canonical sky/precipitation state."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    OTHER = "other"


class CurrentWeather(BaseModel):
    """Instantaneous weather snapshot for a location."""

    model_config = ConfigDict(frozen=True)

    temperature_c: int = Field(..., description="Air temperature in Celsius")
    wind_speed_ms: int = Field(
        ..., description="Wind speed in meters per second"
    )
    condition: Condition = Field(
        default=Condition.OTHER, description="General weather condition"
    )


class DailyForecast(BaseModel):
    """Weather forecast for a single calendar day."""

    model_config = ConfigDict(frozen=True)

    date: date_type = Field(..., description="Forecast day (local to the location)")
    weekday: str = Field(default="", description="Short weekday label, e.g. 'Mon'")
    condition: Condition = Field(
        default=Condition.OTHER, description="General weather condition"
    )

    # Temperature
    temperature_c: int = Field(
        ..., description="Mean of the day's minimum and maximum in Celsius"
    )
    temperature_min_c: int = Field(..., description="Daily minimum in Celsius")
    temperature_max_c: int = Field(..., description="Daily maximum in Celsius")

    # Wind
    wind_speed_ms: int = Field(
        default=0, description="Maximum wind speed in meters per second"
    )
    wind_direction_deg: int = Field(
        default=0, ge=0, lt=360, description="Dominant wind direction (0=N, 90=E)"
    )

    relative_humidity_percent: int = Field(
        default=0, ge=0, le=100, description="Maximum relative humidity"
    )
    visibility_m: int = Field(default=0, ge=0, description="Mean visibility in meters")
    precipitation_mm: int = Field(
        default=0, ge=0, description="Precipitation sum in millimeters"
    )
    pressure_hpa: int = Field(
        default=0, description="Mean surface pressure in hPa"
    )

    def direction_cardinal(self) -> str:
        """Get cardinal direction (N, NE, E, etc.) of the dominant wind."""
        directions = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                      "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
        index = round(self.wind_direction_deg / 22.5) % 16
        return directions[index]
