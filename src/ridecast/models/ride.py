"""Ride log models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ridecast.models.weather import Condition


class RideEntry(BaseModel):
    """A finished ride tagged with the weather at ride end.

    Field aliases follow the stored history blob so that existing
    histories stay readable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    started_at: datetime = Field(..., alias="startedAt")
    duration_seconds: int = Field(..., ge=0, alias="durationSec")

    # Weather snapshot
    temperature_c: int = Field(..., alias="tempC")
    condition: Condition = Field(default=Condition.OTHER)
    wind_speed_ms: int = Field(..., alias="windSpeed")
    humidity_percent: int = Field(..., ge=0, le=100, alias="humidity")
