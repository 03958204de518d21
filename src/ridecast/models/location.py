"""Location models for ride weather lookups."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class PermissionDenied(Exception):
    """Raised when the device location is unavailable to the caller.

    Obtaining a position is the caller's concern; this exists so that
    collaborators such as the ride recorder can report a missing fix
    in a uniform way.
    """


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '50.4501,30.5234' -> Kyiv
            '-33.8688,151.2093' -> Sydney
            '+51.5074,-0.1278' -> London
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '50.4501,30.5234')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)
