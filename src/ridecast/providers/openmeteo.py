"""Open-Meteo weather provider.

## API Documentation Summary
Source: https://open-meteo.com/en/docs

## Endpoint
- Base URL: https://api.open-meteo.com/v1/forecast
- Commercial: https://customer-api.open-meteo.com/v1/forecast (needs `apikey`)

## Authentication
- No API key required for non-commercial use
- Commercial plans pass the key as the `apikey` query parameter

## Requests
Current conditions:
    ?latitude={lat}&longitude={lon}&current_weather=true&timezone=auto

Daily forecast:
    ?latitude={lat}&longitude={lon}
    &daily=temperature_2m_max,temperature_2m_min,weathercode,windspeed_10m_max,
           winddirection_10m_dominant,relative_humidity_2m_max,visibility_mean,
           precipitation_sum,surface_pressure_mean
    &timezone=auto

## Response Format
```json
{
  "current_weather": {"temperature": 21.4, "windspeed": 3.2, "weathercode": 2},
  "daily": {
    "time": ["2024-06-15", "2024-06-16"],
    "temperature_2m_max": [24.1, 22.0],
    "temperature_2m_min": [14.3, 13.8],
    ...
  }
}
```

## Variable Translation (Open-Meteo -> Canonical)
| Open-Meteo Field | Canonical Field | Unit |
|------------------|-----------------|------|
| current_weather.temperature | temperature_c | °C |
| current_weather.windspeed | wind_speed_ms | m/s (as reported) |
| current_weather.weathercode | condition | WMO code |
| daily.time | date | ISO date |
| daily.temperature_2m_max / min | temperature_max_c / min_c | °C |
| (max + min) / 2 | temperature_c | °C |
| daily.weathercode | condition | WMO code |
| daily.windspeed_10m_max | wind_speed_ms | m/s (as reported) |
| daily.winddirection_10m_dominant | wind_direction_deg | degrees |
| daily.relative_humidity_2m_max | relative_humidity_percent | % |
| daily.visibility_mean | visibility_m | m |
| daily.precipitation_sum | precipitation_mm | mm |
| daily.surface_pressure_mean | pressure_hpa | hPa |

See `ridecast.providers.normalize` for code buckets and rounding.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ridecast.models.location import Coordinates
from ridecast.models.weather import CurrentWeather, DailyForecast
from ridecast.providers.base import WeatherProvider
from ridecast.providers.normalize import (
    DAILY_FIELDS,
    translate_current,
    translate_daily,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1/forecast"


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo forecast provider.

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            days = await provider.get_seven_day_forecast(
                Coordinates(latitude=50.4501, longitude=30.5234)
            )
        ```
    """

    name = "openmeteo"
    base_url = DEFAULT_BASE_URL

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        forecast_days: int = 7,
    ):
        """Initialize Open-Meteo provider.

        Args:
            base_url: Endpoint override (e.g. the customer API)
            api_key: Commercial API key, sent as `apikey`
            user_agent: User-Agent string
            timeout: Request timeout in seconds
            client: Pre-built HTTP client
            forecast_days: Days to keep from the daily response (1-7)
        """
        super().__init__(
            base_url=base_url,
            api_key=api_key,
            user_agent=user_agent,
            timeout=timeout,
            client=client,
        )
        self.forecast_days = max(1, min(forecast_days, self.get_max_forecast_days()))

    def _base_params(self, coordinates: Coordinates) -> dict[str, Any]:
        params: dict[str, Any] = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
        }
        if self.api_key:
            params["apikey"] = self.api_key
        return params

    async def get_current_weather(self, coordinates: Coordinates) -> CurrentWeather:
        """Get current conditions from Open-Meteo."""
        params = self._base_params(coordinates)
        params["current_weather"] = "true"
        params["timezone"] = "auto"

        data = await self._fetch_json(self.base_url, params=params)
        return translate_current(data)

    async def get_seven_day_forecast(
        self, coordinates: Coordinates
    ) -> list[DailyForecast]:
        """Get the daily forecast from Open-Meteo.

        Providers may return more than seven days; only the first
        `forecast_days` are kept. Fewer days are passed through unpadded.
        """
        params = self._base_params(coordinates)
        params["daily"] = ",".join(DAILY_FIELDS)
        params["timezone"] = "auto"

        data = await self._fetch_json(self.base_url, params=params)
        days = translate_daily(data, limit=self.forecast_days)
        logger.debug(f"{self.name}: {len(days)} forecast days for {coordinates}")
        return days
