"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Values are read once and handed to the weather provider at construction;
nothing reads the environment at request time.

## Optional Environment Variables

- RIDECAST_WEATHER_BASE_URL: Forecast endpoint (default: public Open-Meteo)
- RIDECAST_WEATHER_API_KEY: Open-Meteo commercial API key
- RIDECAST_REQUEST_TIMEOUT_SECONDS: HTTP timeout (default: httpx default)
- RIDECAST_FORECAST_DAYS: Days of forecast to keep, 1-7 (default: 7)
- RIDECAST_HISTORY_LIMIT: Rides kept in history, 1-30 (default: 30)
- RIDECAST_LOG_LEVEL: Logging level for the CLI (default: WARNING)

## Example .env file

```
RIDECAST_WEATHER_BASE_URL=https://customer-api.open-meteo.com/v1/forecast
RIDECAST_WEATHER_API_KEY=your-open-meteo-key
RIDECAST_LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ridecast.providers.openmeteo import DEFAULT_BASE_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RIDECAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ridecast"
    app_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Weather provider
    weather_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Open-Meteo forecast endpoint",
    )
    weather_api_key: str | None = Field(
        default=None,
        description="API key for the commercial Open-Meteo endpoint",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP timeout; unset keeps the transport default",
    )
    user_agent: str = "ridecast/0.1.0"
    forecast_days: int = Field(default=7, ge=1, le=7)

    # Ride history
    history_limit: int = Field(default=30, ge=1, le=30)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("weather_api_key", mode="before")
    @classmethod
    def empty_api_key_is_none(cls, v: str | None) -> str | None:
        """Treat an empty API key as not configured."""
        return v or None

    @property
    def api_key_configured(self) -> bool:
        """Check if a commercial API key is configured."""
        return bool(self.weather_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
