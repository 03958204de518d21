"""Base weather provider abstraction.

This module defines the interface for the weather data provider and the
errors it raises. Providers translate their API responses into the
normalized models in `ridecast.models.weather` via
`ridecast.providers.normalize`, so scoring and display never see raw
provider data.

## Canonical Units (SI-based, rounded to integers)
- Temperature: Celsius (°C)
- Wind speed: meters per second (m/s)
- Pressure: hectopascals (hPa)
- Precipitation: millimeters (mm)
- Visibility: meters (m)
- Humidity: percentage (0-100)
- Wind direction: degrees (0-359, where 0=N, 90=E, 180=S, 270=W)

## Error Policy
- Request failures (transport, decoding) and non-2xx statuses, redirects
  included, raise `NetworkError`
- Bodies that are not JSON, or JSON of the wrong shape, raise
  `MalformedResponseError`
- Missing fields are NOT errors: they default to 0 during normalization
- Nothing is retried or cached; every call performs exactly one request
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ridecast.models.location import Coordinates
from ridecast.models.weather import CurrentWeather, DailyForecast

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class NetworkError(ProviderError):
    """Raised when the provider cannot be reached or answers with an error status."""

    pass


class MalformedResponseError(ProviderError):
    """Raised when a response cannot be read as the expected JSON shape."""

    pass


class WeatherProvider(ABC):
    """Abstract base class for weather data providers.

    Attributes:
        name: Human-readable provider name
        base_url: Endpoint URL for the API

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            now = await provider.get_current_weather(
                Coordinates(latitude=50.45, longitude=30.52)
            )
        ```
    """

    name: str
    base_url: str

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Override for the class-level endpoint URL
            api_key: API key if the endpoint requires one
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds (None keeps httpx's default)
            client: Pre-built HTTP client; the provider will not close it
        """
        if base_url:
            self.base_url = base_url
        self.api_key = api_key
        self.user_agent = user_agent or "ridecast/0.1.0"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            if self.timeout is None:
                self._client = httpx.AsyncClient()
            else:
                self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def _fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one GET request and decode its JSON object body.

        Args:
            url: Full URL to fetch
            params: Query parameters

        Returns:
            Decoded JSON object

        Raises:
            NetworkError: If the request fails or returns a non-2xx status
            MalformedResponseError: If the body is not a JSON object
        """
        client = self._get_client()
        logger.debug(f"{self.name}: GET {url} params={params}")

        try:
            response = await client.get(
                url, params=params, headers=self._get_default_headers()
            )
        except httpx.RequestError as e:
            logger.warning(f"{self.name}: request failed: {e!r}")
            raise NetworkError(
                f"Failed to reach weather service: {e}",
                provider=self.name,
            ) from e

        if response.status_code >= 300:
            logger.warning(
                f"{self.name}: request failed with status {response.status_code}"
            )
            raise NetworkError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse response: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def get_current_weather(self, coordinates: Coordinates) -> CurrentWeather:
        """Get the current conditions for a location.

        Raises:
            NetworkError: If the provider cannot be reached
            MalformedResponseError: If the response has the wrong shape
        """
        pass

    @abstractmethod
    async def get_seven_day_forecast(
        self, coordinates: Coordinates
    ) -> list[DailyForecast]:
        """Get up to seven daily forecasts, ordered by ascending date.

        Raises:
            NetworkError: If the provider cannot be reached
            MalformedResponseError: If the response has the wrong shape
        """
        pass

    def get_max_forecast_days(self) -> int:
        """Get maximum forecast days returned."""
        return 7
