"""Timed ride capture.

A recorder is started when a ride begins. Stopping it fetches the current
weather at the rider's position and turns it into a RideEntry at the
front of the history.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone

from ridecast.config import get_settings
from ridecast.forecast import fetch_current_weather
from ridecast.models.location import Coordinates, PermissionDenied
from ridecast.models.ride import RideEntry
from ridecast.models.weather import CurrentWeather
from ridecast.rides.history import HISTORY_LIMIT, append_ride, remove_ride

logger = logging.getLogger(__name__)

# The current-weather endpoint reports no humidity; rides are tagged
# with this typical value instead.
DEFAULT_RIDE_HUMIDITY_PERCENT = 60

CurrentWeatherFetcher = Callable[[float, float], Awaitable[CurrentWeather]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_ride_entry(
    started_at: datetime,
    duration_seconds: int,
    weather: CurrentWeather,
) -> RideEntry:
    """Tag a finished ride with a weather snapshot."""
    return RideEntry(
        started_at=started_at,
        duration_seconds=duration_seconds,
        temperature_c=weather.temperature_c,
        condition=weather.condition,
        wind_speed_ms=weather.wind_speed_ms,
        humidity_percent=DEFAULT_RIDE_HUMIDITY_PERCENT,
    )


class RideRecorder:
    """Tracks one ride at a time and keeps the ride history.

    Example:
        ```python
        recorder = RideRecorder(history=load_history(stored_blob))
        recorder.start()
        ...
        entry = await recorder.stop(Coordinates(latitude=50.45, longitude=30.52))
        stored_blob = dump_history(recorder.history)
        ```
    """

    def __init__(
        self,
        fetch_current: CurrentWeatherFetcher = fetch_current_weather,
        history: Sequence[RideEntry] = (),
        clock: Callable[[], datetime] = _utcnow,
        history_limit: int | None = None,
    ):
        """Initialize the recorder.

        Args:
            fetch_current: Coroutine function (lat, lon) -> CurrentWeather
            history: Previously stored rides, newest first
            clock: Source of the current time
            history_limit: Maximum rides kept, 1-30 (default: from settings)

        Raises:
            ValueError: If history_limit is outside 1-30
        """
        if history_limit is None:
            history_limit = get_settings().history_limit
        if not 1 <= history_limit <= HISTORY_LIMIT:
            raise ValueError(
                f"history_limit must be between 1 and {HISTORY_LIMIT}, got {history_limit}"
            )
        self._fetch_current = fetch_current
        self._clock = clock
        self.history_limit = history_limit
        self.history: list[RideEntry] = list(history)[:history_limit]
        self._started_at: datetime | None = None

    @property
    def is_riding(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the ride started, 0 when idle."""
        if self._started_at is None:
            return 0
        return max(0, int((self._clock() - self._started_at).total_seconds()))

    def start(self) -> datetime:
        """Start timing a ride, restarting any ride in progress."""
        self._started_at = self._clock()
        logger.debug(f"Ride started at {self._started_at.isoformat()}")
        return self._started_at

    async def stop(self, coordinates: Coordinates | None) -> RideEntry:
        """Finish the ride and record it with the weather at its end.

        The recorder is idle afterwards even if recording fails.

        Args:
            coordinates: Rider position, or None if location is unavailable

        Returns:
            The recorded entry, also placed at the front of `history`

        Raises:
            RuntimeError: If no ride is in progress
            PermissionDenied: If coordinates is None
            NetworkError: If the weather service cannot be reached
            MalformedResponseError: If the weather response is unusable
        """
        if self._started_at is None:
            raise RuntimeError("No ride in progress")

        started_at = self._started_at
        duration = self.elapsed_seconds
        self._started_at = None

        if coordinates is None:
            raise PermissionDenied("Location permission is needed to save a ride")

        weather = await self._fetch_current(coordinates.latitude, coordinates.longitude)
        entry = build_ride_entry(started_at, duration, weather)
        self.history = append_ride(self.history, entry, limit=self.history_limit)
        logger.info(
            f"Saved ride of {duration}s: {entry.temperature_c}°C, "
            f"{entry.condition.value}, {entry.wind_speed_ms} m/s"
        )
        return entry

    def delete(self, index: int) -> None:
        """Delete a ride from the history by position."""
        self.history = remove_ride(self.history, index)
