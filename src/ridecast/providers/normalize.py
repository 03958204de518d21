"""Translation of raw provider data into normalized weather models.

## WMO Weather Codes -> Condition
| weathercode | Condition |
|-------------|-----------|
| 0, 1 | SUNNY |
| 2, 3, 45, 48 | CLOUDY |
| 51, 53, 55, 56, 57, 61, 63, 65, 80, 81, 82 | RAINY |
| 71, 73, 75, 77, 85, 86 | SNOWY |
| anything else | OTHER |

Thunderstorm codes (95, 96, 99) and freezing rain (66, 67) are not in any
bucket and map to OTHER.

## Numeric fields
Missing or null values become 0, then every value is rounded half up
(2.5 -> 3, -2.5 -> -2), the same way the mobile client has always
displayed them.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from pydantic import ValidationError

from ridecast.models.weather import Condition, CurrentWeather, DailyForecast
from ridecast.providers.base import MalformedResponseError

PROVIDER = "openmeteo"

SUNNY_CODES = frozenset({0, 1})
CLOUDY_CODES = frozenset({2, 3, 45, 48})
RAINY_CODES = frozenset({51, 53, 55, 56, 57, 61, 63, 65, 80, 81, 82})
SNOWY_CODES = frozenset({71, 73, 75, 77, 85, 86})

# Checked in order; buckets are disjoint
CODE_BUCKETS: tuple[tuple[frozenset[int], Condition], ...] = (
    (SUNNY_CODES, Condition.SUNNY),
    (CLOUDY_CODES, Condition.CLOUDY),
    (RAINY_CODES, Condition.RAINY),
    (SNOWY_CODES, Condition.SNOWY),
)

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "weathercode",
    "windspeed_10m_max",
    "winddirection_10m_dominant",
    "relative_humidity_2m_max",
    "visibility_mean",
    "precipitation_sum",
    "surface_pressure_mean",
)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def normalize_condition(code: int | None) -> Condition:
    """Map a provider weather code to a Condition.

    A missing code counts as 0. Codes outside every bucket map to OTHER.
    """
    if code is None:
        code = 0
    for codes, condition in CODE_BUCKETS:
        if code in codes:
            return condition
    return Condition.OTHER


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


def numeric(value: Any, field: str = "value") -> float:
    """Default a raw numeric field to 0 and reject non-numbers."""
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(
            f"Expected a number for '{field}', got {value!r}",
            provider=PROVIDER,
        )
    try:
        number = float(value)
    except OverflowError as e:
        raise MalformedResponseError(
            f"Number out of range for '{field}'",
            provider=PROVIDER,
        ) from e
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _section(payload: dict[str, Any], key: str) -> dict[str, Any]:
    """Get a nested object, treating a missing one as empty."""
    section = payload.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise MalformedResponseError(
            f"Expected '{key}' to be an object, got {type(section).__name__}",
            provider=PROVIDER,
        )
    return section


def _series(daily: dict[str, Any], key: str) -> list[Any]:
    """Get a parallel daily array, treating a missing one as empty."""
    values = daily.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise MalformedResponseError(
            f"Expected 'daily.{key}' to be a list, got {type(values).__name__}",
            provider=PROVIDER,
        )
    return values


def _at(values: list[Any], index: int, field: str) -> float:
    """Read a value from a parallel array, defaulting past its end."""
    raw = values[index] if index < len(values) else None
    return numeric(raw, field)


def _code(raw: Any, field: str) -> int:
    return round_half_up(numeric(raw, field))


def translate_current(payload: dict[str, Any]) -> CurrentWeather:
    """Translate a `current_weather=true` response to CurrentWeather."""
    current = _section(payload, "current_weather")
    return CurrentWeather(
        temperature_c=round_half_up(
            numeric(current.get("temperature"), "current_weather.temperature")
        ),
        wind_speed_ms=round_half_up(
            numeric(current.get("windspeed"), "current_weather.windspeed")
        ),
        condition=normalize_condition(
            _code(current.get("weathercode"), "current_weather.weathercode")
        ),
    )


def translate_daily(payload: dict[str, Any], limit: int = 7) -> list[DailyForecast]:
    """Translate a `daily=...` response to an ordered list of DailyForecast.

    Args:
        payload: Decoded provider response
        limit: Maximum number of days to keep; extra days are dropped

    Returns:
        At most `limit` forecasts in the provider's (ascending) order

    Raises:
        MalformedResponseError: If the shape is wrong, a date is invalid,
            or dates are not strictly ascending
    """
    daily = _section(payload, "daily")
    times = _series(daily, "time")[:limit]
    series = {key: _series(daily, key) for key in DAILY_FIELDS}

    days: list[DailyForecast] = []
    previous: date | None = None

    for i, raw_date in enumerate(times):
        try:
            day = date.fromisoformat(raw_date)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(
                f"Invalid date in 'daily.time[{i}]': {raw_date!r}",
                provider=PROVIDER,
            ) from e

        if previous is not None and day <= previous:
            raise MalformedResponseError(
                f"Dates must be strictly ascending: {day} after {previous}",
                provider=PROVIDER,
            )
        previous = day

        temp_max = _at(series["temperature_2m_max"], i, "temperature_2m_max")
        temp_min = _at(series["temperature_2m_min"], i, "temperature_2m_min")

        try:
            forecast = DailyForecast(
                date=day,
                weekday=WEEKDAY_LABELS[day.weekday()],
                condition=normalize_condition(
                    _code(_at(series["weathercode"], i, "weathercode"), "weathercode")
                ),
                temperature_c=round_half_up((temp_max + temp_min) / 2),
                temperature_min_c=round_half_up(temp_min),
                temperature_max_c=round_half_up(temp_max),
                wind_speed_ms=round_half_up(
                    _at(series["windspeed_10m_max"], i, "windspeed_10m_max")
                ),
                wind_direction_deg=round_half_up(
                    _at(
                        series["winddirection_10m_dominant"],
                        i,
                        "winddirection_10m_dominant",
                    )
                )
                % 360,
                relative_humidity_percent=round_half_up(
                    _at(
                        series["relative_humidity_2m_max"],
                        i,
                        "relative_humidity_2m_max",
                    )
                ),
                visibility_m=round_half_up(
                    _at(series["visibility_mean"], i, "visibility_mean")
                ),
                precipitation_mm=round_half_up(
                    _at(series["precipitation_sum"], i, "precipitation_sum")
                ),
                pressure_hpa=round_half_up(
                    _at(series["surface_pressure_mean"], i, "surface_pressure_mean")
                ),
            )
        except ValidationError as e:
            raise MalformedResponseError(
                f"Out-of-range value in 'daily' for {day}: {e}",
                provider=PROVIDER,
            ) from e

        days.append(forecast)

    return days
