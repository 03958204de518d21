"""Ride suitability scoring.

A day starts at 100 points. Each factor is a bucket chain: its rungs are
checked top to bottom against the unmodified observation and only the
first matching rung applies, the way an if/elif ladder would. Chains are
independent of each other and their penalties are summed. The result is
clamped to 0-100.

| Factor | Rungs (first match wins) |
|--------|--------------------------|
| Temperature | < 10 °C: -30; < 18 °C: -10; > 28 °C: -25; > 25 °C: -10 |
| Humidity | < 40 %: -10; > 80 %: -15 |
| Wind | > 10 m/s: -25; > 6 m/s: -10 |
| Visibility | < 4000 m: -20; < 8000 m: -10 |
| Precipitation | > 0 mm: -20 |
| Pressure | outside 990-1030 hPa: -10 |
| Condition | rainy or snowy: -30; cloudy: -5 |

Boundaries matter: 10 °C is in the -10 rung, 18 °C is penalty-free, a
wind of exactly 6 m/s is penalty-free.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from enum import Enum
from typing import Any, Callable

from ridecast.models.weather import Condition, CurrentWeather, DailyForecast
from ridecast.providers.normalize import WEEKDAY_LABELS, round_half_up

MAX_SCORE = 100
MIN_SCORE = 0

# Values assumed when scoring current conditions, which lack these fields
CURRENT_HUMIDITY_PERCENT = 60
CURRENT_VISIBILITY_M = 10000
CURRENT_PRESSURE_HPA = 1015


class ComparisonOperator(str, Enum):
    """Operators for comparing an observed value with a rung threshold."""

    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    IN = "in"  # Value is one of a tuple
    OUTSIDE = "outside"  # Value is below low or above high of a (low, high) pair


_COMPARATORS: dict[ComparisonOperator, Callable[[Any, Any], bool]] = {
    ComparisonOperator.LESS_THAN: lambda a, e: a < e,
    ComparisonOperator.GREATER_THAN: lambda a, e: a > e,
    ComparisonOperator.IN: lambda a, e: a in e,
    ComparisonOperator.OUTSIDE: lambda a, e: a < e[0] or a > e[1],
}


@dataclass(frozen=True)
class Rung:
    """One bucket of a chain: a test and the points it costs."""

    operator: ComparisonOperator
    threshold: Any
    penalty: int
    reason: str

    def matches(self, value: Any) -> bool:
        return _COMPARATORS[self.operator](value, self.threshold)


@dataclass(frozen=True)
class Penalty:
    """A penalty applied to an observation."""

    factor: str
    value: Any
    points: int
    reason: str


@dataclass(frozen=True)
class BucketChain:
    """Mutually exclusive rungs for one weather factor."""

    factor: str
    attribute: str
    rungs: tuple[Rung, ...]

    def evaluate(self, observation: DailyForecast) -> Penalty | None:
        """Return the penalty of the first matching rung, if any."""
        value = getattr(observation, self.attribute)
        for rung in self.rungs:
            if rung.matches(value):
                return Penalty(
                    factor=self.factor,
                    value=value,
                    points=rung.penalty,
                    reason=rung.reason,
                )
        return None


SUITABILITY_RULES: tuple[BucketChain, ...] = (
    BucketChain(
        factor="temperature",
        attribute="temperature_c",
        rungs=(
            Rung(ComparisonOperator.LESS_THAN, 10, 30, "Cold (below 10°C)"),
            Rung(ComparisonOperator.LESS_THAN, 18, 10, "Cool (10-17°C)"),
            Rung(ComparisonOperator.GREATER_THAN, 28, 25, "Hot (above 28°C)"),
            Rung(ComparisonOperator.GREATER_THAN, 25, 10, "Warm (26-28°C)"),
        ),
    ),
    BucketChain(
        factor="humidity",
        attribute="relative_humidity_percent",
        rungs=(
            Rung(ComparisonOperator.LESS_THAN, 40, 10, "Dry air (below 40%)"),
            Rung(ComparisonOperator.GREATER_THAN, 80, 15, "Humid (above 80%)"),
        ),
    ),
    BucketChain(
        factor="wind",
        attribute="wind_speed_ms",
        rungs=(
            Rung(ComparisonOperator.GREATER_THAN, 10, 25, "Strong wind (above 10 m/s)"),
            Rung(ComparisonOperator.GREATER_THAN, 6, 10, "Breezy (above 6 m/s)"),
        ),
    ),
    BucketChain(
        factor="visibility",
        attribute="visibility_m",
        rungs=(
            Rung(ComparisonOperator.LESS_THAN, 4000, 20, "Poor visibility (below 4 km)"),
            Rung(ComparisonOperator.LESS_THAN, 8000, 10, "Reduced visibility (below 8 km)"),
        ),
    ),
    BucketChain(
        factor="precipitation",
        attribute="precipitation_mm",
        rungs=(
            Rung(ComparisonOperator.GREATER_THAN, 0, 20, "Precipitation expected"),
        ),
    ),
    BucketChain(
        factor="pressure",
        attribute="pressure_hpa",
        rungs=(
            Rung(ComparisonOperator.OUTSIDE, (990, 1030), 10, "Unsettled pressure"),
        ),
    ),
    BucketChain(
        factor="condition",
        attribute="condition",
        rungs=(
            Rung(
                ComparisonOperator.IN,
                (Condition.RAINY, Condition.SNOWY),
                30,
                "Rain or snow",
            ),
            Rung(ComparisonOperator.IN, (Condition.CLOUDY,), 5, "Cloudy"),
        ),
    ),
)


@dataclass
class SuitabilityBreakdown:
    """Score of an observation together with the penalties behind it."""

    score: int
    penalties: list[Penalty] = field(default_factory=list)

    @property
    def total_penalty(self) -> int:
        return sum(p.points for p in self.penalties)

    @property
    def factors(self) -> list[str]:
        """Names of the factors that cost points."""
        return [p.factor for p in self.penalties]


def explain_suitability(observation: DailyForecast) -> SuitabilityBreakdown:
    """Score an observation and report every applied penalty.

    Args:
        observation: Normalized daily observation

    Returns:
        SuitabilityBreakdown with the clamped 0-100 score
    """
    penalties: list[Penalty] = []
    for chain in SUITABILITY_RULES:
        penalty = chain.evaluate(observation)
        if penalty is not None:
            penalties.append(penalty)

    raw = MAX_SCORE - sum(p.points for p in penalties)
    score = round_half_up(max(MIN_SCORE, min(MAX_SCORE, raw)))
    return SuitabilityBreakdown(score=score, penalties=penalties)


def calc_suitability(observation: DailyForecast) -> int:
    """Ride suitability of an observation, 0 (worst) to 100 (ideal)."""
    return explain_suitability(observation).score


class SuitabilityBand(str, Enum):
    """Display band of a score."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    BAD = "bad"


def suitability_band(score: int) -> SuitabilityBand:
    """Classify a score: above 75 good, down to 51 fair, down to 26 poor."""
    if score <= 25:
        return SuitabilityBand.BAD
    elif score <= 50:
        return SuitabilityBand.POOR
    elif score <= 75:
        return SuitabilityBand.FAIR
    return SuitabilityBand.GOOD


def daily_from_current(
    current: CurrentWeather,
    day: date_type | None = None,
    humidity_percent: int = CURRENT_HUMIDITY_PERCENT,
    visibility_m: int = CURRENT_VISIBILITY_M,
    pressure_hpa: int = CURRENT_PRESSURE_HPA,
) -> DailyForecast:
    """Express current conditions as a day so they can be scored.

    The current-weather endpoint reports no humidity, visibility, pressure
    or precipitation, so typical fair-weather values stand in for them.
    """
    day = day or date_type.today()
    return DailyForecast(
        date=day,
        weekday=WEEKDAY_LABELS[day.weekday()],
        condition=current.condition,
        temperature_c=current.temperature_c,
        temperature_min_c=current.temperature_c,
        temperature_max_c=current.temperature_c,
        wind_speed_ms=current.wind_speed_ms,
        wind_direction_deg=0,
        relative_humidity_percent=humidity_percent,
        visibility_m=visibility_m,
        precipitation_mm=0,
        pressure_hpa=pressure_hpa,
    )


def score_current(current: CurrentWeather) -> int:
    """Ride suitability of current conditions."""
    return calc_suitability(daily_from_current(current))
