"""Command-line interface for ride weather."""

import argparse
import asyncio
import logging
import sys

from ridecast.config import get_settings
from ridecast.forecast import fetch_current_weather, fetch_seven_day_forecast
from ridecast.models.location import Coordinates
from ridecast.providers.base import ProviderError
from ridecast.scoring.suitability import (
    calc_suitability,
    score_current,
    suitability_band,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        description="ridecast - Weather and ride suitability for cyclists",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: RIDECAST_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Current command
    current_parser = subparsers.add_parser(
        "current", help="Show current weather and its ride score"
    )
    current_parser.add_argument(
        "location",
        type=Coordinates.from_string,
        help="Location as lat,lon coordinates",
    )

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast", help="Show the 7-day forecast with daily ride scores"
    )
    forecast_parser.add_argument(
        "location",
        type=Coordinates.from_string,
        help="Location as lat,lon coordinates",
    )

    return parser


async def _show_current(coordinates: Coordinates) -> None:
    settings = get_settings()
    weather = await fetch_current_weather(
        coordinates.latitude, coordinates.longitude, settings=settings
    )
    score = score_current(weather)
    print(f"Now at {coordinates}")
    print(f"  Condition:   {weather.condition.value}")
    print(f"  Temperature: {weather.temperature_c}°C")
    print(f"  Wind:        {weather.wind_speed_ms} m/s")
    print(f"  Ride score:  {score}% ({suitability_band(score).value})")


async def _show_forecast(coordinates: Coordinates) -> None:
    settings = get_settings()
    days = await fetch_seven_day_forecast(
        coordinates.latitude, coordinates.longitude, settings=settings
    )
    if not days:
        print(f"No forecast available for {coordinates}")
        return

    print(f"Forecast for {coordinates}")
    for day in days:
        score = calc_suitability(day)
        print(
            f"  {day.weekday} {day.date.isoformat()}  "
            f"{day.condition.value:<7} "
            f"{day.temperature_c:>3}°C ({day.temperature_min_c}..{day.temperature_max_c})  "
            f"wind {day.wind_speed_ms} m/s {day.direction_cardinal():<3}  "
            f"hum {day.relative_humidity_percent}%  "
            f"ride {score:>3}% {suitability_band(score).value}"
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "current": _show_current,
        "forecast": _show_forecast,
    }

    try:
        asyncio.run(commands[args.command](args.location))
    except ProviderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
