"""Ride logging with weather snapshots."""

from ridecast.rides.history import (
    HISTORY_LIMIT,
    append_ride,
    dump_history,
    format_duration,
    load_history,
    remove_ride,
)
from ridecast.rides.recorder import (
    DEFAULT_RIDE_HUMIDITY_PERCENT,
    RideRecorder,
    build_ride_entry,
)

__all__ = [
    "HISTORY_LIMIT",
    "append_ride",
    "dump_history",
    "format_duration",
    "load_history",
    "remove_ride",
    "DEFAULT_RIDE_HUMIDITY_PERCENT",
    "RideRecorder",
    "build_ride_entry",
]
