"""Bounded ride history.

The history is a plain list of RideEntry, newest first. Functions here
never mutate their input; they return a new list for the caller to
render and persist. The stored form is a JSON array using the camelCase
field names of the mobile client.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from ridecast.models.ride import RideEntry

HISTORY_LIMIT = 30

_history_adapter = TypeAdapter(list[RideEntry])


def append_ride(
    history: Sequence[RideEntry],
    entry: RideEntry,
    limit: int = HISTORY_LIMIT,
) -> list[RideEntry]:
    """Put a ride at the front of the history, dropping the oldest past limit."""
    return [entry, *history][:limit]


def remove_ride(history: Sequence[RideEntry], index: int) -> list[RideEntry]:
    """Return the history without the ride at index.

    Raises:
        IndexError: If index does not address an entry
    """
    if not 0 <= index < len(history):
        raise IndexError(f"No ride at index {index} (history has {len(history)})")
    return [ride for i, ride in enumerate(history) if i != index]


def dump_history(history: Sequence[RideEntry]) -> str:
    """Serialize a history to its stored JSON form."""
    return _history_adapter.dump_json(list(history), by_alias=True).decode()


def load_history(blob: str | bytes | None, limit: int = HISTORY_LIMIT) -> list[RideEntry]:
    """Parse a stored history, keeping at most limit entries.

    Raises:
        ValueError: If the blob is not a valid history
    """
    if not blob:
        return []
    try:
        history = _history_adapter.validate_json(blob)
    except ValidationError as e:
        raise ValueError(f"Invalid ride history: {e}") from e
    return history[:limit]


def format_duration(seconds: int) -> str:
    """Format a duration as MM:SS; minutes keep counting past an hour."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"
