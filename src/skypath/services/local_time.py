"""
Local wall-clock time to absolute instant conversion.

Flights carry naive local timestamps. Each one is interpreted in the
timezone of the airport it refers to (origin for departures, destination
for arrivals) and converted to UTC before any arithmetic.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from src.skypath.schemas.flight import LOCAL_TIMESTAMP_FORMAT, Flight

if TYPE_CHECKING:
    from src.skypath.adapters.repositories.flight_index_repo import FlightIndex

_ONE_MINUTE = timedelta(minutes=1)


def parse_local_timestamp(value: str) -> datetime:
    """Parse a naive YYYY-MM-DDTHH:MM:SS timestamp."""
    return datetime.strptime(value, LOCAL_TIMESTAMP_FORMAT)


def to_instant(local: datetime, zone: ZoneInfo) -> datetime:
    """
    Interpret a naive wall-clock time in zone and return it in UTC.

    The offset is the one in force at that local date, so daylight
    saving is honoured. Ambiguous or skipped wall times resolve with
    fold=0 (the offset in force before the transition).
    """
    return local.replace(tzinfo=zone).astimezone(timezone.utc)


def departure_instant(index: FlightIndex, flight: Flight) -> datetime:
    """
    Departure of flight as a UTC instant, using its origin's timezone.

    Raises:
        UnknownAirportError: Origin not in the index.
        InvalidTimezoneError: Origin timezone does not resolve.
    """
    zone = index.timezone_of(flight.origin)
    return to_instant(parse_local_timestamp(flight.departure_time), zone)


def arrival_instant(index: FlightIndex, flight: Flight) -> datetime:
    """
    Arrival of flight as a UTC instant, using its destination's timezone.

    Raises:
        UnknownAirportError: Destination not in the index.
        InvalidTimezoneError: Destination timezone does not resolve.
    """
    zone = index.timezone_of(flight.destination)
    return to_instant(parse_local_timestamp(flight.arrival_time), zone)


def whole_minutes(delta: timedelta) -> int:
    """Whole minutes in delta, floored toward negative infinity."""
    return delta // _ONE_MINUTE
