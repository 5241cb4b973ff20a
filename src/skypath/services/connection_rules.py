"""
Connection rules for multi-leg itineraries.

Decides whether an arriving leg and a departing leg form a legal
connection, and how long the layover is.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from src.skypath.schemas.flight import Flight
from src.skypath.services.local_time import (
    arrival_instant,
    departure_instant,
    whole_minutes,
)

if TYPE_CHECKING:
    from src.skypath.adapters.repositories.flight_index_repo import FlightIndex


@dataclass(frozen=True)
class ConnectionPolicy:
    """
    Layover bounds applied to every connection.

    Attributes:
        min_domestic: Minimum layover when the whole path stays in one country.
        min_international: Minimum layover for any other connection.
        max_layover: Maximum layover, domestic or international.
    """

    min_domestic: timedelta = timedelta(minutes=45)
    min_international: timedelta = timedelta(minutes=90)
    max_layover: timedelta = timedelta(hours=6)

    def __post_init__(self) -> None:
        """Validate bounds."""
        if self.min_domestic < timedelta(0) or self.min_international < timedelta(0):
            raise ValueError("minimum layovers must be >= 0")
        if self.max_layover < max(self.min_domestic, self.min_international):
            raise ValueError(
                f"max_layover ({self.max_layover}) must be >= both minimum layovers"
            )

    def minimum_layover(self, domestic: bool) -> timedelta:
        return self.min_domestic if domestic else self.min_international


DEFAULT_POLICY = ConnectionPolicy()


def is_domestic_connection(index: FlightIndex, arriving: Flight, departing: Flight) -> bool:
    """
    Classify a connection as domestic.

    Domestic only if both legs are single-country and the arriving leg's
    destination country equals the departing leg's origin country. Any
    airport without a resolvable country makes the connection international.
    """
    countries = [
        index.country(arriving.origin),
        index.country(arriving.destination),
        index.country(departing.origin),
        index.country(departing.destination),
    ]
    if any(country is None for country in countries):
        return False

    arr_origin, arr_dest, dep_origin, dep_dest = countries
    return arr_origin == arr_dest and dep_origin == dep_dest and arr_dest == dep_origin


def check_connection(
    index: FlightIndex,
    arriving: Flight,
    departing: Flight,
    policy: ConnectionPolicy = DEFAULT_POLICY,
) -> Optional[int]:
    """
    Validate a connection and return its layover in whole minutes.

    Rules, first failure wins:
    1. Same airport (no ground transfer)
    2. Layover must not be negative
    3. Layover must not exceed policy.max_layover
    4. Layover must reach the domestic/international minimum

    Args:
        index: Flight index used for timezones and countries.
        arriving: Leg arriving at the connection airport.
        departing: Leg departing the connection airport.
        policy: Layover bounds.

    Returns:
        Layover minutes if valid, otherwise None.

    Raises:
        UnknownAirportError: A leg's airport is not in the index.
        InvalidTimezoneError: A leg's airport timezone does not resolve.
    """
    if arriving.destination != departing.origin:
        return None

    layover = departure_instant(index, departing) - arrival_instant(index, arriving)

    if layover < timedelta(0):
        return None
    if layover > policy.max_layover:
        return None

    domestic = is_domestic_connection(index, arriving, departing)
    if layover < policy.minimum_layover(domestic):
        return None

    return whole_minutes(layover)
