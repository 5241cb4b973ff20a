"""
Search query schema.

Defines the canonical, validated parameters handed to itinerary finders.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from src.skypath.exceptions import InvalidAirportCodeError, InvalidDateError

QUERY_DATE_FORMAT = "%Y-%m-%d"

_AIRPORT_CODE_RE = re.compile(r"[A-Z]{3}")
_QUERY_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def canonicalize_airport_code(code: str) -> str:
    """
    Canonicalize an airport code for lookup and comparison.

    Removes all whitespace (surrounding and internal) and uppercases.
    Idempotent: canonicalize(canonicalize(x)) == canonicalize(x).

    Example:
        >>> canonicalize_airport_code("  j fk ")
        'JFK'
    """
    return "".join(code.split()).upper()


def is_airport_code(code: str) -> bool:
    """True if code is exactly three ASCII uppercase letters."""
    return _AIRPORT_CODE_RE.fullmatch(code) is not None


def is_query_date(value: str) -> bool:
    """True if value is a real calendar date written as YYYY-MM-DD."""
    if _QUERY_DATE_RE.fullmatch(value) is None:
        return False
    try:
        datetime.strptime(value, QUERY_DATE_FORMAT)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class SearchQuery:
    """
    Immutable itinerary search parameters.

    Attributes:
        origin: Canonical origin airport code.
        destination: Canonical destination airport code.
        date: Departure date exactly as supplied (YYYY-MM-DD).
    """

    origin: str
    destination: str
    date: str

    @property
    def is_same_airport(self) -> bool:
        """Origin equals destination; such queries have no itineraries."""
        return self.origin == self.destination

    @classmethod
    def create(
        cls,
        origin: str,
        destination: str,
        date: str,
        airport_exists: Callable[[str], bool],
    ) -> "SearchQuery":
        """
        Canonicalize and validate raw query strings.

        Checks run in order and the first failure wins: same-airport
        short-circuit, code format (origin then destination), presence
        in the dataset (origin then destination), then the date.

        Args:
            origin: Raw origin code.
            destination: Raw destination code.
            date: Raw date string.
            airport_exists: Lookup telling whether a canonical code is known.

        Returns:
            SearchQuery. Same-airport queries are returned unvalidated.

        Raises:
            InvalidAirportCodeError: Malformed or unknown code.
            InvalidDateError: Date is not YYYY-MM-DD.
        """
        query = cls(
            origin=canonicalize_airport_code(origin),
            destination=canonicalize_airport_code(destination),
            date=date,
        )
        if query.is_same_airport:
            return query

        if not is_airport_code(query.origin):
            raise InvalidAirportCodeError(query.origin, "origin")
        if not is_airport_code(query.destination):
            raise InvalidAirportCodeError(query.destination, "destination")

        if not airport_exists(query.origin):
            raise InvalidAirportCodeError(query.origin, "origin")
        if not airport_exists(query.destination):
            raise InvalidAirportCodeError(query.destination, "destination")

        if not is_query_date(query.date):
            raise InvalidDateError(query.date)

        return query
