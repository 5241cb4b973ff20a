"""
Custom exceptions for the itinerary search engine.

Provides a tagged hierarchy of exceptions so callers can branch on the
kind of failure instead of parsing message text.
"""

from enum import Enum


class SearchErrorKind(str, Enum):
    """Machine-readable tag carried by every SearchError."""

    INVALID_AIRPORT_CODE = "invalid_airport_code"
    INVALID_DATE = "invalid_date"
    UNKNOWN_AIRPORT = "unknown_airport"
    INVALID_TIMEZONE = "invalid_timezone"


class SkyPathError(Exception):
    """Base exception for all skypath errors."""

    pass


class SearchError(SkyPathError):
    """Base exception for errors that abort a single search query."""

    kind: SearchErrorKind


class InvalidAirportCodeError(SearchError):
    """Raised when origin or destination is malformed or not in the dataset."""

    kind = SearchErrorKind.INVALID_AIRPORT_CODE

    def __init__(self, code: str, side: str) -> None:
        self.code = code
        self.side = side
        message = f"invalid {side} airport code: {code}"
        super().__init__(message)


class InvalidDateError(SearchError):
    """Raised when the query date is not a YYYY-MM-DD calendar date."""

    kind = SearchErrorKind.INVALID_DATE

    def __init__(self, value: str) -> None:
        self.value = value
        message = f"invalid date (expected YYYY-MM-DD): {value}"
        super().__init__(message)


class DataIntegrityError(SearchError):
    """Base exception for dataset problems discovered while searching."""

    pass


class UnknownAirportError(DataIntegrityError):
    """Raised when a flight references an airport missing from the dataset."""

    kind = SearchErrorKind.UNKNOWN_AIRPORT

    def __init__(self, code: str) -> None:
        self.code = code
        message = f"unknown airport: {code}"
        super().__init__(message)


class InvalidTimezoneError(DataIntegrityError):
    """Raised when an airport's timezone identifier does not resolve."""

    kind = SearchErrorKind.INVALID_TIMEZONE

    def __init__(self, code: str, timezone: str) -> None:
        self.code = code
        self.timezone = timezone
        message = f"invalid timezone for airport {code}: {timezone!r}"
        super().__init__(message)


class DatasetLoadError(SkyPathError):
    """Raised when the dataset cannot be read, decoded or validated."""

    pass


class IndexNotInitializedError(SkyPathError):
    """Raised when the flight index cannot be built on first access."""

    pass
