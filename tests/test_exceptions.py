"""Tests for the exception hierarchy and its machine-readable kinds."""

import pytest

from src.skypath.exceptions import (
    DataIntegrityError,
    DatasetLoadError,
    IndexNotInitializedError,
    InvalidAirportCodeError,
    InvalidDateError,
    InvalidTimezoneError,
    SearchError,
    SearchErrorKind,
    SkyPathError,
    UnknownAirportError,
)


class TestSearchErrorMessages:
    def test_invalid_origin_code(self):
        err = InvalidAirportCodeError("J1K", "origin")
        assert str(err) == "invalid origin airport code: J1K"
        assert err.kind is SearchErrorKind.INVALID_AIRPORT_CODE
        assert err.code == "J1K"
        assert err.side == "origin"

    def test_invalid_destination_code(self):
        err = InvalidAirportCodeError("ZZZ", "destination")
        assert str(err) == "invalid destination airport code: ZZZ"

    def test_invalid_date(self):
        err = InvalidDateError("2024/03/15")
        assert str(err) == "invalid date (expected YYYY-MM-DD): 2024/03/15"
        assert err.kind is SearchErrorKind.INVALID_DATE

    def test_unknown_airport(self):
        err = UnknownAirportError("XXX")
        assert str(err) == "unknown airport: XXX"
        assert err.kind is SearchErrorKind.UNKNOWN_AIRPORT

    def test_invalid_timezone(self):
        err = InvalidTimezoneError("BAD", "Mars/Olympus")
        assert str(err).startswith("invalid timezone for airport BAD")
        assert "Mars/Olympus" in str(err)
        assert err.kind is SearchErrorKind.INVALID_TIMEZONE


class TestHierarchy:
    @pytest.mark.parametrize(
        "err",
        [
            InvalidAirportCodeError("XX", "origin"),
            InvalidDateError("x"),
            UnknownAirportError("XXX"),
            InvalidTimezoneError("XXX", ""),
        ],
    )
    def test_search_errors_share_base(self, err):
        assert isinstance(err, SearchError)
        assert isinstance(err, SkyPathError)

    def test_integrity_errors_grouped(self):
        assert issubclass(UnknownAirportError, DataIntegrityError)
        assert issubclass(InvalidTimezoneError, DataIntegrityError)
        assert not issubclass(InvalidDateError, DataIntegrityError)

    def test_load_errors_are_not_search_errors(self):
        assert not issubclass(DatasetLoadError, SearchError)
        assert not issubclass(IndexNotInitializedError, SearchError)
        assert issubclass(DatasetLoadError, SkyPathError)

    def test_kind_values_are_strings(self):
        assert SearchErrorKind.INVALID_DATE.value == "invalid_date"
        assert SearchErrorKind.UNKNOWN_AIRPORT == "unknown_airport"
