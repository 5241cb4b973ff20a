"""
Tests for the bounded-stops itinerary finder.

Tests cover:
- Direct, one-stop and two-stop enumeration
- Local departure date filtering
- Generation order and sequence stamping
- Aborting on dataset problems
"""

from datetime import timedelta

import pytest

from src.skypath.adapters.algorithms.bounded_stops_finder import (
    BoundedStopsItineraryFinder,
)
from src.skypath.exceptions import InvalidTimezoneError, UnknownAirportError
from src.skypath.schemas.query import SearchQuery
from src.skypath.services.connection_rules import DEFAULT_POLICY, ConnectionPolicy
from tests.factories import airport, build_index, dataset, flight


@pytest.fixture
def finder() -> BoundedStopsItineraryFinder:
    return BoundedStopsItineraryFinder()


@pytest.fixture
def tie_index():
    """
    All airports in New York time, all domestic.

    - D1 AAA->DDD 08:00-12:00 (240 min)
    - AAA->BBB->DDD, 60 min layover (240 min)
    - AAA->CCC->EEE->DDD, two 45 min layovers (240 min)
    - D2 AAA->DDD 09:00-12:30 (210 min), listed last
    """
    return build_index(
        dataset(
            [airport(code) for code in ("AAA", "BBB", "CCC", "DDD", "EEE")],
            [
                flight("D1", "AAA", "DDD", "2024-03-15T08:00:00", "2024-03-15T12:00:00", 300),
                flight("AB", "AAA", "BBB", "2024-03-15T08:00:00", "2024-03-15T09:00:00", 100),
                flight("BD", "BBB", "DDD", "2024-03-15T10:00:00", "2024-03-15T12:00:00", 100),
                flight("AC", "AAA", "CCC", "2024-03-15T08:00:00", "2024-03-15T08:30:00", 50),
                flight("CE", "CCC", "EEE", "2024-03-15T09:15:00", "2024-03-15T10:00:00", 50),
                flight("ED", "EEE", "DDD", "2024-03-15T10:45:00", "2024-03-15T12:00:00", 50),
                flight("D2", "AAA", "DDD", "2024-03-15T09:00:00", "2024-03-15T12:30:00", 400),
            ],
        )
    )


def numbers(itinerary):
    return [seg.flight_number for seg in itinerary.segments]


class TestBoundedStopsItineraryFinder:
    def test_name_and_policy(self, finder):
        assert finder.name == "Bounded-Stops Enumeration"
        assert finder.policy is DEFAULT_POLICY

    def test_north_america_paths(self, finder, north_america_index):
        found = finder.find_itineraries(north_america_index, SearchQuery("JFK", "LAX", "2024-06-01"))

        assert [numbers(it) for it in found] == [
            ["SP100"],
            ["SP200", "SP202"],
            ["SP300", "SP302"],
        ]
        direct, via_ord, via_yyz = found

        assert direct.total_duration_minutes == 360
        assert direct.total_price == 200.0
        assert direct.layovers_minutes == ()

        assert via_ord.layovers_minutes == (60,)
        assert via_ord.total_duration_minutes == 480
        assert via_ord.total_price == 200.5

        assert via_yyz.layovers_minutes == (90,)
        assert via_yyz.total_duration_minutes == 510
        assert via_yyz.total_price == 380.5

    def test_sequence_follows_generation_order(self, finder, north_america_index):
        found = finder.find_itineraries(north_america_index, SearchQuery("JFK", "LAX", "2024-06-01"))
        assert [it.sequence for it in found] == [0, 1, 2]

    def test_other_dates_excluded(self, finder, north_america_index):
        assert finder.find_itineraries(north_america_index, SearchQuery("JFK", "LAX", "2024-06-02")) == []

    def test_no_flights_from_origin(self, finder, north_america_index):
        assert finder.find_itineraries(north_america_index, SearchQuery("LAX", "JFK", "2024-06-01")) == []

    def test_date_filter_uses_local_departure_date(self, finder):
        """23:30 EDT on 06-01 is already 06-02 in UTC but departs on 06-01."""
        index = build_index(
            dataset(
                [airport("JFK"), airport("LAX", timezone="America/Los_Angeles")],
                [flight("RED", "JFK", "LAX", "2024-06-01T23:30:00", "2024-06-02T02:30:00")],
            )
        )
        assert len(finder.find_itineraries(index, SearchQuery("JFK", "LAX", "2024-06-01"))) == 1
        assert finder.find_itineraries(index, SearchQuery("JFK", "LAX", "2024-06-02")) == []

    def test_only_first_leg_is_date_filtered(self, finder):
        index = build_index(
            dataset(
                [airport("JFK"), airport("ORD", timezone="America/Chicago"), airport("LAX", timezone="America/Los_Angeles")],
                [
                    flight("LATE", "JFK", "ORD", "2024-06-01T21:00:00", "2024-06-01T23:00:00"),
                    flight("NEXT", "ORD", "LAX", "2024-06-02T00:30:00", "2024-06-02T02:30:00"),
                ],
            )
        )
        found = finder.find_itineraries(index, SearchQuery("JFK", "LAX", "2024-06-01"))
        assert [numbers(it) for it in found] == [["LATE", "NEXT"]]
        assert found[0].layovers_minutes == (90,)

    def test_two_stop_paths(self, finder, tie_index):
        found = finder.find_itineraries(tie_index, SearchQuery("AAA", "DDD", "2024-03-15"))
        assert [numbers(it) for it in found] == [
            ["D1"],
            ["D2"],
            ["AB", "BD"],
            ["AC", "CE", "ED"],
        ]
        two_stop = found[-1]
        assert two_stop.layovers_minutes == (45, 45)
        assert two_stop.total_duration_minutes == 240
        assert two_stop.route_airports == ["AAA", "CCC", "EEE", "DDD"]

    def test_paths_may_revisit_airports(self, finder):
        """Loops are not rejected: AAA->BBB->AAA->CCC is a valid two-stop path."""
        index = build_index(
            dataset(
                [airport("AAA"), airport("BBB"), airport("CCC")],
                [
                    flight("AB", "AAA", "BBB", "2024-03-15T06:00:00", "2024-03-15T07:00:00"),
                    flight("BA", "BBB", "AAA", "2024-03-15T08:00:00", "2024-03-15T09:00:00"),
                    flight("AC", "AAA", "CCC", "2024-03-15T10:00:00", "2024-03-15T11:00:00"),
                ],
            )
        )
        found = finder.find_itineraries(index, SearchQuery("AAA", "CCC", "2024-03-15"))
        assert [numbers(it) for it in found] == [["AC"], ["AB", "BA", "AC"]]

    def test_custom_policy(self, north_america_index):
        finder = BoundedStopsItineraryFinder(policy=ConnectionPolicy(min_domestic=timedelta(minutes=30)))
        found = finder.find_itineraries(north_america_index, SearchQuery("JFK", "LAX", "2024-06-01"))
        assert ["SP200", "SP201"] in [numbers(it) for it in found]

    def test_unknown_airport_aborts(self, finder):
        index = build_index(
            dataset(
                [airport("AAA"), airport("CCC")],
                [
                    flight("AX", "AAA", "XXX", "2024-03-15T08:00:00", "2024-03-15T09:00:00"),
                    flight("XC", "XXX", "CCC", "2024-03-15T10:00:00", "2024-03-15T11:00:00"),
                ],
            )
        )
        with pytest.raises(UnknownAirportError, match="unknown airport: XXX"):
            finder.find_itineraries(index, SearchQuery("AAA", "CCC", "2024-03-15"))

    def test_invalid_timezone_aborts(self, finder):
        index = build_index(
            dataset(
                [airport("AAA"), airport("BAD", timezone="Mars/Olympus")],
                [flight("AB", "AAA", "BAD", "2024-03-15T08:00:00", "2024-03-15T09:00:00")],
            )
        )
        with pytest.raises(InvalidTimezoneError):
            finder.find_itineraries(index, SearchQuery("AAA", "BAD", "2024-03-15"))

    def test_untouched_bad_data_is_ignored(self, finder):
        index = build_index(
            dataset(
                [airport("AAA"), airport("BBB"), airport("BAD", timezone="Mars/Olympus")],
                [
                    flight("AB", "AAA", "BBB", "2024-03-15T08:00:00", "2024-03-15T09:00:00"),
                    flight("BX", "BAD", "XXX", "2024-03-15T08:00:00", "2024-03-15T09:00:00"),
                ],
            )
        )
        found = finder.find_itineraries(index, SearchQuery("AAA", "BBB", "2024-03-15"))
        assert [numbers(it) for it in found] == [["AB"]]
