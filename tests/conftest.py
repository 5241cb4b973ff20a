"""Shared fixtures for the SkyPath test suite."""

import pytest

from src.skypath.adapters.repositories.flight_index_repo import FlightIndex
from tests.factories import CA_AIRPORTS, US_AIRPORTS, build_index, dataset, flight


@pytest.fixture
def north_america_dataset() -> dict:
    """
    JFK/ORD/LAX (US) plus YYZ (CA) on 2024-06-01 (summer time).

    - SP100 JFK->LAX direct, 08:00 EDT -> 11:00 PDT (360 min)
    - SP200 JFK->ORD arrives 10:00 CDT; SP201 ORD->LAX departs 10:30 (30 min,
      too short) and SP202 departs 11:00 (60 min, valid domestic)
    - SP300 JFK->YYZ arrives 10:00 EDT; SP301 YYZ->LAX departs 11:00 (60 min,
      too short international) and SP302 departs 11:30 (90 min, valid)
    """
    return dataset(
        airports=US_AIRPORTS + CA_AIRPORTS,
        flights=[
            flight("SP100", "JFK", "LAX", "2024-06-01T08:00:00", "2024-06-01T11:00:00", 200),
            flight("SP200", "JFK", "ORD", "2024-06-01T08:00:00", "2024-06-01T10:00:00", 120.10),
            flight("SP201", "ORD", "LAX", "2024-06-01T10:30:00", "2024-06-01T12:30:00", 99.95),
            flight("SP202", "ORD", "LAX", "2024-06-01T11:00:00", "2024-06-01T13:00:00", "80.40"),
            flight("SP300", "JFK", "YYZ", "2024-06-01T08:30:00", "2024-06-01T10:00:00", 150),
            flight("SP301", "YYZ", "LAX", "2024-06-01T11:00:00", "2024-06-01T13:30:00", 210),
            flight("SP302", "YYZ", "LAX", "2024-06-01T11:30:00", "2024-06-01T14:00:00", 230.5),
        ],
    )


@pytest.fixture
def north_america_index(north_america_dataset) -> FlightIndex:
    return build_index(north_america_dataset)
