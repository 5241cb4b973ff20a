"""
Repository adapters for the flight index.
"""

from src.skypath.adapters.repositories.flight_index_repo import (
    FlightIndex,
    FlightIndexRepository,
    OriginIndex,
    build_flight_index,
    build_origin_index,
)

__all__ = [
    "FlightIndex",
    "FlightIndexRepository",
    "OriginIndex",
    "build_flight_index",
    "build_origin_index",
]
