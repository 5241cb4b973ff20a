"""
Algorithm adapters for itinerary search.
"""

from src.skypath.adapters.algorithms.bounded_stops_finder import (
    BoundedStopsItineraryFinder,
)
from src.skypath.adapters.algorithms.immutability import make_immutable

__all__ = [
    "BoundedStopsItineraryFinder",
    "make_immutable",
]
