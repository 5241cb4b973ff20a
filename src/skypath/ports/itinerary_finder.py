"""
Itinerary Finder port interface.

Defines the abstract contract for itinerary enumeration algorithms.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from src.skypath.adapters.repositories.flight_index_repo import FlightIndex
    from src.skypath.schemas.itinerary import Itinerary
    from src.skypath.schemas.query import SearchQuery


class ItineraryFinder(ABC):
    """
    Abstract interface for itinerary finding algorithms.

    Finders receive the shared, immutable FlightIndex and a validated
    SearchQuery. They must not mutate the index; any number of searches
    may run against it concurrently.

    Implementations:
    - BoundedStopsItineraryFinder: exhaustive enumeration up to two stops
    """

    @abstractmethod
    def find_itineraries(
        self,
        index: FlightIndex,
        query: SearchQuery,
    ) -> List[Itinerary]:
        """
        Enumerate all valid itineraries for the query.

        Args:
            index: Built flight index.
            query: Validated query (origin != destination).

        Returns:
            Valid itineraries in generation order; ordering by duration
            is the caller's responsibility.

        Raises:
            UnknownAirportError: A leg references an airport not in the index.
            InvalidTimezoneError: A leg's airport timezone does not resolve.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Algorithm identifier.

        Returns:
            Human-readable algorithm name.
        """
        ...
