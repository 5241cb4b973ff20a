"""
Itinerary Search Service - Domain orchestrator for itinerary searches.

Coordinates the interaction between:
- FlightIndexRepository (immutable flight index)
- ItineraryFinder (enumeration algorithm)
- SearchQuery (canonical, validated parameters)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from src.skypath.schemas.itinerary import SearchResult
from src.skypath.schemas.query import SearchQuery

if TYPE_CHECKING:
    from src.skypath.adapters.repositories.flight_index_repo import (
        FlightIndexRepository,
    )
    from src.skypath.ports.itinerary_finder import ItineraryFinder

logger = logging.getLogger(__name__)


class ItinerarySearchService:
    """
    Domain service for finding itineraries between two airports.

    Orchestrates the search:
    1. Canonicalizes and validates the query against the index
    2. Delegates enumeration to the itinerary finder
    3. Orders results by total duration with an explicit tie-break
    4. Logs performance metrics

    This service is stateless and thread-safe.

    Attributes:
        _index_repo: Repository providing the flight index.
        _finder: Algorithm adapter for itinerary enumeration.
    """

    def __init__(
        self,
        index_repo: FlightIndexRepository,
        finder: ItineraryFinder,
    ) -> None:
        """
        Initialize the search service.

        Args:
            index_repo: Repository for flight index access.
            finder: Algorithm adapter (e.g., BoundedStopsItineraryFinder).
        """
        self._index_repo = index_repo
        self._finder = finder

    def search(self, origin: str, destination: str, date: str) -> SearchResult:
        """
        Find all valid itineraries from origin to destination on date.

        Args:
            origin: Origin airport code, any case, whitespace tolerated.
            destination: Destination airport code, same rules.
            date: Departure date (YYYY-MM-DD) in the origin's local time.

        Returns:
            SearchResult with itineraries sorted by total duration; ties
            keep direct before one-stop before two-stop, then generation
            order. Empty when origin equals destination.

        Raises:
            InvalidAirportCodeError: Malformed or unknown airport code.
            InvalidDateError: Date is not YYYY-MM-DD.
            UnknownAirportError: A candidate leg references a missing airport.
            InvalidTimezoneError: A candidate leg's airport timezone is bad.
            IndexNotInitializedError: If the index cannot be loaded.
        """
        start_time = time.perf_counter()

        index = self._index_repo.get_index()
        query = SearchQuery.create(
            origin=origin,
            destination=destination,
            date=date,
            airport_exists=index.has_airport,
        )

        if query.is_same_airport:
            logger.debug("Origin equals destination (%s); no itineraries", query.origin)
            return SearchResult(origin=query.origin, destination=query.destination, date=query.date)

        logger.debug(
            "Search query: origin=%s, destination=%s, date=%s",
            query.origin,
            query.destination,
            query.date,
        )

        algo_start = time.perf_counter()
        itineraries = self._finder.find_itineraries(index, query)
        algo_time = time.perf_counter() - algo_start

        itineraries.sort(key=lambda it: it.sort_key)

        total_time = time.perf_counter() - start_time
        logger.info(
            "Itinerary search %s -> %s on %s: %d results in %.3fms (algo: %.3fms)",
            query.origin,
            query.destination,
            query.date,
            len(itineraries),
            total_time * 1000,
            algo_time * 1000,
        )

        return SearchResult(
            origin=query.origin,
            destination=query.destination,
            date=query.date,
            itineraries=tuple(itineraries),
        )

    @property
    def algorithm_name(self) -> str:
        """Get name of the underlying algorithm."""
        return self._finder.name

    @property
    def is_ready(self) -> bool:
        """Check if service is ready to handle requests."""
        return self._index_repo.is_initialized
