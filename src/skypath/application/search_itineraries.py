"""
SearchItineraries Use Case - Public API for itinerary search.

This module provides the main entry point for the search engine.
It acts as a Facade/Factory, handling dependency initialization and
providing a clean interface for consumers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from src.skypath.adapters.algorithms.bounded_stops_finder import (
    BoundedStopsItineraryFinder,
)
from src.skypath.adapters.data_providers.json_provider import (
    InMemoryDatasetProvider,
    JsonDatasetProvider,
)
from src.skypath.adapters.repositories.flight_index_repo import FlightIndexRepository
from src.skypath.config import DEFAULT_DATA_PATH
from src.skypath.ports.dataset_provider import DatasetProvider
from src.skypath.ports.itinerary_finder import ItineraryFinder
from src.skypath.schemas.airport import Airport
from src.skypath.schemas.itinerary import SearchResult
from src.skypath.services.connection_rules import ConnectionPolicy
from src.skypath.services.itinerary_search_service import ItinerarySearchService

logger = logging.getLogger(__name__)


class SearchItineraries:
    """
    Public API for finding flight itineraries.

    Builds the flight index eagerly: if the dataset cannot be loaded,
    construction fails and no searches can be made.

    Example usage:
        >>> searcher = SearchItineraries(data_path="data/flights.json")
        >>> result = searcher.search("JFK", "LAX", "2024-06-01")
        >>> for it in result.itineraries:
        ...     print(it.route_airports, it.total_duration_minutes, it.total_price)

    Attributes:
        _service: Underlying ItinerarySearchService.
        _index_repo: Flight index repository.
    """

    def __init__(
        self,
        data_path: Optional[Union[str, Path]] = None,
        dataset: Optional[Mapping[str, Any]] = None,
        data_provider: Optional[DatasetProvider] = None,
        finder: Optional[ItineraryFinder] = None,
        policy: Optional[ConnectionPolicy] = None,
    ) -> None:
        """
        Initialize the searcher with optional custom dependencies.

        Provider precedence: data_provider, then dataset, then data_path.

        Args:
            data_path: JSON dataset path. Defaults to data/flights.json.
            dataset: Already-decoded dataset mapping.
            data_provider: Custom provider.
            finder: Custom algorithm. If None, uses BoundedStopsItineraryFinder.
            policy: Layover bounds for the default finder.

        Raises:
            IndexNotInitializedError: If the dataset cannot be loaded.
        """
        if data_provider is not None:
            self._data_provider = data_provider
        elif dataset is not None:
            self._data_provider = InMemoryDatasetProvider(dataset)
        else:
            self._data_provider = JsonDatasetProvider(data_path or DEFAULT_DATA_PATH)

        self._index_repo = FlightIndexRepository(data_provider=self._data_provider)

        if finder is not None:
            self._finder = finder
        elif policy is not None:
            self._finder = BoundedStopsItineraryFinder(policy=policy)
        else:
            self._finder = BoundedStopsItineraryFinder()

        self._service = ItinerarySearchService(
            index_repo=self._index_repo,
            finder=self._finder,
        )

        index = self._index_repo.get_index()
        for problem in index.integrity_problems():
            logger.warning("Dataset integrity: %s", problem)

        logger.info(
            "SearchItineraries initialized with %s algorithm",
            self._finder.name,
        )

    def search(self, origin: str, destination: str, date: str) -> SearchResult:
        """
        Search itineraries from origin to destination departing on date.

        Args:
            origin: Origin airport code (case and whitespace insensitive).
            destination: Destination airport code.
            date: Local departure date, YYYY-MM-DD.

        Returns:
            SearchResult sorted by total duration.

        Raises:
            SearchError: Subclass describing the invalid input or
                dataset problem.
        """
        return self._service.search(origin, destination, date)

    def get_airports(self) -> List[Airport]:
        """All airports in the dataset, sorted by code."""
        index = self._index_repo.get_index()
        return [index.airports_by_code[code] for code in sorted(index.airports_by_code)]

    def reload(self) -> None:
        """Rebuild the flight index from the data provider."""
        index = self._index_repo.reload()
        for problem in index.integrity_problems():
            logger.warning("Dataset integrity: %s", problem)

    @property
    def is_ready(self) -> bool:
        """Check if the searcher is ready to handle requests."""
        return self._service.is_ready

    @property
    def algorithm_name(self) -> str:
        """Get the name of the search algorithm being used."""
        return self._service.algorithm_name
