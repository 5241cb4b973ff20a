"""
Dataset Provider port interface.

Defines the abstract contract for sources that supply airports and flights.
Implementations handle the specifics of different backends (JSON file,
in-memory mapping, ...).
"""

from abc import ABC, abstractmethod
from typing import Tuple

from src.skypath.schemas.airport import AirportDataFrame
from src.skypath.schemas.flight import FlightDataFrame


class DatasetProvider(ABC):
    """
    Abstract interface for dataset providers.

    Providers return validated DataFrames directly. Schema validation
    (AirportSchema / FlightSchema) happens at this boundary, not per-row.

    Implementations:
    - JsonDatasetProvider: JSON file on disk
    - InMemoryDatasetProvider: already-decoded mapping (tests, embedding)
    """

    @abstractmethod
    def get_airports_df(self) -> AirportDataFrame:
        """
        Return airports as a validated DataFrame.

        Raises:
            DatasetLoadError: If the data cannot be read or fails validation.
        """
        ...

    @abstractmethod
    def get_flights_df(self) -> FlightDataFrame:
        """
        Return flights as a validated DataFrame, in dataset order.

        Raises:
            DatasetLoadError: If the data cannot be read or fails validation.
        """
        ...

    def get_frames(self) -> Tuple[AirportDataFrame, FlightDataFrame]:
        """
        Return both tables taken from one read of the underlying data.

        The index is built from this pair, so a source that can change
        between calls must override it to load once.

        Raises:
            DatasetLoadError: If the data cannot be read or fails validation.
        """
        return self.get_airports_df(), self.get_flights_df()

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this provider.

        Returns:
            Provider identifier (e.g., "JSON file data/flights.json").
        """
        ...
