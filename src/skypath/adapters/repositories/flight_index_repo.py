"""
Flight Index Repository - Immutable origin-indexed flight data.

Implements the query-time structure every search reads:
- O(1) airport lookup by canonical code
- O(1) access to the flights departing an airport, in dataset order
- Numpy-vectorized origin index over a stably sorted DataFrame
- Build-once, read-only sharing across concurrent searches
"""

from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np
import pandas as pd

from src.skypath.adapters.algorithms.immutability import make_immutable
from src.skypath.exceptions import (
    IndexNotInitializedError,
    InvalidTimezoneError,
    UnknownAirportError,
)
from src.skypath.schemas.airport import Airport
from src.skypath.schemas.flight import Flight

if TYPE_CHECKING:
    from src.skypath.ports.dataset_provider import DatasetProvider

logger = logging.getLogger(__name__)

AIRPORT_COLUMNS = ["code", "name", "city", "country", "timezone"]
FLIGHT_COLUMNS = [
    "flight_number",
    "airline",
    "origin",
    "destination",
    "departure_time",
    "arrival_time",
    "price",
    "aircraft",
]


# =============================================================================
# ORIGIN INDEX: Row ranges for O(1) origin-based flight access
# =============================================================================


@dataclass(frozen=True)
class OriginIndex:
    """
    Row range of the flights departing one airport.

    Stores the start and end indices (exclusive) in the DataFrame sorted
    by origin. Using iloc slicing with these indices returns a view.

    Attributes:
        start: Start index in sorted DataFrame (inclusive).
        end: End index in sorted DataFrame (exclusive).
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate index bounds."""
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must be >= start ({self.start})")

    def __len__(self) -> int:
        return self.end - self.start


def build_origin_index(df: pd.DataFrame) -> Dict[str, OriginIndex]:
    """
    Build index from a DataFrame pre-sorted by 'origin' using numpy.

    The algorithm:
    1. Get numpy array of origin values
    2. Create boolean mask where the origin changes
    3. Find indices where changes occur using np.where
    4. Build OriginIndex entries from boundary positions

    Args:
        df: DataFrame MUST be sorted by 'origin' with index reset.

    Returns:
        Dict mapping origin code to OriginIndex with (start, end) range.

    Example:
        >>> df = pd.DataFrame({'origin': ['JFK', 'JFK', 'LAX']})
        >>> build_origin_index(df)['LAX']
        OriginIndex(start=2, end=3)
    """
    if df.empty:
        return {}

    origins = df["origin"].to_numpy(dtype=object)
    n = len(origins)

    change_mask = np.concatenate([[True], origins[1:] != origins[:-1]])
    change_indices = np.where(change_mask)[0]

    index: Dict[str, OriginIndex] = {}
    num_boundaries = len(change_indices)

    for i in range(num_boundaries):
        start = int(change_indices[i])
        end = int(change_indices[i + 1]) if i + 1 < num_boundaries else n
        index[str(origins[start])] = OriginIndex(start=start, end=end)

    return index


def resolve_timezone(airport: Airport) -> ZoneInfo:
    """
    Resolve an airport's IANA timezone.

    Raises:
        InvalidTimezoneError: If the identifier is empty or unknown.
    """
    if not airport.timezone:
        raise InvalidTimezoneError(airport.code, airport.timezone)
    try:
        return ZoneInfo(airport.timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneError(airport.code, airport.timezone) from e


# =============================================================================
# FLIGHT INDEX: Immutable query-time structure
# =============================================================================


@dataclass(frozen=True, eq=False)
class FlightIndex:
    """
    Immutable airport/flight index built once from the dataset.

    Every airport code and every flight origin/destination is uppercase.
    Lookups uppercase their argument, so they are case-insensitive; they
    do not trim whitespace (callers canonicalize first).

    Attributes:
        airports_by_code: Read-only mapping code -> Airport.
        flights_by_origin: Read-only mapping origin -> flights in dataset order.
        airports_df: Canonical airports table (read-only arrays).
        flights_df: Canonical flights table sorted by origin (read-only arrays).
        origin_index: Mapping origin -> row range in flights_df.
        routes: All (origin, destination) pairs served by some flight.
        built_at: Timestamp when the index was built.
        version: Hash for change detection across reloads.
    """

    airports_by_code: Mapping[str, Airport]
    flights_by_origin: Mapping[str, Tuple[Flight, ...]]
    airports_df: pd.DataFrame
    flights_df: pd.DataFrame
    origin_index: Mapping[str, OriginIndex]
    routes: FrozenSet[Tuple[str, str]]
    built_at: datetime
    version: str

    @property
    def airport_count(self) -> int:
        return len(self.airports_by_code)

    @property
    def flight_count(self) -> int:
        return len(self.flights_df)

    @property
    def airport_codes(self) -> FrozenSet[str]:
        return frozenset(self.airports_by_code)

    def get_airport(self, code: str) -> Optional[Airport]:
        """Airport for code, or None if not in the dataset."""
        return self.airports_by_code.get(code.upper())

    def has_airport(self, code: str) -> bool:
        return code.upper() in self.airports_by_code

    def country(self, code: str) -> Optional[str]:
        """Country of the airport, or None if not in the dataset."""
        airport = self.get_airport(code)
        if airport is None:
            return None
        return airport.country

    def timezone_of(self, code: str) -> ZoneInfo:
        """
        Resolve the timezone of an airport.

        Raises:
            UnknownAirportError: If code is not in the dataset.
            InvalidTimezoneError: If its timezone does not resolve.
        """
        airport = self.get_airport(code)
        if airport is None:
            raise UnknownAirportError(code.upper())
        return resolve_timezone(airport)

    def flights_from(self, code: str) -> Tuple[Flight, ...]:
        """Flights departing code in dataset order; empty if none."""
        return self.flights_by_origin.get(code.upper(), ())

    def has_route(self, origin: str, destination: str) -> bool:
        """Check if a direct flight exists."""
        return (origin.upper(), destination.upper()) in self.routes

    def integrity_problems(self) -> List[str]:
        """
        Describe dataset problems that would make searches fail.

        Searches stay lazy about these (a bad leg aborts only the queries
        that touch it); this report exists so they can be surfaced early.
        """
        problems: List[str] = []
        referenced = set(self.flights_df["origin"]) | set(self.flights_df["destination"])
        for code in sorted(referenced - set(self.airports_by_code)):
            problems.append(f"flights reference unknown airport {code}")

        for code in sorted(self.airports_by_code):
            try:
                resolve_timezone(self.airports_by_code[code])
            except InvalidTimezoneError as e:
                problems.append(str(e))

        return problems


def _canonical_airports(airports_df: pd.DataFrame) -> pd.DataFrame:
    airports_df = airports_df[AIRPORT_COLUMNS].copy()
    airports_df["code"] = airports_df["code"].str.upper()
    return airports_df.reset_index(drop=True)


def _canonical_flights(flights_df: pd.DataFrame) -> pd.DataFrame:
    flights_df = flights_df[FLIGHT_COLUMNS].copy()
    flights_df["origin"] = flights_df["origin"].str.upper()
    flights_df["destination"] = flights_df["destination"].str.upper()
    # Stable sort keeps dataset order within each origin group
    return flights_df.sort_values("origin", kind="stable").reset_index(drop=True)


def _row_to_flight(row: tuple) -> Flight:
    flight_number, airline, origin, destination, dep, arr, price, aircraft = row
    return Flight(
        flight_number=str(flight_number),
        airline=str(airline),
        origin=str(origin),
        destination=str(destination),
        departure_time=str(dep),
        arrival_time=str(arr),
        price=float(price),
        aircraft=str(aircraft),
    )


def _compute_version(airports_df: pd.DataFrame, flights_df: pd.DataFrame) -> str:
    """Compute hash of the tables for version tracking."""
    content = f"{len(airports_df)}:{len(flights_df)}"
    if len(flights_df) > 0:
        content += f":{flights_df.iloc[0].to_dict()}:{flights_df.iloc[-1].to_dict()}"
    return hashlib.md5(content.encode()).hexdigest()[:12]


def build_flight_index(
    airports_df: pd.DataFrame,
    flights_df: pd.DataFrame,
) -> FlightIndex:
    """
    Build an immutable FlightIndex from validated dataset tables.

    Steps:
    1. Uppercase airport codes and flight origin/destination
    2. Stable-sort flights by origin
    3. Build the origin row-range index
    4. Materialize Airport and Flight records
    5. Freeze frames and mappings

    Args:
        airports_df: Table satisfying AirportSchema.
        flights_df: Table satisfying FlightSchema, in dataset order.

    Returns:
        Newly built FlightIndex.
    """
    airports_df = _canonical_airports(airports_df)
    flights_df = _canonical_flights(flights_df)

    duplicated = airports_df["code"][airports_df["code"].duplicated(keep="last")]
    if not duplicated.empty:
        logger.warning(
            "Duplicate airport codes, keeping last occurrence: %s",
            ", ".join(sorted(set(duplicated))),
        )

    airports_by_code: Dict[str, Airport] = {
        row[0]: Airport(*(str(value) for value in row))
        for row in airports_df.itertuples(index=False, name=None)
    }

    origin_index = build_origin_index(flights_df)
    rows = list(flights_df.itertuples(index=False, name=None))
    flights_by_origin: Dict[str, Tuple[Flight, ...]] = {
        origin: tuple(_row_to_flight(row) for row in rows[idx.start : idx.end])
        for origin, idx in origin_index.items()
    }

    routes = frozenset(zip(flights_df["origin"], flights_df["destination"]))

    return FlightIndex(
        airports_by_code=MappingProxyType(airports_by_code),
        flights_by_origin=MappingProxyType(flights_by_origin),
        airports_df=make_immutable(airports_df),
        flights_df=make_immutable(flights_df),
        origin_index=MappingProxyType(origin_index),
        routes=routes,
        built_at=datetime.now(),
        version=_compute_version(airports_df, flights_df),
    )


# =============================================================================
# FLIGHT INDEX REPOSITORY: Build once, swap atomically on reload
# =============================================================================


class FlightIndexRepository:
    """
    Owns the current FlightIndex.

    Architecture:
    - First get_index() builds the index under a lock (cold start)
    - Afterwards readers never block: they read the current reference
    - reload() builds a fresh index, then swaps the reference

    Usage:
        >>> provider = JsonDatasetProvider("data/flights.json")
        >>> repo = FlightIndexRepository(provider)
        >>> index = repo.get_index()
    """

    def __init__(self, data_provider: DatasetProvider) -> None:
        """
        Initialize repository with a dataset provider.

        Args:
            data_provider: Source for airports and flights.
        """
        self._provider = data_provider
        self._index: Optional[FlightIndex] = None
        self._lock = threading.Lock()

    def get_index(self) -> FlightIndex:
        """
        Get current index, building it on first access.

        Returns:
            Current FlightIndex.

        Raises:
            IndexNotInitializedError: If the cold-start build fails.
        """
        index = self._index
        if index is not None:
            return index

        with self._lock:
            # Double-check after acquiring lock
            if self._index is None:
                try:
                    self._index = self._build_index()
                except Exception as e:
                    logger.error("Cold start failed: %s", e)
                    raise IndexNotInitializedError(
                        f"Failed to build flight index: {e}"
                    ) from e
            return self._index

    def reload(self) -> FlightIndex:
        """
        Rebuild the index from the provider and swap it in.

        On failure the previous index keeps being served and the error
        propagates to the caller.
        """
        try:
            new_index = self._build_index()
        except Exception as e:
            logger.error("Index reload failed: %s", e)
            raise

        with self._lock:
            self._index = new_index
        return new_index

    def _build_index(self) -> FlightIndex:
        airports_df, flights_df = self._provider.get_frames()
        index = build_flight_index(airports_df, flights_df)
        logger.info(
            "Flight index built from %s: %d flights, %d airports (version %s)",
            self._provider.name,
            index.flight_count,
            index.airport_count,
            index.version,
        )
        return index

    @property
    def is_initialized(self) -> bool:
        """Check if the index has been built at least once."""
        return self._index is not None

    @property
    def current_version(self) -> Optional[str]:
        """Get version of the current index."""
        index = self._index
        return index.version if index else None
