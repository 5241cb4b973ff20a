"""
Bounded-Stops Itinerary Finder - exhaustive enumeration up to two stops.

Walks the origin-indexed flight lists of the FlightIndex to build direct,
one-stop and two-stop itineraries, validating every connection with the
layover rules.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Iterator, List, Sequence, Tuple

from src.skypath.ports.itinerary_finder import ItineraryFinder
from src.skypath.schemas.flight import Flight
from src.skypath.schemas.itinerary import Itinerary
from src.skypath.schemas.query import SearchQuery
from src.skypath.services.connection_rules import (
    DEFAULT_POLICY,
    ConnectionPolicy,
    check_connection,
)
from src.skypath.services.local_time import (
    arrival_instant,
    departure_instant,
    whole_minutes,
)

if TYPE_CHECKING:
    from src.skypath.adapters.repositories.flight_index_repo import FlightIndex

logger = logging.getLogger(__name__)

# (legs, layovers in minutes)
LegPath = Tuple[Tuple[Flight, ...], Tuple[int, ...]]


class BoundedStopsItineraryFinder(ItineraryFinder):
    """
    Enumerates every valid itinerary of one to three legs.

    Generation order is: all direct itineraries, then one-stop, then
    two-stop; within each class, nested iteration over first legs (in
    dataset order), then second legs, then third legs. The `sequence`
    stamped on each itinerary records this order.

    Dataset problems (unknown airport, bad timezone) raised while
    evaluating any candidate abort the whole search.

    Attributes:
        _policy: Layover bounds for connections.
    """

    def __init__(self, policy: ConnectionPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    @property
    def name(self) -> str:
        """Algorithm identifier."""
        return "Bounded-Stops Enumeration"

    @property
    def policy(self) -> ConnectionPolicy:
        return self._policy

    def find_itineraries(
        self,
        index: FlightIndex,
        query: SearchQuery,
    ) -> List[Itinerary]:
        """
        Find all direct, one-stop and two-stop itineraries.

        Args:
            index: Built flight index.
            query: Validated query.

        Returns:
            Itineraries in generation order.
        """
        first_legs = [f for f in index.flights_from(query.origin) if f.departs_on(query.date)]

        logger.debug(
            "%d first-leg candidates from %s on %s",
            len(first_legs),
            query.origin,
            query.date,
        )

        paths = itertools.chain(
            self._direct(first_legs, query.destination),
            self._one_stop(index, first_legs, query.destination),
            self._two_stop(index, first_legs, query.destination),
        )

        return [
            self._assemble(index, legs, layovers, sequence)
            for sequence, (legs, layovers) in enumerate(paths)
        ]

    def _direct(self, first_legs: Sequence[Flight], destination: str) -> Iterator[LegPath]:
        for f1 in first_legs:
            if f1.destination == destination:
                yield (f1,), ()

    def _one_stop(
        self,
        index: FlightIndex,
        first_legs: Sequence[Flight],
        destination: str,
    ) -> Iterator[LegPath]:
        for f1 in first_legs:
            for f2 in index.flights_from(f1.destination):
                if f2.destination != destination:
                    continue
                layover = check_connection(index, f1, f2, self._policy)
                if layover is None:
                    continue
                yield (f1, f2), (layover,)

    def _two_stop(
        self,
        index: FlightIndex,
        first_legs: Sequence[Flight],
        destination: str,
    ) -> Iterator[LegPath]:
        for f1 in first_legs:
            for f2 in index.flights_from(f1.destination):
                first_layover = check_connection(index, f1, f2, self._policy)
                if first_layover is None:
                    continue
                for f3 in index.flights_from(f2.destination):
                    if f3.destination != destination:
                        continue
                    second_layover = check_connection(index, f2, f3, self._policy)
                    if second_layover is None:
                        continue
                    yield (f1, f2, f3), (first_layover, second_layover)

    def _assemble(
        self,
        index: FlightIndex,
        legs: Tuple[Flight, ...],
        layovers: Tuple[int, ...],
        sequence: int,
    ) -> Itinerary:
        """Compute total duration and build the Itinerary."""
        elapsed = arrival_instant(index, legs[-1]) - departure_instant(index, legs[0])
        return Itinerary.from_flights(
            flights=legs,
            layovers_minutes=layovers,
            total_duration_minutes=whole_minutes(elapsed),
            sequence=sequence,
        )
