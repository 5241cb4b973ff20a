"""
Itinerary result schemas.

Defines the output contract for itinerary finders. Itineraries are
derived per query and never persisted.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Tuple

from src.skypath.schemas.flight import Flight

MAX_SEGMENTS = 3

_CENTS = Decimal("0.01")


def round_price(amount: float) -> float:
    """
    Round a price to 2 decimals, half-up.

    Works on the shortest decimal representation of the float so that
    100.005 rounds to 100.01 rather than following binary artifacts.
    """
    return float(Decimal(repr(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ItinerarySegment:
    """
    Display projection of one flight leg.

    Local departure/arrival strings are echoed exactly as in the dataset.
    """

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_local: str
    arrival_local: str
    price: float
    aircraft: str

    @classmethod
    def from_flight(cls, flight: Flight) -> "ItinerarySegment":
        return cls(
            flight_number=flight.flight_number,
            airline=flight.airline,
            origin=flight.origin,
            destination=flight.destination,
            departure_local=flight.departure_time,
            arrival_local=flight.arrival_time,
            price=flight.price,
            aircraft=flight.aircraft,
        )


@dataclass(frozen=True)
class Itinerary:
    """
    Immutable representation of a 1-3 leg itinerary.

    Attributes:
        segments: Contiguous legs, leg[i].destination == leg[i+1].origin.
        layovers_minutes: One entry per connection, in leg order.
        total_duration_minutes: First departure to last arrival, >= 0.
        total_price: Sum of leg prices rounded half-up to cents.
        sequence: Generation ordinal, the final tie-break when sorting.
    """

    segments: Tuple[ItinerarySegment, ...]
    layovers_minutes: Tuple[int, ...]
    total_duration_minutes: int
    total_price: float
    sequence: int = 0

    def __post_init__(self) -> None:
        """Validate leg count and layover count."""
        if not 1 <= len(self.segments) <= MAX_SEGMENTS:
            raise ValueError(
                f"itinerary must have 1-{MAX_SEGMENTS} segments, got {len(self.segments)}"
            )
        if len(self.layovers_minutes) != len(self.segments) - 1:
            raise ValueError(
                f"expected {len(self.segments) - 1} layovers, got {len(self.layovers_minutes)}"
            )

    @classmethod
    def from_flights(
        cls,
        flights: Sequence[Flight],
        layovers_minutes: Sequence[int],
        total_duration_minutes: int,
        sequence: int = 0,
    ) -> "Itinerary":
        """
        Factory method to assemble an itinerary from validated legs.

        Args:
            flights: Ordered legs.
            layovers_minutes: Whole-minute layover per connection.
            total_duration_minutes: Elapsed minutes; negatives clamp to 0.
            sequence: Generation ordinal.

        Returns:
            Itinerary with rounded total price.
        """
        return cls(
            segments=tuple(ItinerarySegment.from_flight(f) for f in flights),
            layovers_minutes=tuple(layovers_minutes),
            total_duration_minutes=max(total_duration_minutes, 0),
            total_price=round_price(sum(f.price for f in flights)),
            sequence=sequence,
        )

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def num_stops(self) -> int:
        return len(self.segments) - 1

    @property
    def origin(self) -> str:
        return self.segments[0].origin

    @property
    def destination(self) -> str:
        return self.segments[-1].destination

    @property
    def route_airports(self) -> List[str]:
        """Ordered list of all airports on the path."""
        airports = [self.segments[0].origin]
        for seg in self.segments:
            airports.append(seg.destination)
        return airports

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Duration first; ties keep direct < one-stop < two-stop generation order."""
        return (self.total_duration_minutes, self.num_segments, self.sequence)


@dataclass(frozen=True)
class SearchResult:
    """Ordered itineraries for one query plus the canonical query echo."""

    origin: str
    destination: str
    date: str
    itineraries: Tuple[Itinerary, ...] = ()

    @property
    def count(self) -> int:
        return len(self.itineraries)
