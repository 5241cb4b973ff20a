"""
Schema definitions for SkyPath.

Pandera-validated DataFrames for the dataset tables, immutable records
for the flight index, and the query/result contracts of the search.
"""

from .airport import Airport, AirportDataFrame, AirportSchema
from .flight import Flight, FlightDataFrame, FlightSchema
from .itinerary import Itinerary, ItinerarySegment, SearchResult, round_price
from .query import SearchQuery, canonicalize_airport_code, is_airport_code

__all__ = [
    # Dataset tables
    "Airport",
    "AirportDataFrame",
    "AirportSchema",
    "Flight",
    "FlightDataFrame",
    "FlightSchema",
    # Query
    "SearchQuery",
    "canonicalize_airport_code",
    "is_airport_code",
    # Results
    "Itinerary",
    "ItinerarySegment",
    "SearchResult",
    "round_price",
]
