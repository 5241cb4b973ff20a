"""
Flight data schemas using Pandera.

Defines the core contract for flight data flowing through the system.
Schema validation happens at layer boundaries only, not per-row.
"""

from dataclasses import dataclass

import pandera as pa
from pandera.typing import DataFrame, Series

# Local wall-clock timestamp, no UTC offset
LOCAL_TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$"
LOCAL_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class FlightSchema(pa.DataFrameModel):
    """
    Contract for the flights table.

    Departure and arrival are kept as the original local strings: the
    search engine filters on their date prefix and echoes them back
    unchanged, converting to instants only for duration arithmetic.
    """

    flight_number: Series[str] = pa.Field(nullable=False)
    airline: Series[str] = pa.Field(nullable=False)
    origin: Series[str] = pa.Field(
        nullable=False,
        description="Departure airport code (uppercase after load)",
    )
    destination: Series[str] = pa.Field(
        nullable=False,
        description="Arrival airport code (uppercase after load)",
    )
    departure_time: Series[str] = pa.Field(
        nullable=False,
        str_matches=LOCAL_TIMESTAMP_PATTERN,
        description="Local departure time at origin, YYYY-MM-DDTHH:MM:SS",
    )
    arrival_time: Series[str] = pa.Field(
        nullable=False,
        str_matches=LOCAL_TIMESTAMP_PATTERN,
        description="Local arrival time at destination, YYYY-MM-DDTHH:MM:SS",
    )
    price: Series[float] = pa.Field(
        ge=0,
        nullable=False,
        description="Leg price in base currency",
    )
    aircraft: Series[str] = pa.Field(nullable=False)

    class Config:
        # Extra columns pass through unchanged
        strict = False
        coerce = True
        name = "FlightSchema"
        description = "Scheduled flights with local timestamps"


@dataclass(frozen=True)
class Flight:
    """
    Immutable flight record.

    Attributes:
        flight_number: Carrier flight number (display only).
        airline: Operating airline (display only).
        origin: Uppercase departure airport code.
        destination: Uppercase arrival airport code.
        departure_time: Local departure timestamp at origin.
        arrival_time: Local arrival timestamp at destination.
        price: Leg price.
        aircraft: Aircraft type (display only).
    """

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    price: float
    aircraft: str

    def departs_on(self, date_str: str) -> bool:
        """True if the local departure date matches a YYYY-MM-DD string."""
        return self.departure_time.startswith(date_str)


FlightDataFrame = DataFrame[FlightSchema]
