"""
Airport schemas using Pandera.

Defines the table contract for airport metadata loaded from the dataset
and the immutable record served by the flight index.
"""

from dataclasses import dataclass

import pandera as pa
from pandera.typing import DataFrame, Series


class AirportSchema(pa.DataFrameModel):
    """
    Contract for the airports table.

    `country` drives domestic/international classification and `timezone`
    converts local flight timestamps to instants. Timezones are resolved
    lazily at search time, so only their presence is checked here.
    """

    code: Series[str] = pa.Field(
        nullable=False,
        description="Airport code, uppercase after canonicalization",
    )
    name: Series[str] = pa.Field(nullable=False, description="Display name")
    city: Series[str] = pa.Field(nullable=False, description="Display city")
    country: Series[str] = pa.Field(
        nullable=False,
        description="Country used for connection classification",
    )
    timezone: Series[str] = pa.Field(
        nullable=False,
        description="IANA timezone identifier (e.g., 'America/New_York')",
    )

    class Config:
        strict = False
        coerce = True
        name = "AirportSchema"
        description = "Airport metadata keyed by code"


@dataclass(frozen=True)
class Airport:
    """Immutable airport record owned by the flight index."""

    code: str
    name: str
    city: str
    country: str
    timezone: str


AirportDataFrame = DataFrame[AirportSchema]
