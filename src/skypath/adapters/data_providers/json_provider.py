"""
JSON Dataset Providers - decoded dataset to DataFrame adapters.

Turns the `{"airports": [...], "flights": [...]}` dataset into
AirportSchema / FlightSchema compliant DataFrames.
"""

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

import pandas as pd
import pandera as pa

from src.skypath.exceptions import DatasetLoadError
from src.skypath.ports.dataset_provider import DatasetProvider
from src.skypath.schemas.airport import AirportDataFrame, AirportSchema
from src.skypath.schemas.flight import (
    LOCAL_TIMESTAMP_FORMAT,
    FlightDataFrame,
    FlightSchema,
)

logger = logging.getLogger(__name__)

# Dataset field name -> DataFrame column
AIRPORT_FIELDS: Dict[str, str] = {
    "code": "code",
    "name": "name",
    "city": "city",
    "country": "country",
    "timezone": "timezone",
}
FLIGHT_FIELDS: Dict[str, str] = {
    "flightNumber": "flight_number",
    "airline": "airline",
    "origin": "origin",
    "destination": "destination",
    "departureTime": "departure_time",
    "arrivalTime": "arrival_time",
    "price": "price",
    "aircraft": "aircraft",
}

REQUIRED_AIRPORT_FIELDS = ("code",)
REQUIRED_FLIGHT_FIELDS = ("origin", "destination", "departureTime", "arrivalTime", "price")

# Decimal or exponent notation only
_PRICE_STRING_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_price(value: Any) -> float:
    """
    Decode a price given as a JSON number or a numeric string.

    Both forms yield the same float. Strings must be plain decimal or
    exponent notation with no surrounding whitespace. Booleans, null,
    containers, other strings and non-finite values are rejected.

    Examples:
        >>> parse_price(199.99) == parse_price("199.99")
        True

    Raises:
        ValueError: If the value is not a valid price representation.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    if isinstance(value, (int, float)):
        try:
            price = float(value)
        except OverflowError:
            raise ValueError("invalid price: integer too large for a float") from None
    elif isinstance(value, str):
        if _PRICE_STRING_RE.fullmatch(value) is None:
            raise ValueError(f"invalid price string {value!r}")
        price = float(value)
    else:
        raise ValueError(f"invalid price: {value!r}")

    if not math.isfinite(price):
        raise ValueError(f"invalid price: {value!r}")
    return price


def _records_to_frame(
    records: Any,
    fields: Mapping[str, str],
    required: Sequence[str],
    kind: str,
) -> pd.DataFrame:
    """Project a list of JSON objects onto the given columns."""
    if not isinstance(records, list):
        raise DatasetLoadError(f"'{kind}' must be a list")

    rows: List[Dict[str, Any]] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise DatasetLoadError(f"{kind}[{i}] must be an object")

        missing = [key for key in required if record.get(key) is None]
        if missing:
            raise DatasetLoadError(
                f"{kind}[{i}] missing required fields: {', '.join(missing)}"
            )

        row = {}
        for key, column in fields.items():
            value = record.get(key)
            row[column] = "" if value is None else value
        rows.append(row)

    return pd.DataFrame(rows, columns=list(fields.values()))


def _check_timestamps(flights_df: pd.DataFrame) -> None:
    """Reject local timestamps that match the pattern but are not real times."""
    for column in ("departure_time", "arrival_time"):
        try:
            pd.to_datetime(flights_df[column], format=LOCAL_TIMESTAMP_FORMAT, errors="raise")
        except (ValueError, TypeError) as e:
            raise DatasetLoadError(f"invalid {column} in flights: {e}") from e


def dataset_to_frames(
    dataset: Mapping[str, Any],
) -> Tuple[AirportDataFrame, FlightDataFrame]:
    """
    Convert a decoded dataset into validated DataFrames.

    Flight rows keep dataset order. Prices are decoded with parse_price
    before schema validation so that numeric strings and numbers agree.

    Args:
        dataset: Mapping with 'airports' and 'flights' lists.

    Returns:
        Tuple of (airports_df, flights_df).

    Raises:
        DatasetLoadError: On any structural, price, timestamp or schema error.
    """
    if not isinstance(dataset, Mapping):
        raise DatasetLoadError("dataset must be an object with 'airports' and 'flights'")

    airports_df = _records_to_frame(
        dataset.get("airports", []), AIRPORT_FIELDS, REQUIRED_AIRPORT_FIELDS, "airports"
    )

    flight_records = dataset.get("flights", [])
    flights_df = _records_to_frame(
        flight_records, FLIGHT_FIELDS, REQUIRED_FLIGHT_FIELDS, "flights"
    )
    try:
        flights_df["price"] = [parse_price(p) for p in flights_df["price"]]
    except ValueError as e:
        raise DatasetLoadError(str(e)) from e

    try:
        airports_df = AirportSchema.validate(airports_df)
        flights_df = FlightSchema.validate(flights_df)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        raise DatasetLoadError(f"dataset failed validation: {e}") from e

    _check_timestamps(flights_df)

    return airports_df, flights_df


class InMemoryDatasetProvider(DatasetProvider):
    """
    Provider over an already-decoded dataset mapping.

    Attributes:
        _dataset: Mapping with 'airports' and 'flights' lists.
    """

    def __init__(self, dataset: Mapping[str, Any]) -> None:
        self._dataset = dataset

    def _load_dataset(self) -> Mapping[str, Any]:
        return self._dataset

    def get_airports_df(self) -> AirportDataFrame:
        airports_df, _ = dataset_to_frames(self._load_dataset())
        return airports_df

    def get_flights_df(self) -> FlightDataFrame:
        _, flights_df = dataset_to_frames(self._load_dataset())
        return flights_df

    def get_frames(self) -> Tuple[AirportDataFrame, FlightDataFrame]:
        return dataset_to_frames(self._load_dataset())

    @property
    def name(self) -> str:
        return "In-memory dataset"


class JsonDatasetProvider(InMemoryDatasetProvider):
    """
    Provider reading the dataset from a JSON file.

    The file is read on every load so that a repository reload picks up
    changes on disk.

    Attributes:
        _path: Path to the JSON dataset.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(dataset={})
        self._path = Path(path)

    def _load_dataset(self) -> Mapping[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetLoadError(f"cannot read dataset {self._path}: {e}") from e

        try:
            dataset = json.loads(raw)
        except ValueError as e:
            raise DatasetLoadError(f"invalid JSON in {self._path}: {e}") from e

        logger.debug("Read dataset from %s (%d bytes)", self._path, len(raw))
        return dataset

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return f"JSON file {self._path}"
