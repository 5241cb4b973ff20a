"""
Data provider adapters for the airports/flights dataset.
"""

from src.skypath.adapters.data_providers.json_provider import (
    InMemoryDatasetProvider,
    JsonDatasetProvider,
    dataset_to_frames,
    parse_price,
)

__all__ = [
    "InMemoryDatasetProvider",
    "JsonDatasetProvider",
    "dataset_to_frames",
    "parse_price",
]
