"""
Port interfaces for SkyPath.

Ports define the abstract interfaces (ABCs) that the domain layer uses
to communicate with data sources and algorithms. This follows the
Ports and Adapters (Hexagonal) architecture pattern.
"""

from src.skypath.ports.dataset_provider import DatasetProvider
from src.skypath.ports.itinerary_finder import ItineraryFinder

__all__ = [
    "DatasetProvider",
    "ItineraryFinder",
]
