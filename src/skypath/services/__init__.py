"""
Domain services for SkyPath.

Services hold the search rules (local-time conversion, connection
validity) and orchestrate the index repository and itinerary finder.
"""

from src.skypath.services.connection_rules import (
    DEFAULT_POLICY,
    ConnectionPolicy,
    check_connection,
    is_domestic_connection,
)
from src.skypath.services.itinerary_search_service import ItinerarySearchService

__all__ = [
    "DEFAULT_POLICY",
    "ConnectionPolicy",
    "ItinerarySearchService",
    "check_connection",
    "is_domestic_connection",
]
