"""
Application layer for SkyPath.

This layer provides the public API for the itinerary search engine.
It acts as a facade, handling dependency initialization and providing
a simple interface for consumers.
"""

from src.skypath.application.search_itineraries import SearchItineraries

__all__ = ["SearchItineraries"]
