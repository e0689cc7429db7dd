"""External service adapters."""

from tripboard.adapters.generation import ItineraryProvider, OpenAIItineraryGenerator
from tripboard.adapters.places import PhotonPlaceSearch, PlaceSearchProvider

__all__ = [
    "ItineraryProvider",
    "OpenAIItineraryGenerator",
    "PhotonPlaceSearch",
    "PlaceSearchProvider",
]
