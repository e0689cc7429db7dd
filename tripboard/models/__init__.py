"""Convenient imports for all model types."""

# Common types and enums
from .common import ChillLevel, Coordinates, PhotoRef, SpotType

# Entities
from .entities import Spot, Trip, generate_id

# Generation models
from .generation import (
    GeneratedAccommodation,
    GeneratedActivity,
    GeneratedDay,
    GeneratedTrip,
    TripRequest,
)

# Search models
from .search import PlaceFeature, PlaceGeometry, PlaceProperties, PlaceSuggestion

__all__ = [
    # Common
    "ChillLevel",
    "Coordinates",
    "PhotoRef",
    "SpotType",
    # Entities
    "Spot",
    "Trip",
    "generate_id",
    # Generation
    "GeneratedAccommodation",
    "GeneratedActivity",
    "GeneratedDay",
    "GeneratedTrip",
    "TripRequest",
    # Search
    "PlaceFeature",
    "PlaceGeometry",
    "PlaceProperties",
    "PlaceSuggestion",
]
