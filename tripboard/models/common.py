"""Common data types and enums used across the application."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Opaque photo reference (typically a data URL); never inspected by the core.
PhotoRef = str


class Coordinates(BaseModel):
    """Geographic coordinates in WGS84 decimal degrees."""

    lat: float = Field(ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    lng: float = Field(ge=-180.0, le=180.0, description="Longitude in decimal degrees")


class SpotType(str, Enum):
    """Classification of a spot; drives display semantics."""

    VISITED = "VISITED"
    WANT_TO_VISIT = "WANT_TO_VISIT"
    ITINERARY = "ITINERARY"
    ACCOMMODATION = "ACCOMMODATION"


class ChillLevel(str, Enum):
    """Qualitative pacing preference for a trip."""

    RELAXED = "Relaxed (Resort/Beach/Chill)"
    BALANCED = "Balanced (Sightseeing + Rest)"
    ACTIVE = "Active (Hiking/Adventure/Full Day)"
    CULTURE = "Cultural (Museums/History/Food)"
    PARTY = "Nightlife & Social"

    @property
    def daily_energy_cap(self) -> int:
        """Maximum total energy score the generator may schedule per day."""
        if self is ChillLevel.RELAXED:
            return 12
        if self is ChillLevel.ACTIVE:
            return 28
        return 20
