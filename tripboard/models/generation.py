"""Generation request and structured response models."""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel, Field, field_validator

from .common import ChillLevel, Coordinates, PhotoRef

_TIME_OF_DAY = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class TripRequest(BaseModel):
    """What the user asked the generator for."""

    destination: str = Field(description="Free-text destination")
    days: int = Field(description="Trip length in days")
    chill_level: ChillLevel = Field(
        default=ChillLevel.BALANCED, description="Pacing preference"
    )
    start_date: date = Field(description="First day of the trip")
    images: list[PhotoRef] = Field(
        default_factory=list, description="Optional reference images (data URLs)"
    )


class GeneratedActivity(BaseModel):
    """A single scheduled activity as returned by the provider."""

    time: str = Field(description="Time of day in 24h format, e.g. 09:00")
    name: str = Field(description="The title of the activity")
    notes: str = Field(description="Description and logistics notes")
    location_name: str = Field(description="Name of the specific place or venue")
    energy_score: int = Field(ge=1, le=10, description="Energy cost 1-10")
    duration_min: int = Field(ge=0, description="Estimated duration in minutes")
    coordinates: Coordinates
    website: str | None = Field(default=None, description="Official website if known")

    @field_validator("time")
    @classmethod
    def validate_time_of_day(cls, v: str) -> str:
        """Ensure the time is a parseable HH:MM value."""
        if not _TIME_OF_DAY.match(v.strip()):
            raise ValueError(f"Invalid time of day: {v!r}")
        return v.strip()


class GeneratedAccommodation(BaseModel):
    """The base camp recommended for a day."""

    name: str = Field(description="Name of the hotel or hostel")
    description: str = Field(description="Brief description of the hotel vibe")
    coordinates: Coordinates
    is_check_in: bool = Field(description="First night at this hotel")
    reason: str = Field(description="Why this location suits the day's activities")


class GeneratedDay(BaseModel):
    """One day of the generated itinerary."""

    day: int = Field(ge=1, description="1-based day number")
    morning_cluster: str = Field(description="Main zone or neighborhood for the day")
    accommodation: GeneratedAccommodation | None = None
    activities: list[GeneratedActivity] = Field(description="Activities in order")


class GeneratedTrip(BaseModel):
    """Complete structured response of the generation provider."""

    summary: str = Field(description="Brief summary of the trip vibe")
    days: list[GeneratedDay] = Field(description="Per-day entries")

    @field_validator("days")
    @classmethod
    def validate_non_empty_days(cls, v: list[GeneratedDay]) -> list[GeneratedDay]:
        """Ensure at least one day was generated."""
        if not v:
            raise ValueError("At least one day must be generated")
        return v


def parse_time_of_day(value: str) -> tuple[int, int]:
    """Split a validated HH:MM string into hours and minutes."""
    match = _TIME_OF_DAY.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid time of day: {value!r}")
    return int(match.group(1)), int(match.group(2))
