"""Trip and spot entities held by the entity store."""

from __future__ import annotations

from datetime import date, datetime
from urllib.parse import quote_plus
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import ChillLevel, Coordinates, PhotoRef, SpotType

SEARCH_URL_TEMPLATE = "https://www.google.com/search?q={query}"


def generate_id() -> str:
    """Return a fresh entity identifier."""
    return uuid4().hex


def _as_local_aware(value: datetime | None) -> datetime | None:
    """Interpret naive datetimes as local wall-clock time."""
    if value is None or value.tzinfo is not None:
        return value
    return value.astimezone()


class Trip(BaseModel):
    """A bounded travel plan. Replaced wholesale, never edited in place."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id, description="Unique trip identifier")
    destination: str = Field(min_length=1, description="Free-text destination")
    start_date: date = Field(description="First calendar day of the trip")
    days: int = Field(ge=1, description="Trip length in days")
    chill_level: ChillLevel = Field(description="Pacing preference used by generation")


class Spot(BaseModel):
    """A named place with a location and a classification."""

    id: str = Field(default_factory=generate_id, description="Unique spot identifier")
    trip_id: str | None = Field(
        default=None, description="Owning trip; None for standalone saved places"
    )
    name: str = Field(min_length=1, description="Display name")
    description: str | None = Field(default=None, description="Free-text notes")
    type: SpotType = Field(description="Spot classification")
    coordinates: Coordinates = Field(description="Spot location")
    itinerary_time: datetime | None = Field(
        default=None,
        description="Scheduled visit or check-in time (timezone-aware)",
    )
    visited_date: datetime | None = Field(default=None, description="When it was visited")
    website: str | None = Field(default=None, description="Official website")
    photos: list[PhotoRef] = Field(
        default_factory=list, description="Photos in display order"
    )
    is_check_in: bool | None = Field(
        default=None, description="First night at this accommodation"
    )

    @field_validator("itinerary_time", "visited_date")
    @classmethod
    def _normalize_timestamp(cls, v: datetime | None) -> datetime | None:
        """Store every timestamp as an aware datetime."""
        return _as_local_aware(v)

    def website_or_search_url(self) -> str:
        """Return the website, or a web search for the spot when none is known."""
        if self.website:
            return self.website
        terms = f"{self.name} {self.description or ''}".strip()
        return SEARCH_URL_TEMPLATE.format(query=quote_plus(terms))
