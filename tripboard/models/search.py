"""Place search provider payloads and suggestion records."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PlaceProperties(BaseModel):
    """Descriptive properties of a geocoder feature."""

    name: str | None = None
    city: str | None = None
    town: str | None = None
    village: str | None = None
    state: str | None = None
    country: str | None = None
    street: str | None = None
    housenumber: str | None = None
    postcode: str | None = None
    osm_key: str | None = Field(default=None, description="Classification key, e.g. 'place'")
    osm_value: str | None = Field(default=None, description="Classification value, e.g. 'city'")


class PlaceGeometry(BaseModel):
    """GeoJSON point geometry; coordinates are [lng, lat]."""

    type: str = "Point"
    coordinates: tuple[float, float]


class PlaceFeature(BaseModel):
    """A single geocoder result."""

    geometry: PlaceGeometry
    properties: PlaceProperties = Field(default_factory=PlaceProperties)

    @property
    def lat(self) -> float:
        return self.geometry.coordinates[1]

    @property
    def lng(self) -> float:
        return self.geometry.coordinates[0]


class PlaceSuggestion(BaseModel):
    """An autocomplete suggestion ready for display and selection."""

    name: str = Field(description="Full display value: 'title, subtitle' or title")
    title: str = Field(description="Primary label")
    subtitle: str = Field(default="", description="Disambiguating parts")
    lat: float
    lng: float
