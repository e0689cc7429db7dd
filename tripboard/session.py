"""Planner session: one user's store, searches, generation and view state."""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo

from tripboard.adapters.generation import ItineraryProvider, OpenAIItineraryGenerator
from tripboard.adapters.places import PhotonPlaceSearch, PlaceSearchProvider
from tripboard.config import Settings, get_openai_api_key, get_settings
from tripboard.exceptions import ConfigurationError, TripboardError
from tripboard.models.common import ChillLevel, Coordinates, SpotType
from tripboard.models.entities import Spot, Trip
from tripboard.models.generation import TripRequest
from tripboard.models.search import PlaceSuggestion
from tripboard.planning.generation import GenerationOutcome, GenerationPipeline
from tripboard.planning.projector import TripView, build_trip_view
from tripboard.search.orchestrator import SearchOrchestrator
from tripboard.state.lightbox import LightboxController
from tripboard.state.store import EntityStore

logger = logging.getLogger(__name__)

# Map centre before anything has been selected
DEFAULT_FOCUS = Coordinates(lat=48.8566, lng=2.3522)


class PlannerSession:
    """Composition root tying the store to its searches and generator.

    Holds the transient view state: the map ``focus``, a blocking
    ``config_notice`` when generation credentials are missing, and a
    dismissible ``error`` from the last failed action.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        places: PlaceSearchProvider | None = None,
        generator: ItineraryProvider | None = None,
        store: EntityStore | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.tz = tz
        self.store = store or EntityStore()
        self.lightbox = LightboxController()

        places = places or PhotonPlaceSearch(settings=self.settings)
        self.destination_search = SearchOrchestrator(places, self.settings)
        self.place_search = SearchOrchestrator(places, self.settings)
        self.places = places

        self.pipeline = GenerationPipeline(
            self.store,
            generator or OpenAIItineraryGenerator(self.settings),
            tz=tz,
        )

        self.focus = DEFAULT_FOCUS
        self.error: str | None = None
        self.config_notice: str | None = None
        if generator is None:
            try:
                get_openai_api_key(self.settings)
            except ConfigurationError as e:
                self.config_notice = str(e)
                logger.warning("AI itinerary generation is disabled: no API key configured")

    def dismiss_error(self) -> None:
        self.error = None

    # Search

    async def search_destinations(self, query: str) -> list[PlaceSuggestion] | None:
        """Autocomplete for the trip destination field (cities and regions)."""
        return await self.destination_search.search(query, only_cities=True)

    async def search_places(self, query: str) -> list[PlaceSuggestion] | None:
        """Autocomplete for places, ranked near the current map focus."""
        return await self.place_search.search(query, bias=self.focus)

    # Generation

    async def generate_trip(
        self,
        destination: str,
        days: int,
        start_date: date,
        chill_level: ChillLevel | None = None,
        images: list[str] | None = None,
    ) -> GenerationOutcome:
        """Generate a trip and focus the map on its first spot.

        Local validation errors are reported through ``error`` and never
        reach the provider.
        """
        request_fields = {
            "destination": destination,
            "days": days,
            "start_date": start_date,
            "images": images or [],
        }
        if chill_level is not None:
            request_fields["chill_level"] = chill_level
        request = TripRequest(**request_fields)

        try:
            outcome = await self.pipeline.generate(request)
        except TripboardError as e:
            self.error = str(e)
            return GenerationOutcome(ok=False, error=str(e))

        if outcome.config_error:
            self.config_notice = outcome.error
        elif not outcome.ok:
            self.error = outcome.error
        elif outcome.spots:
            self.focus = outcome.spots[0].coordinates
        return outcome

    # Spots

    def save_place(self, suggestion: PlaceSuggestion) -> Spot | None:
        """Save an autocomplete suggestion as a place to visit."""
        try:
            spot = self.store.save_place(
                suggestion.title, Coordinates(lat=suggestion.lat, lng=suggestion.lng)
            )
        except TripboardError as e:
            self.error = str(e)
            return None
        self.focus = spot.coordinates
        return spot

    def add_event(
        self,
        trip_id: str,
        name: str,
        coordinates: Coordinates | None,
        *,
        kind: SpotType = SpotType.ITINERARY,
        on_date: date | str | None = None,
        at_time: str | None = "09:00",
    ) -> Spot | None:
        try:
            spot = self.store.add_event(
                trip_id,
                name,
                coordinates,
                kind=kind,
                on_date=on_date,
                at_time=at_time,
                tz=self.tz,
            )
        except TripboardError as e:
            self.error = str(e)
            return None
        self.focus = spot.coordinates
        return spot

    def select_spot(self, spot_id: str) -> Spot | None:
        spot = self.store.select_spot(spot_id)
        if spot is not None:
            self.focus = spot.coordinates
        return spot

    def delete_spot(self, spot_id: str) -> bool:
        return self.store.delete_spot(spot_id)

    def view_photos(self, spot_id: str, index: int = 0) -> bool:
        """Open the lightbox on a spot's photos."""
        spot = self.store.get_spot(spot_id)
        if spot is None or not spot.photos:
            return False
        self.lightbox.open(spot.photos, index)
        return True

    # Trips

    def open_trip(self, trip_id: str) -> Trip | None:
        return self.store.select_trip(trip_id)

    def close_trip(self) -> None:
        self.store.close_trip()

    def trip_view(self, now: datetime | None = None) -> TripView | None:
        """Itinerary of the selected trip, if any."""
        trip = self.store.selected_trip
        if trip is None:
            return None
        return build_trip_view(self.store, trip.id, now=now, tz=self.tz)

    async def close(self) -> None:
        """Release provider connections."""
        close = getattr(self.places, "close", None)
        if close is not None:
            await close()
