"""In-memory entity store for trips and spots.

The store is the only place entity state is mutated. Every public operation
validates first and mutates second, so a failed call leaves the store as it
was. Selection is kept as bare ids and resolved on read, which makes it
naturally stale-safe when the referenced entity goes away.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, time, tzinfo
from typing import Any

from tripboard.dates.engine import local_datetime, parse_date_key
from tripboard.exceptions import DuplicateIdError, SpotValidationError, UnknownTripError
from tripboard.models.common import Coordinates, PhotoRef, SpotType
from tripboard.models.entities import Spot, Trip
from tripboard.models.generation import parse_time_of_day

logger = logging.getLogger(__name__)

SAVED_PLACE_DESCRIPTION = "Saved place"
MANUAL_ACTIVITY_DESCRIPTION = "User added activity"
MANUAL_BASE_CAMP_DESCRIPTION = "Manual Base Camp"
DEFAULT_EVENT_TIME = "09:00"

_EVENT_KINDS = (SpotType.ITINERARY, SpotType.ACCOMMODATION)


def _require_place(name: str | None, coordinates: Coordinates | None) -> str:
    """Block submission of a place that has no name or no resolved location."""
    if not name or not name.strip():
        raise SpotValidationError("Please enter a name for this place.")
    if coordinates is None:
        raise SpotValidationError("Please select a location.")
    return name.strip()


class EntityStore:
    """Owns the trip and spot collections and the current selection."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._trips: dict[str, Trip] = {}
        self._spots: dict[str, Spot] = {}
        self._active_spot_id: str | None = None
        self._selected_trip_id: str | None = None

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    def create_trip(self, trip: Trip) -> Trip:
        """Add a trip.

        Raises:
            DuplicateIdError: If a trip with the same id exists.
        """
        if trip.id in self._trips:
            raise DuplicateIdError(f"Trip id already exists: {trip.id}")
        self._trips[trip.id] = trip
        return trip

    def get_trip(self, trip_id: str | None) -> Trip | None:
        if trip_id is None:
            return None
        return self._trips.get(trip_id)

    def list_trips(self) -> list[Trip]:
        """Trips in creation order."""
        return list(self._trips.values())

    def delete_trip(self, trip_id: str) -> bool:
        """Remove a trip. Its spots are kept as orphans.

        Returns:
            False if no such trip exists.
        """
        if self._trips.pop(trip_id, None) is None:
            return False
        if self._selected_trip_id == trip_id:
            self._selected_trip_id = None
        orphaned = sum(1 for s in self._spots.values() if s.trip_id == trip_id)
        logger.debug("Deleted trip %s leaving %d orphan spots", trip_id, orphaned)
        return True

    # ------------------------------------------------------------------
    # Spots
    # ------------------------------------------------------------------

    def _check_new_spot(self, spot: Spot, pending: Iterable[str] = ()) -> None:
        if spot.id in self._spots or spot.id in pending:
            raise DuplicateIdError(f"Spot id already exists: {spot.id}")
        if spot.trip_id is not None and spot.trip_id not in self._trips:
            raise UnknownTripError(f"Unknown trip: {spot.trip_id}")

    def create_spot(self, spot: Spot) -> Spot:
        """Add a spot.

        Raises:
            DuplicateIdError: If a spot with the same id exists.
            UnknownTripError: If ``spot.trip_id`` names a trip not in the store.
        """
        self._check_new_spot(spot)
        self._spots[spot.id] = spot
        return spot

    def get_spot(self, spot_id: str | None) -> Spot | None:
        if spot_id is None:
            return None
        return self._spots.get(spot_id)

    def list_spots(self) -> list[Spot]:
        return list(self._spots.values())

    def list_spots_for_trip(self, trip_id: str) -> list[Spot]:
        """Spots belonging to a trip, in insertion order."""
        return [s for s in self._spots.values() if s.trip_id == trip_id]

    def list_unaffiliated_spots(self) -> list[Spot]:
        """Saved places: no trip, and never itinerary-only entries."""
        return [
            s
            for s in self._spots.values()
            if s.trip_id is None and s.type is not SpotType.ITINERARY
        ]

    def update_spot(self, spot_id: str, **fields: Any) -> Spot | None:
        """Merge ``fields`` into a spot; unspecified fields are left untouched.

        Returns:
            The updated spot, or None if no such spot exists.

        Raises:
            ValueError: If the merged spot fails validation or ``id`` is given.
            UnknownTripError: If ``trip_id`` is moved to an unknown trip.
        """
        current = self._spots.get(spot_id)
        if current is None:
            return None
        if "id" in fields and fields["id"] != spot_id:
            raise ValueError("Spot id is immutable")
        new_trip_id = fields.get("trip_id")
        if new_trip_id is not None and new_trip_id not in self._trips:
            raise UnknownTripError(f"Unknown trip: {new_trip_id}")

        data = current.model_dump()
        data.update(fields)
        updated = Spot.model_validate(data)
        self._spots[spot_id] = updated
        return updated

    def delete_spot(self, spot_id: str) -> bool:
        """Remove a spot, clearing the selection if it pointed at it.

        Returns:
            False if no such spot exists.
        """
        if self._spots.pop(spot_id, None) is None:
            return False
        if self._active_spot_id == spot_id:
            self._active_spot_id = None
        return True

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def add_photos(self, spot_id: str, photos: Iterable[PhotoRef]) -> Spot | None:
        """Append photos after the existing ones."""
        spot = self._spots.get(spot_id)
        if spot is None:
            return None
        return self.update_spot(spot_id, photos=[*spot.photos, *photos])

    def remove_photo(self, spot_id: str, index: int) -> Spot | None:
        """Drop the photo at ``index``; an out-of-range index changes nothing."""
        spot = self._spots.get(spot_id)
        if spot is None:
            return None
        if not 0 <= index < len(spot.photos):
            return spot
        return self.update_spot(
            spot_id, photos=[p for i, p in enumerate(spot.photos) if i != index]
        )

    def move_photo(self, spot_id: str, from_index: int, to_index: int) -> Spot | None:
        """Reorder a photo within the spot's sequence."""
        spot = self._spots.get(spot_id)
        if spot is None:
            return None
        photos = list(spot.photos)
        if not (0 <= from_index < len(photos) and 0 <= to_index < len(photos)):
            return spot
        photos.insert(to_index, photos.pop(from_index))
        return self.update_spot(spot_id, photos=photos)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_spot(self, spot_id: str) -> Spot | None:
        """Make a spot the active one; unknown ids leave the selection as is."""
        spot = self._spots.get(spot_id)
        if spot is not None:
            self._active_spot_id = spot_id
        return spot

    def clear_selection(self) -> None:
        self._active_spot_id = None

    @property
    def active_spot(self) -> Spot | None:
        return self.get_spot(self._active_spot_id)

    def select_trip(self, trip_id: str) -> Trip | None:
        trip = self._trips.get(trip_id)
        if trip is not None:
            self._selected_trip_id = trip_id
        return trip

    @property
    def selected_trip(self) -> Trip | None:
        return self.get_trip(self._selected_trip_id)

    def close_trip(self) -> None:
        """Leave the trip view, dropping trip and spot selection."""
        self._selected_trip_id = None
        self._active_spot_id = None

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def save_place(self, name: str, coordinates: Coordinates | None) -> Spot:
        """Save a standalone place the user wants to visit.

        Raises:
            SpotValidationError: If the name is blank or no location was resolved.
        """
        name = _require_place(name, coordinates)
        return self.create_spot(
            Spot(
                name=name,
                type=SpotType.WANT_TO_VISIT,
                coordinates=coordinates,
                description=SAVED_PLACE_DESCRIPTION,
            )
        )

    def add_event(
        self,
        trip_id: str,
        name: str,
        coordinates: Coordinates | None,
        *,
        kind: SpotType = SpotType.ITINERARY,
        on_date: date | str | None = None,
        at_time: str | None = DEFAULT_EVENT_TIME,
        tz: tzinfo | None = None,
    ) -> Spot:
        """Add a manual activity or base camp to a trip.

        The date defaults to the trip's start date. The spot is only scheduled
        when both a date and a time are available.

        Raises:
            SpotValidationError: On a blank name, missing location or bad kind.
            UnknownTripError: If the trip does not exist.
        """
        name = _require_place(name, coordinates)
        if kind not in _EVENT_KINDS:
            raise SpotValidationError(f"Events must be itinerary or accommodation, not {kind}")
        trip = self._trips.get(trip_id)
        if trip is None:
            raise UnknownTripError(f"Unknown trip: {trip_id}")

        if on_date is None:
            on_date = trip.start_date
        elif isinstance(on_date, str):
            try:
                on_date = parse_date_key(on_date)
            except ValueError as e:
                raise SpotValidationError(f"Invalid date: {on_date!r}") from e

        itinerary_time = None
        if at_time:
            try:
                hours, minutes = parse_time_of_day(at_time)
            except ValueError as e:
                raise SpotValidationError(str(e)) from e
            itinerary_time = local_datetime(on_date, time(hours, minutes), tz)

        is_base_camp = kind is SpotType.ACCOMMODATION
        return self.create_spot(
            Spot(
                trip_id=trip_id,
                name=name,
                type=kind,
                coordinates=coordinates,
                description=(
                    MANUAL_BASE_CAMP_DESCRIPTION if is_base_camp else MANUAL_ACTIVITY_DESCRIPTION
                ),
                itinerary_time=itinerary_time,
                is_check_in=True if is_base_camp else None,
            )
        )

    def apply_generation(self, trip: Trip, spots: list[Spot]) -> Trip:
        """Insert a generated trip and its spots as one atomic batch.

        Every record is checked before anything is written, so a rejected
        batch leaves the store unchanged.
        """
        if trip.id in self._trips:
            raise DuplicateIdError(f"Trip id already exists: {trip.id}")
        pending: set[str] = set()
        for spot in spots:
            if spot.trip_id != trip.id:
                raise UnknownTripError(f"Spot {spot.id} does not belong to trip {trip.id}")
            if spot.id in self._spots or spot.id in pending:
                raise DuplicateIdError(f"Spot id already exists: {spot.id}")
            pending.add(spot.id)

        self._trips[trip.id] = trip
        for spot in spots:
            self._spots[spot.id] = spot
        logger.info("Applied generated trip %s with %d spots", trip.id, len(spots))
        return trip
