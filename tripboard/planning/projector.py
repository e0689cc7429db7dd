"""Display-ready projections of the entity store.

Everything here is a pure function of the spots and trips handed in: day
grouping, walking-distance annotations between consecutive stops, and trip
progress. Views are recomputed on every read; nothing is cached.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo

from pydantic import BaseModel, Field

from tripboard.dates.engine import local_datetime
from tripboard.geo.distance import format_distance, haversine_km
from tripboard.models.common import SpotType
from tripboard.models.entities import Spot, Trip
from tripboard.state.store import EntityStore

UNSCHEDULED_LABEL = "To Be Decided"


class SpotLeg(BaseModel):
    """A spot in a day's sequence with the distance from the previous stop."""

    spot: Spot
    distance_km: float | None = Field(
        default=None, description="Distance from the previous stop, if annotated"
    )

    @property
    def distance_label(self) -> str | None:
        if self.distance_km is None:
            return None
        return format_distance(self.distance_km)


class DayGroup(BaseModel):
    """Spots sharing one local calendar day, or the unscheduled bucket."""

    day: date | None = Field(description="Local calendar day; None when unscheduled")
    label: str = Field(description="Heading for the group")
    legs: list[SpotLeg] = Field(description="Sorted spots with distance annotations")

    @property
    def is_unscheduled(self) -> bool:
        return self.day is None

    @property
    def spots(self) -> list[Spot]:
        return [leg.spot for leg in self.legs]


class TripView(BaseModel):
    """Complete read model for one trip."""

    trip: Trip
    progress: int = Field(ge=0, le=100)
    groups: list[DayGroup]


def _local_day(moment: datetime, tz: tzinfo | None) -> date:
    return moment.astimezone(tz).date()


def sort_by_time(spots: list[Spot]) -> list[Spot]:
    """Stable ascending sort by itinerary time, untimed spots first."""
    untimed = [s for s in spots if s.itinerary_time is None]
    timed = sorted(
        (s for s in spots if s.itinerary_time is not None),
        key=lambda s: s.itinerary_time,
    )
    return untimed + timed


def format_day_label(day: date) -> str:
    """Human heading such as 'Saturday, March 15'."""
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}"


def group_by_day(spots: list[Spot], tz: tzinfo | None = None) -> list[DayGroup]:
    """Partition spots into per-day groups with distance annotations.

    Args:
        spots: Spots of a single trip (any order).
        tz: Zone defining "local" days; the system zone when omitted.

    Returns:
        The unscheduled group (if any) first, then one group per local day in
        chronological order. Every input spot appears in exactly one group.
    """
    unscheduled: list[Spot] = []
    by_day: dict[date, list[Spot]] = {}

    for spot in sort_by_time(spots):
        if spot.itinerary_time is None:
            unscheduled.append(spot)
        else:
            by_day.setdefault(_local_day(spot.itinerary_time, tz), []).append(spot)

    groups: list[DayGroup] = []
    if unscheduled:
        groups.append(
            DayGroup(day=None, label=UNSCHEDULED_LABEL, legs=annotate_distances(unscheduled))
        )
    for day in sorted(by_day):
        groups.append(
            DayGroup(day=day, label=format_day_label(day), legs=annotate_distances(by_day[day]))
        )
    return groups


def annotate_distances(spots: list[Spot]) -> list[SpotLeg]:
    """Attach the distance from the preceding spot to each spot.

    Base camps are a starting point rather than a waypoint, so no distance is
    shown into or out of an accommodation.
    """
    legs: list[SpotLeg] = []
    previous: Spot | None = None
    for spot in spots:
        distance_km = None
        if (
            previous is not None
            and spot.type is not SpotType.ACCOMMODATION
            and previous.type is not SpotType.ACCOMMODATION
        ):
            distance_km = haversine_km(previous.coordinates, spot.coordinates)
        legs.append(SpotLeg(spot=spot, distance_km=distance_km))
        previous = spot
    return legs


def trip_progress(
    trip: Trip, now: datetime | None = None, tz: tzinfo | None = None
) -> int:
    """Percentage of the trip elapsed at ``now``.

    The trip spans [local midnight of start_date, + days). Before the start
    the result is 0, from the end onward it is 100.
    """
    start = local_datetime(trip.start_date, time(0, 0), tz)
    now = now or datetime.now(start.tzinfo)
    if now.tzinfo is None:
        now = now.astimezone()

    total = trip.days * 86400
    elapsed = (now - start).total_seconds()
    if elapsed <= 0:
        return 0
    if elapsed >= total:
        return 100
    # half-up rounding
    return int(elapsed / total * 100 + 0.5)


def build_trip_view(
    store: EntityStore,
    trip_id: str,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> TripView | None:
    """Assemble the grouped, annotated itinerary of a trip.

    Returns:
        None if the trip is not in the store.
    """
    trip = store.get_trip(trip_id)
    if trip is None:
        return None
    return TripView(
        trip=trip,
        progress=trip_progress(trip, now, tz),
        groups=group_by_day(store.list_spots_for_trip(trip_id), tz),
    )
