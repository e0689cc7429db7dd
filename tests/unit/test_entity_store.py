"""Tests for the in-memory entity store."""

from datetime import date, datetime

import pytest

from tripboard.exceptions import DuplicateIdError, SpotValidationError, UnknownTripError
from tripboard.models.common import ChillLevel, SpotType
from tripboard.models.entities import Spot, Trip

from tests.unit.helpers import CET, LOUVRE, ORSAY, PARIS


def make_spot(**overrides) -> Spot:
    fields = {"name": "Louvre", "type": SpotType.WANT_TO_VISIT, "coordinates": LOUVRE}
    fields.update(overrides)
    return Spot(**fields)


class TestTrips:
    def test_create_and_get(self, store, paris_trip):
        assert store.get_trip(paris_trip.id) == paris_trip
        assert store.list_trips() == [paris_trip]

    def test_duplicate_id_rejected(self, store, paris_trip):
        with pytest.raises(DuplicateIdError):
            store.create_trip(paris_trip)

    def test_trip_requires_destination_and_days(self):
        with pytest.raises(ValueError):
            Trip(destination="", start_date=date(2025, 1, 1), days=1, chill_level=ChillLevel.RELAXED)
        with pytest.raises(ValueError):
            Trip(destination="Rome", start_date=date(2025, 1, 1), days=0, chill_level=ChillLevel.RELAXED)

    def test_delete_trip_orphans_spots(self, store, paris_trip):
        spot = store.create_spot(make_spot(trip_id=paris_trip.id, type=SpotType.ITINERARY))

        assert store.delete_trip(paris_trip.id) is True
        assert store.get_trip(paris_trip.id) is None
        # Spots survive trip deletion
        assert store.get_spot(spot.id) is not None
        assert store.get_spot(spot.id).trip_id == paris_trip.id

    def test_delete_unknown_trip(self, store):
        assert store.delete_trip("nope") is False

    def test_delete_selected_trip_clears_selection(self, store, paris_trip):
        store.select_trip(paris_trip.id)
        store.delete_trip(paris_trip.id)
        assert store.selected_trip is None


class TestSpots:
    def test_spot_with_unknown_trip_rejected(self, store):
        with pytest.raises(UnknownTripError):
            store.create_spot(make_spot(trip_id="missing"))
        assert store.list_spots() == []

    def test_spot_without_trip_allowed(self, store):
        spot = store.create_spot(make_spot())
        assert store.get_spot(spot.id) == spot

    def test_duplicate_spot_id_rejected(self, store):
        spot = store.create_spot(make_spot())
        with pytest.raises(DuplicateIdError):
            store.create_spot(make_spot(id=spot.id))

    def test_spots_for_trip_in_insertion_order(self, store, paris_trip):
        a = store.create_spot(make_spot(trip_id=paris_trip.id, name="A"))
        store.create_spot(make_spot(name="Elsewhere"))
        b = store.create_spot(make_spot(trip_id=paris_trip.id, name="B"))

        assert [s.id for s in store.list_spots_for_trip(paris_trip.id)] == [a.id, b.id]

    def test_unaffiliated_excludes_itinerary(self, store, paris_trip):
        saved = store.create_spot(make_spot())
        store.create_spot(make_spot(type=SpotType.ITINERARY))
        store.create_spot(make_spot(trip_id=paris_trip.id))

        assert store.list_unaffiliated_spots() == [saved]

    def test_update_merges_fields(self, store):
        spot = store.create_spot(make_spot(description="old"))
        updated = store.update_spot(spot.id, name="Musee du Louvre")

        assert updated.name == "Musee du Louvre"
        assert updated.description == "old"
        assert store.get_spot(spot.id).name == "Musee du Louvre"

    def test_update_unknown_spot(self, store):
        assert store.update_spot("missing", name="x") is None

    def test_update_rejects_invalid_merge(self, store):
        spot = store.create_spot(make_spot())
        with pytest.raises(ValueError):
            store.update_spot(spot.id, name="")
        assert store.get_spot(spot.id).name == "Louvre"

    def test_update_rejects_unknown_trip(self, store):
        spot = store.create_spot(make_spot())
        with pytest.raises(UnknownTripError):
            store.update_spot(spot.id, trip_id="missing")

    def test_update_rejects_id_change(self, store):
        spot = store.create_spot(make_spot())
        with pytest.raises(ValueError):
            store.update_spot(spot.id, id="other")

    def test_naive_times_become_aware(self, store):
        spot = store.create_spot(make_spot(itinerary_time=datetime(2025, 3, 15, 9, 0)))
        assert spot.itinerary_time.tzinfo is not None

    def test_delete_spot_clears_active(self, store):
        spot = store.create_spot(make_spot())
        store.select_spot(spot.id)

        assert store.delete_spot(spot.id) is True
        assert store.active_spot is None
        assert store.delete_spot(spot.id) is False

    def test_website_falls_back_to_search(self):
        spot = make_spot(name="Louvre", description="Paris")
        assert spot.website_or_search_url() == "https://www.google.com/search?q=Louvre+Paris"
        assert make_spot(website="https://louvre.fr").website_or_search_url() == "https://louvre.fr"


class TestPhotos:
    def test_add_appends_in_order(self, store):
        spot = store.create_spot(make_spot(photos=["p1"]))
        store.add_photos(spot.id, ["p2", "p3"])
        assert store.get_spot(spot.id).photos == ["p1", "p2", "p3"]

    def test_remove_by_index(self, store):
        spot = store.create_spot(make_spot(photos=["p1", "p2", "p3"]))
        store.remove_photo(spot.id, 1)
        assert store.get_spot(spot.id).photos == ["p1", "p3"]

    def test_remove_out_of_range_is_noop(self, store):
        spot = store.create_spot(make_spot(photos=["p1"]))
        store.remove_photo(spot.id, 5)
        assert store.get_spot(spot.id).photos == ["p1"]

    def test_move_reorders(self, store):
        spot = store.create_spot(make_spot(photos=["p1", "p2", "p3"]))
        store.move_photo(spot.id, 2, 0)
        assert store.get_spot(spot.id).photos == ["p3", "p1", "p2"]


class TestSelection:
    def test_select_unknown_spot_keeps_selection(self, store):
        spot = store.create_spot(make_spot())
        store.select_spot(spot.id)
        assert store.select_spot("missing") is None
        assert store.active_spot == spot

    def test_close_trip_clears_both(self, store, paris_trip):
        spot = store.create_spot(make_spot(trip_id=paris_trip.id))
        store.select_trip(paris_trip.id)
        store.select_spot(spot.id)

        store.close_trip()
        assert store.selected_trip is None
        assert store.active_spot is None


class TestUserActions:
    def test_save_place(self, store):
        spot = store.save_place("  Eiffel Tower ", PARIS)

        assert spot.name == "Eiffel Tower"
        assert spot.type is SpotType.WANT_TO_VISIT
        assert spot.description == "Saved place"
        assert spot.trip_id is None
        assert store.list_unaffiliated_spots() == [spot]

    @pytest.mark.parametrize("name,coordinates", [("", PARIS), ("   ", PARIS), ("Eiffel", None)])
    def test_save_place_requires_name_and_location(self, store, name, coordinates):
        with pytest.raises(SpotValidationError):
            store.save_place(name, coordinates)
        assert store.list_spots() == []

    def test_add_event_defaults_to_trip_start(self, store, paris_trip):
        spot = store.add_event(paris_trip.id, "Orsay", ORSAY, tz=CET)

        assert spot.type is SpotType.ITINERARY
        assert spot.description == "User added activity"
        assert spot.itinerary_time == datetime(2025, 3, 15, 9, 0, tzinfo=CET)
        assert spot.is_check_in is None

    def test_add_base_camp(self, store, paris_trip):
        spot = store.add_event(
            paris_trip.id,
            "Hotel",
            PARIS,
            kind=SpotType.ACCOMMODATION,
            on_date="2025-03-16",
            at_time="15:00",
            tz=CET,
        )

        assert spot.description == "Manual Base Camp"
        assert spot.is_check_in is True
        assert spot.itinerary_time == datetime(2025, 3, 16, 15, 0, tzinfo=CET)

    def test_add_event_without_time_is_unscheduled(self, store, paris_trip):
        spot = store.add_event(paris_trip.id, "Maybe", PARIS, at_time=None)
        assert spot.itinerary_time is None

    def test_add_event_bad_time(self, store, paris_trip):
        with pytest.raises(SpotValidationError):
            store.add_event(paris_trip.id, "Late", PARIS, at_time="25:00")
        assert store.list_spots() == []

    @pytest.mark.parametrize("on_date", ["2025-03-xx", "15/03/2025", "2025-02-30"])
    def test_add_event_bad_date(self, store, paris_trip, on_date):
        with pytest.raises(SpotValidationError, match="Invalid date"):
            store.add_event(paris_trip.id, "Picnic", PARIS, on_date=on_date)
        assert store.list_spots() == []

    def test_add_event_unknown_trip(self, store):
        with pytest.raises(UnknownTripError):
            store.add_event("missing", "Orsay", ORSAY)

    def test_add_event_rejects_saved_place_kind(self, store, paris_trip):
        with pytest.raises(SpotValidationError):
            store.add_event(paris_trip.id, "Orsay", ORSAY, kind=SpotType.VISITED)


class TestApplyGeneration:
    def _trip(self) -> Trip:
        return Trip(
            destination="Rome", start_date=date(2025, 5, 1), days=2, chill_level=ChillLevel.ACTIVE
        )

    def test_inserts_trip_and_spots(self, store):
        trip = self._trip()
        spots = [make_spot(trip_id=trip.id), make_spot(trip_id=trip.id, name="Orsay")]

        store.apply_generation(trip, spots)
        assert store.get_trip(trip.id) == trip
        assert len(store.list_spots_for_trip(trip.id)) == 2

    def test_rejected_batch_leaves_store_unchanged(self, store, paris_trip):
        trip = self._trip()
        spots = [make_spot(trip_id=trip.id), make_spot(trip_id="someone-else")]

        with pytest.raises(UnknownTripError):
            store.apply_generation(trip, spots)
        assert store.list_trips() == [paris_trip]
        assert store.list_spots() == []

    def test_duplicate_spot_ids_in_batch(self, store):
        trip = self._trip()
        spot = make_spot(trip_id=trip.id)

        with pytest.raises(DuplicateIdError):
            store.apply_generation(trip, [spot, spot])
        assert store.get_trip(trip.id) is None
