"""Shared builders and fakes for unit tests."""

from datetime import timedelta, timezone

from tripboard.models.common import Coordinates
from tripboard.models.generation import TripRequest
from tripboard.models.search import PlaceFeature

# Fixed zone so scheduled times do not depend on the machine running the tests
CET = timezone(timedelta(hours=1))

PARIS = Coordinates(lat=48.8566, lng=2.3522)
LONDON = Coordinates(lat=51.5074, lng=-0.1278)
LOUVRE = Coordinates(lat=48.8606, lng=2.3376)
ORSAY = Coordinates(lat=48.8600, lng=2.3266)


class FakePlaceSearch:
    """Place search provider returning canned features and recording calls."""

    def __init__(self, features: list[PlaceFeature] | None = None, error: Exception | None = None):
        self.features = features or []
        self.error = error
        self.calls: list[dict] = []

    async def search(self, query, bias=None, limit=15):
        self.calls.append({"query": query, "bias": bias, "limit": limit})
        if self.error is not None:
            raise self.error
        return list(self.features)


class FakeGenerator:
    """Itinerary provider returning a canned document or raising."""

    def __init__(self, response: str | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.requests: list[TripRequest] = []

    async def generate(self, request: TripRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def make_feature(lng: float, lat: float, **properties) -> PlaceFeature:
    """Build a geocoder feature the way Photon returns it."""
    return PlaceFeature.model_validate(
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [lng, lat]},
            "properties": properties,
        }
    )


def generated_trip_payload() -> dict:
    """A two-day provider response for a Paris trip."""
    return {
        "summary": "Art, bread and long walks along the Seine.",
        "days": [
            {
                "day": 1,
                "morning_cluster": "Louvre & Tuileries",
                "accommodation": {
                    "name": "Hotel du Louvre",
                    "description": "Classic rooms facing the museum",
                    "reason": "Walking distance to day one",
                    "is_check_in": True,
                    "coordinates": {"lat": 48.8625, "lng": 2.3358},
                },
                "activities": [
                    {
                        "time": "09:30",
                        "name": "Louvre Museum",
                        "notes": "Start with the Denon wing",
                        "location_name": "Musee du Louvre",
                        "energy_score": 8,
                        "duration_min": 180,
                        "website": "https://www.louvre.fr",
                        "coordinates": {"lat": 48.8606, "lng": 2.3376},
                    },
                    {
                        "time": "14:00",
                        "name": "Tuileries picnic",
                        "notes": "Grab a baguette on the way",
                        "location_name": "Jardin des Tuileries",
                        "energy_score": 2,
                        "duration_min": 60,
                        "coordinates": {"lat": 48.8634, "lng": 2.3275},
                    },
                ],
            },
            {
                "day": 2,
                "morning_cluster": "",
                "accommodation": {
                    "name": "Hotel du Louvre",
                    "description": "Classic rooms facing the museum",
                    "reason": "No need to move",
                    "is_check_in": False,
                    "coordinates": {"lat": 48.8625, "lng": 2.3358},
                },
                "activities": [
                    {
                        "time": "10:00",
                        "name": "Musee d'Orsay",
                        "notes": "Impressionists on the top floor",
                        "location_name": "Musee d'Orsay",
                        "energy_score": 5,
                        "duration_min": 150,
                        "coordinates": {"lat": 48.8600, "lng": 2.3266},
                    }
                ],
            },
        ],
    }
