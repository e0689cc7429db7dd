"""Pytest configuration and fixtures for testing."""

import json
from datetime import date

import pytest

from tripboard.config import Settings
from tripboard.models.common import ChillLevel
from tripboard.models.entities import Trip
from tripboard.models.generation import TripRequest
from tripboard.state.store import EntityStore

from tests.unit.helpers import generated_trip_payload


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        openai_api_key="sk-test-key",
        openai_model="gpt-4o-mini",
        photon_url="https://photon.test/api/",
        search_debounce_ms=0,
        search_min_query_length=2,
        search_provider_limit=15,
        search_result_cap=10,
    )


@pytest.fixture
def store() -> EntityStore:
    """Create an empty entity store."""
    return EntityStore()


@pytest.fixture
def paris_trip(store: EntityStore) -> Trip:
    """A three-day Paris trip already in the store."""
    return store.create_trip(
        Trip(
            destination="Paris",
            start_date=date(2025, 3, 15),
            days=3,
            chill_level=ChillLevel.BALANCED,
        )
    )


@pytest.fixture
def trip_request() -> TripRequest:
    return TripRequest(
        destination="Paris",
        days=2,
        chill_level=ChillLevel.CULTURE,
        start_date=date(2025, 3, 15),
    )


@pytest.fixture
def generated_json() -> str:
    return json.dumps(generated_trip_payload())
