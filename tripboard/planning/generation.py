"""AI itinerary generation: request validation, mapping and atomic apply."""

from __future__ import annotations

import logging
from datetime import date, time, timedelta, tzinfo

from pydantic import BaseModel, Field, ValidationError

from tripboard.adapters.generation import ItineraryProvider
from tripboard.dates.engine import local_datetime
from tripboard.exceptions import (
    ConfigurationError,
    GenerationError,
    RequestValidationError,
    TripboardError,
)
from tripboard.models.common import SpotType
from tripboard.models.entities import Spot, Trip
from tripboard.models.generation import (
    GeneratedAccommodation,
    GeneratedActivity,
    GeneratedTrip,
    TripRequest,
    parse_time_of_day,
)
from tripboard.state.store import EntityStore

logger = logging.getLogger(__name__)

CHECK_IN_TIME = time(7, 0)
GENERIC_FAILURE_MESSAGE = "Failed to generate itinerary. Please try again."


class GenerationOutcome(BaseModel):
    """Result of one generation attempt."""

    ok: bool = Field(description="Whether the trip was generated and stored")
    trip: Trip | None = None
    spots: list[Spot] = Field(default_factory=list)
    summary: str | None = Field(default=None, description="Provider's trip summary")
    error: str | None = Field(default=None, description="User-facing error message")
    config_error: bool = Field(
        default=False, description="Failure was a missing provider credential"
    )


def validate_request(request: TripRequest) -> TripRequest:
    """Reject requests that must never reach the provider.

    Raises:
        RequestValidationError: Blank destination or fewer than one day.
    """
    if not request.destination or not request.destination.strip():
        raise RequestValidationError("Please enter a destination.")
    if request.days < 1:
        raise RequestValidationError("A trip must last at least one day.")
    return request


def energy_glyph(score: int) -> str:
    if score > 7:
        return "⚡"
    if score < 4:
        return "☕"
    return "✨"


def describe_activity(activity: GeneratedActivity, cluster: str) -> str:
    """Activity notes prefixed with the day's cluster and energy badge."""
    body = f"{activity.location_name}: {activity.notes}"
    if not cluster or not cluster.strip():
        return body
    badge = f"{energy_glyph(activity.energy_score)} Battery: {activity.energy_score}/10"
    return f"[{cluster.strip()} • {badge}] {body}"


def describe_accommodation(accommodation: GeneratedAccommodation) -> str:
    return f"[Base Camp] {accommodation.reason}. {accommodation.description}"


def day_date(start_date: date, day_number: int) -> date:
    """Calendar date of 1-based day ``day_number``."""
    return start_date + timedelta(days=day_number - 1)


def map_generated_trip(
    request: TripRequest, generated: GeneratedTrip, tz: tzinfo | None = None
) -> tuple[Trip, list[Spot]]:
    """Turn a validated provider response into entities.

    Nothing is stored here. Any malformed time raises ``ValueError`` before
    the caller has touched the store.
    """
    trip = Trip(
        destination=request.destination.strip(),
        start_date=request.start_date,
        days=request.days,
        chill_level=request.chill_level,
    )

    spots: list[Spot] = []
    for generated_day in generated.days:
        on_date = day_date(request.start_date, generated_day.day)

        accommodation = generated_day.accommodation
        if accommodation is not None:
            spots.append(
                Spot(
                    trip_id=trip.id,
                    name=accommodation.name,
                    description=describe_accommodation(accommodation),
                    type=SpotType.ACCOMMODATION,
                    coordinates=accommodation.coordinates,
                    itinerary_time=local_datetime(on_date, CHECK_IN_TIME, tz),
                    is_check_in=accommodation.is_check_in,
                )
            )

        for activity in generated_day.activities:
            hours, minutes = parse_time_of_day(activity.time)
            spots.append(
                Spot(
                    trip_id=trip.id,
                    name=activity.name,
                    description=describe_activity(activity, generated_day.morning_cluster),
                    type=SpotType.ITINERARY,
                    coordinates=activity.coordinates,
                    itinerary_time=local_datetime(on_date, time(hours, minutes), tz),
                    website=activity.website or None,
                )
            )

    return trip, spots


class GenerationPipeline:
    """Runs a trip request through the provider and into the store.

    The store is only written once the whole response has been validated and
    mapped; every failure leaves it exactly as it was.
    """

    def __init__(
        self,
        store: EntityStore,
        provider: ItineraryProvider,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            store: Entity store receiving generated trips.
            provider: Structured itinerary generator.
            tz: Zone for scheduled times; the system zone when omitted.
        """
        self.store = store
        self.provider = provider
        self.tz = tz
        self.loading = False

    async def generate(self, request: TripRequest) -> GenerationOutcome:
        """Generate, validate and store a trip.

        Raises:
            RequestValidationError: If the request is rejected locally; the
                provider is not called in that case.
        """
        validate_request(request)

        self.loading = True
        try:
            raw = await self.provider.generate(request)
            generated = GeneratedTrip.model_validate_json(raw)
            trip, spots = map_generated_trip(request, generated, self.tz)
            self.store.apply_generation(trip, spots)
        except ConfigurationError as e:
            logger.warning(f"Itinerary generation is not configured: {e}")
            return GenerationOutcome(ok=False, error=str(e), config_error=True)
        except GenerationError as e:
            logger.error(f"Itinerary generation failed: {e}")
            return GenerationOutcome(ok=False, error=str(e))
        except ValidationError as e:
            logger.error(
                f"Generated itinerary did not match the expected shape: "
                f"{e.error_count()} errors"
            )
            return GenerationOutcome(ok=False, error=GENERIC_FAILURE_MESSAGE)
        except (TripboardError, ValueError) as e:
            logger.error(f"Generated itinerary could not be applied: {e}")
            return GenerationOutcome(ok=False, error=GENERIC_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Unexpected failure during itinerary generation")
            return GenerationOutcome(ok=False, error=GENERIC_FAILURE_MESSAGE)
        finally:
            self.loading = False

        self.store.select_trip(trip.id)
        logger.info(
            f"Generated {trip.days}-day trip to {trip.destination} with {len(spots)} spots"
        )
        return GenerationOutcome(ok=True, trip=trip, spots=spots, summary=generated.summary)
