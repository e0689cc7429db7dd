"""Trip planning: generation and display projections."""

from tripboard.planning.generation import (
    GenerationOutcome,
    GenerationPipeline,
    map_generated_trip,
    validate_request,
)
from tripboard.planning.projector import (
    DayGroup,
    SpotLeg,
    TripView,
    build_trip_view,
    group_by_day,
    trip_progress,
)

__all__ = [
    "DayGroup",
    "GenerationOutcome",
    "GenerationPipeline",
    "SpotLeg",
    "TripView",
    "build_trip_view",
    "group_by_day",
    "map_generated_trip",
    "trip_progress",
    "validate_request",
]
