"""Error taxonomy for the trip planner core."""


class TripboardError(Exception):
    """Base exception for all trip planner errors."""
    pass


class ConfigurationError(TripboardError):
    """Raised when required provider credentials are not configured."""
    pass


class GenerationError(TripboardError):
    """Raised when itinerary generation fails or its result cannot be trusted."""
    pass


class PlaceSearchError(TripboardError):
    """Raised by the place search adapter on network or payload failures."""
    pass


class SpotValidationError(TripboardError, ValueError):
    """Raised when a spot form is submitted with missing required fields."""
    pass


class RequestValidationError(TripboardError, ValueError):
    """Raised when a trip request is rejected before reaching the provider."""
    pass


class UnknownTripError(TripboardError, KeyError):
    """Raised when a spot references a trip that is not in the store."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class DuplicateIdError(TripboardError, ValueError):
    """Raised when an entity is created with an id that is already taken."""
    pass
