"""Place autocomplete search."""

from tripboard.search.orchestrator import SearchOrchestrator
from tripboard.search.suggestions import is_place_like, to_suggestion, to_suggestions

__all__ = ["SearchOrchestrator", "is_place_like", "to_suggestion", "to_suggestions"]
