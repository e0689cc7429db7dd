"""Debounced, race-safe place autocomplete."""

from __future__ import annotations

import logging
from collections.abc import Callable

from tripboard.adapters.places import PlaceSearchProvider
from tripboard.config import Settings, get_settings
from tripboard.exceptions import PlaceSearchError
from tripboard.exec.debounce import Debouncer
from tripboard.models.common import Coordinates
from tripboard.models.search import PlaceSuggestion
from tripboard.search.suggestions import to_suggestions

logger = logging.getLogger(__name__)

SuggestionListener = Callable[[list[PlaceSuggestion]], None]


class SearchOrchestrator:
    """Autocomplete for one input field.

    Each keystroke calls :meth:`search`. Only the most recently issued call
    may publish suggestions: earlier calls either never reach the provider
    (superseded during the debounce delay) or have their late responses
    dropped.
    """

    def __init__(
        self,
        provider: PlaceSearchProvider,
        settings: Settings | None = None,
        *,
        debounce_seconds: float | None = None,
        on_results: SuggestionListener | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            provider: Place search backend.
            settings: Optional settings override.
            debounce_seconds: Override for the quiescence delay.
            on_results: Called with every published suggestion list.
        """
        self.settings = settings or get_settings()
        self.provider = provider
        if debounce_seconds is None:
            debounce_seconds = self.settings.search_debounce_ms / 1000.0
        self._debouncer = Debouncer(debounce_seconds)
        self.on_results = on_results
        self.suggestions: list[PlaceSuggestion] = []
        self.loading = False

    def _publish(self, suggestions: list[PlaceSuggestion]) -> None:
        self.suggestions = suggestions
        self.loading = False
        if self.on_results is not None:
            self.on_results(suggestions)

    def cancel(self) -> None:
        """Supersede any pending call and clear the suggestions."""
        self._debouncer.supersede()
        self._publish([])

    async def search(
        self,
        query: str,
        bias: Coordinates | None = None,
        only_cities: bool = False,
    ) -> list[PlaceSuggestion] | None:
        """Request suggestions for ``query``.

        Returns:
            The published suggestions, or None when this call was superseded
            and its outcome must not be shown.
        """
        query = query or ""
        if len(query) < self.settings.search_min_query_length:
            self.cancel()
            return []

        token = self._debouncer.issue()
        self.loading = True
        if not await self._debouncer.wait(token):
            return None

        suggestions = await self._fetch(query, bias, only_cities)
        if token.stale:
            logger.debug("Dropping stale suggestions for %r (seq %d)", query, token.seq)
            return None

        self._publish(suggestions)
        return suggestions

    async def _fetch(
        self, query: str, bias: Coordinates | None, only_cities: bool
    ) -> list[PlaceSuggestion]:
        """Call the provider; failures degrade to an empty list."""
        try:
            features = await self.provider.search(
                query, bias, limit=self.settings.search_provider_limit
            )
        except PlaceSearchError as e:
            logger.warning(f"Place search failed for {query!r}: {e}")
            return []
        except Exception:
            logger.exception(f"Unexpected place search failure for {query!r}")
            return []
        return to_suggestions(
            features, only_cities=only_cities, cap=self.settings.search_result_cap
        )
