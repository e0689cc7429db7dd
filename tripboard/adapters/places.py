"""Photon (Komoot) place search adapter."""

import logging
import time
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from tripboard.config import Settings, get_settings
from tripboard.exceptions import PlaceSearchError
from tripboard.metrics.core import ProviderErrorKind, record_provider_call
from tripboard.models.common import Coordinates
from tripboard.models.search import PlaceFeature

logger = logging.getLogger(__name__)


class PlaceSearchProvider(Protocol):
    """Protocol for free-text place search backends."""

    async def search(
        self, query: str, bias: Coordinates | None = None, limit: int = 15
    ) -> list[PlaceFeature]:
        """Search places matching ``query``.

        Args:
            query: Free-text query.
            bias: Optional location to rank nearby results higher.
            limit: Maximum number of features to return.

        Returns:
            Matching features, best first.

        Raises:
            PlaceSearchError: On network, HTTP or payload failures.
        """
        ...


class PhotonPlaceSearch:
    """Client for the Photon geocoder's search endpoint."""

    provider_name = "photon"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        lang: str | None = None,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ):
        """Initialize Photon client.

        Args:
            base_url: Search endpoint (defaults to settings.photon_url)
            timeout: Request timeout in seconds
            lang: Result language
            client: Optional pre-built HTTP client (used as-is, not closed here)
            settings: Optional settings override
        """
        settings = settings or get_settings()
        self.base_url = base_url or settings.photon_url
        self.timeout = timeout if timeout is not None else settings.search_timeout_s
        self.lang = lang or settings.photon_lang
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def search(
        self, query: str, bias: Coordinates | None = None, limit: int = 15
    ) -> list[PlaceFeature]:
        """Search Photon for ``query``, optionally biased to a location."""
        params: dict[str, Any] = {"q": query, "limit": limit, "lang": self.lang}
        if bias is not None:
            params["lat"] = bias.lat
            params["lon"] = bias.lng

        start_time = time.time()
        error_kind: ProviderErrorKind | None = None
        features: list[PlaceFeature] | None = None
        try:
            client = await self._get_client()
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            features = self._parse_features(response.json())
        except httpx.TimeoutException as e:
            error_kind = "timeout"
            raise PlaceSearchError(f"Place search timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            error_kind = "http_status"
            raise PlaceSearchError(
                f"Place search returned error {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            error_kind = "network"
            raise PlaceSearchError(f"Unable to reach place search: {e}") from e
        except ValueError as e:
            error_kind = "payload"
            raise PlaceSearchError(f"Malformed place search response: {e}") from e
        finally:
            latency_ms = int((time.time() - start_time) * 1000)
            record_provider_call(
                provider=self.provider_name,
                latency_ms=latency_ms,
                ok=features is not None,
                error_kind=error_kind,
                result_count=None if features is None else len(features),
            )

        return features

    def _parse_features(self, payload: Any) -> list[PlaceFeature]:
        """Validate the GeoJSON feature collection, skipping unusable features."""
        if not isinstance(payload, dict):
            raise ValueError("expected a JSON object")
        raw_features = payload.get("features") or []
        if not isinstance(raw_features, list):
            raise ValueError("'features' must be a list")

        features: list[PlaceFeature] = []
        for raw in raw_features:
            try:
                features.append(PlaceFeature.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"Skipping malformed place feature: {e}")
        return features

    async def close(self):
        """Close the HTTP client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
