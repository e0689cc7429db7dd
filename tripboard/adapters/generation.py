"""Itinerary generation via OpenAI chat completions with structured output."""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Protocol

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    OpenAIError,
)

from tripboard.config import Settings, get_openai_api_key, get_settings
from tripboard.exceptions import GenerationError
from tripboard.metrics.core import ProviderErrorKind, record_provider_call
from tripboard.models.generation import TripRequest

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)

_COORDINATES_SCHEMA = {
    "type": "object",
    "properties": {
        "lat": {"type": "number"},
        "lng": {"type": "number"},
    },
    "required": ["lat", "lng"],
}

# JSON schema the provider must answer with; mirrors models.generation.GeneratedTrip
GENERATED_TRIP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "string",
            "description": "A brief enthusiastic summary of the trip vibe.",
        },
        "days": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "integer"},
                    "morning_cluster": {
                        "type": "string",
                        "description": "The main zone or neighborhood for the day",
                    },
                    "accommodation": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "description": {"type": "string"},
                            "reason": {"type": "string"},
                            "is_check_in": {"type": "boolean"},
                            "coordinates": _COORDINATES_SCHEMA,
                        },
                        "required": ["name", "description", "reason", "is_check_in", "coordinates"],
                    },
                    "activities": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "time": {"type": "string", "description": "24h time, e.g. 09:00"},
                                "name": {"type": "string"},
                                "notes": {"type": "string"},
                                "location_name": {"type": "string"},
                                "energy_score": {"type": "integer", "minimum": 1, "maximum": 10},
                                "duration_min": {"type": "integer"},
                                "website": {"type": "string"},
                                "coordinates": _COORDINATES_SCHEMA,
                            },
                            "required": [
                                "time",
                                "name",
                                "notes",
                                "location_name",
                                "coordinates",
                                "energy_score",
                                "duration_min",
                            ],
                        },
                    },
                },
                "required": ["day", "morning_cluster", "activities", "accommodation"],
            },
        },
    },
    "required": ["summary", "days"],
}


class ItineraryProvider(Protocol):
    """Protocol for structured itinerary generators."""

    async def generate(self, request: TripRequest) -> str:
        """Return the raw JSON document for ``request``.

        Raises:
            ConfigurationError: If provider credentials are missing.
            GenerationError: On network failures or an empty response.
        """
        ...


def build_prompt(request: TripRequest) -> str:
    """Instruction text for the generator."""
    prompt = (
        "You are an expert travel logistics planner. "
        f"Create a {request.days}-day trip to {request.destination} "
        f"starting on {request.start_date.isoformat()}. "
        f"Travel style: {request.chill_level.value}. "
        "Recommend a base camp hotel for every day, keeping hotel switches rare and "
        "marking the first night at each hotel with is_check_in. "
        "Group each day's activities into one neighborhood cluster. "
        "Give every activity an energy score from 1 to 10; the total per day must not "
        f"exceed {request.chill_level.daily_energy_cap}, and never place two activities "
        "scoring above 7 back to back. "
        "Provide latitude and longitude for every activity and accommodation, and a "
        "website URL when known. Answer only with JSON matching the schema."
    )
    if request.images:
        prompt += (
            " The user attached reference images: include places they show and match "
            "the itinerary's style to them."
        )
    return prompt


def image_parts(images: list[str]) -> list[dict[str, Any]]:
    """Chat content parts for data-URL images; anything else is skipped."""
    parts = []
    for image in images:
        if _DATA_URL.match(image):
            parts.append({"type": "image_url", "image_url": {"url": image}})
        else:
            logger.debug("Skipping reference image that is not a base64 data URL")
    return parts


class OpenAIItineraryGenerator:
    """Generates itineraries with OpenAI structured JSON output."""

    provider_name = "openai"

    def __init__(
        self, settings: Settings | None = None, client: AsyncOpenAI | None = None
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Create async OpenAI client on first use."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=get_openai_api_key(self.settings),
                timeout=self.settings.generation_timeout_s,
            )
        return self._client

    async def generate(self, request: TripRequest) -> str:
        client = self._get_client()
        content = [*image_parts(request.images), {"type": "text", "text": build_prompt(request)}]

        start_time = time.time()
        error_kind: ProviderErrorKind | None = None
        text: str | None = None
        try:
            response = await client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[{"role": "user", "content": content}],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "generated_trip", "schema": GENERATED_TRIP_SCHEMA},
                },
                temperature=self.settings.generation_temperature,
            )
            if response.choices:
                text = response.choices[0].message.content
            if not text or not text.strip():
                error_kind = "empty"
                raise GenerationError("No itinerary was generated. Please try again.")
        except APITimeoutError as e:
            error_kind = "timeout"
            raise GenerationError("The itinerary service timed out. Please try again.") from e
        except APIConnectionError as e:
            error_kind = "network"
            raise GenerationError("Unable to reach the itinerary service.") from e
        except APIStatusError as e:
            error_kind = "http_status"
            raise GenerationError(
                f"The itinerary service returned error {e.status_code}."
            ) from e
        except OpenAIError as e:
            error_kind = "payload"
            raise GenerationError(
                "The itinerary service returned an unusable response. Please try again."
            ) from e
        finally:
            latency_ms = int((time.time() - start_time) * 1000)
            record_provider_call(
                provider=self.provider_name,
                latency_ms=latency_ms,
                ok=error_kind is None and text is not None,
                error_kind=error_kind,
            )

        return text
