"""Application configuration and settings."""

from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tripboard.exceptions import ConfigurationError

_BASE_DIR = Path(__file__).resolve().parents[1]
_ENV_FILE = _BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE, env_file_encoding="utf-8", extra="ignore"
    )

    # Generation provider
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key used for itinerary generation",
    )
    openai_model: str = Field(
        default="gpt-4o-mini", description="OpenAI model for itinerary generation"
    )
    generation_temperature: float = Field(
        default=0.4, description="Sampling temperature for itinerary generation"
    )
    generation_timeout_s: float = Field(
        default=60.0, description="Timeout for a single generation call"
    )

    # Place search provider
    photon_url: str = Field(
        default="https://photon.komoot.io/api/",
        description="Photon geocoder search endpoint",
    )
    photon_lang: str = Field(default="en", description="Result language for Photon")
    search_timeout_s: float = Field(
        default=10.0, description="Timeout for a single place search call"
    )

    # Autocomplete behaviour
    search_debounce_ms: int = Field(
        default=400, description="Quiescence period before a search fires"
    )
    search_min_query_length: int = Field(
        default=2, description="Shorter queries never reach the provider"
    )
    search_provider_limit: int = Field(
        default=15, description="Results requested from the provider"
    )
    search_result_cap: int = Field(
        default=10, description="Suggestions kept after filtering"
    )

    @field_validator("search_result_cap")
    @classmethod
    def _cap_not_above_limit(cls, value: int, info: ValidationInfo) -> int:
        """Keep the cap within what the provider is asked for."""
        limit = info.data.get("search_provider_limit")
        if limit is not None and value > limit:
            raise ValueError("search_result_cap must not exceed search_provider_limit")
        return value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_openai_api_key(settings: Settings | None = None) -> str:
    """Return a validated OpenAI API key or raise a helpful error."""
    settings = settings or get_settings()
    api_key = (settings.openai_api_key or "").strip()
    if not api_key or api_key.startswith("dummy-"):
        raise ConfigurationError(
            "Please set OPENAI_API_KEY in the environment (.env) "
            "to use AI itinerary generation."
        )
    return api_key
