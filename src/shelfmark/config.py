# ABOUTME: Runtime settings for metadata sources and the HTTP client.
# ABOUTME: Defaults match the public endpoints; SHELFMARK_* environment variables override them.

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from shelfmark.metadata.amazon import AMAZON_URL
from shelfmark.metadata.google_books import GOOGLE_BOOKS_URL
from shelfmark.metadata.openlibrary import OPEN_LIBRARY_URL

ENV_PREFIX = "SHELFMARK_"


class ConfigError(ValueError):
    """Raised when an environment override cannot be parsed."""


class SearchSettings(BaseSettings):
    """Endpoints, limits, and HTTP behavior for the metadata providers.

    Each field reads SHELFMARK_<FIELD_NAME>; http_max_retries reads
    SHELFMARK_HTTP_RETRIES. Empty variables fall back to the default.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    google_books_url: str = GOOGLE_BOOKS_URL
    google_country: str = "US"
    google_max_results: int = Field(default=20, ge=1)
    google_api_key: str | None = None
    openlibrary_url: str = OPEN_LIBRARY_URL
    openlibrary_search_limit: int = Field(default=10, ge=1)
    amazon_url: str = AMAZON_URL
    http_timeout: float = Field(default=30.0, ge=0)
    http_max_retries: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(f"{ENV_PREFIX}HTTP_RETRIES", "http_max_retries"),
    )
    http_min_interval: float = Field(default=0.1, ge=0)


def _env_name(loc: tuple[int | str, ...]) -> str:
    name = str(loc[0]).upper() if loc else "?"
    return name if name.startswith(ENV_PREFIX) else f"{ENV_PREFIX}{name}"


def load_settings() -> SearchSettings:
    """Read settings from the environment.

    Raises:
        ConfigError: If a variable is malformed or out of range.
    """
    try:
        return SearchSettings()
    except ValidationError as exc:
        problems = "; ".join(f"{_env_name(err['loc'])}: {err['msg']}" for err in exc.errors())
        raise ConfigError(f"Invalid configuration: {problems}") from exc
