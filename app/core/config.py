"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values that the refresh controller depends on (time
range, discovery size) are validated at load time.
"""

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.value_objects.time_range import TimeRange

# Upper bound of categories one discovery call may ask for.
MAX_DISCOVERY_SIZE = 100


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_overview rejects values the
    overview panel cannot work with.
    """

    # App
    app_name: str = "event-overview"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Aggregation API (group-by and histogram endpoints)
    aggregation_api_url: str = "http://localhost:5636"
    aggregation_api_timeout_seconds: float = 30.0

    # Overview panel
    discovery_field: str = "event_type"
    discovery_size: int = MAX_DISCOVERY_SIZE
    histogram_query_string: str = ""
    default_time_range: str = "24h"
    # Comma-separated event types whose series start hidden in the legend.
    default_hidden_event_types: str = "anomaly,stats,netflow"
    diagnostics_max_entries: int = 200
    refresh_on_startup: bool = True

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: Literal["console", "otlp", "none"] = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_overview(self) -> "Settings":
        """Validate overview panel settings.

        - discovery_size must be within 1..MAX_DISCOVERY_SIZE.
        - default_time_range must parse as a TimeRange token.
        - diagnostics_max_entries must be positive.
        """
        if not 1 <= self.discovery_size <= MAX_DISCOVERY_SIZE:
            raise ValueError(
                f"discovery_size must be between 1 and {MAX_DISCOVERY_SIZE}, "
                f"got: {self.discovery_size}"
            )
        try:
            TimeRange.parse(self.default_time_range)
        except ValueError as e:
            raise ValueError(
                f"default_time_range is invalid: {self.default_time_range!r} ({e})"
            ) from e
        if self.diagnostics_max_entries < 1:
            raise ValueError("diagnostics_max_entries must be at least 1")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self

    @property
    def default_hidden_types(self) -> list[str]:
        """Parsed default_hidden_event_types (blank entries dropped)."""
        return [
            t.strip() for t in self.default_hidden_event_types.split(",") if t.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
