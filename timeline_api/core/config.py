"""
Central configuration loaded from environment variables.
All settings have defaults, so the service starts with no environment
variables set (open mode, standard clustering parameters).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ------------------------------------------------------------------ #
    # Service identity
    # ------------------------------------------------------------------ #
    app_name: str = "photo-timeline-api"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # ------------------------------------------------------------------ #
    # API authentication
    # Set API_KEY to a non-empty string to enable authentication.
    # Leave blank (default) to run in open / unauthenticated mode
    # (useful for local development and testing).
    # ------------------------------------------------------------------ #
    api_key: str = ""

    # ------------------------------------------------------------------ #
    # Request limits
    # ------------------------------------------------------------------ #
    max_photos_per_request: int = 10_000

    # ------------------------------------------------------------------ #
    # Timeline clustering
    # Epsilon values are minutes. When a request omits epsilon it is
    # estimated from the gap distribution and clamped to
    # [EPSILON_MIN_MINUTES, EPSILON_MAX_MINUTES].
    # ------------------------------------------------------------------ #
    default_min_points: int = 3
    epsilon_default_minutes: float = 60.0   # used for 0 or 1 photos
    epsilon_min_minutes: float = 30.0
    epsilon_max_minutes: float = 180.0
    epsilon_percentile: float = 0.75

    # ------------------------------------------------------------------ #
    # Logging
    # ------------------------------------------------------------------ #
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = True          # structured JSON logs in production

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @field_validator("api_key", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip() if v else ""

    @field_validator("epsilon_percentile")
    @classmethod
    def percentile_in_range(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError("EPSILON_PERCENTILE must be in [0, 1).")
        return v

    @model_validator(mode="after")
    def epsilon_bounds_ordered(self) -> "Settings":
        if self.epsilon_min_minutes <= 0:
            raise ValueError("EPSILON_MIN_MINUTES must be positive.")
        if self.epsilon_min_minutes > self.epsilon_max_minutes:
            raise ValueError(
                "EPSILON_MIN_MINUTES must not exceed EPSILON_MAX_MINUTES."
            )
        if self.default_min_points < 1:
            raise ValueError("DEFAULT_MIN_POINTS must be at least 1.")
        return self

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings singleton.
    The cache is reset between tests via `get_settings.cache_clear()`.
    """
    return Settings()
