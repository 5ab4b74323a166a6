"""Configuration settings using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ExtractionSettings(BaseSettings):
    """Heuristic thresholds shared by every field extractor.

    These are tuning knobs for mis-segmented free text, not clinical rules.
    """

    # A header tail at or above this length is treated as prose, not a room.
    room_max_length: int = 15
    # Problem titles at or above this length are assumed to be stray prose.
    problem_max_length: int = 60
    critical_lab_display_limit: int = 3
    # More problems than this bumps a patient to high acuity.
    acuity_problem_threshold: int = 4
    key_lab_limit: int = 2

    model_config = {"env_prefix": "SIGNOUT_", "extra": "ignore"}


class ApiSettings(BaseSettings):
    """Settings for the HTTP surface."""

    title: str = "Signout Census API"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    max_document_chars: int = 500_000

    model_config = {"env_prefix": "SIGNOUT_API_", "extra": "ignore"}


class LoggingSettings(BaseSettings):
    """Settings for log output."""

    level: str = "INFO"
    structured: bool = True

    model_config = {"env_prefix": "SIGNOUT_LOG_", "extra": "ignore"}

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_extraction_settings() -> ExtractionSettings:
    return ExtractionSettings()


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    return ApiSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()
