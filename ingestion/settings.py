"""Configuration models for the feed aggregator."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, List, Optional

from pydantic import Field, PositiveFloat, PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ingestion.models.domain import SourceDescriptor


class Settings(BaseSettings):
    """Aggregator environment settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    feed_timeout_seconds: PositiveFloat = Field(
        8.0,
        alias="FEED_TIMEOUT_SECONDS",
        description="Hard per-source timeout (fetch + parse), seconds.",
    )
    feed_user_agent: str = Field(
        "CarIntelligenceRelay/1.0 (+feed aggregator)",
        alias="FEED_USER_AGENT",
        description="User-Agent header sent to feed hosts.",
    )
    summary_max_chars: PositiveInt = Field(280, alias="SUMMARY_MAX_CHARS", description="Summary truncation bound.")
    max_entries_per_source: PositiveInt = Field(
        30,
        alias="MAX_ENTRIES_PER_SOURCE",
        description="Upper bound of articles kept per source.",
    )
    car_sources: Optional[List[SourceDescriptor]] = Field(
        None,
        alias="CAR_SOURCES",
        description="JSON array overriding the built-in source registry.",
    )
    structlog_level: str = Field("INFO", alias="STRUCTLOG_LEVEL", description="Log level.")
    log_json: bool = Field(False, alias="LOG_JSON", description="Emit logs as JSON lines.")

    @field_validator("car_sources", mode="before")
    @classmethod
    def _parse_car_sources(cls, value: Any) -> Optional[List[Any]]:
        if value in (None, ""):
            return None
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("CAR_SOURCES must be a JSON array.") from exc
        if isinstance(value, list):
            return value
        raise ValueError("CAR_SOURCES must be a list.")

    @field_validator("car_sources")
    @classmethod
    def _validate_unique_sources(cls, value: Optional[List[SourceDescriptor]]) -> Optional[List[SourceDescriptor]]:
        if value is None:
            return None
        seen: set[str] = set()
        for source in value:
            if source.id in seen:
                raise ValueError(f"Duplicate source id in CAR_SOURCES: {source.id}")
            seen.add(source.id)
        return value

    @field_validator("summary_max_chars")
    @classmethod
    def _validate_summary_bound(cls, v: int) -> int:
        if v < 40 or v > 1000:
            raise ValueError("SUMMARY_MAX_CHARS must be between 40 and 1000.")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return the Settings instance built from the environment."""
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Environment validation failed: {exc}") from exc


def reset_settings_cache() -> None:
    """Clear the Settings cache (tests)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
