"""Settings for the Telegram relay."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, PositiveFloat, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """Environment-driven configuration for the relay.

    Both Telegram secrets are optional here: their absence is reported by the
    relay as a configuration error at call time instead of failing at import.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    telegram_bot_token: Optional[SecretStr] = Field(None, alias="TELEGRAM_BOT_TOKEN", description="Bot API token")
    telegram_chat_id: Optional[str] = Field(None, alias="TELEGRAM_CHAT_ID", description="Destination channel/chat id")
    telegram_api_base: str = Field(
        "https://api.telegram.org",
        alias="TELEGRAM_API_BASE",
        description="Bot API base URL",
    )
    telegram_timeout_seconds: PositiveFloat = Field(
        10.0,
        alias="TELEGRAM_TIMEOUT_SECONDS",
        description="sendMessage request timeout in seconds",
    )

    @field_validator("telegram_chat_id")
    @classmethod
    def _blank_chat_id_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("telegram_api_base")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        base = v.strip().rstrip("/")
        if "://" not in base:
            raise ValueError("TELEGRAM_API_BASE must be an absolute URL.")
        return base


@lru_cache()
def get_relay_settings() -> RelaySettings:
    try:
        return RelaySettings()
    except ValidationError as exc:
        raise RuntimeError(f"Relay settings validation failed: {exc}") from exc


def reset_relay_settings_cache() -> None:
    get_relay_settings.cache_clear()  # type: ignore[attr-defined]
