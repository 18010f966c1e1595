"""
Centralised settings loader (pydantic-settings).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ────────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    database_url: str = Field(
        "sqlite+aiosqlite:///./food_calendar.db", validation_alias="DATABASE_URL"
    )
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # ─── calendar feed tokens ───────────────────────────────────────
    jwt_secret: str = Field("changeme", validation_alias="JWT_SECRET")
    feed_token_ttl_days: int = Field(365, validation_alias="FEED_TOKEN_TTL_DAYS")

    # ─── schedule generation ────────────────────────────────────────
    # new foods get this many days scheduled up front (≈ 3 months)
    schedule_horizon_days: int = Field(90, validation_alias="SCHEDULE_HORIZON_DAYS")
    max_range_days: int = Field(1095, validation_alias="MAX_RANGE_DAYS")

    # allow other env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
