from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Hosting environments define upper-case names (e.g. ``STRAVA_CLIENT_ID``),
    # so matching is case-insensitive.
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    strava_client_id: str
    strava_client_secret: str
    # Existing deployments export STRAVA_WEBHOOK_VERIFY_TOKEN.
    strava_verify_token: str = Field(
        validation_alias=AliasChoices("strava_verify_token", "strava_webhook_verify_token"),
    )
    database_path: str = "running.db"
    annual_goal_km: float = 1100.0
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
