from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

RUN_TYPE = "Run"
ACTIVITY_OBJECT_TYPE = "activity"


class StravaActivity(BaseModel):
    """Subset of fields returned by the Strava activity endpoints."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    distance: float = Field(0.0, ge=0)
    moving_time: int = Field(0, ge=0)
    start_date: str
    type: str = ""

    @property
    def is_run(self) -> bool:
        return self.type == RUN_TYPE


class TokenRecord(BaseModel):
    """The single stored OAuth token set."""

    athlete_id: Optional[int] = None
    access_token: str
    refresh_token: str
    expires_at: int = Field(..., description="Absolute expiry as epoch seconds.")

    def is_fresh(self, now: int, leeway: int = 60) -> bool:
        return self.expires_at > now + leeway


class StravaEvent(BaseModel):
    """Payload sent by the Strava webhook."""

    aspect_type: str
    object_id: int
    object_type: str
    owner_id: Optional[int] = None
    event_time: Optional[int] = None
    subscription_id: Optional[int] = None
    updates: Dict[str, Any] | None = None


class WebhookSubscription(BaseModel):
    """Push subscription registered with Strava."""

    model_config = ConfigDict(extra="allow")

    id: int
    callback_url: Optional[str] = None
