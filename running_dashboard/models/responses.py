from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .strava import WebhookSubscription


class OperationStatus(BaseModel):
    """Normalized status payload returned by mutation endpoints."""

    status: str = Field(..., description="Short status indicator for the operation outcome.")


class SubscriptionStatus(BaseModel):
    """Outcome of a webhook registration request."""

    status: Literal["already_registered", "registered"]
    subscription: WebhookSubscription
