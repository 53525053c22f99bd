"""Application layer for the Strava integration."""

from .coordinator import DashboardData, RunningDashboard
from .ports import (
    ActivityStorePort,
    FetchError,
    NoTokenError,
    OAuthExchangeError,
    StravaClientPort,
    StravaError,
    TokenRefreshError,
)
from .sync import ActivitySyncService
from .tokens import TokenManager
from .webhook import WebhookEventHandler

__all__ = [
    "ActivityStorePort",
    "ActivitySyncService",
    "DashboardData",
    "FetchError",
    "NoTokenError",
    "OAuthExchangeError",
    "RunningDashboard",
    "StravaClientPort",
    "StravaError",
    "TokenManager",
    "TokenRefreshError",
    "WebhookEventHandler",
]
