"""Ports and errors for the Strava application layer."""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ...models.strava import StravaActivity, TokenRecord, WebhookSubscription


class StravaError(RuntimeError):
    """Base class for failures talking to Strava or its stored credentials."""


class NoTokenError(StravaError):
    """Raised when no token set is stored because authorization never completed."""


class OAuthExchangeError(StravaError):
    """Raised when Strava rejects a token exchange."""


class TokenRefreshError(OAuthExchangeError):
    """Raised when Strava rejects a refresh token exchange."""


class FetchError(StravaError):
    """Raised when a Strava API call returns a non-success response."""


@runtime_checkable
class StravaClientPort(Protocol):
    """Port that exposes the Strava client behaviour used by the application."""

    async def exchange_code(self, code: str) -> TokenRecord:
        """Trade an authorization code for a token set."""

    async def refresh_token(self, refresh_token: str) -> TokenRecord:
        """Trade a refresh token for a new token set."""

    async def get_activity(self, activity_id: int, access_token: str) -> StravaActivity:
        """Return the detail payload for a single activity."""

    async def list_activities_after(
        self, after: int, access_token: str
    ) -> List[StravaActivity]:
        """Return every activity started after the ``after`` epoch timestamp."""

    async def get_subscription(self) -> Optional[WebhookSubscription]:
        """Return the existing push subscription, if any."""

    async def create_subscription(
        self, callback_url: str, verify_token: str
    ) -> WebhookSubscription:
        """Register a push subscription pointing at ``callback_url``."""


@runtime_checkable
class ActivityStorePort(Protocol):
    """Port for the durable activity and token storage."""

    def upsert_activity(self, activity: StravaActivity) -> None:
        ...

    def upsert_activities(self, activities: List[StravaActivity]) -> None:
        ...

    def delete_activity(self, strava_id: int) -> bool:
        ...

    def list_activities(self) -> List[StravaActivity]:
        ...

    def get_token(self) -> Optional[TokenRecord]:
        ...

    def save_token(self, token: TokenRecord) -> None:
        ...

    def has_token(self) -> bool:
        ...


__all__ = [
    "ActivityStorePort",
    "FetchError",
    "NoTokenError",
    "OAuthExchangeError",
    "StravaClientPort",
    "StravaError",
    "TokenRefreshError",
]
