from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from ...models.strava import StravaActivity, TokenRecord, WebhookSubscription
from ...settings import Settings
from ..application.ports import (
    FetchError,
    OAuthExchangeError,
    StravaClientPort,
    TokenRefreshError,
)

logger = logging.getLogger(__name__)

TOKEN_URL = "https://www.strava.com/oauth/token"
AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
API_BASE_URL = "https://www.strava.com/api/v3"
PAGE_SIZE = 200
TOKEN_FIELDS = ("access_token", "refresh_token", "expires_at")


class StravaClient(StravaClientPort):
    """HTTP client for the Strava OAuth and activity endpoints."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    async def exchange_code(self, code: str) -> TokenRecord:
        data = await self._post_token(
            {"code": code, "grant_type": "authorization_code"},
            error=OAuthExchangeError,
        )
        athlete = data.get("athlete") or {}
        return self._token_from_payload(data, athlete_id=athlete.get("id"))

    async def refresh_token(self, refresh_token: str) -> TokenRecord:
        data = await self._post_token(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"},
            error=TokenRefreshError,
        )
        return self._token_from_payload(data, athlete_id=None)

    async def get_activity(self, activity_id: int, access_token: str) -> StravaActivity:
        response = await self._http_client.get(
            f"{API_BASE_URL}/activities/{activity_id}",
            headers=self._bearer(access_token),
        )
        if not response.is_success:
            raise FetchError(f"Fetch activity {activity_id} failed: {response.status_code}")
        return StravaActivity.model_validate(response.json())

    async def list_activities_after(
        self, after: int, access_token: str
    ) -> List[StravaActivity]:
        """Walk the activity list one page at a time until a short page."""

        activities: List[StravaActivity] = []
        page = 1
        while True:
            response = await self._http_client.get(
                f"{API_BASE_URL}/athlete/activities",
                params={"after": after, "page": page, "per_page": PAGE_SIZE},
                headers=self._bearer(access_token),
            )
            if not response.is_success:
                raise FetchError(f"Fetch activities page {page} failed: {response.status_code}")
            batch = response.json()
            activities.extend(StravaActivity.model_validate(item) for item in batch)
            logger.debug("Fetched page %d with %d activities", page, len(batch))
            if len(batch) < PAGE_SIZE:
                return activities
            page += 1

    async def get_subscription(self) -> Optional[WebhookSubscription]:
        response = await self._http_client.get(
            f"{API_BASE_URL}/push_subscriptions",
            params=self._credentials(),
        )
        if not response.is_success:
            raise FetchError(f"Fetch push subscriptions failed: {response.status_code}")
        subscriptions = response.json()
        if not subscriptions:
            return None
        return WebhookSubscription.model_validate(subscriptions[0])

    async def create_subscription(
        self, callback_url: str, verify_token: str
    ) -> WebhookSubscription:
        payload = {
            **self._credentials(),
            "callback_url": callback_url,
            "verify_token": verify_token,
        }
        response = await self._http_client.post(
            f"{API_BASE_URL}/push_subscriptions", data=payload
        )
        if not response.is_success:
            raise FetchError(
                f"Create push subscription failed: {response.status_code} {response.text}"
            )
        return WebhookSubscription.model_validate(response.json())

    async def _post_token(
        self, grant: dict[str, Any], *, error: type[OAuthExchangeError]
    ) -> dict[str, Any]:
        payload = {**self._credentials(), **grant}
        response = await self._http_client.post(TOKEN_URL, json=payload)
        if not response.is_success:
            raise error(f"Token {grant['grant_type']} failed: {response.status_code}")
        data = response.json()
        missing = [key for key in TOKEN_FIELDS if not data.get(key)]
        if missing:
            raise error(f"Strava token response missing {', '.join(missing)}")
        return data

    def _credentials(self) -> dict[str, str]:
        return {
            "client_id": self._settings.strava_client_id,
            "client_secret": self._settings.strava_client_secret,
        }

    @staticmethod
    def _bearer(access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    @staticmethod
    def _token_from_payload(data: dict[str, Any], athlete_id: Optional[int]) -> TokenRecord:
        return TokenRecord(
            athlete_id=athlete_id,
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_at=int(data["expires_at"]),
        )


def create_strava_client_adapter(
    *, http_client: httpx.AsyncClient, settings: Settings
) -> StravaClient:
    return StravaClient(http_client, settings)


def build_authorize_url(settings: Settings, redirect_uri: str) -> str:
    """Return the Strava consent page URL that sends the athlete back to ``redirect_uri``."""

    params = {
        "client_id": settings.strava_client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": "read,activity:read_all",
        "approval_prompt": "auto",
    }
    return str(httpx.URL(AUTHORIZE_URL, params=params))
