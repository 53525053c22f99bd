from __future__ import annotations

import logging
import time
from typing import Callable

from ...models.strava import TokenRecord
from .ports import (
    ActivityStorePort,
    NoTokenError,
    OAuthExchangeError,
    StravaClientPort,
    TokenRefreshError,
)

logger = logging.getLogger(__name__)

FRESHNESS_LEEWAY_SECONDS = 60


class TokenManager:
    """Keeps the stored Strava token set usable."""

    def __init__(
        self,
        client: StravaClientPort,
        store: ActivityStorePort,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._store = store
        self._clock = clock

    async def complete_authorization(self, code: str) -> TokenRecord:
        """Exchange an authorization code and persist the resulting token set."""

        token = await self._client.exchange_code(code)
        self._store.save_token(token)
        logger.info("Stored Strava tokens for athlete %s", token.athlete_id)
        return token

    async def get_valid_access_token(self) -> str:
        """Return an access token valid for at least another minute.

        Raises:
            NoTokenError: authorization has not been completed yet.
            TokenRefreshError: Strava rejected the stored refresh token. The
                stored token set is left untouched.
        """

        current = self._store.get_token()
        if current is None:
            raise NoTokenError("No Strava tokens stored")

        now = int(self._clock())
        if current.is_fresh(now, FRESHNESS_LEEWAY_SECONDS):
            return current.access_token

        logger.info("Refreshing Strava access token expiring at %s", current.expires_at)
        try:
            refreshed = await self._client.refresh_token(current.refresh_token)
        except TokenRefreshError:
            raise
        except OAuthExchangeError as exc:
            raise TokenRefreshError(str(exc)) from exc

        # The refresh response carries no athlete, keep the one from authorization.
        updated = refreshed.model_copy(update={"athlete_id": current.athlete_id})
        self._store.save_token(updated)
        return updated.access_token
