from __future__ import annotations

import logging
import time
from typing import Callable

from .ports import ActivityStorePort, StravaClientPort
from .tokens import TokenManager

logger = logging.getLogger(__name__)

LOOKBACK_SECONDS = 3 * 365 * 24 * 60 * 60


class ActivitySyncService:
    """Pulls the recent run history from Strava into the store."""

    def __init__(
        self,
        client: StravaClientPort,
        store: ActivityStorePort,
        tokens: TokenManager,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._store = store
        self._tokens = tokens
        self._clock = clock

    async def sync_activities(self) -> int:
        """Upsert every run from the last three years and return how many."""

        access_token = await self._tokens.get_valid_access_token()
        after = int(self._clock()) - LOOKBACK_SECONDS
        activities = await self._client.list_activities_after(after, access_token)
        runs = [activity for activity in activities if activity.is_run]
        self._store.upsert_activities(runs)
        logger.info(
            "Synced %d runs out of %d Strava activities", len(runs), len(activities)
        )
        return len(runs)
