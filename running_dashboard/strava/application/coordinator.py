from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List

from ...models.responses import SubscriptionStatus
from ...models.strava import StravaActivity, StravaEvent, TokenRecord
from .ports import ActivityStorePort, StravaClientPort
from .sync import ActivitySyncService
from .tokens import TokenManager
from .webhook import WebhookEventHandler

logger = logging.getLogger(__name__)


@dataclass
class DashboardData:
    connected: bool
    activities: List[StravaActivity] = field(default_factory=list)


class RunningDashboard:
    """Owns the athlete's stored state and serializes every operation on it.

    One instance exists per process. All store reads and writes go through
    the methods below, which run one at a time under ``_lock``; Strava calls
    made while holding the lock are awaited sequentially.
    """

    def __init__(
        self,
        client: StravaClientPort,
        store: ActivityStorePort,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._store = store
        self._lock = asyncio.Lock()
        self.tokens = TokenManager(client, store, clock=clock)
        self.sync_service = ActivitySyncService(client, store, self.tokens, clock=clock)
        self.webhook_handler = WebhookEventHandler(client, store, self.tokens)

    async def get_dashboard_data(self) -> DashboardData:
        async with self._lock:
            if not self._store.has_token():
                return DashboardData(connected=False)
            return DashboardData(connected=True, activities=self._store.list_activities())

    async def handle_oauth_callback(self, code: str) -> TokenRecord:
        async with self._lock:
            return await self.tokens.complete_authorization(code)

    async def handle_webhook_event(self, event: StravaEvent) -> None:
        async with self._lock:
            await self.webhook_handler.handle_event(event)

    async def sync(self) -> int:
        async with self._lock:
            return await self.sync_service.sync_activities()

    async def ensure_webhook_subscription(
        self, callback_url: str, verify_token: str
    ) -> SubscriptionStatus:
        """Register the push subscription unless Strava already has one."""

        existing = await self._client.get_subscription()
        if existing is not None:
            return SubscriptionStatus(status="already_registered", subscription=existing)
        subscription = await self._client.create_subscription(callback_url, verify_token)
        logger.info("Registered Strava webhook %s -> %s", subscription.id, callback_url)
        return SubscriptionStatus(status="registered", subscription=subscription)
