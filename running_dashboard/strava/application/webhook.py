from __future__ import annotations

import logging

from ...models.strava import ACTIVITY_OBJECT_TYPE, StravaEvent
from .ports import ActivityStorePort, StravaClientPort
from .tokens import TokenManager

logger = logging.getLogger(__name__)


class WebhookEventHandler:
    """Applies Strava push events to the stored activities."""

    def __init__(
        self,
        client: StravaClientPort,
        store: ActivityStorePort,
        tokens: TokenManager,
    ) -> None:
        self._client = client
        self._store = store
        self._tokens = tokens

    async def handle_event(self, event: StravaEvent) -> None:
        if event.object_type != ACTIVITY_OBJECT_TYPE:
            logger.debug("Ignoring Strava %s event", event.object_type)
            return

        activity_id = event.object_id
        aspect = event.aspect_type

        if aspect == "delete":
            removed = self._store.delete_activity(activity_id)
            logger.info("Deleted activity %s (present=%s)", activity_id, removed)
            return

        if aspect not in {"create", "update"}:
            logger.warning("Ignoring unknown Strava aspect %r for %s", aspect, activity_id)
            return

        access_token = await self._tokens.get_valid_access_token()
        activity = await self._client.get_activity(activity_id, access_token)

        if not activity.is_run:
            # The type may have changed away from Run since it was stored.
            self._store.delete_activity(activity_id)
            logger.info("Activity %s is a %s, not tracked", activity_id, activity.type)
            return

        self._store.upsert_activity(activity)
        logger.info("Stored activity %s from %s event", activity_id, aspect)
