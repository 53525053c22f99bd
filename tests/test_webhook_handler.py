"""Incremental webhook ingestion."""

from __future__ import annotations

import pytest

from running_dashboard.models.strava import StravaEvent
from running_dashboard.storage import ActivityStore
from running_dashboard.strava.application import (
    FetchError,
    TokenManager,
    WebhookEventHandler,
)

from tests.builders import make_activity, make_token
from tests.conftest import FrozenClock
from tests.fakes import StravaClientFake

pytestmark = pytest.mark.asyncio


def make_event(**overrides) -> StravaEvent:
    payload = {
        "aspect_type": "create",
        "event_time": 1717243200,
        "object_id": 1001,
        "object_type": "activity",
        "owner_id": 42,
        "subscription_id": 7,
    }
    payload.update(overrides)
    return StravaEvent(**payload)


@pytest.fixture
def handler(
    strava_fake: StravaClientFake, store: ActivityStore, freeze_time: FrozenClock
) -> WebhookEventHandler:
    store.save_token(make_token(expires_at=int(freeze_time.timestamp()) + 3600))
    tokens = TokenManager(strava_fake, store, clock=freeze_time.timestamp)
    return WebhookEventHandler(strava_fake, store, tokens)


async def test_create_event_stores_run(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    strava_fake.with_activities(make_activity(id=1001, name="Lunch Run"))

    await handler.handle_event(make_event())

    stored = store.get_activity(1001)
    assert stored is not None
    assert stored.name == "Lunch Run"
    assert strava_fake.last_call("get_activity") == (1001, "stored-access")


async def test_update_event_overwrites_run(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    store.upsert_activity(make_activity(id=1001, name="Run", distance=5000))
    strava_fake.with_activities(make_activity(id=1001, name="Renamed", distance=5100))

    await handler.handle_event(make_event(aspect_type="update", updates={"title": "Renamed"}))

    stored = store.get_activity(1001)
    assert stored is not None
    assert (stored.name, stored.distance) == ("Renamed", 5100)


async def test_update_away_from_run_removes_row(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    store.upsert_activity(make_activity(id=1001))
    strava_fake.with_activities(make_activity(id=1001, type="Walk"))

    await handler.handle_event(make_event(aspect_type="update", updates={"type": "Walk"}))

    assert store.get_activity(1001) is None


async def test_create_for_other_sport_is_not_stored(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    strava_fake.with_activities(make_activity(id=1001, type="Ride"))

    await handler.handle_event(make_event())

    assert store.list_activities() == []


async def test_delete_event_removes_row_without_fetching(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    store.upsert_activity(make_activity(id=1001))

    await handler.handle_event(make_event(aspect_type="delete"))

    assert store.get_activity(1001) is None
    strava_fake.assert_not_called("get_activity")


async def test_delete_for_unknown_activity_is_silent(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    store.upsert_activity(make_activity(id=5))

    await handler.handle_event(make_event(aspect_type="delete", object_id=999))

    assert [a.id for a in store.list_activities()] == [5]
    assert strava_fake.calls == []


async def test_athlete_events_are_ignored(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    await handler.handle_event(
        make_event(object_type="athlete", aspect_type="update", updates={"authorized": "false"})
    )

    assert strava_fake.calls == []
    assert store.list_activities() == []


async def test_fetch_failure_propagates(
    handler: WebhookEventHandler, store: ActivityStore, strava_fake: StravaClientFake
) -> None:
    strava_fake.fetch_error = FetchError("Fetch activity 1001 failed: 500")

    with pytest.raises(FetchError):
        await handler.handle_event(make_event())

    assert store.list_activities() == []
