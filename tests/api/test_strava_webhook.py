"""Strava webhook contract tests."""

from __future__ import annotations

import httpx
import pytest

from running_dashboard.models.strava import WebhookSubscription
from running_dashboard.settings import Settings
from running_dashboard.storage import ActivityStore
from running_dashboard.strava.application import FetchError

from tests.api.helpers import make_strava_event
from tests.builders import make_activity, make_token
from tests.conftest import FrozenClock
from tests.fakes import StravaClientFake

pytestmark = pytest.mark.asyncio


@pytest.fixture
def connected(store: ActivityStore, freeze_time: FrozenClock) -> ActivityStore:
    store.save_token(make_token(expires_at=int(freeze_time.timestamp()) + 3600))
    return store


async def test_webhook_verification(client: httpx.AsyncClient, settings: Settings) -> None:
    """Returns the challenge token when verification succeeds."""

    params = {
        "hub.mode": "subscribe",
        "hub.challenge": "abc",
        "hub.verify_token": settings.strava_verify_token,
    }

    response = await client.get("/webhook", params=params)

    assert response.status_code == 200
    assert response.json() == {"hub.challenge": "abc"}


@pytest.mark.parametrize(
    "params",
    [
        pytest.param(
            {"hub.mode": "subscribe", "hub.challenge": "abc", "hub.verify_token": "wrong"},
            id="wrong_token",
        ),
        pytest.param(
            {"hub.mode": "unsubscribe", "hub.challenge": "abc", "hub.verify_token": "verify-token"},
            id="wrong_mode",
        ),
        pytest.param({}, id="missing"),
    ],
)
async def test_webhook_verification_rejected(client: httpx.AsyncClient, params: dict) -> None:
    response = await client.get("/webhook", params=params)

    assert response.status_code == 403


async def test_create_event_is_stored(
    client: httpx.AsyncClient, connected: ActivityStore, strava_fake: StravaClientFake
) -> None:
    strava_fake.with_activities(make_activity(id=1001, name="Hill repeats"))

    response = await client.post("/webhook", json=make_strava_event())

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    stored = connected.get_activity(1001)
    assert stored is not None
    assert stored.name == "Hill repeats"


async def test_delete_event_removes_activity(
    client: httpx.AsyncClient, connected: ActivityStore
) -> None:
    connected.upsert_activity(make_activity(id=1001))

    response = await client.post("/webhook", json=make_strava_event(aspect_type="delete"))

    assert response.status_code == 200
    assert connected.get_activity(1001) is None


async def test_event_without_owner_is_processed(
    client: httpx.AsyncClient, connected: ActivityStore
) -> None:
    connected.upsert_activity(make_activity(id=1001))
    event = make_strava_event(aspect_type="delete")
    del event["owner_id"]

    response = await client.post("/webhook", json=event)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert connected.get_activity(1001) is None


async def test_processing_failure_is_still_acknowledged(
    client: httpx.AsyncClient, connected: ActivityStore, strava_fake: StravaClientFake
) -> None:
    strava_fake.fetch_error = FetchError("Fetch activity 1001 failed: 500")

    response = await client.post("/webhook", json=make_strava_event())

    assert response.status_code == 200
    assert connected.list_activities() == []


async def test_event_without_token_is_acknowledged(
    client: httpx.AsyncClient, store: ActivityStore
) -> None:
    response = await client.post("/webhook", json=make_strava_event(aspect_type="update"))

    assert response.status_code == 200
    assert store.list_activities() == []


@pytest.mark.parametrize(
    "content",
    [
        pytest.param(b"not json", id="not_json"),
        pytest.param(b'{"object_type": "activity"}', id="missing_fields"),
    ],
)
async def test_invalid_payload_is_rejected(client: httpx.AsyncClient, content: bytes) -> None:
    response = await client.post(
        "/webhook", content=content, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"detail": {"error": "Invalid payload"}}


async def test_register_creates_subscription(
    client: httpx.AsyncClient, strava_fake: StravaClientFake
) -> None:
    response = await client.post("/webhook/register")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "registered"
    assert body["subscription"]["callback_url"] == "http://testserver/webhook"
    assert strava_fake.last_call("create_subscription") == (
        "http://testserver/webhook",
        "verify-token",
    )


async def test_register_is_idempotent(
    client: httpx.AsyncClient, strava_fake: StravaClientFake
) -> None:
    strava_fake.subscription = WebhookSubscription(id=3, callback_url="https://old/webhook")

    response = await client.post("/webhook/register")

    assert response.status_code == 200
    assert response.json() == {
        "status": "already_registered",
        "subscription": {"id": 3, "callback_url": "https://old/webhook"},
    }
    strava_fake.assert_not_called("create_subscription")
