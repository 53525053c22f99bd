"""Factories and assertion helpers for API tests."""

from __future__ import annotations

from typing import Any, Dict


def make_strava_event(**overrides: Any) -> Dict[str, Any]:
    """Return a canonical Strava webhook event."""

    event: Dict[str, Any] = {
        "aspect_type": "create",
        "event_time": 1717243200,
        "object_id": 1001,
        "object_type": "activity",
        "owner_id": 42,
        "subscription_id": 7,
        "updates": {},
    }
    event.update(overrides)
    return event


def assert_connect_page(html: str) -> None:
    assert "Connect your Strava account" in html
    assert 'href="/auth"' in html
