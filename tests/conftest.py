"""Shared test fixtures and doubles."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from running_dashboard import main
from running_dashboard.platform.wiring import provide_now, provide_running_dashboard
from running_dashboard.settings import Settings, get_settings
from running_dashboard.storage import ActivityStore
from running_dashboard.strava import RunningDashboard

from tests.fakes import StravaClientFake


class FrozenClock:
    """Mutable clock handed to the services instead of ``time.time``."""

    def __init__(self, current: datetime) -> None:
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    @property
    def current(self) -> datetime:
        return self._current

    def set(self, new_value: datetime) -> None:
        if new_value.tzinfo is None:
            new_value = new_value.replace(tzinfo=timezone.utc)
        self._current = new_value

    def advance(self, **delta: Any) -> None:
        self._current += timedelta(**delta)

    def timestamp(self) -> float:
        return self._current.timestamp()


@pytest.fixture
def freeze_time() -> FrozenClock:
    return FrozenClock(datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        strava_client_id="strava-client",
        strava_client_secret="strava-secret",
        strava_verify_token="verify-token",
        database_path=str(tmp_path / "running.db"),
        annual_goal_km=1100.0,
    )


@pytest.fixture
def store(settings: Settings) -> ActivityStore:
    return ActivityStore(settings.database_path)


@pytest.fixture
def strava_fake() -> StravaClientFake:
    return StravaClientFake()


@pytest.fixture
def running_dashboard(
    strava_fake: StravaClientFake, store: ActivityStore, freeze_time: FrozenClock
) -> RunningDashboard:
    return RunningDashboard(strava_fake, store, clock=freeze_time.timestamp)


@pytest.fixture
def app(
    settings: Settings,
    running_dashboard: RunningDashboard,
    freeze_time: FrozenClock,
) -> Iterator[FastAPI]:
    """Configured FastAPI application instance for integration tests."""

    app = main.app
    overrides = {
        get_settings: lambda: settings,
        provide_running_dashboard: lambda: running_dashboard,
        provide_now: lambda: freeze_time.current,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield app
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Async HTTP client bound to the FastAPI app."""

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as api_client:
        yield api_client
