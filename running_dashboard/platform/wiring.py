"""FastAPI dependency wiring for the dashboard services."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
from fastapi import Request

from ..storage import ActivityStore
from ..settings import Settings
from ..strava.application import RunningDashboard
from ..strava.infrastructure import create_strava_client_adapter


def build_running_dashboard(
    *, settings: Settings, http_client: httpx.AsyncClient
) -> RunningDashboard:
    client = create_strava_client_adapter(http_client=http_client, settings=settings)
    store = ActivityStore(settings.database_path)
    return RunningDashboard(client, store)


def provide_running_dashboard(request: Request) -> RunningDashboard:
    """Return the process-wide dashboard created by the application lifespan."""

    return request.app.state.running_dashboard


def provide_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = [
    "build_running_dashboard",
    "provide_now",
    "provide_running_dashboard",
]
