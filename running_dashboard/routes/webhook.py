from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from ..models.responses import OperationStatus, SubscriptionStatus
from ..models.strava import StravaEvent
from ..platform.wiring import provide_running_dashboard
from ..settings import Settings, get_settings
from ..strava import RunningDashboard

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()


@router.get("/webhook", include_in_schema=False)
async def verify_subscription(
    hub_mode: str = Query("", alias="hub.mode"),
    hub_challenge: str = Query("", alias="hub.challenge"),
    hub_verify_token: str = Query("", alias="hub.verify_token"),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    if hub_mode != "subscribe" or hub_verify_token != settings.strava_verify_token:
        raise HTTPException(status_code=403, detail={"error": "Forbidden"})
    return {"hub.challenge": hub_challenge}


async def process_event(dashboard: RunningDashboard, event: StravaEvent) -> None:
    """Apply a webhook event after the delivery has been acknowledged.

    Strava does not learn about failures here and will not redeliver, so they
    are only logged.
    """

    try:
        await dashboard.handle_webhook_event(event)
    except Exception:
        logger.exception("Error processing Strava webhook event: %s", event.model_dump())


@router.post("/webhook", name="receive_event", include_in_schema=False)
async def receive_event(
    request: Request,
    background_tasks: BackgroundTasks,
    dashboard: RunningDashboard = Depends(provide_running_dashboard),
) -> OperationStatus:
    body = await request.body()

    try:
        event = StravaEvent.model_validate(json.loads(body))
    except (json.JSONDecodeError, ValidationError):
        logger.exception("Invalid Strava webhook payload: %s", body.decode("utf-8", "replace"))
        raise HTTPException(status_code=400, detail={"error": "Invalid payload"})

    logger.info(
        "Received Strava %s %s event for %s", event.object_type, event.aspect_type, event.object_id
    )
    background_tasks.add_task(process_event, dashboard, event)
    return OperationStatus(status="ok")


@router.post("/webhook/register", response_model=SubscriptionStatus)
async def register_webhook(
    request: Request,
    dashboard: RunningDashboard = Depends(provide_running_dashboard),
    settings: Settings = Depends(get_settings),
) -> SubscriptionStatus:
    callback_url = str(request.url_for("receive_event"))
    return await dashboard.ensure_webhook_subscription(
        callback_url, settings.strava_verify_token
    )
