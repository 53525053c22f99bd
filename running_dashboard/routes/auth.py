from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from ..platform.wiring import provide_running_dashboard
from ..settings import Settings, get_settings
from ..strava import RunningDashboard
from ..strava.infrastructure import build_authorize_url

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()


@router.get("/auth")
async def start_authorization(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    redirect_uri = str(request.url_for("oauth_callback"))
    return RedirectResponse(build_authorize_url(settings, redirect_uri), status_code=302)


@router.get("/auth/callback", name="oauth_callback")
async def oauth_callback(
    code: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    dashboard: RunningDashboard = Depends(provide_running_dashboard),
) -> RedirectResponse:
    if error:
        logger.warning("Strava authorization was not granted: %s", error)
    if not code:
        raise HTTPException(status_code=400, detail={"error": "Missing code"})
    await dashboard.handle_oauth_callback(code)
    return RedirectResponse("/", status_code=302)
