from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response

from ..platform.wiring import provide_now, provide_running_dashboard
from ..settings import Settings, get_settings
from ..strava import RunningDashboard
from ..views import STYLESHEET, render_connect_page, render_dashboard_page, render_sync_page

router: APIRouter = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def show_dashboard(
    dashboard: RunningDashboard = Depends(provide_running_dashboard),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(provide_now),
) -> HTMLResponse:
    data = await dashboard.get_dashboard_data()
    if not data.connected:
        return HTMLResponse(render_connect_page())
    return HTMLResponse(
        render_dashboard_page(data.activities, now, settings.annual_goal_km)
    )


@router.get("/sync", response_class=HTMLResponse)
async def sync_activities(
    dashboard: RunningDashboard = Depends(provide_running_dashboard),
) -> HTMLResponse:
    count = await dashboard.sync()
    return HTMLResponse(render_sync_page(count))


@router.get("/styles.css", include_in_schema=False)
async def stylesheet() -> Response:
    return Response(STYLESHEET, media_type="text/css")
