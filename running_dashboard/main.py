from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .platform.wiring import build_running_dashboard
from .routes.auth import router as auth_router
from .routes.dashboard import router as dashboard_router
from .routes.webhook import router as webhook_router
from .settings import get_settings
from .strava.application import FetchError, NoTokenError, OAuthExchangeError
from .views import render_connect_page

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared Strava HTTP client and the dashboard for the process lifetime."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    async with httpx.AsyncClient() as http_client:
        app.state.running_dashboard = build_running_dashboard(
            settings=settings, http_client=http_client
        )
        logger.info("Running dashboard ready, database at %s", settings.database_path)
        yield


app: FastAPI = FastAPI(
    title="Running Dashboard",
    version="1.0.0",
    description="Tracks running distance from Strava against an annual goal",
    lifespan=lifespan,
)


@app.api_route("/healthz", methods=["GET", "HEAD"], include_in_schema=False)
async def healthz() -> dict[str, str]:
    """Lightweight endpoint used for health checks."""
    return {"status": "ok"}


@app.exception_handler(NoTokenError)
async def no_token_handler(request: Request, exc: NoTokenError) -> HTMLResponse:
    return HTMLResponse(render_connect_page(), status_code=401)


@app.exception_handler(OAuthExchangeError)
async def oauth_error_handler(request: Request, exc: OAuthExchangeError) -> JSONResponse:
    logger.exception("Strava rejected the token exchange", exc_info=exc)
    return JSONResponse(status_code=502, content={"detail": {"error": str(exc)}})


@app.exception_handler(FetchError)
async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    logger.exception("Strava request failed", exc_info=exc)
    return JSONResponse(status_code=502, content={"detail": {"error": str(exc)}})


for router in (
    dashboard_router,
    auth_router,
    webhook_router,
):
    app.include_router(router)
