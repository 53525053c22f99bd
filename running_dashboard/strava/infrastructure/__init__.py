"""Infrastructure adapters for the Strava integration."""

from .client import StravaClient, build_authorize_url, create_strava_client_adapter

__all__ = ["StravaClient", "build_authorize_url", "create_strava_client_adapter"]
