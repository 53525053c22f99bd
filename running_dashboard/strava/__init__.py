"""Strava integration package."""

from .application import RunningDashboard, TokenManager

__all__ = [
    "RunningDashboard",
    "TokenManager",
]
