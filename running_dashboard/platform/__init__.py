"""Framework glue shared by the routers."""

from .wiring import build_running_dashboard, provide_now, provide_running_dashboard

__all__ = [
    "build_running_dashboard",
    "provide_now",
    "provide_running_dashboard",
]
