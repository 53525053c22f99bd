from .pages import STYLESHEET, render_connect_page, render_dashboard_page, render_sync_page

__all__ = [
    "STYLESHEET",
    "render_connect_page",
    "render_dashboard_page",
    "render_sync_page",
]
