"""HTML pages served by the dashboard routes."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..domain.chart import render_chart
from ..domain.progress import build_year_series, comparison_years, compute_progress
from ..models.dashboard import ProgressMetrics
from ..models.strava import StravaActivity

AHEAD_COLOR = "#34a853"
BEHIND_COLOR = "#d93025"

STYLESHEET = """
* { box-sizing: border-box; }
body {
  margin: 0;
  font-family: system-ui, -apple-system, "Segoe UI", Roboto, Arial, sans-serif;
  color: #222;
  background: #f5f5f5;
}
body.dashboard { max-width: 1040px; margin: 0 auto; padding: 24px 20px; }
h1 { font-size: 24px; margin: 0 0 16px; }
.chart-container { background: white; border-radius: 8px; padding: 12px; }
.metrics-card { background: white; border-radius: 8px; padding: 16px; margin-top: 16px; }
.metrics-table { width: 100%; border-collapse: collapse; }
.metrics-table td { padding: 6px 0; font-size: 15px; }
.metric-label { color: #666; }
.metric-value { text-align: right; font-weight: 600; font-variant-numeric: tabular-nums; }
.footer { margin-top: 16px; font-size: 13px; }
.footer a { color: #666; }
body.connect { display: flex; min-height: 100vh; align-items: center; justify-content: center; }
.container { text-align: center; }
.btn {
  display: inline-block;
  padding: 12px 24px;
  border-radius: 6px;
  background: #FC4C02;
  color: white;
  font-weight: 600;
  text-decoration: none;
}
"""


def _page(title: str, body_class: str, body: str) -> str:
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title}</title>
  <link rel="stylesheet" href="/styles.css" />
</head>
<body class="{body_class}">
{body}
</body>
</html>
"""


def _metrics_table(metrics: ProgressMetrics) -> str:
    delta_color = AHEAD_COLOR if metrics.ahead_of_pace else BEHIND_COLOR
    delta_sign = "+" if metrics.ahead_of_pace else ""
    return f"""  <table class="metrics-table">
    <tr><td class="metric-label">Distance</td><td class="metric-value">{metrics.total_km:.1f} km</td></tr>
    <tr><td class="metric-label">Target</td><td class="metric-value">{metrics.target_km:.1f} km</td></tr>
    <tr><td class="metric-label">Delta</td><td class="metric-value" style="color:{delta_color}">{delta_sign}{metrics.delta_km:.1f} km</td></tr>
    <tr><td class="metric-label">Last 7 days</td><td class="metric-value">{metrics.last_7_days_km:.1f} km</td></tr>
  </table>"""


def render_dashboard_page(
    activities: Iterable[StravaActivity], now: datetime, goal_km: float
) -> str:
    """Compose the chart and metrics summary for the current year."""

    activities = list(activities)
    metrics = compute_progress(activities, now, goal_km)
    series = [build_year_series(activities, year) for year in comparison_years(metrics.year)]
    chart = render_chart(metrics.year, series, goal_km)

    body = f"""<h1>Running {metrics.year}</h1>
<div class="chart-container">
  {chart}
</div>
<div class="metrics-card">
{_metrics_table(metrics)}
</div>
<div class="footer">
  <a href="/sync">Sync all activities</a>
</div>"""
    return _page("Running Dashboard", "dashboard", body)


def render_connect_page() -> str:
    body = """<div class="container">
  <h1>Running Dashboard</h1>
  <p>Connect your Strava account to get started.</p>
  <a class="btn" href="/auth">Connect with Strava</a>
</div>"""
    return _page("Connect Strava", "connect", body)


def render_sync_page(count: int) -> str:
    body = f'<p>Synced {count} runs. <a href="/">Back to dashboard</a></p>'
    return _page("Sync complete", "dashboard", body)
