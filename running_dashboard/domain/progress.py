"""Year-to-date progress against an annual distance goal."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List

from ..models.dashboard import ProgressMetrics, SeriesPoint, YearSeries
from ..models.strava import StravaActivity
from .calendar import day_of_year, days_in_year, parse_start_date

METERS_PER_KM = 1000.0


def activities_in_year(
    activities: Iterable[StravaActivity], year: int
) -> List[StravaActivity]:
    """Return the activities started in ``year``, oldest first."""

    dated = [(parse_start_date(a.start_date), a) for a in activities]
    in_year = [pair for pair in dated if pair[0].year == year]
    in_year.sort(key=lambda pair: pair[0])
    return [activity for _, activity in in_year]


def build_year_series(activities: Iterable[StravaActivity], year: int) -> YearSeries:
    """Accumulate distance in chronological order, seeded at day 0 / 0 km."""

    points = [SeriesPoint(day=0, cumulative_km=0.0)]
    cumulative_km = 0.0
    for activity in activities_in_year(activities, year):
        cumulative_km += activity.distance / METERS_PER_KM
        started = parse_start_date(activity.start_date).date()
        points.append(SeriesPoint(day=day_of_year(started), cumulative_km=cumulative_km))
    return YearSeries(year=year, points=points)


def comparison_years(current_year: int, count: int = 3) -> List[int]:
    """Return the current year followed by the preceding ones."""

    return [current_year - offset for offset in range(count)]


def prorated_target(goal_km: float, day: int, year_length: int) -> float:
    return goal_km * day / year_length


def compute_progress(
    activities: Iterable[StravaActivity],
    now: datetime,
    goal_km: float,
) -> ProgressMetrics:
    """Summarize the current year's distance against the prorated goal."""

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    year = now.year
    this_year = activities_in_year(activities, year)

    total_km = sum(a.distance for a in this_year) / METERS_PER_KM
    week_ago = now - timedelta(days=7)
    last_7_days_km = (
        sum(a.distance for a in this_year if parse_start_date(a.start_date) >= week_ago)
        / METERS_PER_KM
    )

    today = day_of_year(now.date())
    year_length = days_in_year(year)
    target_km = prorated_target(goal_km, today, year_length)

    return ProgressMetrics(
        year=year,
        goal_km=goal_km,
        total_km=total_km,
        target_km=target_km,
        delta_km=total_km - target_km,
        last_7_days_km=last_7_days_km,
        day_of_year=today,
        days_in_year=year_length,
    )
