"""Pure progress and chart computations."""

from .calendar import day_of_year, days_in_year, is_leap_year, parse_start_date
from .chart import render_chart, y_axis_max
from .progress import build_year_series, comparison_years, compute_progress

__all__ = [
    "build_year_series",
    "comparison_years",
    "compute_progress",
    "day_of_year",
    "days_in_year",
    "is_leap_year",
    "parse_start_date",
    "render_chart",
    "y_axis_max",
]
