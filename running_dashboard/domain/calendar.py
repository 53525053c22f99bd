"""Calendar helpers shared by the progress and chart computations."""

from __future__ import annotations

from datetime import date, datetime, timezone


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(value: date) -> int:
    """Return the 1-based ordinal day of ``value`` within its year."""

    return (value - date(value.year, 1, 1)).days + 1


def parse_start_date(value: str) -> datetime:
    """Parse a Strava ISO-8601 timestamp into an aware UTC datetime.

    Strava reports ``start_date`` in UTC with a trailing ``Z``; naive values are
    assumed to be UTC as well.
    """

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
