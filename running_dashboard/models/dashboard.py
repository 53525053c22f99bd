from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class SeriesPoint(BaseModel):
    day: int
    cumulative_km: float


class YearSeries(BaseModel):
    """Cumulative distance per day-of-year for a single calendar year."""

    year: int
    points: List[SeriesPoint] = Field(default_factory=list)

    @property
    def drawable(self) -> bool:
        return len(self.points) >= 2


class ProgressMetrics(BaseModel):
    """Year-to-date distance compared with a prorated annual goal."""

    year: int
    goal_km: float
    total_km: float
    target_km: float
    delta_km: float
    last_7_days_km: float
    day_of_year: int
    days_in_year: int

    @property
    def ahead_of_pace(self) -> bool:
        return self.delta_km >= 0
