"""SVG line chart comparing cumulative distance across years."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from ..models.dashboard import YearSeries

WIDTH = 1000
HEIGHT = 500
PAD_TOP = 30
PAD_RIGHT = 30
PAD_BOTTOM = 40
PAD_LEFT = 60

X_DAYS = 365
Y_TICKS = 5

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_STARTS = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365]

GOAL_COLOR = "#999"


@dataclass(frozen=True)
class LineStyle:
    color: str
    width: float
    opacity: float


CURRENT_STYLE = LineStyle("#FC4C02", 2.5, 1.0)
PREVIOUS_STYLE = LineStyle("#1a73e8", 1.5, 0.7)
EARLIER_STYLE = LineStyle("#34a853", 1.5, 0.7)
DEFAULT_STYLE = LineStyle("#888", 1.0, 0.5)


@dataclass(frozen=True)
class ChartFrame:
    """Maps (day, km) values onto the fixed SVG plot area."""

    y_max: float

    @property
    def plot_width(self) -> int:
        return WIDTH - PAD_LEFT - PAD_RIGHT

    @property
    def plot_height(self) -> int:
        return HEIGHT - PAD_TOP - PAD_BOTTOM

    def x(self, day: float) -> float:
        # Day 366 of a leap year is pinned to the last gridline.
        day = min(day, X_DAYS)
        return PAD_LEFT + (day / X_DAYS) * self.plot_width

    def y(self, km: float) -> float:
        return PAD_TOP + self.plot_height - (km / self.y_max) * self.plot_height


def y_axis_max(goal_km: float, series: Iterable[YearSeries]) -> float:
    """Round the largest plotted value up to the next multiple of 100."""

    peak = max(
        [goal_km] + [p.cumulative_km for s in series for p in s.points]
    )
    rounded = math.ceil(peak / 100) * 100
    return rounded or 100


def year_styles(current_year: int, years: Iterable[int]) -> Dict[int, LineStyle]:
    styles: Dict[int, LineStyle] = {}
    for year in sorted(years):
        if year == current_year:
            styles[year] = CURRENT_STYLE
        elif year == current_year - 1:
            styles[year] = PREVIOUS_STYLE
        elif year < current_year - 1:
            styles[year] = EARLIER_STYLE
    return styles


def series_path(series: YearSeries, frame: ChartFrame) -> str:
    commands = []
    for index, point in enumerate(series.points):
        op = "M" if index == 0 else "L"
        commands.append(f"{op}{frame.x(point.day):.1f},{frame.y(point.cumulative_km):.1f}")
    return " ".join(commands)


def _grid(frame: ChartFrame) -> List[str]:
    parts = []
    for i in range(Y_TICKS + 1):
        value = frame.y_max / Y_TICKS * i
        y_pos = frame.y(value)
        parts.append(
            f'<line x1="{PAD_LEFT}" y1="{y_pos:.1f}" x2="{WIDTH - PAD_RIGHT}" y2="{y_pos:.1f}" '
            'stroke="#e0e0e0" stroke-width="1"/>'
        )
        parts.append(
            f'<text x="{PAD_LEFT - 8}" y="{y_pos + 4:.1f}" text-anchor="end" '
            f'font-size="11" fill="#666">{round(value)}</text>'
        )
    return parts


def _month_labels(frame: ChartFrame) -> List[str]:
    parts = []
    for i, month in enumerate(MONTHS):
        mid = (MONTH_STARTS[i] + MONTH_STARTS[i + 1]) / 2
        parts.append(
            f'<text x="{frame.x(mid):.1f}" y="{HEIGHT - 8}" text-anchor="middle" '
            f'font-size="11" fill="#666">{month}</text>'
        )
    return parts


def _legend(current_year: int, styles: Dict[int, LineStyle], goal_km: float) -> List[str]:
    items = [(str(current_year), CURRENT_STYLE.color, "")]
    for year in sorted((y for y in styles if y != current_year), reverse=True):
        items.append((str(year), styles[year].color, ""))
    items.append((f"Goal ({goal_km:,.0f}km)", GOAL_COLOR, "6,4"))

    lx = WIDTH - PAD_RIGHT - 120
    parts = []
    for i, (label, color, dash) in enumerate(items):
        ly = PAD_TOP + 10 + i * 18
        dash_attr = f' stroke-dasharray="{dash}"' if dash else ""
        parts.append(
            f'<line x1="{lx}" y1="{ly}" x2="{lx + 20}" y2="{ly}" stroke="{color}" '
            f'stroke-width="2"{dash_attr}/>'
        )
        parts.append(
            f'<text x="{lx + 26}" y="{ly + 4}" font-size="11" fill="#333">{label}</text>'
        )
    return parts


def render_chart(
    current_year: int, series: Sequence[YearSeries], goal_km: float
) -> str:
    """Render the year comparison chart as an inline SVG document."""

    frame = ChartFrame(y_max=y_axis_max(goal_km, series))
    styles = year_styles(current_year, (s.year for s in series))

    lines = []
    for year_series in series:
        if not year_series.drawable:
            continue
        style = styles.get(year_series.year, DEFAULT_STYLE)
        lines.append(
            f'<path d="{series_path(year_series, frame)}" fill="none" stroke="{style.color}" '
            f'stroke-width="{style.width}" opacity="{style.opacity}"/>'
        )

    goal_line = (
        f'<line x1="{frame.x(0):.1f}" y1="{frame.y(0):.1f}" x2="{frame.x(X_DAYS):.1f}" '
        f'y2="{frame.y(goal_km):.1f}" stroke="{GOAL_COLOR}" stroke-width="1.5" '
        'stroke-dasharray="6,4"/>'
    )
    axes = [
        f'<line x1="{PAD_LEFT}" y1="{PAD_TOP}" x2="{PAD_LEFT}" y2="{HEIGHT - PAD_BOTTOM}" '
        'stroke="#ccc" stroke-width="1"/>',
        f'<line x1="{PAD_LEFT}" y1="{HEIGHT - PAD_BOTTOM}" x2="{WIDTH - PAD_RIGHT}" '
        f'y2="{HEIGHT - PAD_BOTTOM}" stroke="#ccc" stroke-width="1"/>',
    ]

    body = "".join(
        [f'<rect width="{WIDTH}" height="{HEIGHT}" fill="white" rx="8"/>']
        + _grid(frame)
        + _month_labels(frame)
        + [goal_line]
        + lines
        + _legend(current_year, styles, goal_km)
        + axes
    )
    return (
        f'<svg viewBox="0 0 {WIDTH} {HEIGHT}" xmlns="http://www.w3.org/2000/svg" '
        f'style="width:100%;height:auto">{body}</svg>'
    )
