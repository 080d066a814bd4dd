"""Contribution-style calendar heatmap of daily spending."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from . import theme
from .theme import Rgb, Span, Style
from .types import PeriodSummary

MIN_WIDTH = 60
"""Minimum inner width needed to draw the grid."""

MIN_HEIGHT = 10
"""Minimum inner height needed to draw the grid."""

LABEL_COL = 5
"""Width of the weekday label column."""

INTENSITY_LEVELS = 4
"""Number of intensity buckets, excluding empty days."""

CELL_WIDTH = 2

_MONTHS = ("", "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_DAY_LABELS = ("Mon", "", "Wed", "", "Fri", "", "")
_DIM_STEPS = {0: 0.0, 1: 0.25, 2: 0.50, 3: 0.75}

TOO_SMALL_MESSAGE = "Terminal too small for heatmap"


@dataclass
class HeatmapDay:
    """Spending for one day and the API provider that dominated it."""

    date: date
    total_cost: float
    dominant_provider: str


def build_heatmap_data(
    daily_summaries: Iterable[PeriodSummary],
    provider_of: Callable[[str], str],
) -> list[HeatmapDay]:
    """Build heatmap days from daily summaries.

    ``provider_of`` maps a raw model name to its API provider; the provider
    with the highest summed cost becomes the day's dominant provider.
    """
    days = []
    for summary in daily_summaries:
        provider_cost: dict[str, float] = {}
        for usage in summary.models:
            provider = provider_of(usage.effective_raw_model())
            provider_cost[provider] = provider_cost.get(provider, 0.0) + usage.cost_usd
        dominant = max(provider_cost, key=provider_cost.__getitem__, default="")
        days.append(HeatmapDay(summary.date, summary.total_cost, dominant))
    return days


def monday_of_week(day: date) -> date:
    """The Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def weeks_between(start: date, end: date) -> int:
    """Whole weeks from ``start`` to ``end``; zero if ``end`` is earlier."""
    return max((end - start).days, 0) // 7


def log_thresholds(max_cost: float) -> tuple[float, float, float, float]:
    """Lower bounds of the four intensity levels, each about 3x the previous."""
    if max_cost <= 0.0:
        return (0.0, 0.0, 0.0, 0.0)
    return (0.001, max_cost / 27.0, max_cost / 9.0, max_cost / 3.0)


def intensity_level(cost: float, thresholds: Sequence[float]) -> int:
    """Map a cost to an intensity level 1-4, or 0 for no cost."""
    if cost <= 0.0:
        return 0
    for level in range(len(thresholds), 0, -1):
        if cost >= thresholds[level - 1]:
            return level
    return 1


def dim_color(full: Rgb, level: int) -> Rgb:
    """Blend from the surface colour toward ``full`` by intensity level."""
    return theme.lerp_color(theme.SURFACE, full, _DIM_STEPS.get(level, 1.0))


def build_month_labels(start: date, num_weeks: int, cell_width: int) -> list[Span]:
    """Month name spans positioned above the week columns they begin."""
    spans: list[Span] = []
    last_month = None
    col = 0
    for week in range(num_weeks):
        month = (start + timedelta(weeks=week)).month
        if month == last_month:
            continue
        last_month = month
        label = _MONTHS[month]
        target_col = week * cell_width
        if target_col > col:
            spans.append(Span(" " * (target_col - col), theme.text()))
            col = target_col
        spans.append(Span(label, theme.text_dim()))
        col += len(label)
    return spans


def _cell(day: date, today: date, by_date: dict[date, HeatmapDay], thresholds) -> Span:
    if day > today:
        return Span("  ", Style())
    entry = by_date.get(day)
    if entry is None:
        return Span("\u2022 ", Style(fg=theme.BORDER))
    level = intensity_level(entry.total_cost, thresholds)
    color = dim_color(theme.provider_color(entry.dominant_provider), level)
    return Span("\u2588\u2588", Style(fg=color))


def render_lines(
    heatmap_data: Sequence[HeatmapDay],
    width: int,
    height: int,
    today: date,
) -> list[list[Span]]:
    """Lay out the heatmap for an area of ``width`` x ``height`` cells.

    Returns one list of spans per line: a month label row, then one row per
    weekday covering the last 52 weeks plus the current one. Areas that are
    too small get a single message line.
    """
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        return [[Span(TOO_SMALL_MESSAGE, theme.text_dim())]]

    start = monday_of_week(today) - timedelta(weeks=52)
    num_weeks = weeks_between(start, today) + 1

    by_date = {day.date: day for day in heatmap_data}
    max_cost = max((day.total_cost for day in heatmap_data), default=0.0)
    thresholds = log_thresholds(max(max_cost, 0.0))

    max_visible_weeks = max(width - LABEL_COL, 0) // CELL_WIDTH
    visible_weeks = min(num_weeks, max_visible_weeks)
    display_start = start + timedelta(weeks=num_weeks - visible_weeks)

    lines = [
        [Span(" " * LABEL_COL, theme.text())]
        + build_month_labels(display_start, visible_weeks, CELL_WIDTH)
    ]
    label_style = Style(fg=theme.FG).add_modifier(theme.Modifier.BOLD)
    for day_idx, label in enumerate(_DAY_LABELS):
        if len(lines) >= height:
            break
        row = [Span(label.ljust(LABEL_COL), label_style)]
        row.extend(
            _cell(display_start + timedelta(weeks=week, days=day_idx), today, by_date, thresholds)
            for week in range(visible_weeks)
        )
        lines.append(row)
    return lines