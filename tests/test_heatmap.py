from datetime import date, timedelta

import pytest

from tokenwatch import heatmap, theme
from tokenwatch.types import ModelUsage, PeriodSummary

TODAY = date(2026, 3, 10)  # a Tuesday


def _provider_of(raw_model: str) -> str:
    return raw_model.split(".")[0]


def test_build_heatmap_data_picks_dominant_provider():
    summary = PeriodSummary(
        date=TODAY,
        label="day",
        models=[
            ModelUsage(model="a", raw_model="Anthropic.a", cost_usd=2.0),
            ModelUsage(model="b", raw_model="OpenAI.b", cost_usd=1.5),
            ModelUsage(model="c", raw_model="OpenAI.c", cost_usd=1.0),
        ],
        total_cost=4.5,
    )
    days = heatmap.build_heatmap_data([summary], _provider_of)
    assert len(days) == 1
    assert days[0].date == TODAY
    assert days[0].total_cost == 4.5
    assert days[0].dominant_provider == "OpenAI"


def test_build_heatmap_data_empty_models():
    summary = PeriodSummary(date=TODAY, label="day")
    days = heatmap.build_heatmap_data([summary], _provider_of)
    assert days[0].dominant_provider == ""


def test_build_heatmap_data_uses_model_when_raw_empty():
    seen = []
    summary = PeriodSummary(
        date=TODAY, label="d", models=[ModelUsage(model="Meta.x", cost_usd=1.0)]
    )
    days = heatmap.build_heatmap_data([summary], lambda m: seen.append(m) or "Meta")
    assert seen == ["Meta.x"]
    assert days[0].dominant_provider == "Meta"


@pytest.mark.parametrize("offset", range(7))
def test_monday_of_week(offset):
    day = date(2026, 3, 9) + timedelta(days=offset)
    monday = heatmap.monday_of_week(day)
    assert monday.weekday() == 0
    assert 0 <= (day - monday).days <= 6


def test_weeks_between():
    start = date(2026, 1, 5)
    assert heatmap.weeks_between(start, start + timedelta(weeks=3, days=4)) == 3
    assert heatmap.weeks_between(start, start - timedelta(days=30)) == 0


def test_log_thresholds():
    assert heatmap.log_thresholds(0.0) == (0.0, 0.0, 0.0, 0.0)
    assert heatmap.log_thresholds(-5.0) == (0.0, 0.0, 0.0, 0.0)
    low, a, b, c = heatmap.log_thresholds(27.0)
    assert low == 0.001
    assert a * 27.0 == 27.0 and b * 9.0 == 27.0 and c * 3.0 == 27.0


def test_intensity_level():
    thresholds = heatmap.log_thresholds(27.0)
    assert heatmap.intensity_level(0.0, thresholds) == 0
    assert heatmap.intensity_level(27.0, thresholds) == 4
    assert heatmap.intensity_level(thresholds[2], thresholds) == 3
    assert heatmap.intensity_level(thresholds[1], thresholds) == 2
    assert heatmap.intensity_level(0.0005, thresholds) == 1


def test_intensity_levels_are_monotonic():
    thresholds = heatmap.log_thresholds(50.0)
    costs = [0.0, 0.01, 0.5, 2.0, 6.0, 20.0, 50.0]
    levels = [heatmap.intensity_level(c, thresholds) for c in costs]
    assert levels == sorted(levels)


def test_dim_color_endpoints():
    full = theme.PROVIDER_ANTHROPIC
    assert heatmap.dim_color(full, 0) == theme.SURFACE
    assert heatmap.dim_color(full, 4) == full
    assert heatmap.dim_color(full, 9) == full


def test_build_month_labels_positions():
    spans = heatmap.build_month_labels(date(2025, 1, 6), 5, 2)
    joined = "".join(s.content for s in spans)
    assert joined.startswith("Jan")
    assert joined.index("Feb") == 4 * 2
    assert [s.content for s in spans if s.content.strip()] == ["Jan", "Feb"]


def test_render_lines_too_small():
    lines = heatmap.render_lines([], 40, 12, TODAY)
    assert [s.content for s in lines[0]] == [heatmap.TOO_SMALL_MESSAGE]
    assert heatmap.render_lines([], 80, 5, TODAY)[0][0].content == heatmap.TOO_SMALL_MESSAGE


def test_render_lines_full_layout():
    data = [heatmap.HeatmapDay(TODAY, 5.0, "Anthropic")]
    lines = heatmap.render_lines(data, 120, 12, TODAY)
    assert len(lines) == 8
    assert lines[0][0].content == " " * heatmap.LABEL_COL
    grid = lines[1:]
    assert [row[0].content.strip() for row in grid] == ["Mon", "", "Wed", "", "Fri", "", ""]
    # 52 full weeks plus the current one
    assert all(len(row) == 1 + 53 for row in grid)
    # Tuesday row ends with today's coloured cell
    assert grid[1][-1].content == "\u2588\u2588"
    assert grid[1][-1].style.fg == theme.PROVIDER_ANTHROPIC
    # Days after today are blank
    assert grid[2][-1].content == "  "
    # Monday of this week had no data
    assert grid[0][-1].content == "\u2022 "


def test_render_lines_narrow_keeps_latest_weeks():
    data = [heatmap.HeatmapDay(TODAY, 1.0, "Google")]
    width = 60
    lines = heatmap.render_lines(data, width, 10, TODAY)
    visible = (width - heatmap.LABEL_COL) // 2
    assert all(len(row) == 1 + visible for row in lines[1:])
    assert lines[2][-1].content == "\u2588\u2588"