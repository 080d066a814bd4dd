import pytest

from tokenwatch import theme, views


def _total(layout):
    return (
        layout.header_height
        + layout.card_height
        + layout.spike_height
        + layout.heatmap_height
        + layout.table_height
        + layout.status_height
    )


def test_plan_dashboard_tall_terminal_shows_everything():
    layout = views.plan_dashboard(120, 60)
    assert layout.spike_height == 12
    assert layout.heatmap_height == 14
    assert layout.card_height == 7
    assert layout.table_height >= views.TABLE_MIN_HEIGHT
    assert _total(layout) == 60


def test_plan_dashboard_narrow_hides_heatmap():
    layout = views.plan_dashboard(61, 60)
    assert layout.heatmap_height == 0
    assert layout.spike_height == 12


def test_plan_dashboard_tiny_terminal():
    layout = views.plan_dashboard(100, 5)
    assert layout.spike_height == 0
    assert layout.heatmap_height == 0
    assert layout.card_height == 0
    assert layout.table_height == 3


def test_plan_dashboard_degenerate_height():
    layout = views.plan_dashboard(100, 1)
    assert (layout.card_height, layout.spike_height, layout.heatmap_height, layout.table_height) == (
        0,
        0,
        0,
        0,
    )


@pytest.mark.parametrize("height", range(0, 70, 3))
def test_plan_dashboard_never_overflows(height):
    layout = views.plan_dashboard(100, height)
    assert _total(layout) <= max(height, 2)
    assert layout.spike_height in (0, 7, 8, 10, 12)
    assert layout.heatmap_height in (0, 12, 14)
    assert layout.card_height in (0, 5, 7)


def test_help_lines_content():
    lines = views.help_lines()
    assert len(lines) == len(views.HELP_BINDINGS)
    assert lines[-1][0].content == "Bar durations configurable via S."
    assert lines[-1][0].style == theme.text_dim()
    assert lines[0][0].content.strip() == "t / w / m / a"
    assert lines[0][1].content == " Switch scope (Today/Week/Month/All)"


def test_help_key_column_is_padded():
    keyed = [line for line in views.help_lines() if len(line) == 2]
    assert all(len(line[0].content) >= 12 for line in keyed)
    assert all(line[0].style == theme.status_key() for line in keyed)
    assert all(line[0].content.startswith("  ") for line in keyed)