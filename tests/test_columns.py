from types import SimpleNamespace

import pytest

from tokenwatch import theme
from tokenwatch.columns import (
    ColumnSet,
    Constraint,
    ConstraintKind,
    apply_highlight,
    choose_columns,
)
from tokenwatch.theme import Modifier, Style


def _toggles(api_provider=True, client=True, input=True, output=True):
    return SimpleNamespace(api_provider=api_provider, client=client, input=input, output=output)


def test_widest_layout_shows_everything():
    cols = choose_columns(86)
    assert cols.headers() == ["Model", "API", "Client", "Reqs", "Input", "Output", "Total", "Cost"]


def test_width_70_drops_client():
    assert choose_columns(85).headers() == [
        "Model", "API", "Reqs", "Input", "Output", "Total", "Cost"
    ]
    assert choose_columns(70) == choose_columns(85)


def test_width_56_drops_api():
    assert choose_columns(56).headers() == ["Model", "Reqs", "Input", "Output", "Total", "Cost"]
    assert choose_columns(69) == choose_columns(56)


def test_width_42_keeps_requests_only():
    assert choose_columns(42).headers() == ["Model", "Reqs", "Total", "Cost"]
    assert choose_columns(55) == choose_columns(42)


def test_narrow_layout_keeps_only_fixed_columns():
    assert choose_columns(41) == ColumnSet()
    assert choose_columns(0).headers() == ["Model", "Total", "Cost"]


@pytest.mark.parametrize("width", [0, 20, 41, 42, 55, 56, 69, 70, 85, 86, 200])
def test_widths_match_headers(width):
    cols = choose_columns(width)
    widths = cols.widths()
    assert len(widths) == len(cols.headers())
    assert widths[0] == Constraint.minimum(12)
    assert widths[-2:] == [Constraint.length(8), Constraint.length(10)]


def test_full_widths():
    widths = choose_columns(100).widths()
    assert [w.value for w in widths] == [12, 12, 14, 6, 8, 8, 8, 10]
    assert [w.kind for w in widths[1:]] == [ConstraintKind.LENGTH] * 7
    assert widths[0].kind is ConstraintKind.MIN


def test_mask_all_enabled_is_identity():
    cols = choose_columns(100)
    assert cols.mask(_toggles()) == cols


def test_mask_disables_columns_but_keeps_requests():
    cols = choose_columns(100).mask(_toggles(False, False, False, False))
    assert cols == ColumnSet(show_requests=True)
    assert cols.headers() == ["Model", "Reqs", "Total", "Cost"]


def test_mask_cannot_enable_columns_width_forbids():
    cols = choose_columns(50).mask(_toggles())
    assert cols == choose_columns(50)
    assert not cols.show_api and not cols.show_input


def test_mask_single_toggle():
    cols = choose_columns(100).mask(_toggles(client=False))
    assert "Client" not in cols.headers()
    assert "API" in cols.headers()


def test_apply_highlight_zero_returns_normal():
    normal = Style(fg=theme.DIM, bg=theme.BG)
    assert apply_highlight(normal, 0.0) is normal
    assert apply_highlight(normal, -1.0) is normal


def test_apply_highlight_full_intensity():
    result = apply_highlight(Style(fg=theme.DIM, bg=theme.BG), 1.0)
    assert result.fg == theme.HIGHLIGHT_GREEN
    assert result.bg == theme.BG
    assert Modifier.BOLD in result.modifiers


def test_apply_highlight_uses_default_fg_when_missing():
    result = apply_highlight(Style(), 0.2)
    assert result == theme.highlight_cell(0.2, theme.FG)
    assert Modifier.BOLD not in result.modifiers


def test_apply_highlight_uses_style_fg():
    result = apply_highlight(Style(fg=theme.RED), 0.5)
    assert result == theme.highlight_cell(0.5, theme.RED)