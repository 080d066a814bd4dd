"""Dashboard layout planning and the help overlay contents."""

from __future__ import annotations

from dataclasses import dataclass

from . import theme
from .theme import Span

HEADER_HEIGHT = 1
STATUS_HEIGHT = 1
HEATMAP_MIN_WIDTH = 62
TABLE_MIN_HEIGHT = 3

HELP_BINDINGS = (
    ("t / w / m / a", "Switch scope (Today/Week/Month/All)"),
    ("\u2190 / \u2192", "Cycle scope left/right"),
    ("g", "Cycle group-by (model/client/both)"),
    ("h", "Toggle historical periods"),
    ("c", "Fullscreen contribution heatmap"),
    ("v", "Fullscreen token spike chart"),
    ("s", "Cycle sort (cost/tokens/name/reqs)"),
    ("/", "Filter by model/provider"),
    ("j / \u2193", "Scroll table down"),
    ("k / \u2191", "Scroll table up"),
    ("S", "Open settings editor"),
    ("?", "Toggle this help"),
    ("q / Esc", "Quit (or clear filter)"),
    ("", ""),
    ("", "Data refreshes every tick interval."),
    ("", "Bar durations configurable via S."),
)


@dataclass(frozen=True)
class DashboardLayout:
    """Row heights of the dashboard sections; zero means the section is hidden."""

    card_height: int
    spike_height: int
    heatmap_height: int
    table_height: int
    header_height: int = HEADER_HEIGHT
    status_height: int = STATUS_HEIGHT


def _spike_height(remaining: int) -> int:
    for size in (12, 10, 8, 7):
        if remaining >= size:
            return size
    return 0


def _heatmap_height(remaining: int, width: int) -> int:
    if width < HEATMAP_MIN_WIDTH:
        return 0
    for size in (14, 12):
        if remaining >= size:
            return size
    return 0


def _card_height(remaining: int) -> int:
    # Cards only appear if the table still keeps a usable slice.
    if remaining >= 7 + 5:
        return 7
    if remaining >= 5 + 5:
        return 5
    return 0


def plan_dashboard(width: int, height: int) -> DashboardLayout:
    """Decide which sections fit a ``width`` x ``height`` terminal.

    Space goes first to the spike chart, then the heatmap, then the summary
    cards; the usage table takes what is left if that is at least three rows.
    """
    remaining = max(height - HEADER_HEIGHT - STATUS_HEIGHT, 0)
    spike = _spike_height(remaining)
    remaining -= spike
    heat = _heatmap_height(remaining, width)
    remaining -= heat
    cards = _card_height(remaining)
    remaining -= cards
    table = remaining if remaining >= TABLE_MIN_HEIGHT else 0
    return DashboardLayout(
        card_height=cards,
        spike_height=spike,
        heatmap_height=heat,
        table_height=table,
    )


def help_lines() -> list[list[Span]]:
    """The lines of the help overlay, one list of spans per line."""
    lines = []
    for key, desc in HELP_BINDINGS:
        if key:
            lines.append(
                [
                    Span(f"  {key:<10}", theme.status_key()),
                    Span(f" {desc}", theme.text()),
                ]
            )
        else:
            lines.append([Span(desc, theme.text_dim())])
    return lines