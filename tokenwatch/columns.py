"""Responsive column selection for the usage detail table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from . import theme
from .theme import Style

HIGHLIGHT_BOLD_THRESHOLD = 0.4
"""Highlight intensity above which name cells turn bold."""


class ConstraintKind(Enum):
    """How a column width is constrained."""

    MIN = "min"
    LENGTH = "length"


@dataclass(frozen=True)
class Constraint:
    """A column width: either a fixed length or a minimum that may grow."""

    kind: ConstraintKind
    value: int

    @classmethod
    def minimum(cls, value: int) -> Constraint:
        """A width of at least ``value`` cells."""
        return cls(ConstraintKind.MIN, value)

    @classmethod
    def length(cls, value: int) -> Constraint:
        """A width of exactly ``value`` cells."""
        return cls(ConstraintKind.LENGTH, value)


class ColumnToggles(Protocol):
    """User settings that switch optional columns on or off."""

    api_provider: bool
    client: bool
    input: bool
    output: bool


@dataclass(frozen=True)
class ColumnSet:
    """Which optional columns are shown besides Model, Total and Cost."""

    show_api: bool = False
    show_client: bool = False
    show_requests: bool = False
    show_input: bool = False
    show_output: bool = False

    def mask(self, cfg: ColumnToggles) -> ColumnSet:
        """Keep only the columns that both the width and ``cfg`` allow.

        The requests column is not user-configurable and passes through.
        """
        return ColumnSet(
            show_api=self.show_api and cfg.api_provider,
            show_client=self.show_client and cfg.client,
            show_requests=self.show_requests,
            show_input=self.show_input and cfg.input,
            show_output=self.show_output and cfg.output,
        )

    def _optional(self) -> list[tuple[bool, str, Constraint]]:
        return [
            (self.show_api, "API", Constraint.length(12)),
            (self.show_client, "Client", Constraint.length(14)),
            (self.show_requests, "Reqs", Constraint.length(6)),
            (self.show_input, "Input", Constraint.length(8)),
            (self.show_output, "Output", Constraint.length(8)),
        ]

    def headers(self) -> list[str]:
        """Column titles in display order."""
        middle = [name for shown, name, _ in self._optional() if shown]
        return ["Model", *middle, "Total", "Cost"]

    def widths(self) -> list[Constraint]:
        """Column width constraints in display order."""
        middle = [width for shown, _, width in self._optional() if shown]
        return [
            Constraint.minimum(12),
            *middle,
            Constraint.length(8),
            Constraint.length(10),
        ]


# Width thresholds, widest first, and the columns each one allows.
_LAYOUTS = (
    (86, ColumnSet(True, True, True, True, True)),
    (70, ColumnSet(show_api=True, show_requests=True, show_input=True, show_output=True)),
    (56, ColumnSet(show_requests=True, show_input=True, show_output=True)),
    (42, ColumnSet(show_requests=True)),
)


def choose_columns(width: int) -> ColumnSet:
    """Pick the columns that fit a table ``width`` cells wide."""
    for min_width, columns in _LAYOUTS:
        if width >= min_width:
            return columns
    return ColumnSet()


def apply_highlight(normal: Style, intensity: float) -> Style:
    """Apply the fading green update highlight to a cell style.

    Returns ``normal`` unchanged when ``intensity`` is zero or less; otherwise
    the highlight fades from green back to the style's foreground (or the
    default text colour if it has none).
    """
    if intensity <= 0.0:
        return normal
    normal_fg = normal.fg if normal.fg is not None else theme.FG
    return theme.highlight_cell(intensity, normal_fg)