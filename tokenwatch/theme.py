"""Colour palette and text styles for the terminal dashboard."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Flag, auto
from typing import NamedTuple


class Rgb(NamedTuple):
    """A 24-bit colour."""

    r: int
    g: int
    b: int


class Modifier(Flag):
    """Text attributes."""

    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINED = auto()
    REVERSED = auto()


@dataclass(frozen=True)
class Style:
    """Immutable text style; builder methods return new styles."""

    fg: Rgb | None = None
    bg: Rgb | None = None
    modifiers: Modifier = Modifier.NONE

    def fg_color(self, color: Rgb) -> Style:
        """Return a copy with the given foreground colour."""
        return replace(self, fg=color)

    def bg_color(self, color: Rgb) -> Style:
        """Return a copy with the given background colour."""
        return replace(self, bg=color)

    def add_modifier(self, modifier: Modifier) -> Style:
        """Return a copy with ``modifier`` added."""
        return replace(self, modifiers=self.modifiers | modifier)


@dataclass(frozen=True)
class Span:
    """A piece of text with a style."""

    content: str
    style: Style = Style()


# Base palette
BG = Rgb(15, 17, 22)
SURFACE = Rgb(22, 25, 33)
BORDER = Rgb(48, 54, 68)
DIM = Rgb(88, 96, 112)
FG = Rgb(200, 205, 215)
FG_BRIGHT = Rgb(235, 238, 245)

# Accents
ACCENT = Rgb(99, 140, 255)
ACCENT_DIM = Rgb(65, 95, 180)
GREEN = Rgb(80, 200, 120)
YELLOW = Rgb(230, 190, 60)
RED = Rgb(235, 85, 85)
CYAN = Rgb(85, 205, 220)
HIGHLIGHT_GREEN = Rgb(80, 220, 110)

# Provider heatmap colours
PROVIDER_ANTHROPIC = Rgb(255, 140, 80)
PROVIDER_OPENAI = Rgb(80, 200, 120)
PROVIDER_GOOGLE = Rgb(85, 150, 255)
PROVIDER_DEEPSEEK = Rgb(180, 120, 255)
PROVIDER_MISTRAL = Rgb(255, 200, 60)
PROVIDER_META = Rgb(60, 180, 220)
PROVIDER_ALIBABA = Rgb(255, 100, 100)
PROVIDER_DEFAULT = Rgb(150, 150, 160)

_PROVIDER_COLORS = {
    "Anthropic": PROVIDER_ANTHROPIC,
    "OpenAI": PROVIDER_OPENAI,
    "AWS Bedrock": PROVIDER_OPENAI,
    "Azure": PROVIDER_OPENAI,
    "Google": PROVIDER_GOOGLE,
    "Vertex AI": PROVIDER_GOOGLE,
    "DeepSeek": PROVIDER_DEEPSEEK,
    "Mistral": PROVIDER_MISTRAL,
    "Meta": PROVIDER_META,
    "Alibaba": PROVIDER_ALIBABA,
}


def text() -> Style:
    """Default text."""
    return Style(fg=FG, bg=BG)


def text_dim() -> Style:
    """Dimmed, secondary text."""
    return Style(fg=DIM, bg=BG)


def text_bold() -> Style:
    """Bold bright text."""
    return Style(fg=FG_BRIGHT, bg=BG, modifiers=Modifier.BOLD)


def header() -> Style:
    """Header and column labels."""
    return Style(fg=CYAN, bg=BG, modifiers=Modifier.BOLD)


def tab_active() -> Style:
    """Active tab."""
    return Style(fg=BG, bg=ACCENT, modifiers=Modifier.BOLD)


def tab_inactive() -> Style:
    """Inactive tab."""
    return Style(fg=DIM, bg=SURFACE)


def border() -> Style:
    """Borders."""
    return Style(fg=BORDER, bg=BG)


def cost_color(cost: float) -> Rgb:
    """Foreground colour for a cost value."""
    if cost == 0.0:
        return DIM
    if cost < 1.0:
        return GREEN
    if cost < 10.0:
        return YELLOW
    return RED


def tokens_color(n: int) -> Rgb:
    """Foreground colour for a token count; dim for zero."""
    return DIM if n == 0 else FG


def card() -> Style:
    """Surface panel."""
    return Style(fg=FG, bg=SURFACE)


def card_label() -> Style:
    """Card title."""
    return Style(fg=DIM, bg=SURFACE, modifiers=Modifier.BOLD)


def card_value() -> Style:
    """Card headline value."""
    return Style(fg=FG_BRIGHT, bg=SURFACE, modifiers=Modifier.BOLD)


def card_secondary() -> Style:
    """Card secondary value."""
    return Style(fg=DIM, bg=SURFACE)


def status_bar() -> Style:
    """Status bar background."""
    return Style(fg=DIM, bg=SURFACE)


def status_key() -> Style:
    """Keybinding highlight in the status bar."""
    return Style(fg=ACCENT, bg=SURFACE, modifiers=Modifier.BOLD)


def total_row() -> Style:
    """Total row."""
    return Style(fg=FG_BRIGHT, bg=BG, modifiers=Modifier.BOLD)


def highlight_cell(intensity: float, normal_fg: Rgb) -> Style:
    """Style of a freshly updated cell.

    At intensity 1.0 the text is bright green and bold; as intensity falls to
    0.0 the colour returns to ``normal_fg``. Bold holds above 0.4.
    """
    if intensity <= 0.0:
        return Style(fg=normal_fg, bg=BG)
    style = Style(fg=lerp_color(normal_fg, HIGHLIGHT_GREEN, intensity), bg=BG)
    if intensity > 0.4:
        style = style.add_modifier(Modifier.BOLD)
    return style


def provider_color(provider: str) -> Rgb:
    """Heatmap colour for an API provider name."""
    return _PROVIDER_COLORS.get(provider, PROVIDER_DEFAULT)


def lerp_color(start, end, t: float):
    """Linearly interpolate between two colours, with ``t`` clamped to [0, 1].

    If either colour is not an RGB value, the result is ``end`` above 0.5 and
    ``start`` otherwise.
    """
    t = min(max(t, 0.0), 1.0)
    if isinstance(start, Rgb) and isinstance(end, Rgb):
        return Rgb(*(int(a + (b - a) * t) for a, b in zip(start, end)))
    return end if t > 0.5 else start