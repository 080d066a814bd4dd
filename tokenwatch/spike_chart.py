"""Braille spike chart of today's token activity, split by API provider."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from . import theme
from .theme import Rgb, Span, Style
from .types import Record

MIN_WIDTH = 20
"""Minimum inner width needed to draw the chart."""

MIN_HEIGHT = 5
"""Minimum inner height needed to draw the chart."""

LABEL_COL = 4
"""Width of the OUT / IN label column."""

MIN_SCALE = 15_000
"""Spikes need at least this many tokens to reach full height."""

COLOR_SATURATION_TOKENS = 100_000
"""Absolute token count at which a spike's tip burns bright white.

Heights are scaled to the visible window, but colours are pinned to this
absolute scale so they do not flicker when the window maximum changes.
"""

BRAILLE_OFFSET = 0x2800

# DOT_BITS[col][row] is the bit for that dot in a 2x4 braille cell.
DOT_BITS = (
    (0x01, 0x02, 0x04, 0x40),
    (0x08, 0x10, 0x20, 0x80),
)

HEAT_MAX_AGE = 300.0
"""Seconds after which the trailing glow has fully cooled."""

HEAT_COLS = 6
"""Trailing pixel columns that glow."""

WHITE = Rgb(255, 255, 255)

TOO_SMALL_MESSAGE = "Terminal too small for spike chart"
NO_DATA_MESSAGE = "No token data for today"

Grid = list[list[Rgb | None]]


@dataclass
class ProviderSlice:
    """Token counts of one provider within a bucket."""

    provider: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class SpikeChartBucket:
    """One time bucket; providers are ordered by total tokens, largest first."""

    input_tokens: int = 0
    output_tokens: int = 0
    providers: list[ProviderSlice] = field(default_factory=list)


@dataclass
class SpikeChartResult:
    """Buckets for today and the timestamp of the most recent record."""

    buckets: list[SpikeChartBucket]
    most_recent: datetime | None = None


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _seconds_of_day(moment: datetime) -> int:
    return moment.hour * 3600 + moment.minute * 60 + moment.second


def build_spike_data(
    records: Iterable[Record],
    bucket_secs: int,
    provider_of: Callable[[str], str],
    now: datetime,
) -> SpikeChartResult:
    """Bucket today's records (UTC) into ``bucket_secs``-second slots up to ``now``.

    Input is weighted by relative price: cache reads count 0.1x and cache
    writes 1.25x. Output includes thinking tokens. ``provider_of`` maps a
    model name to its API provider.
    """
    bucket_secs = max(bucket_secs, 1)
    now = _to_utc(now)
    today = now.date()
    num_slots = _seconds_of_day(now) // bucket_secs + 1

    input_data = [0] * num_slots
    output_data = [0] * num_slots
    provider_input: list[dict[str, int]] = [{} for _ in range(num_slots)]
    provider_output: list[dict[str, int]] = [{} for _ in range(num_slots)]
    most_recent: datetime | None = None

    for record in records:
        stamp = _to_utc(record.timestamp)
        if stamp.date() != today:
            continue
        if most_recent is None or stamp > most_recent:
            most_recent = stamp
        slot = _seconds_of_day(stamp) // bucket_secs
        if slot >= num_slots:
            continue
        weighted_input = (
            record.input_tokens
            + int(record.cache_read_tokens * 0.1)
            + int(record.cache_creation_tokens * 1.25)
        )
        output = record.output_tokens + record.thinking_tokens
        input_data[slot] += weighted_input
        output_data[slot] += output

        provider = provider_of(record.model or "")
        provider_input[slot][provider] = provider_input[slot].get(provider, 0) + weighted_input
        provider_output[slot][provider] = provider_output[slot].get(provider, 0) + output

    buckets = []
    for slot in range(num_slots):
        slices = [
            ProviderSlice(name, tokens_in, provider_output[slot].get(name, 0))
            for name, tokens_in in provider_input[slot].items()
        ]
        slices.sort(key=lambda s: s.input_tokens + s.output_tokens, reverse=True)
        buckets.append(SpikeChartBucket(input_data[slot], output_data[slot], slices))

    return SpikeChartResult(buckets, most_recent)


def braille_char(dots: int) -> str:
    """The braille character with the given dot bits set."""
    if not 0 <= dots <= 0xFF:
        raise ValueError(f"braille dot mask out of range: {dots}")
    return chr(BRAILLE_OFFSET + dots)


def spike_gradient(dim: Rgb, mid: Rgb, bright: Rgb, t: float) -> Rgb:
    """Three-band gradient from a spike's base (t=0) to its tip (t=1).

    dim to mid up to 0.70, mid held to 0.95, then mid to bright.
    """
    if t < 0.70:
        return theme.lerp_color(dim, mid, t / 0.70)
    if t < 0.95:
        return mid
    return theme.lerp_color(mid, bright, (t - 0.95) / 0.05)


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5))


def _paint_segment(
    grid: Grid,
    cx: int,
    pixel_w: int,
    pixel_h: int,
    start_dy: int,
    end_dy: int,
    total_h: int,
    color: Rgb,
    dim: Rgb,
    go_up: bool,
    baseline: int,
    color_peak: float,
) -> None:
    max_t = min(max(color_peak, 0.0), 1.0)
    for dy in range(start_dy, end_dy):
        py = max(baseline - (1 + dy), 0) if go_up else baseline + dy
        if py >= pixel_h:
            continue
        local_t = 1.0 if total_h <= 1 else dy / (total_h - 1)
        if cx < pixel_w:
            grid[py][cx] = spike_gradient(dim, color, WHITE, local_t * max_t)


def build_pixel_grid(
    visible: Sequence[SpikeChartBucket],
    pixel_w: int,
    pixel_h: int,
    baseline: int,
    max_out: int,
    max_in: int,
    half_above: int,
    half_below: int,
) -> Grid:
    """Plot buckets into a ``pixel_h`` x ``pixel_w`` grid of colours.

    Output rises above the baseline and input hangs below it; each spike is
    split into segments coloured by provider share. Buckets are
    right-aligned.
    """
    grid: Grid = [[None] * pixel_w for _ in range(pixel_h)]
    col_offset = max(pixel_w - len(visible), 0)

    for i, bucket in enumerate(visible):
        cx = col_offset + i
        for tokens, max_tokens, half_h, go_up in (
            (bucket.output_tokens, max_out, half_above, True),
            (bucket.input_tokens, max_in, half_below, False),
        ):
            if tokens == 0:
                continue
            ratio = tokens / max_tokens
            color_peak = min(max(tokens / COLOR_SATURATION_TOKENS, 0.0), 1.0)
            total_h = min(max(math.ceil(ratio * half_h), 1), half_h)

            dy_cursor = 0
            for piece in bucket.providers:
                piece_tokens = piece.output_tokens if go_up else piece.input_tokens
                if piece_tokens == 0 or dy_cursor >= total_h:
                    continue
                seg_h = max(_round_half_away(piece_tokens / tokens * total_h), 1)
                end_dy = min(dy_cursor + seg_h, total_h)
                color = theme.provider_color(piece.provider)
                dim = theme.lerp_color(color, theme.BORDER, 0.75)
                _paint_segment(
                    grid, cx, pixel_w, pixel_h, dy_cursor, end_dy, total_h,
                    color, dim, go_up, baseline, color_peak,
                )
                dy_cursor = end_dy
    return grid


def paint_heat(grid: Grid, pixel_w: int, pixel_h: int, age_secs: float) -> None:
    """Brighten the trailing coloured columns in place to show recency.

    The glow fades with distance from the trailing edge and with
    ``age_secs``; it is gone at five minutes. Empty pixels stay empty.
    """
    if age_secs >= HEAT_MAX_AGE:
        return
    age_frac = min(max(age_secs / HEAT_MAX_AGE, 0.0), 1.0)
    heat = 1.0 - math.sqrt(age_frac)

    trailing = next(
        (
            cx
            for cx in reversed(range(pixel_w))
            if any(grid[py][cx] is not None for py in range(pixel_h))
        ),
        None,
    )
    if trailing is None:
        return

    start_col = max(trailing - (HEAT_COLS - 1), 0)
    for cx in range(start_col, trailing + 1):
        spatial = 1.0 - (trailing - cx) / HEAT_COLS
        boost = heat * spatial * 0.5
        for row in grid[:pixel_h]:
            color = row[cx]
            if color is not None:
                row[cx] = theme.lerp_color(color, WHITE, boost)


def _braille_rows(
    grid: Grid,
    chart_w: int,
    chart_h: int,
    pixel_w: int,
    pixel_h: int,
    baseline: int,
) -> list[list[Span]]:
    mid_row = chart_h // 2
    out_label_row = mid_row // 2
    in_label_row = (mid_row + chart_h) // 2

    lines = []
    for row in range(chart_h):
        row_top = row * 4
        if row == out_label_row:
            label = "OUT "
        elif row == in_label_row:
            label = " IN "
        else:
            label = "    "
        spans = [Span(label, theme.text_dim())]

        for col in range(chart_w):
            col_left = col * 2
            dots = 0
            cell_color: Rgb | None = None
            for dc, col_bits in enumerate(DOT_BITS):
                for dr, bit in enumerate(col_bits):
                    py, px = row_top + dr, col_left + dc
                    if py < pixel_h and px < pixel_w and grid[py][px] is not None:
                        dots |= bit
                        cell_color = grid[py][px]
            if cell_color is not None:
                spans.append(Span(braille_char(dots), Style(fg=cell_color)))
            elif row_top <= baseline < row_top + 4:
                br = baseline - row_top
                spans.append(
                    Span(braille_char(DOT_BITS[0][br] | DOT_BITS[1][br]), Style(fg=theme.BORDER))
                )
            else:
                spans.append(Span(" "))
        lines.append(spans)
    return lines


def render_lines(
    data: Sequence[SpikeChartBucket],
    width: int,
    height: int,
    age_secs: float,
) -> list[list[Span]]:
    """Lay out the chart for an area of ``width`` x ``height`` cells.

    Returns one list of spans per row. Areas that are too small, or data
    without any tokens, give a single message line. ``age_secs`` is the time
    since the most recent record and drives the trailing glow.
    """
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        return [[Span(TOO_SMALL_MESSAGE, theme.text_dim())]]
    if not any(b.input_tokens > 0 or b.output_tokens > 0 for b in data):
        return [[Span(NO_DATA_MESSAGE, theme.text_dim())]]

    chart_w = max(width - LABEL_COL, 0)
    chart_h = height
    pixel_w = chart_w * 2
    pixel_h = chart_h * 4
    baseline = pixel_h // 2

    visible = data[len(data) - pixel_w:] if len(data) > pixel_w else data

    max_out = max(max((b.output_tokens for b in visible), default=0), MIN_SCALE)
    max_in = max(max((b.input_tokens for b in visible), default=0), MIN_SCALE)
    half_above = baseline
    half_below = pixel_h - baseline

    grid = build_pixel_grid(
        visible, pixel_w, pixel_h, baseline, max_out, max_in, half_above, half_below
    )
    paint_heat(grid, pixel_w, pixel_h, age_secs)
    return _braille_rows(grid, chart_w, chart_h, pixel_w, pixel_h, baseline)