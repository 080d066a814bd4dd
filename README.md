# tokenwatch

tokenwatch holds the data model and the rendering logic for a dashboard that tracks how many tokens LLM clients use and what they cost. It has no dependencies beyond the standard library.

It has two parts:

- **A data model** (`tokenwatch.types`). It covers usage records, per-model aggregates, period and session summaries, reports, and the group-by modes.
- **Pure rendering helpers** for a terminal dashboard. These cover the colour theme, a contribution heatmap, a braille activity spike chart, the dashboard layout planner, the help popup contents, and the column selection for the usage table.

Every helper takes plain values and returns plain values: colours, styles, layout decisions, or lines made of styled `Span`s. You can test them directly and hand their output to any terminal front end.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage records

```python
from datetime import datetime, timezone
from tokenwatch.types import Record

rec = Record(
    timestamp=datetime(2026, 2, 20, 10, tzinfo=timezone.utc),
    provider="claude-code",
    model="claude-opus-4-1-20250805",
    input_tokens=100,
    output_tokens=50,
    message_id="msg_1",
    request_id="req_1",
)
rec.total_tokens()   # 150
rec.dedup_key()      # "msg_1\0req_1"
```

`Record.dedup_key()` returns a string key and `Record.dedup_hash()` returns a 64-bit integer. Both build the record's identity from the first rule that applies:

1. If the record has a message id and a request id, those two.
2. If it has only a message id, the message id, the model (`"unknown"` if missing) and the input and output token counts.
3. Otherwise the record's content: its timestamp, provider, model and input and output token counts.

The other types in `tokenwatch.types`:

- `ModelUsage` is an aggregate for one model.
  - `accumulate(other)` adds all numeric fields of `other` into it.
  - `effective_raw_model()` returns `raw_model`, or `model` when `raw_model` is empty.
- `PeriodSummary` reports cache totals with `total_cache_creation()`, `total_cache_read()` and `total_cache()`.
- `Report`, `SessionSummary`, `SessionReport` and `ProviderInfo` are plain dataclasses.
- `GroupBy` has the modes `MODEL`, `MODEL_CLIENT` and `CLIENT`.
  - `next()` cycles through them in that order.
  - `label()` gives `"model"`, `"model+client"` or `"client"`.

## Theme

`tokenwatch.theme` has the following parts:

- **Colours.** The palette is a set of `Rgb` values: `BG`, `SURFACE`, `FG`, `ACCENT`, `GREEN` and others.
- **`Style`.** An immutable style. `fg_color()`, `bg_color()` and `add_modifier()` each return a new style, using the `Modifier` flags.
- **Named styles.** Functions such as `text()`, `header()`, `card()`, `status_key()` and `total_row()`.
- **Value colours.**
  - `cost_color(cost)` returns dim for zero, green below 1, yellow below 10 and red above that.
  - `tokens_color(n)` returns dim for zero.
- **`highlight_cell(intensity, normal_fg)`.** A green highlight that fades back to `normal_fg`. The text stays bold while `intensity` is above 0.4.
- **`provider_color(name)`.** The colour for an API provider name such as `"Anthropic"`, `"OpenAI"` or `"Google"`.
- **`lerp_color(start, end, t)`.** Blends two colours, with `t` clamped to 0–1.

## Heatmap

`tokenwatch.heatmap` draws a calendar of daily spending.

`build_heatmap_data(daily_summaries, provider_of)` turns `PeriodSummary` values into `HeatmapDay` values. You supply `provider_of`, a function that maps a raw model name to an API provider name. For each day, the provider with the highest summed cost becomes the dominant provider.

`render_lines(heatmap_data, width, height, today)` lays out the last 52 weeks plus the current one:

- The first line holds the month labels.
- It is followed by one line per weekday.
- Each day cell is coloured by its dominant provider. Its brightness is one of four log-scaled intensity levels.
- If there are more weeks than fit the width, the oldest weeks are dropped.
- If the area is smaller than 60×10, it returns a single "too small" message line.

The building blocks are public too: `monday_of_week`, `weeks_between`, `log_thresholds`, `intensity_level`, `dim_color` and `build_month_labels`.

## Spike chart

`tokenwatch.spike_chart` draws today's token activity.

`build_spike_data(records, bucket_secs, provider_of, now)` buckets the records from the current UTC day into time slots from midnight up to `now`:

- Input is weighted by price: cache reads count 0.1× and cache writes count 1.25×.
- Output includes thinking tokens.
- Each bucket holds `ProviderSlice`s, largest first.
- The result also records the most recent timestamp.

`render_lines(data, width, height, age_secs)` draws the chart in braille cells:

- Output rises above a baseline and input hangs below it.
- Each spike is split into segments coloured by provider.
- Spike heights are scaled to the visible buckets, with a floor of `MIN_SCALE` tokens.
- Spike colours are scaled to an absolute token count (`COLOR_SATURATION_TOKENS`).
- The trailing columns glow while `age_secs` is under five minutes.

The lower-level helpers are also public: `build_pixel_grid`, `paint_heat`, `spike_gradient` and `braille_char`.

## Layout, help and table columns

`tokenwatch.views.plan_dashboard(width, height)` decides which dashboard sections fit a terminal of that size, and how tall each one is. Space is handed out in this order:

1. the spike chart;
2. the heatmap, which needs a width of at least 62;
3. the summary cards;
4. the usage table, which gets the rest if that is at least 3 rows.

```python
from tokenwatch.views import plan_dashboard

plan_dashboard(120, 40)
# DashboardLayout(card_height=7, spike_height=12, heatmap_height=14,
#                 table_height=5, header_height=1, status_height=1)
```

`help_lines()` returns the lines of the key-binding help popup.

`tokenwatch.columns` chooses the columns of the usage table:

- `choose_columns(width)` picks a `ColumnSet` that fits the width.
- `ColumnSet.mask(cfg)` drops the API, client, input and output columns that `cfg` switches off. `cfg` is any object with the boolean attributes `api_provider`, `client`, `input` and `output`.
- `headers()` and `widths()` give the titles and the width `Constraint`s, in display order.
- `apply_highlight(style, intensity)` adds the update highlight to a cell style.

## What it does not do

tokenwatch does not provide:

- A command-line program or a running terminal UI. Nothing in the package draws to a terminal or reads keyboard input. The helpers only produce lines of spans and layout decisions.
- Reading usage logs from LLM clients.
- Caching records on disk.
- Deduplicating record lists.
- Rolling records up into daily or session summaries.
- Pricing.
- Watching files for changes.
- Mapping model names to API providers. The heatmap and spike chart builders take that mapping as a `provider_of` function.