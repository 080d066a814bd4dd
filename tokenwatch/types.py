"""Core data types for token usage records and aggregated summaries."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_UNKNOWN_MODEL = "unknown"


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _epoch_micros(moment: datetime) -> int:
    return (_as_utc(moment) - _EPOCH) // timedelta(microseconds=1)


def _epoch_millis(moment: datetime) -> int:
    return (_as_utc(moment) - _EPOCH) // timedelta(milliseconds=1)


@dataclass
class ProviderInfo:
    """Information about a discovered usage provider."""

    name: str
    display_name: str
    available: bool
    data_dir: str
    file_count: int


@dataclass
class Record:
    """A single usage entry from any provider."""

    timestamp: datetime
    provider: str
    model: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_creation_tokens: int = 0
    thinking_tokens: int = 0
    cost_usd: float | None = None
    message_id: str | None = None
    request_id: str | None = None
    session_id: str | None = None

    def total_tokens(self) -> int:
        """Sum of all token fields."""
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_read_tokens
            + self.cache_creation_tokens
            + self.thinking_tokens
        )

    def _identity(self) -> tuple:
        model = self.model if self.model is not None else _UNKNOWN_MODEL
        if self.message_id is not None and self.request_id is not None:
            return ("ids", self.message_id, self.request_id)
        if self.message_id is not None:
            return ("msg", self.message_id, model, self.input_tokens, self.output_tokens)
        return (
            "content",
            _epoch_micros(self.timestamp),
            self.provider,
            model,
            self.input_tokens,
            self.output_tokens,
        )

    def dedup_hash(self) -> int:
        """A 64-bit hash of the record's identity.

        Uses message_id and request_id when both exist, message_id with model
        and token counts when only it exists, and otherwise the record content
        (timestamp, provider, model, tokens).
        """
        digest = hashlib.blake2b(repr(self._identity()).encode("utf-8"), digest_size=8)
        return int.from_bytes(digest.digest(), "big")

    def dedup_key(self) -> str:
        """A string identity key used when storing records."""
        model = self.model if self.model is not None else _UNKNOWN_MODEL
        if self.message_id is not None and self.request_id is not None:
            return f"{self.message_id}\0{self.request_id}"
        if self.message_id is not None:
            return f"{self.message_id}\0{model}\0{self.input_tokens}\0{self.output_tokens}"
        return (
            f"{_epoch_millis(self.timestamp)}\0{self.provider}\0{model}"
            f"\0{self.input_tokens}\0{self.output_tokens}"
        )


@dataclass
class ModelUsage:
    """Aggregated usage for a single model within a time period.

    ``model`` is the normalized name; ``raw_model`` keeps the first raw name
    seen (with any routing prefix) for provider inference.
    """

    model: str = ""
    raw_model: str = ""
    provider: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_creation_tokens: int = 0
    thinking_tokens: int = 0
    cost_usd: float = 0.0
    request_count: int = 0

    def total_tokens(self) -> int:
        """Sum of all token fields."""
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_read_tokens
            + self.cache_creation_tokens
            + self.thinking_tokens
        )

    def effective_raw_model(self) -> str:
        """The raw model name, falling back to the normalized one when empty."""
        return self.raw_model or self.model

    def accumulate(self, other: ModelUsage) -> None:
        """Add every numeric field of ``other`` into this entry."""
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens
        self.cache_read_tokens += other.cache_read_tokens
        self.cache_creation_tokens += other.cache_creation_tokens
        self.thinking_tokens += other.thinking_tokens
        self.cost_usd += other.cost_usd
        self.request_count += other.request_count


@dataclass
class PeriodSummary:
    """Summary for a time period (day, week or month)."""

    date: date
    label: str
    models: list[ModelUsage] = field(default_factory=list)
    total_input: int = 0
    total_output: int = 0
    total_thinking: int = 0
    total_cost: float = 0.0
    total_requests: int = 0

    def total_cache_creation(self) -> int:
        """Cache-creation tokens over all models."""
        return sum(m.cache_creation_tokens for m in self.models)

    def total_cache_read(self) -> int:
        """Cache-read tokens over all models."""
        return sum(m.cache_read_tokens for m in self.models)

    def total_cache(self) -> int:
        """All cache tokens over all models."""
        return self.total_cache_creation() + self.total_cache_read()


@dataclass
class Report:
    """A full usage report."""

    period: str
    generated_at: datetime
    providers_found: list[str] = field(default_factory=list)
    summaries: list[PeriodSummary] = field(default_factory=list)
    total_cost: float = 0.0
    total_tokens: int = 0


@dataclass
class SessionSummary:
    """Summary for a single coding session."""

    session_id: str
    date: date
    client: str
    dominant_model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_creation_tokens: int = 0
    thinking_tokens: int = 0
    total_tokens: int = 0
    cost: float = 0.0


@dataclass
class SessionReport:
    """A report of session summaries."""

    generated_at: datetime
    sessions: list[SessionSummary] = field(default_factory=list)
    total_cost: float = 0.0
    total_tokens: int = 0


class GroupBy(Enum):
    """How rows of the detail table are grouped."""

    MODEL = "model"
    MODEL_CLIENT = "model+client"
    CLIENT = "client"

    def next(self) -> GroupBy:
        """The following mode in the cycle."""
        order = list(GroupBy)
        return order[(order.index(self) + 1) % len(order)]

    def label(self) -> str:
        """Short label for display."""
        return self.value