"""Latency between consecutive events of a conversation thread."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta

from tweet_scrolls.models.interaction import ConversationThread

PERCENTILES = {"p50": 0.50, "p90": 0.90, "p95": 0.95, "p99": 0.99}


def response_times(thread: ConversationThread) -> list[timedelta]:
    """Deltas between consecutive events of an ascending thread.

    Returns ``len(thread.events) - 1`` durations (none for an empty or
    single-event thread). Simultaneous events give a zero delta. The thread
    is trusted to be in ascending order and is not re-sorted.
    """
    events = thread.events
    return [events[i + 1].timestamp - events[i].timestamp for i in range(len(events) - 1)]


def response_times_seconds(thread: ConversationThread) -> list[float]:
    """``response_times`` expressed in seconds."""
    return [delta.total_seconds() for delta in response_times(thread)]


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Linear-interpolated percentile of already sorted values."""
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    rank = fraction * (len(sorted_values) - 1)
    lower = int(rank)
    upper = min(lower + 1, len(sorted_values) - 1)
    weight = rank - lower
    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight


@dataclass
class ResponseTimeStats:
    """Summary of response times, all in seconds."""

    count: int = 0
    average: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    percentiles: dict[str, float] = field(default_factory=dict)


def summarize_response_times(durations: Iterable[timedelta | float]) -> ResponseTimeStats:
    """Average, median, extremes and p50/p90/p95/p99 of response times.

    Accepts ``timedelta`` values or plain seconds. Empty input yields
    all-zero stats with no percentiles.
    """
    seconds = sorted(
        d.total_seconds() if isinstance(d, timedelta) else float(d) for d in durations
    )
    if not seconds:
        return ResponseTimeStats()

    return ResponseTimeStats(
        count=len(seconds),
        average=sum(seconds) / len(seconds),
        median=percentile(seconds, 0.5),
        min=seconds[0],
        max=seconds[-1],
        percentiles={name: percentile(seconds, q) for name, q in PERCENTILES.items()},
    )


def thread_response_stats(threads: Iterable[ConversationThread]) -> ResponseTimeStats:
    """Pool the response times of several threads into one summary."""
    pooled: list[timedelta] = []
    for thread in threads:
        pooled.extend(response_times(thread))
    return summarize_response_times(pooled)
