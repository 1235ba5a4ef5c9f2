"""Activity-pattern extraction over an event timeline."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from tweet_scrolls.analysis.aggregator import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    day_of_week,
    peak_day,
    peak_hour,
)
from tweet_scrolls.analysis.conversations import group_into_conversations
from tweet_scrolls.analysis.response_times import ResponseTimeStats, thread_response_stats
from tweet_scrolls.analysis.timeline import sort_ascending
from tweet_scrolls.models.interaction import InteractionEvent, InteractionType

DAILY_RHYTHM_MIN_PER_DAY = 3.0
ACTIVE_HOUR_MIN_EVENTS = 2
ABOVE_AVERAGE_FACTOR = 1.5
BURSTY_MIN_EVENTS = 10
BURSTY_MIN_VARIATION = 1.0


class PatternKind(str, Enum):
    """Kinds of detected activity pattern."""

    DAILY_RHYTHM = "daily_rhythm"
    TIME_OF_DAY = "time_of_day"
    WEEKLY = "weekly"
    BURSTY = "bursty"
    NONE = "none"


@dataclass(frozen=True)
class TimelinePattern:
    """A detected pattern; ``buckets`` lists the hours or days involved."""

    kind: PatternKind
    buckets: tuple[int, ...] = ()


@dataclass
class TimelineDensity:
    """How activity is spread across the day and week."""

    avg_interactions_per_day: float = 0.0
    peak_hours: list[int] = field(default_factory=list)
    peak_days: list[int] = field(default_factory=list)
    peak_hour: int | None = None
    peak_day: int | None = None


@dataclass
class TimelineAnalysis:
    """Summary of a timeline's shape."""

    start_time: datetime | None = None
    end_time: datetime | None = None
    total_interactions: int = 0
    unique_participants: int = 0
    patterns: list[TimelinePattern] = field(default_factory=list)
    density: TimelineDensity = field(default_factory=TimelineDensity)
    response_times: ResponseTimeStats = field(default_factory=ResponseTimeStats)

    @property
    def span_days(self) -> float:
        """Days between the first and last event."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds() / 86400

    def has_pattern(self, kind: PatternKind) -> bool:
        """Whether a pattern of ``kind`` was detected."""
        return any(p.kind is kind for p in self.patterns)


def _histograms(events: list[InteractionEvent]) -> tuple[list[int], list[int]]:
    hours = [0] * HOURS_PER_DAY
    days = [0] * DAYS_PER_WEEK
    for event in events:
        hours[event.timestamp.hour] += 1
        days[day_of_week(event)] += 1
    return hours, days


def _above_average(histogram: list[int], total: int) -> list[int]:
    threshold = total / len(histogram) * ABOVE_AVERAGE_FACTOR
    return [bucket for bucket, count in enumerate(histogram) if count > threshold]


def is_bursty(events: list[InteractionEvent]) -> bool:
    """Whether inter-event gaps vary more than their mean.

    Needs at least ``BURSTY_MIN_EVENTS`` ascending events; the coefficient of
    variation (population standard deviation over mean) of the gaps must
    exceed ``BURSTY_MIN_VARIATION``.
    """
    if len(events) < BURSTY_MIN_EVENTS:
        return False
    gaps = [
        (later.timestamp - earlier.timestamp).total_seconds()
        for earlier, later in zip(events, events[1:])
    ]
    mean = sum(gaps) / len(gaps)
    if mean == 0:
        return False
    variance = sum((gap - mean) ** 2 for gap in gaps) / len(gaps)
    return math.sqrt(variance) / mean > BURSTY_MIN_VARIATION


def detect_patterns(
    events: list[InteractionEvent],
    hours: list[int],
    days: list[int],
) -> list[TimelinePattern]:
    """Detect activity patterns in ascending events.

    Returns a single ``NONE`` pattern when nothing else applies.
    """
    patterns: list[TimelinePattern] = []
    total = len(events)

    if total / DAYS_PER_WEEK > DAILY_RHYTHM_MIN_PER_DAY:
        patterns.append(TimelinePattern(PatternKind.DAILY_RHYTHM))

    active_hours = tuple(h for h, count in enumerate(hours) if count >= ACTIVE_HOUR_MIN_EVENTS)
    if active_hours:
        patterns.append(TimelinePattern(PatternKind.TIME_OF_DAY, active_hours))

    active_days = tuple(_above_average(days, total))
    if active_days:
        patterns.append(TimelinePattern(PatternKind.WEEKLY, active_days))

    if is_bursty(events):
        patterns.append(TimelinePattern(PatternKind.BURSTY))

    return patterns or [TimelinePattern(PatternKind.NONE)]


def analyze_timeline(
    events: Iterable[InteractionEvent],
    window_seconds: float = 3600,
) -> TimelineAnalysis:
    """Extract patterns, density and response times from events.

    Response times are pooled over the gap-grouped threads of the whole
    timeline. Empty input yields an empty analysis.

    Args:
        events: Events in any order.
        window_seconds: Conversation window used for response times.

    Returns:
        The timeline analysis.
    """
    ordered = sort_ascending(events)
    if not ordered:
        return TimelineAnalysis()

    start, end = ordered[0].timestamp, ordered[-1].timestamp
    total = len(ordered)
    hours, days = _histograms(ordered)
    whole_days = max(1, (end - start).days)

    density = TimelineDensity(
        avg_interactions_per_day=total / whole_days,
        peak_hours=_above_average(hours, total),
        peak_days=_above_average(days, total),
        peak_hour=peak_hour(hours),
        peak_day=peak_day(days),
    )

    return TimelineAnalysis(
        start_time=start,
        end_time=end,
        total_interactions=total,
        unique_participants=len({event.counterpart for event in ordered}),
        patterns=detect_patterns(ordered, hours, days),
        density=density,
        response_times=thread_response_stats(group_into_conversations(ordered, window_seconds)),
    )


@dataclass
class CommunicationFrequency:
    """Monthly message volume with one counterpart, keyed by (year, month)."""

    sent_per_month: dict[tuple[int, int], int] = field(default_factory=dict)
    received_per_month: dict[tuple[int, int], int] = field(default_factory=dict)

    @property
    def avg_per_month_sent(self) -> float:
        """Average sent per month with any sent activity."""
        if not self.sent_per_month:
            return 0.0
        return sum(self.sent_per_month.values()) / len(self.sent_per_month)

    @property
    def avg_per_month_received(self) -> float:
        """Average received per month with any received activity."""
        if not self.received_per_month:
            return 0.0
        return sum(self.received_per_month.values()) / len(self.received_per_month)


def communication_frequency(
    events: Iterable[InteractionEvent],
    counterpart: str,
) -> CommunicationFrequency:
    """Count monthly interactions with ``counterpart`` by direction.

    Received DMs count as received; everything else the owner authored
    toward the counterpart counts as sent.
    """
    frequency = CommunicationFrequency()
    for event in events:
        if event.counterpart != counterpart:
            continue
        key = (event.timestamp.year, event.timestamp.month)
        if event.interaction_type is InteractionType.DM_RECEIVED:
            bucket = frequency.received_per_month
        else:
            bucket = frequency.sent_per_month
        bucket[key] = bucket.get(key, 0) + 1
    return frequency
