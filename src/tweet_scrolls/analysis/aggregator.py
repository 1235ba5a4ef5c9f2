"""Fold classified events into per-counterpart profiles and activity histograms.

The aggregator is an explicit value: construct it, feed it events, read the
results. Independent aggregators (for example one for tweets and one for
direct messages built on separate threads) combine with ``merge`` or ``+``,
which add histograms and counts and union profiles.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from tweet_scrolls.models.interaction import InteractionEvent
from tweet_scrolls.models.profile import UserProfile

logger = structlog.get_logger(__name__)

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7

# Index 0 is Sunday
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def day_of_week(event: InteractionEvent) -> int:
    """Day-of-week bucket for an event, 0 = Sunday."""
    return (event.timestamp.weekday() + 1) % DAYS_PER_WEEK


def _argmax_smallest_key(histogram: Mapping[int, int] | Sequence[int]) -> int | None:
    items = histogram.items() if isinstance(histogram, Mapping) else enumerate(histogram)
    best_key: int | None = None
    best_count = 0
    for key, count in sorted(items):
        if count > best_count:
            best_key, best_count = key, count
    return best_key


def peak_hour(histogram: Mapping[int, int] | Sequence[int]) -> int | None:
    """Hour with the most activity; ties go to the earliest hour.

    Returns ``None`` when the histogram holds no activity.
    """
    return _argmax_smallest_key(histogram)


def peak_day(histogram: Mapping[int, int] | Sequence[int]) -> int | None:
    """Day bucket with the most activity; ties go to the smallest index."""
    return _argmax_smallest_key(histogram)


def top_relationships(profiles: Mapping[str, UserProfile], n: int) -> list[UserProfile]:
    """Rank profiles by total interactions, descending.

    Ties are broken by counterpart id ascending. Returns at most ``n``
    profiles; ``n <= 0`` returns an empty list.
    """
    if n <= 0:
        return []
    ranked = sorted(profiles.values(), key=lambda p: (-p.total_interactions, p.user_id))
    return ranked[:n]


def _normalize(identity: str | None) -> str:
    return (identity or "").lstrip("@").lower()


@dataclass
class RelationshipAggregator:
    """Accumulates profiles and hour/day histograms from events.

    Events whose counterpart is ``owner_identity`` (the owner's own posts and
    self-replies) count toward the histograms but do not create a profile.
    """

    owner_identity: str | None = None
    profiles: dict[str, UserProfile] = field(default_factory=dict)
    hourly_histogram: list[int] = field(default_factory=lambda: [0] * HOURS_PER_DAY)
    daily_histogram: list[int] = field(default_factory=lambda: [0] * DAYS_PER_WEEK)
    event_count: int = 0

    def _is_owner(self, counterpart: str) -> bool:
        return self.owner_identity is not None and _normalize(counterpart) == _normalize(
            self.owner_identity
        )

    def add(self, event: InteractionEvent) -> None:
        """Fold a single event."""
        self.event_count += 1
        self.hourly_histogram[event.timestamp.hour] += 1
        self.daily_histogram[day_of_week(event)] += 1

        if self._is_owner(event.counterpart):
            return

        profile = self.profiles.get(event.counterpart)
        if profile is None:
            profile = UserProfile(user_id=event.counterpart)
            self.profiles[event.counterpart] = profile
        profile.add_interaction(event.interaction_type.value, event.timestamp)

    def extend(self, events: Iterable[InteractionEvent]) -> RelationshipAggregator:
        """Fold many events and return ``self``."""
        for event in events:
            self.add(event)
        logger.debug(
            "events_aggregated",
            events=self.event_count,
            profiles=len(self.profiles),
        )
        return self

    def merge(self, other: RelationshipAggregator) -> RelationshipAggregator:
        """Combine two aggregators into a new one.

        Neither input is modified. The result keeps this aggregator's
        ``owner_identity``, falling back to the other's.
        """
        profiles = {user_id: _copy_profile(p) for user_id, p in self.profiles.items()}
        for user_id, profile in other.profiles.items():
            if user_id in profiles:
                profiles[user_id] = profiles[user_id].merge(profile)
            else:
                profiles[user_id] = _copy_profile(profile)

        return RelationshipAggregator(
            owner_identity=self.owner_identity or other.owner_identity,
            profiles=profiles,
            hourly_histogram=[a + b for a, b in zip(self.hourly_histogram, other.hourly_histogram)],
            daily_histogram=[a + b for a, b in zip(self.daily_histogram, other.daily_histogram)],
            event_count=self.event_count + other.event_count,
        )

    def __add__(self, other: RelationshipAggregator) -> RelationshipAggregator:
        if not isinstance(other, RelationshipAggregator):
            return NotImplemented
        return self.merge(other)

    def top_relationships(self, n: int) -> list[UserProfile]:
        """Top ``n`` profiles by total interactions."""
        return top_relationships(self.profiles, n)

    def peak_hour(self) -> int | None:
        """Busiest hour of day, or ``None`` with no events."""
        return peak_hour(self.hourly_histogram)

    def peak_day(self) -> int | None:
        """Busiest day of week (0 = Sunday), or ``None`` with no events."""
        return peak_day(self.daily_histogram)


def _copy_profile(profile: UserProfile) -> UserProfile:
    return UserProfile(
        user_id=profile.user_id,
        total_interactions=profile.total_interactions,
        first_interaction=profile.first_interaction,
        last_interaction=profile.last_interaction,
        interaction_counts=dict(profile.interaction_counts),
        metadata=dict(profile.metadata),
    )


def aggregate(
    events: Iterable[InteractionEvent],
    owner_identity: str | None = None,
) -> tuple[dict[str, UserProfile], list[int], list[int]]:
    """Aggregate events into profiles and hour/day histograms.

    Args:
        events: Classified events in any order.
        owner_identity: Counterpart id treated as the owner (no profile).

    Returns:
        Tuple of (profiles by counterpart, 24 hourly buckets, 7 daily buckets
        with 0 = Sunday).
    """
    aggregator = RelationshipAggregator(owner_identity=owner_identity).extend(events)
    return aggregator.profiles, aggregator.hourly_histogram, aggregator.daily_histogram
