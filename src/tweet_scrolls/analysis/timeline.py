"""Chronological ordering of interaction events."""

from __future__ import annotations

from collections.abc import Iterable

from tweet_scrolls.models.interaction import InteractionEvent


def build_timeline(events: Iterable[InteractionEvent]) -> list[InteractionEvent]:
    """Order events most recent first.

    Equal timestamps keep their relative input order (``sorted`` stays
    stable with ``reverse=True``). The input is not modified.
    """
    return sorted(events, key=lambda event: event.timestamp, reverse=True)


def sort_ascending(events: Iterable[InteractionEvent]) -> list[InteractionEvent]:
    """Order events oldest first, stable for equal timestamps."""
    return sorted(events, key=lambda event: event.timestamp)


def merge_timelines(*timelines: Iterable[InteractionEvent]) -> list[InteractionEvent]:
    """Combine several event sources into one most-recent-first timeline.

    Ties are ordered by source position, then by position within the source.
    """
    combined: list[InteractionEvent] = []
    for timeline in timelines:
        combined.extend(timeline)
    return build_timeline(combined)
