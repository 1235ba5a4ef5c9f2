"""Tests for tweet_scrolls.analysis.timeline."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tweet_scrolls.analysis.timeline import build_timeline, merge_timelines, sort_ascending
from tweet_scrolls.models.interaction import InteractionEvent, InteractionType

BASE = datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)


def make_event(event_id: str, minutes: int) -> InteractionEvent:
    """Create a test event ``minutes`` after BASE."""
    return InteractionEvent(
        id=event_id,
        timestamp=BASE + timedelta(minutes=minutes),
        interaction_type=InteractionType.ORIGINAL,
        counterpart="alice",
    )


class TestBuildTimeline:
    """Tests for build_timeline function."""

    def test_most_recent_first(self) -> None:
        """Test events are ordered newest first."""
        events = [make_event("a", 5), make_event("b", 30), make_event("c", 0)]
        assert [e.id for e in build_timeline(events)] == ["b", "a", "c"]

    def test_equal_timestamps_keep_input_order(self) -> None:
        """Test ties preserve their relative input order."""
        events = [make_event("a", 10), make_event("b", 0), make_event("c", 10), make_event("d", 10)]
        assert [e.id for e in build_timeline(events)] == ["a", "c", "d", "b"]

    def test_input_unchanged(self) -> None:
        """Test the input list is not reordered."""
        events = [make_event("a", 0), make_event("b", 5)]
        build_timeline(events)
        assert [e.id for e in events] == ["a", "b"]

    def test_empty(self) -> None:
        """Test an empty input gives an empty timeline."""
        assert build_timeline([]) == []

    def test_ordering_property(self) -> None:
        """Test every adjacent pair is non-increasing."""
        events = [make_event(str(i), (i * 37) % 11) for i in range(30)]
        timeline = build_timeline(events)
        assert all(a.timestamp >= b.timestamp for a, b in zip(timeline, timeline[1:]))
        assert len(timeline) == len(events)


class TestSortAscending:
    """Tests for sort_ascending function."""

    def test_oldest_first(self) -> None:
        """Test events are ordered oldest first."""
        events = [make_event("a", 5), make_event("b", 0)]
        assert [e.id for e in sort_ascending(events)] == ["b", "a"]


class TestMergeTimelines:
    """Tests for merge_timelines function."""

    def test_merges_sources(self) -> None:
        """Test events from several sources interleave by time."""
        tweets = [make_event("t1", 0), make_event("t2", 20)]
        dms = [make_event("d1", 10), make_event("d2", 20)]

        merged = merge_timelines(tweets, dms)

        assert [e.id for e in merged] == ["t2", "d2", "d1", "t1"]
