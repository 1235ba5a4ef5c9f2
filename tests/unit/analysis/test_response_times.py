"""Tests for tweet_scrolls.analysis.response_times."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tweet_scrolls.analysis.conversations import group_into_conversations
from tweet_scrolls.analysis.response_times import (
    percentile,
    response_times,
    response_times_seconds,
    summarize_response_times,
    thread_response_stats,
)
from tweet_scrolls.models.interaction import ConversationThread, InteractionEvent, InteractionType

BASE = datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)


def make_thread(*minutes: float) -> ConversationThread:
    """Create a thread with events at the given minute offsets."""
    thread = ConversationThread(id="0")
    for index, offset in enumerate(minutes):
        thread.add_event(
            InteractionEvent(
                id=str(index),
                timestamp=BASE + timedelta(minutes=offset),
                interaction_type=InteractionType.DM_SENT,
                counterpart="bob",
            )
        )
    return thread


class TestResponseTimes:
    """Tests for response_times function."""

    def test_consecutive_deltas(self) -> None:
        """Test one delta per consecutive pair."""
        thread = make_thread(0, 5, 20)
        assert response_times(thread) == [timedelta(minutes=5), timedelta(minutes=15)]

    def test_window_example(self) -> None:
        """Test the first thread of 10:00, 10:05, 12:05 gives 300 seconds."""
        events = make_thread(0, 5, 125).events
        threads = group_into_conversations(events, 3600)
        assert response_times_seconds(threads[0]) == [300.0]
        assert response_times_seconds(threads[1]) == []

    def test_length_is_events_minus_one(self) -> None:
        """Test k events give k - 1 deltas, all non-negative."""
        thread = make_thread(0, 1, 1, 7, 30, 30)
        deltas = response_times(thread)
        assert len(deltas) == len(thread.events) - 1
        assert all(delta >= timedelta(0) for delta in deltas)

    def test_simultaneous_events(self) -> None:
        """Test equal timestamps give a zero delta."""
        assert response_times(make_thread(3, 3)) == [timedelta(0)]

    def test_short_threads(self) -> None:
        """Test empty and single-event threads give no deltas."""
        assert response_times(ConversationThread(id="0")) == []
        assert response_times(make_thread(0)) == []


class TestPercentile:
    """Tests for percentile function."""

    def test_interpolation(self) -> None:
        """Test linear interpolation between ranks."""
        values = [10.0, 20.0, 30.0, 40.0]
        assert percentile(values, 0.5) == 25.0
        assert percentile(values, 0.0) == 10.0
        assert percentile(values, 1.0) == 40.0

    def test_edge_sizes(self) -> None:
        """Test empty and single-value inputs."""
        assert percentile([], 0.9) == 0.0
        assert percentile([7.0], 0.9) == 7.0


class TestSummarizeResponseTimes:
    """Tests for summarize_response_times function."""

    def test_stats(self) -> None:
        """Test average, median, extremes and percentiles."""
        stats = summarize_response_times([timedelta(seconds=s) for s in (30, 10, 20, 40)])

        assert stats.count == 4
        assert stats.average == 25.0
        assert stats.median == 25.0
        assert stats.min == 10.0
        assert stats.max == 40.0
        assert set(stats.percentiles) == {"p50", "p90", "p95", "p99"}
        assert stats.percentiles["p90"] == pytest.approx(37.0)

    def test_accepts_seconds(self) -> None:
        """Test plain float seconds are accepted."""
        assert summarize_response_times([1.0, 3.0]).average == 2.0

    def test_empty(self) -> None:
        """Test empty input gives zeros."""
        stats = summarize_response_times([])
        assert stats.count == 0
        assert stats.average == 0.0
        assert stats.percentiles == {}

    def test_thread_response_stats(self) -> None:
        """Test pooling deltas across threads."""
        stats = thread_response_stats([make_thread(0, 1), make_thread(0, 3)])
        assert stats.count == 2
        assert stats.average == 120.0
