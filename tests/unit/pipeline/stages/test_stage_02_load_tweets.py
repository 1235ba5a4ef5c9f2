"""Tests for Stage 2: Load tweets."""

from __future__ import annotations

import json
from pathlib import Path

from tweet_scrolls.core.config import Config
from tweet_scrolls.models.interaction import InteractionType
from tweet_scrolls.pipeline.context import TWEETS_SOURCE, AnalysisContext
from tweet_scrolls.pipeline.stages import stage_01_discover_schema, stage_02_load_tweets

TWEETS = [
    {
        "tweet": {
            "id_str": "1",
            "full_text": "hi @carol",
            "created_at": "Sun Jan 01 09:00:00 +0000 2023",
            "entities": {"user_mentions": [{"screen_name": "carol"}]},
        }
    },
    {
        "tweet": {
            "id_str": "2",
            "full_text": {"text": "structured"},
            "created_at": "Sun Jan 01 09:30:00 +0000 2023",
            "in_reply_to_status_id_str": "50",
            "in_reply_to_screen_name": "bob",
        }
    },
    {"tweet": {"id_str": "3", "created_at": "garbage"}},
]


def make_config(tmp_path: Path) -> Config:
    """Config pointing at a tweets archive in tmp_path."""
    path = tmp_path / "tweets.js"
    path.write_text(f"window.YTD.tweets.part0 = {json.dumps(TWEETS)}", encoding="utf-8")
    return Config(screen_name="alice", tweets_path=path)


class TestRun:
    """Tests for run function."""

    def test_loads_events(self, tmp_path: Path) -> None:
        """Test tweets become classified events with mentions."""
        context = AnalysisContext()

        result = stage_02_load_tweets.run(make_config(tmp_path), context)

        assert result.success is True
        assert len(context.tweets) == 3
        types = [e.interaction_type for e in context.tweet_events]
        assert types == [
            InteractionType.ORIGINAL,
            InteractionType.MENTION,
            InteractionType.REPLY_TO_OTHER,
        ]
        assert context.skipped[TWEETS_SOURCE] == 1
        assert result.skipped == 1
        assert result.metadata is not None
        assert result.metadata["unusable_records"] == 1

    def test_uses_discovered_flexible_paths(self, tmp_path: Path) -> None:
        """Test object-valued text is decoded after schema discovery."""
        config = make_config(tmp_path)
        context = AnalysisContext()
        stage_01_discover_schema.run(config, context)

        stage_02_load_tweets.run(config, context)

        reply = next(e for e in context.tweet_events if e.id == "2")
        assert reply.content == '{"text":"structured"}'

    def test_options(self, tmp_path: Path) -> None:
        """Test mention and redaction options."""
        context = AnalysisContext()

        stage_02_load_tweets.run(
            make_config(tmp_path), context, include_mentions=False, redact=True
        )

        assert len(context.tweet_events) == 2
        assert all(e.content == "" for e in context.tweet_events)

    def test_no_tweets_configured(self) -> None:
        """Test the stage is a no-op without a tweets archive."""
        context = AnalysisContext()
        result = stage_02_load_tweets.run(Config(screen_name="alice"), context)

        assert result.success is True
        assert result.records_processed == 0
        assert context.tweet_events == []
