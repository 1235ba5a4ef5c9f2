"""Tests for Stage 1: Schema discovery."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tweet_scrolls.core.config import Config
from tweet_scrolls.core.errors import ArchiveIOError, MalformedInputError
from tweet_scrolls.pipeline.context import DMS_SOURCE, TWEETS_SOURCE, AnalysisContext
from tweet_scrolls.pipeline.stages import stage_01_discover_schema

TWEETS = [
    {"tweet": {"id_str": "1", "full_text": "plain text"}},
    {"tweet": {"id_str": "2", "full_text": {"text": "structured"}}},
]
DMS = [{"dmConversation": {"conversationId": "1-2", "messages": []}}]


def write_archive(path: Path, name: str, records: list[object]) -> Path:
    """Write records in archive export format."""
    path.write_text(f"window.YTD.{name}.part0 = {json.dumps(records)}", encoding="utf-8")
    return path


class TestRun:
    """Tests for run function."""

    def test_discovers_both_files(self, tmp_path: Path) -> None:
        """Test reports are produced for tweets and DMs."""
        config = Config(
            screen_name="alice",
            tweets_path=write_archive(tmp_path / "tweets.js", "tweets", TWEETS),
            dms_path=write_archive(tmp_path / "dms.js", "direct_messages", DMS),
        )
        context = AnalysisContext()

        result = stage_01_discover_schema.run(config, context)

        assert result.success is True
        assert result.records_processed == 3
        assert set(context.schema_reports) == {TWEETS_SOURCE, DMS_SOURCE}
        assert set(context.raw_text) == {TWEETS_SOURCE, DMS_SOURCE}
        assert result.metadata is not None
        assert result.metadata["tweets_problematic"] >= 1

    def test_flags_mixed_field(self, tmp_path: Path) -> None:
        """Test a string-or-object field needs flexible decoding."""
        config = Config(
            screen_name="alice",
            tweets_path=write_archive(tmp_path / "tweets.js", "tweets", TWEETS),
        )
        context = AnalysisContext()

        stage_01_discover_schema.run(config, context)

        assert "tweet.full_text" in context.flexible_paths(TWEETS_SOURCE)

    def test_sample_limit(self, tmp_path: Path) -> None:
        """Test only the configured number of records is sampled."""
        config = Config(
            screen_name="alice",
            tweets_path=write_archive(tmp_path / "tweets.js", "tweets", TWEETS),
            schema_sample_limit=1,
        )
        context = AnalysisContext()

        result = stage_01_discover_schema.run(config, context)

        assert result.records_processed == 1
        assert context.flexible_paths(TWEETS_SOURCE) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises ArchiveIOError."""
        config = Config(screen_name="alice", tweets_path=tmp_path / "missing.js")
        with pytest.raises(ArchiveIOError):
            stage_01_discover_schema.run(config, AnalysisContext())

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Test a file without an array raises MalformedInputError."""
        path = tmp_path / "tweets.js"
        path.write_text("window.YTD.tweets.part0 = {}", encoding="utf-8")
        config = Config(screen_name="alice", tweets_path=path)

        with pytest.raises(MalformedInputError):
            stage_01_discover_schema.run(config, AnalysisContext())
