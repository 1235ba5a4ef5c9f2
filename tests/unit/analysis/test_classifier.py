"""Tests for tweet_scrolls.analysis.classifier."""

from __future__ import annotations

import pytest

from tweet_scrolls.analysis.classifier import classify, classify_dm, classify_tweet
from tweet_scrolls.models.interaction import InteractionType
from tweet_scrolls.schemas.direct_message import DmMessageCreate
from tweet_scrolls.schemas.tweet import TweetRecord


class TestClassifyTweet:
    """Tests for tweet classification."""

    def test_original(self) -> None:
        """Test a tweet without a parent is original."""
        tweet = TweetRecord(id_str="1")
        assert classify_tweet(tweet, "alice") is InteractionType.ORIGINAL

    def test_reply_to_self(self) -> None:
        """Test a reply to the owner's own tweet."""
        tweet = TweetRecord(
            id_str="2", in_reply_to_status_id_str="1", in_reply_to_screen_name="Alice"
        )
        assert classify_tweet(tweet, "@alice") is InteractionType.REPLY_TO_SELF

    def test_reply_to_other(self) -> None:
        """Test a reply to someone else."""
        tweet = TweetRecord(
            id_str="2", in_reply_to_status_id_str="1", in_reply_to_screen_name="bob"
        )
        assert classify_tweet(tweet, "alice") is InteractionType.REPLY_TO_OTHER

    def test_reply_without_author(self) -> None:
        """Test a reply with an unknown parent author is other-directed."""
        tweet = TweetRecord(id_str="2", in_reply_to_status_id_str="1")
        assert classify_tweet(tweet, "alice") is InteractionType.REPLY_TO_OTHER


class TestClassifyDm:
    """Tests for direct-message classification."""

    def test_sent(self) -> None:
        """Test a message sent by the owner."""
        message = DmMessageCreate(sender_id="1", recipient_id="2")
        assert classify_dm(message, "1") is InteractionType.DM_SENT

    def test_received(self) -> None:
        """Test a message sent to the owner."""
        message = DmMessageCreate(sender_id="2", recipient_id="1")
        assert classify_dm(message, "1") is InteractionType.DM_RECEIVED


class TestClassify:
    """Tests for the classify dispatcher."""

    def test_records(self) -> None:
        """Test decoded records dispatch by type."""
        assert classify(TweetRecord(id_str="1"), "alice") is InteractionType.ORIGINAL
        assert classify(DmMessageCreate(sender_id="1"), "1") is InteractionType.DM_SENT

    def test_raw_tweet_mapping(self) -> None:
        """Test wrapped raw tweet mappings."""
        record = {"tweet": {"in_reply_to_status_id_str": "9", "in_reply_to_screen_name": "bob"}}
        assert classify(record, "alice") is InteractionType.REPLY_TO_OTHER
        assert classify({"tweet": {"id_str": "1"}}, "alice") is InteractionType.ORIGINAL

    def test_raw_dm_mapping(self) -> None:
        """Test raw messageCreate mappings."""
        record = {"messageCreate": {"senderId": "2", "recipientId": "1"}}
        assert classify(record, "1") is InteractionType.DM_RECEIVED

    def test_deterministic(self) -> None:
        """Test repeated calls give the same answer."""
        record = {"in_reply_to_status_id": 9, "in_reply_to_screen_name": "alice"}
        results = {classify(record, "alice") for _ in range(5)}
        assert results == {InteractionType.REPLY_TO_SELF}

    def test_unsupported_type(self) -> None:
        """Test unsupported inputs raise TypeError."""
        with pytest.raises(TypeError, match="Cannot classify"):
            classify(42, "alice")  # type: ignore[arg-type]
