"""Classify archive records into interaction types.

Decision table:

- no reply/parent reference: original post
- reference whose author (or DM sender) is the owner: self-directed
  variant (reply to self, DM sent)
- otherwise: other-directed variant (reply to other, DM received)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tweet_scrolls.models.interaction import InteractionType
from tweet_scrolls.schemas.direct_message import DmMessageCreate
from tweet_scrolls.schemas.tweet import TweetRecord


def _normalize_identity(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lstrip("@").lower()


def classify_tweet(tweet: TweetRecord, screen_name: str) -> InteractionType:
    """Classify a tweet relative to the owner's screen name."""
    if not tweet.is_reply:
        return InteractionType.ORIGINAL
    if _normalize_identity(tweet.in_reply_to_screen_name) == _normalize_identity(screen_name):
        return InteractionType.REPLY_TO_SELF
    return InteractionType.REPLY_TO_OTHER


def classify_dm(message: DmMessageCreate, owner_id: str) -> InteractionType:
    """Classify a direct message by its direction relative to the owner."""
    if _normalize_identity(message.sender_id) == _normalize_identity(owner_id):
        return InteractionType.DM_SENT
    return InteractionType.DM_RECEIVED


def _classify_mapping(record: Mapping[str, Any], owner_identity: str) -> InteractionType:
    if "tweet" in record and isinstance(record["tweet"], Mapping):
        record = record["tweet"]
    if "messageCreate" in record and isinstance(record["messageCreate"], Mapping):
        record = record["messageCreate"]

    if "senderId" in record or "sender_id" in record:
        sender = record.get("senderId", record.get("sender_id"))
        if _normalize_identity(sender) == _normalize_identity(owner_identity):
            return InteractionType.DM_SENT
        return InteractionType.DM_RECEIVED

    parent = record.get("in_reply_to_status_id_str") or record.get("in_reply_to_status_id")
    if not parent:
        return InteractionType.ORIGINAL
    parent_author = record.get("in_reply_to_screen_name")
    if _normalize_identity(parent_author) == _normalize_identity(owner_identity):
        return InteractionType.REPLY_TO_SELF
    return InteractionType.REPLY_TO_OTHER


def classify(
    record: TweetRecord | DmMessageCreate | Mapping[str, Any],
    owner_identity: str,
) -> InteractionType:
    """Map a record and the owner's identity to an interaction type.

    Pure and deterministic. Accepts decoded tweet or DM records, or the raw
    archive mappings (wrapped or bare). Identities compare case-insensitively
    with any leading ``@`` ignored.

    Args:
        record: Tweet, DM message or raw record mapping.
        owner_identity: Owner screen name for tweets, owner account id for DMs.

    Returns:
        The interaction type.
    """
    if isinstance(record, TweetRecord):
        return classify_tweet(record, owner_identity)
    if isinstance(record, DmMessageCreate):
        return classify_dm(record, owner_identity)
    if isinstance(record, Mapping):
        return _classify_mapping(record, owner_identity)
    raise TypeError(f"Cannot classify record of type {type(record).__name__}")
