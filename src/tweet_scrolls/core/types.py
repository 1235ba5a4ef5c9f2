"""Shared type definitions."""

from __future__ import annotations

from typing import Literal, TypedDict

ValueKind = Literal["string", "number", "boolean", "object", "array", "null", "missing"]


class UserMentionData(TypedDict, total=False):
    """User mention entry inside a tweet's entities."""

    screen_name: str
    name: str
    id_str: str


class TweetData(TypedDict, total=False):
    """Raw tweet record as found under the ``tweet`` key of the archive."""

    id_str: str
    full_text: str
    created_at: str  # "%a %b %d %H:%M:%S %z %Y"
    in_reply_to_status_id_str: str | None
    in_reply_to_user_id_str: str | None
    in_reply_to_screen_name: str | None
    retweeted: bool
    favorite_count: str
    retweet_count: str
    entities: dict[str, list[UserMentionData]]
