"""Tweet archive record schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tweet_scrolls.schemas.flexible import FlexibleBool, FlexibleStr


class UserMention(BaseModel):
    """User mentioned in a tweet."""

    model_config = ConfigDict(extra="ignore")

    screen_name: FlexibleStr = None
    name: FlexibleStr = None
    id_str: FlexibleStr = None


class TweetEntities(BaseModel):
    """Entities block of a tweet; only mentions are consumed."""

    model_config = ConfigDict(extra="ignore")

    user_mentions: list[UserMention] = Field(default_factory=list)

    @field_validator("user_mentions", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return []


class TweetRecord(BaseModel):
    """A tweet as exported in the archive's ``tweets.js``."""

    model_config = ConfigDict(extra="ignore")

    id_str: FlexibleStr = None
    full_text: FlexibleStr = ""
    created_at: FlexibleStr = None
    in_reply_to_status_id_str: FlexibleStr = None
    in_reply_to_user_id_str: FlexibleStr = None
    in_reply_to_screen_name: FlexibleStr = None
    retweeted: FlexibleBool = False
    favorite_count: FlexibleStr = "0"
    retweet_count: FlexibleStr = "0"
    entities: TweetEntities = Field(default_factory=TweetEntities)

    @field_validator("entities", mode="before")
    @classmethod
    def _entities_object(cls, value: object) -> object:
        return value if isinstance(value, dict) else {}

    @property
    def is_reply(self) -> bool:
        """True when the tweet references a parent tweet."""
        return bool(self.in_reply_to_status_id_str)

    @property
    def mentioned_screen_names(self) -> list[str]:
        """Screen names mentioned in the tweet, in order, without duplicates."""
        names: list[str] = []
        for mention in self.entities.user_mentions:
            if mention.screen_name and mention.screen_name not in names:
                names.append(mention.screen_name)
        return names


class TweetWrapper(BaseModel):
    """Array element wrapping a tweet under the ``tweet`` key."""

    model_config = ConfigDict(extra="ignore")

    tweet: TweetRecord


# Archive paths decoded as scalars by TweetRecord
TWEET_SCALAR_PATHS = frozenset(
    f"tweet.{name}"
    for name in (
        "id_str",
        "full_text",
        "created_at",
        "in_reply_to_status_id_str",
        "in_reply_to_user_id_str",
        "in_reply_to_screen_name",
        "retweeted",
        "favorite_count",
        "retweet_count",
        "entities.user_mentions[].screen_name",
        "entities.user_mentions[].name",
        "entities.user_mentions[].id_str",
    )
)
