"""Pydantic schemas for tweet-scrolls."""

from tweet_scrolls.schemas.direct_message import (
    DM_SCALAR_PATHS,
    DmConversation,
    DmMessage,
    DmMessageCreate,
    DmWrapper,
)
from tweet_scrolls.schemas.flexible import FlexibleBool, FlexibleStr, coerce_to_string
from tweet_scrolls.schemas.report import (
    AnalysisReport,
    ConversationSummary,
    ResponseTimeSummary,
    SchemaFieldSummary,
    UserProfileSummary,
)
from tweet_scrolls.schemas.tweet import (
    TWEET_SCALAR_PATHS,
    TweetEntities,
    TweetRecord,
    TweetWrapper,
    UserMention,
)

__all__ = [
    "DM_SCALAR_PATHS",
    "TWEET_SCALAR_PATHS",
    "AnalysisReport",
    "ConversationSummary",
    "DmConversation",
    "DmMessage",
    "DmMessageCreate",
    "DmWrapper",
    "FlexibleBool",
    "FlexibleStr",
    "ResponseTimeSummary",
    "SchemaFieldSummary",
    "TweetEntities",
    "TweetRecord",
    "TweetWrapper",
    "UserMention",
    "UserProfileSummary",
    "coerce_to_string",
]
