"""Domain models for tweet-scrolls."""

from tweet_scrolls.models.interaction import (
    ConversationThread,
    InteractionEvent,
    InteractionType,
)
from tweet_scrolls.models.profile import UserProfile

__all__ = [
    "ConversationThread",
    "InteractionEvent",
    "InteractionType",
    "UserProfile",
]
