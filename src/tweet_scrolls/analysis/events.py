"""Turn decoded archive records into classified interaction events."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import structlog

from tweet_scrolls.analysis.classifier import classify_dm, classify_tweet
from tweet_scrolls.models.interaction import InteractionEvent, InteractionType
from tweet_scrolls.parsers.archive import parse_iso_timestamp, parse_tweet_timestamp
from tweet_scrolls.schemas.direct_message import DmConversation
from tweet_scrolls.schemas.tweet import TweetRecord

logger = structlog.get_logger(__name__)

UNKNOWN_COUNTERPART = "unknown"


def _same_identity(a: str | None, b: str | None) -> bool:
    return (a or "").lstrip("@").lower() == (b or "").lstrip("@").lower()


def events_from_tweets(
    tweets: Iterable[TweetRecord],
    screen_name: str,
    include_mentions: bool = True,
    redact: bool = False,
) -> tuple[list[InteractionEvent], int]:
    """Build one event per tweet, plus optional mention events.

    Replies take the replied-to account as counterpart; original posts take
    the owner. Each mentioned account other than the owner and the reply
    target yields a ``mention`` event sharing the tweet's timestamp.

    Args:
        tweets: Decoded tweets.
        screen_name: Owner's screen name.
        include_mentions: Emit mention events.
        redact: Drop text content, keeping its length in metadata.

    Returns:
        Tuple of (events, skipped_count). Tweets without an id or with an
        unparseable timestamp are skipped.
    """
    events: list[InteractionEvent] = []
    skipped = 0

    for tweet in tweets:
        timestamp = parse_tweet_timestamp(tweet.created_at)
        if not tweet.id_str or timestamp is None:
            skipped += 1
            logger.warning(
                "tweet_event_skipped",
                tweet_id=tweet.id_str,
                created_at=tweet.created_at,
            )
            continue

        interaction_type = classify_tweet(tweet, screen_name)
        if interaction_type is InteractionType.ORIGINAL:
            counterpart = screen_name
        else:
            counterpart = (
                tweet.in_reply_to_screen_name
                or tweet.in_reply_to_user_id_str
                or UNKNOWN_COUNTERPART
            )

        text = tweet.full_text or ""
        content = "" if redact else text
        mentions = tweet.mentioned_screen_names
        metadata = {
            "source": "tweet",
            "text_length": str(len(text)),
            "favorite_count": tweet.favorite_count or "0",
            "retweet_count": tweet.retweet_count or "0",
        }
        if tweet.in_reply_to_status_id_str:
            metadata["reply_to_status_id"] = tweet.in_reply_to_status_id_str
        if mentions:
            metadata["mentions"] = ",".join(mentions)
        if tweet.retweeted:
            metadata["retweeted"] = "true"

        events.append(
            InteractionEvent(
                id=tweet.id_str,
                timestamp=timestamp,
                interaction_type=interaction_type,
                counterpart=counterpart,
                content=content,
                metadata=metadata,
            )
        )

        if not include_mentions:
            continue
        for name in mentions:
            if _same_identity(name, screen_name):
                continue
            if interaction_type is not InteractionType.ORIGINAL and _same_identity(
                name, counterpart
            ):
                continue
            events.append(
                InteractionEvent(
                    id=f"{tweet.id_str}:mention:{name}",
                    timestamp=timestamp,
                    interaction_type=InteractionType.MENTION,
                    counterpart=name,
                    content=content,
                    metadata={"source": "tweet", "source_tweet_id": tweet.id_str},
                )
            )

    logger.debug("tweet_events_built", count=len(events), skipped=skipped)
    return events, skipped


def infer_owner_id(conversations: Iterable[DmConversation]) -> str | None:
    """Guess the archive owner's account id from conversation ids.

    The owner takes part in every one-to-one conversation, so the id shared
    by the most conversation ids wins; ties go to the smallest id.
    """
    counts: Counter[str] = Counter()
    for conversation in conversations:
        counts.update(set(conversation.participants))
    if not counts:
        return None
    best = max(counts.values())
    return min(pid for pid, count in counts.items() if count == best)


def events_from_dm_conversations(
    conversations: Iterable[DmConversation],
    owner_id: str,
    redact: bool = False,
) -> tuple[list[InteractionEvent], int]:
    """Build one event per direct message.

    The counterpart is the recipient of sent messages and the sender of
    received ones, falling back to the non-owner participant of the
    conversation id.

    Args:
        conversations: Decoded DM conversations.
        owner_id: Owner's account id.
        redact: Drop text content, keeping its length in metadata.

    Returns:
        Tuple of (events, skipped_count). Entries without ``messageCreate``
        or with an unparseable timestamp are skipped.
    """
    events: list[InteractionEvent] = []
    skipped = 0

    for conversation in conversations:
        conversation_id = conversation.conversation_id or ""
        others = [p for p in conversation.participants if not _same_identity(p, owner_id)]
        fallback = others[0] if others else UNKNOWN_COUNTERPART

        for position, message in enumerate(conversation.messages):
            create = message.message_create
            timestamp = parse_iso_timestamp(create.created_at) if create else None
            if create is None or timestamp is None:
                skipped += 1
                logger.warning(
                    "dm_event_skipped",
                    conversation_id=conversation_id,
                    position=position,
                )
                continue

            interaction_type = classify_dm(create, owner_id)
            if interaction_type is InteractionType.DM_SENT:
                counterpart = create.recipient_id or fallback
            else:
                counterpart = create.sender_id or fallback

            message_id = create.id or f"{conversation_id}:{position}"
            text = create.text or ""
            metadata = {
                "source": "dm",
                "conversation_id": conversation_id,
                "message_id": message_id,
                "text_length": str(len(text)),
            }
            if create.media_urls:
                metadata["media_count"] = str(len(create.media_urls))
            if create.reactions:
                metadata["reaction_count"] = str(len(create.reactions))
            if create.urls:
                metadata["url_count"] = str(len(create.urls))

            events.append(
                InteractionEvent(
                    id=message_id,
                    timestamp=timestamp,
                    interaction_type=interaction_type,
                    counterpart=counterpart,
                    content="" if redact else text,
                    metadata=metadata,
                )
            )

    logger.debug("dm_events_built", count=len(events), skipped=skipped)
    return events, skipped
