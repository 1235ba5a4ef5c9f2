"""Stage 2: Decode tweets and extract interaction events."""

from __future__ import annotations

import time

import structlog

from tweet_scrolls.analysis.events import events_from_tweets
from tweet_scrolls.core.config import Config
from tweet_scrolls.parsers.archive import parse_tweets, read_archive_file
from tweet_scrolls.pipeline.context import TWEETS_SOURCE, AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult

logger = structlog.get_logger(__name__)


def run(
    config: Config,
    context: AnalysisContext,
    *,
    include_mentions: bool = True,
    redact: bool = False,
) -> StageResult:
    """Run Stage 2: Load tweets into interaction events.

    Args:
        config: Application configuration with tweets_path and screen_name.
        context: Run context; receives tweets and tweet events.
        include_mentions: Emit mention events for mentioned accounts.
        redact: Drop text content from events.

    Returns:
        StageResult with the number of events extracted.
    """
    start_time = time.time()

    if config.tweets_path is None:
        return StageResult(
            success=True,
            records_processed=0,
            duration_seconds=time.time() - start_time,
            message="No tweets archive configured",
        )

    raw_text = context.raw_text.get(TWEETS_SOURCE)
    if raw_text is None:
        raw_text = read_archive_file(config.tweets_path)
        context.raw_text[TWEETS_SOURCE] = raw_text

    tweets, invalid = parse_tweets(raw_text, context.flexible_paths(TWEETS_SOURCE))
    events, unusable = events_from_tweets(
        tweets,
        config.screen_name,
        include_mentions=include_mentions,
        redact=redact,
    )
    context.tweets = tweets
    context.tweet_events = events
    skipped = invalid + unusable
    context.skipped[TWEETS_SOURCE] = skipped
    logger.info("tweets_loaded", tweets=len(tweets), events=len(events), skipped=skipped)

    return StageResult(
        success=True,
        records_processed=len(events),
        duration_seconds=time.time() - start_time,
        message=f"Loaded {len(tweets)} tweets into {len(events)} events",
        skipped=skipped,
        metadata={
            "tweets": len(tweets),
            "events": len(events),
            "invalid_records": invalid,
            "unusable_records": unusable,
        },
    )
