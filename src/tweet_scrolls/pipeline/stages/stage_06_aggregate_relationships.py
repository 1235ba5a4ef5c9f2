"""Stage 6: Aggregate events into per-counterpart relationship profiles.

Tweet and DM events are folded into independent aggregators, optionally on
separate worker threads, and the results merged afterwards.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

import structlog

from tweet_scrolls.analysis.aggregator import RelationshipAggregator
from tweet_scrolls.core.config import Config
from tweet_scrolls.models.interaction import InteractionEvent
from tweet_scrolls.pipeline.context import AnalysisContext
from tweet_scrolls.pipeline.stages.base import StageResult

logger = structlog.get_logger(__name__)


def _aggregate(
    events: list[InteractionEvent], owner_identity: str | None
) -> RelationshipAggregator:
    return RelationshipAggregator(owner_identity=owner_identity).extend(events)


def run(config: Config, context: AnalysisContext, *, workers: int = 1) -> StageResult:
    """Run Stage 6: Relationship aggregation.

    Args:
        config: Application configuration with screen_name.
        context: Run context with tweet and DM events; receives the merged
            aggregator.
        workers: Aggregate tweet and DM events concurrently when above 1.

    Returns:
        StageResult with the number of relationship profiles.
    """
    start_time = time.time()

    if workers > 1:
        with ThreadPoolExecutor(max_workers=2) as executor:
            tweets_future = executor.submit(_aggregate, context.tweet_events, config.screen_name)
            dms_future = executor.submit(_aggregate, context.dm_events, context.owner_id)
            tweet_aggregator = tweets_future.result()
            dm_aggregator = dms_future.result()
    else:
        tweet_aggregator = _aggregate(context.tweet_events, config.screen_name)
        dm_aggregator = _aggregate(context.dm_events, context.owner_id)

    context.aggregator = tweet_aggregator + dm_aggregator
    profiles = len(context.aggregator.profiles)
    logger.info(
        "relationships_aggregated",
        profiles=profiles,
        events=context.aggregator.event_count,
        workers=workers,
    )

    return StageResult(
        success=True,
        records_processed=profiles,
        duration_seconds=time.time() - start_time,
        message=f"Aggregated {profiles} relationship profiles",
        metadata={
            "profiles": profiles,
            "events": context.aggregator.event_count,
            "peak_hour": context.aggregator.peak_hour(),
            "peak_day": context.aggregator.peak_day(),
        },
    )
